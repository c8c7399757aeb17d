"""
services/validators.py
-----------------------
Field checks shared by the services.
"""

import re

from config import GRADE_LEVELS, SCHOOLS
from utils.errors import ValidationError

# Leading integer of a value, e.g. "10.0" -> 10, "11th" -> 11
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def require_school(school) -> str:
    """Check the `school` query parameter of a list request."""
    if not school:
        raise ValidationError("School parameter is required")
    return validate_school(school)


def validate_school(school) -> str:
    if school not in SCHOOLS:
        raise ValidationError("School must be wlhs or wvhs")
    return school


def validate_grade_level(value) -> int:
    """
    Coerce a grade level to int and check it is 9 through 12.

    Only the leading digits count, so 9.5, "10.0" and "11th" are read as
    9, 10 and 11.
    """
    match = _LEADING_INT.match(str(value)) if not isinstance(value, bool) else None
    grade = int(match.group(1)) if match else None
    if grade not in GRADE_LEVELS:
        raise ValidationError("Grade level must be 9, 10, 11, or 12")
    return grade


def parse_id(raw, label: str) -> int:
    """Turn a path id into an int, e.g. '42' -> 42."""
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {label} id")
