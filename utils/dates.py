"""
utils/dates.py
--------------
Date normalization. Every date that goes into or comes out of the
database passes through `format_date` so the API only ever speaks
plain ``YYYY-MM-DD`` strings.
"""

from datetime import date, datetime, timezone

from dateutil import parser as date_parser

from utils.errors import InvalidDateError


def format_date(value) -> str | None:
    """
    Normalize a date value to ``YYYY-MM-DD``.

    Args:
        value: A string, ``date`` or ``datetime``. Falsy values mean "no date".

    Returns:
        The ISO calendar date, or None when no date was given.

    Raises:
        InvalidDateError: If the value cannot be parsed as a date.
    """
    if not value:
        return None

    if isinstance(value, datetime):
        return _utc_date(value).isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if not isinstance(value, str):
        raise InvalidDateError()

    text = value.strip()
    try:
        return date.fromisoformat(text).isoformat()
    except ValueError:
        pass

    try:
        parsed = date_parser.parse(text)
    except (ValueError, OverflowError) as e:
        raise InvalidDateError() from e
    return _utc_date(parsed).isoformat()


def _utc_date(value: datetime) -> date:
    """Calendar date of a datetime, in UTC when the value carries a zone."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.date()


def iso_or_none(value) -> str | None:
    """Render a time or timestamp column as ISO 8601, passing None through."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return value.isoformat()
