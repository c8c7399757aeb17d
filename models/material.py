"""
models/material.py
------------------
Domain model for grade-level class materials.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from utils.dates import iso_or_none


@dataclass
class Material:
    """
    A link to class material for one grade at one school on one date.

    Attributes:
        school: 'wlhs' or 'wvhs'.
        date: ISO date the material belongs to.
        grade_level: 9 through 12.
        title: Required headline.
        link: Required URL.
        description: Free text, empty string when not given.
        password: Plaintext access password, empty string when open.
        id: Database primary key (None for new records).
        created_at: Timestamp when the record was created.
        updated_at: Timestamp of the last update.
    """
    school: str
    date: str
    grade_level: int
    title: str
    link: str
    description: Optional[str] = ""
    password: str = ""
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def is_protected(self) -> bool:
        """Returns True if a password is required to open the link."""
        return bool(self.password)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "school": self.school,
            "date": self.date,
            "grade_level": self.grade_level,
            "title": self.title,
            "link": self.link,
            "description": self.description,
            "password": self.password or "",
            "created_at": iso_or_none(self.created_at),
            "updated_at": iso_or_none(self.updated_at),
        }

    def __str__(self) -> str:
        lock = "🔒 " if self.is_protected() else ""
        return f"{lock}[{self.school} G{self.grade_level}] {self.date} {self.title}"
