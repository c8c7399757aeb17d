"""
models/event.py
---------------
Domain model for school calendar events.
"""

from dataclasses import dataclass
from datetime import datetime, time as dt_time
from typing import Optional

from utils.dates import iso_or_none


@dataclass
class Event:
    """
    A single event on one school's calendar.

    Attributes:
        school: 'wlhs' or 'wvhs'. Fixed once the event exists.
        date: ISO date of the event. Fixed once the event exists.
        title: Required headline.
        department: Optional owning department.
        time: Optional start time.
        description: Free text, empty string when not given.
        id: Database primary key (None for new records).
        created_at: Timestamp when the record was created.
        updated_at: Timestamp of the last update.
    """
    school: str
    date: str
    title: str
    department: Optional[str] = None
    time: Optional[dt_time | str] = None
    description: Optional[str] = ""
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "school": self.school,
            "date": self.date,
            "title": self.title,
            "department": self.department,
            "time": iso_or_none(self.time),
            "description": self.description,
            "created_at": iso_or_none(self.created_at),
            "updated_at": iso_or_none(self.updated_at),
        }

    def __str__(self) -> str:
        return f"[{self.school}] {self.date} {self.title}"
