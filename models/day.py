"""
models/day.py
-------------
Domain models for per-date labels: the A/B schedule and the day type.
"""

from dataclasses import dataclass


@dataclass
class DaySchedule:
    """
    A/B rotation label for a single date.

    Attributes:
        date: ISO date (``YYYY-MM-DD``), the primary key.
        schedule: 'A' or 'B'.
    """
    date: str
    schedule: str

    def to_dict(self) -> dict:
        return {"date": self.date, "schedule": self.schedule}


@dataclass
class DayType:
    """
    Free-form annotation for a single date (e.g. 'Late Start', 'No School').

    Attributes:
        date: ISO date (``YYYY-MM-DD``), the primary key.
        type: The annotation text.
    """
    date: str
    type: str

    def to_dict(self) -> dict:
        return {"date": self.date, "type": self.type}
