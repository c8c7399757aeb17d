"""
services/calendar_service.py
-----------------------------
Business logic for the per-date labels: A/B day schedules and day types.
"""

from config import SCHEDULES
from repositories.day_repo import DayScheduleRepository, DayTypeRepository, DayValueRepository
from utils.dates import format_date
from utils.errors import ValidationError


class CalendarService:
    """
    Reads and writes the one-value-per-date tables.

    Writing an empty value for a date clears that date; otherwise the value
    replaces whatever was stored before.
    """

    def __init__(self, schedule_repo: DayScheduleRepository, type_repo: DayTypeRepository):
        self.schedule_repo = schedule_repo
        self.type_repo = type_repo

    # ── Day schedules ─────────────────────────────────────

    def list_day_schedules(self) -> list[dict]:
        return [s.to_dict() for s in self.schedule_repo.list_all()]

    def set_day_schedule(self, body: dict) -> dict:
        """
        Set or clear the A/B schedule of a date.

        Args:
            body: Request payload with 'date' and 'schedule'.

        Returns:
            Dict with 'success', 'date' and 'schedule'.
        """
        day = self._require_date(body)
        schedule = body.get("schedule")
        if schedule and schedule not in SCHEDULES:
            raise ValidationError("Schedule must be A or B")
        return self._write(self.schedule_repo, day, schedule, "schedule")

    # ── Day types ─────────────────────────────────────────

    def list_day_types(self) -> list[dict]:
        return [t.to_dict() for t in self.type_repo.list_all()]

    def set_day_type(self, body: dict) -> dict:
        """Set or clear the day type of a date."""
        day = self._require_date(body)
        return self._write(self.type_repo, day, body.get("type"), "type")

    # ── Helpers ───────────────────────────────────────────

    @staticmethod
    def _require_date(body: dict) -> str:
        if not body.get("date"):
            raise ValidationError("Date is required")
        return format_date(body["date"])

    @staticmethod
    def _write(repo: DayValueRepository, day: str, value, key: str) -> dict:
        if not value:
            repo.delete(day)
            value = None
        else:
            repo.upsert(day, value)
        return {"success": True, "date": day, key: value}
