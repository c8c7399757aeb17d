"""
services/event_service.py
--------------------------
Business logic for school calendar events.
"""

from models.event import Event
from repositories.event_repo import EventRepository
from services.validators import parse_id, require_school, validate_school
from utils.dates import format_date
from utils.errors import NotFoundError, ValidationError


class EventService:
    """
    Handles validation for events before they reach the repository.

    Events belong to one school and one date for their whole life; an
    update only touches title, department, time and description.
    """

    def __init__(self, repo: EventRepository):
        self.repo = repo

    def list_events(self, school) -> list[dict]:
        school = require_school(school)
        return [e.to_dict() for e in self.repo.list_for_school(school)]

    def create_event(self, body: dict) -> dict:
        """
        Create an event from a request payload.

        Args:
            body: Payload with 'school', 'date', 'title' and optional
                'department', 'time', 'description'.

        Returns:
            The stored event as a dict.
        """
        if not body.get("school") or not body.get("date") or not body.get("title"):
            raise ValidationError("School, date, and title are required")
        school = validate_school(body["school"])

        event = Event(
            school=school,
            date=format_date(body["date"]),
            title=body["title"],
            department=body.get("department") or None,
            time=body.get("time") or None,
            description=body.get("description") or "",
        )
        return self.repo.add(event).to_dict()

    def update_event(self, raw_id, body: dict) -> dict:
        """Replace the mutable fields of an event."""
        if not body.get("title"):
            raise ValidationError("Title is required")
        event_id = parse_id(raw_id, "event")

        updated = self.repo.update(
            event_id,
            title=body["title"],
            department=body.get("department") or None,
            time=body.get("time") or None,
            description=body.get("description") or "",
        )
        if updated is None:
            raise NotFoundError("Event not found")
        return updated.to_dict()

    def delete_event(self, raw_id) -> dict:
        event_id = parse_id(raw_id, "event")
        if not self.repo.delete(event_id):
            raise NotFoundError("Event not found")
        return {"success": True, "id": event_id}
