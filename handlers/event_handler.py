"""
handlers/event_handler.py
--------------------------
Routes for school events.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from handlers.dependencies import get_event_service
from handlers.envelope import json_body
from services.event_service import EventService

router = APIRouter(prefix="/api/events", tags=["events"])


@router.get("")
def list_events(
    school: Optional[str] = None,
    service: EventService = Depends(get_event_service),
):
    """All events of one school, ordered by date, time and id."""
    return service.list_events(school)


@router.post("")
def create_event(
    body: dict = Depends(json_body),
    service: EventService = Depends(get_event_service),
):
    return service.create_event(body)


@router.put("/{event_id}")
def update_event(
    event_id: str,
    body: dict = Depends(json_body),
    service: EventService = Depends(get_event_service),
):
    return service.update_event(event_id, body)


@router.delete("/{event_id}")
def delete_event(event_id: str, service: EventService = Depends(get_event_service)):
    return service.delete_event(event_id)
