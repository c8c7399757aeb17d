"""
handlers/calendar_handler.py
-----------------------------
Routes for the per-date labels: A/B day schedules and day types.
"""

from fastapi import APIRouter, Depends

from handlers.dependencies import get_calendar_service
from handlers.envelope import json_body
from services.calendar_service import CalendarService

router = APIRouter(prefix="/api", tags=["calendar"])


@router.get("/day-schedules")
def list_day_schedules(service: CalendarService = Depends(get_calendar_service)):
    return service.list_day_schedules()


@router.post("/day-schedules")
def set_day_schedule(
    body: dict = Depends(json_body),
    service: CalendarService = Depends(get_calendar_service),
):
    """Set a date to schedule A or B; a null schedule clears the date."""
    return service.set_day_schedule(body)


@router.get("/day-types")
def list_day_types(service: CalendarService = Depends(get_calendar_service)):
    return service.list_day_types()


@router.post("/day-types")
def set_day_type(
    body: dict = Depends(json_body),
    service: CalendarService = Depends(get_calendar_service),
):
    """Annotate a date; a null type clears the date."""
    return service.set_day_type(body)
