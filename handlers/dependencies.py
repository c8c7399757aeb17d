"""
handlers/dependencies.py
-------------------------
FastAPI dependency providers. The Database lives on `app.state` and every
service is built per request around it, so tests can swap any of them
through `app.dependency_overrides`.
"""

from fastapi import Depends, Request

from db.connection import Database
from repositories.day_repo import DayScheduleRepository, DayTypeRepository
from repositories.event_repo import EventRepository
from repositories.material_repo import MaterialRepository
from services.calendar_service import CalendarService
from services.event_service import EventService
from services.material_service import MaterialService
from services.system_service import SystemService


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_system_service(database: Database = Depends(get_database)) -> SystemService:
    return SystemService(database)


def get_calendar_service(database: Database = Depends(get_database)) -> CalendarService:
    return CalendarService(DayScheduleRepository(database), DayTypeRepository(database))


def get_event_service(database: Database = Depends(get_database)) -> EventService:
    return EventService(EventRepository(database))


def get_material_service(database: Database = Depends(get_database)) -> MaterialService:
    return MaterialService(MaterialRepository(database))
