# tests/conftest.py
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from db.connection import Database
from handlers.dependencies import (
    get_calendar_service,
    get_event_service,
    get_material_service,
    get_system_service,
)
from main import create_app
from models.day import DaySchedule, DayType
from services.calendar_service import CalendarService
from services.event_service import EventService
from services.material_service import MaterialService
from services.system_service import SystemService
from tests.fakes import (
    FakeDatabase,
    MemoryDayRepository,
    MemoryEventRepository,
    MemoryMaterialRepository,
)


class Repos:
    def __init__(self, legacy_materials: bool = False):
        self.schedules = MemoryDayRepository(DaySchedule)
        self.types = MemoryDayRepository(DayType)
        self.events = MemoryEventRepository()
        self.materials = MemoryMaterialRepository(legacy=legacy_materials)


@pytest.fixture
def repos():
    return Repos()


@pytest.fixture
def system_db():
    return FakeDatabase(dsn=None)


@pytest.fixture
def app(repos, system_db):
    app = create_app(Database(), static_dir="")
    app.dependency_overrides[get_calendar_service] = lambda: CalendarService(repos.schedules, repos.types)
    app.dependency_overrides[get_event_service] = lambda: EventService(repos.events)
    app.dependency_overrides[get_material_service] = lambda: MaterialService(repos.materials)
    app.dependency_overrides[get_system_service] = lambda: SystemService(system_db, env_url="")
    return app


@pytest.fixture
def client(app):
    return TestClient(app, raise_server_exceptions=False)
