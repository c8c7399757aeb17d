# tests/test_api.py
import psycopg2
import pytest
from fastapi import APIRouter
from fastapi.testclient import TestClient

import main
from db.connection import Database
from db.init_db import TABLES
from handlers.dependencies import get_event_service, get_material_service
from services.material_service import MaterialService
from tests.fakes import FakeConnection, MemoryMaterialRepository
from utils.errors import StorageError

CORS = {
    "access-control-allow-origin": "*",
    "access-control-allow-methods": "GET, POST, PUT, DELETE, OPTIONS",
    "access-control-allow-headers": "Content-Type, Accept",
    "access-control-max-age": "86400",
}


def assert_cors(response):
    for name, value in CORS.items():
        assert response.headers[name] == value


def _event(client, **overrides):
    body = {"school": "wlhs", "date": "2024-09-03", "title": "Picture Day"}
    body.update(overrides)
    return client.post("/api/events", json=body)


def _material(client, **overrides):
    body = {
        "school": "wlhs", "date": "2024-09-05", "grade_level": 10,
        "title": "Unit 1 notes", "link": "https://example.org/u1",
    }
    body.update(overrides)
    return client.post("/api/materials", json=body)


# ---------- envelope & routing ----------

def test_api_info(client):
    for path in ("/api", "/api/"):
        r = client.get(path)
        assert r.status_code == 200
        assert r.json()["name"] == "WLWV Life Calendar API"
        assert r.json()["endpoints"]["materials"] == "/api/materials"
        assert_cors(r)


def test_options_anywhere_is_empty_200(client):
    for path in ("/api/events", "/api/does-not-exist", "/index.html"):
        r = client.options(path)
        assert r.status_code == 200
        assert r.content == b""
        assert_cors(r)


def test_unknown_api_path_is_404_with_path(client):
    r = client.get("/api/nope")
    assert r.status_code == 404
    assert r.json() == {"error": "Not found", "path": "/api/nope", "method": "GET"}
    assert_cors(r)


def test_wrong_method_on_known_path_is_404(client):
    r = client.put("/api/day-schedules", json={})
    assert r.status_code == 404
    assert r.json() == {"error": "Not found", "path": "/api/day-schedules", "method": "PUT"}


def test_errors_carry_cors_headers(client):
    r = client.get("/api/events")
    assert r.status_code == 400
    assert_cors(r)


def test_malformed_body_is_treated_as_empty(client):
    r = client.post("/api/day-schedules", content=b"{not json",
                    headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.json() == {"error": "Date is required"}


def test_missing_body_fails_validation(client):
    r = client.post("/api/events")
    assert r.status_code == 400
    assert r.json() == {"error": "School, date, and title are required"}


def test_storage_error_is_500_with_raw_message(app, client):
    class Broken:
        def list_events(self, school):
            raise psycopg2.OperationalError("server closed the connection unexpectedly")

    app.dependency_overrides[get_event_service] = lambda: Broken()
    r = client.get("/api/events?school=wlhs")
    assert r.status_code == 500
    assert r.json() == {"error": "server closed the connection unexpectedly"}
    assert_cors(r)


def test_unexpected_error_is_500(app, client):
    class Broken:
        def list_events(self, school):
            raise KeyError("boom")

    app.dependency_overrides[get_event_service] = lambda: Broken()
    r = client.get("/api/events?school=wlhs")
    assert r.status_code == 500
    assert r.json()["error"] == "Internal server error"
    assert_cors(r)


# ---------- day schedules / day types ----------

def test_day_schedule_roundtrip_and_clear(client):
    r = client.post("/api/day-schedules", json={"date": "2024-09-03", "schedule": "A"})
    assert r.json() == {"success": True, "date": "2024-09-03", "schedule": "A"}
    client.post("/api/day-schedules", json={"date": "2024-09-04", "schedule": "B"})

    r = client.post("/api/day-schedules", json={"date": "2024-09-03", "schedule": None})
    assert r.status_code == 200

    r = client.get("/api/day-schedules")
    assert r.json() == [{"date": "2024-09-04", "schedule": "B"}]


def test_invalid_schedule_is_400_and_not_stored(client, repos):
    r = client.post("/api/day-schedules", json={"date": "2024-09-03", "schedule": "Z"})
    assert r.status_code == 400
    assert r.json() == {"error": "Schedule must be A or B"}
    assert repos.schedules.writes == 0


def test_invalid_date_is_400(client):
    r = client.post("/api/day-types", json={"date": "someday", "type": "Assembly"})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid date format"}


def test_day_types(client):
    r = client.post("/api/day-types", json={"date": "2024-09-03", "type": "Late Start"})
    assert r.json() == {"success": True, "date": "2024-09-03", "type": "Late Start"}
    assert client.get("/api/day-types").json() == [{"date": "2024-09-03", "type": "Late Start"}]
    client.post("/api/day-types", json={"date": "2024-09-03"})
    assert client.get("/api/day-types").json() == []


# ---------- events ----------

def test_created_event_is_listed_for_its_school(client):
    created = _event(client, department="Athletics", time="18:30:00",
                     description="Bring a camera").json()
    assert isinstance(created["id"], int)

    listed = client.get("/api/events", params={"school": "wlhs"}).json()
    assert listed == [created]
    assert client.get("/api/events", params={"school": "wvhs"}).json() == []


def test_events_ordered_by_date_time_id(client):
    _event(client, date="2024-09-04", title="later day")
    _event(client, date="2024-09-03", time="15:00:00", title="afternoon")
    _event(client, date="2024-09-03", time="08:00:00", title="morning")
    titles = [e["title"] for e in client.get("/api/events?school=wlhs").json()]
    assert titles == ["morning", "afternoon", "later day"]


def test_event_list_school_validation(client):
    assert client.get("/api/events").json() == {"error": "School parameter is required"}
    r = client.get("/api/events?school=other")
    assert r.status_code == 400
    assert r.json() == {"error": "School must be wlhs or wvhs"}


def test_create_event_invalid_school(client):
    r = _event(client, school="abc")
    assert r.status_code == 400


def test_put_event(client):
    created = _event(client).json()
    r = client.put(f"/api/events/{created['id']}", json={"title": "Retake Day"})
    assert r.status_code == 200
    assert r.json()["title"] == "Retake Day"
    assert r.json()["school"] == "wlhs"


def test_put_missing_event_is_404_and_creates_nothing(client, repos):
    r = client.put("/api/events/123", json={"title": "Ghost"})
    assert r.status_code == 404
    assert r.json() == {"error": "Event not found"}
    assert repos.events.rows == {}


def test_put_event_requires_title(client):
    r = client.put("/api/events/1", json={"department": "Math"})
    assert r.status_code == 400
    assert r.json() == {"error": "Title is required"}


def test_delete_event_twice(client):
    event_id = _event(client).json()["id"]
    first = client.delete(f"/api/events/{event_id}")
    assert first.status_code == 200
    assert first.json() == {"success": True, "id": event_id}

    second = client.delete(f"/api/events/{event_id}")
    assert second.status_code == 404
    assert second.json() == {"error": "Event not found"}


def test_non_numeric_event_id(client):
    r = client.delete("/api/events/abc")
    assert r.status_code == 400


# ---------- materials ----------

def test_materials_are_scoped_by_school(client):
    _material(client, school="wlhs", title="lake")
    _material(client, school="wvhs", title="valley")
    wlhs = client.get("/api/materials?school=wlhs").json()
    wvhs = client.get("/api/materials?school=wvhs").json()
    assert [m["title"] for m in wlhs] == ["lake"]
    assert [m["title"] for m in wvhs] == ["valley"]
    assert all(m["school"] == "wlhs" for m in wlhs)


def test_materials_ordered_by_date_grade_id(client):
    _material(client, grade_level=12, title="senior")
    _material(client, grade_level=9, title="freshman")
    _material(client, date="2024-09-01", grade_level=11, title="earlier")
    titles = [m["title"] for m in client.get("/api/materials?school=wlhs").json()]
    assert titles == ["earlier", "freshman", "senior"]


def test_material_password_roundtrip(client):
    created = _material(client, password="owl").json()
    assert created["password"] == "owl"
    listed = client.get("/api/materials?school=wlhs").json()
    assert listed[0]["password"] == "owl"


def test_materials_on_legacy_schema_still_return_password(app, client):
    repo = MemoryMaterialRepository(legacy=True)
    app.dependency_overrides[get_material_service] = lambda: MaterialService(repo)
    r = _material(client, password="owl")
    assert r.status_code == 200
    assert r.json()["password"] == ""
    listed = client.get("/api/materials?school=wlhs").json()
    assert listed[0]["password"] == ""


def test_material_grade_validation(client):
    r = _material(client, grade_level=8)
    assert r.status_code == 400
    assert r.json() == {"error": "Grade level must be 9, 10, 11, or 12"}


def test_material_required_fields(client):
    r = client.post("/api/materials", json={"school": "wlhs"})
    assert r.status_code == 400
    assert r.json() == {"error": "School, date, grade_level, title, and link are required"}


def test_put_and_delete_material(client):
    material_id = _material(client).json()["id"]
    r = client.put(f"/api/materials/{material_id}",
                   json={"title": "Unit 2", "link": "https://example.org/u2", "password": "pw"})
    assert r.status_code == 200
    assert r.json()["link"] == "https://example.org/u2"
    assert r.json()["password"] == "pw"

    assert client.delete(f"/api/materials/{material_id}").json() == {"success": True, "id": material_id}
    assert client.delete(f"/api/materials/{material_id}").status_code == 404


def test_put_material_errors(client):
    assert client.put("/api/materials/1", json={"title": "t"}).status_code == 400
    r = client.put("/api/materials/1", json={"title": "t", "link": "l"})
    assert r.status_code == 404
    assert r.json() == {"error": "Material not found"}


# ---------- system ----------

def test_health_without_database(client):
    r = client.get("/api/health")
    assert r.status_code == 500
    body = r.json()
    assert body["connected"] is False
    assert body["error"] == "Database connection failed"
    assert body["details"] == "No database URL available"
    assert_cors(r)


def test_health_with_database(client, system_db):
    system_db.dsn = "postgresql://test/calendar"
    system_db.conn.results = [[("2024-09-01T08:00:00+00:00", "PostgreSQL 16.2")]]
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json()["status"] == "healthy"
    assert r.json()["connected"] is True
    assert r.json()["database"] == "PostgreSQL"


def test_init_without_url_is_400(client):
    r = client.post("/api/init")
    assert r.status_code == 400
    assert "Database URL is required" in r.json()["error"]
    assert r.json()["hasEnvVar"] is False


def test_init_with_body_url(client, system_db):
    r = client.post("/api/init", json={"dbUrl": "postgresql://admin@db/calendar"})
    assert r.status_code == 200
    assert r.json()["tables"] == TABLES
    assert system_db.dsn == "postgresql://admin@db/calendar"
    assert system_db.conn.commits == 1


def test_init_failure_is_translated(client, system_db):
    system_db.dsn = "postgresql://test/calendar"
    system_db.conn = FakeConnection(fail=psycopg2.OperationalError(
        'connection to server at "db" (10.0.0.5), port 5432 failed: Connection refused'))
    r = client.post("/api/init")
    assert r.status_code == 500
    assert r.json() == {
        "error": "Connection refused. Database may not be running.",
        "code": "ECONNREFUSED",
        "suggestions": ["Check if database is active"],
        "hasEnvVar": False,
    }


def test_init_with_corrected_url_replaces_the_mistyped_one(client, system_db):
    system_db.conn = FakeConnection(fail=psycopg2.OperationalError(
        'could not translate host name "db-typo" to address: Name or service not known'))
    r = client.post("/api/init", json={"dbUrl": "postgresql://admin@db-typo/calendar"})
    assert r.status_code == 500
    assert r.json()["code"] == "ENOTFOUND"

    system_db.conn = FakeConnection()
    r = client.post("/api/init", json={"dbUrl": "postgresql://admin@db/calendar"})
    assert r.status_code == 200
    assert system_db.dsn == "postgresql://admin@db/calendar"


def test_health_reports_pool_timeout(client, system_db, monkeypatch):
    system_db.dsn = "postgresql://test/calendar"

    def exhausted():
        raise StorageError("Timed out waiting for a database connection")

    monkeypatch.setattr(system_db, "acquire", exhausted)
    r = client.get("/api/health")
    assert r.status_code == 500
    body = r.json()
    assert body["connected"] is False
    assert body["error"] == "Database connection failed"
    assert body["details"] == "Timed out waiting for a database connection"


# ---------- app assembly ----------

def test_route_table_has_every_endpoint_once():
    assert main.validate_routes(main.ROUTERS) == 16


def test_duplicate_route_refuses_to_start(monkeypatch):
    clash = APIRouter(prefix="/api")

    @clash.get("/day-schedules")
    def other_schedules():
        return []

    monkeypatch.setattr(main, "ROUTERS", main.ROUTERS + [clash])
    with pytest.raises(RuntimeError, match="Duplicate route GET /api/day-schedules"):
        main.create_app(Database(), static_dir="")


@pytest.fixture
def static_client(tmp_path):
    (tmp_path / "index.html").write_text("<html>calendar</html>")
    (tmp_path / "404.html").write_text("<html>missing</html>")
    return TestClient(main.create_app(Database(), static_dir=str(tmp_path)))


def test_static_site_is_served_outside_api(static_client):
    r = static_client.get("/")
    assert r.status_code == 200
    assert "calendar" in r.text

    r = static_client.get("/no-such-page")
    assert r.status_code == 404
    assert "missing" in r.text


def test_unknown_api_path_stays_json_with_static_site(static_client):
    for method in ("GET", "POST", "DELETE"):
        r = static_client.request(method, "/api/nope")
        assert r.status_code == 404
        assert r.json() == {"error": "Not found", "path": "/api/nope", "method": method}
        assert_cors(r)

    r = static_client.put("/api/day-schedules")
    assert r.status_code == 404
    assert r.json()["path"] == "/api/day-schedules"
