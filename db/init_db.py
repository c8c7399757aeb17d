"""
db/init_db.py
-------------
Creates the database schema (tables and indexes) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

import psycopg2

from db.connection import Database
from utils.logger import get_logger

logger = get_logger(__name__)

TABLES = ["day_schedules", "day_types", "events", "materials"]

SCHEMA_SQL = """
-- A/B rotation label, one row per school day
CREATE TABLE IF NOT EXISTS day_schedules (
    date            DATE PRIMARY KEY,
    schedule        VARCHAR(1) NOT NULL CHECK (schedule IN ('A', 'B')),
    created_at      TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at      TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

-- Free-form day annotation (early release, holiday, ...)
CREATE TABLE IF NOT EXISTS day_types (
    date            DATE PRIMARY KEY,
    type            VARCHAR(50) NOT NULL,
    created_at      TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at      TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS events (
    id              SERIAL PRIMARY KEY,
    school          VARCHAR(10) NOT NULL CHECK (school IN ('wlhs', 'wvhs')),
    date            DATE NOT NULL,
    title           VARCHAR(255) NOT NULL,
    department      VARCHAR(50),
    time            TIME,
    description     TEXT,
    created_at      TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at      TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS materials (
    id              SERIAL PRIMARY KEY,
    school          VARCHAR(10) NOT NULL CHECK (school IN ('wlhs', 'wvhs')),
    date            DATE NOT NULL,
    grade_level     INTEGER NOT NULL CHECK (grade_level BETWEEN 9 AND 12),
    title           VARCHAR(255) NOT NULL,
    link            TEXT NOT NULL,
    description     TEXT DEFAULT '',
    password        TEXT DEFAULT '',
    created_at      TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at      TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

-- Tables created before password-protected materials
ALTER TABLE materials ADD COLUMN IF NOT EXISTS password TEXT DEFAULT '';

-- Indexes for faster queries
CREATE INDEX IF NOT EXISTS idx_events_school_date ON events(school, date);
CREATE INDEX IF NOT EXISTS idx_materials_school_date_grade ON materials(school, date, grade_level);
CREATE INDEX IF NOT EXISTS idx_events_date ON events(date);
CREATE INDEX IF NOT EXISTS idx_materials_date ON materials(date);
CREATE INDEX IF NOT EXISTS idx_day_schedules_date ON day_schedules(date);
CREATE INDEX IF NOT EXISTS idx_day_types_date ON day_types(date);
"""

# (code, message fragments, friendly message, suggestion)
_KNOWN_FAILURES = [
    (
        "ENOTFOUND",
        ("could not translate host name", "name or service not known", "nodename nor servname"),
        "Database host not found. Check your connection string.",
        "Verify DATABASE_URL is correct",
    ),
    (
        "ECONNREFUSED",
        ("connection refused",),
        "Connection refused. Database may not be running.",
        "Check if database is active",
    ),
    (
        "28P01",
        ("password authentication failed",),
        "Authentication failed. Check credentials.",
        "Verify username and password in DATABASE_URL",
    ),
    (
        "3D000",
        ("does not exist",),
        "Database does not exist.",
        "Check database name in connection string",
    ),
]


def create_tables(database: Database) -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    conn = database.acquire()
    try:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        conn.commit()
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        conn.rollback()
        logger.error(f"Failed to initialize schema: {e}")
        raise
    finally:
        database.release(conn)
        database.forget_schema()


def describe_connection_error(error: Exception) -> tuple[str, str | None, list[str]]:
    """
    Translate a database failure into something a person can act on.

    Args:
        error: The exception raised while connecting or creating the schema.

    Returns:
        (message, code, suggestions). Unrecognized errors keep their own
        message and native SQLSTATE code, with no suggestions.
    """
    message = str(error).strip()
    code = getattr(error, "pgcode", None)
    lowered = message.lower()

    for known_code, fragments, friendly, suggestion in _KNOWN_FAILURES:
        if code == known_code:
            return friendly, known_code, [suggestion]
        # libpq reports connection-time failures without a SQLSTATE
        if code is None and isinstance(error, psycopg2.OperationalError):
            if known_code == "3D000" and "database" not in lowered:
                continue
            if any(fragment in lowered for fragment in fragments):
                return friendly, known_code, [suggestion]

    return message, code, []


if __name__ == "__main__":
    database = Database.from_env()
    create_tables(database)
    database.close()
    print("✅ Database schema created successfully.")
