"""
services/system_service.py
---------------------------
Service-level operations: API info, health check and schema initialization.
"""

from datetime import datetime, timezone

import psycopg2

from config import API_NAME, API_VERSION, APP_ENV, DATABASE_URL
from db.connection import Database
from db.init_db import TABLES, create_tables, describe_connection_error
from utils.dates import iso_or_none
from utils.errors import CalendarError, ConfigurationError, SchemaInitError
from utils.logger import get_logger

logger = get_logger(__name__)

FEATURES = [
    "Password-protected materials",
    "Multi-school support",
    "A/B day scheduling",
    "Event management",
    "Grade-level materials",
    "Auto-reconnecting database pool",
]

ENDPOINTS = {
    "health": "/api/health",
    "init": "POST /api/init",
    "daySchedules": "/api/day-schedules",
    "dayTypes": "/api/day-types",
    "events": "/api/events",
    "materials": "/api/materials",
}


class SystemService:
    """Operations on the service itself rather than on calendar data."""

    def __init__(self, database: Database, env_url: str = DATABASE_URL):
        self.db = database
        self.env_url = env_url

    def info(self) -> dict:
        return {
            "name": API_NAME,
            "version": API_VERSION,
            "status": "running",
            "environment": APP_ENV,
            "endpoints": ENDPOINTS,
            "features": FEATURES,
        }

    def health(self) -> tuple[dict, int]:
        """
        Run a trivial query to prove the database answers.

        Returns:
            (payload, status code). Failures are reported, not raised.
        """
        try:
            with self.db.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute("SELECT NOW() AS timestamp, version() AS db_version;")
                    row = cur.fetchone()
                conn.commit()
        except (CalendarError, psycopg2.Error) as e:
            logger.error(f"Health check failed: {e}")
            return {
                "error": "Database connection failed",
                "connected": False,
                "details": str(e).strip(),
                "environment": APP_ENV,
            }, 500

        return {
            "status": "healthy",
            "message": "Database connected",
            "connected": True,
            "timestamp": iso_or_none(row[0]),
            "database": "PostgreSQL",
            "environment": APP_ENV,
        }, 200

    def initialize(self, body: dict) -> dict:
        """
        Create or upgrade the schema.

        Args:
            body: Optional payload; 'dbUrl' is used only when no
                DATABASE_URL is configured, and replaces any URL given
                by an earlier call.

        Raises:
            ConfigurationError: If no database URL is known at all.
            SchemaInitError: If connecting or creating the schema fails.
        """
        has_env_var = bool(self.env_url)
        db_url = self.env_url or body.get("dbUrl") or self.db.dsn
        if not db_url:
            raise ConfigurationError(
                "Database URL is required. Set DATABASE_URL environment variable "
                "or provide in request."
            )
        self.db.configure(db_url)

        logger.info("Creating/updating database schema...")
        try:
            create_tables(self.db)
        except psycopg2.Error as e:
            logger.error(f"Database initialization error: {e}")
            message, code, suggestions = describe_connection_error(e)
            raise SchemaInitError(message, code, suggestions, has_env_var) from e

        return {
            "message": "Database initialized successfully",
            "tables": TABLES,
            "features": [
                "password-protected materials",
                "multi-school support",
                "performance indexes",
            ],
            "environment": APP_ENV,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
