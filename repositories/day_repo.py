"""
repositories/day_repo.py
-------------------------
Data access layer for the per-date tables: `day_schedules` and `day_types`.
Both hold exactly one value per date, so they share one repository class
parameterized by table and value column.
"""

from psycopg2 import sql

from db.connection import Database
from models.day import DaySchedule, DayType
from utils.dates import format_date
from utils.logger import get_logger

logger = get_logger(__name__)


class DayValueRepository:
    """Repository for a table keyed by date holding a single value column."""

    def __init__(self, database: Database, table: str, column: str, model):
        self.db = database
        self.table = table
        self.column = column
        self.model = model

    def list_all(self) -> list:
        """
        Fetch every row ordered by date ascending.

        Returns:
            List of model objects with ISO dates.
        """
        query = sql.SQL("SELECT date, {col} FROM {table} ORDER BY date;").format(
            col=sql.Identifier(self.column),
            table=sql.Identifier(self.table),
        )
        conn = self.db.acquire()
        try:
            with conn.cursor() as cur:
                cur.execute(query)
                return [self.model(format_date(r[0]), r[1]) for r in cur.fetchall()]
        finally:
            self.db.release(conn)

    def upsert(self, day: str, value: str) -> None:
        """Set the value for a date, replacing any previous value."""
        query = sql.SQL("""
            INSERT INTO {table} (date, {col}, updated_at)
            VALUES (%s, %s, CURRENT_TIMESTAMP)
            ON CONFLICT (date)
            DO UPDATE SET {col} = EXCLUDED.{col}, updated_at = CURRENT_TIMESTAMP;
        """).format(
            col=sql.Identifier(self.column),
            table=sql.Identifier(self.table),
        )
        conn = self.db.acquire()
        try:
            with conn.cursor() as cur:
                cur.execute(query, (day, value))
            conn.commit()
            logger.info(f"Set {self.table} {day} = {value}")
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to set {self.table} for {day}: {e}")
            raise
        finally:
            self.db.release(conn)

    def delete(self, day: str) -> bool:
        """
        Remove the value for a date.

        Returns:
            True if a row was deleted, False otherwise.
        """
        query = sql.SQL("DELETE FROM {table} WHERE date = %s;").format(
            table=sql.Identifier(self.table),
        )
        conn = self.db.acquire()
        try:
            with conn.cursor() as cur:
                cur.execute(query, (day,))
                deleted = cur.rowcount > 0
            conn.commit()
            if deleted:
                logger.info(f"Cleared {self.table} for {day}")
            return deleted
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to clear {self.table} for {day}: {e}")
            raise
        finally:
            self.db.release(conn)


class DayScheduleRepository(DayValueRepository):
    """A/B schedule per date."""

    def __init__(self, database: Database):
        super().__init__(database, "day_schedules", "schedule", DaySchedule)


class DayTypeRepository(DayValueRepository):
    """Day-type annotation per date."""

    def __init__(self, database: Database):
        super().__init__(database, "day_types", "type", DayType)
