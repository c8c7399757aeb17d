"""
repositories/event_repo.py
---------------------------
Data access layer for calendar events.
All SQL queries related to the `events` table live here.
"""

from typing import Optional

from db.connection import Database
from models.event import Event
from utils.dates import format_date
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "id, school, date, title, department, time, description, created_at, updated_at"


class EventRepository:
    """Repository for CRUD operations on the events table."""

    def __init__(self, database: Database):
        self.db = database

    # ── CREATE ────────────────────────────────────────────

    def add(self, event: Event) -> Event:
        """
        Insert a new event.

        Args:
            event: The Event domain object to persist.

        Returns:
            The stored Event with `id` and timestamps populated.
        """
        query = f"""
            INSERT INTO events (school, date, title, department, time, description)
            VALUES (%s, %s, %s, %s, %s, %s)
            RETURNING {_COLUMNS};
        """
        conn = self.db.acquire()
        try:
            with conn.cursor() as cur:
                cur.execute(query, (
                    event.school, event.date, event.title,
                    event.department, event.time, event.description,
                ))
                saved = self._row_to_event(cur.fetchone())
            conn.commit()
            logger.info(f"Added event #{saved.id}: {saved}")
            return saved
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to add event: {e}")
            raise
        finally:
            self.db.release(conn)

    # ── READ ──────────────────────────────────────────────

    def list_for_school(self, school: str) -> list[Event]:
        """
        Fetch all events of one school.

        Returns:
            List of Event objects ordered by date, time, id.
        """
        query = f"SELECT {_COLUMNS} FROM events WHERE school = %s ORDER BY date, time, id;"
        conn = self.db.acquire()
        try:
            with conn.cursor() as cur:
                cur.execute(query, (school,))
                return [self._row_to_event(r) for r in cur.fetchall()]
        finally:
            self.db.release(conn)

    # ── UPDATE ────────────────────────────────────────────

    def update(
        self,
        event_id: int,
        title: str,
        department: Optional[str],
        time: Optional[str],
        description: str,
    ) -> Optional[Event]:
        """
        Replace the mutable fields of an event. School and date never change.

        Returns:
            The updated Event, or None if no event has that id.
        """
        query = f"""
            UPDATE events
            SET title = %s, department = %s, time = %s, description = %s,
                updated_at = CURRENT_TIMESTAMP
            WHERE id = %s
            RETURNING {_COLUMNS};
        """
        conn = self.db.acquire()
        try:
            with conn.cursor() as cur:
                cur.execute(query, (title, department, time, description, event_id))
                row = cur.fetchone()
            conn.commit()
            return self._row_to_event(row) if row else None
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to update event #{event_id}: {e}")
            raise
        finally:
            self.db.release(conn)

    # ── DELETE ────────────────────────────────────────────

    def delete(self, event_id: int) -> bool:
        """
        Delete an event by ID.

        Returns:
            True if a row was deleted, False otherwise.
        """
        query = "DELETE FROM events WHERE id = %s RETURNING id;"
        conn = self.db.acquire()
        try:
            with conn.cursor() as cur:
                cur.execute(query, (event_id,))
                deleted = cur.fetchone() is not None
            conn.commit()
            if deleted:
                logger.info(f"Deleted event #{event_id}")
            return deleted
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to delete event #{event_id}: {e}")
            raise
        finally:
            self.db.release(conn)

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_event(row: tuple) -> Event:
        """Convert a database row tuple to an Event domain object."""
        return Event(
            id=row[0],
            school=row[1],
            date=format_date(row[2]),
            title=row[3],
            department=row[4],
            time=row[5],
            description=row[6],
            created_at=row[7],
            updated_at=row[8],
        )
