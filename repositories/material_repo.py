"""
repositories/material_repo.py
------------------------------
Data access layer for grade-level materials.
All SQL queries related to the `materials` table live here.

Databases created before password-protected materials have no
`password` column. The repository asks the Database's schema probe which
layout it is talking to and leaves the column out when it is missing;
such rows always come back with an empty password.
"""

from typing import Optional

from db.connection import Database
from models.material import Material
from utils.dates import format_date
from utils.logger import get_logger

logger = get_logger(__name__)

_BASE_COLUMNS = ["id", "school", "date", "grade_level", "title", "link", "description"]
_STAMP_COLUMNS = ["created_at", "updated_at"]


class MaterialRepository:
    """Repository for CRUD operations on the materials table."""

    def __init__(self, database: Database):
        self.db = database

    def has_password_column(self) -> bool:
        return self.db.has_column("materials", "password")

    def _columns(self, with_password: bool) -> list[str]:
        extra = ["password"] if with_password else []
        return _BASE_COLUMNS + extra + _STAMP_COLUMNS

    # ── CREATE ────────────────────────────────────────────

    def add(self, material: Material) -> Material:
        """
        Insert a new material.

        Args:
            material: The Material domain object to persist.

        Returns:
            The stored Material with `id` and timestamps populated.
        """
        with_password = self.has_password_column()
        columns = self._columns(with_password)
        fields = ["school", "date", "grade_level", "title", "link", "description"]
        params = [
            material.school, material.date, material.grade_level,
            material.title, material.link, material.description,
        ]
        if with_password:
            fields.append("password")
            params.append(material.password)

        query = f"""
            INSERT INTO materials ({", ".join(fields)})
            VALUES ({", ".join(["%s"] * len(fields))})
            RETURNING {", ".join(columns)};
        """
        conn = self.db.acquire()
        try:
            with conn.cursor() as cur:
                cur.execute(query, params)
                saved = self._row_to_material(cur.fetchone(), columns)
            conn.commit()
            logger.info(f"Added material #{saved.id}: {saved}")
            return saved
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to add material: {e}")
            raise
        finally:
            self.db.release(conn)

    # ── READ ──────────────────────────────────────────────

    def list_for_school(self, school: str) -> list[Material]:
        """
        Fetch all materials of one school.

        Returns:
            List of Material objects ordered by date, grade level, id.
        """
        columns = self._columns(self.has_password_column())
        query = (
            f"SELECT {', '.join(columns)} FROM materials "
            "WHERE school = %s ORDER BY date, grade_level, id;"
        )
        conn = self.db.acquire()
        try:
            with conn.cursor() as cur:
                cur.execute(query, (school,))
                return [self._row_to_material(r, columns) for r in cur.fetchall()]
        finally:
            self.db.release(conn)

    # ── UPDATE ────────────────────────────────────────────

    def update(
        self,
        material_id: int,
        title: str,
        link: str,
        description: str,
        password: str,
    ) -> Optional[Material]:
        """
        Replace title, link, description and password of a material.

        Returns:
            The updated Material, or None if no material has that id.
        """
        with_password = self.has_password_column()
        columns = self._columns(with_password)
        assignments = ["title = %s", "link = %s", "description = %s"]
        params = [title, link, description]
        if with_password:
            assignments.append("password = %s")
            params.append(password)
        params.append(material_id)

        query = f"""
            UPDATE materials
            SET {", ".join(assignments)}, updated_at = CURRENT_TIMESTAMP
            WHERE id = %s
            RETURNING {", ".join(columns)};
        """
        conn = self.db.acquire()
        try:
            with conn.cursor() as cur:
                cur.execute(query, params)
                row = cur.fetchone()
            conn.commit()
            return self._row_to_material(row, columns) if row else None
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to update material #{material_id}: {e}")
            raise
        finally:
            self.db.release(conn)

    # ── DELETE ────────────────────────────────────────────

    def delete(self, material_id: int) -> bool:
        """
        Delete a material by ID.

        Returns:
            True if a row was deleted, False otherwise.
        """
        query = "DELETE FROM materials WHERE id = %s RETURNING id;"
        conn = self.db.acquire()
        try:
            with conn.cursor() as cur:
                cur.execute(query, (material_id,))
                deleted = cur.fetchone() is not None
            conn.commit()
            if deleted:
                logger.info(f"Deleted material #{material_id}")
            return deleted
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to delete material #{material_id}: {e}")
            raise
        finally:
            self.db.release(conn)

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_material(row: tuple, columns: list[str]) -> Material:
        """Convert a database row tuple to a Material domain object."""
        values = dict(zip(columns, row))
        return Material(
            id=values["id"],
            school=values["school"],
            date=format_date(values["date"]),
            grade_level=values["grade_level"],
            title=values["title"],
            link=values["link"],
            description=values["description"],
            password=values.get("password") or "",
            created_at=values["created_at"],
            updated_at=values["updated_at"],
        )
