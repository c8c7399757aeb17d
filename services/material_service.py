"""
services/material_service.py
-----------------------------
Business logic for grade-level materials.
"""

from models.material import Material
from repositories.material_repo import MaterialRepository
from services.validators import parse_id, require_school, validate_grade_level, validate_school
from utils.dates import format_date
from utils.errors import NotFoundError, ValidationError

_REQUIRED_ON_CREATE = ("school", "date", "grade_level", "title", "link")


class MaterialService:
    """
    Handles validation for materials before they reach the repository.

    The optional password is stored as given (plaintext) and returned to
    the client, which decides whether to prompt for it.
    """

    def __init__(self, repo: MaterialRepository):
        self.repo = repo

    def list_materials(self, school) -> list[dict]:
        school = require_school(school)
        return [m.to_dict() for m in self.repo.list_for_school(school)]

    def create_material(self, body: dict) -> dict:
        """
        Create a material from a request payload.

        Args:
            body: Payload with 'school', 'date', 'grade_level', 'title', 'link'
                and optional 'description', 'password'.

        Returns:
            The stored material as a dict.
        """
        if not all(body.get(field) for field in _REQUIRED_ON_CREATE):
            raise ValidationError("School, date, grade_level, title, and link are required")
        school = validate_school(body["school"])
        grade_level = validate_grade_level(body["grade_level"])

        material = Material(
            school=school,
            date=format_date(body["date"]),
            grade_level=grade_level,
            title=body["title"],
            link=body["link"],
            description=body.get("description") or "",
            password=body.get("password") or "",
        )
        return self.repo.add(material).to_dict()

    def update_material(self, raw_id, body: dict) -> dict:
        """Replace title, link, description and password of a material."""
        if not body.get("title") or not body.get("link"):
            raise ValidationError("Title and link are required")
        material_id = parse_id(raw_id, "material")

        updated = self.repo.update(
            material_id,
            title=body["title"],
            link=body["link"],
            description=body.get("description") or "",
            password=body.get("password") or "",
        )
        if updated is None:
            raise NotFoundError("Material not found")
        return updated.to_dict()

    def delete_material(self, raw_id) -> dict:
        material_id = parse_id(raw_id, "material")
        if not self.repo.delete(material_id):
            raise NotFoundError("Material not found")
        return {"success": True, "id": material_id}
