"""
handlers/material_handler.py
-----------------------------
Routes for grade-level materials.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from handlers.dependencies import get_material_service
from handlers.envelope import json_body
from services.material_service import MaterialService

router = APIRouter(prefix="/api/materials", tags=["materials"])


@router.get("")
def list_materials(
    school: Optional[str] = None,
    service: MaterialService = Depends(get_material_service),
):
    """All materials of one school, ordered by date, grade level and id."""
    return service.list_materials(school)


@router.post("")
def create_material(
    body: dict = Depends(json_body),
    service: MaterialService = Depends(get_material_service),
):
    return service.create_material(body)


@router.put("/{material_id}")
def update_material(
    material_id: str,
    body: dict = Depends(json_body),
    service: MaterialService = Depends(get_material_service),
):
    return service.update_material(material_id, body)


@router.delete("/{material_id}")
def delete_material(material_id: str, service: MaterialService = Depends(get_material_service)):
    return service.delete_material(material_id)
