"""
handlers/system_handler.py
---------------------------
Service info, health check and the administrative schema initialization.
"""

from fastapi import APIRouter, Depends

from handlers.dependencies import get_system_service
from handlers.envelope import cors_response, json_body
from services.system_service import SystemService
from utils.errors import ConfigurationError

router = APIRouter(prefix="/api", tags=["system"])


@router.get("")
@router.get("/")
def api_info(service: SystemService = Depends(get_system_service)):
    """Name, version and the list of endpoints."""
    return service.info()


@router.get("/health")
def health(service: SystemService = Depends(get_system_service)):
    payload, status = service.health()
    return cors_response(payload, status)


@router.post("/init")
def init_database(
    body: dict = Depends(json_body),
    service: SystemService = Depends(get_system_service),
):
    """
    Create the tables and indexes if they are missing.

    Responds 400 when no database URL is known, and 500 with a translated
    message and suggestions when the database cannot be reached.
    """
    try:
        return service.initialize(body)
    except ConfigurationError as e:
        return cors_response({"error": e.message, "hasEnvVar": bool(service.env_url)}, 400)
