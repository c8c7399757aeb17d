"""
main.py
-------
Entry point for the WLWV Life Calendar API.

Responsibilities:
    - Build the FastAPI application around one Database handle.
    - Wrap every response in the CORS envelope and answer preflights.
    - Map service errors to HTTP status codes.
    - Serve the static frontend for non-API paths when configured.
"""

from contextlib import asynccontextmanager
from pathlib import Path

import psycopg2
import uvicorn
from fastapi import APIRouter, FastAPI, Request
from fastapi.routing import APIRoute
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import API_NAME, API_VERSION, HOST, PORT, STATIC_DIR
from db.connection import Database
from handlers import calendar_handler, event_handler, material_handler, system_handler
from handlers.envelope import cors_headers, cors_response
from utils.errors import CalendarError
from utils.logger import get_logger, request_scope

logger = get_logger(__name__)

ROUTERS = [
    system_handler.router,
    calendar_handler.router,
    event_handler.router,
    material_handler.router,
]

API_FALLBACK_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"]


def validate_routes(routers: list[APIRouter]) -> int:
    """
    Refuse to start when two handlers claim the same method and path.

    Returns:
        The number of (method, path) pairs registered.

    Raises:
        RuntimeError: On the first duplicate found.
    """
    seen: dict[tuple[str, str], str] = {}
    for router in routers:
        for route in router.routes:
            if not isinstance(route, APIRoute):
                continue
            for method in route.methods:
                key = (method, route.path)
                if key in seen:
                    raise RuntimeError(
                        f"Duplicate route {method} {route.path}: "
                        f"{seen[key]} and {route.endpoint.__name__}"
                    )
                seen[key] = route.endpoint.__name__
    logger.info(f"Registered {len(seen)} API routes")
    return len(seen)


@asynccontextmanager
async def lifespan(app: FastAPI):
    database: Database = app.state.database
    if database.configured:
        try:
            database.has_column("materials", "password")
        except (CalendarError, psycopg2.Error) as e:
            logger.warning(f"Database not reachable at startup: {e}")
    logger.info(f"🚀 {API_NAME} is running!")
    yield
    database.close()
    logger.info(f"{API_NAME} stopped.")


def create_app(database: Database | None = None, static_dir: str = STATIC_DIR) -> FastAPI:
    """
    Build the application.

    Args:
        database: Pool handle to use; defaults to one built from config.py.
        static_dir: Directory served for non-API paths, if any.
    """
    app = FastAPI(
        title=API_NAME,
        version=API_VERSION,
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.database = database or Database.from_env()

    # ── 1. CORS envelope and catch-all ────────────────────
    @app.middleware("http")
    async def cors_envelope(request: Request, call_next):
        if request.method == "OPTIONS":
            return cors_response()
        with request_scope(request.method, request.url.path):
            try:
                response = await call_next(request)
            except Exception as e:
                logger.exception(f"API Error: {e}")
                return cors_response({"error": "Internal server error", "message": str(e)}, 500)
        response.headers.update(cors_headers())
        return response

    # ── 2. Error mapping ──────────────────────────────────
    @app.exception_handler(CalendarError)
    async def calendar_error_handler(request: Request, exc: CalendarError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return cors_response(exc.to_dict(), exc.status_code)

    @app.exception_handler(psycopg2.Error)
    async def storage_error_handler(request: Request, exc: psycopg2.Error):
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
        return cors_response({"error": str(exc).strip()}, 500)

    @app.exception_handler(StarletteHTTPException)
    async def not_found_handler(request: Request, exc: StarletteHTTPException):
        path = request.url.path
        if exc.status_code in (404, 405) and (path == "/api" or path.startswith("/api/")):
            return cors_response(
                {"error": "Not found", "path": path, "method": request.method}, 404
            )
        return cors_response({"error": exc.detail}, exc.status_code)

    # ── 3. Routes ─────────────────────────────────────────
    validate_routes(ROUTERS)
    for router in ROUTERS:
        app.include_router(router)

    # Unmatched /api paths stay JSON 404s even when a static site is mounted
    @app.api_route("/api", methods=API_FALLBACK_METHODS, include_in_schema=False)
    @app.api_route("/api/{rest:path}", methods=API_FALLBACK_METHODS, include_in_schema=False)
    async def api_not_found(request: Request):
        raise StarletteHTTPException(status_code=404)

    if static_dir and Path(static_dir).is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
        logger.info(f"Serving static assets from {static_dir}")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=HOST, port=PORT, log_config=None)
