"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from dotenv import load_dotenv

load_dotenv()


# ── Application ───────────────────────────────────────────
API_NAME: str = os.getenv("API_NAME", "WLWV Life Calendar API")
API_VERSION: str = os.getenv("API_VERSION", "3.0.0")
APP_ENV: str = os.getenv("APP_ENV", "production")
HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", "8000"))

# Directory with the built frontend; non-API paths are served from here.
STATIC_DIR: str = os.getenv("STATIC_DIR", "")

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# ── PostgreSQL ────────────────────────────────────────────
DB_HOST: str = os.getenv("DB_HOST", "")
DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
DB_NAME: str = os.getenv("DB_NAME", "calendar")
DB_USER: str = os.getenv("DB_USER", "calendar_user")
DB_PASS: str = os.getenv("DB_PASS", "")

DATABASE_URL: str = os.getenv("DATABASE_URL", "") or (
    f"postgresql://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
    if DB_HOST
    else ""
)

DB_POOL_MIN: int = int(os.getenv("DB_POOL_MIN", "1"))
DB_POOL_MAX: int = int(os.getenv("DB_POOL_MAX", "20"))
DB_CONNECT_TIMEOUT: int = int(os.getenv("DB_CONNECT_TIMEOUT", "10"))
DB_SSLMODE: str = os.getenv("DB_SSLMODE", "prefer")

# ── Domain ────────────────────────────────────────────────
SCHOOLS: tuple[str, ...] = ("wlhs", "wvhs")
SCHEDULES: tuple[str, ...] = ("A", "B")
GRADE_LEVELS: tuple[int, ...] = (9, 10, 11, 12)
