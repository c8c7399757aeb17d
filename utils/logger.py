"""
utils/logger.py
---------------
Logging for the API process.

Every line carries the request it was written for ("GET /api/events"),
or "-" outside a request. The HTTP middleware wraps each request in
`request_scope()`; everything else just calls `get_logger(__name__)`.
"""

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar

from config import LOG_LEVEL

_FORMAT = "%(asctime)s | %(levelname)-8s | %(request)s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# uvicorn installs its own handlers; route its records through ours instead
_SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

_current_request: ContextVar[str] = ContextVar("current_request", default="-")
_configured = False


class RequestFilter(logging.Filter):
    """Stamp each record with the request being served."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request = _current_request.get()
        return True


@contextmanager
def request_scope(method: str, path: str):
    """Tag log lines written inside the block with `method path`."""
    token = _current_request.set(f"{method} {path}")
    try:
        yield
    finally:
        _current_request.reset(token)


def _configure() -> None:
    global _configured
    if _configured:
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestFilter())
    handler.setFormatter(logging.Formatter(_FORMAT, _DATE_FORMAT))

    root = logging.getLogger()
    root.setLevel(getattr(logging, LOG_LEVEL.upper(), logging.INFO))
    root.addHandler(handler)

    for name in _SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Named logger writing through the shared stdout handler."""
    _configure()
    return logging.getLogger(name)
