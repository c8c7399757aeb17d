"""
handlers/envelope.py
---------------------
Response envelope: CORS headers on every response, JSON encoding, and
request-body parsing that never fails.
"""

import json

from fastapi import Request
from fastapi.responses import JSONResponse, Response

ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
ALLOWED_HEADERS = ["Content-Type", "Accept"]
PREFLIGHT_MAX_AGE = 86400


def cors_headers() -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": ", ".join(ALLOWED_METHODS),
        "Access-Control-Allow-Headers": ", ".join(ALLOWED_HEADERS),
        "Access-Control-Max-Age": str(PREFLIGHT_MAX_AGE),
    }


def cors_response(payload=None, status: int = 200) -> Response:
    """
    Build a response carrying the CORS headers.

    Dicts and lists are sent as JSON, strings verbatim, and None as an
    empty body.
    """
    headers = cors_headers()
    if payload is None:
        return Response(status_code=status, headers=headers)
    if isinstance(payload, (dict, list)):
        return JSONResponse(payload, status_code=status, headers=headers)
    return Response(str(payload), status_code=status, headers=headers)


async def json_body(request: Request) -> dict:
    """
    FastAPI dependency: the request body as a dict.

    A missing, malformed or non-object body counts as an empty object, so
    the service's required-field checks produce the error.
    """
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return {}
    return body if isinstance(body, dict) else {}
