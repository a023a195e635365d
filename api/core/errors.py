"""
API error taxonomy.

Every error a handler raises is one of the `APIError` kinds below. The
response body is `{"detail": ..., "error": <kind>}`; upstream messages are
logged and never sent to the caller.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse

from . import supabase

logger = logging.getLogger(__name__)

FOREIGN_KEY_VIOLATION = "23503"
NOT_NULL_VIOLATION = "23502"
UNIQUE_VIOLATION = "23505"
INVALID_TEXT_REPRESENTATION = "22P02"
NO_ROWS = "PGRST116"


class APIError(HTTPException):
    status = 500
    kind = "internal"

    def __init__(self, detail: str, *, headers: dict[str, str] | None = None) -> None:
        super().__init__(status_code=self.status, detail=detail, headers=headers)


class ValidationError(APIError):
    status = 422
    kind = "validation"


class UnauthorizedError(APIError):
    status = 401
    kind = "unauthorized"

    def __init__(self, detail: str) -> None:
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"})


class NotFoundError(APIError):
    status = 404
    kind = "not_found"


class ConflictError(APIError):
    status = 409
    kind = "conflict"


class UpstreamError(APIError):
    status = 502
    kind = "upstream_error"


class UpstreamUnavailableError(APIError):
    status = 503
    kind = "upstream_unavailable"


def from_upstream(exc: supabase.SupabaseError, *, resource: str) -> APIError:
    """
    Translate a hosted database failure into an API error for `resource`.
    """
    logger.warning(
        "upstream_failed resource=%s status=%s code=%s message=%s",
        resource,
        exc.status_code,
        exc.code,
        exc.message,
    )

    if isinstance(exc, supabase.SupabaseUnavailableError):
        return UpstreamUnavailableError("Database is unavailable.")

    code = exc.code or ""
    if code == FOREIGN_KEY_VIOLATION:
        return ValidationError(f"{resource} references a row that does not exist.")
    if code == NOT_NULL_VIOLATION:
        return ValidationError(f"{resource} is missing a required field.")
    if code == INVALID_TEXT_REPRESENTATION:
        return ValidationError(f"{resource} has a malformed field.")
    if code == UNIQUE_VIOLATION:
        return ConflictError(f"{resource} already exists.")
    if code == NO_ROWS:
        return NotFoundError(f"{resource} not found.")
    return UpstreamError("Database request failed.")


async def api_error_handler(_: Request, exc: APIError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "error": exc.kind},
        headers=exc.headers,
    )
