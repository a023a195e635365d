"""
Hosted database (Supabase) client.

Table access goes through `postgrest.AsyncPostgrestClient`, the REST client
the Supabase SDK uses for `from_(...)` queries. This module owns the shared
client: FastAPI opens it on startup and closes it on shutdown (see
`api/main.py`). Repositories build queries on `client()` and run them with
`execute()`, which turns library and transport failures into `SupabaseError`.
"""

from __future__ import annotations

from typing import Any

import httpx
from postgrest import AsyncPostgrestClient, DEFAULT_POSTGREST_CLIENT_HEADERS
from postgrest.exceptions import APIError as PostgrestAPIError

from . import settings

REST_PATH = "/rest/v1"

# PostgREST could not reach or use the database behind it.
UNAVAILABLE_CODES = {"PGRST000", "PGRST001", "PGRST002"}


# Upstream failures are explicit and separable from other runtime errors.
class SupabaseError(RuntimeError):
    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        code: str | None = None,
        details: str | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details
        self.hint = hint


class SupabaseUnavailableError(SupabaseError):
    """
    The service could not be reached, timed out, or answered with a 5xx.
    """


_client: AsyncPostgrestClient | None = None


def _headers(key: str) -> dict[str, str]:
    return {
        **DEFAULT_POSTGREST_CLIENT_HEADERS,
        "apikey": key,
        "Authorization": f"Bearer {key}",
    }


async def init_client(
    *,
    base_url: str | None = None,
    key: str | None = None,
    timeout_s: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> None:
    global _client
    if _client is not None:
        return None

    root = (base_url or settings.supabase_url()).strip().rstrip("/")
    if not root:
        raise SupabaseError("SUPABASE_URL is empty.")

    http_client = httpx.AsyncClient(
        timeout=timeout_s if timeout_s is not None else settings.supabase_timeout_s(),
        follow_redirects=True,
        transport=transport,
    )
    _client = AsyncPostgrestClient(
        f"{root}{REST_PATH}",
        headers=_headers(key or settings.supabase_key()),
        http_client=http_client,
    )


async def close_client() -> None:
    global _client
    if _client is None:
        return None
    await _client.aclose()
    _client = None


def client() -> AsyncPostgrestClient:
    if _client is None:
        raise RuntimeError("Supabase client is not initialized. Call init_client() on startup.")
    return _client


def _status_from_code(code: Any) -> int | None:
    # The library reports the HTTP status as `code` when the body is not JSON.
    text = str(code) if code is not None else ""
    if len(text) == 3 and text.isdigit():
        return int(text)
    return None


def _from_api_error(exc: PostgrestAPIError) -> SupabaseError:
    code = str(exc.code) if exc.code is not None else None
    status_code = _status_from_code(exc.code)
    message = str(exc.message or "Database request failed.")
    details = str(exc.details)[:500] if exc.details is not None else None

    unavailable = code in UNAVAILABLE_CODES or (status_code is not None and status_code >= 500)
    error_type = SupabaseUnavailableError if unavailable else SupabaseError
    return error_type(
        message,
        status_code=status_code,
        code=code,
        details=details,
        hint=exc.hint,
    )


async def execute(query: Any) -> list[dict[str, Any]]:
    """
    Run a postgrest query builder once and return its rows.
    """
    # Requests are single-shot; the library would otherwise retry GETs on 503.
    query = query.retry(False)
    try:
        response = await query.execute()
    except PostgrestAPIError as exc:
        raise _from_api_error(exc) from exc
    except httpx.TimeoutException as exc:
        raise SupabaseUnavailableError("Database request timed out.") from exc
    except httpx.TransportError as exc:
        raise SupabaseUnavailableError(f"Database request failed: {exc}") from exc

    data = response.data
    if not isinstance(data, list):
        raise SupabaseError("Database returned a non-list body.")
    return data


def first(rows: list[dict[str, Any]]) -> dict[str, Any] | None:
    return rows[0] if rows else None
