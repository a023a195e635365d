"""
Direct Postgres access (asyncpg) for schema management.

Request handlers never use this module; they go through the hosted REST
interface in `core/supabase.py`. DDL cannot be sent over that interface, so
`core/migrate.py` connects here with `DATABASE_URL`.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from . import settings

_pool: asyncpg.Pool | None = None


def _split_database_url(url: str) -> tuple[str, str | None]:
    """
    Strip `sslmode` from the query string; asyncpg takes it as `ssl=`.
    """
    parts = urlsplit(url)
    if not parts.query:
        return url, None

    pairs = parse_qsl(parts.query, keep_blank_values=True)
    sslmode = next((v for (k, v) in pairs if k == "sslmode"), None)
    params = [(k, v) for (k, v) in pairs if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment)), sslmode


def database_url() -> str:
    return _split_database_url(settings.require("DATABASE_URL"))[0]


def database_sslmode() -> str | None:
    explicit = settings.env_str("DATABASE_SSLMODE")
    if explicit:
        return explicit
    return _split_database_url(settings.env_str("DATABASE_URL"))[1]


async def init_pool() -> None:
    global _pool
    if _pool is not None:
        return None
    _pool = await asyncpg.create_pool(
        dsn=database_url(),
        ssl=database_sslmode(),
        min_size=1,
        max_size=2,
        command_timeout=60,
    )


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return None
    await _pool.close()
    _pool = None


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise RuntimeError("DB pool is not initialized. Call init_pool() first.")
    return _pool


async def execute(sql: str, *args: Any) -> None:
    """
    Run a statement (DDL or a multi-statement script). No result returned.
    """
    await pool().execute(sql, *args)
