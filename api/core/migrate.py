"""
Apply `schema.sql` to the database named by `DATABASE_URL`.

Usage (from `api/`):
    python -m core.migrate
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from . import db
from .logging_config import configure_logging

SCHEMA_PATH = Path(__file__).with_name("schema.sql")

logger = logging.getLogger(__name__)


def load_schema(path: Path = SCHEMA_PATH) -> str:
    sql = path.read_text(encoding="utf-8").strip()
    if not sql:
        raise RuntimeError(f"Schema file is empty: {path}")
    return sql


async def run_migrations(path: Path = SCHEMA_PATH) -> None:
    sql = load_schema(path)
    await db.init_pool()
    try:
        logger.info("migration_start schema=%s", path.name)
        await db.execute(sql)
        logger.info("migration_complete schema=%s", path.name)
    finally:
        await db.close_pool()


def main() -> None:
    configure_logging()
    asyncio.run(run_migrations())


if __name__ == "__main__":
    main()
