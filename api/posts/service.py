"""
Post business logic.
"""

from __future__ import annotations

import logging

from auth import repository as user_repository
from core import errors, supabase

from . import repository, schemas

logger = logging.getLogger(__name__)


async def list_posts() -> list[dict]:
    try:
        return await repository.list_posts()
    except supabase.SupabaseError as exc:
        raise errors.from_upstream(exc, resource="Post") from exc


async def get_post(post_id: str) -> dict:
    try:
        row = await repository.get_post(post_id)
    except supabase.SupabaseError as exc:
        raise errors.from_upstream(exc, resource="Post") from exc

    if row is None:
        raise errors.NotFoundError("Post not found.")
    return row


async def create_post(payload: schemas.PostCreate) -> dict:
    user_id = str(payload.user_id)
    try:
        if not await user_repository.user_exists(user_id):
            raise errors.ValidationError("user_id does not reference an existing user.")
        row = await repository.create_post(
            title=payload.title,
            content=payload.content,
            user_id=user_id,
        )
    except supabase.SupabaseError as exc:
        # The foreign key still guards against a user removed after the check.
        raise errors.from_upstream(exc, resource="Post") from exc

    logger.info("post_created post_id=%s user_id=%s", row["id"], user_id)
    return row
