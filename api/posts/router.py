"""
Post API endpoints.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, status

from . import schemas, service

router = APIRouter()


@router.get("/posts", response_model=list[schemas.PostResponse])
async def list_posts() -> list[dict]:
    """
    Every stored post, in the order the database returns them.
    """
    return await service.list_posts()


@router.get("/posts/{post_id}", response_model=schemas.PostResponse)
async def get_post(post_id: UUID) -> dict:
    return await service.get_post(str(post_id))


@router.post(
    "/posts",
    response_model=schemas.PostResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_post(payload: schemas.PostCreate) -> dict:
    return await service.create_post(payload)
