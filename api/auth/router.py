"""
Auth and user API endpoints.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status

from . import dependencies, schemas, service

router = APIRouter()


@router.post(
    "/auth/register",
    response_model=schemas.AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(payload: schemas.RegisterRequest) -> schemas.AuthResponse:
    return await service.register(payload)


@router.post("/auth/login", response_model=schemas.AuthResponse)
async def login(payload: schemas.LoginRequest) -> schemas.AuthResponse:
    return await service.login(payload)


@router.get("/auth/me", response_model=schemas.UserResponse)
async def me(
    current_user: dict = Depends(dependencies.get_current_user),
) -> schemas.UserResponse:
    return await service.me(current_user)


@router.get("/users/{user_id}", response_model=schemas.PublicUserResponse)
async def get_user(user_id: UUID) -> schemas.PublicUserResponse:
    return await service.get_public_user(str(user_id))
