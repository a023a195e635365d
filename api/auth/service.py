"""
Auth business logic.
"""

from __future__ import annotations

import logging

from starlette.concurrency import run_in_threadpool

from core import errors, supabase

from . import repository, schemas, security

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password."


def _to_user_response(user_row: dict) -> schemas.UserResponse:
    return schemas.UserResponse(
        id=user_row["id"],
        username=str(user_row["username"]),
        email=str(user_row["email"]),
        created_at=user_row["created_at"],
    )


def _to_public_user(user_row: dict) -> schemas.PublicUserResponse:
    return schemas.PublicUserResponse(
        id=user_row["id"],
        username=str(user_row["username"]),
        created_at=user_row["created_at"],
    )


def _issue_token(user_row: dict) -> schemas.TokenResponse:
    access_token = security.build_access_token(user_id=str(user_row["id"]))
    return schemas.TokenResponse(access_token=access_token)


async def register(payload: schemas.RegisterRequest) -> schemas.AuthResponse:
    try:
        if await repository.get_user_by_email(payload.email) is not None:
            raise errors.ConflictError("Email is already registered.")
        if await repository.get_user_by_username(payload.username) is not None:
            raise errors.ConflictError("Username is already taken.")
    except supabase.SupabaseError as exc:
        raise errors.from_upstream(exc, resource="User") from exc

    try:
        password_hash = await run_in_threadpool(security.hash_password, payload.password)
    except security.AuthSecurityError as exc:
        raise errors.ValidationError(str(exc)) from exc

    try:
        user_row = await repository.create_user(
            username=payload.username,
            email=payload.email,
            password_hash=password_hash,
        )
    except supabase.SupabaseError as exc:
        # A concurrent registration can still trip the unique constraint.
        raise errors.from_upstream(exc, resource="User") from exc

    logger.info("user_registered user_id=%s", user_row["id"])
    return schemas.AuthResponse(user=_to_user_response(user_row), tokens=_issue_token(user_row))


async def login(payload: schemas.LoginRequest) -> schemas.AuthResponse:
    try:
        user_row = await repository.get_user_by_email(payload.email)
    except supabase.SupabaseError as exc:
        raise errors.from_upstream(exc, resource="User") from exc

    if user_row is None:
        raise errors.UnauthorizedError(INVALID_CREDENTIALS)

    is_valid = await run_in_threadpool(
        security.verify_password,
        payload.password,
        str(user_row.get("password_hash") or ""),
    )
    if not is_valid:
        logger.info("login_rejected user_id=%s", user_row["id"])
        raise errors.UnauthorizedError(INVALID_CREDENTIALS)

    return schemas.AuthResponse(user=_to_user_response(user_row), tokens=_issue_token(user_row))


async def get_user_from_access_token(access_token: str) -> dict:
    try:
        payload = security.decode_access_token(access_token)
    except security.AuthSecurityError as exc:
        raise errors.UnauthorizedError(str(exc)) from exc

    subject = str(payload.get("sub") or "").strip()
    if not subject:
        raise errors.UnauthorizedError("Invalid access token subject.")

    try:
        user_row = await repository.get_user_by_id(
            subject,
            columns="id,username,email,created_at",
        )
    except supabase.SupabaseError as exc:
        if exc.code == errors.INVALID_TEXT_REPRESENTATION:
            raise errors.UnauthorizedError("Invalid access token subject.") from exc
        raise errors.from_upstream(exc, resource="User") from exc

    if user_row is None:
        raise errors.UnauthorizedError("User not found.")
    return user_row


async def me(current_user: dict) -> schemas.UserResponse:
    return _to_user_response(current_user)


async def get_public_user(user_id: str) -> schemas.PublicUserResponse:
    try:
        user_row = await repository.get_user_by_id(user_id)
    except supabase.SupabaseError as exc:
        raise errors.from_upstream(exc, resource="User") from exc

    if user_row is None:
        raise errors.NotFoundError("User not found.")
    return _to_public_user(user_row)
