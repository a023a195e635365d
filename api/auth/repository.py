"""
User persistence helpers (hosted database).
"""

from __future__ import annotations

from core import supabase

USERS_TABLE = "users"
PRIVATE_COLUMNS = "id,username,email,password_hash,created_at"
PUBLIC_COLUMNS = "id,username,created_at"


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def normalize_username(username: str) -> str:
    return (username or "").strip()


async def _find_one(column: str, value: str, *, columns: str) -> dict | None:
    query = supabase.client().from_(USERS_TABLE).select(columns).eq(column, value).limit(1)
    return supabase.first(await supabase.execute(query))


async def create_user(*, username: str, email: str, password_hash: str) -> dict:
    query = (
        supabase.client()
        .from_(USERS_TABLE)
        .insert(
            {
                "username": normalize_username(username),
                "email": normalize_email(email),
                "password_hash": password_hash,
            }
        )
        .select("id,username,email,created_at")
    )
    row = supabase.first(await supabase.execute(query))
    if row is None:
        raise supabase.SupabaseError("Insert into users returned no row.")
    return row


async def get_user_by_email(email: str) -> dict | None:
    return await _find_one("email", normalize_email(email), columns=PRIVATE_COLUMNS)


async def get_user_by_username(username: str) -> dict | None:
    return await _find_one("username", normalize_username(username), columns=PUBLIC_COLUMNS)


async def get_user_by_id(user_id: str, *, columns: str = PUBLIC_COLUMNS) -> dict | None:
    return await _find_one("id", user_id, columns=columns)


async def user_exists(user_id: str) -> bool:
    return await _find_one("id", user_id, columns="id") is not None
