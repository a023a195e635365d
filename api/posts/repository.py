"""
Post persistence (hosted database).

Each function is one query against the hosted database; no filtering,
ordering or paging beyond what the caller asks for.
"""

from __future__ import annotations

from core import supabase

POSTS_TABLE = "posts"
POST_COLUMNS = "id,user_id,title,content,created_at"


async def list_posts() -> list[dict]:
    query = supabase.client().from_(POSTS_TABLE).select(POST_COLUMNS)
    return await supabase.execute(query)


async def get_post(post_id: str) -> dict | None:
    query = supabase.client().from_(POSTS_TABLE).select(POST_COLUMNS).eq("id", post_id).limit(1)
    return supabase.first(await supabase.execute(query))


async def create_post(*, title: str, content: str, user_id: str) -> dict:
    query = (
        supabase.client()
        .from_(POSTS_TABLE)
        .insert({"title": title, "content": content, "user_id": user_id})
        .select(POST_COLUMNS)
    )
    row = supabase.first(await supabase.execute(query))
    if row is None:
        raise supabase.SupabaseError("Insert into posts returned no row.")
    return row
