"""
Pydantic schemas for post endpoints.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

TITLE_MAX_LENGTH = 255
CONTENT_MAX_LENGTH = 50_000


class PostCreate(BaseModel):
    # Whitespace is stripped before the length limits are checked.
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    content: str = Field(..., min_length=1, max_length=CONTENT_MAX_LENGTH)
    user_id: UUID


class PostResponse(BaseModel):
    id: UUID
    user_id: UUID | None
    title: str
    content: str
    created_at: datetime
