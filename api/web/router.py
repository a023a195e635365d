"""
Server-rendered post list.
"""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from core import errors
from posts import service as post_service

TEMPLATES_DIR = Path(__file__).with_name("templates")

logger = logging.getLogger(__name__)
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def post_list_page(request: Request) -> HTMLResponse:
    posts: list[dict] = []
    notice: str | None = None
    try:
        posts = await post_service.list_posts()
    except errors.APIError as exc:
        # Render the page anyway; the failure is already logged upstream.
        logger.warning("post_list_page_failed error=%s status=%s", exc.kind, exc.status_code)
        notice = "Posts could not be loaded right now."

    return templates.TemplateResponse(
        request,
        "posts.html",
        {"posts": posts, "notice": notice},
    )
