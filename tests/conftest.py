"""
Shared fixtures.

The hosted database is replaced by `FakePostgrest`, an in-memory stand-in for
the PostgREST interface. It is mounted as the `httpx.MockTransport` of the
postgrest client's HTTP session, so the app runs through every layer
(router, service, repository, postgrest client).
"""

import asyncio
import json
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from core import supabase

TEST_URL = "http://db.test"
TEST_KEY = "test-service-key"

UUID_COLUMNS = {"id", "user_id"}
UNIQUE_COLUMNS = {"users": ("username", "email"), "posts": ()}
REQUIRED_COLUMNS = {
    "users": ("username", "email", "password_hash"),
    "posts": ("user_id", "title", "content"),
}


def _error(status_code: int, code: str, message: str) -> httpx.Response:
    return httpx.Response(
        status_code,
        json={"code": code, "message": message, "details": None, "hint": None},
    )


class FakePostgrest:
    """In-memory PostgREST covering the calls the app makes."""

    def __init__(self, key: str = TEST_KEY):
        self.key = key
        self.tables: Dict[str, List[Dict[str, Any]]] = {"users": [], "posts": []}
        self.requests: List[httpx.Request] = []
        self.outage: Optional[Exception] = None
        self.status_override: Optional[httpx.Response] = None

    # ------------------------------------------------------------------
    # Seeding helpers
    # ------------------------------------------------------------------

    def add_user(self, username: str = "alice", email: str = "alice@example.com") -> Dict[str, Any]:
        row = {
            "id": str(uuid.uuid4()),
            "username": username,
            "email": email,
            "password_hash": "not-a-real-hash",
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        self.tables["users"].append(row)
        return row

    def add_post(self, user_id: str, title: str = "Hello", content: str = "First post") -> Dict[str, Any]:
        row = {
            "id": str(uuid.uuid4()),
            "user_id": user_id,
            "title": title,
            "content": content,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        self.tables["posts"].append(row)
        return row

    # ------------------------------------------------------------------
    # Transport handler
    # ------------------------------------------------------------------

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.outage is not None:
            raise self.outage
        if self.status_override is not None:
            return self.status_override
        if request.headers.get("apikey") != self.key:
            return httpx.Response(401, json={"message": "Invalid API key"})

        prefix = "/rest/v1/"
        if not request.url.path.startswith(prefix):
            return httpx.Response(404, json={"message": "Not found"})
        table = request.url.path[len(prefix):]
        if table not in self.tables:
            return _error(404, "42P01", f'relation "public.{table}" does not exist')

        if request.method == "GET":
            return self._select(table, request)
        if request.method == "POST":
            return self._insert(table, request)
        return httpx.Response(405, json={"message": "Method not allowed"})

    def _project(self, row: Dict[str, Any], columns: str) -> Dict[str, Any]:
        if columns.strip() == "*":
            return dict(row)
        return {col: row.get(col) for col in columns.split(",")}

    def _select(self, table: str, request: httpx.Request) -> httpx.Response:
        columns = "*"
        limit = None
        rows = list(self.tables[table])
        for name, value in request.url.params.multi_items():
            if name == "select":
                columns = value
            elif name == "limit":
                limit = int(value)
            elif name == "order":
                continue
            elif value.startswith("eq."):
                wanted = value[3:]
                if name in UUID_COLUMNS:
                    try:
                        uuid.UUID(wanted)
                    except ValueError:
                        return _error(400, "22P02", f'invalid input syntax for type uuid: "{wanted}"')
                rows = [r for r in rows if str(r.get(name)) == wanted]
        if limit is not None:
            rows = rows[:limit]
        return httpx.Response(200, json=[self._project(r, columns) for r in rows])

    def _insert(self, table: str, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        for col in REQUIRED_COLUMNS[table]:
            if body.get(col) in (None, ""):
                return _error(400, "23502", f'null value in column "{col}" violates not-null constraint')
        for col in UNIQUE_COLUMNS[table]:
            if any(r.get(col) == body[col] for r in self.tables[table]):
                return _error(409, "23505", f'duplicate key value violates unique constraint "{table}_{col}_key"')
        if table == "posts":
            if not any(u["id"] == body["user_id"] for u in self.tables["users"]):
                return _error(
                    409,
                    "23503",
                    'insert or update on table "posts" violates foreign key constraint "posts_user_id_fkey"',
                )

        row = dict(body)
        row["id"] = str(uuid.uuid4())
        row["created_at"] = datetime.now(timezone.utc).isoformat()
        self.tables[table].append(row)

        columns = request.url.params.get("select", "*")
        if "return=representation" in request.headers.get("prefer", ""):
            return httpx.Response(201, json=[self._project(row, columns)])
        return httpx.Response(201)


@pytest.fixture(autouse=True)
def _env(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", TEST_URL)
    monkeypatch.setenv("SUPABASE_KEY", TEST_KEY)
    monkeypatch.setenv("JWT_SECRET", "test-jwt-secret-with-at-least-32-bytes")
    monkeypatch.setenv("BCRYPT_ROUNDS", "4")


@pytest.fixture
def fake_db():
    return FakePostgrest()


@pytest.fixture
def supabase_client(fake_db):
    """Install a postgrest client backed by the fake; closed after the test."""
    asyncio.run(
        supabase.init_client(
            base_url=TEST_URL,
            key=TEST_KEY,
            transport=httpx.MockTransport(fake_db.handle),
        )
    )
    yield supabase.client()
    asyncio.run(supabase.close_client())


@pytest.fixture
def client(supabase_client):
    """FastAPI test client talking to the fake database."""
    from main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def registered_user(client):
    """Register a user through the API; returns the auth response body."""
    response = client.post(
        "/auth/register",
        json={
            "username": "alice",
            "email": "Alice@Example.com",
            "password": "correct-horse-battery",
        },
    )
    assert response.status_code == 201, response.text
    return response.json()
