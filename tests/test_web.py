"""
Tests for the server-rendered post list.
"""

import httpx


def test_page_lists_every_post(client, fake_db):
    user = fake_db.add_user()
    fake_db.add_post(user["id"], title="First title", content="First body")
    fake_db.add_post(user["id"], title="Second title", content="Second body")

    response = client.get("/")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    html = response.text
    assert "<h1>Blog Posts</h1>" in html
    assert html.index("First title") < html.index("Second title")
    assert "Second body" in html


def test_page_escapes_post_content(client, fake_db):
    user = fake_db.add_user()
    fake_db.add_post(user["id"], title="<script>alert(1)</script>", content="a & b")

    html = client.get("/").text

    assert "<script>alert(1)</script>" not in html
    assert "&lt;script&gt;" in html
    assert "a &amp; b" in html


def test_page_renders_notice_when_database_is_down(client, fake_db):
    fake_db.outage = httpx.ConnectError("connection refused")

    response = client.get("/")

    assert response.status_code == 200
    assert "Posts could not be loaded right now." in response.text
    assert "connection refused" not in response.text


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
