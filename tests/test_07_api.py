#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""Tests for the HTTP endpoints and the editing-session store."""
# -----------------------------------------------------------------------------

from __future__ import annotations

import pytest
from fastapi import HTTPException
from httpx import AsyncClient

from wikihl.services.sessions import SessionStore


# ── System ────────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    resp = await client.get("/api/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["app"] == "wikihl"


@pytest.mark.asyncio
async def test_unknown_api_path_is_json_404(client: AsyncClient):
    resp = await client.get("/api/v1/nothing-here")
    assert resp.status_code == 404
    assert "detail" in resp.json()


# ── Highlighting ──────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_highlight(client: AsyncClient):
    resp = await client.post("/api/v1/highlight", json={"content": "== A ==\n[[B]]"})
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["line_count"] == 2
    assert data["html"].startswith('<span class="wt-section-header wt-section-2">')
    assert '<span class="wt-link-pagename">B</span>' in data["html"]


@pytest.mark.asyncio
async def test_highlight_escapes(client: AsyncClient):
    resp = await client.post("/api/v1/highlight", json={"content": "<script>x</script>"})
    assert "<script>" not in resp.json()["html"]


@pytest.mark.asyncio
async def test_tokenize(client: AsyncClient):
    resp = await client.post("/api/v1/tokenize", json={"content": "== A ==\nplain"})
    assert resp.status_code == 200, resp.text
    lines = resp.json()["lines"]
    assert lines[0] == [
        {"text": "== A ==", "kind": "section_header", "class": "wt-section-header wt-section-2"},
    ]
    assert lines[1] == [{"text": "plain", "kind": "plain", "class": ""}]


@pytest.mark.asyncio
async def test_tokenize_line_carries_state(client: AsyncClient):
    resp = await client.post("/api/v1/tokenize/line", json={"line": "<!-- open", "is_first_line": True})
    assert resp.status_code == 200, resp.text
    state = resp.json()["state"]
    assert state["in_multiline_comment"] is True

    resp = await client.post("/api/v1/tokenize/line", json={"line": "done --> ''x''", "state": state})
    data = resp.json()
    assert [t["kind"] for t in data["tokens"]] == ["comment", "plain", "em"]
    assert data["state"]["in_multiline_comment"] is False
    assert data["state"]["comment_buffer"] == ""


@pytest.mark.asyncio
async def test_tokenize_line_rejects_bad_state(client: AsyncClient):
    resp = await client.post("/api/v1/tokenize/line", json={"line": "x", "state": {"template_depth": -1}})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_content_limit(client: AsyncClient, monkeypatch):
    from wikihl.core.config import get_settings
    monkeypatch.setenv("MAX_CONTENT_CHARS", "10")
    get_settings.cache_clear()
    resp = await client.post("/api/v1/highlight", json={"content": "x" * 11})
    assert resp.status_code == 422
    resp = await client.post("/api/v1/highlight", json={"content": "x" * 10})
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_styles(client: AsyncClient):
    resp = await client.get("/api/v1/styles")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/css")
    assert ".wt-link-bracket" in resp.text


# ── Editing sessions ──────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_session_lifecycle(client: AsyncClient):
    resp = await client.post("/api/v1/sessions")
    assert resp.status_code == 201, resp.text
    sid = resp.json()["id"]

    resp = await client.put(f"/api/v1/sessions/{sid}", json={"content": "a\n[[b]]\nc"})
    assert resp.status_code == 200, resp.text
    assert resp.json()["lines_tokenized"] == 3
    assert len(resp.json()["html"]) == 3

    resp = await client.put(f"/api/v1/sessions/{sid}", json={"content": "a\n[[b]]\nc"})
    assert resp.json()["lines_tokenized"] == 0

    resp = await client.put(f"/api/v1/sessions/{sid}", json={"content": "a\n[[x]]\nc"})
    data = resp.json()
    assert data["lines_tokenized"] == 1
    assert '<span class="wt-link-pagename">x</span>' in data["html"][1]

    resp = await client.delete(f"/api/v1/sessions/{sid}")
    assert resp.status_code == 200
    assert resp.json()["ok"] is True

    resp = await client.put(f"/api/v1/sessions/{sid}", json={"content": "a"})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_unknown_session(client: AsyncClient):
    resp = await client.delete("/api/v1/sessions/missing")
    assert resp.status_code == 404
    assert "missing" in resp.json()["detail"]


def test_session_store_evicts_least_recently_used():
    store = SessionStore(max_sessions=2)
    a = store.create()
    b = store.create()
    store.get(a)
    c = store.create()
    assert len(store) == 2
    assert a in store and c in store
    assert b not in store
    with pytest.raises(HTTPException) as exc:
        store.get(b)
    assert exc.value.status_code == 404


def test_session_store_update_counts_lines():
    store = SessionStore()
    sid = store.create()
    html, count = store.update(sid, "== A ==\nb")
    assert count == 2
    assert html[1] == "b"


@pytest.mark.asyncio
async def test_configured_limit_above_default(client: AsyncClient, monkeypatch):
    from wikihl.core.config import get_settings
    monkeypatch.setenv("MAX_CONTENT_CHARS", "2000000")
    get_settings.cache_clear()
    resp = await client.post("/api/v1/highlight", json={"content": "x" * 1_000_001})
    assert resp.status_code == 200, resp.text[:200]
