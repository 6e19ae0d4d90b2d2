#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Editing sessions router
=======================
POST   /api/v1/sessions           — open a session
PUT    /api/v1/sessions/{id}      — send the current document, get per-line HTML
DELETE /api/v1/sessions/{id}      — close a session
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from fastapi import APIRouter, Request

from wikihl.routes.render import check_size
from wikihl.schemas import OKResponse, SessionCreated, SessionUpdate, SessionUpdateResponse
from wikihl.services.sessions import SessionStore


# -----------------------------------------------------------------------------

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _store(request: Request) -> SessionStore:
    return request.app.state.sessions


# -----------------------------------------------------------------------------

@router.post("", response_model=SessionCreated, status_code=201)
async def open_session(request: Request):
    return {"id": _store(request).create()}


# -----------------------------------------------------------------------------

@router.put("/{session_id}", response_model=SessionUpdateResponse)
async def update_session(session_id: str, data: SessionUpdate, request: Request):
    check_size(data.content)
    html, lines_tokenized = _store(request).update(session_id, data.content)
    return {"html": html, "lines_tokenized": lines_tokenized}


# -----------------------------------------------------------------------------

@router.delete("/{session_id}", response_model=OKResponse)
async def close_session(session_id: str, request: Request):
    _store(request).delete(session_id)
    return OKResponse(message=f"Session '{session_id}' closed")


# -----------------------------------------------------------------------------
