#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Highlighting endpoints
======================
POST /api/v1/highlight        — whole document → HTML
POST /api/v1/tokenize         — whole document → tokens per line
POST /api/v1/tokenize/line    — one line + prior state → tokens + next state
GET  /api/v1/styles           — default stylesheet
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import PlainTextResponse

from wikihl.core.config import get_settings
from wikihl.schemas import (
    HighlightRequest,
    HighlightResponse,
    LineTokenizeRequest,
    LineTokenizeResponse,
    TokenizeResponse,
    TokenOut,
)
from wikihl.services.renderer import WikitextHighlighter


# -----------------------------------------------------------------------------

router = APIRouter(tags=["highlight"])


def _highlighter(request: Request) -> WikitextHighlighter:
    return WikitextHighlighter(options=request.app.state.highlight_options)


def check_size(content: str) -> None:
    limit = get_settings().max_content_chars
    if len(content) > limit:
        raise HTTPException(
            status_code=422,
            detail=f"Content exceeds {limit} characters",
        )


# -----------------------------------------------------------------------------

@router.post("/highlight", response_model=HighlightResponse)
async def highlight(data: HighlightRequest, request: Request):
    """Return the highlighted HTML of a whole document, one line per source line."""
    check_size(data.content)
    html = _highlighter(request).highlight(data.content)
    return {"html": html, "line_count": data.content.count("\n") + 1}


# -----------------------------------------------------------------------------

@router.post("/tokenize", response_model=TokenizeResponse)
async def tokenize(data: HighlightRequest, request: Request):
    check_size(data.content)
    lines = _highlighter(request).tokenize(data.content)
    return {"lines": [[TokenOut.from_token(t) for t in line] for line in lines]}


# -----------------------------------------------------------------------------

@router.post("/tokenize/line", response_model=LineTokenizeResponse)
async def tokenize_line(data: LineTokenizeRequest, request: Request):
    """Tokenize one line starting from a previously exported state."""
    check_size(data.line)
    tokens, state = _highlighter(request).tokenize_line(
        data.line, data.is_first_line, data.state
    )
    return {"tokens": [TokenOut.from_token(t) for t in tokens], "state": state}


# -----------------------------------------------------------------------------

@router.get("/styles", response_class=PlainTextResponse)
async def styles(request: Request):
    return PlainTextResponse(_highlighter(request).styles(), media_type="text/css")


# -----------------------------------------------------------------------------
