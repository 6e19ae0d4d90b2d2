#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pydantic v2 schemas for request validation and response serialisation.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from wikihl.services.tokens import Token, TokenizerState


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Shared
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class OKResponse(BaseModel):
    ok: bool = True
    message: str = "success"


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Tokens
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TokenOut(BaseModel):
    text: str
    kind: str
    css_class: str = Field(alias="class", serialization_alias="class")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_token(cls, token: Token) -> "TokenOut":
        return cls.model_validate(token.to_dict())


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Highlighting
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class HighlightRequest(BaseModel):
    content: str = ""


class HighlightResponse(BaseModel):
    html: str
    line_count: int


# -----------------------------------------------------------------------------

class TokenizeResponse(BaseModel):
    lines: list[list[TokenOut]]


class LineTokenizeRequest(BaseModel):
    line: str = ""
    is_first_line: bool = False
    state: Optional[TokenizerState] = None


class LineTokenizeResponse(BaseModel):
    tokens: list[TokenOut]
    state: TokenizerState


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Editing sessions
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class SessionCreated(BaseModel):
    id: str


class SessionUpdate(BaseModel):
    content: str = ""


class SessionUpdateResponse(BaseModel):
    html: list[str]
    lines_tokenized: int
