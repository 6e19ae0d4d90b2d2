#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Leaf pattern recognizers
========================
Each matcher looks at ``line`` from the cursor ``pos`` and returns either the
token it consumes or ``None``.  Matchers are pure: a token of kind
``COMMENT_OPEN`` or ``EXT_TAG_START`` tells the tokenizer to enter the matching
multi-line state, the matcher itself never touches state.

``LEAF_MATCHERS`` fixes the precedence; the first match wins.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from functools import lru_cache
from typing import Optional

from .options import HighlightOptions
from .spans import find_balanced
from .tokens import Token, TokenKind


Matcher = Callable[[str, int, HighlightOptions], Optional[Token]]


# -----------------------------------------------------------------------------

_COMMENT_RE   = re.compile(r"<!--.*?-->", re.DOTALL)
_TAG_NAME_RE  = re.compile(r"</?([a-z][^\s>/]*)", re.IGNORECASE)
_FULL_TAG_RE  = re.compile(r"<[^>]+>")
_URL_BODY_RE  = re.compile(r"[^\s\u00a0{\[\]<>~]+")
_ENTITY_RE    = re.compile(r"&(?:[a-zA-Z]+|#\d+|#x[\da-fA-F]+);")
_SIGNATURE_RE = re.compile(r"~{3,5}")
_MAGIC_RE     = re.compile(r"__[A-Z]+__")

_URL_TRAILING = ").,'"


# -----------------------------------------------------------------------------

@lru_cache(maxsize=64)
def _close_tag_re(name: str) -> re.Pattern:
    return re.compile(f"</{re.escape(name)}>", re.IGNORECASE)


def find_close_tag(line: str, name: str, start: int = 0) -> Optional[re.Match]:
    """Locate ``</name>`` (any case) in *line* from *start*."""
    return _close_tag_re(name).search(line, start)


def protocol_end(text: str, opts: HighlightOptions) -> Optional[int]:
    """Length of the allowed protocol prefix of *text* including its ``:``, or None."""
    m = opts.url_protocols.match(text)
    if not m or m.end() == 0:
        return None
    end = m.end()
    if text[end - 1] in ":/":
        return end
    if text.startswith(":", end):
        return end + 1
    return None


# -----------------------------------------------------------------------------

def match_comment(line: str, pos: int, opts: HighlightOptions) -> Optional[Token]:
    """``<!-- … -->`` on one line, or an unterminated opener running to end of line."""
    if not line.startswith("<!--", pos):
        return None
    m = _COMMENT_RE.match(line, pos)
    if m:
        return Token(m.group(0), TokenKind.COMMENT)
    return Token(line[pos:], TokenKind.COMMENT_OPEN)


def match_tag(line: str, pos: int, opts: HighlightOptions) -> Optional[Token]:
    """HTML and extension tags.

    A content-preserving opening tag swallows its body up to ``</name>``; when
    the close tag is not on this line the rest of the line becomes an
    ``EXT_TAG_START`` token.
    """
    if not line.startswith("<", pos):
        return None
    m = _TAG_NAME_RE.match(line, pos)
    if not m:
        return None
    name = m.group(1).lower()
    is_close = line.startswith("</", pos)

    full = _FULL_TAG_RE.match(line, pos)
    if not full:
        return None
    tag = full.group(0)

    if name in opts.content_preserving_tags and not is_close and not tag.endswith("/>"):
        close = find_close_tag(line, name, full.end())
        if close:
            return Token(line[pos:close.end()], TokenKind.EXT_TAG_FULL, name)
        return Token(line[pos:], TokenKind.EXT_TAG_START, name)

    if name in opts.extension_tags:
        return Token(tag, TokenKind.EXT_TAG, name)
    return Token(tag, TokenKind.HTML_TAG)


def match_internal_link(line: str, pos: int, opts: HighlightOptions) -> Optional[Token]:
    if not line.startswith("[[", pos):
        return None
    balanced = find_balanced(line[pos:], "[[", "]]")
    if balanced:
        return Token(balanced.content, TokenKind.LINK_FULL)
    return None


def starts_external_link(line: str, pos: int, opts: HighlightOptions) -> bool:
    """True when ``line[pos]`` is ``[`` directly followed by an allowed protocol."""
    return (
        line.startswith("[", pos)
        and not line.startswith("[[", pos)
        and protocol_end(line[pos + 1:], opts) is not None
    )


def match_external_link(line: str, pos: int, opts: HighlightOptions) -> Optional[Token]:
    if not starts_external_link(line, pos, opts):
        return None
    close_idx = line.find("]", pos)
    if close_idx > -1:
        return Token(line[pos:close_idx + 1], TokenKind.EXTLINK_FULL)
    return None


def match_free_url(line: str, pos: int, opts: HighlightOptions) -> Optional[Token]:
    """Bare ``proto:…`` URLs, trimmed of trailing punctuation."""
    if pos > 0 and line[pos - 1].isalnum():
        return None
    rest = line[pos:]
    proto_len = protocol_end(rest, opts)
    if proto_len is None:
        return None
    body = _URL_BODY_RE.match(rest)
    if not body:
        return None
    url = body.group(0).rstrip(_URL_TRAILING)
    if len(url) <= proto_len:
        return None
    return Token(url, TokenKind.FREE_EXTLINK)


def match_entity(line: str, pos: int, opts: HighlightOptions) -> Optional[Token]:
    if not line.startswith("&", pos):
        return None
    m = _ENTITY_RE.match(line, pos)
    return Token(m.group(0), TokenKind.HTML_ENTITY) if m else None


def match_quotes(line: str, pos: int, opts: HighlightOptions) -> Optional[Token]:
    """Bold-italic, bold and italic runs; longest opener first, closer required."""
    if not line.startswith("''", pos):
        return None
    for marker, kind in (("'''''", TokenKind.STRONG_EM), ("'''", TokenKind.STRONG)):
        if line.startswith(marker, pos):
            close_idx = line.find(marker, pos + len(marker))
            if close_idx > -1:
                return Token(line[pos:close_idx + len(marker)], kind)
    # italic needs at least one character between the markers
    close_idx = line.find("''", pos + 2)
    if close_idx > pos + 2:
        return Token(line[pos:close_idx + 2], TokenKind.EM)
    return None


def match_signature(line: str, pos: int, opts: HighlightOptions) -> Optional[Token]:
    m = _SIGNATURE_RE.match(line, pos)
    return Token(m.group(0), TokenKind.SIGNATURE) if m else None


def match_magic_word(line: str, pos: int, opts: HighlightOptions) -> Optional[Token]:
    m = _MAGIC_RE.match(line, pos)
    return Token(m.group(0), TokenKind.MAGIC_WORD) if m else None


# -----------------------------------------------------------------------------

LEAF_MATCHERS: Sequence[Matcher] = (
    match_comment,
    match_tag,
    match_internal_link,
    match_external_link,
    match_free_url,
    match_entity,
    match_quotes,
    match_signature,
    match_magic_word,
)


def match_leaf(line: str, pos: int, opts: HighlightOptions) -> Optional[Token]:
    for matcher in LEAF_MATCHERS:
        token = matcher(line, pos, opts)
        if token is not None:
            return token
    return None


# -----------------------------------------------------------------------------
