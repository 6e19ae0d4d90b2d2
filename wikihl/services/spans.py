#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Span helpers
============
Delimiter matching with nesting (``[[ [[ ]] ]]``) plus the two tiny HTML
helpers every renderer in the package goes through.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import html as _html
from typing import NamedTuple, Optional


# -----------------------------------------------------------------------------

class Balanced(NamedTuple):
    content: str    # text[:end], ends with the matching close delimiter
    end: int        # index right after the close delimiter


# -----------------------------------------------------------------------------

def find_balanced(text: str, open: str, close: str) -> Optional[Balanced]:
    """Find the first depth-balanced ``open`` … ``close`` pair at the start of *text*.

    Matching is plain substring equality at each position.  An opener is
    checked before a closer, and a matched delimiter is skipped as a whole so
    same-character pairs (``{{`` / ``}}`` inside ``{{{``) never overlap.
    Every closer decrements the depth, so a stray closer ahead of the first
    opener leaves the count below zero.

    Returns ``None`` unless a closer brings the depth back to zero.
    """
    depth = 0
    i = 0
    n = len(text)
    while i < n:
        if text.startswith(open, i):
            depth += 1
            i += len(open)
            continue
        if text.startswith(close, i):
            depth -= 1
            if depth == 0:
                end = i + len(close)
                return Balanced(text[:end], end)
            i += len(close)
            continue
        i += 1
    return None


# -----------------------------------------------------------------------------

def escape_html(text: str) -> str:
    """Escape ``& < > " '`` so user text can't break the output."""
    return _html.escape(text, quote=True)


def create_span(text: str, css_class: str) -> str:
    """Wrap escaped *text* in ``<span class="…">``; no class → escaped text only."""
    escaped = escape_html(text)
    return f'<span class="{css_class}">{escaped}</span>' if css_class else escaped


# -----------------------------------------------------------------------------
