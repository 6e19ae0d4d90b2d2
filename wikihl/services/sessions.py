#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Editing sessions
================
One ``IncrementalHighlighter`` per open editor, addressed by an opaque id.
The store is bounded: opening a session beyond ``max_sessions`` evicts the
least recently used one.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import uuid
from collections import OrderedDict
from typing import Optional

from fastapi import HTTPException, status

from .incremental import IncrementalHighlighter
from .options import HighlightOptions
from .renderer import WikitextHighlighter


log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------

class SessionStore:

    def __init__(self, options: Optional[HighlightOptions] = None, max_sessions: int = 256):
        self.options = options or HighlightOptions.build()
        self.max_sessions = max(1, max_sessions)
        self._sessions: OrderedDict[str, IncrementalHighlighter] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    # -------------------------------------------------------------------------

    def create(self) -> str:
        session_id = uuid.uuid4().hex
        self._sessions[session_id] = IncrementalHighlighter(
            WikitextHighlighter(options=self.options)
        )
        log.info("Session %s opened (%d open)", session_id, len(self._sessions))

        while len(self._sessions) > self.max_sessions:
            evicted, _ = self._sessions.popitem(last=False)
            log.info("Session %s evicted", evicted)
        return session_id

    def get(self, session_id: str) -> IncrementalHighlighter:
        engine = self._sessions.get(session_id)
        if engine is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND,
                                detail=f"Session '{session_id}' not found")
        self._sessions.move_to_end(session_id)
        return engine

    def update(self, session_id: str, content: str) -> tuple[list[str], int]:
        """Feed a new version of the document; return per-line HTML and the lines re-tokenized."""
        engine = self.get(session_id)
        before = engine.lines_tokenized
        html = engine.update(content.split("\n"))
        return html, engine.lines_tokenized - before

    def delete(self, session_id: str) -> None:
        if self._sessions.pop(session_id, None) is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND,
                                detail=f"Session '{session_id}' not found")
        log.info("Session %s closed", session_id)


# -----------------------------------------------------------------------------
