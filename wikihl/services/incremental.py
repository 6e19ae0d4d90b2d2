#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Incremental highlighting
========================
Keeps, per document, the last seen lines, the tokens and HTML produced for
each line and the tokenizer state *before* each line.  On a new version of
the document only the lines from the first difference onwards are
re-tokenized, and only until the state after a line matches the state cached
for the same (unchanged) line in the previous version: from there on the old
results are provably still valid and are spliced in as they are.

The cache is rebuilt in local variables and swapped in at the end of each
call, so a failed update never leaves it half old, half new.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from typing import Optional

from .renderer import WikitextHighlighter
from .tokens import INITIAL_STATE, Token, TokenizerState


log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------

class IncrementalHighlighter:

    def __init__(self, highlighter: Optional[WikitextHighlighter] = None, **options):
        self.highlighter = highlighter or WikitextHighlighter(**options)
        self.lines_tokenized = 0
        self.reset()

    # ── Cache lifecycle ──────────────────────────────────────────────────────

    def reset(self) -> None:
        """Drop every cached line and return the tokenizer to its initial state."""
        self.highlighter.tokenizer.reset()
        self.last_lines: list[str] = []
        self.cached_tokens: list[list[Token]] = []
        self.cached_html: list[str] = []
        self.cached_states: list[TokenizerState] = [INITIAL_STATE]
        log.debug("incremental cache reset")

    # ── Public API ───────────────────────────────────────────────────────────

    def update(self, lines: list[str]) -> list[str]:
        """Bring the cache up to date with *lines* and return the HTML of every line."""
        old = self.last_lines
        n_new, n_old = len(lines), len(old)

        prefix = 0
        limit = min(n_new, n_old)
        while prefix < limit and lines[prefix] == old[prefix]:
            prefix += 1

        if prefix == n_new == n_old:
            return list(self.cached_html)

        suffix = 0
        while (suffix < limit - prefix
               and lines[n_new - 1 - suffix] == old[n_old - 1 - suffix]):
            suffix += 1
        shift = n_new - n_old
        suffix_start = n_new - suffix

        tokens = self.cached_tokens[:prefix]
        html = self.cached_html[:prefix]
        states = self.cached_states[:prefix + 1]

        tokenizer = self.highlighter.tokenizer
        tokenizer.set_state(states[prefix])
        log.debug("re-tokenizing from line %d of %d", prefix, n_new)

        converged = False
        for i in range(prefix, n_new):
            line_tokens = tokenizer.tokenize_line(lines[i], i == 0)
            self.lines_tokenized += 1
            after = tokenizer.get_state()
            tokens.append(line_tokens)
            html.append(self.highlighter.render_line(line_tokens))
            states.append(after)

            j = i - shift
            # every line after i is in the unchanged tail, aligned with old line j + 1;
            # old line 0 was tokenized as a first line and is never reused elsewhere
            if j >= 0 and i + 1 >= suffix_start and after == self.cached_states[j + 1]:
                tokens.extend(self.cached_tokens[j + 1:])
                html.extend(self.cached_html[j + 1:])
                states.extend(self.cached_states[j + 2:])
                converged = True
                log.debug("converged at line %d, reused %d cached lines", i, n_new - i - 1)
                break

        if not converged:
            while len(states) < n_new + 1:
                states.append(INITIAL_STATE)

        self.last_lines = list(lines)
        self.cached_tokens = tokens
        self.cached_html = html
        self.cached_states = states
        return list(html)

    def highlight(self, text: str) -> str:
        return "\n".join(self.update(text.split("\n")))

    def tokenize(self, text: str) -> list[list[Token]]:
        self.update(text.split("\n"))
        return list(self.cached_tokens)

    def state_before(self, line_index: int) -> TokenizerState:
        """Cached tokenizer state at the start of *line_index*."""
        return self.cached_states[line_index]


# -----------------------------------------------------------------------------
