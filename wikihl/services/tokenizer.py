#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Line tokenizer
==============
Splits one line of wikitext at a time into classified tokens.

The tokenizer is a small state machine: an unterminated ``<!--`` comment or a
content-preserving extension tag (``<pre>``, ``<nowiki>`` …) carries over to
the following lines, and the number of open ``{{`` templates switches the
scanner into template mode, where table syntax is not recognised.

Consecutive plain (or template) characters are batched into single tokens.
Malformed or half-typed markup never raises; every construct degrades to a
defined partial styling instead.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import re
from typing import Optional

from .matchers import find_close_tag, match_leaf, starts_external_link
from .options import DEFAULT_OPTIONS, HighlightOptions
from .spans import find_balanced
from .tokens import INITIAL_STATE, Token, TokenizerState, TokenKind


# -----------------------------------------------------------------------------

_HEADER_RE   = re.compile(r"^(={2,6})(.+?)\1\s*$")
_LIST_RE     = re.compile(r"^[*#:;]+")
_HR_RE       = re.compile(r"^----+$")
_PROTOCOL_RE = re.compile(r"^[a-z]+:/+", re.IGNORECASE)

# Line-start table markers that end tokenization of the line.
_TABLE_LINE_MARKERS = (
    ("{|", TokenKind.TABLE_BRACKET),
    ("|}", TokenKind.TABLE_BRACKET),
    ("|-", TokenKind.TABLE_DELIMITER),
)


# -----------------------------------------------------------------------------

class WikitextTokenizer:

    def __init__(self, options: Optional[HighlightOptions] = None):
        self.options = options or DEFAULT_OPTIONS
        self.reset()

    # ── State ────────────────────────────────────────────────────────────────

    def reset(self) -> None:
        """Return to the initial state (no open comment, tag or template)."""
        self._state = INITIAL_STATE

    def get_state(self) -> TokenizerState:
        return self._state

    def set_state(self, state: TokenizerState) -> None:
        self._state = state

    def _update(self, **changes) -> None:
        self._state = self._state.model_copy(update=changes)

    # ── Public API ───────────────────────────────────────────────────────────

    def tokenize_line(self, line: str, is_first_line: bool = False) -> list[Token]:
        """Tokenize *line*, advancing the multi-line state past it."""
        return _LineScan(self, line).run(is_first_line)


# -----------------------------------------------------------------------------

class _LineScan:
    """One pass over one line.  Holds the cursor, the output and the text buffer."""

    def __init__(self, tokenizer: WikitextTokenizer, line: str):
        self.tk = tokenizer
        self.opts = tokenizer.options
        self.line = line
        self.pos = 0
        self.tokens: list[Token] = []
        self._buffer = ""
        self._buffer_kind = TokenKind.PLAIN

    # ── Output helpers ───────────────────────────────────────────────────────

    def emit(self, text: str, kind: TokenKind, detail: Optional[str] = None) -> None:
        if text:
            self.flush()
            self.tokens.append(Token(text, kind, detail))

    def buffer(self, char: str, kind: TokenKind) -> None:
        if self._buffer and kind is not self._buffer_kind:
            self.flush()
        self._buffer += char
        self._buffer_kind = kind

    def flush(self) -> None:
        if self._buffer:
            self.tokens.append(Token(self._buffer, self._buffer_kind))
            self._buffer = ""

    # ── Driver ───────────────────────────────────────────────────────────────

    def run(self, is_first_line: bool) -> list[Token]:
        if not self._continue_extension_tag():
            return self.tokens
        if not self._continue_comment():
            return self.tokens
        if is_first_line:
            self._redirect()
        if self.pos == 0 and self._line_start():
            return self.tokens
        self._scan()
        self.flush()
        return self.tokens

    # ── Multi-line continuations ─────────────────────────────────────────────

    def _continue_extension_tag(self) -> bool:
        """Resume an open content-preserving tag.  False → line fully consumed."""
        name = self.tk.get_state().in_extension_tag
        if not name:
            return True
        close = find_close_tag(self.line, name)
        if close is None:
            self.emit(self.line, TokenKind.EXT_TAG_CONTENT, name)
            return False
        self.emit(self.line[:close.start()], TokenKind.EXT_TAG_CONTENT, name)
        self.emit(close.group(0), TokenKind.EXT_TAG, name)
        self.tk._update(in_extension_tag=None)
        self.pos = close.end()
        return True

    def _continue_comment(self) -> bool:
        """Resume an open ``<!--`` comment.  False → line fully consumed."""
        state = self.tk.get_state()
        if not state.in_multiline_comment:
            return True
        end = self.line.find("-->", self.pos)
        if end == -1:
            self.emit(self.line[self.pos:], TokenKind.COMMENT)
            self.tk._update(comment_buffer=state.comment_buffer + self.line[self.pos:] + "\n")
            return False
        end += 3
        self.emit(self.line[self.pos:end], TokenKind.COMMENT)
        self.tk._update(in_multiline_comment=False, comment_buffer="")
        self.pos = end
        return True

    # ── Line-start constructs ────────────────────────────────────────────────

    def _redirect(self) -> None:
        m = self.opts.redirect.match(self.line, self.pos) if self.pos == 0 else None
        if m and m.group(0):
            self.emit(m.group(0), TokenKind.REDIRECT)
            self.pos = m.end()

    def _line_start(self) -> bool:
        """Headers, lists, rules and tables.  True → nothing left to scan."""
        line = self.line

        m = _HEADER_RE.match(line)
        if m:
            self.emit(line, TokenKind.SECTION_HEADER, str(len(m.group(1))))
            return True

        m = _LIST_RE.match(line)
        if m:
            self.emit(m.group(0), TokenKind.LIST)
            self.pos = m.end()
            return False

        if _HR_RE.match(line):
            self.emit(line, TokenKind.HR)
            return True

        if self.tk.get_state().template_depth == 0:
            return self._table_line()
        return False

    def _table_line(self) -> bool:
        line = self.line
        for marker, kind in _TABLE_LINE_MARKERS:
            if line.startswith(marker):
                rest = line[len(marker):]
                stripped = rest.lstrip()
                if not stripped:
                    self.emit(line, kind)
                else:
                    self.emit(marker, kind)
                    self.emit(rest[:len(rest) - len(stripped)], TokenKind.PLAIN)
                    self.emit(stripped, TokenKind.TABLE_ATTRS)
                return True

        if line.startswith("!"):
            self.emit("!", TokenKind.TABLE_HEADER)
        elif line.startswith("|"):
            self.emit("|", TokenKind.TABLE_CELL)
        else:
            return False
        self.pos = 1
        pipe = line.find("|", 1)
        if 1 < pipe < len(line) - 1:
            attrs = line[1:pipe]
            if "=" in attrs or '"' in attrs:
                self.emit(attrs, TokenKind.TABLE_ATTRS)
                self.emit("|", TokenKind.TABLE_DELIMITER)
                self.pos = pipe + 1
        return False

    # ── Main scan ────────────────────────────────────────────────────────────

    def _scan(self) -> None:
        line = self.line
        while self.pos < len(line):
            pos = self.pos

            if line.startswith("{{{", pos):
                self._template_variable()
                continue

            if line.startswith("{{", pos):
                self._template_open()
                continue

            if line.startswith("}}", pos):
                depth = self.tk.get_state().template_depth
                self.tk._update(template_depth=max(0, depth - 1))
                self.emit("}}", TokenKind.TEMPLATE_BRACKET)
                self.pos += 2
                continue

            if self.tk.get_state().template_depth > 0:
                self._template_content()
                continue

            if line.startswith("[[", pos):
                self._internal_link()
                continue

            if starts_external_link(line, pos, self.opts):
                self._external_link()
                continue

            if not self._leaf():
                self.buffer(line[pos], TokenKind.PLAIN)
                self.pos += 1

    def _leaf(self) -> bool:
        token = match_leaf(self.line, self.pos, self.opts)
        if token is None:
            return False
        self.emit(token.text, token.kind, token.detail)
        self.pos += len(token.text)
        if token.kind is TokenKind.COMMENT_OPEN:
            self.tk._update(in_multiline_comment=True, comment_buffer=token.text + "\n")
        elif token.kind is TokenKind.EXT_TAG_START:
            self.tk._update(in_extension_tag=token.detail)
        return True

    # ── Templates ────────────────────────────────────────────────────────────

    def _template_open(self) -> None:
        if self.tk.get_state().template_depth > 0:
            nested = find_balanced(self.line[self.pos:], "{{", "}}")
            if nested:
                self.emit(nested.content, TokenKind.TEMPLATE_FULL)
                self.pos += nested.end
                return
        self.tk._update(template_depth=self.tk.get_state().template_depth + 1)
        self.emit("{{", TokenKind.TEMPLATE_BRACKET)
        self.pos += 2

    def _template_content(self) -> None:
        line, pos = self.line, self.pos
        if line.startswith("[[", pos):
            nested = find_balanced(line[pos:], "[[", "]]")
            if nested:
                self.emit(nested.content, TokenKind.LINK_FULL)
                self.pos += nested.end
                return
        if not self._leaf():
            self.buffer(line[pos], TokenKind.TEMPLATE_TEXT)
            self.pos += 1

    def _template_variable(self) -> None:
        name, parts, length, complete = self._split_parts(3, "}}}")
        if complete:
            self.emit(self.line[self.pos:self.pos + length], TokenKind.TEMPLATE_VARIABLE_FULL)
        else:
            self.emit("{{{", TokenKind.TEMPLATE_VARIABLE_BRACKET)
            self.emit(name, TokenKind.TEMPLATE_VARIABLE_NAME)
            for part in parts:
                self.emit("|", TokenKind.TEMPLATE_VARIABLE_DELIMITER)
                self.emit(part, TokenKind.TEMPLATE_VARIABLE)
        self.pos += length

    # ── Links ────────────────────────────────────────────────────────────────

    def _internal_link(self) -> None:
        page, parts, length, complete = self._split_parts(2, "]]")
        if complete:
            self.emit(self.line[self.pos:self.pos + length], TokenKind.LINK_FULL)
        else:
            self.emit("[[", TokenKind.LINK_BRACKET)
            self.emit(page, TokenKind.LINK_PAGENAME)
            for part in parts:
                self.emit("|", TokenKind.LINK_PIPE)
                self.emit(part, TokenKind.LINK_LABEL)
        self.pos += length

    def _external_link(self) -> None:
        rest = self.line[self.pos:]
        i = 1
        while i < len(rest) and rest[i] not in " ]":
            i += 1
        url = rest[1:i]
        label = None
        if i < len(rest) and rest[i] == " ":
            start = i + 1
            i = rest.find("]", start)
            if i == -1:
                i = len(rest)
            label = rest[start:i]
        complete = i < len(rest) and rest[i] == "]"
        length = i + 1 if complete else i

        if complete:
            self.emit(rest[:length], TokenKind.EXTLINK_FULL)
        else:
            self.emit("[", TokenKind.EXTLINK_BRACKET)
            proto = _PROTOCOL_RE.match(url)
            if proto:
                self.emit(proto.group(0), TokenKind.EXTLINK_PROTOCOL)
                self.emit(url[proto.end():], TokenKind.EXTLINK_URL)
            else:
                self.emit(url, TokenKind.EXTLINK_URL)
            if label is not None:
                self.emit(" ", TokenKind.PLAIN)
                self.emit(label, TokenKind.EXTLINK_LABEL)
        self.pos += length

    # ── Shared name|part|part scanner ────────────────────────────────────────

    def _split_parts(self, open_len: int, close: str) -> tuple[str, list[str], int, bool]:
        """Scan ``open name|part|…close`` from the cursor.

        Returns (name, parts, consumed length, complete).
        """
        rest = self.line[self.pos:]
        i = open_len

        def scan_segment(start: int) -> int:
            j = start
            while j < len(rest) and rest[j] != "|" and not rest.startswith(close, j):
                j += 1
            return j

        end = scan_segment(i)
        name = rest[i:end]
        i = end
        parts: list[str] = []
        while i < len(rest) and rest[i] == "|":
            end = scan_segment(i + 1)
            parts.append(rest[i + 1:end])
            i = end
        complete = rest.startswith(close, i)
        if complete:
            i += len(close)
        return name, parts, i, complete


# -----------------------------------------------------------------------------
