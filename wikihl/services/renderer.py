#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Wikitext highlighter
====================
Renders tokenized wikitext to HTML.

  - LineRenderer        : one token → one HTML fragment
  - WikitextHighlighter : the line-rendering service (tokenize + render), used
                          directly for one-shot full-document passes and by
                          the incremental engine for live editing

All literal text is HTML-escaped, including text that carries no class.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Collection, Iterable
from typing import Optional

from .options import HighlightOptions, ProtocolSpec
from .parsers import (
    TagShape,
    parse_external_link,
    parse_link,
    parse_tag,
    parse_template,
    parse_template_parameter,
)
from .spans import create_span, escape_html
from .tokenizer import WikitextTokenizer
from .tokens import Token, TokenizerState, TokenKind


# -----------------------------------------------------------------------------
# Default stylesheet
# -----------------------------------------------------------------------------

_COLORS = {
    "black":       "#000",
    "blue":        "#0645ad",
    "dark_blue":   "#3366bb",
    "brown":       "#a55858",
    "dark_brown":  "#8b4513",
    "purple":      "#7f007f",
    "green":       "#239f00",
    "red":         "#d33",
    "gray":        "#72777d",
    "dark_gray":   "#666",
    "orange":      "#dd7700",
    "dark_green":  "#008000",
    "medium_blue": "#0000cd",
    "sea_green":   "#2e8b57",
    "magenta":     "#a020f0",
    "light_bg":    "rgba(0,0,0,0.04)",
}

_SECTION_SIZES = {2: "1.8em", 3: "1.5em", 4: "1.3em", 5: "1.1em", 6: "1.05em"}


def default_styles(content_preserving_tags: Iterable[str] = ()) -> str:
    """CSS for every class the highlighter emits."""
    c = _COLORS
    sections = "\n".join(
        f".wt-section-{level} {{ font-size: {size}; }}" for level, size in _SECTION_SIZES.items()
    )
    preserved = "\n".join(
        f".wt-ext-{tag} {{ background-color: {c['light_bg']}; }}"
        for tag in sorted(content_preserving_tags)
    )
    return f"""\
/* Section headers */
.wt-section-header {{ font-weight: bold; color: {c['black']}; }}
{sections}

/* Text formatting */
.wt-strong {{ font-weight: bold; }}
.wt-em {{ font-style: italic; }}
.wt-strong-em {{ font-weight: bold; font-style: italic; }}

/* Links */
.wt-link-bracket, .wt-link-pagename, .wt-link-pipe, .wt-link-label {{ color: {c['blue']}; }}
.wt-link-bracket {{ font-weight: bold; }}

/* External links */
.wt-extlink, .wt-extlink-bracket, .wt-extlink-protocol, .wt-extlink-url,
.wt-extlink-label, .wt-free-extlink {{ color: {c['dark_blue']}; }}

/* Templates */
.wt-template, .wt-template-bracket, .wt-template-delimiter {{ color: {c['brown']}; }}
.wt-template-bracket {{ font-weight: bold; }}
.wt-template-argument-name {{ color: {c['dark_brown']}; }}

/* Template variables */
.wt-templatevariable, .wt-templatevariable-bracket, .wt-templatevariable-name,
.wt-templatevariable-delimiter {{ color: {c['purple']}; }}
.wt-templatevariable-bracket {{ font-weight: bold; }}

/* Tags */
.wt-exttag {{ color: {c['purple']}; }}
{preserved}
.wt-htmltag {{ color: {c['green']}; }}

/* Lists, comments and the rest */
.wt-list {{ color: {c['red']}; font-weight: bold; }}
.wt-comment {{ color: {c['gray']}; font-style: italic; }}
.wt-hr {{ color: {c['dark_gray']}; }}
.wt-signature {{ color: {c['dark_blue']}; }}
.wt-magic-word {{ color: {c['magenta']}; font-weight: bold; }}
.wt-html-entity {{ color: {c['sea_green']}; }}
.wt-redirect {{ color: {c['brown']}; font-weight: bold; }}

/* Tables */
.wt-table-bracket, .wt-table-delimiter {{ color: {c['orange']}; font-weight: bold; }}
.wt-table-header {{ color: {c['dark_green']}; font-weight: bold; }}
.wt-table-cell {{ color: {c['medium_blue']}; }}
.wt-table-attrs {{ color: {c['dark_gray']}; }}
"""


# -----------------------------------------------------------------------------
# Token → HTML
# -----------------------------------------------------------------------------

_TAG_SHAPES = {
    TokenKind.EXT_TAG_FULL:  TagShape.FULL,
    TokenKind.EXT_TAG_START: TagShape.START,
}


class LineRenderer:

    def __init__(self, extension_tags: Collection[str]):
        self.extension_tags = extension_tags

    def render_token(self, token: Token) -> str:
        kind, text = token.kind, token.text

        if kind is TokenKind.TEMPLATE_FULL:
            return parse_template(text)
        if kind is TokenKind.TEMPLATE_VARIABLE_FULL:
            return parse_template_parameter(text)
        if kind is TokenKind.LINK_FULL:
            return parse_link(text)
        if kind is TokenKind.EXTLINK_FULL:
            return parse_external_link(text)
        if kind in _TAG_SHAPES:
            return parse_tag(text, _TAG_SHAPES[kind], self.extension_tags)
        if kind is TokenKind.PLAIN:
            return escape_html(text)
        return create_span(text, token.css_class)

    def render_line(self, tokens: Iterable[Token]) -> str:
        return "".join(self.render_token(t) for t in tokens)


# -----------------------------------------------------------------------------
# Line-rendering service
# -----------------------------------------------------------------------------

class WikitextHighlighter:
    """
    Tokenize and render wikitext.

    Every option may be given on its own; anything left as ``None`` falls back
    to the defaults in :mod:`wikihl.services.options`.
    """

    def __init__(
        self,
        url_protocols: ProtocolSpec = None,
        redirect_keywords: Optional[Iterable[str]] = None,
        extension_tags: Optional[Iterable[str]] = None,
        content_preserving_tags: Optional[Iterable[str]] = None,
        *,
        options: Optional[HighlightOptions] = None,
    ):
        self.options = options or HighlightOptions.build(
            url_protocols=url_protocols,
            redirect_keywords=redirect_keywords,
            extension_tags=extension_tags,
            content_preserving_tags=content_preserving_tags,
        )
        self.tokenizer = WikitextTokenizer(self.options)
        self.renderer = LineRenderer(self.options.extension_tags)

    # ── Per-line service ─────────────────────────────────────────────────────

    def tokenize_line(
        self,
        line: str,
        is_first_line: bool = False,
        state: Optional[TokenizerState] = None,
    ) -> tuple[list[Token], TokenizerState]:
        """Tokenize one line from *state* (or the current state); return tokens and the state after it."""
        if state is not None:
            self.tokenizer.set_state(state)
        tokens = self.tokenizer.tokenize_line(line, is_first_line)
        return tokens, self.tokenizer.get_state()

    def render_line(self, tokens: Iterable[Token]) -> str:
        return self.renderer.render_line(tokens)

    # ── Full-document pass ───────────────────────────────────────────────────

    def tokenize_lines(self, lines: Iterable[str]) -> list[list[Token]]:
        self.tokenizer.reset()
        return [self.tokenizer.tokenize_line(line, i == 0) for i, line in enumerate(lines)]

    def tokenize(self, text: str) -> list[list[Token]]:
        """Tokenize a whole document; one token list per line."""
        return self.tokenize_lines(text.split("\n"))

    def render_lines(self, tokens_per_line: Iterable[Iterable[Token]]) -> list[str]:
        return [self.renderer.render_line(tokens) for tokens in tokens_per_line]

    def highlight(self, text: str) -> str:
        """Highlight a whole document and return its HTML (lines joined by newlines)."""
        return "\n".join(self.render_lines(self.tokenize(text)))

    def styles(self) -> str:
        return default_styles(self.options.content_preserving_tags)


# -----------------------------------------------------------------------------
# Public render function
# -----------------------------------------------------------------------------

_default_highlighter: Optional[WikitextHighlighter] = None


def render(content: str) -> str:
    """Highlight *content* with the default configuration."""
    global _default_highlighter
    if _default_highlighter is None:
        _default_highlighter = WikitextHighlighter()
    return _default_highlighter.highlight(content)


# -----------------------------------------------------------------------------
