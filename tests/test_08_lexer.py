#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""Tests for the Pygments lexer."""
# -----------------------------------------------------------------------------

from __future__ import annotations

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.token import Generic, Name, String, Text

from wikihl.services.lexer import _TOKEN_TYPES, WikitextLexer
from wikihl.services.options import HighlightOptions
from wikihl.services.tokens import CSS_CLASSES, TokenKind


# -----------------------------------------------------------------------------

def test_unprocessed_tokens_carry_offsets():
    tokens = list(WikitextLexer().get_tokens_unprocessed("a\n[[B]]"))
    assert tokens == [
        (0, Text, "a"),
        (1, Text.Whitespace, "\n"),
        (2, Name.Label, "[[B]]"),
    ]


def test_tokens_reassemble_text():
    text = "== A ==\n* [[B]] {{c}}\n<!-- d\ne -->\n"
    tokens = list(WikitextLexer().get_tokens(text))
    assert "".join(value for _, value in tokens) == text
    assert (Generic.Heading, "== A ==") in tokens


def test_multi_line_state_is_carried():
    tokens = list(WikitextLexer().get_tokens_unprocessed("<pre>\n[[x]]\n</pre>"))
    assert (6, String, "[[x]]") in tokens


def test_highlight_options():
    lexer = WikitextLexer(highlight_options=HighlightOptions.build(url_protocols=["mailto"]))
    tokens = list(lexer.get_tokens_unprocessed("mailto:a@b.org"))
    assert tokens == [(0, String.Other, "mailto:a@b.org")]


def test_html_formatter():
    html = highlight("'''bold''' [[link]]", WikitextLexer(), HtmlFormatter())
    assert '<div class="highlight">' in html
    assert "<span" in html


def test_registered_with_pygments():
    assert isinstance(get_lexer_by_name("wikitext"), WikitextLexer)
    assert isinstance(get_lexer_by_name("mediawiki"), WikitextLexer)


def test_every_token_kind_has_a_pygments_type():
    assert set(_TOKEN_TYPES) == set(TokenKind)
    assert set(CSS_CLASSES) == set(TokenKind)
