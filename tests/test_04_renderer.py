#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Tests for the line renderer and the full-document highlighter.

All tests use the renderer directly — no HTTP round-trip needed.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from wikihl.services.renderer import LineRenderer, WikitextHighlighter, render
from wikihl.services.tokens import INITIAL_STATE, Token, TokenizerState, TokenKind


# ── Escaping ──────────────────────────────────────────────────────────────────

def test_html_tags_are_escaped():
    html = render("<b>unsafe</b> & more")
    assert "<b>" not in html
    assert '<span class="wt-htmltag">&lt;b&gt;</span>' in html
    assert "unsafe" in html
    assert "&amp; more" in html


def test_plain_text_is_escaped_without_span():
    assert render("a < b") == "a &lt; b"


def test_script_in_preserved_block_is_escaped():
    html = render("<nowiki><script>alert(1)</script></nowiki>")
    assert "<script>" not in html
    assert '<span class="wt-ext-nowiki">&lt;script&gt;alert(1)&lt;/script&gt;</span>' in html


# ── Per-construct output ──────────────────────────────────────────────────────

def test_partial_link_rendering():
    assert render("[[Article|Display") == (
        '<span class="wt-link-bracket">[[</span>'
        '<span class="wt-link-pagename">Article</span>'
        '<span class="wt-link-pipe">|</span>'
        '<span class="wt-link-label">Display</span>'
    )


def test_full_external_link_rendering():
    assert render("[https://example.com Example]") == (
        '<span class="wt-extlink-bracket">[</span>'
        '<span class="wt-extlink">https://example.com</span>'
        " Example"
        '<span class="wt-extlink-bracket">]</span>'
    )


def test_redirect_rendering():
    html = render("#REDIRECT [[Target]]")
    assert html.startswith('<span class="wt-redirect">#REDIRECT </span>')
    assert '<span class="wt-link-pagename">Target</span>' in html


def test_comment_keeps_class():
    assert render("<!-- c -->") == '<span class="wt-comment">&lt;!-- c --&gt;</span>'


def test_section_header_rendering():
    assert render("== A ==") == '<span class="wt-section-header wt-section-2">== A ==</span>'


def test_nested_template_rendering():
    html = render("{{outer|{{inner}}}}")
    assert html == (
        '<span class="wt-template-bracket">{{</span>'
        '<span class="wt-template">outer|</span>'
        '<span class="wt-template-bracket">{{</span>'
        '<span class="wt-template">inner</span>'
        '<span class="wt-template-bracket">}}</span>'
        '<span class="wt-template-bracket">}}</span>'
    )


def test_ref_tag_rendering():
    html = render('<ref name="n">Book</ref>')
    assert html == (
        '<span class="wt-exttag wt-ext-ref">&lt;ref name=&quot;n&quot;&gt;</span>'
        "Book"
        '<span class="wt-exttag wt-ext-ref">&lt;/ref&gt;</span>'
    )


def test_multi_line_pre_block():
    lines = render("<pre>\n''x''\n</pre>").split("\n")
    assert lines == [
        '<span class="wt-exttag wt-ext-pre">&lt;pre&gt;</span>',
        '<span class="wt-ext-pre">&#x27;&#x27;x&#x27;&#x27;</span>',
        '<span class="wt-exttag wt-ext-pre">&lt;/pre&gt;</span>',
    ]


def test_render_token_dispatch():
    renderer = LineRenderer({"ref"})
    assert renderer.render_token(Token("a&b", TokenKind.PLAIN)) == "a&amp;b"
    assert renderer.render_token(Token("~~~~", TokenKind.SIGNATURE)) == (
        '<span class="wt-signature">~~~~</span>'
    )
    assert renderer.render_token(Token("[[A]]", TokenKind.LINK_FULL)).startswith(
        '<span class="wt-link-bracket">'
    )


# ── Document-level behaviour ──────────────────────────────────────────────────

def test_lines_are_joined_with_newlines():
    assert render("a\nb") == "a\nb"
    assert render("") == ""


def test_highlight_resets_state_between_documents():
    hl = WikitextHighlighter()
    hl.highlight("<!-- never closed")
    assert hl.highlight("plain") == "plain"


def test_tokenize_returns_one_list_per_line():
    hl = WikitextHighlighter()
    lines = hl.tokenize("a\n\nb")
    assert len(lines) == 3
    assert lines[1] == []


def test_tokenize_line_with_explicit_state():
    hl = WikitextHighlighter()
    tokens, state = hl.tokenize_line("end -->", state=TokenizerState(in_multiline_comment=True))
    assert tokens == [Token("end -->", TokenKind.COMMENT)]
    assert state == INITIAL_STATE


def test_render_matches_highlighter():
    text = "== A ==\n* [[B]] ''c''\n{{d|e=f}}"
    assert render(text) == WikitextHighlighter().highlight(text)


# ── Options ───────────────────────────────────────────────────────────────────

def test_options_fall_back_independently():
    hl = WikitextHighlighter(extension_tags=["ref"])
    assert hl.options.extension_tags >= {"ref", "pre", "nowiki"}
    assert "references" not in hl.options.extension_tags
    assert '<span class="wt-free-extlink">https://a.org</span>' in hl.highlight("https://a.org")


def test_custom_protocols_in_highlighter():
    hl = WikitextHighlighter(url_protocols=["mailto"])
    assert hl.highlight("mailto:a@b.org") == '<span class="wt-free-extlink">mailto:a@b.org</span>'
    assert hl.highlight("https://a.org") == "https://a.org"


# ── Stylesheet ────────────────────────────────────────────────────────────────

def test_styles_cover_public_classes():
    css = WikitextHighlighter().styles()
    for cls in (".wt-link-bracket", ".wt-template", ".wt-comment", ".wt-section-2",
                ".wt-table-attrs", ".wt-ext-pre", ".wt-redirect"):
        assert cls in css


def test_styles_follow_preserving_tags():
    css = WikitextHighlighter(content_preserving_tags=["poem"]).styles()
    assert ".wt-ext-poem" in css
    assert ".wt-ext-pre " not in css
