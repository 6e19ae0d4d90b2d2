#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pygments lexer for wikitext, driven by the line tokenizer.

Lets any Pygments formatter (HTML, terminal, LaTeX …) highlight wikitext:

    from pygments import highlight
    from pygments.formatters import HtmlFormatter
    highlight(source, WikitextLexer(), HtmlFormatter())
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from pygments.lexer import Lexer
from pygments.token import (
    Comment, Generic, Keyword, Name, Operator, Punctuation, String, Text,
)

from .options import HighlightOptions
from .tokenizer import WikitextTokenizer
from .tokens import TokenKind


# -----------------------------------------------------------------------------

_TOKEN_TYPES = {
    TokenKind.PLAIN:                       Text,
    TokenKind.TEMPLATE_TEXT:               Name.Function,
    TokenKind.TEMPLATE_BRACKET:            Punctuation,
    TokenKind.TEMPLATE_FULL:               Name.Function,
    TokenKind.TEMPLATE_VARIABLE_FULL:      Name.Variable,
    TokenKind.TEMPLATE_VARIABLE_BRACKET:   Punctuation,
    TokenKind.TEMPLATE_VARIABLE_NAME:      Name.Variable,
    TokenKind.TEMPLATE_VARIABLE_DELIMITER: Punctuation,
    TokenKind.TEMPLATE_VARIABLE:           Name.Variable,
    TokenKind.LINK_FULL:                   Name.Label,
    TokenKind.LINK_BRACKET:                Punctuation,
    TokenKind.LINK_PAGENAME:               Name.Label,
    TokenKind.LINK_PIPE:                   Punctuation,
    TokenKind.LINK_LABEL:                  Text,
    TokenKind.EXTLINK_FULL:                String.Other,
    TokenKind.EXTLINK_BRACKET:             Punctuation,
    TokenKind.EXTLINK_PROTOCOL:            String.Other,
    TokenKind.EXTLINK_URL:                 String.Other,
    TokenKind.EXTLINK_LABEL:               Text,
    TokenKind.FREE_EXTLINK:                String.Other,
    TokenKind.COMMENT:                     Comment.Multiline,
    TokenKind.COMMENT_OPEN:                Comment.Multiline,
    TokenKind.HTML_TAG:                    Name.Tag,
    TokenKind.EXT_TAG:                     Name.Builtin,
    TokenKind.EXT_TAG_CONTENT:             String,
    TokenKind.EXT_TAG_FULL:                Name.Builtin,
    TokenKind.EXT_TAG_START:               Name.Builtin,
    TokenKind.HTML_ENTITY:                 Name.Entity,
    TokenKind.STRONG_EM:                   Generic.Strong,
    TokenKind.STRONG:                      Generic.Strong,
    TokenKind.EM:                          Generic.Emph,
    TokenKind.SIGNATURE:                   Keyword.Pseudo,
    TokenKind.MAGIC_WORD:                  Keyword.Constant,
    TokenKind.REDIRECT:                    Keyword,
    TokenKind.SECTION_HEADER:              Generic.Heading,
    TokenKind.LIST:                        Operator,
    TokenKind.HR:                          Operator,
    TokenKind.TABLE_BRACKET:               Punctuation,
    TokenKind.TABLE_DELIMITER:             Punctuation,
    TokenKind.TABLE_HEADER:                Punctuation,
    TokenKind.TABLE_CELL:                  Punctuation,
    TokenKind.TABLE_ATTRS:                 Name.Attribute,
}


# -----------------------------------------------------------------------------

class WikitextLexer(Lexer):
    name = "Wikitext"
    aliases = ["wikitext", "mediawiki"]
    filenames = ["*.wiki", "*.wikitext"]
    mimetypes = ["text/x-wiki"]

    def __init__(self, **options):
        super().__init__(**options)
        self.highlight_options = options.get("highlight_options") or HighlightOptions.build()

    def get_tokens_unprocessed(self, text):
        tokenizer = WikitextTokenizer(self.highlight_options)
        offset = 0
        for i, line in enumerate(text.split("\n")):
            if i:
                yield offset, Text.Whitespace, "\n"
                offset += 1
            for token in tokenizer.tokenize_line(line, i == 0):
                yield offset, _TOKEN_TYPES[token.kind], token.text
                offset += len(token.text)


# -----------------------------------------------------------------------------
