#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Token vocabulary
================
The closed set of token kinds the tokenizer emits, the single mapping from
kind to public CSS class, and the carried-over multi-line tokenizer state.

CSS class names are a stable public contract: consumers style the output
through CSS, never by inspecting its structure.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# -----------------------------------------------------------------------------

class TokenKind(Enum):
    """Every kind of token a line can be split into."""

    PLAIN = auto()

    # Templates {{...}} and template variables {{{...}}}
    TEMPLATE_TEXT = auto()
    TEMPLATE_BRACKET = auto()
    TEMPLATE_FULL = auto()
    TEMPLATE_VARIABLE_FULL = auto()
    TEMPLATE_VARIABLE_BRACKET = auto()
    TEMPLATE_VARIABLE_NAME = auto()
    TEMPLATE_VARIABLE_DELIMITER = auto()
    TEMPLATE_VARIABLE = auto()

    # Internal links [[...]]
    LINK_FULL = auto()
    LINK_BRACKET = auto()
    LINK_PAGENAME = auto()
    LINK_PIPE = auto()
    LINK_LABEL = auto()

    # External links [http://... label] and bare URLs
    EXTLINK_FULL = auto()
    EXTLINK_BRACKET = auto()
    EXTLINK_PROTOCOL = auto()
    EXTLINK_URL = auto()
    EXTLINK_LABEL = auto()
    FREE_EXTLINK = auto()

    # Comments and tags
    COMMENT = auto()
    COMMENT_OPEN = auto()       # unterminated <!-- ... (continues on later lines)
    HTML_TAG = auto()
    EXT_TAG = auto()
    EXT_TAG_CONTENT = auto()
    EXT_TAG_FULL = auto()
    EXT_TAG_START = auto()

    # Inline leaves
    HTML_ENTITY = auto()
    STRONG_EM = auto()
    STRONG = auto()
    EM = auto()
    SIGNATURE = auto()
    MAGIC_WORD = auto()

    # Line-level constructs
    REDIRECT = auto()
    SECTION_HEADER = auto()
    LIST = auto()
    HR = auto()
    TABLE_BRACKET = auto()
    TABLE_DELIMITER = auto()
    TABLE_HEADER = auto()
    TABLE_CELL = auto()
    TABLE_ATTRS = auto()


# ── Kind → public class vocabulary ───────────────────────────────────────────
# ``{detail}`` is filled from Token.detail (tag name or header level).

CSS_CLASSES: dict[TokenKind, str] = {
    TokenKind.PLAIN:                       "",
    TokenKind.TEMPLATE_TEXT:               "wt-template",
    TokenKind.TEMPLATE_BRACKET:            "wt-template-bracket",
    TokenKind.TEMPLATE_FULL:               "wt-template-full",
    TokenKind.TEMPLATE_VARIABLE_FULL:      "wt-template-var",
    TokenKind.TEMPLATE_VARIABLE_BRACKET:   "wt-templatevariable-bracket",
    TokenKind.TEMPLATE_VARIABLE_NAME:      "wt-templatevariable-name",
    TokenKind.TEMPLATE_VARIABLE_DELIMITER: "wt-templatevariable-delimiter",
    TokenKind.TEMPLATE_VARIABLE:           "wt-templatevariable",
    TokenKind.LINK_FULL:                   "wt-link-full",
    TokenKind.LINK_BRACKET:                "wt-link-bracket",
    TokenKind.LINK_PAGENAME:               "wt-link-pagename",
    TokenKind.LINK_PIPE:                   "wt-link-pipe",
    TokenKind.LINK_LABEL:                  "wt-link-label",
    TokenKind.EXTLINK_FULL:                "wt-extlink-full",
    TokenKind.EXTLINK_BRACKET:             "wt-extlink-bracket",
    TokenKind.EXTLINK_PROTOCOL:            "wt-extlink-protocol",
    TokenKind.EXTLINK_URL:                 "wt-extlink-url",
    TokenKind.EXTLINK_LABEL:               "wt-extlink-label",
    TokenKind.FREE_EXTLINK:                "wt-free-extlink",
    TokenKind.COMMENT:                     "wt-comment",
    TokenKind.COMMENT_OPEN:                "wt-comment",
    TokenKind.HTML_TAG:                    "wt-htmltag",
    TokenKind.EXT_TAG:                     "wt-exttag wt-ext-{detail}",
    TokenKind.EXT_TAG_CONTENT:             "wt-ext-{detail}",
    TokenKind.EXT_TAG_FULL:                "wt-ext-{detail}-full",
    TokenKind.EXT_TAG_START:               "wt-ext-{detail}-start",
    TokenKind.HTML_ENTITY:                 "wt-html-entity",
    TokenKind.STRONG_EM:                   "wt-strong-em",
    TokenKind.STRONG:                      "wt-strong",
    TokenKind.EM:                          "wt-em",
    TokenKind.SIGNATURE:                   "wt-signature",
    TokenKind.MAGIC_WORD:                  "wt-magic-word",
    TokenKind.REDIRECT:                    "wt-redirect",
    TokenKind.SECTION_HEADER:              "wt-section-header wt-section-{detail}",
    TokenKind.LIST:                        "wt-list",
    TokenKind.HR:                          "wt-hr",
    TokenKind.TABLE_BRACKET:               "wt-table-bracket",
    TokenKind.TABLE_DELIMITER:             "wt-table-delimiter",
    TokenKind.TABLE_HEADER:                "wt-table-header",
    TokenKind.TABLE_CELL:                  "wt-table-cell",
    TokenKind.TABLE_ATTRS:                 "wt-table-attrs",
}


def css_class(kind: TokenKind, detail: Optional[str] = None) -> str:
    """Return the public CSS class string for *kind*."""
    template = CSS_CLASSES[kind]
    return template.format(detail=detail or "") if "{" in template else template


# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Token:
    """
    One classified, non-empty substring of a line.

    Attributes:
        text:   the exact characters consumed
        kind:   the token kind
        detail: tag name for extension-tag kinds, level for section headers
    """

    text: str
    kind: TokenKind
    detail: Optional[str] = None

    @property
    def css_class(self) -> str:
        return css_class(self.kind, self.detail)

    def to_dict(self) -> dict:
        return {"text": self.text, "kind": self.kind.name.lower(), "class": self.css_class}


# -----------------------------------------------------------------------------

class TokenizerState(BaseModel):
    """Multi-line context carried from one line to the next.

    Immutable: the tokenizer replaces its state, it never edits one in place,
    so per-line snapshots held by the incremental cache stay independent.
    ``model_dump()`` / ``model_validate()`` are the plain-value export/import.
    """

    model_config = ConfigDict(frozen=True)

    in_multiline_comment: bool = False
    comment_buffer: str = ""
    in_extension_tag: Optional[str] = None
    template_depth: int = Field(default=0, ge=0)


INITIAL_STATE = TokenizerState()


# -----------------------------------------------------------------------------
