#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Content parsers
===============
Each function takes the text of one *complete* construct (brackets already
balanced by the tokenizer) and returns highlighted HTML, re-parsing the
interior recursively.

Link display text after ``|`` and external-link labels are left without a
class on purpose.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import re
from collections.abc import Collection
from enum import Enum
from typing import Optional

from .matchers import find_close_tag
from .spans import create_span, escape_html, find_balanced


# -----------------------------------------------------------------------------

_ARG_NAME_RE = re.compile(r"([^=|]*?)=")
_SPECIAL_RE  = re.compile(r"[{\[|]")
_TAG_NAME_RE = re.compile(r"</?([a-z][^\s>/]*)", re.IGNORECASE)
_CLOSE_NAME_RE = re.compile(r"</([a-z][^\s>/]*)\s*>$", re.IGNORECASE)
_START_RE    = re.compile(r"(<[^>]+>)(.*)", re.DOTALL)
_END_RE      = re.compile(r"(.*)(</[^>]+>)", re.DOTALL)


class TagShape(Enum):
    """Which part of an extension-tag construct a token holds."""
    FULL = "full"       # <tag>content</tag> on one line
    START = "start"     # <tag>content… continuing on later lines
    END = "end"         # …content</tag> closing a multi-line run


# -----------------------------------------------------------------------------
# Templates  {{name|arg|key=value}}
# -----------------------------------------------------------------------------

def parse_template(text: str) -> str:
    """Highlight ``{{…}}`` including nested templates, links and arguments."""
    return (
        create_span("{{", "wt-template-bracket")
        + _parse_template_inner(text[2:-2])
        + create_span("}}", "wt-template-bracket")
    )


def _parse_template_inner(content: str) -> str:
    parts: list[str] = []
    pos = 0
    while pos < len(content):
        rest = content[pos:]

        if rest.startswith("{{{"):
            nested = find_balanced(rest, "{{{", "}}}")
            if nested:
                parts.append(parse_template_parameter(nested.content))
                pos += nested.end
                continue

        if rest.startswith("{{"):
            nested = find_balanced(rest, "{{", "}}")
            if nested:
                parts.append(parse_template(nested.content))
                pos += nested.end
                continue

        if rest.startswith("[["):
            nested = find_balanced(rest, "[[", "]]")
            if nested:
                parts.append(parse_link(nested.content))
                pos += nested.end
                continue

        if rest.startswith("|"):
            parts.append(create_span("|", "wt-template-delimiter"))
            arg = _ARG_NAME_RE.match(rest, 1)
            if arg:
                parts.append(create_span(arg.group(1), "wt-template-argument-name"))
                parts.append(create_span("=", "wt-template-delimiter"))
                pos = pos + arg.end()
            else:
                pos += 1
            continue

        special = _SPECIAL_RE.search(rest)
        if special is None:
            parts.append(create_span(rest, "wt-template"))
            break
        # an unbalanced { or [ is just one more character of text
        stop = special.start() or 1
        parts.append(create_span(rest[:stop], "wt-template"))
        pos += stop

    return "".join(parts)


# -----------------------------------------------------------------------------
# Template parameters  {{{name|default}}}
# -----------------------------------------------------------------------------

def parse_template_parameter(text: str) -> str:
    """Highlight ``{{{name|default}}}``; the default is never split further."""
    inner = text[3:-3]
    name, pipe, default = inner.partition("|")
    parts = [create_span("{{{", "wt-templatevariable-bracket")]
    parts.append(create_span(name, "wt-templatevariable-name"))
    if pipe:
        parts.append(create_span("|", "wt-templatevariable-delimiter"))
        parts.append(create_span(default, "wt-templatevariable"))
    parts.append(create_span("}}}", "wt-templatevariable-bracket"))
    return "".join(parts)


# -----------------------------------------------------------------------------
# Links
# -----------------------------------------------------------------------------

def parse_link(text: str) -> str:
    """Highlight ``[[Page|Display]]``.  Everything from the first ``|`` on stays unstyled."""
    inner = text[2:-2]
    pipe_idx = inner.find("|")
    page, rest = (inner, "") if pipe_idx == -1 else (inner[:pipe_idx], inner[pipe_idx:])
    return (
        create_span("[[", "wt-link-bracket")
        + create_span(page, "wt-link-pagename")
        + escape_html(rest)
        + create_span("]]", "wt-link-bracket")
    )


def parse_external_link(text: str) -> str:
    """Highlight ``[url label]``.  The label stays unstyled."""
    inner = text[1:-1]
    url, space, label = inner.partition(" ")
    return (
        create_span("[", "wt-extlink-bracket")
        + create_span(url, "wt-extlink")
        + escape_html(space + label)
        + create_span("]", "wt-extlink-bracket")
    )


# -----------------------------------------------------------------------------
# Tags
# -----------------------------------------------------------------------------

def parse_tag(
    text: str,
    shape: Optional[TagShape],
    extension_tags: Collection[str],
) -> str:
    """Highlight an HTML or extension tag token.

    Unknown tag names become one ``wt-htmltag`` span.  Extension tags are split
    into open tag / content / close tag according to *shape*; without a shape
    (a lone tag) the whole text is one tag span.
    """
    # a closing half starts with content, so its name comes from the trailing tag
    m = _CLOSE_NAME_RE.search(text) if shape is TagShape.END else _TAG_NAME_RE.match(text)
    if not m:
        return escape_html(text)

    name = m.group(1).lower()
    if name not in extension_tags:
        return create_span(text, "wt-htmltag")

    base_class = f"wt-ext-{name}"
    tag_class = f"wt-exttag {base_class}"

    if shape is TagShape.FULL:
        open_tag = re.search(rf"<{re.escape(name)}(?:\s[^>]*)?>", text, re.IGNORECASE)
        close_tag = None
        if open_tag:
            close_tag = find_close_tag(text, name, open_tag.end())
        if open_tag and close_tag:
            return "".join(_spans(
                (text[:open_tag.start()], base_class),
                (open_tag.group(0), tag_class),
                (text[open_tag.end():close_tag.start()], base_class),
                (close_tag.group(0), tag_class),
                (text[close_tag.end():], base_class),
            ))

    if shape is TagShape.START:
        m = _START_RE.match(text)
        if m:
            return "".join(_spans((m.group(1), tag_class), (m.group(2), base_class)))

    if shape is TagShape.END:
        m = _END_RE.fullmatch(text)
        if m:
            return "".join(_spans((m.group(1), base_class), (m.group(2), tag_class)))

    return create_span(text, tag_class)


def _spans(*segments: tuple[str, str]) -> list[str]:
    return [create_span(seg, cls) for seg, cls in segments if seg]


# -----------------------------------------------------------------------------
