#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Highlighting options
====================
Defaults for the four configurable vocabularies and the compiled form the
tokenizer consumes.  Each option falls back to its default on its own, and an
empty collection means "recognise nothing of that category".
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional, Union


# -----------------------------------------------------------------------------
# Defaults
# -----------------------------------------------------------------------------

DEFAULT_URL_PROTOCOLS: tuple[str, ...] = (
    "ftp", "ftps", "git", "gopher", "http", "https", "irc", "ircs", "mms",
    "nntp", "redis", "sftp", "ssh", "svn", "telnet", "worldwind",
)

DEFAULT_REDIRECT_KEYWORDS: tuple[str, ...] = (
    "REDIRECT",
    "WEITERLEITUNG",
    "REDIRECCIÓN",
    "REDIRECTION",
    "RINVIA",
    "PRZEKIERUJ",
    "REDIRECIONAMENTO",
    "ПЕРЕНАПРАВЛЕНИЕ",
    "重定向",
    "リダイレクト",
    "ĐỔI",
)

DEFAULT_EXTENSION_TAGS: tuple[str, ...] = (
    "nowiki", "pre", "ref", "references", "poem", "gallery", "tabber",
    "syntaxhighlight", "source",
)

# Tags whose body is never tokenized as wikitext.
DEFAULT_CONTENT_PRESERVING_TAGS: tuple[str, ...] = (
    "nowiki", "pre", "syntaxhighlight", "source", "code", "tabber",
)

# A protocol only counts when followed by a character that can continue a URL.
_PROTOCOL_TAIL = r"(?=[^\s\u00a0{\[\]<>~).,'])"

_NEVER = re.compile(r"(?!)")


ProtocolSpec = Union[re.Pattern, Iterable[str], None]


# -----------------------------------------------------------------------------

def compile_protocols(protocols: ProtocolSpec) -> re.Pattern:
    """Build the protocol-prefix pattern.

    *protocols* is either a ready pattern (used as is) or an iterable of
    protocol names, each matched literally and case-insensitively.
    """
    if protocols is None:
        protocols = DEFAULT_URL_PROTOCOLS
    if isinstance(protocols, re.Pattern):
        return protocols
    if isinstance(protocols, str):
        try:
            return re.compile(protocols, re.IGNORECASE)
        except re.error as exc:
            raise ValueError(f"Invalid URL protocol pattern {protocols!r}: {exc}") from exc
    names = [p.strip() for p in protocols if p and p.strip()]
    if not names:
        return _NEVER
    # Longest first so "https" is not cut short by "http".
    names.sort(key=len, reverse=True)
    alternation = "|".join(re.escape(n) for n in names)
    return re.compile(f"(?:{alternation}){_PROTOCOL_TAIL}", re.IGNORECASE)


def compile_redirect(keywords: Optional[Iterable[str]]) -> re.Pattern:
    """Build the first-line redirect pattern; keywords are escaped literally."""
    if keywords is None:
        keywords = DEFAULT_REDIRECT_KEYWORDS
    words = [k for k in keywords if k]
    if not words:
        return _NEVER
    alternation = "|".join("#" + re.escape(k) for k in words)
    return re.compile(rf"^\s*(?:{alternation})(\s*:)?\s*(?=\[\[)", re.IGNORECASE)


def _tag_set(tags: Optional[Iterable[str]], default: Iterable[str]) -> frozenset[str]:
    if tags is None:
        tags = default
    return frozenset(t.strip().lower() for t in tags if t and t.strip())


# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class HighlightOptions:
    url_protocols: re.Pattern
    redirect: re.Pattern
    extension_tags: frozenset[str]
    content_preserving_tags: frozenset[str]

    @classmethod
    def build(
        cls,
        url_protocols: ProtocolSpec = None,
        redirect_keywords: Optional[Iterable[str]] = None,
        extension_tags: Optional[Iterable[str]] = None,
        content_preserving_tags: Optional[Iterable[str]] = None,
    ) -> "HighlightOptions":
        preserving = _tag_set(content_preserving_tags, DEFAULT_CONTENT_PRESERVING_TAGS)
        return cls(
            url_protocols=compile_protocols(url_protocols),
            redirect=compile_redirect(redirect_keywords),
            # Content-preserving tags are always styled as extension tags.
            extension_tags=_tag_set(extension_tags, DEFAULT_EXTENSION_TAGS) | preserving,
            content_preserving_tags=preserving,
        )


DEFAULT_OPTIONS = HighlightOptions.build()


# -----------------------------------------------------------------------------
