#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Application configuration.

All values can be overridden via environment variables or a .env file.
List values are given as JSON, e.g. ``EXTENSION_TAGS='["ref", "pre"]'``.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from wikihl._version import __version__ as _pkg_version
from wikihl.services.options import (
    DEFAULT_CONTENT_PRESERVING_TAGS,
    DEFAULT_EXTENSION_TAGS,
    DEFAULT_REDIRECT_KEYWORDS,
    DEFAULT_URL_PROTOCOLS,
)


# -----------------------------------------------------------------------------

class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Application ────────────────────────────────────────────────────────

    app_name: str = "wikihl"
    app_version: str = _pkg_version
    debug: bool = False
    environment: Literal["development", "testing", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # ── Highlighting ───────────────────────────────────────────────────────

    url_protocols: list[str] = list(DEFAULT_URL_PROTOCOLS)
    redirect_keywords: list[str] = list(DEFAULT_REDIRECT_KEYWORDS)
    extension_tags: list[str] = list(DEFAULT_EXTENSION_TAGS)
    content_preserving_tags: list[str] = list(DEFAULT_CONTENT_PRESERVING_TAGS)

    # ── Limits ─────────────────────────────────────────────────────────────

    max_content_chars: int = 1_000_000
    max_sessions: int = 256

    # ── CORS ───────────────────────────────────────────────────────────────

    cors_origins: list[str] = [
        "http://localhost:8000",
        "http://localhost:3000",
    ]

    @field_validator("extension_tags", "content_preserving_tags")
    @classmethod
    def lowercase_tags(cls, v: list[str]) -> list[str]:
        return [t.strip().lower() for t in v if t.strip()]

    @field_validator("log_level", mode="before")
    @classmethod
    def uppercase_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    @property
    def is_testing(self) -> bool:
        return self.environment == "testing"

    def highlighter_kwargs(self) -> dict:
        """Keyword arguments for ``WikitextHighlighter`` / ``IncrementalHighlighter``."""
        return {
            "url_protocols": self.url_protocols,
            "redirect_keywords": self.redirect_keywords,
            "extension_tags": self.extension_tags,
            "content_preserving_tags": self.content_preserving_tags,
        }


# -----------------------------------------------------------------------------

@lru_cache
def get_settings() -> Settings:
    return Settings()


# -----------------------------------------------------------------------------
