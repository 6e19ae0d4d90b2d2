#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pytest fixtures for wikihl tests.
Each API test gets a fresh application, so editing sessions never leak
between tests.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from wikihl.core.config import get_settings
from wikihl.main import create_app
from wikihl.services.renderer import WikitextHighlighter


# -----------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached per process; drop the cache around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest_asyncio.fixture(scope="function")
async def client():
    """HTTP test client wired to a fresh application."""
    app = create_app()

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# -----------------------------------------------------------------------------
# Helper functions for tests
# -----------------------------------------------------------------------------

def full_pass(lines: list[str]) -> list[str]:
    """Per-line HTML of *lines* highlighted from scratch."""
    hl = WikitextHighlighter()
    return hl.render_lines(hl.tokenize_lines(lines))


def kinds(tokens) -> list[tuple]:
    return [(t.text, t.kind) for t in tokens]


# -----------------------------------------------------------------------------
