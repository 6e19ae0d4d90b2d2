#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
wikihl — FastAPI application factory
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from wikihl.core.config import get_settings
from wikihl.routes import render, sessions
from wikihl.services.options import HighlightOptions
from wikihl.services.sessions import SessionStore


log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle."""
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    log.info("%s %s starting (%s)", settings.app_name, settings.app_version, settings.environment)
    yield
    log.info("%s stopping, %d session(s) open", settings.app_name, len(app.state.sessions))


# -----------------------------------------------------------------------------

def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Syntax highlighting for MediaWiki wikitext.",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )

    # ── Highlighting state ────────────────────────────────────────────────

    app.state.highlight_options = HighlightOptions.build(**settings.highlighter_kwargs())
    app.state.sessions = SessionStore(app.state.highlight_options, settings.max_sessions)

    # ── CORS ──────────────────────────────────────────────────────────────

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── API routers ───────────────────────────────────────────────────────

    prefix = "/api/v1"

    app.include_router(render.router,   prefix=prefix)
    app.include_router(sessions.router, prefix=prefix)

    # ── Global exception handlers ─────────────────────────────────────────

    @app.exception_handler(404)
    async def not_found(request: Request, exc):
        detail = getattr(exc, "detail", None) or "Not found"
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": detail},
        )

    @app.exception_handler(500)
    async def server_error(request: Request, exc):
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    # ── Health check ──────────────────────────────────────────────────────

    @app.get("/api/health", tags=["system"])
    async def health():
        return {"status": "ok", "version": settings.app_version, "app": settings.app_name}

    return app


# -----------------------------------------------------------------------------

app = create_app()


# -----------------------------------------------------------------------------
