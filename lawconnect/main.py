"""
FastAPI application entrypoint for the LawConnect backend.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from lawconnect import __version__
from lawconnect.api.routes import router as api_router
from lawconnect.core.config import AppSettings, get_settings
from lawconnect.core.errors import register_exception_handlers
from lawconnect.core.logging import configure_logging

logger = logging.getLogger(__name__)

_CORS_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]
_CORS_METHODS = ["GET", "POST", "OPTIONS"]


def _options_headers(settings: AppSettings, origin: str | None) -> dict[str, str]:
    headers = {
        "Access-Control-Allow-Headers": ", ".join(_CORS_HEADERS),
        "Access-Control-Allow-Methods": ", ".join(_CORS_METHODS),
    }
    if "*" in settings.cors_origins:
        headers["Access-Control-Allow-Origin"] = "*"
    elif origin in settings.cors_origins:
        headers["Access-Control-Allow-Origin"] = origin
        headers["Vary"] = "Origin"
    return headers


def create_app() -> FastAPI:
    """Factory for the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="LawConnect API",
        version=__version__,
        description="Google OAuth token exchange and client email reminders.",
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None if settings.is_production else "/redoc",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=_CORS_METHODS,
        allow_headers=_CORS_HEADERS,
    )
    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api")

    # Preflights are answered by the middleware; this covers any other OPTIONS.
    @app.options("/{path:path}", include_in_schema=False)
    async def answer_options(path: str, request: Request) -> Response:
        return Response(
            status_code=200,
            headers=_options_headers(settings, request.headers.get("origin")),
        )

    logger.info("LawConnect API configured for %s", settings.environment)
    return app


app = create_app()

__all__ = ["app", "create_app"]
