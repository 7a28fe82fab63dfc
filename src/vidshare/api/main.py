"""FastAPI application for the vidshare API."""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from starlette.middleware.base import RequestResponseEndpoint
from starlette.responses import Response

from vidshare import __version__
from vidshare.api.exception_handlers import register_exception_handlers
from vidshare.api.middleware import RequestIdMiddleware
from vidshare.api.routers import (
    announcement,
    comment,
    health,
    playlist,
    user,
    video,
    video_engagement,
)
from vidshare.config.database import DatabaseManager
from vidshare.config.settings import Settings, settings as default_settings
from vidshare.logging_config import configure_logging

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler; disposes the engine on shutdown."""
    logger.info("vidshare API %s starting", __version__)
    yield
    await app.state.db_manager.close()
    logger.info("vidshare API stopped")


def _client_address(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for", "")
    if forwarded:
        return forwarded.partition(",")[0].strip()
    return request.client.host if request.client else "unknown"


def _level_for(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


async def log_requests(request: Request, call_next: RequestResponseEndpoint) -> Response:
    """Log each procedure call and its outcome; failures log louder."""
    started = time.perf_counter()
    logger.info(
        "-> %s %s from %s", request.method, request.url.path, _client_address(request)
    )
    response = await call_next(request)
    logger.log(
        _level_for(response.status_code),
        "<- %s %s %d in %.3fs",
        request.method,
        request.url.path,
        response.status_code,
        time.perf_counter() - started,
    )
    return response


def create_app(
    settings: Settings | None = None,
    db_manager: DatabaseManager | None = None,
) -> FastAPI:
    """
    Build the vidshare FastAPI application.

    ``settings`` defaults to the environment-derived module settings and
    ``db_manager`` to a fresh manager over those settings; tests pass both.
    """
    settings = settings or default_settings
    configure_logging(settings.log_level)

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Video sharing procedures: videos, engagement, follows, "
        "comments, playlists and announcements",
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db_manager = db_manager or DatabaseManager(settings)

    register_exception_handlers(app)

    # Added last so it wraps log_requests and the id is bound while logging
    app.middleware("http")(log_requests)
    app.add_middleware(RequestIdMiddleware)

    for router in (
        health.router,
        video.router,
        video_engagement.router,
        user.router,
        comment.router,
        playlist.router,
        announcement.router,
    ):
        app.include_router(router, prefix=API_PREFIX)

    return app


app = create_app()
