from __future__ import annotations

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from loguru import logger

from core.exceptions import RelayError
from core.logging_config import setup_logging
from core.settings import Settings
from core.storage import VideoStore
from core.storage.local import LocalVideoStore
from services.api.exception_handlers import (
    relay_exception_handler,
    request_validation_handler,
    unhandled_exception_handler,
)
from services.api.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from services.api.routes import router


def create_app(settings: Settings | None = None, store: VideoStore | None = None) -> FastAPI:
    """Build the API around one settings object and one store.

    Both are created once here and shared by every request through
    ``app.state``.
    """
    settings = settings or Settings.load()

    setup_logging(
        level=settings.log_level,
        json_format=settings.json_logging,
        log_file=settings.log_file,
    )

    app = FastAPI(
        title="Video Relay API",
        version="0.1.0",
        description="Stores uploaded videos by schema and worker id and serves them back",
    )

    app.state.settings = settings
    app.state.store = store or LocalVideoStore(settings.video_base_dir)

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(RelayError, relay_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(router)

    logger.info(
        "Video relay configured: base_dir={base_dir} public_url={url}",
        base_dir=str(settings.video_base_dir),
        url=settings.base_url,
    )
    return app


__all__ = ["create_app"]
