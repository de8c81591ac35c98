"""FastAPI application entry point."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response

from . import __version__
from .config import AppConfig, load_config
from .dependencies import include_routers
from .logging import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    config: AppConfig = app.state.config
    logger.info(
        "app.startup",
        extra={"environment": config.plm.environment, "tenant": config.credentials.tenant_id},
    )
    yield
    await app.state.task_queue.shutdown()
    logger.info("app.shutdown")


async def log_requests(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    logger.info("http.request", extra={"method": request.method, "path": request.url.path})
    return await call_next(request)


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Build FastAPI instance with configured dependencies."""
    cfg = config or load_config()
    configure_logging(cfg.log_settings)
    app = FastAPI(title="StyleCode Numerator", version=__version__, lifespan=lifespan)
    app.middleware("http")(log_requests)
    include_routers(app, cfg)
    return app


app = create_app()
