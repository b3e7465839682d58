"""FastAPI application factory.

Instantiate with:
    uvicorn schooladmin.backend.api.app:app --reload --port 8000
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from schooladmin.backend.api.router import router
from schooladmin.backend.core.storage import (
    RecordNotFoundError,
    StoreError,
    UnknownResourceError,
    build_store,
)
from schooladmin.backend.core.utils.config import CONFIG_ENV, get_default_config, load_config

logger = logging.getLogger(__name__)


def _resolve_config(config: dict[str, Any] | None) -> dict[str, Any]:
    if config is not None:
        return config
    path = os.getenv(CONFIG_ENV)
    if path:
        return load_config(path)
    if Path("configs/default_config.yaml").exists():
        return load_config("configs/default_config.yaml")
    return get_default_config()


def _cors_origins(config: dict[str, Any]) -> list[str]:
    # Environment wins over the config file, e.g. CORS_ORIGINS="https://your-domain.com"
    env = os.getenv("CORS_ORIGINS")
    if env:
        return [origin.strip() for origin in env.split(",") if origin.strip()]
    return list(config["api"].get("cors_origins", []))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the record store for the lifetime of the process."""
    app.state.store = build_store(app.state.config)
    logger.info(
        "Backend ready – storage backend: %s", app.state.config["storage"]["backend"]
    )
    try:
        yield
    finally:
        app.state.store.close()


def create_app(config: dict[str, Any] | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    cfg = _resolve_config(config)

    application = FastAPI(
        title="School Administration API",
        version="0.1.0",
        description="Mock REST backend for the institute administration dashboard",
        lifespan=lifespan,
    )
    application.state.config = cfg

    # ── CORS ───────────────────────────────────────────────────────────────
    application.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(cfg),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Store errors → HTTP ────────────────────────────────────────────────
    application.add_exception_handler(UnknownResourceError, _not_found_handler)
    application.add_exception_handler(RecordNotFoundError, _not_found_handler)
    application.add_exception_handler(StoreError, _store_error_handler)

    # ── Register all API routes under /api ─────────────────────────────────
    application.include_router(router, prefix="/api")

    # ── Suppress noisy access-log lines for health polls ───────────────────
    _install_access_log_filter()

    return application


async def _not_found_handler(request: Request, exc: StoreError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"message": str(exc)})


async def _store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content={"message": str(exc)})


class _QuietPollFilter(logging.Filter):
    """Drop uvicorn access-log records for /api/health."""

    _NOISY = ("/api/health",)

    def filter(self, record: logging.LogRecord) -> bool:
        msg = record.getMessage()
        return not any(path in msg for path in self._NOISY)


def _install_access_log_filter() -> None:
    """Attach the filter to uvicorn's access logger (if it exists)."""
    uvicorn_access = logging.getLogger("uvicorn.access")
    if not any(isinstance(f, _QuietPollFilter) for f in uvicorn_access.filters):
        uvicorn_access.addFilter(_QuietPollFilter())


# Module-level instance used by uvicorn and tests.
app = create_app()
