# -*- coding: utf-8 -*-
"""FastAPI application serving the provider switch API."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .. import __version__
from ..config.paths import PathsOptions
from ..errors import (
    BackupNotFoundError,
    JsonParseError,
    ProviderNotFoundError,
    ProviderSwitchError,
)
from .routers import backups_router, providers_router

logger = logging.getLogger(__name__)


def _status_for(exc: ProviderSwitchError) -> int:
    if isinstance(exc, (ProviderNotFoundError, BackupNotFoundError)):
        return 404
    if isinstance(exc, JsonParseError):
        return 500
    return 400


async def _handle_switch_error(
    request: Request,
    exc: ProviderSwitchError,
) -> JSONResponse:
    status = _status_for(exc)
    if status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url, exc)
    return JSONResponse(status_code=status, content={"error": str(exc)})


def create_app(options: Optional[PathsOptions] = None) -> FastAPI:
    """Build the API app; *options* override config/settings locations."""
    app = FastAPI(title="claude-provider-switch", version=__version__)
    app.state.paths_options = options or PathsOptions()
    app.add_exception_handler(ProviderSwitchError, _handle_switch_error)

    app.include_router(providers_router)
    app.include_router(backups_router)

    @app.get("/api/health", tags=["health"])
    async def health() -> dict:
        return {"status": "ok"}

    return app
