"""Dependency wiring helpers."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles

from .animation.animation_api import router as animation_router
from .animation.animation_service import AnimationService
from .config import AppConfig
from .media.artifact_store import PUBLIC_PREFIX, ArtifactStore
from .media.upload_store import UploadStore
from .providers.providers_base import AnimationProvider
from .providers.providers_factory import create_provider

logger = logging.getLogger(__name__)


def include_routers(
    app: FastAPI,
    config: AppConfig,
    *,
    provider: AnimationProvider | None = None,
) -> None:
    """Create storage directories, attach services and mount routes."""
    upload_store = UploadStore(config.upload_dir)
    artifact_store = ArtifactStore(config.animations_dir)
    upload_store.ensure_root()
    artifact_store.ensure_root()

    animation_service = AnimationService(
        provider=provider or create_provider("runway", config),
        upload_store=upload_store,
        artifact_store=artifact_store,
    )

    app.state.config = config
    app.state.upload_store = upload_store
    app.state.artifact_store = artifact_store
    app.state.animation_service = animation_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(Exception, _unhandled_error)
    app.include_router(animation_router)
    app.mount(
        PUBLIC_PREFIX,
        StaticFiles(directory=config.animations_dir),
        name="animations",
    )


async def _unhandled_error(request: Request, exc: Exception) -> PlainTextResponse:
    logger.error(
        "app.unhandled_error",
        exc_info=exc,
        extra={"path": request.url.path, "method": request.method},
    )
    return PlainTextResponse("Something broke!", status_code=500)
