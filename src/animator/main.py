"""FastAPI application entry point."""

from fastapi import FastAPI

from .config import AppConfig, load_config
from .dependencies import include_routers
from .logging import configure_logging
from .providers.providers_base import AnimationProvider


def create_app(
    config: AppConfig | None = None,
    *,
    provider: AnimationProvider | None = None,
) -> FastAPI:
    """Build FastAPI instance with configured dependencies."""
    configure_logging()
    cfg = config or load_config()
    app = FastAPI(title="Photo Animation Relay")
    include_routers(app, cfg, provider=provider)
    return app
