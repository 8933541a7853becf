"""Factory for animation providers."""

from ..config import AppConfig
from .providers_base import AnimationProvider
from .providers_runway import RunwayProvider


def create_provider(name: str, config: AppConfig) -> AnimationProvider:
    """Instantiate provider by name."""
    lower = name.lower()
    if lower == "runway":
        return RunwayProvider(
            api_url=config.runway_api_url,
            api_key=config.runway_api_key,
            timeout_seconds=config.provider_timeout_seconds,
        )
    raise ValueError(f"Unsupported provider '{name}'")
