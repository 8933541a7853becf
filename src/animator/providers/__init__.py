"""Adapters for external animation providers."""

from .providers_base import AnimationProvider
from .providers_factory import create_provider
from .providers_runway import RunwayProvider

__all__ = [
    "AnimationProvider",
    "RunwayProvider",
    "create_provider",
]
