"""Abstract animation provider definition."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Sequence

from ..animation.animation_models import StoredUpload


class AnimationProvider(ABC):
    """Base interface for animation providers.

    A provider turns two images plus a style string into a URL of a generated
    artifact, and knows how to stream that artifact back. Adding a provider
    means adding a subclass and a branch in ``create_provider``.
    """

    label: str

    @abstractmethod
    async def submit(self, images: Sequence[StoredUpload], style: str) -> str:
        """Submit both images and return the artifact URL."""

    @abstractmethod
    def fetch(self, artifact_url: str) -> AsyncIterator[bytes]:
        """Stream the artifact body chunk by chunk."""
