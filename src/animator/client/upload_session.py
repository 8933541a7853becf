"""Client-side state for collecting two images and submitting them."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .client_errors import ClientRequestError

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from .relay_client import RelayClient

MAX_IMAGES = 2
ANIMATION_TYPES = ("morph", "transition", "dissolve")
DEFAULT_ANIMATION_TYPE = "morph"
SUBMIT_FAILED_MESSAGE = "Failed to generate animation. Please try again."


@dataclass(slots=True)
class SelectedImage:
    """Image picked by the user, held in memory until submission."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


@dataclass(slots=True)
class UploadSession:
    """Mutable form state; rendering is a pure function of these fields."""

    images: list[SelectedImage] = field(default_factory=list)
    animation_type: str = DEFAULT_ANIMATION_TYPE
    loading: bool = False
    error: str | None = None
    result: str | None = None

    @property
    def can_submit(self) -> bool:
        return len(self.images) == MAX_IMAGES and not self.loading

    @property
    def accepts_more(self) -> bool:
        return len(self.images) < MAX_IMAGES

    def add_images(self, files: Iterable[SelectedImage]) -> None:
        """Append new picks; anything past the cap is dropped."""
        self.images = [*self.images, *files][:MAX_IMAGES]
        self.error = None

    def remove_image(self, index: int) -> None:
        if 0 <= index < len(self.images):
            del self.images[index]

    def select_animation_type(self, value: str) -> None:
        if value not in ANIMATION_TYPES:
            raise ValueError(f"Unknown animation type '{value}'")
        self.animation_type = value

    async def submit(self, relay: "RelayClient") -> None:
        """Send the selection to the relay and record the outcome."""
        if not self.can_submit:
            return
        self.loading = True
        self.error = None
        try:
            response = await relay.animate(self.images, self.animation_type)
        except ClientRequestError:
            self.error = SUBMIT_FAILED_MESSAGE
        else:
            self.result = response.animationUrl
        finally:
            self.loading = False
