"""HTTP client for the animation relay."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

import httpx
from httpx import AsyncClient
from pydantic import ValidationError as SchemaValidationError

from ..animation.animation_schemas import AnimationResponse
from .client_errors import ClientRequestError
from .upload_session import SelectedImage

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RelayClient:
    """Convenience wrapper around :class:`httpx.AsyncClient` for ``/animate``."""

    http: AsyncClient
    log: logging.Logger = field(default_factory=lambda: logger)

    async def animate(
        self, images: Sequence[SelectedImage], animation_type: str
    ) -> AnimationResponse:
        """Upload both images with the chosen style and return the relay reply."""
        files = [
            ("images", (image.filename, image.content, image.content_type))
            for image in images
        ]
        try:
            response = await self.http.post(
                "/animate", files=files, data={"animationType": animation_type}
            )
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError, OSError) as exc:
            self.log.error("client.animate.failed", extra={"error": str(exc)})
            raise ClientRequestError(str(exc)) from exc

        if not response.is_success:
            self.log.error(
                "client.animate.bad_status",
                extra={"status_code": response.status_code, "body": response.text[:500]},
            )
            raise ClientRequestError(f"Relay responded with status {response.status_code}")
        try:
            return AnimationResponse.model_validate(response.json())
        except (ValueError, SchemaValidationError) as exc:
            raise ClientRequestError("Relay returned a malformed body") from exc
