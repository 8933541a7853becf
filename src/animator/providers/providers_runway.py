"""Runway ML provider implementation."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import ExitStack
from dataclasses import dataclass, field
from typing import Any

import httpx

from ..animation.animation_errors import UpstreamRequestError, UpstreamResponseError
from ..animation.animation_models import StoredUpload
from .providers_base import AnimationProvider

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


@dataclass(slots=True)
class RunwayProvider(AnimationProvider):
    """Call the Runway animation endpoint with a single synchronous request."""

    api_url: str
    api_key: str
    timeout_seconds: float = 120.0
    transport: httpx.AsyncBaseTransport | None = None
    label: str = "Runway ML"
    log: logging.Logger = field(default_factory=lambda: logger)

    async def submit(self, images: Sequence[StoredUpload], style: str) -> str:
        if len(images) != 2:
            raise ValueError("Runway expects exactly two images")
        headers = {"Authorization": f"Bearer {self.api_key}"}
        data = {"animationType": style}

        with ExitStack() as stack:
            files = {
                f"image{index}": (
                    image.filename,
                    stack.enter_context(image.path.open("rb")),
                    image.content_type,
                )
                for index, image in enumerate(images, start=1)
            }
            try:
                async with self._client() as client:
                    response = await client.post(
                        self.api_url, headers=headers, data=data, files=files
                    )
            except httpx.HTTPError as exc:
                self.log.error(
                    "provider.submit.failed",
                    extra={"provider": self.label, "url": self.api_url, "error": str(exc)},
                )
                raise UpstreamRequestError(f"Runway request failed: {exc}") from exc

        if not response.is_success:
            self.log.error(
                "provider.submit.bad_status",
                extra={
                    "provider": self.label,
                    "status_code": response.status_code,
                    "body": response.text[:500],
                },
            )
            raise UpstreamRequestError(
                f"Runway responded with status {response.status_code}"
            )
        return _extract_animation_url(response)

    async def fetch(self, artifact_url: str) -> AsyncIterator[bytes]:
        try:
            async with self._client() as client:
                async with client.stream("GET", artifact_url) as response:
                    if not response.is_success:
                        raise UpstreamRequestError(
                            f"Artifact download failed with status {response.status_code}"
                        )
                    async for chunk in response.aiter_bytes(CHUNK_SIZE):
                        yield chunk
        except httpx.HTTPError as exc:
            self.log.error(
                "provider.fetch.failed",
                extra={"provider": self.label, "url": artifact_url, "error": str(exc)},
            )
            raise UpstreamRequestError(f"Artifact download failed: {exc}") from exc

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout_seconds, transport=self.transport)


def _extract_animation_url(response: httpx.Response) -> str:
    try:
        body: Any = response.json()
    except ValueError as exc:
        raise UpstreamResponseError("Runway response is not valid JSON") from exc
    if not isinstance(body, dict):
        raise UpstreamResponseError("Runway response is not a JSON object")
    animation_url = body.get("animationUrl")
    if not isinstance(animation_url, str) or not animation_url.strip():
        raise UpstreamResponseError("Runway response missing animationUrl")
    return animation_url
