"""Domain service relaying uploads to the animation provider."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

import structlog
from fastapi import UploadFile

from ..media.artifact_store import ArtifactStore
from ..media.upload_store import UploadStore
from ..providers.providers_base import AnimationProvider
from .animation_errors import ValidationError
from .animation_models import (
    DEFAULT_ANIMATION_TYPE,
    REQUIRED_IMAGE_COUNT,
    AnimationResult,
    RequestStage,
    StoredUpload,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AnimationService:
    """Coordinates a single relay request from upload to stored artifact."""

    provider: AnimationProvider
    upload_store: UploadStore
    artifact_store: ArtifactStore
    log: logging.Logger = field(default_factory=lambda: logger)
    stage_log: structlog.stdlib.BoundLogger = field(
        default_factory=lambda: structlog.get_logger("animator.stages")
    )

    async def generate(
        self,
        images: Sequence[UploadFile],
        animation_type: str | None = None,
    ) -> AnimationResult:
        """Run the relay pipeline and return the stored artifact reference.

        Temporary uploads are removed only once the artifact is fully stored;
        a failure at any later step leaves them for the cleanup script.
        """
        self._advance(RequestStage.RECEIVED, image_count=len(images))
        if len(images) != REQUIRED_IMAGE_COUNT:
            self.log.warning(
                "animate.invalid_image_count", extra={"image_count": len(images)}
            )
            raise ValidationError("Two images are required")
        style = resolve_animation_type(animation_type)
        self._advance(RequestStage.VALIDATED, animation_type=style)

        stored: list[StoredUpload] = []
        for upload in images:
            stored.append(await self.upload_store.persist_upload(upload))

        self._advance(RequestStage.PROVIDER_SUBMITTED, provider=self.provider.label)
        artifact_url = await self.provider.submit(stored, style)
        self._advance(RequestStage.PROVIDER_RESULT_RECEIVED, artifact_url=artifact_url)

        self._advance(RequestStage.ARTIFACT_FETCHING)
        artifact = await self.artifact_store.save_stream(
            self.provider.fetch(artifact_url)
        )
        self._advance(
            RequestStage.ARTIFACT_STORED,
            public_path=artifact.public_path,
            size_bytes=artifact.size_bytes,
        )

        self.upload_store.discard(stored)
        self.log.info(
            "animate.completed",
            extra={
                "provider": self.provider.label,
                "animation_url": artifact.public_path,
            },
        )
        return AnimationResult(
            animation_url=artifact.public_path,
            service_used=self.provider.label,
        )

    def _advance(self, stage: RequestStage, **details: object) -> None:
        self.stage_log.info("animate.stage", stage=stage.value, **details)


def resolve_animation_type(value: str | None) -> str:
    """Return the requested style, falling back to the default when blank."""
    if value is None or not value.strip():
        return DEFAULT_ANIMATION_TYPE
    return value
