"""Data structures for the animation pipeline."""

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

DEFAULT_ANIMATION_TYPE = "morph"
REQUIRED_IMAGE_COUNT = 2


class RequestStage(StrEnum):
    """Per-request lifecycle, logged as the handler advances."""

    RECEIVED = "received"
    VALIDATED = "validated"
    PROVIDER_SUBMITTED = "provider_submitted"
    PROVIDER_RESULT_RECEIVED = "provider_result_received"
    ARTIFACT_FETCHING = "artifact_fetching"
    ARTIFACT_STORED = "artifact_stored"
    RESPONDED = "responded"
    FAILED = "failed"


@dataclass(slots=True)
class StoredUpload:
    """Inbound image copied to the upload directory."""

    path: Path
    filename: str
    content_type: str
    size_bytes: int


@dataclass(slots=True)
class StoredArtifact:
    """Generated artifact persisted under the animations directory."""

    path: Path
    public_path: str
    size_bytes: int


@dataclass(slots=True)
class AnimationResult:
    """Outcome returned to the caller on success."""

    animation_url: str
    service_used: str
