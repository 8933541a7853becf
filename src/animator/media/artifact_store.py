"""Generated artifact storage."""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterable, Callable
from contextlib import aclosing, nullcontext
from dataclasses import dataclass, field
from pathlib import Path

from ..animation.animation_errors import StorageError
from ..animation.animation_models import StoredArtifact

PUBLIC_PREFIX = "/animations"
ARTIFACT_SUFFIX = "_animation.gif"


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


@dataclass(slots=True)
class ArtifactStore:
    """Persist provider artifacts under a publicly served directory.

    Files are named ``<unix-ms>_animation.gif``. Bytes land in a ``.part``
    file first and are renamed only once the stream completes, so a failed
    download never leaves a servable artifact behind.
    """

    root: Path
    clock: Callable[[], int] = _now_ms
    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    def ensure_root(self) -> Path:
        self.root.mkdir(parents=True, exist_ok=True)
        return self.root

    def new_artifact_name(self) -> str:
        return f"{self.clock()}{ARTIFACT_SUFFIX}"

    @staticmethod
    def public_path(name: str) -> str:
        return f"{PUBLIC_PREFIX}/{name}"

    async def save_stream(self, chunks: AsyncIterable[bytes]) -> StoredArtifact:
        """Write ``chunks`` to a new artifact file and return its descriptor."""
        name = self.new_artifact_name()
        target = self.root / name
        partial = target.with_name(name + ".part")
        size = 0
        try:
            closer = aclosing(chunks) if hasattr(chunks, "aclose") else nullcontext(chunks)
            async with closer as source:
                with partial.open("wb") as sink:
                    async for chunk in source:
                        sink.write(chunk)
                        size += len(chunk)
            partial.replace(target)
        except OSError as exc:
            partial.unlink(missing_ok=True)
            self.log.error(
                "media.artifact.write_failed",
                extra={"path": str(target), "error": str(exc)},
            )
            raise StorageError(f"Failed to store artifact {name}: {exc}") from exc
        except BaseException:
            partial.unlink(missing_ok=True)
            raise

        self.log.info(
            "media.artifact.stored",
            extra={"path": str(target), "size_bytes": size},
        )
        return StoredArtifact(path=target, public_path=self.public_path(name), size_bytes=size)
