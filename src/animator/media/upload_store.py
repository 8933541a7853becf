"""Temporary storage for inbound images."""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from fastapi import UploadFile

from ..animation.animation_models import StoredUpload

CHUNK_SIZE = 1 * 1024 * 1024  # 1 MiB


@dataclass(slots=True)
class UploadStore:
    """Manages the lifecycle of request-scoped upload files."""

    root: Path
    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    def ensure_root(self) -> Path:
        self.root.mkdir(parents=True, exist_ok=True)
        return self.root

    async def persist_upload(self, upload: UploadFile) -> StoredUpload:
        """Copy upload contents to the upload directory."""
        directory = self.ensure_root()
        target = directory / uuid.uuid4().hex
        size = 0

        with target.open("wb") as sink:
            while True:
                chunk = await upload.read(CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                sink.write(chunk)
        await upload.seek(0)

        stored = StoredUpload(
            path=target,
            filename=upload.filename or target.name,
            content_type=upload.content_type or "application/octet-stream",
            size_bytes=size,
        )
        self.log.info(
            "media.upload.persisted",
            extra={
                "upload_filename": stored.filename,
                "path": str(target),
                "size_bytes": size,
                "content_type": stored.content_type,
            },
        )
        return stored

    def discard(self, uploads: Iterable[StoredUpload]) -> None:
        """Delete the given upload files."""
        for upload in uploads:
            upload.path.unlink(missing_ok=True)
            self.log.info("media.upload.discarded", extra={"path": str(upload.path)})

    def list_stale(self, older_than_seconds: float, *, now: float | None = None) -> list[Path]:
        """Return upload files whose modification time exceeds the age limit."""
        if not self.root.exists():
            return []
        reference = time.time() if now is None else now
        cutoff = reference - older_than_seconds
        return sorted(
            path
            for path in self.root.iterdir()
            if path.is_file() and path.stat().st_mtime < cutoff
        )

    def purge_stale(self, older_than_seconds: float, *, now: float | None = None) -> int:
        """Remove uploads leaked by failed requests and return the count."""
        removed = 0
        for path in self.list_stale(older_than_seconds, now=now):
            path.unlink(missing_ok=True)
            removed += 1
            self.log.info("media.upload.cleanup.removed", extra={"path": str(path)})
        return removed
