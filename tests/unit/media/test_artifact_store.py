from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path

import pytest

from src.animator.animation.animation_errors import StorageError, UpstreamRequestError
from src.animator.media.artifact_store import ArtifactStore

pytestmark = pytest.mark.unit


async def stream(*chunks: bytes, error: Exception | None = None) -> AsyncIterator[bytes]:
    for chunk in chunks:
        yield chunk
    if error is not None:
        raise error


def build_store(tmp_path: Path, stamp: int = 1712345678901) -> ArtifactStore:
    store = ArtifactStore(tmp_path / "animations", clock=lambda: stamp)
    store.ensure_root()
    return store


@pytest.mark.asyncio
async def test_save_stream_names_file_by_timestamp(tmp_path: Path) -> None:
    store = build_store(tmp_path)

    artifact = await store.save_stream(stream(b"GIF89a", b"-frames"))

    assert artifact.path == tmp_path / "animations" / "1712345678901_animation.gif"
    assert artifact.public_path == "/animations/1712345678901_animation.gif"
    assert artifact.size_bytes == len(b"GIF89a-frames")
    assert artifact.path.read_bytes() == b"GIF89a-frames"
    assert [path.name for path in store.root.iterdir()] == ["1712345678901_animation.gif"]


@pytest.mark.asyncio
async def test_interrupted_stream_leaves_nothing_behind(tmp_path: Path) -> None:
    store = build_store(tmp_path)

    with pytest.raises(UpstreamRequestError):
        await store.save_stream(stream(b"partial", error=UpstreamRequestError("reset")))

    assert list(store.root.iterdir()) == []


@pytest.mark.asyncio
async def test_write_failure_raises_storage_error(tmp_path: Path) -> None:
    store = ArtifactStore(tmp_path / "missing", clock=lambda: 1)

    with pytest.raises(StorageError):
        await store.save_stream(stream(b"data"))


def test_ensure_root_is_idempotent(tmp_path: Path) -> None:
    store = ArtifactStore(tmp_path / "nested" / "animations")

    first = store.ensure_root()
    second = store.ensure_root()

    assert first == second
    assert first.is_dir()


def test_default_names_use_millisecond_timestamps(tmp_path: Path) -> None:
    store = ArtifactStore(tmp_path)

    name = store.new_artifact_name()

    stamp, suffix = name.split("_", 1)
    assert suffix == "animation.gif"
    assert len(stamp) >= 13
    assert stamp.isdigit()


class FailingSink:
    def __enter__(self) -> "FailingSink":
        return self

    def __exit__(self, *exc_info) -> None:
        return None

    def write(self, data: bytes) -> int:
        raise OSError(28, "No space left on device")


@pytest.mark.asyncio
async def test_write_failure_closes_source_stream(tmp_path: Path, monkeypatch) -> None:
    store = build_store(tmp_path)
    closed: list[bool] = []

    async def tracked() -> AsyncIterator[bytes]:
        try:
            yield b"first"
            yield b"second"
        finally:
            closed.append(True)

    monkeypatch.setattr(Path, "open", lambda self, *args, **kwargs: FailingSink())

    with pytest.raises(StorageError):
        await store.save_stream(tracked())

    assert closed == [True]
    assert list(store.root.iterdir()) == []


@pytest.mark.asyncio
async def test_plain_async_iterables_are_accepted(tmp_path: Path) -> None:
    store = build_store(tmp_path)

    class Chunks:
        def __init__(self) -> None:
            self._items = [b"GIF", b"89a"]

        def __aiter__(self) -> "Chunks":
            return self

        async def __anext__(self) -> bytes:
            if not self._items:
                raise StopAsyncIteration
            return self._items.pop(0)

    artifact = await store.save_stream(Chunks())

    assert artifact.path.read_bytes() == b"GIF89a"
