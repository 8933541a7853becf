from __future__ import annotations

import re
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from src.animator.animation.animation_errors import UpstreamRequestError
from src.animator.config import AppConfig
from src.animator.main import create_app
from tests.mocks.providers import ARTIFACT_URL, GIF_BYTES, FakeProvider

pytestmark = pytest.mark.integration

ARTIFACT_PATH = re.compile(r"^/animations/\d+_animation\.gif$")


def build_client(config: AppConfig, provider: FakeProvider) -> TestClient:
    return TestClient(create_app(config, provider=provider))


def image_files(count: int) -> list[tuple[str, tuple[str, bytes, str]]]:
    return [
        ("images", (f"photo-{index}.png", f"image-{index}".encode(), "image/png"))
        for index in range(count)
    ]


def stored_files(directory: Path) -> list[Path]:
    return sorted(path for path in directory.iterdir() if path.is_file())


def test_animate_returns_fetchable_artifact(app_config: AppConfig) -> None:
    provider = FakeProvider()
    client = build_client(app_config, provider)

    response = client.post(
        "/animate", files=image_files(2), data={"animationType": "dissolve"}
    )

    assert response.status_code == 200
    body = response.json()
    assert ARTIFACT_PATH.match(body["animationUrl"])
    assert body["serviceUsed"] == "Fake Provider"
    assert provider.fetched == [ARTIFACT_URL]

    artifact = client.get(body["animationUrl"])
    assert artifact.status_code == 200
    assert artifact.content == GIF_BYTES


def test_animate_forwards_style_and_removes_uploads(app_config: AppConfig) -> None:
    provider = FakeProvider()
    client = build_client(app_config, provider)

    response = client.post(
        "/animate", files=image_files(2), data={"animationType": "sparkle"}
    )

    assert response.status_code == 200
    images, style = provider.submissions[0]
    assert style == "sparkle"
    assert [image.filename for image in images] == ["photo-0.png", "photo-1.png"]
    assert provider.uploads_present_on_submit == [True, True]
    assert not any(image.path.exists() for image in images)
    assert stored_files(app_config.upload_dir) == []


def test_animate_defaults_style_to_morph(app_config: AppConfig) -> None:
    provider = FakeProvider()
    client = build_client(app_config, provider)

    response = client.post("/animate", files=image_files(2))

    assert response.status_code == 200
    assert provider.submissions[0][1] == "morph"


@pytest.mark.parametrize("count", [1, 3])
def test_animate_rejects_wrong_image_count(app_config: AppConfig, count: int) -> None:
    provider = FakeProvider()
    client = build_client(app_config, provider)

    response = client.post("/animate", files=image_files(count))

    assert response.status_code == 400
    assert response.json() == {"error": "Two images are required"}
    assert provider.submissions == []
    assert stored_files(app_config.upload_dir) == []
    assert stored_files(app_config.animations_dir) == []


def test_animate_rejects_missing_images(app_config: AppConfig) -> None:
    provider = FakeProvider()
    client = build_client(app_config, provider)

    response = client.post("/animate", data={"animationType": "morph"})

    assert response.status_code == 400
    assert response.json() == {"error": "Two images are required"}
    assert provider.submissions == []


def test_provider_failure_returns_generic_error(app_config: AppConfig) -> None:
    provider = FakeProvider(submit_error=UpstreamRequestError("status 503"))
    client = build_client(app_config, provider)

    response = client.post("/animate", files=image_files(2))

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to generate animation"}
    assert "503" not in response.text
    assert provider.fetched == []
    assert stored_files(app_config.animations_dir) == []


def test_missing_artifact_url_returns_generic_error(app_config: AppConfig) -> None:
    provider = FakeProvider(artifact_url=None)
    client = build_client(app_config, provider)

    response = client.post("/animate", files=image_files(2))

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to generate animation"}
    assert provider.fetched == []


def test_fetch_failure_leaves_no_artifact(app_config: AppConfig) -> None:
    provider = FakeProvider(fetch_error=UpstreamRequestError("connection reset"))
    client = build_client(app_config, provider)

    response = client.post("/animate", files=image_files(2))

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to generate animation"}
    assert stored_files(app_config.animations_dir) == []


def test_failed_request_keeps_uploads_on_disk(app_config: AppConfig) -> None:
    provider = FakeProvider(submit_error=UpstreamRequestError("boom"))
    client = build_client(app_config, provider)

    client.post("/animate", files=image_files(2))

    assert len(stored_files(app_config.upload_dir)) == 2


def test_missing_artifact_returns_404(app_config: AppConfig) -> None:
    client = build_client(app_config, FakeProvider())

    response = client.get("/animations/0_animation.gif")

    assert response.status_code == 404


def test_startup_creates_storage_directories(app_config: AppConfig) -> None:
    assert not app_config.animations_dir.exists()

    create_app(app_config, provider=FakeProvider())

    assert app_config.animations_dir.is_dir()
    assert app_config.upload_dir.is_dir()


def test_unhandled_errors_use_fallback_response(app_config: AppConfig) -> None:
    app = create_app(app_config, provider=FakeProvider())

    async def explode() -> None:
        raise RuntimeError("boom")

    app.add_api_route("/explode", explode)
    client = TestClient(app, raise_server_exceptions=False)

    response = client.get("/explode")

    assert response.status_code == 500
    assert response.text == "Something broke!"


def test_cors_headers_allow_any_origin(app_config: AppConfig) -> None:
    client = build_client(app_config, FakeProvider())

    response = client.options(
        "/animate",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] in {"*", "http://localhost:3000"}
