from __future__ import annotations

import os
from pathlib import Path

import pytest

from src.animator.config import AppConfig


os.environ.setdefault("RUNWAY_API_KEY", "test-runway-key")


@pytest.fixture
def app_config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        runway_api_key="test-runway-key",
        runway_api_url="https://provider.test/v1/generate-animation",
        upload_dir=tmp_path / "uploads",
        animations_dir=tmp_path / "animations",
    )
