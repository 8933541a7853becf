"""Application configuration for the animation relay.

Values are read once at process start from the environment (and an optional
``.env`` file) and handed to the components that need them; nothing reads
``os.environ`` at request time.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_RUNWAY_API_URL = "https://api.runwayml.com/v1/generate-animation"


class AppConfig(BaseSettings):
    """Immutable settings container for the relay service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        frozen=True,
    )

    runway_api_key: str = Field(
        default="",
        description="Bearer credential sent to the animation provider.",
    )
    runway_api_url: str = Field(
        default=DEFAULT_RUNWAY_API_URL,
        description="Provider endpoint accepting the two images and a style.",
    )
    host: str = Field(default="0.0.0.0", description="Listening interface.")
    port: int = Field(default=3001, ge=1, le=65535, description="Listening port.")
    upload_dir: Path = Field(
        default=Path("uploads"),
        description="Directory holding inbound images for the duration of a request.",
    )
    animations_dir: Path = Field(
        default=Path("animations"),
        description="Directory of generated artifacts served under /animations.",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed to call the relay from a browser.",
    )
    provider_timeout_seconds: float = Field(
        default=120.0,
        gt=0,
        description="Timeout applied to each outbound provider request.",
    )
    upload_ttl_hours: int = Field(
        default=24,
        ge=1,
        description="Age after which leftover uploads are swept by the cleanup script.",
    )


def load_config() -> AppConfig:
    """Load configuration from environment."""
    return AppConfig()


__all__ = ["AppConfig", "DEFAULT_RUNWAY_API_URL", "load_config"]
