"""Configuration for the companion upload UI."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientConfig(BaseSettings):
    """Settings for the upload UI, prefixed with ``ANIMATOR_CLIENT_``."""

    model_config = SettingsConfigDict(
        env_prefix="ANIMATOR_CLIENT_",
        env_file=".env",
        extra="ignore",
        frozen=True,
    )

    relay_url: str = Field(
        default="http://localhost:3001",
        description="Base URL of the animation relay service.",
    )
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=3000, ge=1, le=65535)
    request_timeout_seconds: float = Field(
        default=180.0,
        gt=0,
        description="Timeout for the upload request; generation is synchronous.",
    )
    max_sessions: int = Field(
        default=256,
        ge=1,
        description="Upper bound on browser sessions kept in memory.",
    )


def load_client_config() -> ClientConfig:
    return ClientConfig()
