"""Configuration management for MediaSilo uploads."""

from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "https://p-api-new.mediasilo.com/v3/"


class MediaSiloConfig(BaseSettings):
    """MediaSilo API credentials and connection settings."""

    model_config = SettingsConfigDict(
        env_prefix="MEDIASILO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    host_context: str = Field(
        description="Subdomain you log into MediaSilo with (YOURCOMPANY.mediasilo.com)"
    )
    username: str = Field(description="User with the Asset.Create permission")
    password: str = Field(description="Password for the API user")
    project_id: str = Field(description="Project the uploaded file is registered in")
    api_url: str = Field(default=DEFAULT_API_URL, description="MediaSilo REST API base URL")
    timeout: float | None = Field(
        default=30.0, description="Timeout in seconds for MediaSilo API calls"
    )
    upload_timeout: float | None = Field(
        default=None,
        description="Timeout in seconds for the storage transfer (None waits indefinitely)",
    )

    @field_validator("api_url")
    @classmethod
    def _normalize_api_url(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            value = f"https://{value}"
        # Resource paths are joined onto the base, so it must end with a slash
        return value.rstrip("/") + "/"

    @property
    def auth(self) -> tuple[str, str]:
        """Basic auth pair for the MediaSilo API."""
        return (self.username, self.password)

    @classmethod
    def from_yaml(cls, path: Path, **overrides: Any) -> "MediaSiloConfig":
        """Load configuration from a YAML file, letting explicit values win."""
        data: dict[str, Any] = {}
        if path.exists():
            with open(path) as f:
                data = yaml.safe_load(f) or {}
            # Accept both a flat file and one nested under a ``mediasilo`` key
            if isinstance(data.get("mediasilo"), dict):
                data = data["mediasilo"]

        data.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**data)


def load_config(config_path: Path | None = None, **overrides: Any) -> MediaSiloConfig:
    """Load configuration from explicit values, an optional YAML file and the environment."""
    if config_path:
        return MediaSiloConfig.from_yaml(config_path, **overrides)
    return MediaSiloConfig(**{k: v for k, v in overrides.items() if v is not None})
