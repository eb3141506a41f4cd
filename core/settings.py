from __future__ import annotations

import os
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from core.exceptions import ConfigurationError

# Load .env file from project root
_env_path = Path(__file__).parent.parent / ".env"
if _env_path.exists():
    load_dotenv(_env_path)


DEFAULT_BASE_DIR = Path("/opt/video-downloader/videos")

# environment variable -> Settings field
ENV_FIELDS: dict[str, str] = {
    "PORT": "port",
    "HOST": "host",
    "VIDEO_BASE_DIR": "video_base_dir",
    "PUBLIC_BASE_URL": "public_base_url",
    "SERVICE_NAME": "service_name",
    "LOG_LEVEL": "log_level",
    "JSON_LOGGING": "json_logging",
    "LOG_FILE": "log_file",
}


class Settings(BaseModel):
    port: int = Field(3000, ge=1, le=65535)
    host: str = "0.0.0.0"
    video_base_dir: Path = DEFAULT_BASE_DIR
    public_base_url: str | None = None
    service_name: str = "video-downloader"
    log_level: str = "INFO"
    json_logging: bool = False
    log_file: Path | None = None

    @field_validator("public_base_url", mode="before")
    @classmethod
    def _strip_base_url(cls, value: Any) -> str | None:  # noqa: D401
        if value is None:
            return None
        value = str(value).strip().rstrip("/")
        return value or None

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> str:  # noqa: D401
        return str(value or "INFO").strip().upper()

    @field_validator("log_file", mode="before")
    @classmethod
    def _empty_log_file(cls, value: Any) -> Any:  # noqa: D401
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def base_url(self) -> str:
        """Prefix used to build download URLs."""
        return self.public_base_url or f"http://localhost:{self.port}"

    @classmethod
    def load(
        cls,
        path: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> "Settings":
        """Build settings from defaults, an optional YAML file and the environment.

        Args:
            path: Optional YAML file. If not provided, ``VIDEO_RELAY_CONFIG`` is
                consulted; when neither is set only the environment is used.
            environ: Environment mapping, ``os.environ`` by default.

        Returns:
            Settings instance with loaded configuration.

        Raises:
            ConfigurationError: If the file is missing or a value is invalid.
        """
        env = os.environ if environ is None else environ
        payload: dict[str, Any] = {}

        config_name = path or env.get("VIDEO_RELAY_CONFIG")
        if config_name:
            config_path = Path(config_name)
            if not config_path.exists():
                raise ConfigurationError(
                    f"Configuration file not found: {config_path}",
                    {"path": str(config_path)},
                )
            with config_path.open("r", encoding="utf-8") as fp:
                loaded = yaml.safe_load(fp) or {}
            if not isinstance(loaded, dict):
                raise ConfigurationError(
                    "Configuration file must contain a mapping",
                    {"path": str(config_path)},
                )
            payload.update(loaded)

        for env_name, field_name in ENV_FIELDS.items():
            value = env.get(env_name)
            if value is not None and value != "":
                payload[field_name] = value

        try:
            return cls(**payload)
        except Exception as exc:
            raise ConfigurationError(f"Invalid configuration: {exc}") from exc


@lru_cache(maxsize=1)
def get_settings(path: str | None = None) -> Settings:
    return Settings.load(Path(path) if path else None)


__all__ = ["Settings", "DEFAULT_BASE_DIR", "get_settings"]
