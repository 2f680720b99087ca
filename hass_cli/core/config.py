"""
Configuration Management.

Connection settings come from the process environment (or a .env file in
the working directory). Tool settings come from YAML files bundled in
hass_cli/config/.

Environment:
    HASS_API_URL    - Base URL of the Home Assistant REST API (e.g. http://host:8123/api)
    HASS_API_TOKEN  - Long-lived access token sent as a bearer token

Settings (YAML):
    logging.yaml    - Logging configuration

Both environment keys are required for requests to succeed, but neither is
enforced here. A missing key still lets the request go out; the outcome of
any failed call names the keys that were absent.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import PrivateAttr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hass_cli.core.config_schema import LoggingSchema
from hass_cli.core.exceptions import ConfigurationError

SETTINGS_DIR = Path(__file__).resolve().parent.parent / "config"

URL_ENV = "HASS_API_URL"
TOKEN_ENV = "HASS_API_TOKEN"


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML configuration file from hass_cli/config/."""
    config_path = SETTINGS_DIR / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Home Assistant connection settings."""

    hass_api_url: str | None = None
    hass_api_token: str | None = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    _missing: tuple[str, ...] = PrivateAttr(default=())

    @field_validator("hass_api_url", "hass_api_token", mode="before")
    @classmethod
    def _blank_is_missing(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def model_post_init(self, __context: Any) -> None:
        missing = []
        if not self.hass_api_url:
            missing.append(URL_ENV)
        if not self.hass_api_token:
            missing.append(TOKEN_ENV)
        self._missing = tuple(missing)

    @property
    def missing(self) -> tuple[str, ...]:
        """Required environment keys that were absent, in declaration order."""
        return self._missing

    @property
    def is_complete(self) -> bool:
        return not self._missing


def _load_validated(schema_cls: type, filename: str) -> Any:
    """Load YAML and validate against schema. Returns typed model instance."""
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration in {filename}:\n{e}"
        ) from e


@lru_cache
def get_settings() -> Settings:
    """Get cached connection settings."""
    return Settings()


@lru_cache
def get_logging_config() -> LoggingSchema:
    """Get cached, validated logging configuration."""
    return _load_validated(LoggingSchema, "logging.yaml")
