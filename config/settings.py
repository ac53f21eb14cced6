"""Application settings loaded from a YAML file and environment variables.

Uses pydantic-settings for type-safe configuration. The YAML file is named by
APP_CONFIG_PATH; environment variables prefixed with APP_ override its values.
"""

import os
from enum import Enum

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

CONFIG_PATH_ENV = "APP_CONFIG_PATH"


class EnvType(str, Enum):
    """Deployment environment; selects the log sink."""

    LOCAL = "local"
    DEV = "dev"
    TESTING = "testing"


class ConfigError(Exception):
    """Raised when the configuration file is missing or invalid."""


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables and .env files."""

    env: EnvType = EnvType.LOCAL
    application_name: str = "statistic-service"

    model_config = {"env_prefix": "APP_", "env_file": ".env", "extra": "ignore"}

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Environment beats values passed in from the config file.
        return env_settings, dotenv_settings, init_settings, file_secret_settings


def load_settings(path: str | None = None) -> AppSettings:
    """Load settings from a YAML file.

    Args:
        path: Config file path. Defaults to the APP_CONFIG_PATH environment variable.

    Returns:
        Validated settings.

    Raises:
        ConfigError: If no path is configured or the file cannot be read or validated.
    """
    path = path or os.environ.get(CONFIG_PATH_ENV)
    if not path:
        raise ConfigError(f"{CONFIG_PATH_ENV} is not set")

    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Config file {path} has invalid format: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    try:
        return AppSettings(**data)
    except ValidationError as exc:
        raise ConfigError(f"Config file {path} is invalid: {exc}") from exc
