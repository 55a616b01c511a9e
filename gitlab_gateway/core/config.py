"""
Configuration Management.

Loads settings from the gateway YAML file and overrides from the environment.
The YAML file is written by `gitlab configure` and lives in the user's home
directory unless GITLAB_GATEWAY_CONFIG points elsewhere.

Environment (GITLAB_ prefix):
    GITLAB_API_ENDPOINT, GITLAB_API_PRIVATE_TOKEN  - override the file
    GITLAB_PRETTY_JSON                             - force pretty output
    GITLAB_GATEWAY_CONFIG                          - config file path

Config file (YAML):
    api      - endpoint, private_token, timeout, verify_ssl, per_page, sudo
    output   - pretty
    logging  - level, format, handlers
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from gitlab_gateway.core.config_schema import (
    ApiSchema,
    GatewayConfigSchema,
    LoggingSchema,
    OutputSchema,
)
from gitlab_gateway.core.exceptions import ConfigurationError

CONFIG_FILENAME = ".gitlab-gateway.yaml"
CONFIG_PATH_ENV = "GITLAB_GATEWAY_CONFIG"


def get_config_path() -> Path:
    """Resolve the config file path from GITLAB_GATEWAY_CONFIG or the home directory."""
    configured = os.environ.get(CONFIG_PATH_ENV)
    if configured:
        return Path(configured).expanduser()
    return Path.home() / CONFIG_FILENAME


def load_yaml_config(path: Path | None = None) -> dict[str, Any]:
    """
    Load the gateway YAML configuration file.

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigurationError: If the file cannot be read, is not valid YAML,
            or is not a mapping
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Cannot read {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration in {config_path} must be a mapping")
    return data


def save_yaml_config(data: dict[str, Any], path: Path | None = None) -> Path:
    """
    Write the gateway configuration file.

    The file holds a private token, so it is created readable by the owner only.

    Returns:
        Path the configuration was written to.
    """
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)

    config_path.chmod(0o600)
    return config_path


class Settings(BaseSettings):
    """Values read from the environment only."""

    api_endpoint: str | None = None
    api_private_token: str | None = None
    pretty_json: bool = False

    model_config = SettingsConfigDict(
        env_prefix="GITLAB_",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
    )


def _load_validated(schema_cls: type, raw: dict[str, Any], source: str) -> Any:
    """Validate raw data against a schema. Returns typed model instance."""
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration in {source}:\n{e}"
        ) from e


class AppConfig:
    """
    Gateway configuration loaded from the YAML file plus environment overrides.

    The file is validated against GatewayConfigSchema at load time.
    Properties return typed Pydantic model instances with attribute access.
    """

    def __init__(self, path: Path | None = None, settings: Settings | None = None) -> None:
        self.path = path or get_config_path()
        settings = settings or get_settings()

        try:
            raw = load_yaml_config(self.path)
        except FileNotFoundError:
            raw = {}

        api = dict(raw.get("api") or {})
        if settings.api_endpoint:
            api["endpoint"] = settings.api_endpoint
        if settings.api_private_token:
            api["private_token"] = settings.api_private_token

        if "endpoint" not in api or "private_token" not in api:
            raise ConfigurationError(
                f"GitLab endpoint and private token are not configured in {self.path}. "
                "Run `gitlab configure` or set GITLAB_API_ENDPOINT and GITLAB_API_PRIVATE_TOKEN."
            )

        config = _load_validated(GatewayConfigSchema, {**raw, "api": api}, str(self.path))
        self._api = config.api
        self._output = config.output
        self._logging = config.logging

    @property
    def api(self) -> ApiSchema:
        """GitLab API connection settings."""
        return self._api

    @property
    def output(self) -> OutputSchema:
        """Output settings."""
        return self._output

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging


def load_logging_schema(path: Path | None = None) -> LoggingSchema:
    """
    Load only the logging section of the config file.

    Logging is configured before credentials are needed (e.g. for
    `gitlab configure`), so a missing file yields the defaults.
    """
    config_path = path or get_config_path()
    try:
        raw = load_yaml_config(config_path)
    except FileNotFoundError:
        return LoggingSchema()
    return _load_validated(LoggingSchema, raw.get("logging") or {}, str(config_path))


@lru_cache
def get_settings() -> Settings:
    """Get cached environment settings."""
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid GITLAB_* environment variable:\n{e}") from e


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached gateway configuration."""
    return AppConfig()
