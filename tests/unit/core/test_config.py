"""
Unit Tests for Configuration Management.

Black box tests against the public interface of config.py.
Every test gets its own config file path under tmp_path (see tests/conftest.py).
"""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from gitlab_gateway.core.config import (
    CONFIG_FILENAME,
    CONFIG_PATH_ENV,
    AppConfig,
    Settings,
    get_app_config,
    get_config_path,
    get_settings,
    load_logging_schema,
    load_yaml_config,
    save_yaml_config,
)
from gitlab_gateway.core.config_schema import ApiSchema, GatewayConfigSchema, LoggingSchema
from gitlab_gateway.core.exceptions import ConfigurationError


# =============================================================================
# get_config_path
# =============================================================================


class TestGetConfigPath:
    """Tests for config file discovery."""

    def test_uses_environment_variable(self, config_path: Path):
        assert get_config_path() == config_path

    def test_expands_user(self, monkeypatch):
        monkeypatch.setenv(CONFIG_PATH_ENV, "~/custom.yaml")
        assert get_config_path() == Path.home() / "custom.yaml"

    def test_defaults_to_home_directory(self, monkeypatch):
        monkeypatch.delenv(CONFIG_PATH_ENV)
        assert get_config_path() == Path.home() / CONFIG_FILENAME


# =============================================================================
# load_yaml_config / save_yaml_config
# =============================================================================


class TestYamlConfig:
    """Tests for reading and writing the YAML file."""

    def test_missing_file_raises(self, config_path: Path):
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            load_yaml_config(config_path)

    def test_empty_file_is_empty_dict(self, config_path: Path):
        config_path.write_text("")
        assert load_yaml_config() == {}

    def test_non_mapping_raises(self, config_path: Path):
        config_path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            load_yaml_config()

    def test_invalid_yaml_raises(self, config_path: Path):
        config_path.write_text("api: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Cannot read"):
            load_yaml_config()

    def test_unreadable_path_raises(self, config_path: Path):
        config_path.mkdir()
        with pytest.raises(ConfigurationError, match="Cannot read"):
            load_yaml_config()

    def test_save_then_load(self, config_path: Path, valid_config):
        written = save_yaml_config(valid_config)
        assert written == config_path
        assert load_yaml_config() == valid_config

    def test_save_creates_parents_with_owner_only_mode(self, tmp_path: Path, valid_config):
        target = tmp_path / "a" / "b" / "config.yaml"
        save_yaml_config(valid_config, target)
        assert target.exists()
        assert target.stat().st_mode & 0o777 == 0o600


# =============================================================================
# Settings
# =============================================================================


class TestSettings:
    """Tests for environment settings."""

    def test_defaults(self):
        settings = get_settings()
        assert settings.api_endpoint is None
        assert settings.api_private_token is None
        assert settings.pretty_json is False

    @pytest.mark.parametrize("value", ["1", "true", "yes", "on"])
    def test_pretty_json_truthy(self, monkeypatch, value: str):
        monkeypatch.setenv("GITLAB_PRETTY_JSON", value)
        assert Settings().pretty_json is True

    def test_empty_pretty_json_is_ignored(self, monkeypatch):
        monkeypatch.setenv("GITLAB_PRETTY_JSON", "")
        assert Settings().pretty_json is False

    def test_invalid_pretty_json_raises_configuration_error(self, monkeypatch):
        monkeypatch.setenv("GITLAB_PRETTY_JSON", "sometimes")
        with pytest.raises(ConfigurationError, match="GITLAB_"):
            get_settings()

    def test_is_cached(self):
        assert get_settings() is get_settings()


# =============================================================================
# AppConfig
# =============================================================================


class TestAppConfig:
    """Tests for the merged, validated configuration."""

    def test_loads_file_with_defaults(self, write_config, valid_config):
        write_config(valid_config)
        config = get_app_config()

        assert isinstance(config.api, ApiSchema)
        assert config.api.endpoint == "https://gitlab.test/api/v4"
        assert config.api.private_token == "test-token"
        assert config.api.timeout == 30.0
        assert config.api.verify_ssl is True
        assert config.api.per_page == 100
        assert config.api.sudo is None
        assert config.output.pretty is False
        assert config.logging.level == "WARNING"

    def test_environment_overrides_file(self, write_config, valid_config, monkeypatch):
        write_config(valid_config)
        monkeypatch.setenv("GITLAB_API_PRIVATE_TOKEN", "from-env")

        config = get_app_config()

        assert config.api.private_token == "from-env"
        assert config.api.endpoint == "https://gitlab.test/api/v4"

    def test_environment_only(self, monkeypatch):
        monkeypatch.setenv("GITLAB_API_ENDPOINT", "https://env.test/api/v4")
        monkeypatch.setenv("GITLAB_API_PRIVATE_TOKEN", "env-token")

        config = AppConfig()

        assert config.api.endpoint == "https://env.test/api/v4"

    def test_missing_credentials_raise(self):
        with pytest.raises(ConfigurationError, match="gitlab configure"):
            AppConfig()

    def test_missing_token_raises(self, write_config):
        write_config({"api": {"endpoint": "https://gitlab.test/api/v4"}})
        with pytest.raises(ConfigurationError):
            AppConfig()

    def test_unknown_key_raises(self, write_config, valid_config):
        write_config({**valid_config, "colour": "blue"})
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            AppConfig()

    def test_wrong_type_raises(self, write_config, valid_config):
        write_config({"api": {**valid_config["api"], "timeout": "soon"}})
        with pytest.raises(ConfigurationError):
            AppConfig()

    def test_per_page_out_of_range_raises(self, write_config, valid_config):
        write_config({"api": {**valid_config["api"], "per_page": 500}})
        with pytest.raises(ConfigurationError):
            AppConfig()

    @pytest.mark.parametrize(
        "endpoint",
        ["https://gitlab.test:xx/api/v4", "gitlab.test/api/v4", "ftp://gitlab.test/api/v4"],
    )
    def test_malformed_endpoint_raises(self, write_config, valid_config, endpoint: str):
        write_config({"api": {**valid_config["api"], "endpoint": endpoint}})
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            AppConfig()

    def test_malformed_endpoint_from_environment_raises(self, monkeypatch):
        monkeypatch.setenv("GITLAB_API_ENDPOINT", "https://gitlab.test:xx/api/v4")
        monkeypatch.setenv("GITLAB_API_PRIVATE_TOKEN", "env-token")
        with pytest.raises(ConfigurationError, match="Endpoint is not a valid URL"):
            AppConfig()

    def test_invalid_yaml_raises(self, config_path: Path):
        config_path.write_text("api: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Cannot read"):
            AppConfig()

    def test_explicit_path(self, tmp_path: Path, valid_config):
        other = tmp_path / "other.yaml"
        other.write_text(yaml.safe_dump(valid_config))
        assert AppConfig(path=other).path == other

    def test_is_cached(self, write_config, valid_config):
        write_config(valid_config)
        assert get_app_config() is get_app_config()


# =============================================================================
# Logging section
# =============================================================================


class TestLoadLoggingSchema:
    """Tests for loading only the logging section."""

    def test_missing_file_gives_defaults(self):
        assert load_logging_schema() == LoggingSchema()

    def test_logging_without_credentials(self, write_config):
        write_config({"logging": {"level": "DEBUG", "format": "json"}})

        schema = load_logging_schema()

        assert schema.level == "DEBUG"
        assert schema.format == "json"
        assert schema.handlers.file.enabled is False

    def test_invalid_logging_section_raises(self, write_config):
        write_config({"logging": {"handlers": {"syslog": {}}}})
        with pytest.raises(ConfigurationError):
            load_logging_schema()

    def test_invalid_yaml_raises(self, config_path: Path):
        config_path.write_text("logging: {level: [\n")
        with pytest.raises(ConfigurationError, match="Cannot read"):
            load_logging_schema()


class TestGatewayConfigSchema:
    """Tests for the root schema."""

    def test_api_is_required(self):
        with pytest.raises(ValidationError):
            GatewayConfigSchema()


class TestApiSchema:
    """Tests for the api section."""

    def test_accepts_http_and_https_endpoints(self):
        assert ApiSchema(endpoint="http://localhost:8080/api/v4", private_token="t").endpoint == (
            "http://localhost:8080/api/v4"
        )

    def test_rejects_invalid_port(self):
        with pytest.raises(ValidationError, match="Invalid port"):
            ApiSchema(endpoint="https://gitlab.test:xx/api/v4", private_token="t")

    def test_rejects_missing_scheme(self):
        with pytest.raises(ValidationError, match="http\\(s\\) URL"):
            ApiSchema(endpoint="gitlab.test/api/v4", private_token="t")
