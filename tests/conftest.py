"""
Root Pytest Fixtures.

Shared fixtures available to all tests.

Every test runs against its own config file path under tmp_path, with the
GITLAB_* environment cleared and the cached configuration dropped, so no
test can read or write the real ~/.gitlab-gateway.yaml.
"""

from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import yaml

from gitlab_gateway.core import logging as logging_module
from gitlab_gateway.core.config import CONFIG_PATH_ENV, get_app_config, get_settings

GITLAB_ENV_VARS = (
    "GITLAB_API_ENDPOINT",
    "GITLAB_API_PRIVATE_TOKEN",
    "GITLAB_PRETTY_JSON",
)


# =============================================================================
# Config Isolation
# =============================================================================


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """Path of the gateway config file for this test (not created)."""
    return tmp_path / "gitlab-gateway.yaml"


@pytest.fixture(autouse=True)
def _isolate_config(
    config_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> Generator[None, None, None]:
    """Point the gateway at a temp config file and clear caches."""
    for name in GITLAB_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv(CONFIG_PATH_ENV, str(config_path))

    get_settings.cache_clear()
    get_app_config.cache_clear()
    logging_module._logging_config = None
    yield
    get_settings.cache_clear()
    get_app_config.cache_clear()
    logging_module._logging_config = None


# =============================================================================
# Config File Fixtures
# =============================================================================


@pytest.fixture
def valid_config() -> dict[str, Any]:
    """A complete, valid gateway configuration."""
    return {
        "api": {
            "endpoint": "https://gitlab.test/api/v4",
            "private_token": "test-token",
        },
    }


@pytest.fixture
def write_config(config_path: Path) -> Callable[[dict[str, Any]], Path]:
    """
    Write a config dict to the test config path.

    Usage:
        def test_something(write_config, valid_config):
            write_config(valid_config)
    """

    def _write(data: dict[str, Any]) -> Path:
        config_path.write_text(yaml.safe_dump(data), encoding="utf-8")
        return config_path

    return _write
