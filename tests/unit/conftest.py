"""
Unit Test Fixtures.

Fixtures for unit tests - the GitLab API is never contacted.
HTTP traffic goes through httpx.MockTransport handlers.
"""

import json
from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import httpx
import pytest

from gitlab_gateway.client.client import GitLabClient

TEST_ENDPOINT = "https://gitlab.test/api/v4"


# =============================================================================
# HTTP Fixtures
# =============================================================================


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


def _json_response(
    status_code: int,
    data: Any = None,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """Build a JSON response for a mock transport handler."""
    content = b"" if data is None else json.dumps(data).encode("utf-8")
    return httpx.Response(
        status_code,
        content=content,
        headers={"Content-Type": "application/json", **(headers or {})},
    )


@pytest.fixture
def json_response() -> Callable[..., httpx.Response]:
    """Provide the JSON response builder for mock transport handlers."""
    return _json_response


@pytest.fixture
def make_client() -> Callable[..., tuple[GitLabClient, RecordingTransport]]:
    """
    Build a GitLabClient served by a mock handler.

    Usage:
        client, transport = make_client(lambda request: json_response(200, {}))
        await client.call("GET", "/user")
        assert transport.requests[0].url.path == "/api/v4/user"
    """

    def _make(
        handler: Callable[[httpx.Request], httpx.Response],
        **kwargs: Any,
    ) -> tuple[GitLabClient, RecordingTransport]:
        transport = RecordingTransport(handler)
        client = GitLabClient(
            endpoint=kwargs.pop("endpoint", TEST_ENDPOINT),
            private_token=kwargs.pop("private_token", "test-token"),
            transport=transport,
            **kwargs,
        )
        return client, transport

    return _make


# =============================================================================
# Logging Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_logger() -> MagicMock:
    """
    Mock logger for testing logging calls.

    Usage:
        def test_logging(mock_logger):
            with patch("module.get_logger", return_value=mock_logger):
                # Test code that logs
                mock_logger.critical.assert_called_once()
    """
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    logger.critical = MagicMock()
    return logger
