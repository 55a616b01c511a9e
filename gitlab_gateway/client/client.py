"""
GitLab API Client.

Async HTTP client for the GitLab v4 REST API. Sends the private token on
every request, maps error statuses to typed exceptions, and never retries:
one call, one answer.
"""

from typing import Any

import httpx

from gitlab_gateway import __version__
from gitlab_gateway.client.pagination import PaginatedResult
from gitlab_gateway.core.config_schema import ApiSchema
from gitlab_gateway.core.exceptions import (
    ApiError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ExternalServiceError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)
from gitlab_gateway.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

# Map HTTP status codes to exception types
STATUS_EXCEPTION_MAP: dict[int, type[ApiError]] = {
    400: ValidationError,
    401: AuthenticationError,
    403: AuthorizationError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
    429: RateLimitError,
}

BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


def encode_query_params(params: dict[str, Any]) -> dict[str, Any]:
    """Encode boolean values as 1/0 for the query string."""
    return {
        key: (int(value) if isinstance(value, bool) else value)
        for key, value in params.items()
    }


def _error_message(response: httpx.Response) -> str:
    """Extract GitLab's error message from a failed response."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        detail = body.get("message") or body.get("error_description") or body.get("error")
        if detail:
            return detail if isinstance(detail, str) else str(detail)

    reason = response.reason_phrase or "Error"
    return f"HTTP {response.status_code} {reason}"


def error_for_response(response: httpx.Response) -> ApiError:
    """Build the typed exception for an error response."""
    status = response.status_code
    message = _error_message(response)

    exc_class = STATUS_EXCEPTION_MAP.get(status)
    if exc_class is not None:
        return exc_class(message, status_code=status)
    if status >= 500:
        return ExternalServiceError(message, status_code=status)
    return ApiError(message, status_code=status)


class GitLabClient:
    """
    HTTP client for the GitLab API.

    Features:
    - PRIVATE-TOKEN authentication and optional Sudo header
    - Structured logging of requests/responses
    - Typed exceptions per error status
    - Lazy pagination over list endpoints

    Usage:
        async with GitLabClient.from_config(get_app_config().api) as client:
            project = await client.call("GET", "/projects/42")
            groups = await client.paginate("/groups").to_list()
    """

    def __init__(
        self,
        endpoint: str,
        private_token: str,
        timeout: float = 30.0,
        verify_ssl: bool = True,
        sudo: str | None = None,
        per_page: int = 100,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the API client.

        Args:
            endpoint: API base URL, e.g. https://gitlab.example.com/api/v4
            private_token: Personal access token
            timeout: Request timeout in seconds
            verify_ssl: Verify TLS certificates
            sudo: User to impersonate (admin tokens only)
            per_page: Page size used by paginate()
            transport: Custom httpx transport (tests)
        """
        self.base_url = endpoint.rstrip("/")
        self.private_token = private_token
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self.sudo = sudo
        self.per_page = per_page
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_config(cls, api: ApiSchema) -> "GitLabClient":
        """Create a client from the `api` section of the gateway config."""
        return cls(
            endpoint=api.endpoint,
            private_token=api.private_token,
            timeout=api.timeout,
            verify_ssl=api.verify_ssl,
            sudo=api.sudo,
            per_page=api.per_page,
        )

    async def __aenter__(self) -> "GitLabClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def _headers(self) -> dict[str, str]:
        headers = {
            "PRIVATE-TOKEN": self.private_token,
            "Accept": "application/json",
            "User-Agent": f"gitlab-gateway/{__version__}",
        }
        if self.sudo:
            headers["Sudo"] = self.sudo
        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                verify=self.verify_ssl,
                headers=self._headers(),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def request(
        self,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Make an HTTP request to the GitLab API.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: API path relative to the endpoint (e.g., /projects/42)
                or an absolute URL taken from a Link header
            **kwargs: Additional arguments for httpx

        Returns:
            httpx.Response with a success status

        Raises:
            ApiError: On an error status (subclass chosen by status code)
            ExternalServiceError: On transport failure
        """
        client = await self._get_client()
        if kwargs.get("params"):
            kwargs["params"] = encode_query_params(kwargs["params"])

        log_with_source(logger, "client", "debug", "API request", method=method, path=path)

        try:
            response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            log_with_source(
                logger,
                "client",
                "error",
                "API request failed",
                method=method,
                path=path,
                error=str(e),
            )
            raise ExternalServiceError(f"{method} {path} failed: {e}") from e

        log_with_source(
            logger,
            "client",
            "debug",
            "API response",
            method=method,
            path=path,
            status_code=response.status_code,
        )

        if response.is_error:
            raise error_for_response(response)

        return response

    def decode(self, response: httpx.Response) -> Any:
        """
        Decode a JSON response body.

        Returns:
            Parsed JSON, or None for an empty body

        Raises:
            ExternalServiceError: If the body is not JSON
        """
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ExternalServiceError(
                f"Invalid JSON in response from {response.request.url}",
                status_code=response.status_code,
            ) from e

    async def call(self, method: str, path: str, params: dict[str, Any] | None = None) -> Any:
        """
        Call an API operation and return the decoded JSON.

        GET and DELETE send params in the query string, with booleans as 1/0;
        POST, PUT and PATCH send them as the JSON body, where booleans stay
        JSON true/false.
        """
        method = method.upper()
        if method in BODY_METHODS:
            response = await self.request(method, path, json=params or {})
        else:
            response = await self.request(method, path, params=params or None)
        return self.decode(response)

    def paginate(self, path: str, params: dict[str, Any] | None = None) -> PaginatedResult:
        """Return a lazy sequence over every page of a list endpoint."""
        return PaginatedResult(self, path, params, per_page=self.per_page)
