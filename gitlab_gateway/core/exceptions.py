"""
Custom Exceptions.

Gateway-specific exception classes for consistent error handling.
Every error that reaches the entry point is a GatewayError subclass,
logged at critical level with its code, and ends the process with exit 1.
"""


class GatewayError(Exception):
    """Base exception for all gateway errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class UsageError(GatewayError):
    """Raised when the command line cannot be turned into an API call."""

    def __init__(self, message: str = "Invalid usage") -> None:
        super().__init__(message, code="CLI_USAGE")


class UnknownCommandError(GatewayError):
    """Raised when a method name is not in the command registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown method: {name}", code="CLI_UNKNOWN_COMMAND")


class ConfigurationError(GatewayError):
    """Raised when the gateway configuration is missing or invalid."""

    def __init__(self, message: str = "Invalid configuration") -> None:
        super().__init__(message, code="CFG_INVALID")


class ApiError(GatewayError):
    """Raised when the GitLab API answers with an error status."""

    def __init__(
        self,
        message: str = "API error",
        status_code: int | None = None,
        code: str = "API_ERROR",
    ) -> None:
        self.status_code = status_code
        super().__init__(message, code=code)


class ValidationError(ApiError):
    """Raised when GitLab rejects the request parameters."""

    def __init__(self, message: str = "Validation failed", status_code: int | None = 400) -> None:
        super().__init__(message, status_code=status_code, code="API_VALIDATION_ERROR")


class AuthenticationError(ApiError):
    """Raised when the private token is missing or rejected."""

    def __init__(self, message: str = "Authentication required", status_code: int | None = 401) -> None:
        super().__init__(message, status_code=status_code, code="AUTH_UNAUTHORIZED")


class AuthorizationError(ApiError):
    """Raised when the token lacks permission for the resource."""

    def __init__(self, message: str = "Permission denied", status_code: int | None = 403) -> None:
        super().__init__(message, status_code=status_code, code="AUTHZ_FORBIDDEN")


class NotFoundError(ApiError):
    """Raised when a resource cannot be found."""

    def __init__(self, message: str = "Resource not found", status_code: int | None = 404) -> None:
        super().__init__(message, status_code=status_code, code="RES_NOT_FOUND")


class ConflictError(ApiError):
    """Raised when there is a state conflict."""

    def __init__(self, message: str = "Resource conflict", status_code: int | None = 409) -> None:
        super().__init__(message, status_code=status_code, code="RES_CONFLICT")


class RateLimitError(ApiError):
    """Raised when rate limit is exceeded."""

    def __init__(self, message: str = "Rate limit exceeded", status_code: int | None = 429) -> None:
        super().__init__(message, status_code=status_code, code="RATE_LIMITED")


class ExternalServiceError(ApiError):
    """Raised when GitLab is unreachable or answers with a server error."""

    def __init__(self, message: str = "External service error", status_code: int | None = None) -> None:
        super().__init__(message, status_code=status_code, code="SYS_EXTERNAL_SERVICE_ERROR")
