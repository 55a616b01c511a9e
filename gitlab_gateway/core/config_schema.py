"""
Configuration Schemas.

Pydantic models defining the expected structure of the gateway config file
(~/.gitlab-gateway.yaml by default). Used by AppConfig to validate the file
at load time. Missing credentials, wrong types, or unknown keys raise a
clear ValidationError instead of a cryptic KeyError mid-request.

    GatewayConfigSchema
        api      -> ApiSchema
        output   -> OutputSchema
        logging  -> LoggingSchema
"""

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator


class _StrictBase(BaseModel):
    """Base with extra='forbid' so unknown YAML keys are caught immediately."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# api
# =============================================================================


class ApiSchema(_StrictBase):
    endpoint: str
    private_token: str
    timeout: float = 30.0
    verify_ssl: bool = True
    per_page: int = Field(default=100, ge=1, le=100)
    sudo: str | None = None

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v):
        try:
            url = httpx.URL(v)
        except httpx.InvalidURL as e:
            raise ValueError(f"Endpoint is not a valid URL: {e}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise ValueError("Endpoint must be an http(s) URL, e.g. https://gitlab.example.com/api/v4")
        return v


# =============================================================================
# output
# =============================================================================


class OutputSchema(_StrictBase):
    pretty: bool = False


# =============================================================================
# logging
# =============================================================================


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool = True


class FileHandlerSchema(_StrictBase):
    enabled: bool = False
    path: str = "~/.gitlab-gateway/gateway.jsonl"
    max_bytes: int = 10485760
    backup_count: int = 5


class HandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema = ConsoleHandlerSchema()
    file: FileHandlerSchema = FileHandlerSchema()


class LoggingSchema(_StrictBase):
    level: str = "WARNING"
    format: str = "console"
    handlers: HandlersSchema = HandlersSchema()


# =============================================================================
# config file root
# =============================================================================


class GatewayConfigSchema(_StrictBase):
    api: ApiSchema
    output: OutputSchema = OutputSchema()
    logging: LoggingSchema = LoggingSchema()
