"""Pydantic configuration schema for graphcall.

This module defines the schema that mirrors config.yaml. Values here are the
defaults the CLI uses for any option not given on the command line.

Usage:
    from graphcall.config_schema import AppConfig

    config = AppConfig(**yaml_data)
"""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from graphcall.graph.models import DEFAULT_DEPTH, DEFAULT_MAX_RETRIES, DEFAULT_TIMEOUT

# Current schema version - increment when adding new required fields
CURRENT_SCHEMA_VERSION = 1


class RequestDefaults(BaseModel):
    """Defaults applied to every request issued from the CLI."""

    max_retries: int = Field(
        default=DEFAULT_MAX_RETRIES,
        ge=0,
        le=20,
        description="Retries allowed after the first attempt for 429/5xx responses",
    )
    use_beta: bool = Field(default=False, description="Target the beta endpoint")
    user_agent: str | None = Field(default=None, description="User-Agent override")
    proxy: str | None = Field(default=None, description="Proxy address, e.g. http://proxy:8080")
    timeout: float = Field(
        default=DEFAULT_TIMEOUT, gt=0, le=600, description="Per-attempt timeout in seconds"
    )
    depth: int = Field(
        default=DEFAULT_DEPTH, ge=1, le=100, description="JSON depth for raw output"
    )

    @field_validator("proxy")
    @classmethod
    def validate_proxy(cls, v: str | None) -> str | None:
        """Require a scheme so requests knows how to talk to the proxy."""
        if v is None:
            return v
        if "://" not in v:
            raise ValueError("Proxy must include a scheme, e.g. 'http://proxy:8080'")
        return v


class LoggingConfig(BaseModel):
    """Log output configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="WARNING")
    json_output: bool = Field(default=False, description="Emit JSON instead of console lines")


class AppConfig(BaseModel):
    """Root configuration model."""

    schema_version: int = Field(default=CURRENT_SCHEMA_VERSION, ge=1)
    request: RequestDefaults = Field(default_factory=RequestDefaults)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
