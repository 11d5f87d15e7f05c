"""
Module: settings.py
Description: Logger configuration.

LoggerSettings reads defaults from environment variables prefixed with
APP_LOGGER_ (and an optional .env file). LoggerConfig is the immutable
configuration a Logger is built from; changing the threshold or the
formatter replaces it with an updated copy.
"""

import os
import re
import socket
from functools import lru_cache
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app_logger.models.severity import Severity, parse_severity


def default_stream_name() -> str:
    """Log stream name for this process: <hostname>-<pid>."""
    host = re.sub(r"[:*]", "-", socket.gethostname()) or "localhost"
    return f"{host}-{os.getpid()}"


class LoggerSettings(BaseSettings):
    """Logger settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="APP_LOGGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    level: str = Field(default="DEBUG", description="Minimum severity to emit")
    pretty: bool = Field(default=False, description="Append pretty rendering of data arguments")

    # Remote destination (selects the CloudWatch sink when set)
    log_group_name: Optional[str] = Field(
        default=None,
        description="CloudWatch log group to write to"
    )
    log_stream_name: Optional[str] = Field(
        default=None,
        description="CloudWatch log stream, <hostname>-<pid> when unset"
    )
    aws_region: str = Field(default="us-east-1", description="AWS region")
    endpoint_url: Optional[str] = Field(
        default=None,
        description="CloudWatch Logs endpoint override (for local stacks)"
    )

    # Library diagnostics
    diagnostics_level: str = Field(default="WARNING", description="Diagnostics logging level")
    diagnostics_json: bool = Field(default=True, description="Render diagnostics as JSON")

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate level names a severity."""
        return parse_severity(v).name

    @field_validator('diagnostics_level')
    @classmethod
    def validate_diagnostics_level(cls, v: str) -> str:
        """Validate diagnostics level is a valid logging level."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"diagnostics_level must be one of: {', '.join(valid_levels)}")
        return v.upper()

    @field_validator('log_group_name', 'log_stream_name', 'endpoint_url')
    @classmethod
    def empty_as_unset(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty environment values as unset."""
        if v is not None and not v.strip():
            return None
        return v


@lru_cache
def get_settings() -> LoggerSettings:
    """
    Get cached settings instance.

    Returns:
        LoggerSettings loaded from the environment.
    """
    return LoggerSettings()


class LoggerConfig(BaseModel):
    """
    Immutable configuration of one Logger.

    Attributes:
        min_severity: Calls below this severity are suppressed
        pretty: Build and write the pretty rendering of data arguments
        output: Writable stream (stream sink)
        destination_name: Remote log group name (remote sink)
        stream_name: Remote log stream name
        formatter: Custom line formatter replacing the default rendering
        progname: Context string handed to custom formatters
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    min_severity: Severity = Severity.DEBUG
    pretty: bool = False
    output: Optional[Any] = None
    destination_name: Optional[str] = None
    stream_name: Optional[str] = None
    formatter: Optional[Any] = None
    progname: Optional[str] = None

    @field_validator('min_severity', mode='before')
    @classmethod
    def coerce_severity(cls, v: Any) -> Severity:
        return parse_severity(v)

    @field_validator('destination_name')
    @classmethod
    def validate_destination_name(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("destination_name must be a non-empty string")
        return v

    @field_validator('formatter')
    @classmethod
    def validate_formatter(cls, v: Any) -> Any:
        if v is not None and not callable(v):
            raise ValueError("formatter must be callable")
        return v

    @model_validator(mode='after')
    def check_sink_selection(self) -> "LoggerConfig":
        if self.output is not None and self.destination_name is not None:
            raise ValueError("output and destination_name are mutually exclusive")
        if self.formatter is not None and self.destination_name is not None:
            raise ValueError("formatter only applies to stream output")
        if self.output is not None and not callable(getattr(self.output, "write", None)):
            raise ValueError("output must be a writable stream")
        return self

    @property
    def is_remote(self) -> bool:
        return self.destination_name is not None
