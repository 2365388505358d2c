"""
Settings for jsonapi_errors.

Values are read from environment variables prefixed with ``JSONAPI_ERRORS_``
(or a ``.env`` file). Exception mappings are code, not configuration, and are
passed to ``configure()`` / ``setup_errors()`` directly.

Example environment variables:

JSONAPI_ERRORS_LOAD_ON_START=true
JSONAPI_ERRORS_FALLBACK=500            # status or code, empty for no fallback
JSONAPI_ERRORS_SHORT_FORMAT=false
JSONAPI_ERRORS_WITH_ORIGINAL=false     # true, false or full_trace
JSONAPI_ERRORS_MEDIA_TYPE="application/vnd.api+json"
JSONAPI_ERRORS_DEBUG=false
JSONAPI_ERRORS_LOG_LEVEL=INFO
JSONAPI_ERRORS_LOG_JSON_FORMAT=false
"""

from functools import lru_cache
from typing import Literal, Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from jsonapi_errors.catalog import get_entry

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ErrorSettings(BaseSettings):
    """
    Settings for error resolution and rendering.

    Attributes:
        LOAD_ON_START: Load the catalog error types during configure()
        FALLBACK: Status or code of the fallback error type, None for no fallback
        SHORT_FORMAT: Render error objects in short form by default
        WITH_ORIGINAL: Attach the original failure to meta (True, False or "full_trace")
        MEDIA_TYPE: Content type of rendered error documents
        DEBUG: Enable debug logging
        LOG_LEVEL: Log level of the package logger
        LOG_JSON_FORMAT: Log in JSON format
    """

    LOAD_ON_START: bool = Field(
        default=True, description="Load catalog error types during configure()"
    )
    FALLBACK: Optional[Union[int, str]] = Field(
        default=500, description="Status or code of the fallback error type"
    )
    SHORT_FORMAT: bool = Field(
        default=False, description="Render short error objects by default"
    )
    WITH_ORIGINAL: Union[bool, Literal["full_trace"]] = Field(
        default=False, description="Attach the original failure to meta"
    )
    MEDIA_TYPE: str = Field(
        default="application/vnd.api+json", description="Error document content type"
    )
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: str = Field(default="INFO", description="Package log level")
    LOG_JSON_FORMAT: bool = Field(default=False, description="Log in JSON format")

    @field_validator("FALLBACK", mode="before")
    def validate_fallback(cls, value):
        """Accept a known status or code; an empty value disables the fallback."""
        if value is None or value == "":
            return None
        if get_entry(value) is None:
            raise ValueError(f"FALLBACK {value!r} is not a known status or error code")
        if isinstance(value, str) and value.strip().isdigit():
            return int(value)
        return value

    @field_validator("LOG_LEVEL", mode="before")
    def validate_log_level(cls, value):
        """Ensure LOG_LEVEL is a standard logging level name."""
        level = str(value).upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {value!r}")
        return level

    model_config = SettingsConfigDict(
        env_prefix="JSONAPI_ERRORS_", env_file=".env", case_sensitive=True, extra="ignore"
    )


@lru_cache()
def get_settings() -> ErrorSettings:
    """
    Return the settings loaded from the environment.

    The instance is cached; call ``get_settings.cache_clear()`` to reload.
    """
    return ErrorSettings()
