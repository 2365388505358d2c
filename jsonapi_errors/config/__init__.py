"""
Configuration module for jsonapi_errors.

Provides ErrorSettings (environment-driven, prefix ``JSONAPI_ERRORS_``) and a
cached get_settings() factory.
"""

from jsonapi_errors.config.settings import ErrorSettings, get_settings

__all__ = [
    "ErrorSettings",
    "get_settings",
]
