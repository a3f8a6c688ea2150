# deskkit/config/config_types.py
"""Configuration type definitions."""

from enum import Enum
import logging


class EnvLogLevel(str, Enum):
    """
    Supported log levels.

    Inherits from str so values serialize naturally to JSON/strings.

    Examples:
        >>> EnvLogLevel("INFO").level
        20
        >>> str(EnvLogLevel.INFO)
        'INFO'
    """

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @property
    def level(self) -> int:
        """Numeric logging level for the stdlib logging module."""
        return getattr(logging, self.value)

    def __str__(self) -> str:
        return self.value


class EnvLogFormat(str, Enum):
    CONSOLE = "console"
    JSON = "json"

    def __str__(self) -> str:
        return self.value


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"

    @property
    def is_production(self) -> bool:
        return self == Environment.PRODUCTION

    @property
    def is_development(self) -> bool:
        return self == Environment.DEVELOPMENT

    def __str__(self) -> str:
        return self.value


class DbDriver(str, Enum):
    """Supported database drivers."""

    AIOSQLITE = "aiosqlite"


__all__ = [
    "EnvLogLevel",
    "EnvLogFormat",
    "Environment",
    "DbDriver",
]
