# deskkit/config/env_config.py
import os
from typing import Optional
from deskkit.api_error import ConfigurationError


def get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    """
    Get Env variable with optional default
    """
    return os.getenv(name, default=default)


def require_env(name: str) -> str:
    """
    Get required environment variable or raise immediately.
    """
    value = os.getenv(name)
    if not value:
        raise ConfigurationError(f"Missing required env variables: {name}")
    return value


def get_env_bool(name: str, default: bool = False) -> bool:
    """Parse a true/false style environment variable."""
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


__all__ = ["require_env", "get_env", "get_env_bool"]
