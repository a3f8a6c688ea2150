# deskkit/config/initialize_config.py
"""
Configuration initialization module.

Handles the complete application configuration lifecycle.
"""
from typing import Optional, List
from pydantic import ValidationError
from .app_config import AppConfig, load_app_config
from .structlog_config import configure_structlog
from deskkit.api_error import ConfigurationError


class _ConfigState:
    """
    Process-wide holder for the validated application configuration.
    """

    _instance: Optional["_ConfigState"] = None
    _config: Optional[AppConfig]

    def __new__(cls) -> "_ConfigState":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._config = None
        return cls._instance

    @property
    def config(self) -> AppConfig:
        if not self._config:
            raise RuntimeError(
                "Configuration not initialized. Call initialize_config() at startup."
            )
        return self._config

    def set_config(self, config: AppConfig) -> None:
        self._config = config


_state = _ConfigState()


def initialize_config() -> AppConfig:
    """
    Initialize and validate all application configuration.

    This MUST be called once at application startup before any other code.
    Configuration is validated using Pydantic and fails fast with one line
    per invalid field.

    Raises:
        ConfigurationError: If configuration is invalid or missing
    """
    try:
        config = load_app_config()
    except ValidationError as e:
        errors: List[str] = []
        for error in e.errors():
            field = ".".join(str(x) for x in error["loc"])
            errors.append(f"{field}: {error['msg']}")

        raise ConfigurationError(
            "Configuration validation failed:\n"
            + "\n".join(f"  - {line}" for line in errors)
        ) from e
    except ValueError as e:
        raise ConfigurationError(str(e)) from e

    configure_structlog(config.logging.level_int, config.logging.json_output)
    _state.set_config(config)
    return config


def get_config() -> AppConfig:
    """
    Get validated application configuration.

    Raises:
        RuntimeError: If not initialized
    """
    return _state.config


__all__ = ["initialize_config", "get_config"]
