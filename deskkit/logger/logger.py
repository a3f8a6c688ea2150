# deskkit/logger/logger.py
"""
Application logger with explicit initialization.

Usage:
    from deskkit.logger import get_app_logger

    logger = get_app_logger(__name__)
    logger.info("Candidate deleted", candidate_id=cid)

    # Carry context into every subsequent call
    audit_logger = logger.bind(component="audit")
"""

from typing import Any, Optional
import structlog

from deskkit.config.structlog_config import get_logger as _get_structlog_logger


class AppLogger:
    """
    Application logger wrapper.

    Resolves the structlog logger lazily so module-level loggers can be
    created before configure_structlog() has run.
    """

    def __init__(self, name: str = "app", context: Optional[dict[str, Any]] = None):
        self._name = name
        self._context: dict[str, Any] = dict(context or {})
        self._logger_instance: Optional[structlog.BoundLogger] = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def _logger(self) -> structlog.BoundLogger:
        if self._logger_instance is None:
            base = _get_structlog_logger(self._name)
            self._logger_instance = base.bind(**self._context) if self._context else base
        return self._logger_instance

    def bind(self, **context: Any) -> "AppLogger":
        """Return a new logger that includes `context` in every entry."""
        return AppLogger(self._name, {**self._context, **context})

    def debug(self, msg: str, **kwargs: Any) -> None:
        self._logger.debug(msg, **kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        self._logger.info(msg, **kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        self._logger.warning(msg, **kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        self._logger.error(msg, **kwargs)

    def critical(self, msg: str, **kwargs: Any) -> None:
        self._logger.critical(msg, **kwargs)


def get_app_logger(name: str = "app", **context: Any) -> AppLogger:
    """
    Get application logger instance.

    Args:
        name: Logger name, usually the module's __name__
        **context: Key/values bound to every entry from this logger
    """
    return AppLogger(name=name, context=context)


# Convenience instance for simple usage
logger = get_app_logger()

__all__ = ["logger", "AppLogger", "get_app_logger"]
