# deskkit/config/structlog_config.py
"""
Structlog configuration module.
Must be configured once at application startup via configure_structlog().
"""
import sys
import os
import threading
from typing import Any, Optional
import structlog
from rich.traceback import install as install_rich_traceback

# Install Rich tracebacks once
install_rich_traceback(show_locals=False, width=None, extra_lines=3)


class _StructlogState:
    """
    Thread-safe, process-safe singleton for structlog configuration state.

    Handles multiprocess scenarios (like uvicorn reload) by remembering
    which process did the configuring.
    """

    _instance: Optional["_StructlogState"] = None
    _lock = threading.Lock()

    _initialized: bool
    _settings: Optional[tuple[int, bool]]
    _process_id: Optional[int]

    def __new__(cls) -> "_StructlogState":
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    instance = super().__new__(cls)
                    instance._initialized = False
                    instance._settings = None
                    instance._process_id = None
                    cls._instance = instance
        return cls._instance

    @property
    def is_configured(self) -> bool:
        """Check if configured in the CURRENT process."""
        return self._initialized and self._process_id == os.getpid()

    @property
    def settings(self) -> Optional[tuple[int, bool]]:
        return self._settings

    def mark_configured(self, settings: tuple[int, bool]) -> None:
        with self._lock:
            self._settings = settings
            self._process_id = os.getpid()
            self._initialized = True

    def reset(self) -> None:
        """Reset state. FOR TESTING ONLY."""
        with self._lock:
            self._initialized = False
            self._settings = None
            self._process_id = None


_state = _StructlogState()


def _renderer(json_output: bool) -> Any:
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.RichTracebackFormatter(
            show_locals=False,
            width=None,
            suppress=["starlette", "uvicorn", "fastapi", "sqlalchemy"],
        ),
    )


def configure_structlog(log_level: int, json_output: bool = False) -> None:
    """
    Configure structlog with the specified log level and renderer.

    Calling again in the same process with identical settings is a no-op.

    Raises:
        RuntimeError: If already configured in this process with other settings
    """
    settings = (log_level, json_output)
    if _state.is_configured:
        if _state.settings == settings:
            return
        raise RuntimeError(
            f"structlog already configured in this process. "
            f"Current settings: {_state.settings}, attempted: {settings}"
        )

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(
            fmt="iso" if json_output else "%Y-%m-%d %H:%M:%S",
            utc=json_output,
        ),
    ]
    if json_output:
        processors.append(structlog.processors.format_exc_info)
    processors.append(_renderer(json_output))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    _state.mark_configured(settings)


def get_logger(name: str = "app") -> structlog.BoundLogger:
    """
    Get a structlog logger instance.

    Raises:
        RuntimeError: If structlog hasn't been configured yet in this process
    """
    if not _state.is_configured:
        raise RuntimeError(
            "structlog not configured. "
            "Call configure_structlog() at application startup."
        )
    return structlog.get_logger(name)


def is_configured() -> bool:
    """Check if structlog has been configured in this process."""
    return _state.is_configured


__all__ = [
    "configure_structlog",
    "get_logger",
    "is_configured",
]
