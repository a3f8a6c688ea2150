# deskkit/logger/logger_middleware/logger_middleware.py
"""
Request logging middleware for FastAPI.

Binds a request id into structlog's context variables so every log line
emitted while handling the request carries it, then logs one summary entry
per request.

Usage:
    app.add_middleware(RequestLoggingMiddleware, slow_request_threshold=500)
"""

import time
import uuid
from typing import Awaitable, Callable, Optional

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from ..logger import get_app_logger
from .middleware_types import RequestMetadata, RequestLogEntry


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: ASGIApp,
        *,
        slow_request_threshold: float = 1000.0,
        log_client_info: bool = True,
        logger_name: Optional[str] = None,
    ):
        """
        Args:
            app: ASGI application
            slow_request_threshold: Requests slower than this (ms) log a warning
            log_client_info: Whether to log the client address
            logger_name: Custom logger name (defaults to module name)
        """
        super().__init__(app)
        self.slow_request_threshold = slow_request_threshold
        self.log_client_info = log_client_info
        self.logger = get_app_logger(logger_name or __name__)

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.perf_counter()
        with structlog.contextvars.bound_contextvars(request_id=request_id):
            response = await call_next(request)
            duration_ms = (time.perf_counter() - start_time) * 1000

            response.headers["X-Request-ID"] = request_id

            log_entry = RequestLogEntry(
                metadata=RequestMetadata(
                    method=request.method,
                    path=request.url.path,
                    status_code=response.status_code,
                    duration_ms=round(duration_ms, 2),
                ),
                request_id=request_id,
                acting_user_id=request.headers.get("X-User-Id"),
                client_host=(
                    request.client.host
                    if self.log_client_info and request.client
                    else None
                ),
                slow_threshold_ms=self.slow_request_threshold,
            )
            self._log_request(log_entry)

        return response

    def _log_request(self, log_entry: RequestLogEntry) -> None:
        """
        - ERROR: 5xx responses
        - WARNING: slow requests or 4xx responses
        - INFO: everything else
        """
        log_data = log_entry.model_dump(mode="json", exclude_none=True)

        if log_entry.is_error:
            self.logger.error("Request failed with server error", **log_data)
        elif log_entry.is_slow:
            self.logger.warning(
                f"Slow request detected ({log_entry.metadata.duration_ms}ms)",
                **log_data,
            )
        elif log_entry.metadata.status_code >= 400:
            self.logger.warning("Request failed with client error", **log_data)
        else:
            self.logger.info("Request completed", **log_data)


__all__ = ["RequestLoggingMiddleware"]
