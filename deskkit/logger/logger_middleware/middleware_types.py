# deskkit/logger/logger_middleware/middleware_types.py
"""
Type definitions for request logging middleware.
"""

from typing import Optional
from pydantic import BaseModel, Field, computed_field


class RequestMetadata(BaseModel):
    """
    Core request metadata - always captured.
    """

    method: str = Field(..., description="HTTP method (GET, POST, etc.)")
    path: str = Field(..., description="Request path without query params")
    status_code: int = Field(..., ge=100, le=599, description="HTTP status code")
    duration_ms: float = Field(..., ge=0, description="Request duration in milliseconds")

    model_config = {"frozen": True}


class RequestLogEntry(BaseModel):
    """
    Complete request log entry; serializes cleanly for structured logging.
    """

    metadata: RequestMetadata
    request_id: str
    acting_user_id: Optional[str] = None
    client_host: Optional[str] = None
    slow_threshold_ms: float = Field(default=1000.0, exclude=True)

    model_config = {"frozen": True}

    @computed_field
    def is_slow(self) -> bool:
        return self.metadata.duration_ms > self.slow_threshold_ms

    @computed_field
    def is_error(self) -> bool:
        """Flag error responses (5xx)."""
        return self.metadata.status_code >= 500


__all__ = [
    "RequestMetadata",
    "RequestLogEntry",
]
