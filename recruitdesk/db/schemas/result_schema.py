# recruitdesk/db/schemas/result_schema.py
from typing import Any, Optional
from pydantic import BaseModel

from deskkit import AppError


class OperationResult(BaseModel):
    """
    Uniform result object returned by every public service call.

    Callers check `success`; on failure `error` is a human readable message,
    `code` is the stable machine code (ACCESS_DENIED, NOT_FOUND, ...) and
    `errors` carries per-field validation messages.
    """

    success: bool
    error: Optional[str] = None
    code: Optional[str] = None
    errors: Optional[dict[str, str]] = None
    details: Optional[dict[str, Any]] = None
    data: Any = None

    @classmethod
    def ok(cls, data: Any = None) -> "OperationResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, exc: AppError) -> "OperationResult":
        return cls(
            success=False,
            error=exc.message,
            code=exc.code,
            errors=getattr(exc, "errors", None),
            details=exc.payload() or None,
        )


__all__ = ["OperationResult"]
