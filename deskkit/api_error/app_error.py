# deskkit/api_error/app_error.py
from typing import Any, Optional


class AppError(Exception):
    """Base error for all application-specific issues."""

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        code: str = "INTERNAL_ERROR",
    ):
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(self.message)

    def payload(self) -> dict[str, Any]:
        """Extra structured context rendered next to the message."""
        return {}


class AccessDenied(AppError):
    """
    A feature check failed for the caller's role.

    `reason` tells the UI which message to show:
    - policy_disabled: the super admin switched the feature off globally
    - not_delegated: the feature is on, but was not granted to this user
    """

    def __init__(self, role: Optional[str], feature_key: str, reason: str):
        self.role = role
        self.feature_key = feature_key
        self.reason = reason

        if reason == "policy_disabled":
            message = (
                f'Access Denied: Feature "{feature_key}" is disabled by '
                f"Super Admin policy."
            )
        else:
            message = (
                f'Access Denied: Feature "{feature_key}" is not granted to '
                f"this {role or 'user'}."
            )
        super().__init__(message, status_code=403, code="ACCESS_DENIED")

    def payload(self) -> dict[str, Any]:
        return {
            "role": self.role,
            "feature_key": self.feature_key,
            "reason": self.reason,
        }


class Forbidden(AppError):
    """Operation reserved for a more privileged role."""

    def __init__(self, message: str = "Access Denied."):
        super().__init__(message, status_code=403, code="FORBIDDEN")


class NotFound(AppError):
    def __init__(self, message: str = "Record not found."):
        super().__init__(message, status_code=404, code="NOT_FOUND")


class UnknownEntityType(AppError):
    def __init__(self, entity_type: Any):
        self.entity_type = entity_type
        super().__init__(
            f"Invalid target type: {entity_type!r}.",
            status_code=400,
            code="UNKNOWN_ENTITY_TYPE",
        )

    def payload(self) -> dict[str, Any]:
        return {"entity_type": str(self.entity_type)}


class StorageError(AppError):
    """Transactional execute/commit failed; the transaction was rolled back."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(
            f"Storage error: {detail}",
            status_code=500,
            code="STORAGE_ERROR",
        )


class ValidationFailed(AppError):
    """Input rejected, with one message per offending field."""

    def __init__(self, errors: dict[str, str], message: str = "Validation failed"):
        self.errors = errors
        super().__init__(message, status_code=422, code="VALIDATION_ERROR")


class Unauthenticated(AppError):
    def __init__(self, message: str = "Unknown or missing user."):
        super().__init__(message, status_code=401, code="UNAUTHENTICATED")


__all__ = [
    "AppError",
    "AccessDenied",
    "Forbidden",
    "NotFound",
    "UnknownEntityType",
    "StorageError",
    "ValidationFailed",
    "Unauthenticated",
]
