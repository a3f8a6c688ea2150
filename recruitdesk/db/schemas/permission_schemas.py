# recruitdesk/db/schemas/permission_schemas.py
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class DenialReason(str, Enum):
    POLICY_DISABLED = "policy_disabled"  # switched off in the global policy
    NOT_DELEGATED = "not_delegated"  # on globally, but not granted down the chain


class AccessDecision(BaseModel):
    model_config = ConfigDict(frozen=True)

    allowed: bool
    reason: Optional[DenialReason] = None

    @classmethod
    def allow(cls) -> "AccessDecision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: DenialReason) -> "AccessDecision":
        return cls(allowed=False, reason=reason)


class FeatureFlagsUpdate(BaseModel):
    flags: dict[str, bool] = Field(default_factory=dict)


class AdminAssignmentUpdate(BaseModel):
    enabled: bool


__all__ = [
    "DenialReason",
    "AccessDecision",
    "FeatureFlagsUpdate",
    "AdminAssignmentUpdate",
]
