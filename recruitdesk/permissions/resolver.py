# recruitdesk/permissions/resolver.py
"""
Three-tier feature gating.

    super_admin  -> always allowed
    admin        -> policy[key] AND admin_grant[admin, key] (missing = granted)
    staff        -> policy[key] AND effective_admin_flags(supervisor)[key]
                    AND staff_grant[staff, key] recorded by that supervisor
                    (missing = denied)

A key missing from the global policy is disabled for everyone below the
super admin. Nothing is cached; every call reads the store.
"""

from typing import Optional, Union

from deskkit import AccessDenied, AppError, get_app_logger
from recruitdesk.db.schemas import (
    AccessDecision,
    DenialReason,
    FeatureKey,
    OperationResult,
    Role,
    UserContext,
)
from .feature_store import FeatureStore

logger = get_app_logger(__name__)

FeatureLike = Union[FeatureKey, str]


def _key(feature_key: FeatureLike) -> str:
    return feature_key.value if isinstance(feature_key, FeatureKey) else feature_key


class PermissionResolver:
    def __init__(self, store: FeatureStore):
        self.store = store

    async def check(
        self, user: Optional[UserContext], feature_key: FeatureLike
    ) -> AccessDecision:
        """Decide access and, when denied, which layer refused it."""
        key = _key(feature_key)
        role = Role.parse(user.role) if user is not None else None

        if role is Role.SUPER_ADMIN:
            return AccessDecision.allow()

        if user is None or not user.id or role is None:
            return AccessDecision.deny(DenialReason.NOT_DELEGATED)

        policy = await self.store.get_global_policy()
        if not policy.get(key, False):
            return AccessDecision.deny(DenialReason.POLICY_DISABLED)

        if role is Role.ADMIN:
            assignments = await self.store.get_admin_assignments(user.id)
            if not assignments.get(key, True):
                return AccessDecision.deny(DenialReason.NOT_DELEGATED)
            return AccessDecision.allow()

        # Staff
        supervisor_id = await self.store.get_supervisor_id(user.id)
        if not supervisor_id:
            return AccessDecision.deny(DenialReason.NOT_DELEGATED)

        supervisor_flags = await self.store.get_admin_assignments(supervisor_id)
        if not supervisor_flags.get(key, True):
            return AccessDecision.deny(DenialReason.NOT_DELEGATED)

        grants = await self.store.get_staff_grants(user.id, admin_id=supervisor_id)
        if not grants.get(key, False):
            return AccessDecision.deny(DenialReason.NOT_DELEGATED)

        return AccessDecision.allow()

    async def can_access(
        self, user: Optional[UserContext], feature_key: FeatureLike
    ) -> bool:
        decision = await self.check(user, feature_key)
        return decision.allowed

    async def enforce(
        self, user: Optional[UserContext], feature_key: FeatureLike
    ) -> None:
        """
        Raise AccessDenied unless `user` may use `feature_key`.

        Raises:
            AccessDenied: carries role, feature_key and the denial reason
        """
        key = _key(feature_key)
        decision = await self.check(user, key)
        if decision.allowed:
            return

        role = user.role if user is not None else None
        reason = (decision.reason or DenialReason.NOT_DELEGATED).value
        logger.warning(
            "Access denied",
            user_id=user.id if user is not None else None,
            role=role,
            feature_key=key,
            reason=reason,
        )
        raise AccessDenied(role, key, reason)

    async def authorize(
        self, user: Optional[UserContext], feature_key: FeatureLike
    ) -> OperationResult:
        """Non-raising form of enforce() for callers outside the services."""
        try:
            await self.enforce(user, feature_key)
        except AppError as e:
            return OperationResult.fail(e)
        return OperationResult.ok()

    async def compute_effective_flags(self, admin_id: str) -> dict[str, bool]:
        """Every global policy key ANDed with the admin's assignment."""
        policy = await self.store.get_global_policy()
        assignments = await self.store.get_admin_assignments(admin_id)
        return {
            key: bool(enabled) and assignments.get(key, True)
            for key, enabled in policy.items()
        }

    async def is_globally_enabled(self, feature_key: FeatureLike) -> bool:
        policy = await self.store.get_global_policy()
        return bool(policy.get(_key(feature_key), False))


__all__ = ["PermissionResolver"]
