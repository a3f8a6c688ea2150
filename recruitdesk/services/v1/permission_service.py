# recruitdesk/services/v1/permission_service.py
from typing import Optional

from deskkit import AppError, Forbidden, NotFound, ValidationFailed, get_app_logger
from recruitdesk.db.schemas import FeatureKey, OperationResult, Role, UserContext
from recruitdesk.permissions import PermissionResolver, SqlFeatureStore
from .audit_service import AuditLog

logger = get_app_logger(__name__)


def _reject_unknown_keys(flags: dict[str, bool]) -> None:
    unknown = {
        key: "Unknown feature key."
        for key in flags
        if not FeatureKey.is_known(key)
    }
    if unknown:
        raise ValidationFailed(unknown, "Unknown feature key(s).")


def _is_role(user: Optional[UserContext], role: Role) -> bool:
    return user is not None and Role.parse(user.role) is role


class PermissionService:
    """
    Management of the global policy, admin assignments and staff grants.

    Writes are role-gated here; the resolver only answers access questions.
    """

    def __init__(
        self,
        store: SqlFeatureStore,
        resolver: PermissionResolver,
        audit: AuditLog,
    ):
        self.store = store
        self.resolver = resolver
        self.audit = audit

    async def get_global_policy(self) -> OperationResult:
        try:
            stored = await self.store.get_global_policy()
        except AppError as e:
            return OperationResult.fail(e)
        return OperationResult.ok(
            {key: stored.get(key, False) for key in FeatureKey.values()}
        )

    async def save_global_policy(
        self, actor: Optional[UserContext], flags: dict[str, bool]
    ) -> OperationResult:
        try:
            if not _is_role(actor, Role.SUPER_ADMIN):
                raise Forbidden(
                    "Access Denied: Only Super Admins can change feature flags."
                )
            _reject_unknown_keys(flags)

            merged = {**await self.store.get_global_policy(), **flags}
            await self.store.save_global_policy(merged)
        except AppError as e:
            return OperationResult.fail(e)

        logger.info("Global policy updated", user_id=actor.id, keys=sorted(flags))
        await self.audit.record(
            actor,
            "update_feature_flags",
            "users",
            actor.id,
            f"Updated feature flags: {', '.join(sorted(flags)) or 'none'}",
        )
        return OperationResult.ok(merged)

    async def set_admin_assignment(
        self,
        actor: Optional[UserContext],
        admin_id: str,
        feature_key: str,
        enabled: bool,
    ) -> OperationResult:
        try:
            if not _is_role(actor, Role.SUPER_ADMIN):
                raise Forbidden(
                    "Access Denied: Only Super Admins can assign admin features."
                )
            _reject_unknown_keys({feature_key: enabled})

            target = await self.store.get_user(admin_id)
            if target is None:
                raise NotFound("Admin not found.")
            if target["role"] != Role.ADMIN.value:
                raise ValidationFailed({"admin_id": "Target user is not an admin."})

            await self.store.set_admin_assignment(admin_id, feature_key, enabled)
        except AppError as e:
            return OperationResult.fail(e)

        await self.audit.record(
            actor,
            "update_admin_features",
            "admin_feature_assignments",
            admin_id,
            f"{feature_key} set to {enabled}",
        )
        return OperationResult.ok({"admin_id": admin_id, feature_key: enabled})

    async def get_admin_effective_flags(
        self, actor: Optional[UserContext], admin_id: str
    ) -> OperationResult:
        """Readable by the super admin and by the admin themself."""
        try:
            is_self = _is_role(actor, Role.ADMIN) and actor.id == admin_id
            if not (is_self or _is_role(actor, Role.SUPER_ADMIN)):
                raise Forbidden(
                    "Access Denied: You cannot view another admin's features."
                )

            target = await self.store.get_user(admin_id)
            if target is None or target["role"] != Role.ADMIN.value:
                raise NotFound("Admin not found.")

            flags = await self.resolver.compute_effective_flags(admin_id)
        except AppError as e:
            return OperationResult.fail(e)
        return OperationResult.ok(flags)

    async def get_staff_grants(
        self, actor: Optional[UserContext], staff_id: str
    ) -> OperationResult:
        """
        Grants in effect for a staff member, i.e. those recorded by the
        current supervisor. Readable by the super admin, the supervising
        admin and the staff member.
        """
        try:
            target = await self.store.get_user(staff_id)
            if target is None or target["role"] != Role.STAFF.value:
                raise NotFound("Staff member not found.")

            supervisor_id = target["supervisor_id"]
            is_supervisor = _is_role(actor, Role.ADMIN) and actor.id == supervisor_id
            is_self = actor is not None and actor.id == staff_id
            if not (is_supervisor or is_self or _is_role(actor, Role.SUPER_ADMIN)):
                raise Forbidden(
                    "Access Denied: You cannot view this staff member's permissions."
                )

            grants = await self._current_grants(staff_id, supervisor_id)
        except AppError as e:
            return OperationResult.fail(e)
        return OperationResult.ok(grants)

    async def save_staff_grants(
        self,
        actor: Optional[UserContext],
        staff_id: str,
        flags: dict[str, bool],
    ) -> OperationResult:
        try:
            target = await self.store.get_user(staff_id)
            if target is None:
                raise NotFound("Staff member not found.")
            if target["role"] != Role.STAFF.value:
                raise ValidationFailed({"staff_id": "Target user is not staff."})

            supervisor_id = target["supervisor_id"]
            is_supervisor = _is_role(actor, Role.ADMIN) and actor.id == supervisor_id
            if not (is_supervisor or _is_role(actor, Role.SUPER_ADMIN)):
                raise Forbidden(
                    "Access Denied: Only the supervising Admin can change "
                    "this staff member's permissions."
                )
            if not supervisor_id:
                raise ValidationFailed(
                    {"staff_id": "Staff member has no supervising admin."}
                )
            _reject_unknown_keys(flags)

            await self.store.save_staff_grants(staff_id, supervisor_id, flags)
            grants = await self._current_grants(staff_id, supervisor_id)
        except AppError as e:
            return OperationResult.fail(e)

        await self.audit.record(
            actor,
            "update_user_permissions",
            "staff_feature_grants",
            staff_id,
            f"Updated grants: {', '.join(sorted(flags)) or 'none'}",
        )
        return OperationResult.ok(grants)

    async def get_user_features(self, user: Optional[UserContext]) -> OperationResult:
        """Flags the user can actually use, for menu rendering."""
        try:
            features = {
                key: await self.resolver.can_access(user, key)
                for key in FeatureKey.values()
            }
        except AppError as e:
            return OperationResult.fail(e)
        return OperationResult.ok(features)

    async def _current_grants(
        self, staff_id: str, supervisor_id: Optional[str]
    ) -> dict[str, bool]:
        # Grants left by a previous supervisor are not in effect
        if not supervisor_id:
            return {}
        return await self.store.get_staff_grants(staff_id, admin_id=supervisor_id)


__all__ = ["PermissionService"]
