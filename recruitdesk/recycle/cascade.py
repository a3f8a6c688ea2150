# recruitdesk/recycle/cascade.py
"""
Soft delete, restore and purge across the entity dependency graph.

State per row:  Active (is_deleted=0) <-> Deleted (is_deleted=1) -> Purged

- soft_delete flags the row and every dependent row, whatever their flag
- restore clears the row and only those dependents currently flagged
- permanently_delete removes one row, never its dependents

Delete and restore run in one transaction; any failure rolls everything
back. Public methods return OperationResult and never raise.
"""

from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from deskkit import AppError, Forbidden, NotFound, get_app_logger
from recruitdesk.db.schemas import FeatureKey, OperationResult, Role, UserContext
from recruitdesk.db.storage import SqlStorage, SqlTransaction
from recruitdesk.permissions import PermissionResolver
from .entity_registry import EntitySpec, iter_dependents, resolve_entity

if TYPE_CHECKING:
    from recruitdesk.services.v1.audit_service import AuditLog

logger = get_app_logger(__name__)


class CascadeMode(Enum):
    DELETE = "delete"
    RESTORE = "restore"

    @property
    def flag(self) -> int:
        return 1 if self is CascadeMode.DELETE else 0

    @property
    def child_filter(self) -> str:
        # Delete overwrites blindly; restore only touches flagged children
        return "" if self is CascadeMode.DELETE else " AND is_deleted = 1"


class SoftDeleteCascade:
    def __init__(
        self,
        storage: SqlStorage,
        resolver: PermissionResolver,
        audit: Optional["AuditLog"] = None,
    ):
        self.storage = storage
        self.resolver = resolver
        self.audit = audit

    async def soft_delete(
        self,
        entity_type: str,
        entity_id: str,
        requester: Optional[UserContext] = None,
    ) -> OperationResult:
        return await self._run(CascadeMode.DELETE, entity_type, entity_id, requester)

    async def restore(
        self,
        entity_type: str,
        entity_id: str,
        requester: Optional[UserContext] = None,
    ) -> OperationResult:
        return await self._run(CascadeMode.RESTORE, entity_type, entity_id, requester)

    async def permanently_delete(
        self,
        entity_type: str,
        entity_id: str,
        requester: Optional[UserContext],
    ) -> OperationResult:
        try:
            spec = resolve_entity(entity_type)

            if requester is None or Role.parse(requester.role) is not Role.SUPER_ADMIN:
                logger.warning(
                    "Permanent delete refused",
                    user_id=requester.id if requester else None,
                    role=requester.role if requester else None,
                    entity_type=spec.entity_type.value,
                    entity_id=entity_id,
                )
                raise Forbidden(
                    "Access Denied: Only Super Admins can perform permanent deletion."
                )

            if not await self.resolver.is_globally_enabled(
                FeatureKey.DELETE_PERMANENTLY
            ):
                logger.warning(
                    "Permanent delete while globally disabled",
                    user_id=requester.id,
                    entity_type=spec.entity_type.value,
                    entity_id=entity_id,
                )
            await self.resolver.enforce(requester, FeatureKey.DELETE_PERMANENTLY)

            async with self.storage.transaction() as tx:
                result = await tx.execute(
                    f"DELETE FROM {spec.table} WHERE id = :id",
                    {"id": entity_id},
                )
                if result.changes == 0:
                    raise NotFound(f"{spec.label} not found.")

        except AppError as e:
            return OperationResult.fail(e)

        logger.info(
            "Record permanently deleted",
            entity_type=spec.entity_type.value,
            entity_id=entity_id,
            user_id=requester.id,
        )
        await self._audit(
            requester,
            "delete_permanently",
            spec,
            entity_id,
            f"Permanently deleted {spec.entity_type.value} {entity_id}",
        )
        return OperationResult.ok(
            {
                "entity_type": spec.entity_type.value,
                "id": entity_id,
                "changes": {spec.table: result.changes},
            }
        )

    async def _run(
        self,
        mode: CascadeMode,
        entity_type: str,
        entity_id: str,
        requester: Optional[UserContext],
    ) -> OperationResult:
        try:
            spec = resolve_entity(entity_type)
            async with self.storage.transaction() as tx:
                changes = await self._apply(tx, mode, spec, entity_id)
        except AppError as e:
            logger.warning(
                f"Cascade {mode.value} failed",
                entity_type=str(entity_type),
                entity_id=entity_id,
                code=e.code,
                error=e.message,
            )
            return OperationResult.fail(e)

        logger.info(
            f"Cascade {mode.value} committed",
            entity_type=spec.entity_type.value,
            entity_id=entity_id,
            rows=sum(changes.values()),
        )

        dependents = sum(changes.values()) - changes[spec.table]
        await self._audit(
            requester,
            f"{mode.value}_{spec.entity_type.value}",
            spec,
            entity_id,
            f"{mode.value.capitalize()}d {spec.entity_type.value} {entity_id} "
            f"and {dependents} dependent row(s)",
        )
        return OperationResult.ok(
            {
                "entity_type": spec.entity_type.value,
                "id": entity_id,
                "changes": changes,
            }
        )

    async def _apply(
        self,
        tx: SqlTransaction,
        mode: CascadeMode,
        spec: EntitySpec,
        entity_id: str,
    ) -> dict[str, int]:
        params: dict[str, Any] = {"id": entity_id, "flag": mode.flag}

        root = await tx.execute(
            f"""
            UPDATE {spec.table}
               SET is_deleted = :flag, updated_at = CURRENT_TIMESTAMP
             WHERE id = :id
            """,
            params,
        )
        if root.changes == 0:
            raise NotFound(f"{spec.label} not found.")

        changes: dict[str, int] = {spec.table: root.changes}
        for child, where in iter_dependents(spec.entity_type):
            result = await tx.execute(
                f"""
                UPDATE {child.table}
                   SET is_deleted = :flag, updated_at = CURRENT_TIMESTAMP
                 WHERE {where}{mode.child_filter}
                """,
                params,
            )
            changes[child.table] = changes.get(child.table, 0) + result.changes
            logger.debug(
                f"Cascade {mode.value} step",
                table=child.table,
                changes=result.changes,
            )
        return changes

    async def _audit(
        self,
        requester: Optional[UserContext],
        action: str,
        spec: EntitySpec,
        entity_id: str,
        details: str,
    ) -> None:
        if self.audit is None:
            return
        await self.audit.record(requester, action, spec.table, entity_id, details)


__all__ = ["CascadeMode", "SoftDeleteCascade"]
