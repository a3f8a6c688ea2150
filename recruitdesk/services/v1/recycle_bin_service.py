# recruitdesk/services/v1/recycle_bin_service.py
from typing import Optional

from deskkit import AppError, get_app_logger
from recruitdesk.db.schemas import FeatureKey, OperationResult, UserContext
from recruitdesk.db.storage import SqlStorage
from recruitdesk.permissions import PermissionResolver
from recruitdesk.recycle import SoftDeleteCascade, resolve_entity

logger = get_app_logger(__name__)


class RecycleBinService:
    """
    Caller-facing delete flows.

    Soft deletes need the feature that gates the entity; browsing and
    restoring need canAccessRecycleBin; purging is left to the cascade's
    super admin check.
    """

    def __init__(
        self,
        storage: SqlStorage,
        resolver: PermissionResolver,
        cascade: SoftDeleteCascade,
    ):
        self.storage = storage
        self.resolver = resolver
        self.cascade = cascade

    async def list_deleted(
        self, actor: Optional[UserContext], entity_type: str
    ) -> OperationResult:
        try:
            spec = resolve_entity(entity_type)
            await self.resolver.enforce(actor, FeatureKey.ACCESS_RECYCLE_BIN)
            # Table names come from the registry, never from the caller
            rows = await self.storage.query_all(
                f"""
                SELECT *
                  FROM {spec.table}
                 WHERE is_deleted = 1
                 ORDER BY updated_at DESC, id
                """
            )
        except AppError as e:
            return OperationResult.fail(e)
        return OperationResult.ok(rows)

    async def soft_delete(
        self, actor: Optional[UserContext], entity_type: str, entity_id: str
    ) -> OperationResult:
        try:
            spec = resolve_entity(entity_type)
            if spec.feature_key is not None:
                await self.resolver.enforce(actor, spec.feature_key)
        except AppError as e:
            return OperationResult.fail(e)
        return await self.cascade.soft_delete(spec.entity_type, entity_id, actor)

    async def restore(
        self, actor: Optional[UserContext], entity_type: str, entity_id: str
    ) -> OperationResult:
        try:
            spec = resolve_entity(entity_type)
            await self.resolver.enforce(actor, FeatureKey.ACCESS_RECYCLE_BIN)
        except AppError as e:
            return OperationResult.fail(e)
        return await self.cascade.restore(spec.entity_type, entity_id, actor)

    async def purge(
        self, actor: Optional[UserContext], entity_type: str, entity_id: str
    ) -> OperationResult:
        return await self.cascade.permanently_delete(entity_type, entity_id, actor)


__all__ = ["RecycleBinService"]
