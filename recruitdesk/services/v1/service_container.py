# recruitdesk/services/v1/service_container.py
from dataclasses import dataclass

from recruitdesk.db.db_manager import DbManager
from recruitdesk.db.storage import SqlStorage
from recruitdesk.permissions import PermissionResolver, SqlFeatureStore
from recruitdesk.recycle import SoftDeleteCascade
from .audit_service import AuditLog
from .permission_service import PermissionService
from .recycle_bin_service import RecycleBinService
from .user_service import UserService


@dataclass
class ServiceContainer:
    storage: SqlStorage
    resolver: PermissionResolver
    cascade: SoftDeleteCascade
    audit: AuditLog
    permissions: PermissionService
    users: UserService
    recycle_bin: RecycleBinService


def build_services(db_manager: DbManager) -> ServiceContainer:
    """Wire every service to one DbManager."""
    storage = SqlStorage(db_manager)
    store = SqlFeatureStore(storage)
    resolver = PermissionResolver(store)
    audit = AuditLog(storage)
    cascade = SoftDeleteCascade(storage, resolver, audit)

    return ServiceContainer(
        storage=storage,
        resolver=resolver,
        cascade=cascade,
        audit=audit,
        permissions=PermissionService(store, resolver, audit),
        users=UserService(storage, audit),
        recycle_bin=RecycleBinService(storage, resolver, cascade),
    )


__all__ = ["ServiceContainer", "build_services"]
