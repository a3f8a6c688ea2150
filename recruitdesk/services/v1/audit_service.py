# recruitdesk/services/v1/audit_service.py
from typing import Any, Optional

from deskkit import StorageError, get_app_logger
from recruitdesk.db.schemas import UserContext
from recruitdesk.db.storage import SqlStorage

logger = get_app_logger(__name__, component="audit")


class AuditLog:
    """
    Best-effort audit trail.

    Each entry is written in its own transaction after the audited change
    has committed, so a failed write is logged and otherwise ignored.
    """

    def __init__(self, storage: SqlStorage):
        self.storage = storage

    async def record(
        self,
        user: Optional[UserContext],
        action: str,
        target_type: str,
        target_id: Optional[str],
        details: str = "",
    ) -> bool:
        if user is None or not user.id:
            logger.warning("Audit entry skipped, no acting user", action=action)
            return False

        try:
            await self.storage.execute(
                """
                INSERT INTO audit_log
                       (user_id, username, action, target_type, target_id, details)
                VALUES (:user_id, :username, :action, :target_type, :target_id, :details)
                """,
                {
                    "user_id": user.id,
                    "username": user.username,
                    "action": action,
                    "target_type": target_type,
                    "target_id": target_id,
                    "details": details,
                },
            )
        except StorageError as e:
            logger.warning(
                "Audit entry not written",
                action=action,
                target_type=target_type,
                target_id=target_id,
                error=e.detail,
            )
            return False
        return True

    async def list_entries(self, limit: int = 100) -> list[dict[str, Any]]:
        return await self.storage.query_all(
            """
            SELECT id, user_id, username, action, target_type, target_id,
                   details, created_at
              FROM audit_log
             ORDER BY id DESC
             LIMIT :limit
            """,
            {"limit": limit},
        )


__all__ = ["AuditLog"]
