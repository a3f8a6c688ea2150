# recruitdesk/permissions/feature_store.py
"""
Persistence for the three permission layers.

- Global policy: JSON object on the super admin's `users.features` column
- Admin grants: admin_feature_assignments, a missing row means granted
- Staff grants: staff_feature_grants, a missing row means denied
"""

import json
from typing import Any, Optional, Protocol

from deskkit import NotFound, get_app_logger
from recruitdesk.db.storage import SqlStorage

logger = get_app_logger(__name__)


class FeatureStore(Protocol):
    async def get_global_policy(self) -> dict[str, bool]: ...

    async def get_admin_assignments(self, admin_id: str) -> dict[str, bool]: ...

    async def get_staff_grants(
        self, staff_id: str, admin_id: Optional[str] = None
    ) -> dict[str, bool]: ...

    async def get_supervisor_id(self, staff_id: str) -> Optional[str]: ...


class SqlFeatureStore:
    """FeatureStore backed by the users and grant tables."""

    def __init__(self, storage: SqlStorage):
        self.storage = storage

    async def get_global_policy(self) -> dict[str, bool]:
        row = await self.storage.query_one(
            "SELECT features FROM users WHERE role = 'super_admin' LIMIT 1"
        )
        if row is None or not row["features"]:
            return {}

        try:
            parsed = json.loads(row["features"])
        except ValueError as e:
            # Unreadable policy denies everything below super admin
            logger.error("Global policy is not valid JSON", error=str(e))
            return {}

        if not isinstance(parsed, dict):
            logger.error("Global policy is not a JSON object")
            return {}
        # Only a JSON true enables a feature
        return {key: value is True for key, value in parsed.items()}

    async def save_global_policy(self, flags: dict[str, bool]) -> None:
        result = await self.storage.execute(
            """
            UPDATE users
               SET features = :features, updated_at = CURRENT_TIMESTAMP
             WHERE role = 'super_admin'
            """,
            {"features": json.dumps(flags, sort_keys=True)},
        )
        if result.changes == 0:
            raise NotFound("Super Admin account not found.")

    async def get_admin_assignments(self, admin_id: str) -> dict[str, bool]:
        rows = await self.storage.query_all(
            """
            SELECT feature_key, enabled
              FROM admin_feature_assignments
             WHERE admin_id = :admin_id
            """,
            {"admin_id": admin_id},
        )
        return {row["feature_key"]: bool(row["enabled"]) for row in rows}

    async def set_admin_assignment(
        self, admin_id: str, feature_key: str, enabled: bool
    ) -> None:
        await self.storage.execute(
            """
            INSERT INTO admin_feature_assignments (admin_id, feature_key, enabled)
            VALUES (:admin_id, :feature_key, :enabled)
            ON CONFLICT (admin_id, feature_key) DO UPDATE
               SET enabled = excluded.enabled, updated_at = CURRENT_TIMESTAMP
            """,
            {"admin_id": admin_id, "feature_key": feature_key, "enabled": int(enabled)},
        )

    async def get_staff_grants(
        self, staff_id: str, admin_id: Optional[str] = None
    ) -> dict[str, bool]:
        sql = """
            SELECT feature_key, enabled
              FROM staff_feature_grants
             WHERE staff_id = :staff_id
        """
        params: dict[str, Any] = {"staff_id": staff_id}
        if admin_id is not None:
            sql += " AND admin_id = :admin_id"
            params["admin_id"] = admin_id

        rows = await self.storage.query_all(sql, params)
        return {row["feature_key"]: bool(row["enabled"]) for row in rows}

    async def save_staff_grants(
        self, staff_id: str, admin_id: str, flags: dict[str, bool]
    ) -> None:
        async with self.storage.transaction() as tx:
            for feature_key, enabled in flags.items():
                await tx.execute(
                    """
                    INSERT INTO staff_feature_grants
                           (staff_id, feature_key, admin_id, enabled)
                    VALUES (:staff_id, :feature_key, :admin_id, :enabled)
                    ON CONFLICT (staff_id, feature_key) DO UPDATE
                       SET admin_id = excluded.admin_id,
                           enabled = excluded.enabled,
                           updated_at = CURRENT_TIMESTAMP
                    """,
                    {
                        "staff_id": staff_id,
                        "feature_key": feature_key,
                        "admin_id": admin_id,
                        "enabled": int(enabled),
                    },
                )

    async def get_supervisor_id(self, staff_id: str) -> Optional[str]:
        row = await self.storage.query_one(
            "SELECT supervisor_id FROM users WHERE id = :id",
            {"id": staff_id},
        )
        return row["supervisor_id"] if row else None

    async def get_user(self, user_id: str) -> Optional[dict[str, Any]]:
        return await self.storage.query_one(
            """
            SELECT id, username, role, supervisor_id
              FROM users
             WHERE id = :id
            """,
            {"id": user_id},
        )


__all__ = ["FeatureStore", "SqlFeatureStore"]
