# recruitdesk/services/v1/user_service.py
import json
import re
from typing import Optional

from deskkit import AppError, Forbidden, ValidationFailed, get_app_logger
from recruitdesk.db.models import User
from recruitdesk.db.schemas import (
    OperationResult,
    Role,
    UserContext,
    UserResponse,
    default_feature_flags,
)
from recruitdesk.db.storage import SqlStorage
from .audit_service import AuditLog

logger = get_app_logger(__name__)

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]{3,50}$")


class UserService:
    """Registry of the accounts that permission checks act on."""

    def __init__(self, storage: SqlStorage, audit: AuditLog):
        self.storage = storage
        self.audit = audit

    async def create_user(
        self,
        username: str,
        role: str,
        supervisor_id: Optional[str] = None,
        actor: Optional[UserContext] = None,
    ) -> OperationResult:
        """
        Create an account.

        Rules:
        - The first super admin needs no actor and seeds the global policy
        - Super admins create admins and staff
        - Admins create staff, who are always supervised by that admin
        - Staff create nobody
        """
        try:
            username = (username or "").strip()
            errors: dict[str, str] = {}
            if not USERNAME_PATTERN.match(username):
                errors["username"] = (
                    "Username must be 3-50 letters, digits, '.', '_' or '-'."
                )
            new_role = Role.parse(role)
            if new_role is None:
                errors["role"] = "Role must be one of: super_admin, admin, staff."
            if errors:
                raise ValidationFailed(errors)

            actor_role = Role.parse(actor.role) if actor is not None else None

            if new_role is Role.SUPER_ADMIN:
                if await self._super_admin_exists():
                    raise ValidationFailed(
                        {"role": "A Super Admin account already exists."}
                    )
                supervisor_id = None
            elif actor_role is Role.SUPER_ADMIN:
                pass
            elif actor_role is Role.ADMIN and new_role is Role.STAFF:
                supervisor_id = actor.id
            else:
                raise Forbidden("Access Denied: You cannot create this type of user.")

            if new_role is Role.STAFF:
                await self._require_admin_supervisor(supervisor_id)
            elif new_role is Role.ADMIN:
                supervisor_id = None

            if await self._username_taken(username):
                raise ValidationFailed({"username": "Username already exists."})

            user_id = User.generate_uuid()
            features = (
                json.dumps(default_feature_flags(), sort_keys=True)
                if new_role is Role.SUPER_ADMIN
                else None
            )
            async with self.storage.transaction() as tx:
                await tx.execute(
                    """
                    INSERT INTO users (id, username, role, supervisor_id, features)
                    VALUES (:id, :username, :role, :supervisor_id, :features)
                    """,
                    {
                        "id": user_id,
                        "username": username,
                        "role": new_role.value,
                        "supervisor_id": supervisor_id,
                        "features": features,
                    },
                )
        except AppError as e:
            return OperationResult.fail(e)

        created = UserContext(
            id=user_id,
            username=username,
            role=new_role.value,
            supervisor_id=supervisor_id,
        )
        logger.info("User created", user_id=user_id, role=new_role.value)
        await self.audit.record(
            actor or created,
            "create_user",
            "users",
            user_id,
            f"Created {new_role.value} {username}",
        )
        return OperationResult.ok(created.model_dump())

    async def get_user(self, user_id: Optional[str]) -> Optional[UserContext]:
        if not user_id:
            return None
        row = await self.storage.query_one(
            "SELECT id, username, role, supervisor_id FROM users WHERE id = :id",
            {"id": user_id},
        )
        return UserContext(**row) if row else None

    async def list_users(self) -> OperationResult:
        try:
            rows = await self.storage.query_all(
                """
                SELECT id, username, role, supervisor_id, created_at
                  FROM users
                 ORDER BY created_at, username
                """
            )
        except AppError as e:
            return OperationResult.fail(e)
        return OperationResult.ok(
            [UserResponse.model_validate(row).model_dump(mode="json") for row in rows]
        )

    async def _super_admin_exists(self) -> bool:
        row = await self.storage.query_one(
            "SELECT 1 AS found FROM users WHERE role = 'super_admin' LIMIT 1"
        )
        return row is not None

    async def _username_taken(self, username: str) -> bool:
        row = await self.storage.query_one(
            "SELECT 1 AS found FROM users WHERE username = :username",
            {"username": username},
        )
        return row is not None

    async def _require_admin_supervisor(self, supervisor_id: Optional[str]) -> None:
        if not supervisor_id:
            raise ValidationFailed(
                {"supervisor_id": "Staff must be assigned to an admin."}
            )
        row = await self.storage.query_one(
            "SELECT role FROM users WHERE id = :id",
            {"id": supervisor_id},
        )
        if row is None or row["role"] != Role.ADMIN.value:
            raise ValidationFailed(
                {"supervisor_id": "Supervisor must be an existing admin."}
            )


__all__ = ["UserService"]
