# recruitdesk/api/v1/deps.py
from typing import Optional

from fastapi import Depends, Header

from deskkit import Unauthenticated
from recruitdesk.db.deps import get_services
from recruitdesk.db.schemas import UserContext
from recruitdesk.services.v1 import ServiceContainer


async def get_optional_user(
    x_user_id: Optional[str] = Header(default=None, alias="X-User-Id"),
    services: ServiceContainer = Depends(get_services),
) -> Optional[UserContext]:
    """Acting user when the header is present; an unknown id is rejected."""
    if not x_user_id:
        return None

    user = await services.users.get_user(x_user_id)
    if user is None:
        raise Unauthenticated(f"Unknown user: {x_user_id}")
    return user


async def get_current_user(
    user: Optional[UserContext] = Depends(get_optional_user),
) -> UserContext:
    if user is None:
        raise Unauthenticated("Missing X-User-Id header.")
    return user


__all__ = ["get_optional_user", "get_current_user"]
