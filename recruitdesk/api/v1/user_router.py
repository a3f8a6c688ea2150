# recruitdesk/api/v1/user_router.py
from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from recruitdesk.db.deps import get_services
from recruitdesk.db.schemas import OperationResult, UserContext, UserCreate
from recruitdesk.services.v1 import ServiceContainer
from .deps import get_current_user, get_optional_user
from .responses import result_response

user_router = APIRouter(
    prefix="/users",
    tags=["Users"],
)


@user_router.post(
    "",
    response_model=OperationResult,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
    description="""
    The first super admin can be created without X-User-Id. After that,
    super admins create admins and staff, and admins create staff they
    supervise.
    """,
    responses={
        403: {"description": "Caller may not create this role"},
        422: {"description": "Invalid or duplicate username, bad role or supervisor"},
    },
)
async def create_user(
    body: UserCreate,
    user: Optional[UserContext] = Depends(get_optional_user),
    services: ServiceContainer = Depends(get_services),
) -> JSONResponse:
    result = await services.users.create_user(
        body.username,
        body.role,
        supervisor_id=body.supervisor_id,
        actor=user,
    )
    return result_response(result, success_status=status.HTTP_201_CREATED)


@user_router.get(
    "",
    response_model=OperationResult,
    summary="List users",
)
async def list_users(
    _user: UserContext = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> JSONResponse:
    return result_response(await services.users.list_users())


@user_router.get(
    "/{user_id}",
    response_model=OperationResult,
    summary="Get a user",
    responses={404: {"description": "User not found"}},
)
async def get_user(
    user_id: str,
    _user: UserContext = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> JSONResponse:
    found = await services.users.get_user(user_id)
    if found is None:
        return result_response(
            OperationResult(success=False, error="User not found.", code="NOT_FOUND")
        )
    return result_response(OperationResult.ok(found.model_dump()))


__all__ = ["user_router"]
