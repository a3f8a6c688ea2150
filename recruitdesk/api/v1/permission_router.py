# recruitdesk/api/v1/permission_router.py
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from recruitdesk.db.deps import get_services
from recruitdesk.db.schemas import (
    AdminAssignmentUpdate,
    FeatureFlagsUpdate,
    OperationResult,
    UserContext,
)
from recruitdesk.services.v1 import ServiceContainer
from .deps import get_current_user
from .responses import result_response

permission_router = APIRouter(
    prefix="/permissions",
    tags=["Permissions"],
)

_error_responses = {
    401: {"description": "Missing or unknown X-User-Id"},
    403: {"description": "Caller lacks the required role or feature"},
}


@permission_router.get(
    "/global",
    response_model=OperationResult,
    status_code=status.HTTP_200_OK,
    summary="Get the global feature policy",
    responses=_error_responses,
)
async def get_global_policy(
    _user: UserContext = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> JSONResponse:
    return result_response(await services.permissions.get_global_policy())


@permission_router.put(
    "/global",
    response_model=OperationResult,
    summary="Update the global feature policy",
    description="""
    Super admin only. The submitted flags are merged over the stored policy;
    keys that are not submitted keep their current value.
    """,
    responses={**_error_responses, 422: {"description": "Unknown feature key"}},
)
async def save_global_policy(
    body: FeatureFlagsUpdate,
    user: UserContext = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> JSONResponse:
    result = await services.permissions.save_global_policy(user, body.flags)
    return result_response(result)


@permission_router.put(
    "/admins/{admin_id}/features/{feature_key}",
    response_model=OperationResult,
    summary="Assign or revoke a feature for an admin",
    responses={**_error_responses, 404: {"description": "Admin not found"}},
)
async def set_admin_assignment(
    admin_id: str,
    feature_key: str,
    body: AdminAssignmentUpdate,
    user: UserContext = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> JSONResponse:
    result = await services.permissions.set_admin_assignment(
        user, admin_id, feature_key, body.enabled
    )
    return result_response(result)


@permission_router.get(
    "/admins/{admin_id}/effective",
    response_model=OperationResult,
    summary="Effective feature flags of an admin",
    description="""
    Readable by the super admin and by the admin themself.
    """,
    responses={**_error_responses, 404: {"description": "Admin not found"}},
)
async def get_admin_effective_flags(
    admin_id: str,
    user: UserContext = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> JSONResponse:
    return result_response(
        await services.permissions.get_admin_effective_flags(user, admin_id)
    )


@permission_router.get(
    "/staff/{staff_id}",
    response_model=OperationResult,
    summary="Feature grants in effect for a staff member",
    description="""
    Only grants recorded by the current supervisor are listed. Readable by
    the super admin, the supervising admin and the staff member.
    """,
    responses={**_error_responses, 404: {"description": "Staff member not found"}},
)
async def get_staff_grants(
    staff_id: str,
    user: UserContext = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> JSONResponse:
    result = await services.permissions.get_staff_grants(user, staff_id)
    return result_response(result)


@permission_router.put(
    "/staff/{staff_id}",
    response_model=OperationResult,
    summary="Update a staff member's feature grants",
    description="""
    Allowed for the staff member's supervising admin and the super admin.
    Grants are recorded against the current supervisor.
    """,
    responses={**_error_responses, 404: {"description": "Staff member not found"}},
)
async def save_staff_grants(
    staff_id: str,
    body: FeatureFlagsUpdate,
    user: UserContext = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> JSONResponse:
    result = await services.permissions.save_staff_grants(user, staff_id, body.flags)
    return result_response(result)


@permission_router.get(
    "/me",
    response_model=OperationResult,
    summary="Features available to the calling user",
    responses=_error_responses,
)
async def get_my_features(
    user: UserContext = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> JSONResponse:
    return result_response(await services.permissions.get_user_features(user))


__all__ = ["permission_router"]
