# recruitdesk/api/v1/recycle_bin_router.py
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from recruitdesk.db.deps import get_services
from recruitdesk.db.schemas import OperationResult, UserContext
from recruitdesk.services.v1 import ServiceContainer
from .deps import get_current_user
from .responses import result_response

recycle_bin_router = APIRouter(
    prefix="/recycle-bin",
    tags=["Recycle Bin"],
)

_error_responses = {
    400: {"description": "Unknown entity type"},
    401: {"description": "Missing or unknown X-User-Id"},
    403: {"description": "Caller lacks the required role or feature"},
    404: {"description": "Record not found"},
    500: {"description": "Storage error, nothing was changed"},
}


@recycle_bin_router.get(
    "/{entity_type}",
    response_model=OperationResult,
    summary="List soft-deleted records of one type",
    responses=_error_responses,
)
async def list_deleted(
    entity_type: str,
    user: UserContext = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> JSONResponse:
    return result_response(await services.recycle_bin.list_deleted(user, entity_type))


@recycle_bin_router.delete(
    "/{entity_type}/{entity_id}",
    response_model=OperationResult,
    summary="Soft delete a record and its dependents",
    description="""
    Flags the record and every dependent record as deleted in one
    transaction. Candidates cascade to documents, placements, payments and
    all tracking tables; employers cascade to job orders and their
    placements.
    """,
    responses=_error_responses,
)
async def soft_delete(
    entity_type: str,
    entity_id: str,
    user: UserContext = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> JSONResponse:
    result = await services.recycle_bin.soft_delete(user, entity_type, entity_id)
    return result_response(result)


@recycle_bin_router.post(
    "/{entity_type}/{entity_id}/restore",
    response_model=OperationResult,
    summary="Restore a record and its deleted dependents",
    responses=_error_responses,
)
async def restore(
    entity_type: str,
    entity_id: str,
    user: UserContext = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> JSONResponse:
    result = await services.recycle_bin.restore(user, entity_type, entity_id)
    return result_response(result)


@recycle_bin_router.delete(
    "/{entity_type}/{entity_id}/permanent",
    response_model=OperationResult,
    summary="Permanently delete a single record",
    description="""
    Super admin only. Removes exactly one row; dependents are left in place.
    """,
    responses=_error_responses,
)
async def purge(
    entity_type: str,
    entity_id: str,
    user: UserContext = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
) -> JSONResponse:
    result = await services.recycle_bin.purge(user, entity_type, entity_id)
    return result_response(result)


__all__ = ["recycle_bin_router"]
