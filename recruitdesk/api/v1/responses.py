# recruitdesk/api/v1/responses.py
from fastapi import status
from fastapi.responses import JSONResponse

from recruitdesk.db.schemas import OperationResult

STATUS_BY_CODE: dict[str, int] = {
    "ACCESS_DENIED": 403,
    "FORBIDDEN": 403,
    "NOT_FOUND": 404,
    "UNKNOWN_ENTITY_TYPE": 400,
    "VALIDATION_ERROR": 422,
    "UNAUTHENTICATED": 401,
    "STORAGE_ERROR": 500,
}


def result_response(
    result: OperationResult, success_status: int = status.HTTP_200_OK
) -> JSONResponse:
    """Render a service result with the status its code maps to."""
    if result.success:
        status_code = success_status
    else:
        status_code = STATUS_BY_CODE.get(
            result.code or "", status.HTTP_500_INTERNAL_SERVER_ERROR
        )
    return JSONResponse(
        status_code=status_code,
        content=result.model_dump(mode="json"),
    )


__all__ = ["STATUS_BY_CODE", "result_response"]
