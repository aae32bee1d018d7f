"""Shared helpers for API endpoints."""
from fastapi import HTTPException

from sitecms.application.dto.operation_result import OperationResult
from sitecms.domain.errors import ErrorKind

ERROR_STATUS_CODES = {
    ErrorKind.DUPLICATE_CITY: 409,
    ErrorKind.DUPLICATE_COUNTRY: 409,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.PARTIAL_SYNC_FAILURE: 409,
    ErrorKind.PERSISTENCE_ERROR: 500,
    ErrorKind.INVALID_INPUT: 422,
}


def raise_for_result(result: OperationResult) -> None:
    """Raise an HTTPException carrying the error kind when the result failed.

    Raises:
        HTTPException: with ``detail={"kind": ..., "message": ..., "warnings": [...]}``
    """
    if result.ok:
        return

    error = result.error
    raise HTTPException(
        status_code=ERROR_STATUS_CODES.get(error.kind, 500),
        detail={
            "kind": error.kind.value,
            "message": error.message,
            "warnings": list(result.warnings),
        },
    )
