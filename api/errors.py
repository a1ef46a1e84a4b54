"""
API Error Handling

Every failure leaves the API as {"ok": false, "error": {code, message, details}}.
Core exceptions keep their own codes; the status comes from MERKLE_STATUS_CODES.
"""

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from api.models.responses import ErrorDetail, ErrorResponse
from core.schemas.errors import ErrorCodes, MerkleException


class APIError(Exception):
    """Error raised by the API layer itself, before the core is reached."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}


class InvalidRequestError(APIError):
    """Request input that cannot be decoded into leaves or a root."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__("INVALID_REQUEST", message, status_code=400, details=details)


# HTTP status per core error code; anything unlisted is a server error.
MERKLE_STATUS_CODES: dict[str, int] = {
    ErrorCodes.ARGUMENT_ERROR: 400,
    ErrorCodes.EMPTY_INPUT: 400,
    ErrorCodes.UNKNOWN_ALGORITHM: 400,
    ErrorCodes.INVALID_PROCESS_TYPE: 400,
    ErrorCodes.INVALID_LEAF: 400,
    ErrorCodes.PROCESS_TIMED_OUT: 504,
}


def error_response(
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message, details=details or {}))
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    return error_response(exc.status_code, exc.code, exc.message, exc.details)


async def merkle_error_handler(request: Request, exc: MerkleException) -> JSONResponse:
    return error_response(
        MERKLE_STATUS_CODES.get(exc.code, 500),
        exc.code,
        exc.message,
        exc.details,
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: hide internals, keep the exception type for debugging."""
    return error_response(
        500,
        "INTERNAL_ERROR",
        "An unexpected error occurred",
        {"type": type(exc).__name__},
    )
