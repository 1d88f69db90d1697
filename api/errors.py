"""
API Error Handling

Standardized error handling for the API.
Core exceptions are mapped to structured error responses.
"""

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.models.responses import ErrorDetail, ErrorResponse
from core.schemas.errors import ArborException, ErrorCodes


# HTTP status per core error code; anything else is a bad request
STATUS_BY_CODE: dict[str, int] = {
    ErrorCodes.EMPTY_TREE: 422,
    ErrorCodes.INDEX_OUT_OF_RANGE: 404,
    ErrorCodes.MALFORMED_PROOF: 400,
    ErrorCodes.INVALID_DIGEST: 400,
    ErrorCodes.UNSUPPORTED_HASH: 400,
    ErrorCodes.SCHEMA_VALIDATION_ERROR: 400,
    ErrorCodes.CONFIG_ERROR: 500,
}


class APIError(Exception):
    """Base API error with structured response."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=self.code,
                message=self.message,
                details=self.details,
            ),
        )


class InvalidRequestError(APIError):
    """Invalid request parameters."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            code="INVALID_REQUEST",
            message=message,
            status_code=400,
            details=details,
        )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
    )


async def arbor_error_handler(request: Request, exc: ArborException) -> JSONResponse:
    """Handle core exceptions raised by tree and proof operations."""
    return JSONResponse(
        status_code=STATUS_BY_CODE.get(exc.code, 400),
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=exc.code,
                message=exc.message,
                details=exc.details,
            ),
        ).model_dump(),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code="INTERNAL_ERROR",
                message="An unexpected error occurred",
                details={"type": type(exc).__name__},
            ),
        ).model_dump(),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle request bodies that fail model validation.

    Problems inside a submitted proof document are MALFORMED_PROOF;
    anything else is INVALID_REQUEST. Both are 400.
    """
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = [str(p) for p in first.get("loc", ())]
    in_proof = loc[:2] == ["body", "proof"]

    error = APIError(
        code=ErrorCodes.MALFORMED_PROOF if in_proof else "INVALID_REQUEST",
        message=f"Invalid request body: {first.get('msg', 'validation failed')}",
        status_code=400,
        details={"field_path": ".".join(loc[1:]), "error_count": len(errors)},
    )
    return JSONResponse(
        status_code=error.status_code,
        content=error.to_response().model_dump(),
    )
