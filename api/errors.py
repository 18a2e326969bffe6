"""
API Error Handling

Standardized error handling for the API. Sale errors raised by the state
machine are rendered in the same envelope as API errors.
"""

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from api.models.responses import ErrorResponse, ErrorDetail
from core.schemas.errors import ErrorCodes, MintGateException


logger = logging.getLogger(__name__)


# HTTP status per sale error code
STATUS_BY_CODE: dict[str, int] = {
    ErrorCodes.INVALID_IDENTIFIER: 400,
    ErrorCodes.INVALID_MINT_REQUEST: 400,
    ErrorCodes.INSUFFICIENT_PAYMENT: 402,
    ErrorCodes.UNAUTHORIZED: 403,
    ErrorCodes.NOT_WHITELISTED: 403,
    ErrorCodes.NOT_A_MEMBER: 404,
    ErrorCodes.UNKNOWN_TOKEN: 404,
    ErrorCodes.SALE_NOT_ACTIVE: 409,
    ErrorCodes.SUPPLY_EXCEEDED: 409,
    ErrorCodes.WALLET_QUOTA_EXCEEDED: 409,
    ErrorCodes.ALREADY_MINTED: 409,
    ErrorCodes.TRANSFER_FAILED: 502,
}


def error_envelope(
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """Render `{"ok": false, "error": {...}}` with the given status."""
    body = ErrorResponse(error=ErrorDetail(code=code, message=message, details=details or {}))
    return JSONResponse(status_code=status_code, content=body.model_dump())


class APIError(Exception):
    """Request-level failure raised by route handlers."""

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
    """Malformed hex or other input pydantic cannot catch."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__("INVALID_REQUEST", message, status_code=400, details=details)


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    return error_envelope(exc.status_code, exc.code, exc.message, exc.details)


async def mint_error_handler(request: Request, exc: MintGateException) -> JSONResponse:
    """Map a sale error to its HTTP status."""
    error = exc.to_error_model()
    status_code = STATUS_BY_CODE.get(error.code, 400)
    logger.info(f"{request.method} {request.url.path} -> {status_code} {error.code}")
    return error_envelope(status_code, error.code, error.message, error.details)


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_envelope(
        500,
        "INTERNAL_ERROR",
        "An unexpected error occurred",
        {"type": type(exc).__name__},
    )
