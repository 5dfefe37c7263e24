"""FastAPI exception handlers for converting domain errors to HTTP responses.

Every error body has the ToolError shape: ``success``, ``error_code``,
``message``, ``recovery`` and ``details``.

The ErrorCode-to-HTTP status mapping:
- 400 Bad Request: validation failures
- 401 Unauthorized: no caller identity
- 403 Forbidden: caller does not own the listing
- 404 Not Found: listing or booking missing
- 409 Conflict: dates taken, booking no longer awaiting the host
- 503 Service Unavailable: the document store rejected the call

Usage:
    from rvstay_api.exceptions import register_exception_handlers
    register_exception_handlers(app)
"""

import logging

from botocore.exceptions import ClientError
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_503_SERVICE_UNAVAILABLE,
)

from rvstay.models.errors import BookingError, ErrorCode, ToolError

logger = logging.getLogger(__name__)

ERROR_CODE_TO_HTTP_STATUS: dict[ErrorCode, int] = {
    # Validation errors -> 400 Bad Request
    ErrorCode.INVALID_DATE_RANGE: HTTP_400_BAD_REQUEST,
    ErrorCode.PAST_CHECK_IN: HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_LISTING: HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_MONTH: HTTP_400_BAD_REQUEST,
    # Authentication errors -> 401 Unauthorized
    ErrorCode.AUTH_REQUIRED: HTTP_401_UNAUTHORIZED,
    # Authorization errors -> 403 Forbidden
    ErrorCode.UNAUTHORIZED: HTTP_403_FORBIDDEN,
    # Not found errors -> 404 Not Found
    ErrorCode.LISTING_NOT_FOUND: HTTP_404_NOT_FOUND,
    ErrorCode.BOOKING_NOT_FOUND: HTTP_404_NOT_FOUND,
    # State conflicts -> 409 Conflict
    ErrorCode.DATES_UNAVAILABLE: HTTP_409_CONFLICT,
    ErrorCode.INVALID_STATUS_TRANSITION: HTTP_409_CONFLICT,
    # Store failures -> 503 Service Unavailable
    ErrorCode.STORE_UNAVAILABLE: HTTP_503_SERVICE_UNAVAILABLE,
}


def get_http_status_for_error(code: ErrorCode) -> int:
    """Get HTTP status code for an ErrorCode.

    Args:
        code: The ErrorCode to map

    Returns:
        HTTP status code, defaults to 400 if not explicitly mapped.
    """
    return ERROR_CODE_TO_HTTP_STATUS.get(code, HTTP_400_BAD_REQUEST)


async def booking_error_handler(request: Request, exc: BookingError) -> JSONResponse:
    """Convert a BookingError to a ToolError JSON response.

    Args:
        request: The incoming request (unused but required by FastAPI)
        exc: The BookingError exception

    Returns:
        JSONResponse with error details and appropriate status code.
    """
    return JSONResponse(
        status_code=get_http_status_for_error(exc.code),
        content=exc.to_tool_error().model_dump(mode="json"),
    )


async def store_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    """Convert a DynamoDB client error to a generic 503 response.

    The store's error text is logged but never returned to the client.
    """
    logger.exception(
        "Document store call failed",
        extra={"path": request.url.path, "aws_error": exc.response.get("Error", {}).get("Code")},
    )
    tool_error = ToolError.from_code(ErrorCode.STORE_UNAVAILABLE)
    return JSONResponse(
        status_code=HTTP_503_SERVICE_UNAVAILABLE,
        content=tool_error.model_dump(mode="json"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app.

    Args:
        app: The FastAPI application instance.
    """
    app.add_exception_handler(BookingError, booking_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(ClientError, store_error_handler)  # type: ignore[arg-type]
