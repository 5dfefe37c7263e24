"""Caller identity helpers.

Authentication happens upstream: the gateway validates the session and
passes the user's sub claim in the ``x-user-sub`` header.
"""

import logging

from fastapi import Request

from rvstay.models.errors import BookingError, ErrorCode

logger = logging.getLogger(__name__)

USER_SUB_HEADER = "x-user-sub"


def get_user_sub(request: Request) -> str | None:
    """Get the caller's user sub, or None for anonymous requests."""
    value = request.headers.get(USER_SUB_HEADER)
    return value.strip() if value and value.strip() else None


def require_user_sub(request: Request) -> str:
    """Get the caller's user sub.

    Raises:
        BookingError: AUTH_REQUIRED when the header is missing.
    """
    user_sub = get_user_sub(request)
    if not user_sub:
        logger.warning("auth_user_sub_missing", extra={"path": request.url.path})
        raise BookingError(code=ErrorCode.AUTH_REQUIRED)
    return user_sub
