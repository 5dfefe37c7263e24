"""Standard error codes for the RV Stay backend.

All services raise BookingError with one of these codes; the API layer
converts them to ToolError JSON bodies.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ErrorCode(str, Enum):
    """Standard error codes."""

    # Booking error codes (ERR_001-ERR_010)
    DATES_UNAVAILABLE = "ERR_001"
    INVALID_DATE_RANGE = "ERR_002"
    PAST_CHECK_IN = "ERR_003"
    BOOKING_NOT_FOUND = "ERR_004"
    LISTING_NOT_FOUND = "ERR_005"
    INVALID_STATUS_TRANSITION = "ERR_006"
    UNAUTHORIZED = "ERR_007"
    INVALID_LISTING = "ERR_008"
    INVALID_MONTH = "ERR_009"
    STORE_UNAVAILABLE = "ERR_010"

    # Authentication error codes
    AUTH_REQUIRED = "ERR_AUTH_001"


# Human-readable error messages
ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.DATES_UNAVAILABLE: "Those dates are not available",
    ErrorCode.INVALID_DATE_RANGE: "Check-out must be after check-in",
    ErrorCode.PAST_CHECK_IN: "Check-in cannot be in the past",
    ErrorCode.BOOKING_NOT_FOUND: "Booking not found",
    ErrorCode.LISTING_NOT_FOUND: "Listing not found",
    ErrorCode.INVALID_STATUS_TRANSITION: "This booking can no longer be updated",
    ErrorCode.UNAUTHORIZED: "Host not authorized for this listing",
    ErrorCode.INVALID_LISTING: "Listing details are invalid",
    ErrorCode.INVALID_MONTH: "Invalid month. Expected YYYY-MM",
    ErrorCode.STORE_UNAVAILABLE: "Could not complete action",
    ErrorCode.AUTH_REQUIRED: "You must be logged in to perform this action",
}

# Recovery suggestions for clients
ERROR_RECOVERY: dict[ErrorCode, str] = {
    ErrorCode.DATES_UNAVAILABLE: "Please choose different dates",
    ErrorCode.INVALID_DATE_RANGE: "Pick a check-out date after the check-in date",
    ErrorCode.PAST_CHECK_IN: "Pick a check-in date of today or later",
    ErrorCode.BOOKING_NOT_FOUND: "Verify the booking ID",
    ErrorCode.LISTING_NOT_FOUND: "Verify the listing ID or return to search",
    ErrorCode.INVALID_STATUS_TRANSITION: "No further action is needed for this booking",
    ErrorCode.UNAUTHORIZED: "Sign in as the host who owns this listing",
    ErrorCode.INVALID_LISTING: "Correct the listing details and try again",
    ErrorCode.INVALID_MONTH: "Use a month like 2025-07",
    ErrorCode.STORE_UNAVAILABLE: "Try again in a moment",
    ErrorCode.AUTH_REQUIRED: "Sign in and try again",
}


class ToolError(BaseModel):
    """Standard error response format for failed operations."""

    model_config = ConfigDict(strict=True)

    success: bool = False
    error_code: ErrorCode
    message: str
    recovery: str
    details: Optional[dict[str, str]] = None

    @classmethod
    def from_code(
        cls,
        code: ErrorCode,
        details: Optional[dict[str, str]] = None,
    ) -> "ToolError":
        """Create a ToolError from an error code.

        Args:
            code: The error code
            details: Optional additional context about the error

        Returns:
            A ToolError with the message and recovery hint for the code.
        """
        return cls(
            error_code=code,
            message=ERROR_MESSAGES[code],
            recovery=ERROR_RECOVERY[code],
            details=details,
        )


class BookingError(Exception):
    """Exception raised by booking, listing and calendar operations.

    Can be caught and converted to a ToolError for API responses.
    """

    def __init__(
        self,
        code: ErrorCode,
        details: Optional[dict[str, str]] = None,
    ):
        self.code = code
        self.message = ERROR_MESSAGES[code]
        self.recovery = ERROR_RECOVERY[code]
        self.details = details
        super().__init__(self.message)

    def to_tool_error(self) -> ToolError:
        """Convert this exception to a ToolError for API responses."""
        return ToolError.from_code(self.code, self.details)
