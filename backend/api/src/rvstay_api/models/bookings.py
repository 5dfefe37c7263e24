"""API models for booking endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from rvstay.models import Booking, BookingStatus, BookingSummary


class BookingResponse(Booking):
    """Booking as returned by the API."""

    model_config = ConfigDict(strict=False)

    @classmethod
    def from_booking(cls, booking: Booking) -> "BookingResponse":
        return cls.model_validate(booking.model_dump())


class BookingStatusUpdate(BaseModel):
    """Host decision on a booking request."""

    model_config = ConfigDict(
        strict=False,
        json_schema_extra={"examples": [{"status": "approved"}, {"status": "declined"}]},
    )

    status: BookingStatus


class BookingListResponse(BaseModel):
    """Host dashboard: bookings plus status counts."""

    bookings: list[BookingResponse] = Field(default_factory=list)
    summary: BookingSummary
