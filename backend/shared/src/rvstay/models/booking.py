"""Booking model for stay requests against a listing."""

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from rvstay.utils.dates import parse_timestamp

from .enums import BookingStatus, StayType

NOTE_MAX_LENGTH = 500


class Booking(BaseModel):
    """A traveler's request to occupy a listing for a date range.

    Dates form a half-open range: ``check_out`` is the departure day and is
    not occupied.
    """

    model_config = ConfigDict(strict=True)

    booking_id: str = Field(..., description="Unique booking ID")
    listing_id: str = Field(..., description="Reference to Listing")
    check_in: date = Field(..., description="Arrival date (inclusive)")
    check_out: date = Field(..., description="Departure date (exclusive)")
    status: BookingStatus = Field(default=BookingStatus.REQUESTED)
    stay_type: StayType = Field(default=StayType.RV)
    nights: int = Field(default=0, ge=0)
    estimated_total: float = Field(default=0.0, ge=0)
    note: str = Field(default="", max_length=NOTE_MAX_LENGTH)
    guest_id: str | None = None
    guest_name: str | None = None
    guest_email: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @model_validator(mode="after")
    def _check_range(self) -> "Booking":
        if self.check_out <= self.check_in:
            raise ValueError("check_out must be after check_in")
        return self

    @classmethod
    def from_item(cls, item: dict[str, Any]) -> "Booking":
        """Convert a DynamoDB item to a Booking."""
        return cls(
            booking_id=item["booking_id"],
            listing_id=item["listing_id"],
            check_in=date.fromisoformat(item["check_in"]),
            check_out=date.fromisoformat(item["check_out"]),
            status=BookingStatus.from_raw(item.get("status")),
            stay_type=StayType.from_raw(item.get("stay_type") or item.get("booking_type")),
            nights=int(item.get("nights", 0)),
            estimated_total=float(item.get("estimated_total", 0)),
            note=str(item.get("note") or "")[:NOTE_MAX_LENGTH],
            guest_id=item.get("guest_id"),
            guest_name=item.get("guest_name"),
            guest_email=item.get("guest_email"),
            created_at=parse_timestamp(item.get("created_at")),
            updated_at=parse_timestamp(item.get("updated_at")),
        )

    def to_item(self) -> dict[str, Any]:
        """Serialize to a DynamoDB item (None values dropped)."""
        item: dict[str, Any] = {
            "booking_id": self.booking_id,
            "listing_id": self.listing_id,
            "check_in": self.check_in.isoformat(),
            "check_out": self.check_out.isoformat(),
            "status": self.status.value,
            "stay_type": self.stay_type.value,
            "nights": self.nights,
            "estimated_total": Decimal(str(self.estimated_total)),
            "note": self.note,
            "guest_id": self.guest_id,
            "guest_name": self.guest_name,
            "guest_email": self.guest_email,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
        return {k: v for k, v in item.items() if v is not None}


class BookingCreate(BaseModel):
    """Data a traveler submits to request a booking."""

    model_config = ConfigDict(
        # JSON has no native date type, dates arrive as ISO strings
        strict=False,
        json_schema_extra={
            "examples": [
                {
                    "check_in": "2025-07-15",
                    "check_out": "2025-07-18",
                    "stay_type": "RV",
                    "note": "Arriving after 6pm",
                }
            ]
        },
    )

    check_in: date
    check_out: date
    stay_type: StayType = StayType.RV
    note: str | None = None
    guest_name: str | None = Field(default=None, max_length=120)
    guest_email: str | None = Field(default=None, max_length=254)


class BookingSummary(BaseModel):
    """Counts shown on the host booking dashboard."""

    model_config = ConfigDict(strict=True)

    requested: int = 0
    confirmed: int = 0
    cancelled: int = 0
    other: int = 0
    total: int = 0

    @classmethod
    def from_bookings(cls, bookings: list[Booking]) -> "BookingSummary":
        requested = sum(1 for b in bookings if b.status.is_awaiting_host)
        confirmed = sum(1 for b in bookings if b.status.is_accepted)
        cancelled = sum(1 for b in bookings if not b.status.is_active)
        return cls(
            requested=requested,
            confirmed=confirmed,
            cancelled=cancelled,
            other=len(bookings) - requested - confirmed - cancelled,
            total=len(bookings),
        )
