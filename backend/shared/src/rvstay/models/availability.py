"""Availability check results and booking price quotes."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from .enums import StayType


class AvailabilityResult(BaseModel):
    """Outcome of checking a candidate range against existing bookings."""

    model_config = ConfigDict(strict=True)

    is_available: bool
    conflicting_booking_ids: list[str] = Field(default_factory=list)


class BookingQuote(BaseModel):
    """Nights and estimated total for a stay."""

    model_config = ConfigDict(strict=True)

    check_in: date
    check_out: date
    stay_type: StayType
    nights: int = Field(..., ge=0)
    nightly_rate: float = Field(..., ge=0)
    stay_type_premium: float = Field(..., ge=0)
    estimated_total: float = Field(..., ge=0)
    period_label: str
