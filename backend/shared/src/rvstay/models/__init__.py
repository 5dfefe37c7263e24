"""Pydantic models for RV Stay data entities."""

from .availability import AvailabilityResult, BookingQuote
from .booking import NOTE_MAX_LENGTH, Booking, BookingCreate, BookingSummary
from .calendar import MAX_VISIBLE_BOOKINGS, CalendarCell, CalendarDay, CalendarMonth
from .day_meta import DayMeta, DayMetaUpdate, day_meta_id
from .enums import (
    BookingStatus,
    DaySignal,
    Hookups,
    LaundryLevel,
    PowerLevel,
    PricingType,
    SewerLevel,
    SortMode,
    StayType,
)
from .errors import ERROR_MESSAGES, ERROR_RECOVERY, BookingError, ErrorCode, ToolError
from .listing import (
    AMENITY_FLAGS,
    CONTACT_HOST_LABEL,
    Amenities,
    DisplayPrice,
    LegacyRate,
    Listing,
    ListingCreate,
    ListingFilters,
    NoRate,
    PeriodRate,
    normalize_listing,
    normalize_period_label,
    parse_rate,
    resolve_price,
)

__all__ = [
    # Enums
    "BookingStatus",
    "DaySignal",
    "Hookups",
    "LaundryLevel",
    "PowerLevel",
    "PricingType",
    "SewerLevel",
    "SortMode",
    "StayType",
    # Listing
    "AMENITY_FLAGS",
    "CONTACT_HOST_LABEL",
    "Amenities",
    "DisplayPrice",
    "LegacyRate",
    "Listing",
    "ListingCreate",
    "ListingFilters",
    "NoRate",
    "PeriodRate",
    "normalize_listing",
    "normalize_period_label",
    "parse_rate",
    "resolve_price",
    # Booking
    "NOTE_MAX_LENGTH",
    "Booking",
    "BookingCreate",
    "BookingSummary",
    # Availability
    "AvailabilityResult",
    "BookingQuote",
    # Day metadata
    "DayMeta",
    "DayMetaUpdate",
    "day_meta_id",
    # Calendar
    "MAX_VISIBLE_BOOKINGS",
    "CalendarCell",
    "CalendarDay",
    "CalendarMonth",
    # Errors
    "BookingError",
    "ErrorCode",
    "ERROR_MESSAGES",
    "ERROR_RECOVERY",
    "ToolError",
]
