"""Enumeration types for RV Stay data models."""

from enum import Enum


class BookingStatus(str, Enum):
    """Status of a booking.

    ``requested`` and ``pending`` wait on the host; every other value is
    terminal. ``other`` stands in for unrecognised stored values.
    """

    REQUESTED = "requested"
    PENDING = "pending"
    APPROVED = "approved"
    CONFIRMED = "confirmed"
    DECLINED = "declined"
    CANCELLED = "cancelled"
    OTHER = "other"

    @classmethod
    def from_raw(cls, value: object) -> "BookingStatus":
        """Normalize a stored status string (case-insensitive)."""
        raw = str(value or "").strip().lower()
        if raw == "canceled":
            return cls.CANCELLED
        try:
            return cls(raw)
        except ValueError:
            return cls.OTHER

    @property
    def is_awaiting_host(self) -> bool:
        return self in (BookingStatus.REQUESTED, BookingStatus.PENDING)

    @property
    def is_terminal(self) -> bool:
        return not self.is_awaiting_host

    @property
    def is_active(self) -> bool:
        """Whether the booking still occupies its dates."""
        return self not in (BookingStatus.DECLINED, BookingStatus.CANCELLED)

    @property
    def is_accepted(self) -> bool:
        return self in (BookingStatus.APPROVED, BookingStatus.CONFIRMED)


class StayType(str, Enum):
    """Category of occupancy, affects pricing."""

    RV = "RV"
    LAND = "LAND"
    RV_PROVIDED = "RV_PROVIDED"

    @classmethod
    def from_raw(cls, value: object) -> "StayType":
        """Parse a stored stay type; missing or unknown values read as RV."""
        raw = str(value or "").strip().upper()
        try:
            return cls(raw)
        except ValueError:
            return cls.RV

    @property
    def calendar_kind(self) -> str:
        """Simplified kind shown on the host calendar: ``rv`` or ``land``."""
        return "land" if self is StayType.LAND else "rv"


class DaySignal(str, Enum):
    """Host-authored demand signal for a calendar day."""

    NONE = "none"
    HIGH = "high"
    MAINTENANCE = "maintenance"
    PRIVATE = "private"
    FLEX = "flex"

    @property
    def label(self) -> str:
        return _SIGNAL_LABELS[self]


_SIGNAL_LABELS: dict[DaySignal, str] = {
    DaySignal.NONE: "None",
    DaySignal.HIGH: "High Demand",
    DaySignal.MAINTENANCE: "Maintenance",
    DaySignal.PRIVATE: "Private Use",
    DaySignal.FLEX: "Flexible",
}


class Hookups(str, Enum):
    """Utility connection level offered at a listing."""

    FULL = "Full"
    PARTIAL = "Partial"
    NONE = "None"


class PricingType(str, Enum):
    """Period the listing rate applies to."""

    NIGHT = "Night"
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"


class PowerLevel(str, Enum):
    """Electrical hookup offered, as stored by the host form."""

    NONE = "None"
    AMP_30 = "30A"
    AMP_50 = "50A"
    AMP_30_50 = "30A/50A"

    def supports(self, amps: int) -> bool:
        return str(amps) in self.value


class SewerLevel(str, Enum):
    NONE = "None"
    FULL = "Yes"
    DUMP_STATION = "Dump station"


class LaundryLevel(str, Enum):
    NONE = "None"
    WASHER_DRYER = "Washer/Dryer"
    WASH_FOLD = "Wash & Fold"
    BOTH = "Both"


class SortMode(str, Enum):
    """Ordering for listing search results."""

    NEWEST = "newest"
    PRICE_LOW = "price_low"
    PRICE_HIGH = "price_high"
