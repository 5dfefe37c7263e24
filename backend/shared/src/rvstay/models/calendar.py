"""Host calendar grid models."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

from .booking import Booking
from .day_meta import DayMeta

MAX_VISIBLE_BOOKINGS = 2


class CalendarCell(BaseModel):
    """One listing on one calendar day."""

    model_config = ConfigDict(strict=True, frozen=True)

    listing_id: str
    bookings: list[Booking] = Field(
        default_factory=list,
        description="All bookings covering the day, sorted by check-in",
    )
    meta: DayMeta | None = None

    @property
    def visible_bookings(self) -> list[Booking]:
        """Bookings shown inline; the rest are summarized as "+N more"."""
        return self.bookings[:MAX_VISIBLE_BOOKINGS]

    @property
    def overflow_count(self) -> int:
        return max(len(self.bookings) - MAX_VISIBLE_BOOKINGS, 0)

    @property
    def is_blocked(self) -> bool:
        return self.meta is not None and self.meta.blocked


class CalendarDay(BaseModel):
    """A day in the 7-column month grid."""

    model_config = ConfigDict(strict=True, frozen=True)

    date: dt.date
    in_month: bool = Field(..., description="False for leading/trailing days of adjacent months")
    is_today: bool = False
    cells: list[CalendarCell] = Field(default_factory=list)

    def cell(self, listing_id: str) -> CalendarCell | None:
        for cell in self.cells:
            if cell.listing_id == listing_id:
                return cell
        return None


class CalendarMonth(BaseModel):
    """A whole month grid, Sunday-first, in whole weeks."""

    model_config = ConfigDict(strict=True, frozen=True)

    month: str = Field(..., pattern=r"^\d{4}-\d{2}$", examples=["2025-07"])
    listing_ids: list[str] = Field(default_factory=list)
    days: list[CalendarDay] = Field(default_factory=list)

    @property
    def weeks(self) -> list[list[CalendarDay]]:
        return [self.days[i : i + 7] for i in range(0, len(self.days), 7)]
