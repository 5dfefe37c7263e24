"""Host calendar grid builder.

The grid always starts on the Sunday on or before the first of the month and
ends on the Saturday on or after its last day, so it is a whole number of
weeks long.
"""

import datetime as dt
from collections.abc import Iterable, Iterator, Mapping
from typing import TYPE_CHECKING

from rvstay.models import (
    Booking,
    CalendarCell,
    CalendarDay,
    CalendarMonth,
    DayMeta,
    Listing,
    day_meta_id,
)
from rvstay.utils.dates import end_of_month, start_of_month, to_key
from rvstay.utils.logging import get_logger

from .availability import covers_day

if TYPE_CHECKING:
    from .availability import AvailabilityService
    from .day_meta import DayMetaService
    from .listings import ListingService

logger = get_logger(__name__)


def _sunday_offset(day: dt.date) -> int:
    # date.weekday() is Monday=0 ... Sunday=6
    return (day.weekday() + 1) % 7


class MonthGrid:
    """Lazy, restartable sequence of the days shown for a month.

    Each ``iter()`` starts over from the first Sunday; the grid holds no
    state besides its bounds.
    """

    def __init__(self, anchor: dt.date) -> None:
        first = start_of_month(anchor)
        last = end_of_month(anchor)
        self.anchor = first
        self.start = first - dt.timedelta(days=_sunday_offset(first))
        self.end = last + dt.timedelta(days=6 - _sunday_offset(last))

    def __iter__(self) -> Iterator[dt.date]:
        day = self.start
        while day <= self.end:
            yield day
            day += dt.timedelta(days=1)

    def __len__(self) -> int:
        return (self.end - self.start).days + 1

    def in_month(self, day: dt.date) -> bool:
        return day.year == self.anchor.year and day.month == self.anchor.month


def build_calendar(
    anchor: dt.date,
    today: dt.date,
    listings: Iterable[Listing],
    bookings: Iterable[Booking],
    day_meta: Mapping[str, DayMeta],
) -> CalendarMonth:
    """Build the host month grid.

    Pure function of its inputs: every cell lists all bookings covering the
    day (sorted by check-in) and the day's saved metadata, if any.

    Args:
        anchor: Any date in the month to show
        today: The viewer's current date
        listings: Listings shown as rows of each cell
        bookings: Bookings across those listings
        day_meta: Saved day metadata keyed by composite meta ID

    Returns:
        The month grid
    """
    grid = MonthGrid(anchor)
    listing_ids = [listing.listing_id for listing in listings]

    by_listing: dict[str, list[Booking]] = {listing_id: [] for listing_id in listing_ids}
    for booking in bookings:
        if booking.listing_id in by_listing:
            by_listing[booking.listing_id].append(booking)
    for listing_bookings in by_listing.values():
        listing_bookings.sort(key=lambda b: b.check_in)

    days = []
    for day in grid:
        key = to_key(day)
        cells = [
            CalendarCell(
                listing_id=listing_id,
                bookings=[b for b in by_listing[listing_id] if covers_day(b, day)],
                meta=day_meta.get(day_meta_id(listing_id, key)),
            )
            for listing_id in listing_ids
        ]
        days.append(
            CalendarDay(
                date=day,
                in_month=grid.in_month(day),
                is_today=day == today,
                cells=cells,
            )
        )

    return CalendarMonth(
        month=f"{grid.anchor.year:04d}-{grid.anchor.month:02d}",
        listing_ids=listing_ids,
        days=days,
    )


class CalendarService:
    """Loads a host's data for a month and builds the calendar grid."""

    def __init__(
        self,
        listings: "ListingService",
        availability: "AvailabilityService",
        day_meta: "DayMetaService",
    ) -> None:
        """Initialize calendar service.

        Args:
            listings: Listing service for the host's listings
            availability: Availability service for listing bookings
            day_meta: Day metadata service for the month's records
        """
        self.listings = listings
        self.availability = availability
        self.day_meta = day_meta

    def get_host_calendar(
        self,
        host_id: str,
        anchor: dt.date,
        today: dt.date,
    ) -> CalendarMonth:
        """Build the month calendar across all of a host's listings."""
        host_listings = self.listings.list_host_listings(host_id)
        listing_ids = [listing.listing_id for listing in host_listings]

        bookings: list[Booking] = []
        for listing_id in listing_ids:
            bookings.extend(self.availability.get_listing_bookings(listing_id))
        meta = self.day_meta.list_month(listing_ids, anchor)

        logger.info(
            "Host calendar loaded",
            extra={
                "host_id": host_id,
                "month": to_key(start_of_month(anchor))[:7],
                "listings": len(listing_ids),
                "bookings": len(bookings),
            },
        )
        return build_calendar(anchor, today, host_listings, bookings, meta)
