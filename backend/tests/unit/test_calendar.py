"""Unit tests for the host calendar grid builder."""

import datetime as dt
from typing import Any
from unittest.mock import MagicMock

import pytest

from rvstay.models import Booking, BookingStatus, DayMeta, DaySignal, Listing, StayType, normalize_listing
from rvstay.services.calendar import CalendarService, MonthGrid, build_calendar

D = dt.date


def _listing(listing_id: str) -> Listing:
    return Listing(listing_id=listing_id, title=listing_id, city="Austin", state="TX")


def _booking(booking_id: str, listing_id: str, check_in: dt.date, check_out: dt.date) -> Booking:
    return Booking(
        booking_id=booking_id,
        listing_id=listing_id,
        check_in=check_in,
        check_out=check_out,
        status=BookingStatus.REQUESTED,
        stay_type=StayType.LAND,
    )


class TestMonthGrid:
    @pytest.mark.parametrize(
        ("anchor", "length", "start", "end"),
        [
            (D(2025, 7, 15), 35, D(2025, 6, 29), D(2025, 8, 2)),
            (D(2026, 2, 10), 28, D(2026, 2, 1), D(2026, 2, 28)),
            (D(2025, 3, 1), 42, D(2025, 2, 23), D(2025, 4, 5)),
        ],
    )
    def test_whole_weeks(self, anchor: dt.date, length: int, start: dt.date, end: dt.date) -> None:
        grid = MonthGrid(anchor)
        days = list(grid)

        assert len(days) == len(grid) == length
        assert len(days) % 7 == 0
        assert days[0] == start
        assert days[-1] == end
        # Python: Monday=0 ... Sunday=6
        assert days[0].weekday() == 6
        assert days[-1].weekday() == 5

    def test_restartable(self) -> None:
        grid = MonthGrid(D(2025, 7, 1))
        assert list(grid) == list(grid)

    def test_in_month(self) -> None:
        grid = MonthGrid(D(2025, 7, 1))
        assert grid.in_month(D(2025, 7, 31))
        assert not grid.in_month(D(2025, 6, 30))


class TestBuildCalendar:
    def test_grid_flags(self) -> None:
        month = build_calendar(D(2025, 7, 1), D(2025, 7, 10), [_listing("L1")], [], {})

        assert month.month == "2025-07"
        assert len(month.days) == 35
        assert len(month.weeks) == 5
        assert not month.days[0].in_month
        assert [d.date for d in month.days if d.is_today] == [D(2025, 7, 10)]
        assert all(len(d.cells) == 1 for d in month.days)

    def test_today_outside_month(self) -> None:
        month = build_calendar(D(2025, 7, 1), D(2025, 9, 1), [_listing("L1")], [], {})
        assert not any(d.is_today for d in month.days)

    def test_booking_covers_half_open_range(self) -> None:
        booking = _booking("b1", "L1", D(2025, 7, 5), D(2025, 7, 7))
        month = build_calendar(D(2025, 7, 1), D(2025, 7, 1), [_listing("L1")], [booking], {})

        covered = [d.date for d in month.days if d.cell("L1").bookings]
        assert covered == [D(2025, 7, 5), D(2025, 7, 6)]

    def test_cells_per_listing(self) -> None:
        bookings = [
            _booking("b1", "L1", D(2025, 7, 5), D(2025, 7, 7)),
            _booking("b2", "L2", D(2025, 7, 6), D(2025, 7, 8)),
            _booking("stray", "L9", D(2025, 7, 6), D(2025, 7, 8)),
        ]
        month = build_calendar(D(2025, 7, 1), D(2025, 7, 1), [_listing("L1"), _listing("L2")], bookings, {})

        day = next(d for d in month.days if d.date == D(2025, 7, 6))
        assert month.listing_ids == ["L1", "L2"]
        assert [b.booking_id for b in day.cell("L1").bookings] == ["b1"]
        assert [b.booking_id for b in day.cell("L2").bookings] == ["b2"]
        assert day.cell("L9") is None

    def test_overflow_beyond_two_bookings(self) -> None:
        bookings = [
            _booking("late", "L1", D(2025, 7, 9), D(2025, 7, 12)),
            _booking("early", "L1", D(2025, 7, 8), D(2025, 7, 12)),
            _booking("earliest", "L1", D(2025, 7, 7), D(2025, 7, 12)),
        ]
        month = build_calendar(D(2025, 7, 1), D(2025, 7, 1), [_listing("L1")], bookings, {})

        cell = next(d for d in month.days if d.date == D(2025, 7, 10)).cell("L1")
        assert [b.booking_id for b in cell.bookings] == ["earliest", "early", "late"]
        assert [b.booking_id for b in cell.visible_bookings] == ["earliest", "early"]
        assert cell.overflow_count == 1

    def test_meta_attached_to_its_day(self) -> None:
        meta = DayMeta(listing_id="L1", date=D(2025, 7, 4), blocked=True, signal=DaySignal.PRIVATE)
        month = build_calendar(D(2025, 7, 1), D(2025, 7, 1), [_listing("L1")], [], {meta.meta_id: meta})

        blocked = [d.date for d in month.days if d.cell("L1").is_blocked]
        assert blocked == [D(2025, 7, 4)]
        assert next(d for d in month.days if d.date == D(2025, 7, 5)).cell("L1").meta is None

    def test_no_listings(self) -> None:
        month = build_calendar(D(2025, 7, 1), D(2025, 7, 1), [], [], {})
        assert len(month.days) == 35
        assert all(d.cells == [] for d in month.days)


class TestCalendarService:
    def test_loads_host_data(self, sample_listing_item: dict[str, Any], sample_booking_item: dict[str, Any]) -> None:
        listings = MagicMock()
        listings.list_host_listings.return_value = [normalize_listing("LST-LAKESIDE", sample_listing_item)]
        availability = MagicMock()
        availability.get_listing_bookings.return_value = [Booking.from_item(sample_booking_item)]
        day_meta = MagicMock()
        day_meta.list_month.return_value = {}

        month = CalendarService(listings, availability, day_meta).get_host_calendar(
            "host-sub-1", D(2025, 7, 20), D(2025, 7, 16)
        )

        day_meta.list_month.assert_called_once_with(["LST-LAKESIDE"], D(2025, 7, 20))
        day = next(d for d in month.days if d.is_today)
        assert [b.booking_id for b in day.cell("LST-LAKESIDE").bookings] == ["BKG-2025-AAAA1111"]
