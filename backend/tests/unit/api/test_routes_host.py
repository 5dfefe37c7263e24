"""Unit tests for host dashboard API routes.

Tests for:
- GET /host/bookings - Bookings across the host's listings
- GET /host/calendar/{month} - Month grid
- GET/PUT /host/day-meta/{listing_id}/{day} - Day inspector
"""

import datetime as dt
from collections.abc import Callable
from typing import Any
from unittest.mock import ANY, MagicMock

import pytest
from fastapi.testclient import TestClient
from starlette.status import (
    HTTP_200_OK,
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
)

from rvstay.models import (
    Booking,
    BookingError,
    BookingSummary,
    DayMeta,
    DaySignal,
    ErrorCode,
    StayType,
    normalize_listing,
)
from rvstay.services.calendar import build_calendar
from rvstay_api.dependencies import (
    get_booking_service,
    get_calendar_service,
    get_day_meta_service,
    get_listing_service,
)

HOST_HEADERS = {"x-user-sub": "host-sub-1"}


@pytest.fixture
def bookings(sample_booking_item: dict[str, Any]) -> list[Booking]:
    return [
        Booking.from_item({**sample_booking_item, "booking_id": "req", "status": "requested"}),
        Booking.from_item({**sample_booking_item, "booking_id": "pend", "status": "pending"}),
        Booking.from_item({**sample_booking_item, "booking_id": "conf", "status": "confirmed"}),
        Booking.from_item({**sample_booking_item, "booking_id": "canc", "status": "canceled"}),
    ]


class TestHostBookings:
    @pytest.fixture
    def booking_service(self, override: Callable[..., MagicMock], bookings: list[Booking]) -> MagicMock:
        service = override(get_booking_service)
        service.list_host_bookings.return_value = bookings
        service.summarize.side_effect = BookingSummary.from_bookings
        return service

    def test_requires_identity(self, client: TestClient, booking_service: MagicMock) -> None:
        response = client.get("/api/host/bookings")
        assert response.status_code == HTTP_401_UNAUTHORIZED

    def test_all_bookings_with_summary(self, client: TestClient, booking_service: MagicMock) -> None:
        response = client.get("/api/host/bookings", headers=HOST_HEADERS)

        assert response.status_code == HTTP_200_OK
        data = response.json()
        assert len(data["bookings"]) == 4
        assert data["summary"] == {"requested": 2, "confirmed": 1, "cancelled": 1, "other": 0, "total": 4}
        booking_service.list_host_bookings.assert_called_once_with("host-sub-1")

    def test_requested_filter_includes_pending(self, client: TestClient, booking_service: MagicMock) -> None:
        response = client.get("/api/host/bookings", params={"status": "requested"}, headers=HOST_HEADERS)

        data = response.json()
        assert [b["booking_id"] for b in data["bookings"]] == ["req", "pend"]
        # Counts always cover every booking
        assert data["summary"]["total"] == 4

    def test_cancelled_filter(self, client: TestClient, booking_service: MagicMock) -> None:
        response = client.get("/api/host/bookings", params={"status": "cancelled"}, headers=HOST_HEADERS)
        assert [b["status"] for b in response.json()["bookings"]] == ["cancelled"]


class TestHostCalendar:
    @pytest.fixture
    def calendar_service(self, override: Callable[..., MagicMock]) -> MagicMock:
        return override(get_calendar_service)

    def test_month_grid(
        self,
        client: TestClient,
        calendar_service: MagicMock,
        sample_listing_item: dict[str, Any],
        bookings: list[Booking],
    ) -> None:
        listing = normalize_listing("LST-LAKESIDE", sample_listing_item)
        land = bookings[0].model_copy(update={"stay_type": StayType.LAND})
        meta = DayMeta(listing_id="LST-LAKESIDE", date=dt.date(2025, 7, 4), blocked=True, block_reason="Holiday")
        calendar_service.get_host_calendar.return_value = build_calendar(
            dt.date(2025, 7, 1),
            dt.date(2025, 7, 16),
            [listing],
            [land, *bookings[1:]],
            {meta.meta_id: meta},
        )

        response = client.get("/api/host/calendar/2025-07", headers=HOST_HEADERS)

        assert response.status_code == HTTP_200_OK
        data = response.json()
        assert data["month"] == "2025-07"
        assert len(data["days"]) == 35
        assert data["days"][0]["date"] == "2025-06-29"
        assert data["days"][0]["in_month"] is False

        july_4 = next(d for d in data["days"] if d["date"] == "2025-07-04")
        assert july_4["cells"][0]["blocked"] is True
        assert july_4["cells"][0]["block_reason"] == "Holiday"

        july_16 = next(d for d in data["days"] if d["date"] == "2025-07-16")
        assert july_16["is_today"] is True
        cell = july_16["cells"][0]
        assert cell["booking_count"] == 4
        assert len(cell["bookings"]) == 2
        assert cell["overflow_count"] == 2
        assert cell["bookings"][0]["kind"] == "land"

        calendar_service.get_host_calendar.assert_called_once_with("host-sub-1", dt.date(2025, 7, 1), ANY)

    @pytest.mark.parametrize("month", ["2025-13", "July", "2025-7"])
    def test_invalid_month(self, client: TestClient, calendar_service: MagicMock, month: str) -> None:
        response = client.get(f"/api/host/calendar/{month}", headers=HOST_HEADERS)

        assert response.status_code == HTTP_400_BAD_REQUEST
        assert response.json()["error_code"] == ErrorCode.INVALID_MONTH.value
        calendar_service.get_host_calendar.assert_not_called()


class TestDayMeta:
    @pytest.fixture
    def listing_service(self, override: Callable[..., MagicMock], sample_listing_item: dict[str, Any]) -> MagicMock:
        service = override(get_listing_service)
        service.require_listing.return_value = normalize_listing("LST-LAKESIDE", sample_listing_item)
        return service

    @pytest.fixture
    def day_meta_service(self, override: Callable[..., MagicMock]) -> MagicMock:
        return override(get_day_meta_service)

    def test_get_default(self, client: TestClient, listing_service: MagicMock, day_meta_service: MagicMock) -> None:
        day_meta_service.get_meta.return_value = DayMeta(listing_id="LST-LAKESIDE", date=dt.date(2025, 7, 4))

        response = client.get("/api/host/day-meta/LST-LAKESIDE/2025-07-04", headers=HOST_HEADERS)

        assert response.status_code == HTTP_200_OK
        data = response.json()
        assert data["blocked"] is False
        assert data["signal"] == "none"
        assert data["signal_label"] == "None"
        day_meta_service.get_meta.assert_called_once_with("LST-LAKESIDE", dt.date(2025, 7, 4))

    def test_save(self, client: TestClient, listing_service: MagicMock, day_meta_service: MagicMock) -> None:
        day_meta_service.save_meta.return_value = DayMeta(
            listing_id="LST-LAKESIDE", date=dt.date(2025, 7, 4), signal=DaySignal.HIGH, note="Fireworks"
        )

        response = client.put(
            "/api/host/day-meta/LST-LAKESIDE/2025-07-04",
            json={"blocked": False, "block_reason": "ignored", "signal": "high", "note": "Fireworks"},
            headers=HOST_HEADERS,
        )

        assert response.status_code == HTTP_200_OK
        assert response.json()["signal_label"] == "High Demand"
        day_meta_service.save_meta.assert_called_once_with(
            "LST-LAKESIDE",
            dt.date(2025, 7, 4),
            blocked=False,
            reason="ignored",
            signal=DaySignal.HIGH,
            note="Fireworks",
        )

    def test_unblocked_save_accepts_long_reason(
        self, client: TestClient, listing_service: MagicMock, day_meta_service: MagicMock
    ) -> None:
        day_meta_service.save_meta.return_value = DayMeta(listing_id="LST-LAKESIDE", date=dt.date(2025, 7, 4))
        reason = "x" * 201

        response = client.put(
            "/api/host/day-meta/LST-LAKESIDE/2025-07-04",
            json={"blocked": False, "block_reason": reason},
            headers=HOST_HEADERS,
        )

        assert response.status_code == HTTP_200_OK
        assert response.json()["block_reason"] == ""
        assert day_meta_service.save_meta.call_args.kwargs["reason"] == reason

    def test_other_hosts_listing(
        self, client: TestClient, listing_service: MagicMock, day_meta_service: MagicMock
    ) -> None:
        response = client.put(
            "/api/host/day-meta/LST-LAKESIDE/2025-07-04",
            json={"blocked": True},
            headers={"x-user-sub": "host-sub-2"},
        )

        assert response.status_code == HTTP_403_FORBIDDEN
        day_meta_service.save_meta.assert_not_called()

    def test_unknown_listing(
        self, client: TestClient, listing_service: MagicMock, day_meta_service: MagicMock
    ) -> None:
        listing_service.require_listing.side_effect = BookingError(code=ErrorCode.LISTING_NOT_FOUND)

        response = client.get("/api/host/day-meta/nope/2025-07-04", headers=HOST_HEADERS)

        assert response.status_code == HTTP_404_NOT_FOUND

    def test_requires_identity(
        self, client: TestClient, listing_service: MagicMock, day_meta_service: MagicMock
    ) -> None:
        response = client.get("/api/host/day-meta/LST-LAKESIDE/2025-07-04")

        assert response.status_code == HTTP_401_UNAUTHORIZED
        day_meta_service.get_meta.assert_not_called()
