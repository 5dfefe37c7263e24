"""API models for the host calendar and day inspector endpoints."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

from rvstay.models import (
    Booking,
    BookingStatus,
    CalendarCell,
    CalendarMonth,
    DayMeta,
    DaySignal,
    StayType,
)


class CalendarBooking(BaseModel):
    """Booking chip shown inside a calendar cell."""

    booking_id: str
    status: BookingStatus
    stay_type: StayType
    kind: str = Field(..., description="Simplified stay kind", examples=["rv", "land"])
    check_in: dt.date
    check_out: dt.date
    guest_name: str | None = None

    @classmethod
    def from_booking(cls, booking: Booking) -> "CalendarBooking":
        return cls(
            booking_id=booking.booking_id,
            status=booking.status,
            stay_type=booking.stay_type,
            kind=booking.stay_type.calendar_kind,
            check_in=booking.check_in,
            check_out=booking.check_out,
            guest_name=booking.guest_name,
        )


class DayMetaResponse(DayMeta):
    """Saved (or default) metadata for one listing day."""

    model_config = ConfigDict(strict=False, frozen=True)

    signal_label: str = ""

    @classmethod
    def from_meta(cls, meta: DayMeta) -> "DayMetaResponse":
        return cls.model_validate({**meta.model_dump(), "signal_label": meta.signal.label})


class CalendarCellResponse(BaseModel):
    listing_id: str
    bookings: list[CalendarBooking] = Field(
        default_factory=list, description="First bookings covering the day, by check-in"
    )
    overflow_count: int = Field(default=0, ge=0, description='Shown as "+N more"')
    booking_count: int = Field(default=0, ge=0)
    blocked: bool = False
    block_reason: str = ""
    signal: DaySignal = DaySignal.NONE
    note: str = ""

    @classmethod
    def from_cell(cls, cell: CalendarCell) -> "CalendarCellResponse":
        meta = cell.meta
        return cls(
            listing_id=cell.listing_id,
            bookings=[CalendarBooking.from_booking(b) for b in cell.visible_bookings],
            overflow_count=cell.overflow_count,
            booking_count=len(cell.bookings),
            blocked=cell.is_blocked,
            block_reason=meta.block_reason if meta else "",
            signal=meta.signal if meta else DaySignal.NONE,
            note=meta.note if meta else "",
        )


class CalendarDayResponse(BaseModel):
    date: dt.date
    in_month: bool
    is_today: bool
    cells: list[CalendarCellResponse] = Field(default_factory=list)


class CalendarResponse(BaseModel):
    """Host month grid, Sunday-first, in whole weeks."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "month": "2025-07",
                    "listing_ids": ["LST-4F2A9C11D0B3"],
                    "days": [
                        {
                            "date": "2025-06-29",
                            "in_month": False,
                            "is_today": False,
                            "cells": [
                                {
                                    "listing_id": "LST-4F2A9C11D0B3",
                                    "bookings": [],
                                    "overflow_count": 0,
                                    "booking_count": 0,
                                    "blocked": False,
                                    "block_reason": "",
                                    "signal": "none",
                                    "note": "",
                                }
                            ],
                        }
                    ],
                }
            ]
        }
    )

    month: str = Field(..., pattern=r"^\d{4}-\d{2}$")
    listing_ids: list[str] = Field(default_factory=list)
    days: list[CalendarDayResponse] = Field(default_factory=list)

    @classmethod
    def from_month(cls, month: CalendarMonth) -> "CalendarResponse":
        return cls(
            month=month.month,
            listing_ids=month.listing_ids,
            days=[
                CalendarDayResponse(
                    date=day.date,
                    in_month=day.in_month,
                    is_today=day.is_today,
                    cells=[CalendarCellResponse.from_cell(cell) for cell in day.cells],
                )
                for day in month.days
            ],
        )
