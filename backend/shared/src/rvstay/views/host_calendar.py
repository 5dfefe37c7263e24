"""Host calendar page state.

``HostCalendarState`` is immutable; every user action is a pure function
returning a new state. Booking status changes are applied tentatively first
(``StatusChange.confirmed`` is False) and later confirmed or rolled back once
the store answers. ``HostCalendarSession`` wires the transitions to the
services.
"""

import datetime as dt
from typing import TYPE_CHECKING, Any

from botocore.exceptions import ClientError
from pydantic import BaseModel, ConfigDict, Field

from rvstay.models import (
    ERROR_MESSAGES,
    Booking,
    BookingError,
    BookingStatus,
    CalendarMonth,
    DayMeta,
    DaySignal,
    ErrorCode,
    Listing,
    day_meta_id,
)
from rvstay.services.availability import covers_day
from rvstay.services.calendar import build_calendar
from rvstay.utils.dates import add_months, start_of_month, to_key
from rvstay.utils.logging import get_logger

if TYPE_CHECKING:
    from rvstay.services.booking import BookingService
    from rvstay.services.day_meta import DayMetaService
    from rvstay.services.listings import ListingService

logger = get_logger(__name__)


class DayMetaDraft(BaseModel):
    """Unsaved inspector fields for the selected day."""

    model_config = ConfigDict(frozen=True)

    listing_id: str
    date: dt.date
    blocked: bool = False
    block_reason: str = ""
    signal: DaySignal = DaySignal.NONE
    note: str = ""

    @classmethod
    def from_meta(cls, meta: DayMeta) -> "DayMetaDraft":
        return cls(
            listing_id=meta.listing_id,
            date=meta.date,
            blocked=meta.blocked,
            block_reason=meta.block_reason,
            signal=meta.signal,
            note=meta.note,
        )


class StatusChange(BaseModel):
    """A booking status change the host made, before or after the store confirmed it."""

    model_config = ConfigDict(frozen=True)

    booking_id: str
    previous: BookingStatus
    requested: BookingStatus
    confirmed: bool = False


class InspectorView(BaseModel):
    """What the day inspector drawer shows."""

    model_config = ConfigDict(frozen=True)

    listing_id: str
    date: dt.date
    bookings: list[Booking]
    meta: DayMeta
    draft: DayMetaDraft
    signal_label: str
    unconfirmed_booking_ids: list[str] = Field(default_factory=list)


class HostCalendarState(BaseModel):
    """Everything the host calendar page holds between actions."""

    model_config = ConfigDict(frozen=True)

    month: dt.date = Field(..., description="First day of the month shown")
    bookings: dict[str, Booking] = Field(default_factory=dict)
    day_meta: dict[str, DayMeta] = Field(default_factory=dict)
    selected_listing_id: str | None = None
    selected_day: dt.date | None = None
    drawer_open: bool = False
    draft: DayMetaDraft | None = None
    status_changes: dict[str, StatusChange] = Field(default_factory=dict)
    error: str | None = None

    @classmethod
    def initial(cls, anchor: dt.date) -> "HostCalendarState":
        return cls(month=start_of_month(anchor))

    def _update(self, **changes: Any) -> "HostCalendarState":
        return self.model_copy(update=changes)


def load_month(
    state: HostCalendarState,
    bookings: list[Booking],
    day_meta: dict[str, DayMeta],
) -> HostCalendarState:
    """Replace loaded data, keeping unconfirmed status changes visible."""
    by_id = {b.booking_id: b for b in bookings}
    for change in state.status_changes.values():
        if not change.confirmed and change.booking_id in by_id:
            by_id[change.booking_id] = by_id[change.booking_id].model_copy(
                update={"status": change.requested}
            )
    return state._update(bookings=by_id, day_meta=dict(day_meta), error=None)


def shift_month(state: HostCalendarState, offset: int) -> HostCalendarState:
    """Move the month cursor and close the inspector."""
    return state._update(
        month=add_months(state.month, offset),
        selected_listing_id=None,
        selected_day=None,
        drawer_open=False,
        draft=None,
    )


def open_day(state: HostCalendarState, listing_id: str, day: dt.date) -> HostCalendarState:
    """Select a listing's day and seed the inspector draft from its saved record."""
    meta = state.day_meta.get(day_meta_id(listing_id, to_key(day))) or DayMeta(
        listing_id=listing_id, date=day
    )
    return state._update(
        selected_listing_id=listing_id,
        selected_day=day,
        drawer_open=True,
        draft=DayMetaDraft.from_meta(meta),
        error=None,
    )


def close_inspector(state: HostCalendarState) -> HostCalendarState:
    return state._update(drawer_open=False, draft=None)


def edit_draft(state: HostCalendarState, **changes: Any) -> HostCalendarState:
    """Change inspector fields; ignored when no day is open."""
    if state.draft is None:
        return state
    return state._update(draft=state.draft.model_copy(update=changes))


def begin_status_change(
    state: HostCalendarState,
    booking_id: str,
    new_status: BookingStatus,
) -> HostCalendarState:
    """Show a status change immediately, marked unconfirmed.

    Bookings that are no longer awaiting the host are left untouched and
    the state carries an error instead.
    """
    booking = state.bookings.get(booking_id)
    if booking is None:
        return state._update(error=ERROR_MESSAGES[ErrorCode.BOOKING_NOT_FOUND])
    if not booking.status.is_awaiting_host or booking_id in state.status_changes:
        return state._update(error=ERROR_MESSAGES[ErrorCode.INVALID_STATUS_TRANSITION])

    change = StatusChange(booking_id=booking_id, previous=booking.status, requested=new_status)
    return state._update(
        bookings={**state.bookings, booking_id: booking.model_copy(update={"status": new_status})},
        status_changes={**state.status_changes, booking_id: change},
        error=None,
    )


def confirm_status_change(
    state: HostCalendarState,
    booking_id: str,
    stored: Booking | None = None,
) -> HostCalendarState:
    """Mark a tentative change as accepted by the store."""
    change = state.status_changes.get(booking_id)
    if change is None:
        return state
    bookings = dict(state.bookings)
    if stored is not None:
        bookings[booking_id] = stored
    return state._update(
        bookings=bookings,
        status_changes={**state.status_changes, booking_id: change.model_copy(update={"confirmed": True})},
    )


def rollback_status_change(
    state: HostCalendarState,
    booking_id: str,
    error: str,
) -> HostCalendarState:
    """Undo a tentative change the store rejected."""
    change = state.status_changes.get(booking_id)
    if change is None or change.confirmed:
        return state._update(error=error)
    bookings = dict(state.bookings)
    if booking_id in bookings:
        bookings[booking_id] = bookings[booking_id].model_copy(update={"status": change.previous})
    changes = {k: v for k, v in state.status_changes.items() if k != booking_id}
    return state._update(bookings=bookings, status_changes=changes, error=error)


def apply_saved_meta(state: HostCalendarState, meta: DayMeta) -> HostCalendarState:
    """Store a saved record locally and refresh the draft when it is the open day."""
    draft = state.draft
    if draft is not None and draft.listing_id == meta.listing_id and draft.date == meta.date:
        draft = DayMetaDraft.from_meta(meta)
    return state._update(
        day_meta={**state.day_meta, meta.meta_id: meta},
        draft=draft,
        error=None,
    )


def inspector_view(state: HostCalendarState) -> InspectorView | None:
    """Derive the inspector drawer content, or None when it is closed."""
    if not state.drawer_open or state.selected_day is None or state.selected_listing_id is None:
        return None
    listing_id, day = state.selected_listing_id, state.selected_day
    meta = state.day_meta.get(day_meta_id(listing_id, to_key(day))) or DayMeta(
        listing_id=listing_id, date=day
    )
    bookings = sorted(
        (b for b in state.bookings.values() if b.listing_id == listing_id and covers_day(b, day)),
        key=lambda b: b.check_in,
    )
    draft = state.draft or DayMetaDraft.from_meta(meta)
    return InspectorView(
        listing_id=listing_id,
        date=day,
        bookings=bookings,
        meta=meta,
        draft=draft,
        signal_label=draft.signal.label,
        unconfirmed_booking_ids=[
            b.booking_id
            for b in bookings
            if b.booking_id in state.status_changes and not state.status_changes[b.booking_id].confirmed
        ],
    )


class HostCalendarSession:
    """Drives a host's calendar state through the services.

    Store failures never escape: they roll back any tentative change and
    leave a user-facing message in ``state.error``.
    """

    def __init__(
        self,
        host_id: str,
        listings: "ListingService",
        bookings: "BookingService",
        day_meta: "DayMetaService",
        anchor: dt.date,
    ) -> None:
        self.host_id = host_id
        self.listings = listings
        self.bookings = bookings
        self.day_meta = day_meta
        self.state = HostCalendarState.initial(anchor)
        self._host_listings: list[Listing] = []

    def load(self) -> HostCalendarState:
        """Fetch the host's listings, bookings and the month's day metadata."""
        try:
            self._host_listings = self.listings.list_host_listings(self.host_id)
            listing_ids = [listing.listing_id for listing in self._host_listings]
            bookings = self.bookings.list_host_bookings(self.host_id)
            meta = self.day_meta.list_month(listing_ids, self.state.month)
        except ClientError:
            logger.exception("Failed to load host calendar", extra={"host_id": self.host_id})
            self.state = self.state._update(error=ERROR_MESSAGES[ErrorCode.STORE_UNAVAILABLE])
            return self.state
        self.state = load_month(self.state, bookings, meta)
        return self.state

    def shift_month(self, offset: int) -> HostCalendarState:
        self.state = shift_month(self.state, offset)
        return self.load()

    def open_day(self, listing_id: str, day: dt.date) -> HostCalendarState:
        self.state = open_day(self.state, listing_id, day)
        return self.state

    def close_inspector(self) -> HostCalendarState:
        self.state = close_inspector(self.state)
        return self.state

    def edit_draft(self, **changes: Any) -> HostCalendarState:
        self.state = edit_draft(self.state, **changes)
        return self.state

    def set_status(self, booking_id: str, new_status: BookingStatus) -> HostCalendarState:
        """Approve or decline a booking with an optimistic local update."""
        tentative = begin_status_change(self.state, booking_id, new_status)
        if booking_id not in tentative.status_changes or tentative.error:
            self.state = tentative
            return self.state
        self.state = tentative

        try:
            stored = self.bookings.set_booking_status(booking_id, new_status, self.host_id)
        except BookingError as e:
            self.state = rollback_status_change(self.state, booking_id, e.message)
            return self.state
        except ClientError:
            logger.exception("Failed to update booking status", extra={"booking_id": booking_id})
            self.state = rollback_status_change(
                self.state, booking_id, ERROR_MESSAGES[ErrorCode.STORE_UNAVAILABLE]
            )
            return self.state

        self.state = confirm_status_change(self.state, booking_id, stored)
        return self.state

    def save_inspector(self) -> HostCalendarState:
        """Persist the inspector draft for the open day."""
        draft = self.state.draft
        if draft is None:
            return self.state
        try:
            meta = self.day_meta.save_meta(
                draft.listing_id,
                draft.date,
                blocked=draft.blocked,
                reason=draft.block_reason,
                signal=draft.signal,
                note=draft.note,
            )
        except ClientError:
            logger.exception("Failed to save day metadata", extra={"listing_id": draft.listing_id})
            self.state = self.state._update(error=ERROR_MESSAGES[ErrorCode.STORE_UNAVAILABLE])
            return self.state
        self.state = apply_saved_meta(self.state, meta)
        return self.state

    def calendar(self, today: dt.date) -> CalendarMonth:
        """Render the grid for the current state."""
        return build_calendar(
            self.state.month,
            today,
            self._host_listings,
            list(self.state.bookings.values()),
            self.state.day_meta,
        )
