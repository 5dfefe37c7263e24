"""Booking lifecycle service.

Bookings are created in the ``requested`` state and move exactly once, by the
owning host, to a terminal status. Creation re-checks availability and then
writes the booking together with one lock item per night in a single
transaction, so two overlapping requests cannot both succeed.
"""

import datetime as dt
import uuid
from typing import TYPE_CHECKING

from boto3.dynamodb.types import TypeSerializer

from rvstay.models import (
    NOTE_MAX_LENGTH,
    Booking,
    BookingCreate,
    BookingError,
    BookingQuote,
    BookingStatus,
    BookingSummary,
    ErrorCode,
    Listing,
    StayType,
)
from rvstay.utils.dates import nights_between, today
from rvstay.utils.logging import get_logger, log_booking_operation

if TYPE_CHECKING:
    from .availability import AvailabilityService
    from .dynamodb import DynamoDBService
    from .listings import ListingService

logger = get_logger(__name__)

RV_PROVIDED_PREMIUM = 50.0

_serializer = TypeSerializer()


def nights_for(check_in: dt.date, check_out: dt.date) -> int:
    return nights_between(check_in, check_out)


def stay_type_premium(stay_type: StayType) -> float:
    """Nightly surcharge for a stay type (only the host-provided RV costs extra)."""
    return RV_PROVIDED_PREMIUM if stay_type is StayType.RV_PROVIDED else 0.0


def estimate_total(rate: float, nights: int, stay_type: StayType) -> float:
    """Estimated stay cost: ``nights * (rate + premium)``.

    Zero when the listing has no rate or the range has no nights.
    """
    if rate <= 0 or nights <= 0:
        return 0.0
    return float(nights * (rate + stay_type_premium(stay_type)))


def quote(
    listing: Listing,
    check_in: dt.date,
    check_out: dt.date,
    stay_type: StayType = StayType.RV,
) -> BookingQuote:
    """Price a stay at a listing."""
    price = listing.display_price
    nights = nights_for(check_in, check_out)
    return BookingQuote(
        check_in=check_in,
        check_out=check_out,
        stay_type=stay_type,
        nights=nights,
        nightly_rate=price.nightly_rate,
        stay_type_premium=stay_type_premium(stay_type),
        estimated_total=estimate_total(price.nightly_rate, nights, stay_type),
        period_label=price.period_label,
    )


def clean_note(note: str | None) -> str:
    """Trim a guest note and cut it to the stored maximum."""
    return (note or "").strip()[:NOTE_MAX_LENGTH]


def filter_by_status(bookings: list[Booking], status: BookingStatus | None) -> list[Booking]:
    """Keep bookings with ``status``; ``requested`` and ``pending`` match each other."""
    if status is None:
        return list(bookings)
    if status.is_awaiting_host:
        return [b for b in bookings if b.status.is_awaiting_host]
    return [b for b in bookings if b.status is status]


def _generate_booking_id() -> str:
    year = dt.datetime.now().year
    return f"BKG-{year}-{uuid.uuid4().hex[:8].upper()}"


class BookingService:
    """Service for creating bookings and moving them through their lifecycle."""

    TABLE = "bookings"

    def __init__(
        self,
        db: "DynamoDBService",
        listings: "ListingService",
        availability: "AvailabilityService",
    ) -> None:
        """Initialize booking service.

        Args:
            db: DynamoDB service instance
            listings: Listing service used to resolve rates and owners
            availability: Availability service for conflicts and night locks
        """
        self.db = db
        self.listings = listings
        self.availability = availability

    def create_booking(
        self,
        listing_id: str,
        data: BookingCreate,
        guest_id: str | None = None,
        current_date: dt.date | None = None,
    ) -> Booking:
        """Request a booking for a listing.

        Args:
            listing_id: Listing to book
            data: Dates, stay type, note and optional guest contact
            guest_id: Traveler's user sub, if signed in
            current_date: Override for "today" (defaults to the local date)

        Returns:
            The stored booking, in ``requested`` status

        Raises:
            BookingError: INVALID_DATE_RANGE, PAST_CHECK_IN, LISTING_NOT_FOUND
                or DATES_UNAVAILABLE. Validation runs before any store access.
        """
        check_in, check_out = data.check_in, data.check_out
        if check_out <= check_in:
            raise BookingError(
                code=ErrorCode.INVALID_DATE_RANGE,
                details={"check_in": check_in.isoformat(), "check_out": check_out.isoformat()},
            )
        if check_in < (current_date or today()):
            raise BookingError(
                code=ErrorCode.PAST_CHECK_IN,
                details={"check_in": check_in.isoformat()},
            )
        note = clean_note(data.note)

        listing = self.listings.require_listing(listing_id)

        result = self.availability.check_listing(listing_id, check_in, check_out)
        if not result.is_available:
            log_booking_operation(
                logger,
                "create_booking",
                listing_id=listing_id,
                error="dates unavailable",
                conflicts=",".join(result.conflicting_booking_ids),
            )
            raise BookingError(
                code=ErrorCode.DATES_UNAVAILABLE,
                details={"conflicts": ",".join(result.conflicting_booking_ids)},
            )

        priced = quote(listing, check_in, check_out, data.stay_type)
        now = dt.datetime.now(dt.UTC)
        booking = Booking(
            booking_id=_generate_booking_id(),
            listing_id=listing_id,
            check_in=check_in,
            check_out=check_out,
            status=BookingStatus.REQUESTED,
            stay_type=data.stay_type,
            nights=priced.nights,
            estimated_total=priced.estimated_total,
            note=note,
            guest_id=guest_id,
            guest_name=data.guest_name,
            guest_email=data.guest_email,
            created_at=now,
            updated_at=now,
        )

        transact_items = [
            {
                "Put": {
                    "TableName": self.db._table_name(self.TABLE),
                    "Item": {k: _serializer.serialize(v) for k, v in booking.to_item().items()},
                    "ConditionExpression": "attribute_not_exists(booking_id)",
                }
            },
            *self.availability.lock_items(listing_id, booking.booking_id, check_in, check_out),
        ]
        if not self.db.transact_write(transact_items):
            # Another request claimed one of the nights between read and write
            log_booking_operation(
                logger,
                "create_booking",
                booking_id=booking.booking_id,
                listing_id=listing_id,
                error="night lock conflict",
            )
            raise BookingError(code=ErrorCode.DATES_UNAVAILABLE)

        log_booking_operation(
            logger,
            "create_booking",
            booking_id=booking.booking_id,
            listing_id=listing_id,
            status=booking.status.value,
            nights=booking.nights,
        )
        return booking

    def get_booking(self, booking_id: str) -> Booking | None:
        item = self.db.get_item(self.TABLE, {"booking_id": booking_id})
        if not item:
            return None
        return Booking.from_item(item)

    def require_booking(self, booking_id: str) -> Booking:
        """Get a booking or raise BOOKING_NOT_FOUND."""
        booking = self.get_booking(booking_id)
        if booking is None:
            raise BookingError(
                code=ErrorCode.BOOKING_NOT_FOUND,
                details={"booking_id": booking_id},
            )
        return booking

    def set_booking_status(
        self,
        booking_id: str,
        new_status: BookingStatus,
        host_id: str | None,
    ) -> Booking:
        """Move a booking awaiting the host to a terminal status.

        The write is conditioned on the status read here, so a concurrent
        change by another session is reported instead of overwritten.
        Declining or cancelling frees the booking's nights.

        Args:
            booking_id: Booking to update
            new_status: Target terminal status
            host_id: Caller's user sub

        Returns:
            The updated booking

        Raises:
            BookingError: AUTH_REQUIRED, BOOKING_NOT_FOUND, UNAUTHORIZED or
                INVALID_STATUS_TRANSITION.
        """
        if not host_id:
            raise BookingError(code=ErrorCode.AUTH_REQUIRED)

        booking = self.require_booking(booking_id)

        listing = self.listings.get_listing(booking.listing_id)
        if listing is not None and listing.host_id and listing.host_id != host_id:
            raise BookingError(
                code=ErrorCode.UNAUTHORIZED,
                details={"listing_id": booking.listing_id},
            )

        if not booking.status.is_awaiting_host or not new_status.is_terminal or new_status is BookingStatus.OTHER:
            log_booking_operation(
                logger,
                "set_booking_status",
                booking_id=booking_id,
                status=new_status.value,
                error=f"transition from {booking.status.value} rejected",
            )
            raise BookingError(
                code=ErrorCode.INVALID_STATUS_TRANSITION,
                details={"current": booking.status.value, "requested": new_status.value},
            )

        now = dt.datetime.now(dt.UTC)
        attrs = self.db.update_item(
            self.TABLE,
            {"booking_id": booking_id},
            update_expression="SET #s = :new, updated_at = :now",
            expression_attribute_values={
                ":new": new_status.value,
                ":now": now.isoformat(),
                ":current": booking.status.value,
            },
            expression_attribute_names={"#s": "status"},
            condition_expression="#s = :current",
        )
        if attrs is None:
            log_booking_operation(
                logger,
                "set_booking_status",
                booking_id=booking_id,
                status=new_status.value,
                error="status changed concurrently",
            )
            raise BookingError(
                code=ErrorCode.INVALID_STATUS_TRANSITION,
                details={"requested": new_status.value},
            )

        updated = Booking.from_item(attrs)
        if not new_status.is_active:
            released = self.availability.release_nights(
                booking.listing_id, booking_id, booking.check_in, booking.check_out
            )
            if not released:
                logger.warning(
                    "Night locks not released",
                    extra={"booking_id": booking_id, "listing_id": booking.listing_id},
                )

        log_booking_operation(
            logger,
            "set_booking_status",
            booking_id=booking_id,
            listing_id=booking.listing_id,
            status=new_status.value,
            previous=booking.status.value,
        )
        return updated

    def list_listing_bookings(self, listing_id: str) -> list[Booking]:
        """Get a listing's bookings sorted by check-in."""
        return self.availability.get_listing_bookings(listing_id)

    def list_host_bookings(
        self,
        host_id: str,
        status_filter: BookingStatus | None = None,
    ) -> list[Booking]:
        """Get bookings across all of a host's listings, newest request first.

        Args:
            host_id: Host user sub
            status_filter: Only bookings with this status. ``requested``
                also matches ``pending``.
        """
        bookings: list[Booking] = []
        for listing in self.listings.list_host_listings(host_id):
            bookings.extend(self.list_listing_bookings(listing.listing_id))

        bookings = filter_by_status(bookings, status_filter)
        epoch = dt.datetime.min.replace(tzinfo=dt.UTC)
        bookings.sort(key=lambda b: b.created_at or epoch, reverse=True)
        return bookings

    @staticmethod
    def summarize(bookings: list[Booking]) -> BookingSummary:
        return BookingSummary.from_bookings(bookings)
