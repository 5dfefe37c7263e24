"""Availability checking for listing date ranges.

All ranges are half-open ``[check_in, check_out)``: a stay that checks out on
the day another checks in does not conflict with it.
"""

import datetime as dt
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from boto3.dynamodb.conditions import Key
from boto3.dynamodb.types import TypeSerializer
from pydantic import ValidationError

from rvstay.models import AvailabilityResult, Booking
from rvstay.utils.dates import clamp_midnight, date_range, to_key
from rvstay.utils.logging import get_logger

if TYPE_CHECKING:
    from .dynamodb import DynamoDBService

logger = get_logger(__name__)

# TransactWriteItems accepts at most 100 actions; one is kept for the booking
MAX_LOCKED_NIGHTS = 99

_serializer = TypeSerializer()


def covers_day(booking: Booking, day: dt.date | dt.datetime) -> bool:
    """Check whether a booking occupies ``day`` (check-in inclusive, check-out exclusive)."""
    x = clamp_midnight(day)
    return clamp_midnight(booking.check_in) <= x < clamp_midnight(booking.check_out)


def ranges_overlap(
    a_start: dt.date,
    a_end: dt.date,
    b_start: dt.date,
    b_end: dt.date,
) -> bool:
    """Check whether ``[a_start, a_end)`` and ``[b_start, b_end)`` intersect."""
    return a_start < b_end and b_start < a_end


def check_availability(
    start: dt.date,
    end: dt.date,
    bookings: Iterable[Booking],
) -> AvailabilityResult:
    """Check a candidate range against existing bookings.

    Declined and cancelled bookings never conflict. The caller must have
    validated ``end > start``.
    """
    conflicts = [
        b.booking_id
        for b in bookings
        if b.status.is_active and ranges_overlap(start, end, b.check_in, b.check_out)
    ]
    return AvailabilityResult(
        is_available=not conflicts,
        conflicting_booking_ids=conflicts,
    )


def night_lock_id(listing_id: str, night: dt.date) -> str:
    return f"{listing_id}__{to_key(night)}"


class AvailabilityService:
    """Service for listing availability backed by the bookings table."""

    TABLE = "bookings"
    LOCK_TABLE = "booking-nights"
    LISTING_INDEX = "listing_id-index"

    def __init__(self, db: "DynamoDBService") -> None:
        """Initialize availability service.

        Args:
            db: DynamoDB service instance
        """
        self.db = db

    def get_listing_bookings(self, listing_id: str) -> list[Booking]:
        """Get all bookings for a listing, sorted by check-in.

        Documents that fail validation (e.g. an inverted date range) are
        skipped with a warning rather than failing the whole read.
        """
        items = self.db.query(
            self.TABLE,
            Key("listing_id").eq(listing_id),
            index_name=self.LISTING_INDEX,
        )
        bookings = []
        for item in items:
            try:
                bookings.append(Booking.from_item(item))
            except (KeyError, ValueError, ValidationError):
                logger.warning(
                    "Skipping malformed booking %s", item.get("booking_id"),
                    extra={"listing_id": listing_id},
                )
        bookings.sort(key=lambda b: b.check_in)
        return bookings

    def check_listing(
        self,
        listing_id: str,
        start: dt.date,
        end: dt.date,
    ) -> AvailabilityResult:
        """Check a candidate range against a listing's stored bookings."""
        return check_availability(start, end, self.get_listing_bookings(listing_id))

    def lock_items(
        self,
        listing_id: str,
        booking_id: str,
        start: dt.date,
        end: dt.date,
    ) -> list[dict[str, Any]]:
        """Build conditional puts that claim each night of a stay.

        Returns an empty list for stays longer than a single transaction can
        hold; those rely on the read-time check alone.
        """
        nights = date_range(start, end)
        if len(nights) > MAX_LOCKED_NIGHTS:
            logger.warning(
                "Stay too long for night locks, relying on read check",
                extra={"listing_id": listing_id, "nights": len(nights)},
            )
            return []

        table_name = self.db._table_name(self.LOCK_TABLE)
        return [
            {
                "Put": {
                    "TableName": table_name,
                    "Item": {
                        "night_id": _serializer.serialize(night_lock_id(listing_id, night)),
                        "listing_id": _serializer.serialize(listing_id),
                        "date": _serializer.serialize(to_key(night)),
                        "booking_id": _serializer.serialize(booking_id),
                    },
                    "ConditionExpression": "attribute_not_exists(night_id)",
                }
            }
            for night in nights
        ]

    def release_nights(
        self,
        listing_id: str,
        booking_id: str,
        start: dt.date,
        end: dt.date,
    ) -> bool:
        """Release the night locks a booking holds.

        Only removes locks owned by the given booking; missing locks are fine.

        Returns:
            True if released successfully
        """
        nights = date_range(start, end)
        if not nights or len(nights) > MAX_LOCKED_NIGHTS:
            return True

        table_name = self.db._table_name(self.LOCK_TABLE)
        transact_items = [
            {
                "Delete": {
                    "TableName": table_name,
                    "Key": {"night_id": {"S": night_lock_id(listing_id, night)}},
                    "ConditionExpression": "attribute_not_exists(night_id) OR booking_id = :bid",
                    "ExpressionAttributeValues": {":bid": {"S": booking_id}},
                }
            }
            for night in nights
        ]
        return self.db.transact_write(transact_items)
