"""Day metadata service: host-authored per-day overrides."""

import datetime as dt
from typing import TYPE_CHECKING

from boto3.dynamodb.conditions import Key

from rvstay.models import DayMeta, DaySignal, day_meta_id
from rvstay.utils.dates import end_of_month, start_of_month, to_key
from rvstay.utils.logging import get_logger, log_booking_operation

if TYPE_CHECKING:
    from .dynamodb import DynamoDBService

logger = get_logger(__name__)


class DayMetaService:
    """Service for the sparse day-metadata table.

    Records are keyed ``"{listing_id}__{YYYY-MM-DD}"``. A day with no record
    reads as the empty default.
    """

    TABLE = "day-meta"
    LISTING_INDEX = "listing_id-index"

    def __init__(self, db: "DynamoDBService") -> None:
        """Initialize day metadata service.

        Args:
            db: DynamoDB service instance
        """
        self.db = db

    def get_meta(self, listing_id: str, day: dt.date) -> DayMeta:
        """Get a day's metadata, or the empty default when none was saved."""
        item = self.db.get_item(self.TABLE, {"meta_id": day_meta_id(listing_id, to_key(day))})
        if not item:
            return DayMeta(listing_id=listing_id, date=day)
        return DayMeta.from_item(item)

    def save_meta(
        self,
        listing_id: str,
        day: dt.date,
        blocked: bool,
        reason: str = "",
        signal: DaySignal = DaySignal.NONE,
        note: str = "",
    ) -> DayMeta:
        """Replace a day's metadata record.

        The block reason is only kept while the day is blocked. The whole
        record is overwritten; fields from an earlier save never survive.

        Args:
            listing_id: Listing the day belongs to
            day: Calendar day
            blocked: Whether the day is closed to bookings
            reason: Block reason (discarded unless ``blocked``)
            signal: Demand signal
            note: Internal host note

        Returns:
            The record as stored
        """
        meta = DayMeta(
            listing_id=listing_id,
            date=day,
            blocked=blocked,
            block_reason=reason.strip() if blocked else "",
            signal=signal,
            note=note.strip(),
            updated_at=dt.datetime.now(dt.UTC),
        )
        self.db.put_item(self.TABLE, meta.to_item())
        log_booking_operation(
            logger,
            "save_day_meta",
            listing_id=listing_id,
            date=to_key(day),
            blocked=blocked,
            signal=signal.value,
        )
        return meta

    def list_month(self, listing_ids: list[str], anchor: dt.date) -> dict[str, DayMeta]:
        """Load every saved record in ``anchor``'s month for the given listings.

        Returns:
            Mapping of composite meta ID to record
        """
        first, last = start_of_month(anchor), end_of_month(anchor)
        result: dict[str, DayMeta] = {}
        for listing_id in listing_ids:
            items = self.db.query(
                self.TABLE,
                Key("listing_id").eq(listing_id) & Key("date").between(to_key(first), to_key(last)),
                index_name=self.LISTING_INDEX,
            )
            for item in items:
                meta = DayMeta.from_item(item)
                result[meta.meta_id] = meta
        return result
