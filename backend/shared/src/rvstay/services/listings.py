"""Listing service for host listing management and traveler search."""

import datetime as dt
import math
import uuid
from typing import TYPE_CHECKING

from boto3.dynamodb.conditions import Key

from rvstay.models import (
    BookingError,
    ErrorCode,
    Listing,
    ListingCreate,
    ListingFilters,
    PeriodRate,
    SewerLevel,
    SortMode,
    normalize_listing,
)
from rvstay.utils.logging import get_logger

if TYPE_CHECKING:
    from .dynamodb import DynamoDBService

logger = get_logger(__name__)


def normalize_state(value: str) -> str:
    """Upper-case and truncate a state code to its two letters."""
    return value.strip().upper()[:2]


def validate_listing(data: ListingCreate) -> str | None:
    """Check host-entered listing fields.

    Returns:
        A user-facing message for the first problem found, or None.
    """
    if not data.title.strip():
        return "Please enter a listing title."
    if not data.city.strip():
        return "Please enter a city."
    state = data.state.strip()
    if len(state) != 2 or not state.isalpha():
        return "State must be 2 letters (example: TX)."
    if not math.isfinite(data.price) or data.price < 0:
        return "Price must be 0 or more."
    if data.max_length_ft < 0:
        return "Max length must be 0 or more."
    return None


def _matches(listing: Listing, filters: ListingFilters) -> bool:
    query = filters.q.strip().lower()
    if query:
        hay = " ".join(
            [listing.title, listing.city, listing.state, listing.description, listing.nearby_attractions]
        ).lower()
        if query not in hay:
            return False

    state = normalize_state(filters.state)
    if state and normalize_state(listing.state) != state:
        return False
    if filters.max_price > 0 and listing.price > filters.max_price:
        return False
    if filters.hookups is not None and listing.hookups != filters.hookups:
        return False
    if filters.pricing_type is not None and listing.pricing_type != filters.pricing_type:
        return False

    # Listings without a recorded length are not excluded by length filters
    length = listing.max_length_ft
    if filters.min_length_ft > 0 and length > 0 and length < filters.min_length_ft:
        return False
    if filters.max_length_ft > 0 and length > 0 and length > filters.max_length_ft:
        return False

    amenities = listing.amenities
    if filters.power is not None and not amenities.power.supports(filters.power):
        return False
    if filters.require_water and not amenities.water:
        return False
    if filters.require_sewer:
        if amenities.sewer is SewerLevel.DUMP_STATION:
            if not filters.accept_dump_station:
                return False
        elif amenities.sewer is not SewerLevel.FULL:
            return False
    if filters.laundry is not None and amenities.laundry != filters.laundry:
        return False
    return all(getattr(amenities, flag, False) for flag in filters.amenities)


def search_listings(listings: list[Listing], filters: ListingFilters) -> list[Listing]:
    """Filter and sort listings the way the search page does."""
    results = [listing for listing in listings if _matches(listing, filters)]
    if filters.sort is SortMode.PRICE_LOW:
        results.sort(key=lambda listing: listing.price)
    elif filters.sort is SortMode.PRICE_HIGH:
        results.sort(key=lambda listing: listing.price, reverse=True)
    return results[: filters.limit]


class ListingService:
    """Service for listing storage, validation and search."""

    TABLE = "listings"
    HOST_INDEX = "host_id-index"

    def __init__(self, db: "DynamoDBService") -> None:
        """Initialize listing service.

        Args:
            db: DynamoDB service instance
        """
        self.db = db

    def get_listing(self, listing_id: str) -> Listing | None:
        """Get a listing by ID, normalized from whichever schema it was stored in."""
        item = self.db.get_item(self.TABLE, {"listing_id": listing_id})
        if not item:
            return None
        return normalize_listing(listing_id, item)

    def require_listing(self, listing_id: str) -> Listing:
        """Get a listing or raise LISTING_NOT_FOUND."""
        listing = self.get_listing(listing_id)
        if listing is None:
            raise BookingError(
                code=ErrorCode.LISTING_NOT_FOUND,
                details={"listing_id": listing_id},
            )
        return listing

    def list_listings(self) -> list[Listing]:
        """Get all listings, newest first (undated listings last)."""
        listings = [normalize_listing(item["listing_id"], item) for item in self.db.scan(self.TABLE)]
        epoch = dt.datetime.min.replace(tzinfo=dt.UTC)
        listings.sort(key=lambda listing: listing.created_at or epoch, reverse=True)
        return listings

    def list_host_listings(self, host_id: str) -> list[Listing]:
        """Get listings owned by a host."""
        items = self.db.query(
            self.TABLE,
            Key("host_id").eq(host_id),
            index_name=self.HOST_INDEX,
        )
        return [normalize_listing(item["listing_id"], item) for item in items]

    def search(self, filters: ListingFilters) -> list[Listing]:
        return search_listings(self.list_listings(), filters)

    def create_listing(
        self,
        host_id: str | None,
        data: ListingCreate,
        now: dt.datetime | None = None,
    ) -> Listing:
        """Validate and store a new listing for a host.

        Raises:
            BookingError: AUTH_REQUIRED without a host, INVALID_LISTING when
                a field fails validation. Nothing is written in either case.
        """
        if not host_id:
            raise BookingError(code=ErrorCode.AUTH_REQUIRED)

        problem = validate_listing(data)
        if problem:
            raise BookingError(code=ErrorCode.INVALID_LISTING, details={"message": problem})

        listing = Listing(
            listing_id=f"LST-{uuid.uuid4().hex[:12].upper()}",
            host_id=host_id,
            title=data.title.strip(),
            city=data.city.strip(),
            state=normalize_state(data.state),
            rate=PeriodRate(price=float(data.price), pricing_type=data.pricing_type.value),
            pricing_type=data.pricing_type,
            max_length_ft=data.max_length_ft,
            hookups=data.hookups,
            amenities=data.amenities,
            description=data.description.strip(),
            nearby_attractions=data.nearby_attractions.strip(),
            created_at=now or dt.datetime.now(dt.UTC),
        )

        self.db.put_item(
            self.TABLE,
            listing.to_item(),
            condition_expression="attribute_not_exists(listing_id)",
        )
        logger.info("Listing created", extra={"listing_id": listing.listing_id, "host_id": host_id})
        return listing
