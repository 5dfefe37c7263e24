"""Listing endpoints.

Provides REST endpoints for:
- Searching listings with the search page filters (public)
- Creating a listing (host identity required)
- Listing details (public)
- Checking availability and price for a date range (public)
"""

import datetime as dt

from fastapi import APIRouter, Depends, Query, Request
from starlette.status import HTTP_201_CREATED

from rvstay.models import (
    BookingError,
    ErrorCode,
    Hookups,
    LaundryLevel,
    ListingCreate,
    ListingFilters,
    PricingType,
    SortMode,
    StayType,
)
from rvstay.services.availability import AvailabilityService
from rvstay.services.booking import quote
from rvstay.services.listings import ListingService
from rvstay_api.dependencies import get_availability_service, get_listing_service
from rvstay_api.models.listings import (
    AvailabilityCheckResponse,
    ListingListResponse,
    ListingResponse,
    QuoteResponse,
)
from rvstay_api.security import require_user_sub

router = APIRouter(tags=["listings"])


@router.get(
    "/listings",
    summary="Search listings",
    description="""
Search listings with the same filters as the search page.

**Notes:**
- `max_price`, `min_length_ft` and `max_length_ft` of 0 mean "no limit"
- Listings without a recorded max length are never excluded by length
- `require_sewer` matches full sewer hookups; add `accept_dump_station`
  to also match listings with only a dump station
- `sort=newest` keeps creation order, newest first
""",
    response_model=ListingListResponse,
)
async def search_listings(
    q: str = Query(default="", description="Free text over title, city, state and description"),
    state: str = Query(default="", description="2-letter state code", examples=["TX"]),
    max_price: float = Query(default=0, ge=0),
    hookups: Hookups | None = Query(default=None),
    pricing_type: PricingType | None = Query(default=None),
    min_length_ft: int = Query(default=0, ge=0),
    max_length_ft: int = Query(default=0, ge=0),
    power: int | None = Query(default=None, description="Required amperage", examples=[30, 50]),
    require_water: bool = Query(default=False),
    require_sewer: bool = Query(default=False),
    accept_dump_station: bool = Query(default=False),
    laundry: LaundryLevel | None = Query(default=None),
    amenities: list[str] = Query(default=[], description="Amenity flags that must be present"),
    sort: SortMode = Query(default=SortMode.NEWEST),
    limit: int = Query(default=50, ge=1, le=200),
    service: ListingService = Depends(get_listing_service),
) -> ListingListResponse:
    filters = ListingFilters(
        q=q,
        state=state,
        max_price=max_price,
        hookups=hookups,
        pricing_type=pricing_type,
        min_length_ft=min_length_ft,
        max_length_ft=max_length_ft,
        power=power,
        require_water=require_water,
        require_sewer=require_sewer,
        accept_dump_station=accept_dump_station,
        laundry=laundry,
        amenities=amenities,
        sort=sort,
        limit=limit,
    )
    listings = [ListingResponse.from_listing(listing) for listing in service.search(filters)]
    return ListingListResponse(listings=listings, count=len(listings))


@router.post(
    "/listings",
    summary="Create listing",
    description="""
Create a listing owned by the calling host.

**Requires the x-user-sub identity header.**

Title and city must be non-empty, state must be exactly 2 letters, price and
max length must be 0 or more. Validation failures return 400 with the
message in `details.message`.
""",
    response_model=ListingResponse,
    status_code=HTTP_201_CREATED,
    responses={
        400: {"description": "Listing details invalid"},
        401: {"description": "Identity header missing"},
    },
)
async def create_listing(
    request: Request,
    body: ListingCreate,
    service: ListingService = Depends(get_listing_service),
) -> ListingResponse:
    host_id = require_user_sub(request)
    listing = service.create_listing(host_id, body)
    return ListingResponse.from_listing(listing)


@router.get(
    "/listings/{listing_id}",
    summary="Get listing",
    response_model=ListingResponse,
    responses={404: {"description": "Listing not found"}},
)
async def get_listing(
    listing_id: str,
    service: ListingService = Depends(get_listing_service),
) -> ListingResponse:
    return ListingResponse.from_listing(service.require_listing(listing_id))


@router.get(
    "/listings/{listing_id}/availability",
    summary="Check availability",
    description="""
Check whether a date range is free at a listing and price the stay.

**Notes:**
- check_out is exclusive; back-to-back stays do not conflict
- Declined and cancelled bookings never block dates
- `RV_PROVIDED` stays add a 50 per night premium
""",
    response_model=AvailabilityCheckResponse,
    responses={
        400: {"description": "check_out must be after check_in"},
        404: {"description": "Listing not found"},
    },
)
async def check_availability(
    listing_id: str,
    check_in: dt.date = Query(..., description="Check-in date (YYYY-MM-DD)", examples=["2025-07-15"]),
    check_out: dt.date = Query(..., description="Check-out date (YYYY-MM-DD)", examples=["2025-07-18"]),
    stay_type: StayType = Query(default=StayType.RV),
    listings: ListingService = Depends(get_listing_service),
    availability: AvailabilityService = Depends(get_availability_service),
) -> AvailabilityCheckResponse:
    if check_out <= check_in:
        raise BookingError(
            code=ErrorCode.INVALID_DATE_RANGE,
            details={"check_in": check_in.isoformat(), "check_out": check_out.isoformat()},
        )

    listing = listings.require_listing(listing_id)
    result = availability.check_listing(listing_id, check_in, check_out)
    priced = quote(listing, check_in, check_out, stay_type)
    return AvailabilityCheckResponse(
        listing_id=listing_id,
        is_available=result.is_available,
        conflict_count=len(result.conflicting_booking_ids),
        quote=QuoteResponse.model_validate(priced.model_dump()),
    )
