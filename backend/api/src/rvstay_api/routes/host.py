"""Host dashboard endpoints.

Provides REST endpoints for:
- The host's bookings across all listings, with status counts
- The month calendar grid across the host's listings
- Reading and saving per-day metadata from the day inspector

All endpoints require the x-user-sub identity header.
"""

import datetime as dt

from fastapi import APIRouter, Depends, Query, Request

from rvstay.models import BookingError, BookingStatus, DayMetaUpdate, ErrorCode
from rvstay.services.booking import BookingService, filter_by_status
from rvstay.services.calendar import CalendarService
from rvstay.services.day_meta import DayMetaService
from rvstay.services.listings import ListingService
from rvstay.utils.dates import parse_month, today
from rvstay_api.dependencies import (
    get_booking_service,
    get_calendar_service,
    get_day_meta_service,
    get_listing_service,
)
from rvstay_api.models.bookings import BookingListResponse, BookingResponse
from rvstay_api.models.calendar import CalendarResponse, DayMetaResponse
from rvstay_api.security import require_user_sub

router = APIRouter(prefix="/host", tags=["host"])


def _require_owned_listing(listings: ListingService, listing_id: str, host_id: str) -> None:
    listing = listings.require_listing(listing_id)
    if listing.host_id != host_id:
        raise BookingError(code=ErrorCode.UNAUTHORIZED, details={"listing_id": listing_id})


@router.get(
    "/bookings",
    summary="List host bookings",
    description="""
Bookings across every listing the caller hosts, newest request first,
with counts for the dashboard.

`status=requested` also matches `pending` bookings.
""",
    response_model=BookingListResponse,
    responses={401: {"description": "Identity header missing"}},
)
async def list_host_bookings(
    request: Request,
    status: BookingStatus | None = Query(default=None, description="Only this status"),
    service: BookingService = Depends(get_booking_service),
) -> BookingListResponse:
    host_id = require_user_sub(request)
    all_bookings = service.list_host_bookings(host_id)
    shown = filter_by_status(all_bookings, status)
    return BookingListResponse(
        bookings=[BookingResponse.from_booking(b) for b in shown],
        summary=service.summarize(all_bookings),
    )


@router.get(
    "/calendar/{month}",
    summary="Get host calendar",
    description="""
Month grid across the caller's listings.

**Notes:**
- Month format: YYYY-MM (e.g., 2025-07)
- The grid runs Sunday to Saturday and includes adjacent-month days
- Each cell shows at most 2 bookings; `overflow_count` holds the rest
""",
    response_model=CalendarResponse,
    responses={
        400: {"description": "Invalid month format"},
        401: {"description": "Identity header missing"},
    },
)
async def get_host_calendar(
    request: Request,
    month: str,
    service: CalendarService = Depends(get_calendar_service),
) -> CalendarResponse:
    host_id = require_user_sub(request)
    try:
        anchor = parse_month(month)
    except ValueError as e:
        raise BookingError(code=ErrorCode.INVALID_MONTH, details={"month": month}) from e

    return CalendarResponse.from_month(service.get_host_calendar(host_id, anchor, today()))


@router.get(
    "/day-meta/{listing_id}/{day}",
    summary="Get day metadata",
    description="Saved metadata for one listing day, or the empty default.",
    response_model=DayMetaResponse,
    responses={
        403: {"description": "Caller does not own the listing"},
        404: {"description": "Listing not found"},
    },
)
async def get_day_meta(
    request: Request,
    listing_id: str,
    day: dt.date,
    listings: ListingService = Depends(get_listing_service),
    service: DayMetaService = Depends(get_day_meta_service),
) -> DayMetaResponse:
    _require_owned_listing(listings, listing_id, require_user_sub(request))
    return DayMetaResponse.from_meta(service.get_meta(listing_id, day))


@router.put(
    "/day-meta/{listing_id}/{day}",
    summary="Save day metadata",
    description="""
Replace the metadata for one listing day.

The block reason is discarded unless `blocked` is true. Fields left out of
the body are reset, not merged with the previous record.
""",
    response_model=DayMetaResponse,
    responses={
        403: {"description": "Caller does not own the listing"},
        404: {"description": "Listing not found"},
    },
)
async def save_day_meta(
    request: Request,
    listing_id: str,
    day: dt.date,
    body: DayMetaUpdate,
    listings: ListingService = Depends(get_listing_service),
    service: DayMetaService = Depends(get_day_meta_service),
) -> DayMetaResponse:
    _require_owned_listing(listings, listing_id, require_user_sub(request))
    meta = service.save_meta(
        listing_id,
        day,
        blocked=body.blocked,
        reason=body.block_reason,
        signal=body.signal,
        note=body.note,
    )
    return DayMetaResponse.from_meta(meta)
