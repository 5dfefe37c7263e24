"""Booking endpoints.

Provides REST endpoints for:
- Requesting a booking at a listing (anonymous or signed in)
- Retrieving a booking by ID
- Approving or declining a booking (owning host only)
"""

from fastapi import APIRouter, Depends, Request
from starlette.status import HTTP_201_CREATED

from rvstay.models import BookingCreate
from rvstay.services.booking import BookingService
from rvstay_api.dependencies import get_booking_service
from rvstay_api.models.bookings import BookingResponse, BookingStatusUpdate
from rvstay_api.security import get_user_sub, require_user_sub

router = APIRouter(tags=["bookings"])


@router.post(
    "/listings/{listing_id}/bookings",
    summary="Request booking",
    description="""
Request a stay at a listing. The booking starts in `requested` status and
waits for the host.

**Notes:**
- check_out must be after check_in, and check_in cannot be in the past
- The note is trimmed and cut to 500 characters
- Overlapping an active booking returns 409 `ERR_001`
""",
    response_model=BookingResponse,
    status_code=HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid date range or past check-in"},
        404: {"description": "Listing not found"},
        409: {"description": "Dates unavailable"},
    },
)
async def create_booking(
    request: Request,
    listing_id: str,
    body: BookingCreate,
    service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    booking = service.create_booking(listing_id, body, guest_id=get_user_sub(request))
    return BookingResponse.from_booking(booking)


@router.get(
    "/bookings/{booking_id}",
    summary="Get booking",
    response_model=BookingResponse,
    responses={404: {"description": "Booking not found"}},
)
async def get_booking(
    booking_id: str,
    service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    return BookingResponse.from_booking(service.require_booking(booking_id))


@router.patch(
    "/bookings/{booking_id}/status",
    summary="Approve or decline booking",
    description="""
Move a booking that is awaiting the host to a final status.

**Requires the x-user-sub identity header of the listing's host.**

Only `requested` and `pending` bookings can change; any other starting
status returns 409 `ERR_006`. Declining or cancelling frees the dates.
""",
    response_model=BookingResponse,
    responses={
        401: {"description": "Identity header missing"},
        403: {"description": "Caller does not own the listing"},
        404: {"description": "Booking not found"},
        409: {"description": "Booking is no longer awaiting the host"},
    },
)
async def set_booking_status(
    request: Request,
    booking_id: str,
    body: BookingStatusUpdate,
    service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    host_id = require_user_sub(request)
    booking = service.set_booking_status(booking_id, body.status, host_id)
    return BookingResponse.from_booking(booking)
