"""FastAPI dependency providers for shared services.

Services are lazily built once and cached with @lru_cache.

Service Dependency Graph:
    DynamoDBService (singleton via get_dynamodb_service)
        ├── ListingService
        ├── AvailabilityService
        │       └── BookingService (+ ListingService)
        ├── DayMetaService
        └── CalendarService (Listing + Availability + DayMeta)

Testing:
    Use reset_services() to clear cached instances between tests.
"""

from functools import lru_cache

from rvstay.services.availability import AvailabilityService
from rvstay.services.booking import BookingService
from rvstay.services.calendar import CalendarService
from rvstay.services.day_meta import DayMetaService
from rvstay.services.dynamodb import get_dynamodb_service, reset_dynamodb_service
from rvstay.services.listings import ListingService


@lru_cache
def get_listing_service() -> ListingService:
    return ListingService(db=get_dynamodb_service())


@lru_cache
def get_availability_service() -> AvailabilityService:
    return AvailabilityService(db=get_dynamodb_service())


@lru_cache
def get_booking_service() -> BookingService:
    """Get cached BookingService instance.

    Returns:
        BookingService configured with all required dependencies.
    """
    return BookingService(
        db=get_dynamodb_service(),
        listings=get_listing_service(),
        availability=get_availability_service(),
    )


@lru_cache
def get_day_meta_service() -> DayMetaService:
    return DayMetaService(db=get_dynamodb_service())


@lru_cache
def get_calendar_service() -> CalendarService:
    """Get cached CalendarService instance.

    Returns:
        CalendarService reading listings, bookings and day metadata.
    """
    return CalendarService(
        listings=get_listing_service(),
        availability=get_availability_service(),
        day_meta=get_day_meta_service(),
    )


def reset_services() -> None:
    """Clear all cached service instances and the DynamoDB singleton.

    Example:
        @pytest.fixture(autouse=True)
        def reset_state():
            yield
            reset_services()
    """
    get_listing_service.cache_clear()
    get_availability_service.cache_clear()
    get_booking_service.cache_clear()
    get_day_meta_service.cache_clear()
    get_calendar_service.cache_clear()

    reset_dynamodb_service()
