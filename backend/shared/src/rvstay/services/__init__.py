"""Backend services for RV Stay."""

from .availability import AvailabilityService, check_availability, covers_day, ranges_overlap
from .booking import BookingService, estimate_total, nights_for, quote, stay_type_premium
from .calendar import CalendarService, MonthGrid, build_calendar
from .day_meta import DayMetaService
from .dynamodb import DynamoDBService, get_dynamodb_service, reset_dynamodb_service
from .listings import ListingService, search_listings, validate_listing

__all__ = [
    "DynamoDBService",
    "get_dynamodb_service",
    "reset_dynamodb_service",
    "AvailabilityService",
    "check_availability",
    "covers_day",
    "ranges_overlap",
    "BookingService",
    "estimate_total",
    "nights_for",
    "quote",
    "stay_type_premium",
    "CalendarService",
    "MonthGrid",
    "build_calendar",
    "DayMetaService",
    "ListingService",
    "search_listings",
    "validate_listing",
]
