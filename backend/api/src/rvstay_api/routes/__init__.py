"""API routes package.

Routers are organized by audience:

- health: Health check endpoints
- listings: Search, listing details, availability and listing creation
- bookings: Booking requests and host decisions
- host: Host dashboard, month calendar and day metadata

All routers are registered in main.py with /api prefix.
"""

from rvstay_api.routes.bookings import router as bookings_router
from rvstay_api.routes.health import router as health_router
from rvstay_api.routes.host import router as host_router
from rvstay_api.routes.listings import router as listings_router

__all__ = [
    "bookings_router",
    "health_router",
    "host_router",
    "listings_router",
]
