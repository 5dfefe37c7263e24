"""API-specific request/response models.

Domain models are in rvstay.models and are reused here where possible.

Modules:
- common: Shared response wrappers
- listings: Listing, search and availability responses
- bookings: Booking responses and status updates
- calendar: Host calendar grid and day metadata responses
"""

__all__: list[str] = []
