"""API models for listing, search and availability endpoints.

Response models are validated leniently: FastAPI serializes the returned
object to JSON types before checking it against the response model.
"""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

from rvstay.models import Amenities, BookingQuote, Hookups, Listing, PricingType


class ListingResponse(BaseModel):
    """A listing as shown to travelers, with its resolved display price."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "listing_id": "LST-4F2A9C11D0B3",
                    "host_id": "host-sub-123",
                    "title": "Shady pull-through by the lake",
                    "city": "Austin",
                    "state": "TX",
                    "price": 45.0,
                    "period_label": "night",
                    "pricing_type": "Night",
                    "max_length_ft": 40,
                    "hookups": "Full",
                }
            ]
        }
    )

    listing_id: str
    host_id: str | None = None
    title: str
    city: str
    state: str
    price: float | None = Field(..., description="Display price; null means contact host")
    period_label: str = Field(..., examples=["night", "week", "Contact host"])
    pricing_type: PricingType
    max_length_ft: int
    hookups: Hookups
    amenities: Amenities
    description: str = ""
    nearby_attractions: str = ""
    created_at: dt.datetime | None = None

    @classmethod
    def from_listing(cls, listing: Listing) -> "ListingResponse":
        display = listing.display_price
        return cls(
            listing_id=listing.listing_id,
            host_id=listing.host_id,
            title=listing.title,
            city=listing.city,
            state=listing.state,
            price=display.value,
            period_label=display.period_label,
            pricing_type=listing.pricing_type,
            max_length_ft=listing.max_length_ft,
            hookups=listing.hookups,
            amenities=listing.amenities,
            description=listing.description,
            nearby_attractions=listing.nearby_attractions,
            created_at=listing.created_at,
        )


class ListingListResponse(BaseModel):
    """Search results."""

    listings: list[ListingResponse] = Field(default_factory=list)
    count: int = Field(..., ge=0)


class QuoteResponse(BookingQuote):
    model_config = ConfigDict(strict=False)


class AvailabilityCheckResponse(BaseModel):
    """Availability plus price quote for a listing and date range."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "listing_id": "LST-4F2A9C11D0B3",
                    "is_available": True,
                    "conflict_count": 0,
                    "quote": {
                        "check_in": "2025-07-15",
                        "check_out": "2025-07-18",
                        "stay_type": "RV_PROVIDED",
                        "nights": 3,
                        "nightly_rate": 50.0,
                        "stay_type_premium": 50.0,
                        "estimated_total": 300.0,
                        "period_label": "night",
                    },
                }
            ]
        }
    )

    listing_id: str
    is_available: bool
    conflict_count: int = Field(..., ge=0)
    quote: QuoteResponse
