"""Listing models and the stored-document normalizer.

Listings were written under two price schemas over time: a legacy
``price_per_night`` field, and a ``price`` + ``pricing_type`` pair. Both are
parsed into a tagged union at the boundary so nothing downstream inspects raw
documents.
"""

from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from rvstay.utils.dates import parse_timestamp

from .enums import Hookups, LaundryLevel, PowerLevel, PricingType, SewerLevel, SortMode

CONTACT_HOST_LABEL = "Contact host"

_PERIOD_LABELS: dict[str, str] = {
    "night": "night",
    "pernight": "night",
    "week": "week",
    "weekly": "week",
    "month": "month",
    "monthly": "month",
}

_PRICING_TYPES: dict[str, PricingType] = {
    "night": PricingType.NIGHT,
    "week": PricingType.WEEKLY,
    "month": PricingType.MONTHLY,
}

AMENITY_FLAGS: tuple[str, ...] = (
    "wifi",
    "pets_allowed",
    "fire_pit",
    "picnic_table",
    "pull_through",
    "trash_pickup",
    "security_cameras",
    "gym",
    "bathrooms",
    "showers",
)


class LegacyRate(BaseModel):
    """Rate stored under the legacy single nightly-price field."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["legacy"] = "legacy"
    price_per_night: float


class PeriodRate(BaseModel):
    """Rate stored as a price plus the period it applies to."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["period"] = "period"
    price: float
    pricing_type: str | None = None


class NoRate(BaseModel):
    """No usable price on the document."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["none"] = "none"


ListingRate = Annotated[Union[LegacyRate, PeriodRate, NoRate], Field(discriminator="kind")]


class DisplayPrice(BaseModel):
    """Price as shown to travelers: a value and the period it covers."""

    model_config = ConfigDict(frozen=True)

    value: float | None
    period_label: str

    @property
    def is_contact_host(self) -> bool:
        return self.value is None

    @property
    def nightly_rate(self) -> float:
        """Numeric rate used for booking estimates (0 when not priced)."""
        return self.value or 0.0


class Amenities(BaseModel):
    """Structured amenities parsed from the host form's display strings."""

    model_config = ConfigDict(frozen=True)

    power: PowerLevel = PowerLevel.NONE
    water: bool = False
    sewer: SewerLevel = SewerLevel.NONE
    laundry: LaundryLevel = LaundryLevel.NONE
    wifi: bool = False
    pets_allowed: bool = False
    fire_pit: bool = False
    picnic_table: bool = False
    pull_through: bool = False
    trash_pickup: bool = False
    security_cameras: bool = False
    gym: bool = False
    bathrooms: bool = False
    showers: bool = False


class Listing(BaseModel):
    """A bookable RV or land spot owned by a host."""

    model_config = ConfigDict(frozen=True)

    listing_id: str = Field(..., description="Opaque listing ID")
    host_id: str | None = Field(default=None, description="Owning host's user sub")
    title: str
    city: str
    state: str = Field(..., description="2-letter state code")
    rate: ListingRate = Field(default_factory=NoRate)
    pricing_type: PricingType = PricingType.NIGHT
    max_length_ft: int = Field(default=0, ge=0)
    hookups: Hookups = Hookups.NONE
    amenities: Amenities = Field(default_factory=Amenities)
    description: str = ""
    nearby_attractions: str = ""
    created_at: datetime | None = None

    @property
    def display_price(self) -> DisplayPrice:
        return resolve_price(self.rate)

    @property
    def price(self) -> float:
        """Numeric price used for filtering and sorting (0 when unpriced)."""
        return self.display_price.nightly_rate

    def to_item(self) -> dict[str, Any]:
        """Serialize to a DynamoDB item, preserving the stored price schema."""
        item: dict[str, Any] = {
            "listing_id": self.listing_id,
            "title": self.title,
            "city": self.city,
            "state": self.state,
            "max_length_ft": self.max_length_ft,
            "hookups": self.hookups.value,
            "power": self.amenities.power.value,
            "water": "Yes" if self.amenities.water else "None",
            "sewer": self.amenities.sewer.value,
            "laundry": self.amenities.laundry.value,
            "description": self.description,
            "nearby_attractions": self.nearby_attractions,
        }
        for flag in AMENITY_FLAGS:
            item[flag] = getattr(self.amenities, flag)
        if self.host_id:
            item["host_id"] = self.host_id
        if self.created_at:
            item["created_at"] = self.created_at.isoformat()

        rate = self.rate
        if isinstance(rate, LegacyRate):
            item["price_per_night"] = Decimal(str(rate.price_per_night))
        elif isinstance(rate, PeriodRate):
            item["price"] = Decimal(str(rate.price))
            if rate.pricing_type is not None:
                item["pricing_type"] = rate.pricing_type
        if not isinstance(rate, PeriodRate):
            item["pricing_type"] = self.pricing_type.value
        return item


class ListingCreate(BaseModel):
    """Data a host submits to create a listing."""

    model_config = ConfigDict(strict=False)

    title: str = Field(..., max_length=120)
    city: str = Field(..., max_length=120)
    state: str = Field(..., max_length=8)
    price: float
    pricing_type: PricingType = PricingType.NIGHT
    max_length_ft: int = 0
    hookups: Hookups = Hookups.NONE
    amenities: Amenities = Field(default_factory=Amenities)
    description: str = Field(default="", max_length=800)
    nearby_attractions: str = Field(default="", max_length=500)


def _field(item: Mapping[str, Any], *names: str) -> Any:
    for name in names:
        if name in item and item[name] is not None:
            return item[name]
    return None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def normalize_period_label(pricing_type: str | None) -> str:
    """Map a stored pricing type to its display period label.

    Case-insensitive; ``pernight``/``night`` become ``night``, weekly and
    monthly forms collapse to ``week``/``month``, anything else is returned
    lower-cased. Missing values read as ``night``.
    """
    raw = str(pricing_type or "night").strip().lower()
    return _PERIOD_LABELS.get(raw, raw)


def parse_pricing_type(value: Any) -> PricingType:
    """Parse a stored pricing type into the enum, defaulting to Night."""
    return _PRICING_TYPES.get(normalize_period_label(value), PricingType.NIGHT)


def parse_rate(item: Mapping[str, Any]) -> ListingRate:
    """Pick the price schema variant a stored document was written under.

    A numeric ``price_per_night`` wins; ``price`` + ``pricing_type`` is read
    only when the legacy field is absent or not a number.
    """
    legacy = _field(item, "price_per_night", "pricePerNight")
    if _is_number(legacy):
        return LegacyRate(price_per_night=float(legacy))

    price = _field(item, "price")
    if _is_number(price):
        pricing_type = _field(item, "pricing_type", "pricingType")
        return PeriodRate(
            price=float(price),
            pricing_type=str(pricing_type) if pricing_type is not None else None,
        )

    return NoRate()


def resolve_price(source: "Mapping[str, Any] | LegacyRate | PeriodRate | NoRate | Listing") -> DisplayPrice:
    """Resolve the display price of a listing document, rate or listing."""
    if isinstance(source, Listing):
        rate: LegacyRate | PeriodRate | NoRate = source.rate
    elif isinstance(source, (LegacyRate, PeriodRate, NoRate)):
        rate = source
    else:
        rate = parse_rate(source)

    if isinstance(rate, PeriodRate):
        return DisplayPrice(value=rate.price, period_label=normalize_period_label(rate.pricing_type))
    if isinstance(rate, LegacyRate):
        return DisplayPrice(value=rate.price_per_night, period_label="night")
    return DisplayPrice(value=None, period_label=CONTACT_HOST_LABEL)


def _parse_enum(enum_cls: Any, value: Any, default: Any) -> Any:
    try:
        return enum_cls(str(value).strip())
    except ValueError:
        return default


def parse_amenities(item: Mapping[str, Any]) -> Amenities:
    """Turn the legacy display strings into structured amenities."""
    flags = {flag: bool(item.get(flag)) for flag in AMENITY_FLAGS}
    water_raw = str(item.get("water") or "None").strip().lower()
    return Amenities(
        power=_parse_enum(PowerLevel, item.get("power") or "None", PowerLevel.NONE),
        water=water_raw in ("yes", "true"),
        sewer=_parse_enum(SewerLevel, item.get("sewer") or "None", SewerLevel.NONE),
        laundry=_parse_enum(LaundryLevel, item.get("laundry") or "None", LaundryLevel.NONE),
        **flags,
    )


def normalize_listing(listing_id: str, item: Mapping[str, Any]) -> Listing:
    """Build a Listing from a stored document of any schema version."""
    title = str(_field(item, "title", "name") or "").strip()
    max_length = _field(item, "max_length_ft", "maxLengthFt")
    created_at = item.get("created_at")

    return Listing(
        listing_id=listing_id,
        host_id=_field(item, "host_id", "hostId"),
        title=title or "(Untitled Listing)",
        city=str(item.get("city") or "").strip(),
        state=str(item.get("state") or "").strip(),
        rate=parse_rate(item),
        pricing_type=parse_pricing_type(_field(item, "pricing_type", "pricingType")),
        max_length_ft=max(int(max_length), 0) if _is_number(max_length) else 0,
        hookups=_parse_enum(Hookups, item.get("hookups") or "None", Hookups.NONE),
        amenities=parse_amenities(item),
        description=str(item.get("description") or ""),
        nearby_attractions=str(_field(item, "nearby_attractions", "nearbyAttractions") or ""),
        created_at=parse_timestamp(created_at) if isinstance(created_at, str) else None,
    )


class ListingFilters(BaseModel):
    """Search filters, mirroring the search page query parameters."""

    model_config = ConfigDict(strict=False)

    q: str = ""
    state: str = ""
    max_price: float = 0
    hookups: Hookups | None = None
    pricing_type: PricingType | None = None
    min_length_ft: int = 0
    max_length_ft: int = 0
    power: int | None = Field(default=None, description="Required amperage, 30 or 50")
    require_water: bool = False
    require_sewer: bool = False
    accept_dump_station: bool = False
    laundry: LaundryLevel | None = None
    amenities: list[str] = Field(default_factory=list)
    sort: SortMode = SortMode.NEWEST
    limit: int = Field(default=50, ge=1, le=200)
