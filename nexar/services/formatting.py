"""
Listing formatting - raw data-source record to card-ready DisplayListing.
Design: Pure and total; any missing optional field gets a default instead of failing.
"""

from collections.abc import Mapping
from typing import Any

from nexar.config import get_settings
from nexar.db.models.enums import Availability, SellerType
from nexar.schemas.listing import DisplayListing
from nexar.services.navigation import listing_path, seller_path

AVAILABILITY_BADGES = {
    Availability.IN_STOCK: "Pe stoc",
    Availability.ON_ORDER: "La comandă",
}


def _field(raw: Mapping[str, Any] | DisplayListing, *names: str) -> Any:
    """First non-None value among the given keys (raw records and display records name seller fields differently)."""
    for name in names:
        value = raw.get(name) if isinstance(raw, Mapping) else getattr(raw, name, None)
        if value is not None:
            return value
    return None


def _enum_or(enum_cls, value, default):
    """Enum member for a stored value; unknown or empty values fall back to the default."""
    if not value:
        return default
    try:
        return enum_cls(value)
    except ValueError:
        return default


def _cover_image(raw, fallback: str) -> str:
    image = _field(raw, "image")
    if image:
        return image
    images = _field(raw, "images") or []
    return images[0] if len(images) > 0 and images[0] else fallback


def format_listing(raw: Mapping[str, Any] | DisplayListing, fallback_image: str | None = None) -> DisplayListing:
    """Map a raw listing record to a DisplayListing. Formatting an already formatted record returns an equal one.

    Only a missing id is an error; every other field falls back to a default.
    """
    fallback = fallback_image or get_settings().fallback_image
    availability = _enum_or(Availability, _field(raw, "availability"), Availability.IN_STOCK)
    seller_type = _enum_or(SellerType, _field(raw, "seller_type"), None)
    seller_id = _field(raw, "seller_id")
    listing_id = _field(raw, "id")
    return DisplayListing(
        id=listing_id,
        title=_field(raw, "title") or "",
        price=_field(raw, "price") or 0,
        year=_field(raw, "year"),
        mileage=_field(raw, "mileage"),
        location=_field(raw, "location"),
        image=_cover_image(raw, fallback),
        seller=_field(raw, "seller", "seller_name"),
        seller_id=seller_id,
        seller_type=seller_type,
        category=_field(raw, "category"),
        brand=_field(raw, "brand"),
        model=_field(raw, "model"),
        featured=bool(_field(raw, "featured") or False),
        availability=availability,
        availability_badge=AVAILABILITY_BADGES[availability] if seller_type == SellerType.DEALER else None,
        detail_path=listing_path(listing_id),
        seller_path=seller_path(seller_id) if seller_id is not None else None,
    )
