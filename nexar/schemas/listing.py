"""Listing request/response schemas - REST API contract and the storefront display record."""

from datetime import datetime

from pydantic import BaseModel, Field

from nexar.db.models.enums import Availability, Category, ListingStatus, SellerType


class ListingBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    brand: str = Field(..., min_length=1, max_length=100)
    model: str = Field(..., min_length=1, max_length=100)
    category: Category
    year: int = Field(..., ge=1885, le=2100)
    mileage: int = Field(0, ge=0)
    price: int = Field(..., ge=0)
    location: str = ""
    images: list[str] = []
    availability: Availability = Availability.IN_STOCK


class ListingCreate(ListingBase):
    # Seller fields come from the caller's profile, never from the body
    featured: bool = False


class ListingUpdate(BaseModel):
    title: str | None = None
    description: str | None = None
    brand: str | None = None
    model: str | None = None
    category: Category | None = None
    year: int | None = Field(None, ge=1885, le=2100)
    mileage: int | None = Field(None, ge=0)
    price: int | None = Field(None, ge=0)
    location: str | None = None
    images: list[str] | None = None
    availability: Availability | None = None
    featured: bool | None = None
    status: ListingStatus | None = None


class ListingResponse(ListingBase):
    id: int
    seller_id: int
    seller_name: str
    seller_type: SellerType
    featured: bool
    status: ListingStatus
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class DisplayListing(BaseModel):
    """Card-ready listing: cover image resolved, defaults applied, links precomputed."""

    id: int
    title: str
    price: int
    year: int | None = None
    mileage: int | None = None
    location: str | None = None
    image: str
    seller: str | None = None
    seller_id: int | None = None
    seller_type: SellerType | None = None
    category: str | None = None
    brand: str | None = None
    model: str | None = None
    featured: bool = False
    availability: Availability = Availability.IN_STOCK
    # Only dealers carry a stock badge
    availability_badge: str | None = None
    detail_path: str
    seller_path: str | None = None
