"""Storefront page state - what the home page renders for one fetch lifecycle."""

from pydantic import BaseModel

from nexar.schemas.listing import DisplayListing


class StorefrontLinks(BaseModel):
    search: str
    all_listings: str
    add_listing: str
    categories: dict[str, str]


class StorefrontPage(BaseModel):
    state: str
    category: str | None = None
    featured: list[DisplayListing] = []
    recent: list[DisplayListing] = []
    error: str | None = None
    retryable: bool = False
    links: StorefrontLinks
