"""
API v1 router - aggregates all endpoint modules (RESTful structure).
"""

from fastapi import APIRouter

from nexar.api.v1.endpoints import (
    accounts,
    admin,
    favorites,
    health,
    listings,
    messages,
    profiles,
    reviews,
    search,
    storage,
    storefront,
)

api_router = APIRouter(prefix="/v1")

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(accounts.router, prefix="/accounts", tags=["accounts"])
api_router.include_router(profiles.router, prefix="/profiles", tags=["profiles"])
api_router.include_router(listings.router, prefix="/listings", tags=["listings"])
api_router.include_router(storefront.router, prefix="/storefront", tags=["storefront"])
api_router.include_router(favorites.router, prefix="/favorites", tags=["favorites"])
api_router.include_router(messages.router, prefix="/messages", tags=["messages"])
api_router.include_router(reviews.router, prefix="/reviews", tags=["reviews"])
api_router.include_router(storage.router, prefix="/storage", tags=["storage"])
api_router.include_router(search.router, prefix="/search", tags=["search"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
