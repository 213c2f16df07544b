"""
Listing CRUD endpoints - RESTful resource (GET/POST/PUT/DELETE).
Challenge: Pagination, row-level visibility, owner/admin writes, 404 handling.
Design: Thin controller; service layer holds business logic and policies.
"""

from fastapi import APIRouter, HTTPException, status, Query

from nexar.config import get_settings
from nexar.core.dependencies import CurrentIdentity, OptionalIdentity
from nexar.db.models.enums import Category
from nexar.db.repositories.listing_repository import ListingRepository
from nexar.db.repositories.profile_repository import ProfileRepository
from nexar.db.session import DbSession
from nexar.schemas.listing import ListingCreate, ListingResponse, ListingUpdate
from nexar.services.listing_service import ListingService

router = APIRouter()
settings = get_settings()


def _get_listing_service(session: DbSession) -> ListingService:
    """Factory for service with repository injection (Dependency Inversion)."""
    return ListingService(ListingRepository(session), ProfileRepository(session))


@router.get("", response_model=list[ListingResponse])
async def list_listings(
    session: DbSession,
    identity: OptionalIdentity,
    featured: bool | None = None,
    category: Category | None = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
):
    """Listings visible to the caller, newest first. REST: GET /listings?featured=true&category=sport."""
    svc = _get_listing_service(session)
    return await svc.list_listings(
        identity,
        featured=featured,
        category=category.value if category else None,
        skip=skip,
        limit=limit,
    )


@router.get("/{listing_id}", response_model=ListingResponse)
async def get_listing(session: DbSession, identity: OptionalIdentity, listing_id: int):
    listing = await _get_listing_service(session).get_by_id(identity, listing_id)
    if not listing:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Listing not found")
    return listing


@router.post("", response_model=ListingResponse, status_code=status.HTTP_201_CREATED)
async def create_listing(session: DbSession, data: ListingCreate, identity: CurrentIdentity):
    """Create listing (authenticated). Seller is always the caller's profile."""
    return await _get_listing_service(session).create(identity, data)


@router.put("/{listing_id}", response_model=ListingResponse)
async def update_listing(session: DbSession, listing_id: int, data: ListingUpdate, identity: CurrentIdentity):
    """Update listing (seller or admin). Re-indexes in queue."""
    listing = await _get_listing_service(session).update(identity, listing_id, data)
    if not listing:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Listing not found")
    return listing


@router.delete("/{listing_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_listing(session: DbSession, listing_id: int, identity: CurrentIdentity):
    """Delete listing (seller or admin). Removes from DB and search index."""
    ok = await _get_listing_service(session).delete(identity, listing_id)
    if not ok:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Listing not found")
