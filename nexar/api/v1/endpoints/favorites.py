"""
Favorite endpoints - owner-only bookmarks.
"""

from fastapi import APIRouter, HTTPException, status

from nexar.core.dependencies import CurrentIdentity
from nexar.core.policies import owns_favorite
from nexar.db.models.favorite import Favorite
from nexar.db.repositories.favorite_repository import FavoriteRepository
from nexar.db.repositories.listing_repository import ListingRepository
from nexar.db.session import DbSession
from nexar.schemas.social import FavoriteCreate, FavoriteResponse

router = APIRouter()


@router.get("", response_model=list[FavoriteResponse])
async def list_favorites(session: DbSession, identity: CurrentIdentity):
    return await FavoriteRepository(session).get_for(identity)


@router.post("", response_model=FavoriteResponse, status_code=status.HTTP_201_CREATED)
async def add_favorite(session: DbSession, data: FavoriteCreate, identity: CurrentIdentity):
    if not await ListingRepository(session).get_visible_by_id(identity, data.listing_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Listing not found")
    repo = FavoriteRepository(session)
    if await repo.get_pair(identity.account_id, data.listing_id):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Already in favorites")
    return await repo.add(Favorite(account_id=identity.account_id, listing_id=data.listing_id))


@router.delete("/{listing_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_favorite(session: DbSession, listing_id: int, identity: CurrentIdentity):
    repo = FavoriteRepository(session)
    favorite = await repo.get_pair(identity.account_id, listing_id)
    if not favorite or not owns_favorite(identity, favorite):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Favorite not found")
    await repo.delete(favorite)
