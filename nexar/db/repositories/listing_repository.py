"""
Listing repository - listing data access and query optimization (SOLID: Single Responsibility).
Challenge: Every read goes through the caller's visibility clause; use indexes for filters.
"""

from sqlalchemy import select

from nexar.core.policies import Identity, listing_read_clause
from nexar.db.models.listing import Listing
from nexar.db.repositories.base_repository import BaseRepository


class ListingRepository(BaseRepository[Listing]):
    """Listing-specific queries. Newest first, filtered by the read policy."""

    def __init__(self, session):
        super().__init__(session, Listing)

    async def get_visible(
        self,
        identity: Identity | None,
        *,
        featured: bool | None = None,
        category: str | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[Listing]:
        """Listings the caller may read, optionally filtered by featured flag and category."""
        stmt = select(Listing).where(listing_read_clause(identity))
        if featured is not None:
            stmt = stmt.where(Listing.featured.is_(featured))
        if category:
            stmt = stmt.where(Listing.category == category)
        stmt = stmt.order_by(Listing.created_at.desc(), Listing.id.desc()).offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_visible_by_id(self, identity: Identity | None, id: int) -> Listing | None:
        result = await self.session.execute(
            select(Listing).where(Listing.id == id, listing_read_clause(identity))
        )
        return result.scalar_one_or_none()
