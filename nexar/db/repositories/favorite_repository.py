"""Favorite repository - owner-scoped bookmarks."""

from sqlalchemy import select

from nexar.core.policies import Identity, favorite_read_clause
from nexar.db.models.favorite import Favorite
from nexar.db.repositories.base_repository import BaseRepository


class FavoriteRepository(BaseRepository[Favorite]):
    def __init__(self, session):
        super().__init__(session, Favorite)

    async def get_for(self, identity: Identity) -> list[Favorite]:
        result = await self.session.execute(
            select(Favorite).where(favorite_read_clause(identity)).order_by(Favorite.created_at.desc(), Favorite.id.desc())
        )
        return list(result.scalars().all())

    async def get_pair(self, account_id: int, listing_id: int) -> Favorite | None:
        result = await self.session.execute(
            select(Favorite).where(Favorite.account_id == account_id, Favorite.listing_id == listing_id)
        )
        return result.scalar_one_or_none()
