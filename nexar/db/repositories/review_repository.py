"""Review repository - public seller ratings."""

from sqlalchemy import select

from nexar.db.models.review import Review
from nexar.db.repositories.base_repository import BaseRepository


class ReviewRepository(BaseRepository[Review]):
    def __init__(self, session):
        super().__init__(session, Review)

    async def get_for_profile(self, profile_id: int, *, skip: int = 0, limit: int = 20) -> list[Review]:
        result = await self.session.execute(
            select(Review)
            .where(Review.profile_id == profile_id)
            .order_by(Review.created_at.desc(), Review.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all())
