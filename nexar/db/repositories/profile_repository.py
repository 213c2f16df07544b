"""Profile repository - lookups by owning account and admin promotion."""

from sqlalchemy import select, update

from nexar.db.models.profile import Profile
from nexar.db.repositories.base_repository import BaseRepository


class ProfileRepository(BaseRepository[Profile]):
    def __init__(self, session):
        super().__init__(session, Profile)

    async def get_by_account_id(self, account_id: int) -> Profile | None:
        result = await self.session.execute(select(Profile).where(Profile.account_id == account_id))
        return result.scalar_one_or_none()

    async def promote_admins(self, emails: list[str]) -> int:
        """Set is_admin on profiles with one of the given emails. Returns rows changed."""
        if not emails:
            return 0
        result = await self.session.execute(
            update(Profile)
            .where(Profile.email.in_(emails), Profile.is_admin.is_(False))
            .values(is_admin=True)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0
