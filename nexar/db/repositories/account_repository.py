"""
Account repository - encapsulates login identity data access (SOLID: Single Responsibility).
Challenge: Keep queries in one place for optimization and reuse.
"""

from sqlalchemy import select

from nexar.db.models.account import Account
from nexar.db.models.profile import Profile
from nexar.db.repositories.base_repository import BaseRepository


class AccountRepository(BaseRepository[Account]):
    """Account-specific queries. Extends base CRUD with domain logic."""

    def __init__(self, session):
        super().__init__(session, Account)

    async def get_by_email(self, email: str) -> Account | None:
        """Find account by email - used for authentication."""
        result = await self.session.execute(select(Account).where(Account.email == email))
        return result.scalar_one_or_none()

    async def get_without_profile(self) -> list[Account]:
        """Accounts whose provisioning never produced a profile row."""
        result = await self.session.execute(
            select(Account)
            .outerjoin(Profile, Profile.account_id == Account.id)
            .where(Profile.id.is_(None))
            .order_by(Account.id)
        )
        return list(result.scalars().all())
