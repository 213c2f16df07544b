"""
Account service - signup and login.
Design: Signup inserts the account, then runs profile provisioning as an after-insert hook.
A failed provisioning leaves the account in place with no profile.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from nexar.core.security import hash_password, verify_password
from nexar.db.models.account import Account
from nexar.db.repositories.account_repository import AccountRepository
from nexar.schemas.account import AccountResponse, SignupRequest
from nexar.services.provisioning import provision_profile

logger = logging.getLogger(__name__)


class AccountService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.repo = AccountRepository(session)

    async def email_taken(self, email: str) -> bool:
        return await self.repo.get_by_email(email) is not None

    async def signup(self, data: SignupRequest) -> AccountResponse:
        """Create account and (best-effort) its profile."""
        account = Account(
            email=data.email,
            hashed_password=hash_password(data.password),
            # Stored with the original camelCase keys (sellerType)
            raw_metadata=data.metadata.model_dump(mode="json", by_alias=True, exclude_none=True),
        )
        account = await self.repo.add(account)
        response = AccountResponse(
            id=account.id,
            email=account.email,
            is_active=account.is_active,
            created_at=account.created_at,
        )
        profile = await provision_profile(self.session, account)
        if profile is not None:
            response.profile_id = profile.id
        logger.info("account %s signed up (profile=%s)", response.id, response.profile_id)
        return response

    async def authenticate(self, email: str, password: str) -> Account | None:
        account = await self.repo.get_by_email(email)
        if not account or not account.is_active or not verify_password(password, account.hashed_password):
            return None
        return account
