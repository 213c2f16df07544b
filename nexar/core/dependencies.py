"""
FastAPI dependencies - injection for DB and auth (SOLID: Dependency Inversion).
Challenge: Reusable auth, consistent error responses.
Design: A bearer token resolves to an Identity (account + own profile), which the policies consume.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from nexar.db.session import DbSession
from nexar.db.repositories.account_repository import AccountRepository
from nexar.db.repositories.profile_repository import ProfileRepository
from nexar.core.policies import Identity
from nexar.core.security import account_id_from_token

security = HTTPBearer(auto_error=False)


async def _resolve_identity(session: AsyncSession, account_id: int) -> Identity | None:
    account = await AccountRepository(session).get_by_id(account_id)
    if not account or not account.is_active:
        return None
    profile = await ProfileRepository(session).get_by_account_id(account.id)
    return Identity(
        account_id=account.id,
        email=account.email,
        profile_id=profile.id if profile else None,
        is_admin=bool(profile and profile.is_admin),
    )


def _subject(credentials: HTTPAuthorizationCredentials | None) -> int | None:
    if not credentials:
        return None
    return account_id_from_token(credentials.credentials)


async def get_current_identity(
    session: DbSession,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> Identity:
    """Resolve JWT to the caller's identity. Raises 401 if missing or invalid."""
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    account_id = _subject(credentials)
    if account_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )
    identity = await _resolve_identity(session, account_id)
    if identity is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Account not found or inactive")
    return identity


# Optional auth: anonymous callers still read public rows
async def get_optional_identity(
    session: DbSession,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> Identity | None:
    """Return the identity if a valid token is present, else None."""
    account_id = _subject(credentials)
    if account_id is None:
        return None
    return await _resolve_identity(session, account_id)


async def get_admin_identity(identity: Annotated[Identity, Depends(get_current_identity)]) -> Identity:
    if not identity.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin privileges required")
    return identity


CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]
OptionalIdentity = Annotated[Identity | None, Depends(get_optional_identity)]
AdminIdentity = Annotated[Identity, Depends(get_admin_identity)]
