"""
Account endpoints - signup and login (RESTful API).
Challenge: Secure auth, validation, clear status codes; signup never fails on profile provisioning.
"""

from fastapi import APIRouter, HTTPException, status

from nexar.core.security import create_access_token
from nexar.db.session import DbSession
from nexar.schemas.account import AccountResponse, LoginRequest, SignupRequest, TokenResponse
from nexar.services.account_service import AccountService

router = APIRouter()


@router.post("/signup", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
async def signup(session: DbSession, data: SignupRequest):
    """Create new account. Returns account without password, plus the provisioned profile id."""
    svc = AccountService(session)
    if await svc.email_taken(data.email):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already registered",
        )
    return await svc.signup(data)


@router.post("/login", response_model=TokenResponse)
async def login(session: DbSession, data: LoginRequest):
    """Authenticate and return JWT."""
    account = await AccountService(session).authenticate(data.email, data.password)
    if not account:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )
    return TokenResponse(access_token=create_access_token(account.id), account_id=account.id)
