"""
Security: account password hashing and bearer tokens.
Challenge: No plain-text passwords; tokens identify an account, never a role.
Design: The token carries only the account id. Profile and admin flag are looked up per request,
so a promotion by the reconciliation sweep applies without re-login.
"""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from nexar.config import get_settings

settings = get_settings()
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

TOKEN_TYPE = "access"


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    """Constant-time comparison for login."""
    return pwd_context.verify(plain, hashed)


def create_access_token(account_id: int) -> str:
    now = datetime.now(timezone.utc)
    claims = {
        "sub": str(account_id),
        "typ": TOKEN_TYPE,
        "iat": now,
        "exp": now + timedelta(minutes=settings.jwt_expire_minutes),
    }
    return jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict | None:
    """Validated claims, or None if the signature, expiry or token type is wrong."""
    try:
        claims = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    if claims.get("typ") != TOKEN_TYPE:
        return None
    return claims


def account_id_from_token(token: str) -> int | None:
    claims = decode_access_token(token)
    if not claims:
        return None
    try:
        return int(claims["sub"])
    except (KeyError, TypeError, ValueError):
        return None
