"""Account request/response schemas - signup metadata and login."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from nexar.db.models.enums import SellerType


class SignupMetadata(BaseModel):
    """Optional signup fields. Missing keys fall back to provisioning defaults."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    phone: str | None = None
    location: str | None = None
    seller_type: SellerType | None = Field(None, alias="sellerType")


class SignupRequest(BaseModel):
    email: EmailStr
    # bcrypt accepts max 72 bytes; longer passwords cause 500. Validate here for clear 422.
    password: str = Field(..., min_length=1, max_length=72)
    metadata: SignupMetadata = SignupMetadata()


class LoginRequest(BaseModel):
    email: str
    password: str


class AccountResponse(BaseModel):
    id: int
    email: EmailStr
    is_active: bool
    created_at: datetime
    profile_id: int | None = None  # None when provisioning failed; the reconciliation sweep repairs it


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    account_id: int
