"""Profile request/response schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from nexar.db.models.enums import SellerType


class ProfileResponse(BaseModel):
    id: int
    account_id: int
    name: str
    phone: str
    location: str
    seller_type: SellerType
    verified: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class OwnProfileResponse(ProfileResponse):
    """Profile as seen by its owner: includes contact email and admin flag."""

    email: str
    is_admin: bool


class ProfileCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    phone: str = ""
    location: str = ""
    seller_type: SellerType = SellerType.INDIVIDUAL


class ProfileUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    phone: str | None = None
    location: str | None = None
    seller_type: SellerType | None = None
