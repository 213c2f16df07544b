"""Favorite, message and review schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class FavoriteCreate(BaseModel):
    listing_id: int


class FavoriteResponse(BaseModel):
    id: int
    account_id: int
    listing_id: int
    created_at: datetime

    model_config = {"from_attributes": True}


class MessageCreate(BaseModel):
    receiver_id: int
    listing_id: int | None = None
    content: str = Field(..., min_length=1, max_length=5000)


class MessageResponse(BaseModel):
    id: int
    sender_id: int
    receiver_id: int
    listing_id: int | None
    content: str
    is_read: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class ReviewCreate(BaseModel):
    profile_id: int
    rating: int = Field(..., ge=1, le=5)
    comment: str | None = None


class ReviewResponse(BaseModel):
    id: int
    reviewer_id: int
    profile_id: int
    rating: int
    comment: str | None
    created_at: datetime

    model_config = {"from_attributes": True}
