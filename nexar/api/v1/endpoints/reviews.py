"""
Review endpoints - world-readable seller ratings; written only as yourself.
"""

from fastapi import APIRouter, HTTPException, status, Query

from nexar.core.dependencies import CurrentIdentity
from nexar.core.policies import can_insert_review
from nexar.db.models.review import Review
from nexar.db.repositories.profile_repository import ProfileRepository
from nexar.db.repositories.review_repository import ReviewRepository
from nexar.db.session import DbSession
from nexar.schemas.social import ReviewCreate, ReviewResponse

router = APIRouter()


@router.get("", response_model=list[ReviewResponse])
async def list_reviews(
    session: DbSession,
    profile_id: int,
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
):
    return await ReviewRepository(session).get_for_profile(profile_id, skip=skip, limit=limit)


@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
async def create_review(session: DbSession, data: ReviewCreate, identity: CurrentIdentity):
    if not await ProfileRepository(session).get_by_id(data.profile_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    review = Review(
        reviewer_id=identity.account_id,
        profile_id=data.profile_id,
        rating=data.rating,
        comment=data.comment,
    )
    if not can_insert_review(identity, review):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You cannot review your own profile")
    return await ReviewRepository(session).add(review)
