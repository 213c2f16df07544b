"""
Profile endpoints - public read, owner-only create/update.
"""

from fastapi import APIRouter, HTTPException, status

from nexar.core.dependencies import CurrentIdentity
from nexar.db.repositories.profile_repository import ProfileRepository
from nexar.db.session import DbSession
from nexar.schemas.profile import OwnProfileResponse, ProfileCreate, ProfileResponse, ProfileUpdate
from nexar.services.profile_service import ProfileService

router = APIRouter()


def _get_profile_service(session: DbSession) -> ProfileService:
    return ProfileService(ProfileRepository(session))


@router.get("/me", response_model=OwnProfileResponse)
async def get_my_profile(session: DbSession, identity: CurrentIdentity):
    profile = await _get_profile_service(session).get_own(identity)
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not provisioned")
    return profile


@router.post("/me", response_model=OwnProfileResponse, status_code=status.HTTP_201_CREATED)
async def create_my_profile(session: DbSession, data: ProfileCreate, identity: CurrentIdentity):
    """Create the caller's profile when signup provisioning did not."""
    if identity.profile_id is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Profile already exists")
    return await _get_profile_service(session).create_own(identity, data)


@router.put("/me", response_model=OwnProfileResponse)
async def update_my_profile(session: DbSession, data: ProfileUpdate, identity: CurrentIdentity):
    profile = await _get_profile_service(session).update_own(identity, data)
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not provisioned")
    return profile


@router.get("/{profile_id}", response_model=ProfileResponse)
async def get_profile(session: DbSession, profile_id: int):
    profile = await _get_profile_service(session).get_public(profile_id)
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    return profile
