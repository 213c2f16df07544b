"""
Profile service - public profile reads (cached) and owner-only writes.
"""

from nexar.cache.redis_client import cache_delete, cache_get, cache_set
from nexar.core.policies import Identity, PolicyViolation, can_insert_profile, can_update_profile
from nexar.db.models.profile import Profile
from nexar.db.repositories.profile_repository import ProfileRepository
from nexar.schemas.profile import OwnProfileResponse, ProfileCreate, ProfileResponse, ProfileUpdate

CACHE_PREFIX = "profile:"
CACHE_TTL = 300


class ProfileService:
    def __init__(self, repo: ProfileRepository):
        self.repo = repo

    async def get_public(self, id: int) -> ProfileResponse | None:
        """Anyone may read a profile. Uses Redis cache to reduce DB load."""
        cached = await cache_get(CACHE_PREFIX + str(id))
        if cached:
            return ProfileResponse.model_validate_json(cached)
        profile = await self.repo.get_by_id(id)
        if not profile:
            return None
        resp = ProfileResponse.model_validate(profile)
        await cache_set(CACHE_PREFIX + str(id), resp.model_dump(mode="json"), CACHE_TTL)
        return resp

    async def get_own(self, identity: Identity) -> OwnProfileResponse | None:
        profile = await self.repo.get_by_account_id(identity.account_id)
        return OwnProfileResponse.model_validate(profile) if profile else None

    async def create_own(self, identity: Identity, data: ProfileCreate) -> OwnProfileResponse:
        """Manual profile creation for an account whose provisioning failed."""
        if not can_insert_profile(identity, identity.account_id):
            raise PolicyViolation("Cannot create a profile for another account")
        profile = Profile(
            account_id=identity.account_id,
            email=identity.email,
            name=data.name,
            phone=data.phone,
            location=data.location,
            seller_type=data.seller_type.value,
            is_admin=False,
            verified=False,
        )
        profile = await self.repo.add(profile)
        return OwnProfileResponse.model_validate(profile)

    async def update_own(self, identity: Identity, data: ProfileUpdate) -> OwnProfileResponse | None:
        profile = await self.repo.get_by_account_id(identity.account_id)
        if not profile:
            return None
        if not can_update_profile(identity, profile):
            raise PolicyViolation("Cannot edit another account's profile")
        for field, value in data.model_dump(mode="json", exclude_unset=True).items():
            if value is not None:
                setattr(profile, field, value)
        profile = await self.repo.save(profile)
        await cache_delete(CACHE_PREFIX + str(profile.id))
        return OwnProfileResponse.model_validate(profile)
