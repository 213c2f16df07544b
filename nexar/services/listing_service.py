"""
Listing service - business logic for listings (SOLID: Single Responsibility).
Challenge: Orchestrate repository, policies, search queue; keep controllers thin.
Design: Service depends on abstractions (repositories); easy to test with mocks.
"""

import logging

from nexar.config import get_settings
from nexar.core.policies import (
    Identity,
    PolicyViolation,
    can_insert_listing,
    can_modify_listing,
)
from nexar.db.models.listing import Listing
from nexar.db.repositories.listing_repository import ListingRepository
from nexar.db.repositories.profile_repository import ProfileRepository
from nexar.schemas.listing import ListingCreate, ListingResponse, ListingUpdate
from nexar.queue.tasks import index_listing_task, remove_listing_task
from nexar.search.elasticsearch_client import listing_document

logger = logging.getLogger(__name__)
settings = get_settings()


def _enqueue_index(listing: Listing) -> None:
    """Event-driven: send to queue instead of blocking on Elasticsearch."""
    if not settings.search_indexing_enabled:
        return
    index_listing_task.delay(listing_document(listing))


def _enqueue_removal(listing_id: int) -> None:
    if not settings.search_indexing_enabled:
        return
    remove_listing_task.delay(listing_id)


class ListingService:
    """Handles listing use cases: policy-filtered reads, owner/admin writes, search indexing."""

    def __init__(self, listing_repo: ListingRepository, profile_repo: ProfileRepository):
        self.listing_repo = listing_repo
        self.profile_repo = profile_repo

    async def list_listings(
        self,
        identity: Identity | None,
        *,
        featured: bool | None = None,
        category: str | None = None,
        skip: int = 0,
        limit: int = 20,
    ) -> list[ListingResponse]:
        listings = await self.listing_repo.get_visible(
            identity, featured=featured, category=category, skip=skip, limit=limit
        )
        return [ListingResponse.model_validate(listing) for listing in listings]

    async def get_by_id(self, identity: Identity | None, id: int) -> ListingResponse | None:
        """Detail read. Listings the caller may not see look missing."""
        listing = await self.listing_repo.get_visible_by_id(identity, id)
        return ListingResponse.model_validate(listing) if listing else None

    async def create(self, identity: Identity | None, data: ListingCreate) -> ListingResponse:
        """Create listing for the caller's own profile, enqueue indexing."""
        if not can_insert_listing(identity):
            raise PolicyViolation("A profile is required to publish listings")
        if data.featured and not identity.is_admin:
            raise PolicyViolation("Only admins can feature listings")
        seller = await self.profile_repo.get_by_id(identity.profile_id)
        listing = Listing(
            **data.model_dump(mode="json"),
            seller_id=seller.id,
            seller_name=seller.name,
            seller_type=seller.seller_type,
        )
        listing = await self.listing_repo.add(listing)
        _enqueue_index(listing)
        logger.info("listing %s created by profile %s", listing.id, seller.id)
        return ListingResponse.model_validate(listing)

    async def update(self, identity: Identity | None, id: int, data: ListingUpdate) -> ListingResponse | None:
        """Owner or admin update. Returns None if the caller cannot see the listing."""
        listing = await self.listing_repo.get_visible_by_id(identity, id)
        if not listing:
            return None
        if not can_modify_listing(identity, listing):
            raise PolicyViolation("Only the seller or an admin can edit this listing")
        changes = data.model_dump(mode="json", exclude_unset=True)
        if "featured" in changes and not identity.is_admin:
            raise PolicyViolation("Only admins can feature listings")
        for field, value in changes.items():
            if value is not None:
                setattr(listing, field, value)
        listing = await self.listing_repo.save(listing)
        _enqueue_index(listing)
        return ListingResponse.model_validate(listing)

    async def delete(self, identity: Identity | None, id: int) -> bool:
        """Owner or admin delete. Removes from DB and search index."""
        listing = await self.listing_repo.get_visible_by_id(identity, id)
        if not listing:
            return False
        if not can_modify_listing(identity, listing):
            raise PolicyViolation("Only the seller or an admin can delete this listing")
        await self.listing_repo.delete(listing)
        _enqueue_removal(id)
        logger.info("listing %s deleted by account %s", id, identity.account_id)
        return True
