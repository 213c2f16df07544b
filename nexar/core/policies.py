"""
Row-level access policies - who may read and write which rows.
Challenge: One rule set shared by SQL filters (list queries) and object checks (detail/write).
Design: Pure functions over an Identity; endpoints translate a False into 403/404.
Admin privilege comes from profiles.is_admin only.
"""

from dataclasses import dataclass

from sqlalchemy import ColumnElement, or_, true

from nexar.db.models.enums import ListingStatus
from nexar.db.models.favorite import Favorite
from nexar.db.models.listing import Listing
from nexar.db.models.message import Message
from nexar.db.models.profile import Profile
from nexar.db.models.review import Review
from nexar.db.models.storage import LISTING_IMAGES, PROFILE_IMAGES, StorageBucket, StorageObject

PUBLIC_BUCKETS = frozenset({LISTING_IMAGES, PROFILE_IMAGES})


@dataclass(frozen=True)
class Identity:
    """Authenticated caller: the account plus the profile it owns (if provisioned)."""

    account_id: int
    email: str
    profile_id: int | None = None
    is_admin: bool = False


# --- Listings ---

def listing_read_clause(identity: Identity | None) -> ColumnElement[bool]:
    """WHERE clause for listings visible to the caller."""
    if identity is not None and identity.is_admin:
        return true()
    clause = Listing.status == ListingStatus.ACTIVE.value
    if identity is not None and identity.profile_id is not None:
        clause = or_(clause, Listing.seller_id == identity.profile_id)
    return clause


def owns_listing(identity: Identity | None, listing: Listing) -> bool:
    return identity is not None and identity.profile_id is not None and listing.seller_id == identity.profile_id


def can_read_listing(identity: Identity | None, listing: Listing) -> bool:
    if listing.status == ListingStatus.ACTIVE.value:
        return True
    if identity is None:
        return False
    return identity.is_admin or owns_listing(identity, listing)


def can_insert_listing(identity: Identity | None) -> bool:
    """Any authenticated caller; the seller reference is always the caller's own profile."""
    return identity is not None and identity.profile_id is not None


def can_modify_listing(identity: Identity | None, listing: Listing) -> bool:
    """Update and delete share one rule: owner or admin."""
    if identity is None:
        return False
    return identity.is_admin or owns_listing(identity, listing)


# --- Profiles ---

def can_insert_profile(identity: Identity | None, account_id: int) -> bool:
    return identity is not None and identity.account_id == account_id


def can_update_profile(identity: Identity | None, profile: Profile) -> bool:
    return identity is not None and identity.account_id == profile.account_id


# --- Favorites ---

def favorite_read_clause(identity: Identity) -> ColumnElement[bool]:
    return Favorite.account_id == identity.account_id


def owns_favorite(identity: Identity | None, favorite: Favorite) -> bool:
    return identity is not None and favorite.account_id == identity.account_id


# --- Messages ---

def message_read_clause(identity: Identity) -> ColumnElement[bool]:
    return or_(Message.sender_id == identity.account_id, Message.receiver_id == identity.account_id)


def can_read_message(identity: Identity | None, message: Message) -> bool:
    if identity is None:
        return False
    return identity.account_id in (message.sender_id, message.receiver_id)


def can_send_message(identity: Identity | None, sender_id: int) -> bool:
    return identity is not None and identity.account_id == sender_id


# --- Reviews ---

def can_insert_review(identity: Identity | None, review: Review) -> bool:
    """Reviewer must be the caller, and nobody reviews their own profile."""
    if identity is None or review.reviewer_id != identity.account_id:
        return False
    return identity.profile_id is None or review.profile_id != identity.profile_id


# --- Storage ---

def object_owner_segment(name: str) -> str | None:
    """First folder of an object path ("12/bike.jpg" -> "12"). None for top-level names."""
    folders = name.strip("/").split("/")[:-1]
    return folders[0] if folders else None


def can_read_object(bucket: StorageBucket) -> bool:
    return bucket.public and bucket.id in PUBLIC_BUCKETS


def can_upload_object(identity: Identity | None, bucket: StorageBucket) -> bool:
    return identity is not None and bucket.id in PUBLIC_BUCKETS


def can_delete_object(identity: Identity | None, obj: StorageObject) -> bool:
    if identity is None or obj.bucket_id not in PUBLIC_BUCKETS:
        return False
    return object_owner_segment(obj.name) == str(identity.account_id)


class PolicyViolation(Exception):
    """Raised by services when a policy denies a write. Mapped to 403 by the app."""

    def __init__(self, detail: str = "Not allowed"):
        super().__init__(detail)
        self.detail = detail
