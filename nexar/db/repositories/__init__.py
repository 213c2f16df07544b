# Repository pattern: abstract data access (SOLID - Dependency Inversion)

from nexar.db.repositories.account_repository import AccountRepository
from nexar.db.repositories.favorite_repository import FavoriteRepository
from nexar.db.repositories.listing_repository import ListingRepository
from nexar.db.repositories.message_repository import MessageRepository
from nexar.db.repositories.profile_repository import ProfileRepository
from nexar.db.repositories.review_repository import ReviewRepository
from nexar.db.repositories.storage_repository import StorageRepository

__all__ = [
    "AccountRepository",
    "FavoriteRepository",
    "ListingRepository",
    "MessageRepository",
    "ProfileRepository",
    "ReviewRepository",
    "StorageRepository",
]
