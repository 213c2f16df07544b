from nexar.db.models.account import Account
from nexar.db.models.favorite import Favorite
from nexar.db.models.listing import Listing
from nexar.db.models.message import Message
from nexar.db.models.profile import Profile
from nexar.db.models.review import Review
from nexar.db.models.storage import StorageBucket, StorageObject

__all__ = [
    "Account",
    "Favorite",
    "Listing",
    "Message",
    "Profile",
    "Review",
    "StorageBucket",
    "StorageObject",
]
