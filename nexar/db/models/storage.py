"""
Object storage models - image buckets and the objects uploaded into them.
Design: Bytes live in the database; bucket rows carry size and MIME limits.
"""


from sqlalchemy import JSON, String, ForeignKey, LargeBinary, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from nexar.db.base import Base, CreatedAtMixin

LISTING_IMAGES = "listing-images"
PROFILE_IMAGES = "profile-images"
IMAGE_MIME_TYPES = ["image/jpeg", "image/png", "image/webp"]


class StorageBucket(Base):
    __tablename__ = "storage_buckets"

    id: Mapped[str] = mapped_column(String(63), primary_key=True)
    public: Mapped[bool] = mapped_column(default=True, nullable=False)
    file_size_limit: Mapped[int] = mapped_column(nullable=False)
    allowed_mime_types: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    def __repr__(self) -> str:
        return f"<StorageBucket(id={self.id})>"


class StorageObject(CreatedAtMixin, Base):
    __tablename__ = "storage_objects"
    __table_args__ = (UniqueConstraint("bucket_id", "name", name="storage_objects_bucket_name_key"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    bucket_id: Mapped[str] = mapped_column(ForeignKey("storage_buckets.id"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(1024), nullable=False)
    owner_id: Mapped[int | None] = mapped_column(ForeignKey("accounts.id", ondelete="SET NULL"), nullable=True)
    content_type: Mapped[str] = mapped_column(String(100), nullable=False)
    size: Mapped[int] = mapped_column(nullable=False)
    data: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)

    def __repr__(self) -> str:
        return f"<StorageObject(bucket_id={self.bucket_id}, name={self.name})>"


# (id, size limit in bytes) seeded by migration 001
DEFAULT_BUCKETS = [
    (LISTING_IMAGES, 5 * 1024 * 1024),
    (PROFILE_IMAGES, 2 * 1024 * 1024),
]
