"""Storage repository - buckets and their objects."""

from sqlalchemy import select

from nexar.db.models.storage import StorageBucket, StorageObject
from nexar.db.repositories.base_repository import BaseRepository


class StorageRepository(BaseRepository[StorageObject]):
    def __init__(self, session):
        super().__init__(session, StorageObject)

    async def get_bucket(self, bucket_id: str) -> StorageBucket | None:
        result = await self.session.execute(select(StorageBucket).where(StorageBucket.id == bucket_id))
        return result.scalar_one_or_none()

    async def get_object(self, bucket_id: str, name: str) -> StorageObject | None:
        result = await self.session.execute(
            select(StorageObject).where(StorageObject.bucket_id == bucket_id, StorageObject.name == name)
        )
        return result.scalar_one_or_none()
