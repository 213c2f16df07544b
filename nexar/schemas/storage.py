"""Storage object metadata returned after upload."""

from datetime import datetime

from pydantic import BaseModel


class StorageObjectResponse(BaseModel):
    bucket_id: str
    name: str
    content_type: str
    size: int
    owner_id: int | None
    created_at: datetime
    public_path: str

    model_config = {"from_attributes": True}
