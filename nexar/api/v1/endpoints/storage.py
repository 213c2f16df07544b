"""
Storage endpoints - listing and profile images.
Challenge: Enforce bucket size/MIME limits and owner-only deletes.
Design: Raw request body upload; the first path segment names the owning account ("12/bike.jpg").
"""

from fastapi import APIRouter, HTTPException, Request, Response, status

from nexar.core.dependencies import CurrentIdentity
from nexar.core.policies import can_delete_object, can_read_object, can_upload_object
from nexar.db.models.storage import StorageObject
from nexar.db.repositories.storage_repository import StorageRepository
from nexar.db.session import DbSession
from nexar.schemas.storage import StorageObjectResponse

router = APIRouter()


def _public_path(bucket_id: str, name: str) -> str:
    return f"/api/v1/storage/{bucket_id}/{name}"


def _to_response(obj: StorageObject) -> StorageObjectResponse:
    return StorageObjectResponse(
        bucket_id=obj.bucket_id,
        name=obj.name,
        content_type=obj.content_type,
        size=obj.size,
        owner_id=obj.owner_id,
        created_at=obj.created_at,
        public_path=_public_path(obj.bucket_id, obj.name),
    )


@router.put("/{bucket_id}/{name:path}", response_model=StorageObjectResponse, status_code=status.HTTP_201_CREATED)
async def upload_object(session: DbSession, bucket_id: str, name: str, request: Request, identity: CurrentIdentity):
    repo = StorageRepository(session)
    bucket = await repo.get_bucket(bucket_id)
    if not bucket:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Bucket not found")
    if not can_upload_object(identity, bucket):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Uploads not allowed in this bucket")
    content_type = (request.headers.get("content-type") or "").split(";")[0].strip().lower()
    if bucket.allowed_mime_types and content_type not in bucket.allowed_mime_types:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail=f"Allowed types: {', '.join(bucket.allowed_mime_types)}",
        )
    data = await request.body()
    if len(data) > bucket.file_size_limit:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Max size is {bucket.file_size_limit} bytes",
        )
    if await repo.get_object(bucket_id, name):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Object already exists")
    obj = await repo.add(
        StorageObject(
            bucket_id=bucket_id,
            name=name,
            owner_id=identity.account_id,
            content_type=content_type,
            size=len(data),
            data=data,
        )
    )
    return _to_response(obj)


@router.get("/{bucket_id}/{name:path}")
async def download_object(session: DbSession, bucket_id: str, name: str):
    repo = StorageRepository(session)
    bucket = await repo.get_bucket(bucket_id)
    obj = await repo.get_object(bucket_id, name) if bucket and can_read_object(bucket) else None
    if not obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Object not found")
    return Response(content=obj.data, media_type=obj.content_type)


@router.delete("/{bucket_id}/{name:path}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_object(session: DbSession, bucket_id: str, name: str, identity: CurrentIdentity):
    repo = StorageRepository(session)
    obj = await repo.get_object(bucket_id, name)
    if not obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Object not found")
    if not can_delete_object(identity, obj):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only the owner folder can delete this object")
    await repo.delete(obj)
