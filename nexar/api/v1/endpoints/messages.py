"""
Message endpoints - visible to sender and receiver; sent only as yourself.
"""

from fastapi import APIRouter, HTTPException, status, Query

from nexar.config import get_settings
from nexar.core.dependencies import CurrentIdentity
from nexar.core.policies import can_read_message, can_send_message
from nexar.db.models.message import Message
from nexar.db.repositories.account_repository import AccountRepository
from nexar.db.repositories.message_repository import MessageRepository
from nexar.db.session import DbSession
from nexar.schemas.social import MessageCreate, MessageResponse

router = APIRouter()
settings = get_settings()


@router.get("", response_model=list[MessageResponse])
async def list_messages(
    session: DbSession,
    identity: CurrentIdentity,
    skip: int = Query(0, ge=0),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
):
    """Inbox and outbox, newest first."""
    return await MessageRepository(session).get_for(identity, skip=skip, limit=limit)


@router.get("/{message_id}", response_model=MessageResponse)
async def get_message(session: DbSession, message_id: int, identity: CurrentIdentity):
    message = await MessageRepository(session).get_by_id(message_id)
    if not message or not can_read_message(identity, message):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Message not found")
    return message


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def send_message(session: DbSession, data: MessageCreate, identity: CurrentIdentity):
    if not can_send_message(identity, identity.account_id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed")
    if not await AccountRepository(session).get_by_id(data.receiver_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Receiver not found")
    message = Message(
        sender_id=identity.account_id,
        receiver_id=data.receiver_id,
        listing_id=data.listing_id,
        content=data.content,
    )
    return await MessageRepository(session).add(message)


@router.post("/{message_id}/read", response_model=MessageResponse)
async def mark_read(session: DbSession, message_id: int, identity: CurrentIdentity):
    """Only the receiver can mark a message as read."""
    repo = MessageRepository(session)
    message = await repo.get_by_id(message_id)
    if not message or not can_read_message(identity, message):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Message not found")
    if message.receiver_id != identity.account_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only the receiver can mark as read")
    message.is_read = True
    return await repo.save(message)
