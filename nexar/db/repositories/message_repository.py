"""Message repository - conversations visible to sender or receiver."""

from sqlalchemy import select

from nexar.core.policies import Identity, message_read_clause
from nexar.db.models.message import Message
from nexar.db.repositories.base_repository import BaseRepository


class MessageRepository(BaseRepository[Message]):
    def __init__(self, session):
        super().__init__(session, Message)

    async def get_for(self, identity: Identity, *, skip: int = 0, limit: int = 20) -> list[Message]:
        result = await self.session.execute(
            select(Message)
            .where(message_read_clause(identity))
            .order_by(Message.created_at.desc(), Message.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all())
