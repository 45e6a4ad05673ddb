from collections.abc import Sequence
from typing import Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import joinedload

from pulse.dao.sqlalchemy_dao import SQLAlchemyDAO
from pulse.logger import logger
from pulse.models import Conversation, Message, utcnow
from pulse.repositories.base_repository import BaseRepository


class MessageRepository(BaseRepository[Message]):
    model = Message
    dao_class = SQLAlchemyDAO

    async def get_conversation_messages(self, conversation_id: UUID) -> Sequence[Message]:
        """Messages of a conversation in chronological order"""
        query = (
            select(Message)
            .where(Message.conversation_id == conversation_id)
            .options(joinedload(Message.sender))
            .order_by(Message.created_at.asc(), Message.id.asc())
        )
        result = await self.session.execute(query)
        return result.scalars().all()

    async def get_last_message(self, conversation_id: UUID) -> Optional[Message]:
        query = (
            select(Message)
            .where(Message.conversation_id == conversation_id)
            .options(joinedload(Message.sender))
            .order_by(Message.created_at.desc(), Message.id.desc())
            .limit(1)
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def append_message(self, conversation_id: UUID, sender_id: UUID, content: str) -> Optional[Message]:
        """Insert a message and bump the conversation activity time together"""
        sent_at = utcnow()
        message = Message(
            content=content,
            conversation_id=conversation_id,
            sender_id=sender_id,
            created_at=sent_at
        )
        try:
            self.session.add(message)
            await self.session.execute(
                update(Conversation)
                .where(Conversation.id == conversation_id)
                .values(updated_at=sent_at)
            )
            await self.session.commit()
            await self.session.refresh(message)
            logger.info(f"Inserted new Message with ID: {message.id}")
            return message
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error while inserting Message: {e}")
            return None
