from collections.abc import Sequence
from typing import Optional
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.orm import selectinload

from pulse.dao.sqlalchemy_dao import SQLAlchemyDAO
from pulse.models import Conversation, participants
from pulse.repositories.base_repository import BaseRepository


class ConversationRepository(BaseRepository[Conversation]):
    model = Conversation
    dao_class = SQLAlchemyDAO

    async def get_user_conversations(self, user_id: UUID) -> Sequence[Conversation]:
        """Conversations the user takes part in, most recent activity first"""
        query = (
            select(Conversation)
            .join(participants, participants.c.conversation_id == Conversation.id)
            .where(participants.c.user_id == user_id)
            .options(selectinload(Conversation.participants))
            .order_by(Conversation.updated_at.desc(), Conversation.id.desc())
        )
        result = await self.session.execute(query)
        return result.scalars().all()

    async def get_with_participants(self, conversation_id: UUID) -> Optional[Conversation]:
        query = (
            select(Conversation)
            .where(Conversation.id == conversation_id)
            .options(selectinload(Conversation.participants))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_two_party_conversation(self, first_id: UUID, second_id: UUID) -> Optional[Conversation]:
        """Find an existing conversation between exactly these two users"""
        candidates = (
            select(participants.c.conversation_id)
            .group_by(participants.c.conversation_id)
            .having(func.count(participants.c.user_id) == 2)
        )
        query = (
            select(Conversation)
            .join(participants, participants.c.conversation_id == Conversation.id)
            .where(
                Conversation.id.in_(candidates),
                participants.c.user_id.in_([first_id, second_id])
            )
            .group_by(Conversation.id)
            .having(func.count(participants.c.user_id) == 2)
            .options(selectinload(Conversation.participants))
        )
        result = await self.session.execute(query)
        return result.scalars().first()

    async def is_user_participant(self, conversation_id: UUID, user_id: UUID) -> bool:
        query = select(participants.c.user_id).where(
            participants.c.conversation_id == conversation_id,
            participants.c.user_id == user_id
        )
        result = await self.session.execute(query)
        return result.first() is not None
