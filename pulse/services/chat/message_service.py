from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from pulse.models import Message, User
from pulse.repositories.conversation_repository import ConversationRepository
from pulse.repositories.message_repository import MessageRepository
from pulse.repositories.user_repository import UserRepository
from pulse.schemas.message import MessageCreateDTO, MessageResponseDTO
from pulse.schemas.user import UserSummaryDTO
from pulse.utils.exceptions import ForbiddenError, InternalError, NotFoundError, ValidationFailedError
from pulse.utils.identity import require_identity


class MessageService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.message_repository = MessageRepository(session)
        self.conversation_repository = ConversationRepository(session)
        self.user_repository = UserRepository(session)

    async def create_message(
        self,
        conversation_id: UUID,
        message_data: MessageCreateDTO,
        sender_id: Optional[UUID]
    ) -> MessageResponseDTO:
        """Append a message to a conversation"""
        sender_id = require_identity(sender_id)
        await self._ensure_participant(conversation_id, sender_id)

        content = message_data.content.strip()
        if not content:
            raise ValidationFailedError("Message must not be empty", field="content")

        created_message = await self.message_repository.append_message(conversation_id, sender_id, content)
        if not created_message:
            raise InternalError("Failed to create message")

        sender = await self.user_repository.find_by_id(sender_id)
        if not sender:
            raise NotFoundError("Sender not found")

        return self.to_response_dto(created_message, sender)

    async def get_conversation_messages(self, conversation_id: UUID, user_id: Optional[UUID]) -> List[MessageResponseDTO]:
        """Messages of a conversation, oldest first"""
        user_id = require_identity(user_id)
        await self._ensure_participant(conversation_id, user_id)

        messages = await self.message_repository.get_conversation_messages(conversation_id)
        return [self.to_response_dto(message, message.sender) for message in messages]

    async def _ensure_participant(self, conversation_id: UUID, user_id: UUID) -> None:
        # Unknown conversations are reported the same way as foreign ones
        if not await self.conversation_repository.is_user_participant(conversation_id, user_id):
            raise ForbiddenError("You are not a participant of this conversation")

    @staticmethod
    def to_response_dto(message: Message, sender: User) -> MessageResponseDTO:
        return MessageResponseDTO(
            id=message.id,
            content=message.content,
            created_at=message.created_at,
            conversation_id=message.conversation_id,
            sender=UserSummaryDTO.model_validate(sender)
        )
