from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from pulse.models import Conversation, Message
from pulse.repositories.conversation_repository import ConversationRepository
from pulse.repositories.message_repository import MessageRepository
from pulse.repositories.user_repository import UserRepository
from pulse.schemas.conversation import ConversationCreateDTO, ConversationResponseDTO
from pulse.schemas.user import UserSummaryDTO
from pulse.services.chat.message_service import MessageService
from pulse.utils.exceptions import InternalError, NotFoundError, ValidationFailedError
from pulse.utils.identity import require_identity


class ConversationService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.conversation_repository = ConversationRepository(session)
        self.message_repository = MessageRepository(session)
        self.user_repository = UserRepository(session)

    async def create_conversation(
        self,
        conversation_data: ConversationCreateDTO,
        creator_id: Optional[UUID]
    ) -> ConversationResponseDTO:
        """Start a conversation; a two-party one is reused if it already exists"""
        creator_id = require_identity(creator_id)

        other_ids = list(dict.fromkeys(
            participant_id for participant_id in conversation_data.participant_ids
            if participant_id != creator_id
        ))
        if not other_ids:
            raise ValidationFailedError(
                "A conversation needs at least one other participant",
                field="participant_ids"
            )

        others = await self.user_repository.find_by_ids(other_ids)
        found_ids = {user.id for user in others}
        for participant_id in other_ids:
            if participant_id not in found_ids:
                raise NotFoundError(f"User {participant_id} not found")

        if len(other_ids) == 1:
            existing = await self.conversation_repository.get_two_party_conversation(
                creator_id, other_ids[0]
            )
            if existing:
                return await self._to_response_dto(existing)

        creator = await self.user_repository.find_by_id(creator_id)
        if not creator:
            raise NotFoundError(f"User {creator_id} not found")

        conversation = Conversation(participants=[creator, *others])
        created = await self.conversation_repository.insert_one(conversation)
        if not created:
            raise InternalError("Failed to create conversation")

        loaded = await self.conversation_repository.get_with_participants(created.id)
        return await self._to_response_dto(loaded)

    async def get_user_conversations(self, user_id: Optional[UUID]) -> List[ConversationResponseDTO]:
        """All conversations of a user, most recent activity first"""
        user_id = require_identity(user_id)
        conversations = await self.conversation_repository.get_user_conversations(user_id)
        return [await self._to_response_dto(conversation) for conversation in conversations]

    async def _to_response_dto(self, conversation: Conversation) -> ConversationResponseDTO:
        last_message: Optional[Message] = await self.message_repository.get_last_message(conversation.id)

        return ConversationResponseDTO(
            id=conversation.id,
            created_at=conversation.created_at,
            updated_at=conversation.updated_at,
            participants=[
                UserSummaryDTO.model_validate(participant)
                for participant in conversation.participants
            ],
            last_message=(
                MessageService.to_response_dto(last_message, last_message.sender)
                if last_message else None
            )
        )
