import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, HTTPException, status

from pulse.dependencies import DBSessionDep, CurrentUserDep
from pulse.schemas.conversation import ConversationCreateDTO, ConversationResponseDTO
from pulse.schemas.message import MessageCreateDTO, MessageResponseDTO
from pulse.services.chat.conversation_service import ConversationService
from pulse.services.chat.message_service import MessageService
from pulse.utils.exceptions import InternalError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[ConversationResponseDTO])
async def get_user_conversations(db: DBSessionDep, current_user: CurrentUserDep):
    """Conversations of the current user with their last message"""
    try:
        conversation_service = ConversationService(db)
        return await conversation_service.get_user_conversations(current_user.id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error getting conversations: {e}")
        raise InternalError("Error getting conversations")


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ConversationResponseDTO)
async def create_conversation(
    conversation_data: ConversationCreateDTO,
    db: DBSessionDep,
    current_user: CurrentUserDep
):
    try:
        conversation_service = ConversationService(db)
        return await conversation_service.create_conversation(conversation_data, current_user.id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating conversation: {e}")
        raise InternalError("Error creating conversation")


@router.get("/{conversation_id}/messages", response_model=List[MessageResponseDTO])
async def get_conversation_messages(
    conversation_id: UUID,
    db: DBSessionDep,
    current_user: CurrentUserDep
):
    """Messages of a conversation, oldest first"""
    try:
        message_service = MessageService(db)
        return await message_service.get_conversation_messages(conversation_id, current_user.id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error getting messages: {e}")
        raise InternalError("Error getting messages")


@router.post(
    "/{conversation_id}/messages",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageResponseDTO
)
async def create_message(
    conversation_id: UUID,
    message_data: MessageCreateDTO,
    db: DBSessionDep,
    current_user: CurrentUserDep
):
    try:
        message_service = MessageService(db)
        return await message_service.create_message(conversation_id, message_data, current_user.id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error sending message: {e}")
        raise InternalError("Error sending message")
