from datetime import datetime
from typing import Optional, List
from uuid import UUID

from pydantic import BaseModel, Field

from pulse.schemas.message import MessageResponseDTO
from pulse.schemas.user import UserSummaryDTO


class ConversationCreateDTO(BaseModel):
    participant_ids: List[UUID] = Field(min_length=1)


class ConversationResponseDTO(BaseModel):
    id: UUID
    created_at: datetime
    updated_at: datetime
    participants: List[UserSummaryDTO]
    last_message: Optional[MessageResponseDTO] = None
