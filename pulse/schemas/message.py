from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from pulse.schemas.user import UserSummaryDTO


class MessageCreateDTO(BaseModel):
    content: str = Field(max_length=10000)


class MessageResponseDTO(BaseModel):
    id: UUID
    content: str
    created_at: datetime
    conversation_id: UUID
    sender: UserSummaryDTO

    model_config = ConfigDict(from_attributes=True)
