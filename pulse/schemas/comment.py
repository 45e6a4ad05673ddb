import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from pulse.schemas.user import UserSummaryDTO


class CommentCreateDTO(BaseModel):
    content: str = Field(..., max_length=2000)


class CommentResponseDTO(BaseModel):
    id: uuid.UUID
    post_id: uuid.UUID
    content: str
    created_at: datetime
    author: UserSummaryDTO
