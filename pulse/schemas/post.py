import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from pulse.schemas.user import UserSummaryDTO


class PostCreateDTO(BaseModel):
    """DTO for creating a post"""
    content: str = Field(..., max_length=5000, description="Post text")
    image_url: Optional[str] = Field(None, max_length=2048, description="Image URL")

    @field_validator('image_url')
    @classmethod
    def validate_image_url(cls, v):
        # Blank image references are treated as absent
        if v is not None and not v.strip():
            return None
        return v.strip() if v else v


class PostResponseDTO(BaseModel):
    id: uuid.UUID
    content: str
    image_url: Optional[str] = None
    created_at: datetime
    user_id: uuid.UUID
    author: UserSummaryDTO
    likes_count: int = Field(default=0, description="Number of likes")
    comments_count: int = Field(default=0, description="Number of comments")
    is_liked: bool = Field(default=False, description="Whether current user liked this post")


class LikeResponseDTO(BaseModel):
    """DTO for like response"""
    post_id: uuid.UUID
    user_id: uuid.UUID
    liked: bool
    likes_count: int
