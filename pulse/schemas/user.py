import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class UserSignUpDTO(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=8)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name must not be blank")
        return v.strip()


class UserLogInDTO(BaseModel):
    email: EmailStr
    password: str


class TokenResponseDTO(BaseModel):
    token: str


class UserSummaryDTO(BaseModel):
    """Public identity attached to posts, comments and messages"""
    id: uuid.UUID
    name: str
    email: str
    image_url: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ProfileResponseDTO(BaseModel):
    id: uuid.UUID
    name: str
    email: str
    image_url: str | None = None
    created_at: datetime
    posts_count: int = Field(default=0, description="Number of posts")
    followers_count: int = Field(default=0, description="Number of followers")
    following_count: int = Field(default=0, description="Number of followed users")
    is_following: bool = Field(default=False, description="Whether current user follows this user")


class FollowStatusDTO(BaseModel):
    user_id: uuid.UUID
    is_following: bool
    followers_count: int
