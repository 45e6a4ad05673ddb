import uuid
from datetime import datetime
from typing import TYPE_CHECKING

import bcrypt
from sqlalchemy import UUID, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from . import Base, utcnow
from pulse.schemas.user import UserSignUpDTO

if TYPE_CHECKING:
    from .post import Post
    from .like import Like
    from .comment import Comment
    from .conversation import Conversation
    from .message import Message


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, nullable=False
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    image_url: Mapped[str | None] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    # Relationships
    posts: Mapped[list["Post"]] = relationship("Post", back_populates="user")
    likes: Mapped[list["Like"]] = relationship("Like", back_populates="user")
    comments: Mapped[list["Comment"]] = relationship("Comment", back_populates="author")
    conversations: Mapped[list["Conversation"]] = relationship(
        "Conversation", secondary="participants", back_populates="participants"
    )
    messages: Mapped[list["Message"]] = relationship("Message", back_populates="sender")

    def check_password(self, raw_password: str) -> bool:
        return bcrypt.checkpw(raw_password.encode(), self.hashed_password.encode())

    @staticmethod
    def create_user(user_data: UserSignUpDTO) -> "User":
        return User(
            name=user_data.name,
            email=user_data.email,
            hashed_password=bcrypt.hashpw(
                user_data.password.encode(), bcrypt.gensalt()
            ).decode(),
        )
