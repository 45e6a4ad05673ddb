from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Import all models to ensure they are registered
from .user import User
from .post import Post
from .like import Like
from .comment import Comment
from .follow import Follow
from .conversation import Conversation, participants
from .message import Message
