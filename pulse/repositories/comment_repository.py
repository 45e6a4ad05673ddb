import uuid
from typing import Optional
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.orm import joinedload

from pulse.dao.sqlalchemy_dao import SQLAlchemyDAO
from pulse.models import Comment
from pulse.repositories.base_repository import BaseRepository


class CommentRepository(BaseRepository[Comment]):
    model = Comment
    dao_class = SQLAlchemyDAO

    async def get_post_comments(self, post_id: uuid.UUID) -> Sequence[Comment]:
        """Comments of a post, oldest first"""
        query = (
            select(Comment)
            .where(Comment.post_id == post_id)
            .options(joinedload(Comment.author))
            .order_by(Comment.created_at.asc(), Comment.id.asc())
        )
        result = await self.session.execute(query)
        return result.scalars().all()

    async def find_with_author(self, comment_id: uuid.UUID) -> Optional[Comment]:
        query = (
            select(Comment)
            .where(Comment.id == comment_id)
            .options(joinedload(Comment.author))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()
