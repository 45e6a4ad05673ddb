import uuid
from typing import Optional, Tuple
from collections.abc import Sequence

from sqlalchemy import select, func, delete, literal, Select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import joinedload

from pulse.dao.sqlalchemy_dao import SQLAlchemyDAO
from pulse.logger import logger
from pulse.models import Post, Like, Comment
from pulse.repositories.base_repository import BaseRepository
from pulse.utils.exceptions import InternalError, NotFoundError

# (post, likes_count, comments_count, is_liked)
PostRow = Tuple[Post, int, int, bool]


class PostRepository(BaseRepository[Post]):
    model = Post
    dao_class = SQLAlchemyDAO

    def _view_query(self, viewer_id: Optional[uuid.UUID]) -> Select:
        """Posts with author, like/comment counts and the viewer's like state"""
        likes_count = (
            select(func.count(Like.id))
            .where(Like.post_id == Post.id)
            .correlate(Post)
            .scalar_subquery()
        )
        comments_count = (
            select(func.count(Comment.id))
            .where(Comment.post_id == Post.id)
            .correlate(Post)
            .scalar_subquery()
        )
        if viewer_id is not None:
            is_liked = (
                select(Like.id)
                .where(Like.post_id == Post.id, Like.user_id == viewer_id)
                .correlate(Post)
                .exists()
            )
        else:
            is_liked = literal(False)

        return (
            select(
                Post,
                likes_count.label("likes_count"),
                comments_count.label("comments_count"),
                is_liked.label("is_liked"),
            )
            .options(joinedload(Post.user))
        )

    async def find_views(
        self,
        viewer_id: Optional[uuid.UUID],
        author_id: Optional[uuid.UUID] = None
    ) -> Sequence[PostRow]:
        query = self._view_query(viewer_id)
        if author_id is not None:
            query = query.where(Post.user_id == author_id)
        query = query.order_by(Post.created_at.desc(), Post.id.desc())

        result = await self.session.execute(query)
        return [tuple(row) for row in result.all()]

    async def find_view_by_id(self, post_id: uuid.UUID, viewer_id: Optional[uuid.UUID]) -> Optional[PostRow]:
        query = self._view_query(viewer_id).where(Post.id == post_id).execution_options(
            populate_existing=True
        )
        result = await self.session.execute(query)
        row = result.first()
        return tuple(row) if row else None

    async def delete_with_children(self, post_id: uuid.UUID) -> bool:
        """Delete a post together with its likes and comments in one transaction"""
        try:
            await self.session.execute(delete(Like).where(Like.post_id == post_id))
            await self.session.execute(delete(Comment).where(Comment.post_id == post_id))
            result = await self.session.execute(delete(Post).where(Post.id == post_id))
            await self.session.commit()
            logger.info(f"Deleted Post with ID: {post_id} and its likes/comments")
            return result.rowcount > 0
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error deleting Post {post_id}: {e}")
            return False

    # Likes
    async def count_likes_by_post(self, post_id: uuid.UUID) -> int:
        query = select(func.count(Like.id)).where(Like.post_id == post_id)
        result = await self.session.execute(query)
        return result.scalar() or 0

    async def toggle_like(self, user_id: uuid.UUID, post_id: uuid.UUID) -> bool:
        """Flip the like for a user-post pair and return the new state.

        The conditional delete and the insert run in the same transaction.
        If a concurrent request inserted the pair first, the unique
        constraint rejects our insert and the pair is reported as liked.
        A post deleted in the meantime raises NotFoundError.
        """
        try:
            result = await self.session.execute(
                delete(Like).where(
                    Like.user_id == user_id,
                    Like.post_id == post_id
                )
            )
            if result.rowcount > 0:
                await self.session.commit()
                logger.info(f"User {user_id} unliked Post {post_id}")
                return False

            self.session.add(Like(user_id=user_id, post_id=post_id))
            await self.session.commit()
            logger.info(f"User {user_id} liked Post {post_id}")
            return True
        except IntegrityError:
            await self.session.rollback()
            # The post may have been deleted since the caller checked it
            if not await self.exists(post_id):
                logger.warning(f"Post {post_id} vanished while User {user_id} liked it")
                raise NotFoundError("Post not found")
            logger.warning(f"Concurrent like for User {user_id} on Post {post_id}")
            return True
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error toggling like on Post {post_id}: {e}")
            raise InternalError("Error toggling like") from e
