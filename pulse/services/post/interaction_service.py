import uuid
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from pulse.models.comment import Comment
from pulse.repositories.comment_repository import CommentRepository
from pulse.repositories.post_repository import PostRepository
from pulse.schemas.comment import CommentCreateDTO, CommentResponseDTO
from pulse.schemas.post import LikeResponseDTO
from pulse.schemas.user import UserSummaryDTO
from pulse.utils.exceptions import InternalError, NotFoundError, ValidationFailedError
from pulse.utils.identity import require_identity


class InteractionService:
    """Likes and comments on posts"""

    def __init__(self, db: AsyncSession):
        self.post_repository = PostRepository(db)
        self.comment_repository = CommentRepository(db)

    async def toggle_like(self, post_id: uuid.UUID, user_id: Optional[uuid.UUID]) -> LikeResponseDTO:
        """Toggle like on a post (like if not liked, unlike if liked)"""
        liker_id = require_identity(user_id)
        await self._ensure_post_exists(post_id)

        is_liked = await self.post_repository.toggle_like(liker_id, post_id)
        likes_count = await self.post_repository.count_likes_by_post(post_id)

        return LikeResponseDTO(
            post_id=post_id,
            user_id=liker_id,
            liked=is_liked,
            likes_count=likes_count
        )

    async def add_comment(
        self,
        post_id: uuid.UUID,
        comment_data: CommentCreateDTO,
        user_id: Optional[uuid.UUID]
    ) -> CommentResponseDTO:
        author_id = require_identity(user_id)

        content = comment_data.content.strip()
        if not content:
            raise ValidationFailedError("Comment must not be empty", field="content")

        await self._ensure_post_exists(post_id)

        created_comment = await self.comment_repository.insert_one(
            Comment(content=content, post_id=post_id, author_id=author_id)
        )
        if not created_comment:
            raise InternalError("Error creating comment")

        comment = await self.comment_repository.find_with_author(created_comment.id)
        return self._to_response_dto(comment)

    async def get_comments(self, post_id: uuid.UUID) -> List[CommentResponseDTO]:
        await self._ensure_post_exists(post_id)
        comments = await self.comment_repository.get_post_comments(post_id)
        return [self._to_response_dto(comment) for comment in comments]

    async def _ensure_post_exists(self, post_id: uuid.UUID) -> None:
        if not await self.post_repository.exists(post_id):
            raise NotFoundError("Post not found")

    @staticmethod
    def _to_response_dto(comment: Comment) -> CommentResponseDTO:
        return CommentResponseDTO(
            id=comment.id,
            post_id=comment.post_id,
            content=comment.content,
            created_at=comment.created_at,
            author=UserSummaryDTO.model_validate(comment.author)
        )
