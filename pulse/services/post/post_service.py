import uuid
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from pulse.models.post import Post
from pulse.repositories.post_repository import PostRepository, PostRow
from pulse.schemas.post import PostCreateDTO, PostResponseDTO
from pulse.schemas.user import UserSummaryDTO
from pulse.utils.exceptions import (
    ForbiddenError,
    InternalError,
    NotFoundError,
    ValidationFailedError,
)
from pulse.utils.identity import require_identity


class PostService:
    def __init__(self, db: AsyncSession):
        self.post_repository = PostRepository(db)

    async def create_post(self, post_data: PostCreateDTO, user_id: Optional[uuid.UUID]) -> PostResponseDTO:
        """Create new post"""
        author_id = require_identity(user_id)

        content = post_data.content.strip()
        if not content:
            raise ValidationFailedError("Post content must not be empty", field="content")

        new_post = Post(
            content=content,
            image_url=post_data.image_url,
            user_id=author_id
        )

        created_post = await self.post_repository.insert_one(new_post)
        if not created_post:
            raise InternalError("Error creating post")

        return await self.get_post_by_id(created_post.id, author_id)

    async def get_post_by_id(self, post_id: uuid.UUID, current_user_id: Optional[uuid.UUID] = None) -> PostResponseDTO:
        row = await self.post_repository.find_view_by_id(post_id, current_user_id)
        if not row:
            raise NotFoundError("Post not found")

        return self._row_to_response_dto(row)

    async def get_posts(
        self,
        current_user_id: Optional[uuid.UUID] = None,
        author_id: Optional[uuid.UUID] = None
    ) -> List[PostResponseDTO]:
        """Newest posts first, optionally only those of one author"""
        rows = await self.post_repository.find_views(current_user_id, author_id)
        return [self._row_to_response_dto(row) for row in rows]

    async def delete_post(self, post_id: uuid.UUID, user_id: Optional[uuid.UUID]) -> None:
        requester_id = require_identity(user_id)

        post = await self.post_repository.find_by_id(post_id)
        if not post:
            raise NotFoundError("Post not found")

        if post.user_id != requester_id:
            raise ForbiddenError("No permission to delete this post")

        success = await self.post_repository.delete_with_children(post_id)
        if not success:
            raise InternalError("Error deleting post")

    @staticmethod
    def _row_to_response_dto(row: PostRow) -> PostResponseDTO:
        post, likes_count, comments_count, is_liked = row
        return PostResponseDTO(
            id=post.id,
            content=post.content,
            image_url=post.image_url,
            created_at=post.created_at,
            user_id=post.user_id,
            author=UserSummaryDTO.model_validate(post.user),
            likes_count=likes_count or 0,
            comments_count=comments_count or 0,
            is_liked=bool(is_liked)
        )
