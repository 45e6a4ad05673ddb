import uuid

import pytest
from sqlalchemy import func, select, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pulse.models import Follow, Like, Post, User
from pulse.repositories.post_repository import PostRepository
from pulse.schemas.comment import CommentCreateDTO
from pulse.schemas.post import PostCreateDTO
from pulse.schemas.user import UserSummaryDTO
from pulse.services.post.interaction_service import InteractionService
from pulse.services.post.post_service import PostService
from pulse.services.user.profile_service import ProfileService
from pulse.utils.exceptions import ForbiddenError, NotFoundError, UnauthorizedError


async def _like_rows(session: AsyncSession, post_id: uuid.UUID) -> int:
    result = await session.execute(select(func.count(Like.id)).where(Like.post_id == post_id))
    return result.scalar_one()


class TestPostRepository:
    """Repository-level checks for likes."""

    @pytest.mark.asyncio
    async def test_toggle_like_keeps_single_row(self, db_session: AsyncSession, test_post: Post, test_user_2: User):
        repository = PostRepository(db_session)

        states = [await repository.toggle_like(test_user_2.id, test_post.id) for _ in range(5)]

        assert states == [True, False, True, False, True]
        assert await _like_rows(db_session, test_post.id) == 1

    @pytest.mark.asyncio
    async def test_duplicate_like_rejected(self, db_session: AsyncSession, test_post: Post, test_user_2: User):
        db_session.add(Like(user_id=test_user_2.id, post_id=test_post.id))
        await db_session.commit()

        db_session.add(Like(user_id=test_user_2.id, post_id=test_post.id))
        with pytest.raises(IntegrityError):
            await db_session.commit()
        await db_session.rollback()

    @pytest.mark.asyncio
    async def test_like_on_vanished_post(self, db_session: AsyncSession, test_user_2: User):
        """A like whose post is gone fails on the foreign key and reports NotFound."""
        await db_session.execute(text("PRAGMA foreign_keys=ON"))
        repository = PostRepository(db_session)

        with pytest.raises(NotFoundError):
            await repository.toggle_like(test_user_2.id, uuid.uuid4())

        result = await db_session.execute(select(func.count(Like.id)))
        assert result.scalar_one() == 0


class TestPostService:
    """Service-level checks for post ownership and identity."""

    @pytest.mark.asyncio
    async def test_anonymous_create_rejected(self, db_session: AsyncSession):
        service = PostService(db_session)

        with pytest.raises(UnauthorizedError):
            await service.create_post(PostCreateDTO(content="hi"), None)

    @pytest.mark.asyncio
    async def test_delete_by_other_user(self, db_session: AsyncSession, test_post: Post, test_user_2: User):
        service = PostService(db_session)
        interactions = InteractionService(db_session)
        await interactions.toggle_like(test_post.id, test_user_2.id)
        await interactions.add_comment(test_post.id, CommentCreateDTO(content="first!"), test_user_2.id)

        with pytest.raises(ForbiddenError):
            await service.delete_post(test_post.id, test_user_2.id)

        post = await service.get_post_by_id(test_post.id, test_user_2.id)
        assert post.likes_count == 1
        assert post.comments_count == 1
        assert post.is_liked is True

    @pytest.mark.asyncio
    async def test_delete_missing_post(self, db_session: AsyncSession, test_user: User):
        service = PostService(db_session)

        with pytest.raises(NotFoundError):
            await service.delete_post(uuid.uuid4(), test_user.id)

    @pytest.mark.asyncio
    async def test_like_reflected_in_feed(self, db_session: AsyncSession, test_post: Post, test_user_2: User):
        await InteractionService(db_session).toggle_like(test_post.id, test_user_2.id)

        feed = await PostService(db_session).get_posts(test_user_2.id)

        assert len(feed) == 1
        assert feed[0].likes_count == 1
        assert feed[0].is_liked is True


class TestProfileService:
    """Service-level checks for the follow graph."""

    @pytest.mark.asyncio
    async def test_follow_creates_single_edge(self, db_session: AsyncSession, test_user: User, test_user_2: User):
        service = ProfileService(db_session)

        await service.follow(test_user.id, test_user_2.id)
        status = await service.follow(test_user.id, test_user_2.id)

        assert status.followers_count == 1
        result = await db_session.execute(select(func.count(Follow.id)))
        assert result.scalar_one() == 1


class TestSchemas:
    """ORM objects convert into response DTOs."""

    @pytest.mark.asyncio
    async def test_user_summary_from_orm(self, test_user: User):
        summary = UserSummaryDTO.model_validate(test_user)

        assert UserSummaryDTO.model_config["from_attributes"] is True
        assert summary.id == test_user.id
        assert summary.name == "Alice"
        assert summary.image_url is None
