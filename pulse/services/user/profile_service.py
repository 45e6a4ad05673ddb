from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from pulse.models import Follow, User
from pulse.repositories.follow_repository import FollowRepository
from pulse.repositories.user_repository import UserRepository
from pulse.schemas.user import FollowStatusDTO, ProfileResponseDTO
from pulse.utils.exceptions import InternalError, NotFoundError, ValidationFailedError
from pulse.utils.identity import require_identity


class ProfileService:
    """Public profiles and the follow graph"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repository = UserRepository(session)
        self.follow_repository = FollowRepository(session)

    async def get_profile(self, user_id: UUID, viewer_id: Optional[UUID] = None) -> ProfileResponseDTO:
        user = await self._get_user_or_404(user_id)

        is_following = False
        if viewer_id is not None and viewer_id != user_id:
            is_following = await self.follow_repository.find_follow(viewer_id, user_id) is not None

        return ProfileResponseDTO(
            id=user.id,
            name=user.name,
            email=user.email,
            image_url=user.image_url,
            created_at=user.created_at,
            posts_count=await self.user_repository.count_posts(user_id),
            followers_count=await self.user_repository.count_followers(user_id),
            following_count=await self.user_repository.count_following(user_id),
            is_following=is_following
        )

    async def follow(self, user_id: UUID, follower_id: Optional[UUID]) -> FollowStatusDTO:
        follower_id = require_identity(follower_id)
        if follower_id == user_id:
            raise ValidationFailedError("You cannot follow yourself", field="user_id")

        await self._get_user_or_404(user_id)

        existing = await self.follow_repository.find_follow(follower_id, user_id)
        if not existing:
            created = await self.follow_repository.insert_one(
                Follow(follower_id=follower_id, following_id=user_id)
            )
            # A concurrent follow may have won the unique constraint
            if not created and not await self.follow_repository.find_follow(follower_id, user_id):
                raise InternalError("Error following user")

        return await self._follow_status(user_id, True)

    async def unfollow(self, user_id: UUID, follower_id: Optional[UUID]) -> FollowStatusDTO:
        follower_id = require_identity(follower_id)
        await self._get_user_or_404(user_id)

        existing = await self.follow_repository.find_follow(follower_id, user_id)
        if existing:
            success = await self.follow_repository.delete_one(existing.id)
            if not success:
                raise InternalError("Error unfollowing user")

        return await self._follow_status(user_id, False)

    async def _get_user_or_404(self, user_id: UUID) -> User:
        user = await self.user_repository.find_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    async def _follow_status(self, user_id: UUID, is_following: bool) -> FollowStatusDTO:
        return FollowStatusDTO(
            user_id=user_id,
            is_following=is_following,
            followers_count=await self.user_repository.count_followers(user_id)
        )
