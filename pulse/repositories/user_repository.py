import uuid
from collections.abc import Sequence

from sqlalchemy import select, func

from pulse.dao.sqlalchemy_dao import SQLAlchemyDAO
from pulse.models import User, Post, Follow
from pulse.repositories.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User
    dao_class = SQLAlchemyDAO

    async def find_by_ids(self, user_ids: Sequence[uuid.UUID]) -> Sequence[User]:
        query = select(User).where(User.id.in_(list(user_ids)))
        result = await self.session.execute(query)
        return result.scalars().all()

    async def count_posts(self, user_id: uuid.UUID) -> int:
        query = select(func.count(Post.id)).where(Post.user_id == user_id)
        result = await self.session.execute(query)
        return result.scalar() or 0

    async def count_followers(self, user_id: uuid.UUID) -> int:
        query = select(func.count(Follow.id)).where(Follow.following_id == user_id)
        result = await self.session.execute(query)
        return result.scalar() or 0

    async def count_following(self, user_id: uuid.UUID) -> int:
        query = select(func.count(Follow.id)).where(Follow.follower_id == user_id)
        result = await self.session.execute(query)
        return result.scalar() or 0
