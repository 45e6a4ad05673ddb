import uuid
from typing import Optional

from sqlalchemy import select

from pulse.dao.sqlalchemy_dao import SQLAlchemyDAO
from pulse.models import Follow
from pulse.repositories.base_repository import BaseRepository


class FollowRepository(BaseRepository[Follow]):
    model = Follow
    dao_class = SQLAlchemyDAO

    async def find_follow(self, follower_id: uuid.UUID, following_id: uuid.UUID) -> Optional[Follow]:
        query = select(Follow).where(
            Follow.follower_id == follower_id,
            Follow.following_id == following_id
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()
