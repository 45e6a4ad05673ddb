import uuid
from abc import ABC
from typing import Any, Generic, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from pulse.dao.base_dao import BaseDAO

T = TypeVar("T")


class BaseRepository(ABC, Generic[T]):
    model: type[T] = None
    dao_class = BaseDAO

    def __init__(self, db: AsyncSession):
        self.dao = self.dao_class(self.model, db)

    @property
    def session(self) -> AsyncSession:
        return self.dao.db

    async def find_by_id(self, _id: uuid.UUID) -> T | None:
        return await self.dao.find_by_id(_id)

    async def find_one_or_none(self, **filter_by) -> T | None:
        return await self.dao.find_one_or_none(**filter_by)

    async def exists(self, _id: uuid.UUID) -> bool:
        return await self.dao.exists(_id)

    async def insert_one(self, obj: Any) -> T | None:
        return await self.dao.insert_one(obj)

    async def delete_one(self, _id: uuid.UUID) -> bool:
        return await self.dao.delete_one(_id)
