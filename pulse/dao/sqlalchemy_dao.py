import uuid
from typing import Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pulse.dao.base_dao import BaseDAO
from pulse.logger import logger

T = TypeVar("T")


class SQLAlchemyDAO(BaseDAO, Generic[T]):
    """Single-row access for one mapped model.

    Reads let storage errors propagate. Writes commit on their own, roll
    back on failure and report it as ``None`` / ``False``.
    """

    def __init__(self, model: type[T], db: AsyncSession):
        self.model = model
        self.db = db

    @property
    def _name(self) -> str:
        return self.model.__name__

    async def find_by_id(self, _id: uuid.UUID) -> T | None:
        result = await self.db.execute(select(self.model).where(self.model.id == _id))
        return result.scalars().first()

    async def find_one_or_none(self, **filter_by) -> T | None:
        result = await self.db.execute(select(self.model).filter_by(**filter_by))
        return result.scalar_one_or_none()

    async def exists(self, _id: uuid.UUID) -> bool:
        result = await self.db.execute(
            select(self.model.id).where(self.model.id == _id).limit(1)
        )
        return result.scalar() is not None

    async def insert_one(self, obj: T) -> T | None:
        self.db.add(obj)
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Could not insert {self._name}: {e}")
            return None

        await self.db.refresh(obj)
        logger.info(f"{self._name} {obj.id} created")
        return obj

    async def delete_one(self, _id: uuid.UUID) -> bool:
        obj = await self.db.get(self.model, _id)
        if obj is None:
            logger.warning(f"{self._name} {_id} not found, nothing deleted")
            return False

        try:
            await self.db.delete(obj)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Could not delete {self._name} {_id}: {e}")
            return False

        logger.info(f"{self._name} {_id} deleted")
        return True
