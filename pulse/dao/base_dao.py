import uuid
from abc import ABC, abstractmethod
from typing import Any


class BaseDAO(ABC):
    @abstractmethod
    async def find_by_id(self, _id: uuid.UUID) -> Any | None:
        raise NotImplementedError

    @abstractmethod
    async def find_one_or_none(self, **filter_by) -> Any | None:
        raise NotImplementedError

    @abstractmethod
    async def exists(self, _id: uuid.UUID) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def insert_one(self, obj: Any) -> Any | None:
        raise NotImplementedError

    @abstractmethod
    async def delete_one(self, _id: uuid.UUID) -> bool:
        raise NotImplementedError
