"""Unit of Work Interface

Transaction boundary shared by the repositories of one request.
"""

from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    """
    Abstract unit of work

    Use cases call commit() once all writes of an operation are staged,
    and rollback() on any failure so nothing is persisted partially.
    """

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
