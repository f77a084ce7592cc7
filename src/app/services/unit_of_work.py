from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    """
    Storage transaction boundary

    Everything written through repositories sharing the unit of work becomes
    visible on commit() or is discarded on rollback(). Leaving the async
    context without committing rolls back.
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
