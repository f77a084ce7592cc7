"""SQLAlchemy implementation of ClientRepository

Provides persistence for Client entities with pessimistic locking support
to serialize concurrent balance mutations.
"""

from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.client_repository import ClientRepository
from src.domain.client import Client
from src.adapter.database import SQLITE_BEGIN_IMMEDIATE


class SqlAlchemyClientRepository(ClientRepository):
    """
    SQLAlchemy implementation of ClientRepository

    Features:
    - Pessimistic locking via SELECT FOR UPDATE (BEGIN IMMEDIATE on SQLite)
    - Shared locking via SELECT FOR SHARE for consistent reads
    - Balance updates flushed into the caller's unit of work
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(
        self, client_id: int, for_update: bool = False, for_share: bool = False
    ) -> Optional[Client]:
        """
        Retrieve client by ID with optional row-level locking

        Args:
            client_id: Client identifier
            for_update: If True, locks the row with SELECT FOR UPDATE
            for_share: If True, locks the row with SELECT FOR SHARE

        Returns:
            Client if found, None otherwise
        """
        if for_update:
            # Only takes effect when this is the first statement of the unit of work
            await self.session.connection(execution_options={SQLITE_BEGIN_IMMEDIATE: True})

        stmt = select(Client).where(Client.id == client_id)

        if for_update:
            stmt = stmt.with_for_update()
        elif for_share:
            stmt = stmt.with_for_update(read=True)

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update_balance(self, client_id: int, new_balance: int) -> None:
        """
        Update client balance

        Args:
            client_id: Client identifier
            new_balance: New balance value

        Note:
            Should be called within a unit of work with the client already locked
        """
        client = await self.session.get(Client, client_id)
        if client:
            client.balance = new_balance
            self.session.add(client)
            await self.session.flush()
