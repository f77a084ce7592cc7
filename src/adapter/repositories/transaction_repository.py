"""SQLAlchemy implementation of TransactionRepository

Provides the append-only transaction log.
"""

from typing import List
from sqlalchemy import case, func, select as sa_select
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.transaction_repository import ClientBalanceCheck, TransactionRepository
from src.domain.client import Client
from src.domain.transaction import Transaction, TransactionKind


class SqlAlchemyTransactionRepository(TransactionRepository):
    """
    SQLAlchemy implementation of TransactionRepository

    Features:
    - Immutable append-only transactions
    - Ordering by autoincrement id (insertion order)
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, transaction: Transaction) -> Transaction:
        """
        Append a transaction

        Args:
            transaction: Transaction entity to persist

        Returns:
            Created Transaction with generated ID
        """
        self.session.add(transaction)
        await self.session.flush()
        await self.session.refresh(transaction)
        return transaction

    async def get_recent_by_client_id(self, client_id: int, limit: int) -> List[Transaction]:
        """
        Retrieve the latest transactions of a client

        Args:
            client_id: Client identifier
            limit: Maximum number of transactions to return

        Returns:
            Transactions ordered by id DESC (most recent first)
        """
        stmt = (
            select(Transaction)
            .where(Transaction.client_id == client_id)
            .order_by(Transaction.id.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_balance_checks(self) -> List[ClientBalanceCheck]:
        """
        Stored vs. expected balance for every client

        Client LEFT JOIN transactions GROUP BY client, so the whole check is
        one statement over one snapshot.
        """
        signed_value = case(
            (Transaction.kind == TransactionKind.DEBIT.value, -Transaction.value),
            else_=Transaction.value,
        )
        expected_balance = Client.seed_balance + func.coalesce(func.sum(signed_value), 0)
        stmt = (
            sa_select(Client.id, Client.balance, expected_balance.label("expected_balance"))
            .select_from(Client)
            .outerjoin(Transaction, Transaction.client_id == Client.id)
            .group_by(Client.id, Client.balance, Client.seed_balance)
            .order_by(Client.id)
        )
        result = await self.session.execute(stmt)
        return [
            ClientBalanceCheck(client_id=row[0], balance=row[1], expected_balance=int(row[2]))
            for row in result.all()
        ]

    async def count_by_client_id(self, client_id: int) -> int:
        """Number of transactions recorded for a client"""
        stmt = sa_select(func.count()).select_from(Transaction).where(
            Transaction.client_id == client_id
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())
