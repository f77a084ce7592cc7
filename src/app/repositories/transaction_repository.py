"""Transaction Repository Interface

Defines the contract for the append-only transaction log.
"""

from abc import ABC, abstractmethod
from typing import List, NamedTuple
from src.domain.transaction import Transaction


class ClientBalanceCheck(NamedTuple):
    """Stored balance of a client next to the balance its log implies"""

    client_id: int
    balance: int
    expected_balance: int


class TransactionRepository(ABC):
    """
    Repository interface for Transaction persistence

    Transactions are immutable and append-only. The storage assigns each
    one a strictly increasing id that orders the log.
    """

    @abstractmethod
    async def create(self, transaction: Transaction) -> Transaction:
        """
        Append a transaction to the log

        Args:
            transaction: Transaction entity to persist

        Returns:
            Created Transaction with generated ID
        """
        pass

    @abstractmethod
    async def get_recent_by_client_id(self, client_id: int, limit: int) -> List[Transaction]:
        """
        Retrieve the most recent transactions of a client

        Args:
            client_id: Client identifier
            limit: Maximum number of transactions to return

        Returns:
            Transactions ordered newest first, at most `limit` of them
        """
        pass

    @abstractmethod
    async def get_balance_checks(self) -> List[ClientBalanceCheck]:
        """
        Compare every client balance with its log in a single query

        expected_balance is seed_balance plus credits minus debits; clients
        without transactions are included with their seed balance.

        Returns:
            One ClientBalanceCheck per client, ordered by client id
        """
        pass

    @abstractmethod
    async def count_by_client_id(self, client_id: int) -> int:
        """Number of transactions recorded for a client"""
        pass
