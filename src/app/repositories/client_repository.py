"""Client Repository Interface

Defines the contract for client account persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.client import Client


class ClientRepository(ABC):
    """
    Repository interface for Client persistence

    Reads used by the mutation path take a pessimistic row lock
    (SELECT FOR UPDATE) so balance checks always see committed state.
    """

    @abstractmethod
    async def get_by_id(
        self, client_id: int, for_update: bool = False, for_share: bool = False
    ) -> Optional[Client]:
        """
        Retrieve client by ID

        Args:
            client_id: Client identifier
            for_update: If True, lock the row exclusively until the unit of work ends
            for_share: If True, take a shared lock so no writer commits mid-read

        Returns:
            Client if found, None otherwise
        """
        pass

    @abstractmethod
    async def update_balance(self, client_id: int, new_balance: int) -> None:
        """
        Overwrite client balance

        The caller is responsible for validating new_balance against the
        debit limit before calling.

        Args:
            client_id: Client identifier
            new_balance: New balance value
        """
        pass
