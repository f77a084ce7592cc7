"""ApplyTransaction Use Case

Applies a credit or debit to a client's balance, enforcing the debit limit.
The transaction record and the new balance are written in one storage
transaction while the client's mutation right is held.
"""

import logging
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.client_lock import ClientLockRegistry
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.transaction_repository import TransactionRepository
from src.domain.transaction import Transaction, DESCRIPTION_MAX_LENGTH, utcnow
from .dtos import ApplyTransactionCommandDTO, TransactionResultDTO
from .errors import LedgerErrorCode

logger = logging.getLogger(__name__)


class ApplyTransaction:
    """
    Use Case: Apply a transaction to a client account

    Business Rules:
    1. Description must have 1 to 10 characters (checked before touching state)
    2. Credits always succeed: balance + value
    3. Debits succeed only if balance - value >= -debit_limit
    4. Atomic updates: transaction and balance written in a single commit
    5. Per-client exclusion: concurrent applies for one client are serialized

    Flow:
    1. Validate description
    2. Acquire the client's mutation right
    3. Get client with lock (SELECT FOR UPDATE)
    4. Compute and validate the new balance
    5. Append transaction record
    6. Update client balance
    7. Commit and release
    """

    def __init__(
        self,
        uow: UnitOfWork,
        client_repo: ClientRepository,
        transaction_repo: TransactionRepository,
        client_locks: ClientLockRegistry,
    ):
        self.uow = uow
        self.client_repo = client_repo
        self.transaction_repo = transaction_repo
        self.client_locks = client_locks

    async def execute(self, command: ApplyTransactionCommandDTO) -> Result[TransactionResultDTO]:
        """
        Execute transaction application

        Args:
            command: ApplyTransactionCommandDTO with client_id, value, kind, description

        Returns:
            Result[TransactionResultDTO]: Client limit and new balance, or error

        Errors:
            INVALID_DESCRIPTION: description empty, missing or too long
            CLIENT_NOT_FOUND: no client with this id
            INSUFFICIENT_LIMIT: debit would exceed the debit limit
            STORAGE_FAILURE: storage fault, nothing was written
        """
        if not self._is_valid_description(command.description):
            return Return.err(
                Error(
                    code=LedgerErrorCode.INVALID_DESCRIPTION.value,
                    message=f"Description must have between 1 and {DESCRIPTION_MAX_LENGTH} characters",
                    reason=f"description={command.description!r}",
                )
            )

        async with self.client_locks.acquire(command.client_id):
            try:
                async with self.uow:
                    return await self._apply(command)
            except (SQLAlchemyError, OSError) as e:
                logger.error(f"Failed to apply transaction for client {command.client_id}: {e}")
                return Return.err(
                    Error(
                        code=LedgerErrorCode.STORAGE_FAILURE.value,
                        message="Failed to apply transaction",
                        reason=str(e),
                    )
                )

    async def _apply(self, command: ApplyTransactionCommandDTO) -> Result[TransactionResultDTO]:
        # Step 1: Get client with pessimistic lock
        client = await self.client_repo.get_by_id(command.client_id, for_update=True)

        if not client:
            return Return.err(
                Error(
                    code=LedgerErrorCode.CLIENT_NOT_FOUND.value,
                    message=f"Client with id {command.client_id} not found",
                )
            )

        # Step 2: Validate against the limit read under the lock
        new_balance = client.balance_after(command.kind, command.value)

        if new_balance is None:
            logger.info(
                f"Rejected debit of {command.value} for client {client.id}: "
                f"balance={client.balance}, limit={client.debit_limit}"
            )
            return Return.err(
                Error(
                    code=LedgerErrorCode.INSUFFICIENT_LIMIT.value,
                    message="Not enough limit to complete this transaction",
                    reason=f"balance={client.balance}, limit={client.debit_limit}, value={command.value}",
                )
            )

        # Step 3: Append transaction and write balance in the same unit of work
        transaction = Transaction(
            client_id=client.id,
            value=command.value,
            kind=command.kind,
            description=command.description,
            created_at=utcnow(),
        )
        await self.transaction_repo.create(transaction)
        await self.client_repo.update_balance(client.id, new_balance)

        await self.uow.commit()

        return Return.ok(TransactionResultDTO(limit=client.debit_limit, balance=new_balance))

    @staticmethod
    def _is_valid_description(description: Optional[str]) -> bool:
        return isinstance(description, str) and 1 <= len(description) <= DESCRIPTION_MAX_LENGTH
