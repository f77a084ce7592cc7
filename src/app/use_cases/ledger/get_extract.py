"""GetExtract Use Case

Retrieves a client's current balance and most recent transactions.
"""

import logging
from sqlalchemy.exc import SQLAlchemyError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.transaction_repository import TransactionRepository
from src.domain.transaction import TransactionKind, utcnow
from .dtos import ExtractDTO, ExtractBalanceDTO, TransactionDTO
from .errors import LedgerErrorCode

logger = logging.getLogger(__name__)

DEFAULT_EXTRACT_SIZE = 10


class GetExtract:
    """
    Get Extract Use Case

    Read-only operation. The client row and its transactions are read in a
    single storage transaction so the extract reflects either the state
    before or after any concurrent apply, never a mix of both. It does not
    take the client's mutation right.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        client_repo: ClientRepository,
        transaction_repo: TransactionRepository,
        size: int = DEFAULT_EXTRACT_SIZE,
    ):
        self.uow = uow
        self.client_repo = client_repo
        self.transaction_repo = transaction_repo
        self.size = size

    async def execute(self, client_id: int) -> Result[ExtractDTO]:
        """
        Execute get extract operation

        Args:
            client_id: The client identifier

        Returns:
            Result[ExtractDTO]: Balance and newest-first transactions, or error

        Errors:
            CLIENT_NOT_FOUND: no client with this id
            STORAGE_FAILURE: storage fault while reading
        """
        try:
            async with self.uow:
                client = await self.client_repo.get_by_id(client_id, for_share=True)

                if not client:
                    return Return.err(
                        Error(
                            code=LedgerErrorCode.CLIENT_NOT_FOUND.value,
                            message=f"Client with id {client_id} not found",
                        )
                    )

                transactions = await self.transaction_repo.get_recent_by_client_id(
                    client_id, self.size
                )

                return Return.ok(
                    ExtractDTO(
                        balance=ExtractBalanceDTO(
                            total=client.balance,
                            limit=client.debit_limit,
                            as_of=utcnow(),
                        ),
                        transactions=[
                            TransactionDTO(
                                value=txn.value,
                                kind=TransactionKind(txn.kind),
                                description=txn.description,
                                created_at=txn.created_at,
                            )
                            for txn in transactions
                        ],
                    )
                )
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Failed to read extract for client {client_id}: {e}")
            return Return.err(
                Error(
                    code=LedgerErrorCode.STORAGE_FAILURE.value,
                    message="Failed to read extract",
                    reason=str(e),
                )
            )
