"""ReconcileLedger Use Case

Checks that every client balance equals its seed balance plus the signed
sum of its transaction log.
"""

import logging
from sqlalchemy.exc import SQLAlchemyError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.transaction_repository import TransactionRepository
from src.domain.transaction import utcnow
from .dtos import LedgerDiscrepancyDTO, ReconciliationResultDTO
from .errors import LedgerErrorCode

logger = logging.getLogger(__name__)


class ReconcileLedger:
    """
    Use Case: Reconcile client balances against the transaction log

    Read-only. All balances are compared in one storage transaction, which
    is rolled back when the unit of work exits.
    """

    def __init__(self, uow: UnitOfWork, transaction_repo: TransactionRepository):
        self.uow = uow
        self.transaction_repo = transaction_repo

    async def execute(self) -> Result[ReconciliationResultDTO]:
        """
        Execute ledger reconciliation

        Returns:
            Result[ReconciliationResultDTO]: Clients checked and any discrepancies

        Errors:
            STORAGE_FAILURE: storage fault while reading
        """
        try:
            async with self.uow:
                checks = await self.transaction_repo.get_balance_checks()
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Ledger reconciliation failed: {e}")
            return Return.err(
                Error(
                    code=LedgerErrorCode.STORAGE_FAILURE.value,
                    message="Failed to reconcile client ledger",
                    reason=str(e),
                )
            )

        discrepancies = [
            LedgerDiscrepancyDTO(
                client_id=check.client_id,
                ledger_balance=check.balance,
                calculated_balance=check.expected_balance,
                discrepancy=check.balance - check.expected_balance,
            )
            for check in checks
            if check.balance != check.expected_balance
        ]

        for d in discrepancies:
            logger.warning(
                f"Client {d.client_id} out of balance: "
                f"stored={d.ledger_balance}, from log={d.calculated_balance}"
            )
        logger.info(f"Reconciled {len(checks)} clients, {len(discrepancies)} out of balance")

        return Return.ok(
            ReconciliationResultDTO(
                total_clients_checked=len(checks),
                discrepancies=discrepancies,
                reconciled_at=utcnow(),
            )
        )
