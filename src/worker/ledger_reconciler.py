"""Ledger Reconciliation Background Worker

Periodically checks every client balance against its transaction log.

Usage:
    python -m src.worker.ledger_reconciler --once
    python -m src.worker.ledger_reconciler --interval 3600
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.orm import sessionmaker

from config import ApplicationConfig
from src.adapter.database import create_engine, create_session_factory
from src.adapter.repositories.transaction_repository import SqlAlchemyTransactionRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.ledger import ReconcileLedger, ReconciliationResultDTO

logger = logging.getLogger(__name__)


class LedgerReconcilerWorker:
    """
    Runs ReconcileLedger on a fixed interval until stopped

    The worker owns the engine only when built through from_config.
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        interval_seconds: int = 86400,
        enabled: bool = True,
        engine: Optional[AsyncEngine] = None,
    ):
        self.session_factory = session_factory
        self.interval_seconds = interval_seconds
        self.enabled = enabled
        self.engine = engine
        self._stopped = asyncio.Event()

    @classmethod
    def from_config(cls, config=ApplicationConfig, db_uri: Optional[str] = None) -> "LedgerReconcilerWorker":
        engine = create_engine(db_uri or config.DB_URI)
        return cls(
            create_session_factory(engine),
            interval_seconds=config.RECONCILIATION_INTERVAL_SECONDS,
            enabled=config.RECONCILIATION_ENABLED,
            engine=engine,
        )

    async def run_once(self) -> Optional[ReconciliationResultDTO]:
        """
        Reconcile every client once

        Returns:
            The reconciliation result, or None when reconciliation is disabled

        Raises:
            RuntimeError: If the ledger could not be read
        """
        if not self.enabled:
            logger.info("Ledger reconciliation is disabled, skipping")
            return None

        async with self.session_factory() as session:
            result = await ReconcileLedger(
                uow=SqlAlchemyUnitOfWork(session),
                transaction_repo=SqlAlchemyTransactionRepository(session),
            ).execute()

        if result.is_err():
            raise RuntimeError(f"Reconciliation failed: {result.error.reason}")
        return result.value

    async def run_forever(self) -> None:
        logger.info(f"Reconciling ledger every {self.interval_seconds}s")

        while not self._stopped.is_set():
            try:
                await self.run_once()
            except RuntimeError as e:
                logger.error(str(e))

            try:
                await asyncio.wait_for(self._stopped.wait(), timeout=self.interval_seconds)
            except asyncio.TimeoutError:
                pass

    def stop(self) -> None:
        self._stopped.set()

    async def shutdown(self) -> None:
        self.stop()
        if self.engine is not None:
            await self.engine.dispose()


async def _run(worker: LedgerReconcilerWorker, once: bool) -> int:
    try:
        if once:
            result = await worker.run_once()
            return 1 if result is not None and result.discrepancies else 0
        await worker.run_forever()
        return 0
    finally:
        await worker.shutdown()


def main(argv=None) -> int:
    """Exit status is 1 when a single run finds unbalanced clients"""
    parser = argparse.ArgumentParser(description="Check client balances against the transaction log")
    parser.add_argument("--once", action="store_true", help="Run once and exit")
    parser.add_argument("--interval", type=int, default=None, help="Seconds between runs")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=ApplicationConfig.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    worker = LedgerReconcilerWorker.from_config()
    if args.interval is not None:
        worker.interval_seconds = args.interval

    return asyncio.run(_run(worker, args.once))


if __name__ == "__main__":
    sys.exit(main())
