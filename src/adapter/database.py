"""Database engine, schema and provisioning helpers

Creates the async engine used by the API and workers, creates tables and
seeds the initial clients.
"""

import logging
from typing import Iterable, Sequence
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from src.domain import Client

logger = logging.getLogger(__name__)

# Execution option: open the SQLite transaction with BEGIN IMMEDIATE (write lock)
SQLITE_BEGIN_IMMEDIATE = "sqlite_begin_immediate"

SQLITE_BUSY_TIMEOUT_MS = 5000


def create_engine(db_uri: str, echo: bool = False) -> AsyncEngine:
    """
    Create the async engine

    On SQLite the driver's implicit transaction handling is replaced so that
    every unit of work runs inside a real BEGIN ... COMMIT. Reads then see a
    single WAL snapshot, and locked reads start with BEGIN IMMEDIATE.
    """
    engine = create_async_engine(db_uri, echo=echo, future=True)
    if engine.dialect.name == "sqlite":
        _configure_sqlite(engine)
    return engine


def _configure_sqlite(engine: AsyncEngine) -> None:
    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute(f"PRAGMA busy_timeout={SQLITE_BUSY_TIMEOUT_MS}")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        if conn.get_execution_options().get(SQLITE_BEGIN_IMMEDIATE):
            conn.exec_driver_sql("BEGIN IMMEDIATE")
        else:
            conn.exec_driver_sql("BEGIN")


def create_session_factory(engine: AsyncEngine) -> sessionmaker:
    return sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


async def create_tables(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def seed_clients(session: AsyncSession, clients: Iterable[Sequence[int]]) -> int:
    """
    Provision clients that do not exist yet

    Existing clients are left untouched, so seeding is idempotent.

    Args:
        session: Session to write with (committed on success)
        clients: (id, debit_limit) pairs

    Returns:
        Number of clients created
    """
    created = 0
    for client_id, debit_limit in clients:
        if await session.get(Client, client_id) is not None:
            continue
        session.add(Client(id=client_id, debit_limit=debit_limit, balance=0, seed_balance=0))
        created += 1

    await session.commit()
    logger.info(f"Seeded {created} clients")
    return created
