import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from config import ApplicationConfig
from src.adapter.database import create_engine, create_session_factory, create_tables, seed_clients
from src.adapter.repositories.client_repository import SqlAlchemyClientRepository
from src.adapter.repositories.transaction_repository import SqlAlchemyTransactionRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.client_lock import ClientLockRegistry
from src.app.use_cases.ledger import ApplyTransaction, GetExtract, ReconcileLedger

TEST_CLIENTS = [[1, 1000], [2, 2000], [3, 100000]]


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path):
    """Create a test database engine on a fresh SQLite file"""
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'ledger_test.db'}")
    await create_tables(engine)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Session used by tests to arrange and inspect database state"""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded(session_factory):
    """Provision the test clients with zero balance"""
    async with session_factory() as session:
        await seed_clients(session, TEST_CLIENTS)


@pytest.fixture
def client_locks():
    return ClientLockRegistry()


class LedgerHarness:
    """Builds use cases that each run on their own session, as API requests do"""

    def __init__(self, session_factory, client_locks: ClientLockRegistry):
        self.session_factory = session_factory
        self.client_locks = client_locks

    async def apply(self, command, client_locks: ClientLockRegistry = None):
        async with self.session_factory() as session:
            use_case = ApplyTransaction(
                SqlAlchemyUnitOfWork(session),
                SqlAlchemyClientRepository(session),
                SqlAlchemyTransactionRepository(session),
                client_locks or self.client_locks,
            )
            return await use_case.execute(command)

    async def extract(self, client_id: int, size: int = 10):
        async with self.session_factory() as session:
            use_case = GetExtract(
                SqlAlchemyUnitOfWork(session),
                SqlAlchemyClientRepository(session),
                SqlAlchemyTransactionRepository(session),
                size=size,
            )
            return await use_case.execute(client_id)

    async def reconcile(self):
        async with self.session_factory() as session:
            use_case = ReconcileLedger(
                SqlAlchemyUnitOfWork(session),
                SqlAlchemyTransactionRepository(session),
            )
            return await use_case.execute()


@pytest.fixture
def ledger(session_factory, client_locks, seeded):
    return LedgerHarness(session_factory, client_locks)


@pytest_asyncio.fixture
async def app(tmp_path):
    """API application bound to a fresh SQLite file"""
    from src.api.app import create_app

    test_config = type(
        "TestConfig",
        (ApplicationConfig,),
        {
            "DB_URI": f"sqlite+aiosqlite:///{tmp_path / 'api_test.db'}",
            "API_PREFIX": "",
            "SEED_CLIENTS": TEST_CLIENTS,
            "EXTRACT_SIZE": 10,
        },
    )
    app = create_app(test_config)

    # ASGITransport does not run the lifespan; provision explicitly
    await create_tables(app.state.engine)
    async with app.state.session_factory() as session:
        await seed_clients(session, test_config.SEED_CLIENTS)

    yield app

    await app.state.engine.dispose()


@pytest_asyncio.fixture
async def client(app):
    """HTTP client for the API"""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
