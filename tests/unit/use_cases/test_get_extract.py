"""Unit tests for GetExtract use case"""

import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock
from sqlalchemy.exc import OperationalError

from src.app.use_cases.ledger.get_extract import GetExtract, DEFAULT_EXTRACT_SIZE
from src.app.use_cases.ledger.errors import LedgerErrorCode
from src.domain.client import Client
from src.domain.transaction import Transaction, TransactionKind


@pytest.fixture
def mock_client_repo():
    return MagicMock()


@pytest.fixture
def mock_transaction_repo():
    return MagicMock()


@pytest.fixture
def extract_use_case(mock_uow, mock_client_repo, mock_transaction_repo):
    return GetExtract(
        uow=mock_uow,
        client_repo=mock_client_repo,
        transaction_repo=mock_transaction_repo,
    )


@pytest.fixture
def sample_transactions():
    """Three transactions, newest first"""
    base = datetime(2024, 1, 17, 2, 34, 38, tzinfo=timezone.utc)
    return [
        Transaction(id=3, client_id=1, value=30, kind=TransactionKind.DEBIT, description="third",
                    created_at=base + timedelta(seconds=2)),
        Transaction(id=2, client_id=1, value=20, kind=TransactionKind.CREDIT, description="second",
                    created_at=base + timedelta(seconds=1)),
        Transaction(id=1, client_id=1, value=10, kind=TransactionKind.CREDIT, description="first",
                    created_at=base),
    ]


@pytest.mark.asyncio
class TestGetExtract:

    async def test_returns_balance_and_recent_transactions(
        self, extract_use_case, mock_client_repo, mock_transaction_repo, mock_uow, sample_transactions
    ):
        """
        Given: Client with balance 0 and three transactions
        When: The extract is read
        Then: Balance, limit, read time and transactions newest first are returned
        """
        # Arrange
        mock_client_repo.get_by_id = AsyncMock(
            return_value=Client(id=1, debit_limit=100000, balance=0)
        )
        mock_transaction_repo.get_recent_by_client_id = AsyncMock(return_value=sample_transactions)

        # Act
        before = datetime.now(timezone.utc)
        result = await extract_use_case.execute(1)

        # Assert
        assert result.is_ok()
        extract = result.value
        assert extract.balance.total == 0
        assert extract.balance.limit == 100000
        assert extract.balance.as_of >= before
        assert [t.description for t in extract.transactions] == ["third", "second", "first"]
        assert extract.transactions[0].kind == TransactionKind.DEBIT
        assert extract.transactions[0].value == 30

        mock_client_repo.get_by_id.assert_called_once_with(1, for_share=True)
        mock_transaction_repo.get_recent_by_client_id.assert_called_once_with(1, DEFAULT_EXTRACT_SIZE)
        mock_uow.__aenter__.assert_called_once()
        mock_uow.commit.assert_not_called()

    async def test_raw_kind_values_are_converted(
        self, extract_use_case, mock_client_repo, mock_transaction_repo
    ):
        mock_client_repo.get_by_id = AsyncMock(return_value=Client(id=1, debit_limit=10, balance=5))
        mock_transaction_repo.get_recent_by_client_id = AsyncMock(
            return_value=[
                Transaction(id=1, client_id=1, value=5, kind="c", description="raw",
                            created_at=datetime.now(timezone.utc))
            ]
        )

        result = await extract_use_case.execute(1)

        assert result.value.transactions[0].kind is TransactionKind.CREDIT

    async def test_custom_extract_size(self, mock_uow, mock_client_repo, mock_transaction_repo):
        mock_client_repo.get_by_id = AsyncMock(return_value=Client(id=1, debit_limit=10, balance=0))
        mock_transaction_repo.get_recent_by_client_id = AsyncMock(return_value=[])
        use_case = GetExtract(mock_uow, mock_client_repo, mock_transaction_repo, size=3)

        result = await use_case.execute(1)

        assert result.is_ok()
        assert result.value.transactions == []
        mock_transaction_repo.get_recent_by_client_id.assert_called_once_with(1, 3)

    async def test_client_not_found(self, extract_use_case, mock_client_repo, mock_transaction_repo):
        mock_client_repo.get_by_id = AsyncMock(return_value=None)
        mock_transaction_repo.get_recent_by_client_id = AsyncMock()

        result = await extract_use_case.execute(6)

        assert result.is_err()
        assert result.error.code == LedgerErrorCode.CLIENT_NOT_FOUND
        mock_transaction_repo.get_recent_by_client_id.assert_not_called()

    async def test_storage_failure(self, extract_use_case, mock_client_repo):
        mock_client_repo.get_by_id = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("database is locked"))
        )

        result = await extract_use_case.execute(1)

        assert result.is_err()
        assert result.error.code == LedgerErrorCode.STORAGE_FAILURE
