"""Unit tests for Client domain entity"""

import pytest
from src.domain.client import Client
from src.domain.transaction import TransactionKind


def make_client(balance: int, limit: int) -> Client:
    return Client(id=1, debit_limit=limit, balance=balance, seed_balance=0)


class TestClientCreation:
    """Test Client entity creation"""

    def test_create_client_with_valid_data(self):
        # Arrange & Act
        client = Client(id=1, debit_limit=100000, balance=0)

        # Assert
        assert client.id == 1
        assert client.debit_limit == 100000
        assert client.balance == 0
        assert client.seed_balance == 0

    def test_table_name(self):
        assert Client.__tablename__ == "clients"


class TestClientBalanceAfter:
    """Test balance computation for credits and debits"""

    def test_debit_within_limit_goes_negative(self):
        client = make_client(balance=0, limit=2000)

        assert client.balance_after(TransactionKind.DEBIT, 1000) == -1000

    def test_debit_from_positive_balance(self):
        client = make_client(balance=10000, limit=2000)

        assert client.balance_after(TransactionKind.DEBIT, 1000) == 9000

    def test_debit_beyond_limit_is_rejected(self):
        client = make_client(balance=0, limit=500)

        assert client.balance_after(TransactionKind.DEBIT, 1000) is None

    def test_debit_with_zero_limit_cannot_go_negative(self):
        client = make_client(balance=500, limit=0)

        assert client.balance_after(TransactionKind.DEBIT, 1000) is None
        assert client.balance_after(TransactionKind.DEBIT, 500) == 0

    def test_credit_on_negative_balance(self):
        client = make_client(balance=-1000, limit=2000)

        assert client.balance_after(TransactionKind.CREDIT, 1000) == 0

    def test_credit_ignores_limit(self):
        client = make_client(balance=0, limit=2000)

        assert client.balance_after(TransactionKind.CREDIT, 1000) == 1000

    @pytest.mark.parametrize(
        "balance,limit,value,expected",
        [
            (0, 1000, 1000, -1000),
            (0, 1000, 1001, None),
            (-400, 1000, 600, -1000),
            (-400, 1000, 601, None),
        ],
    )
    def test_limit_is_inclusive(self, balance, limit, value, expected):
        client = make_client(balance=balance, limit=limit)

        assert client.balance_after(TransactionKind.DEBIT, value) == expected

    def test_balance_after_does_not_mutate_client(self):
        client = make_client(balance=100, limit=100)

        client.balance_after(TransactionKind.DEBIT, 50)

        assert client.balance == 100

    def test_accepts_raw_kind_values(self):
        client = make_client(balance=0, limit=100)

        assert client.balance_after("d", 100) == -100
        assert client.balance_after("c", 100) == 100
