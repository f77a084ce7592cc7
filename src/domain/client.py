"""Client Domain Entity

Holds the debit limit and current balance of one client account.
Balance may go negative down to -debit_limit and is only changed by
applying Transactions.
"""

from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import CheckConstraint, BigInteger
from src.domain.base import BaseModel
from src.domain.transaction import TransactionKind


class Client(BaseModel, table=True):
    """
    Client - Account with a debit limit

    Domain Rules:
    - id is assigned at provisioning and never reassigned
    - debit_limit is non-negative and immutable after creation
    - balance >= -debit_limit at all times
    - seed_balance is the balance at provisioning (used by reconciliation)
    """

    __tablename__ = "clients"
    __table_args__ = (
        CheckConstraint('debit_limit >= 0', name='debit_limit_non_negative'),
        CheckConstraint('balance >= -debit_limit', name='balance_within_debit_limit'),
    )

    id: int = Field(
        sa_column=Column(BigInteger, primary_key=True, autoincrement=False),
        description="Client identifier (assigned at provisioning)"
    )

    debit_limit: int = Field(
        sa_column=Column(BigInteger, nullable=False),
        description="Maximum overdraft magnitude"
    )

    balance: int = Field(
        default=0,
        sa_column=Column(BigInteger, nullable=False, default=0),
        description="Current balance (>= -debit_limit)"
    )

    seed_balance: int = Field(
        default=0,
        sa_column=Column(BigInteger, nullable=False, default=0),
        description="Balance at provisioning time"
    )

    def balance_after(self, kind: TransactionKind, value: int) -> Optional[int]:
        """
        Compute the balance that applying a transaction would produce

        Args:
            kind: Credit or debit
            value: Positive magnitude of the transaction

        Returns:
            The new balance, or None if a debit would exceed the debit limit
        """
        if kind == TransactionKind.CREDIT:
            return self.balance + value

        new_balance = self.balance - value
        if new_balance < -self.debit_limit:
            return None
        return new_balance

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "debit_limit": 100000,
                "balance": -9098,
                "seed_balance": 0,
            }
        }
