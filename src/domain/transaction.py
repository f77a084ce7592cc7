"""Transaction Domain Entity

Immutable append-only record of one credit or debit applied to a client.
"""

from datetime import datetime, timezone
from typing import Optional
from enum import Enum
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, BigInteger, Integer, DateTime, String, CheckConstraint
from src.domain.base import BaseModel

DESCRIPTION_MAX_LENGTH = 10


class TransactionKind(str, Enum):
    """Transaction direction"""
    CREDIT = "c"    # Adds value to the balance
    DEBIT = "d"     # Subtracts value from the balance


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Transaction(BaseModel, table=True):
    """
    Transaction - Immutable ledger entry

    Domain Rules:
    - Transactions are immutable (append-only)
    - value is a positive magnitude; direction is carried by kind
    - description has 1 to 10 characters
    - id is a strictly increasing sequence number that orders the log
    - created_at is assigned while the client's mutation right is held
    """

    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint('value > 0', name='value_positive'),
        Index('ix_transactions_client_id_id', 'client_id', 'id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True),
        description="Sequence number (auto-increment)"
    )

    client_id: int = Field(
        sa_column=Column(BigInteger, ForeignKey("clients.id"), nullable=False),
        description="Owning client"
    )

    value: int = Field(
        sa_column=Column(BigInteger, nullable=False),
        description="Positive transaction magnitude"
    )

    kind: TransactionKind = Field(
        sa_column=Column(String(1), nullable=False),
        description="Transaction direction (c = credit, d = debit)"
    )

    description: str = Field(
        sa_column=Column(String(DESCRIPTION_MAX_LENGTH), nullable=False),
        description="Short label (1-10 characters)"
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Commit timestamp (immutable)"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "client_id": 1,
                "value": 10,
                "kind": "c",
                "description": "descricao",
                "created_at": "2024-01-17T02:34:38.543030Z"
            }
        }
