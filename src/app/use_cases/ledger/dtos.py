"""Data Transfer Objects for Ledger Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field
from src.domain.transaction import TransactionKind


class ApplyTransactionCommandDTO(BaseModel):
    """
    Command DTO for applying a transaction to a client

    Used as input to ApplyTransaction use case. The description is
    validated by the use case itself so malformed labels are reported
    as INVALID_DESCRIPTION.
    """

    client_id: int = Field(
        ...,
        gt=0,
        description="Client identifier"
    )

    value: int = Field(
        ...,
        gt=0,
        description="Transaction magnitude (must be > 0)"
    )

    kind: TransactionKind = Field(
        ...,
        description="Transaction direction (c = credit, d = debit)"
    )

    description: Optional[str] = Field(
        default=None,
        description="Short label (1-10 characters)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "client_id": 1,
                "value": 1000,
                "kind": "c",
                "description": "descricao",
            }
        }


class TransactionResultDTO(BaseModel):
    """
    Response DTO for ApplyTransaction

    Client state right after the transaction was committed.
    """

    limit: int = Field(
        ...,
        description="Client debit limit"
    )

    balance: int = Field(
        ...,
        description="Balance after the transaction"
    )


class TransactionDTO(BaseModel):
    """Single transaction in an extract"""

    value: int
    kind: TransactionKind
    description: str
    created_at: datetime


class ExtractBalanceDTO(BaseModel):
    """Balance section of an extract"""

    total: int = Field(
        ...,
        description="Current balance"
    )

    limit: int = Field(
        ...,
        description="Client debit limit"
    )

    as_of: datetime = Field(
        ...,
        description="Time the extract was read"
    )


class ExtractDTO(BaseModel):
    """
    Response DTO for GetExtract

    Returned by GetExtract use case.
    """

    balance: ExtractBalanceDTO
    transactions: List[TransactionDTO] = Field(
        default_factory=list,
        description="Most recent transactions, newest first"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "balance": {
                    "total": -9098,
                    "limit": 100000,
                    "as_of": "2024-01-17T02:34:41.217753Z"
                },
                "transactions": [
                    {
                        "value": 10,
                        "kind": "c",
                        "description": "descricao",
                        "created_at": "2024-01-17T02:34:38.543030Z"
                    }
                ]
            }
        }


class LedgerDiscrepancyDTO(BaseModel):
    """
    Discrepancy found during reconciliation

    calculated_balance is seed_balance plus the signed sum of the
    client's transactions.
    """

    client_id: int
    ledger_balance: int
    calculated_balance: int
    discrepancy: int


class ReconciliationResultDTO(BaseModel):
    """Result of a reconciliation run"""

    total_clients_checked: int
    discrepancies: List[LedgerDiscrepancyDTO] = Field(default_factory=list)
    reconciled_at: datetime

    @property
    def discrepancies_found(self) -> int:
        return len(self.discrepancies)
