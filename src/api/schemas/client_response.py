"""Response schemas for Client API

Serialized with the public contract field names.
"""

from datetime import datetime
from typing import List
from pydantic import BaseModel, Field
from src.app.use_cases.ledger.dtos import ExtractDTO, TransactionResultDTO
from src.domain.transaction import TransactionKind


class TransactionResponseSchema(BaseModel):
    limit: int = Field(..., alias="limite")
    balance: int = Field(..., alias="saldo")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "limite": 100000,
                "saldo": -9098
            }
        }

    @classmethod
    def from_dto(cls, dto: TransactionResultDTO) -> "TransactionResponseSchema":
        return cls(limit=dto.limit, balance=dto.balance)


class ExtractBalanceSchema(BaseModel):
    total: int = Field(..., alias="total")
    as_of: datetime = Field(..., alias="data_extrato")
    limit: int = Field(..., alias="limite")

    class Config:
        populate_by_name = True


class ExtractTransactionSchema(BaseModel):
    value: int = Field(..., alias="valor")
    kind: TransactionKind = Field(..., alias="tipo")
    description: str = Field(..., alias="descricao")
    created_at: datetime = Field(..., alias="realizada_em")

    class Config:
        populate_by_name = True


class ExtractResponseSchema(BaseModel):
    balance: ExtractBalanceSchema = Field(..., alias="saldo")
    transactions: List[ExtractTransactionSchema] = Field(default_factory=list, alias="ultimas_transacoes")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "saldo": {
                    "total": -9098,
                    "data_extrato": "2024-01-17T02:34:41.217753Z",
                    "limite": 100000
                },
                "ultimas_transacoes": [
                    {
                        "valor": 10,
                        "tipo": "c",
                        "descricao": "descricao",
                        "realizada_em": "2024-01-17T02:34:38.543030Z"
                    }
                ]
            }
        }

    @classmethod
    def from_dto(cls, dto: ExtractDTO) -> "ExtractResponseSchema":
        return cls(
            balance=ExtractBalanceSchema(
                total=dto.balance.total,
                as_of=dto.balance.as_of,
                limit=dto.balance.limit,
            ),
            transactions=[
                ExtractTransactionSchema(
                    value=txn.value,
                    kind=txn.kind,
                    description=txn.description,
                    created_at=txn.created_at,
                )
                for txn in dto.transactions
            ],
        )
