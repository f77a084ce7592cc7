"""Request schemas for Client API

Pydantic models for validating incoming HTTP requests. Field names follow
the public contract (valor, tipo, descricao); English names are accepted too.
"""

from typing import Optional
from pydantic import AliasChoices, BaseModel, Field
from src.domain.transaction import TransactionKind


class TransactionRequestSchema(BaseModel):
    """
    Request schema for applying a transaction

    Used for POST /clientes/{client_id}/transacoes endpoint. The description
    length is checked by the ApplyTransaction use case.
    """

    value: int = Field(
        ...,
        gt=0,
        strict=True,
        validation_alias=AliasChoices("valor", "value"),
        description="Transaction magnitude (positive integer)"
    )

    kind: TransactionKind = Field(
        ...,
        validation_alias=AliasChoices("tipo", "kind"),
        description="c = credit, d = debit"
    )

    description: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("descricao", "description"),
        description="Short label (1-10 characters)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "valor": 1000,
                "tipo": "c",
                "descricao": "descricao"
            }
        }
