from .base import BaseModel
from .client import Client
from .transaction import Transaction, TransactionKind, DESCRIPTION_MAX_LENGTH

__all__ = [
    "BaseModel",
    "Client",
    "Transaction",
    "TransactionKind",
    "DESCRIPTION_MAX_LENGTH",
]
