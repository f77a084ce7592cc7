from .client_repository import ClientRepository
from .transaction_repository import ClientBalanceCheck, TransactionRepository

__all__ = [
    "ClientRepository",
    "ClientBalanceCheck",
    "TransactionRepository",
]
