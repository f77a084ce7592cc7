from .client_repository import SqlAlchemyClientRepository
from .transaction_repository import SqlAlchemyTransactionRepository

__all__ = [
    "SqlAlchemyClientRepository",
    "SqlAlchemyTransactionRepository",
]
