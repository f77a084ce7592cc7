from .unit_of_work import UnitOfWork
from .client_lock import ClientLockRegistry

__all__ = [
    "UnitOfWork",
    "ClientLockRegistry",
]
