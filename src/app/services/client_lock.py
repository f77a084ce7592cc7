"""Per-client mutation right

Keyed table of asyncio locks. At most one task holds the mutation right of
a given client at a time; different clients never contend with each other.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict


class ClientLockRegistry:
    """
    Grants the exclusive mutation right for one client id

    Locks are created on first use and dropped once no task holds or waits
    for them, so the table only grows with the number of clients being
    mutated concurrently.

    Usage:
        locks = ClientLockRegistry()
        async with locks.acquire(client_id):
            ...  # read-check-write for client_id
    """

    def __init__(self):
        self._locks: Dict[int, asyncio.Lock] = {}
        self._users: Dict[int, int] = {}

    @asynccontextmanager
    async def acquire(self, client_id: int) -> AsyncIterator[None]:
        lock = self._locks.get(client_id)
        if lock is None:
            lock = self._locks[client_id] = asyncio.Lock()
        self._users[client_id] = self._users.get(client_id, 0) + 1

        try:
            async with lock:
                yield
        finally:
            self._users[client_id] -= 1
            if self._users[client_id] == 0:
                del self._users[client_id]
                del self._locks[client_id]

    def is_locked(self, client_id: int) -> bool:
        """True while some task holds the mutation right of client_id"""
        lock = self._locks.get(client_id)
        return lock is not None and lock.locked()

    def __len__(self) -> int:
        return len(self._locks)
