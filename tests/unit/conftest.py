import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.services.client_lock import ClientLockRegistry


@pytest.fixture
def mock_uow():
    """Mock unit of work usable as an async context manager"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def client_locks():
    """Fresh per-client lock registry"""
    return ClientLockRegistry()
