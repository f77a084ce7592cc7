from fastapi import Request
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.services.client_lock import ClientLockRegistry


async def get_session(request: Request) -> AsyncSession:
    async with request.app.state.session_factory() as session:
        yield session


def get_client_locks(request: Request) -> ClientLockRegistry:
    return request.app.state.client_locks


def get_extract_size(request: Request) -> int:
    return request.app.state.config.EXTRACT_SIZE
