"""Client API Routes

FastAPI routes for applying transactions and reading extracts.
"""

from fastapi import APIRouter, Depends, Path, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.transaction_request import TransactionRequestSchema
from src.api.schemas.client_response import ExtractResponseSchema, TransactionResponseSchema
from src.app.services.client_lock import ClientLockRegistry
from src.app.use_cases.ledger import (
    ApplyTransaction,
    ApplyTransactionCommandDTO,
    GetExtract,
    LedgerErrorCode,
)
from src.adapter.repositories.client_repository import SqlAlchemyClientRepository
from src.adapter.repositories.transaction_repository import SqlAlchemyTransactionRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_client_locks, get_extract_size, get_session
from src.api.error import ClientError
from libs.result import Error

router = APIRouter(prefix="/clientes", tags=["Clients"])

_NOT_FOUND_RESPONSE = {
    "description": "Client not found",
    "content": {
        "application/json": {
            "example": {
                "error": {
                    "code": "CLIENT_NOT_FOUND",
                    "message": "Client with id 6 not found"
                }
            }
        }
    }
}


def _raise_client_error(error: Error) -> None:
    if error.code == LedgerErrorCode.CLIENT_NOT_FOUND:
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    if error.code in (LedgerErrorCode.INSUFFICIENT_LIMIT, LedgerErrorCode.INVALID_DESCRIPTION):
        raise ClientError(error, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)
    if error.code == LedgerErrorCode.STORAGE_FAILURE:
        raise ClientError(error, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    raise ClientError(error)


@router.post(
    "/{client_id}/transacoes",
    response_model=TransactionResponseSchema,
    status_code=status.HTTP_200_OK,
    responses={
        404: _NOT_FOUND_RESPONSE,
        422: {
            "description": "Not enough limit or invalid request",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INSUFFICIENT_LIMIT",
                            "message": "Not enough limit to complete this transaction"
                        }
                    }
                }
            }
        }
    }
)
async def create_transaction(
    request: TransactionRequestSchema,
    client_id: int = Path(..., gt=0),
    session: AsyncSession = Depends(get_session),
    client_locks: ClientLockRegistry = Depends(get_client_locks),
):
    """
    Apply a credit or debit to a client's balance.

    **Request body:**
    - `valor` (required): positive integer
    - `tipo` (required): `c` (credit) or `d` (debit)
    - `descricao` (required): 1 to 10 characters

    **Returns:**
    - 200: `{"limite": ..., "saldo": ...}` after the transaction
    - 404: Client not found
    - 422: Debit would exceed the limit, or invalid request
    """
    uow = SqlAlchemyUnitOfWork(session)
    client_repo = SqlAlchemyClientRepository(session)
    transaction_repo = SqlAlchemyTransactionRepository(session)

    command = ApplyTransactionCommandDTO(
        client_id=client_id,
        value=request.value,
        kind=request.kind,
        description=request.description,
    )

    use_case = ApplyTransaction(uow, client_repo, transaction_repo, client_locks)
    result = await use_case.execute(command)

    if result.is_err():
        _raise_client_error(result.error)

    return TransactionResponseSchema.from_dto(result.value)


@router.get(
    "/{client_id}/extrato",
    response_model=ExtractResponseSchema,
    status_code=status.HTTP_200_OK,
    responses={404: _NOT_FOUND_RESPONSE}
)
async def get_extract(
    client_id: int = Path(..., gt=0),
    session: AsyncSession = Depends(get_session),
    extract_size: int = Depends(get_extract_size),
):
    """
    Get current balance and latest transactions of a client.

    **Returns:**
    - 200: balance, limit, extract time and up to 10 transactions, newest first
    - 404: Client not found
    """
    uow = SqlAlchemyUnitOfWork(session)
    client_repo = SqlAlchemyClientRepository(session)
    transaction_repo = SqlAlchemyTransactionRepository(session)

    use_case = GetExtract(uow, client_repo, transaction_repo, size=extract_size)
    result = await use_case.execute(client_id)

    if result.is_err():
        _raise_client_error(result.error)

    return ExtractResponseSchema.from_dto(result.value)
