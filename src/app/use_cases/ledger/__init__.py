"""Ledger domain use cases"""
from .apply_transaction import ApplyTransaction
from .get_extract import GetExtract, DEFAULT_EXTRACT_SIZE
from .reconcile_ledger import ReconcileLedger
from .errors import LedgerErrorCode
from .dtos import (
    ApplyTransactionCommandDTO,
    TransactionResultDTO,
    TransactionDTO,
    ExtractBalanceDTO,
    ExtractDTO,
    LedgerDiscrepancyDTO,
    ReconciliationResultDTO,
)

__all__ = [
    "ApplyTransaction",
    "GetExtract",
    "DEFAULT_EXTRACT_SIZE",
    "ReconcileLedger",
    "LedgerErrorCode",
    "ApplyTransactionCommandDTO",
    "TransactionResultDTO",
    "TransactionDTO",
    "ExtractBalanceDTO",
    "ExtractDTO",
    "LedgerDiscrepancyDTO",
    "ReconciliationResultDTO",
]
