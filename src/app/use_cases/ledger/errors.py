"""Error codes returned by ledger use cases"""

from enum import Enum


class LedgerErrorCode(str, Enum):
    INVALID_DESCRIPTION = "INVALID_DESCRIPTION"    # Malformed input, rejected before any state access
    CLIENT_NOT_FOUND = "CLIENT_NOT_FOUND"
    INSUFFICIENT_LIMIT = "INSUFFICIENT_LIMIT"      # Debit would exceed the debit limit
    STORAGE_FAILURE = "STORAGE_FAILURE"            # I/O or durability fault, state unchanged
