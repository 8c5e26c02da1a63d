"""Mini README: Transaction store for PocketLedger.

The package exposes the ``Transaction`` record, the JSON-backed
``FinanceManager`` that owns every transaction, and the typed errors raised
when the backing file cannot be read, written or parsed.
"""

from .errors import ParseError, PersistenceError, StorageError
from .manager import FinanceManager, Summary, create_manager
from .transaction import Transaction, TransactionKind

__all__ = [
    "FinanceManager",
    "ParseError",
    "PersistenceError",
    "StorageError",
    "Summary",
    "Transaction",
    "TransactionKind",
    "create_manager",
]
