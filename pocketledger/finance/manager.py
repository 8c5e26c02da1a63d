"""Mini README: JSON-backed transaction store.

Structure:
    * Summary - named tuple of income total, expense total and net flow.
    * FinanceManager - owns the ordered transaction list, its file and lock.
    * create_manager - construction entry point used by the CLI and web app.

Every operation runs under one re-entrant lock, including the file write
that follows each mutation, so concurrent request handlers see a
consistent collection. The whole file is rewritten on every change; the
write is not atomic and a crash mid-write can leave a truncated file.
"""

from __future__ import annotations

import json
import threading
from dataclasses import replace
from pathlib import Path
from typing import Dict, List, NamedTuple, Optional, Union

from ..logging_utils import get_logger
from .errors import ParseError, PersistenceError, StorageError
from .transaction import Transaction, TransactionKind

LOGGER = get_logger(__name__)


class Summary(NamedTuple):
    """Aggregate totals over the current collection."""

    income_total: float
    expense_total: float
    net_flow: float

    def as_dict(self) -> Dict[str, float]:
        """Export the totals using the public API field names."""

        return {
            "IncomeTotal": self.income_total,
            "ExpenseTotal": self.expense_total,
            "NetFlow": self.net_flow,
        }


class FinanceManager:
    """Own the transaction collection and keep its JSON file in sync."""

    def __init__(self, file_path: Union[str, Path]) -> None:
        self._file_path = Path(file_path)
        self._transactions: List[Transaction] = []
        self._lock = threading.RLock()
        self.load_error: Optional[PersistenceError] = None
        try:
            self.load()
        except PersistenceError as error:
            # Keep serving with whatever state the failed load left behind.
            self.load_error = error
            LOGGER.error("Could not load transactions from %s: %s", self._file_path, error)
        LOGGER.debug(
            "Finance manager initialised with %s transactions from %s",
            len(self._transactions),
            self._file_path,
        )

    @property
    def file_path(self) -> Path:
        return self._file_path

    def load(self) -> None:
        """Replace the in-memory collection with the file's contents.

        A missing file is created (parent directories included) holding an
        empty list. A zero-byte file reads as an empty collection. Any
        failure, malformed contents included, raises and leaves the
        collection untouched.
        """

        with self._lock:
            if not self._file_path.exists():
                try:
                    self._file_path.parent.mkdir(parents=True, exist_ok=True)
                except OSError as error:
                    raise StorageError(
                        f"Error creating directory {self._file_path.parent}: {error}"
                    ) from error
                self._write([])
                self._transactions = []
                LOGGER.info("Created empty transactions file at %s", self._file_path)
                return

            try:
                raw = self._file_path.read_bytes()
            except OSError as error:
                raise StorageError(
                    f"Error reading transactions file {self._file_path}: {error}"
                ) from error

            if not raw:
                self._transactions = []
                LOGGER.info("Transactions file %s is empty", self._file_path)
                return

            self._transactions = self._decode(raw)
            LOGGER.info("Loaded %s transactions from %s", len(self._transactions), self._file_path)

    def _decode(self, raw: bytes) -> List[Transaction]:
        try:
            payload = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as error:
            raise ParseError(f"Error parsing transactions file {self._file_path}: {error}") from error
        if payload is None:
            return []
        if not isinstance(payload, list):
            raise ParseError(
                f"Transactions file {self._file_path} must hold a list, "
                f"got {type(payload).__name__}"
            )
        return [Transaction.from_dict(record) for record in payload]

    def save(self) -> None:
        """Overwrite the file with the full collection as indented JSON."""

        with self._lock:
            self._write(self._transactions)
            LOGGER.debug("Saved %s transactions to %s", len(self._transactions), self._file_path)

    def _write(self, transactions: List[Transaction]) -> None:
        data = json.dumps(
            [transaction.as_dict() for transaction in transactions],
            indent=2,
            ensure_ascii=False,
        )
        try:
            self._file_path.write_text(data, encoding="utf-8")
        except OSError as error:
            LOGGER.error("Failed to write %s: %s", self._file_path, error)
            raise StorageError(
                f"Error writing transactions to {self._file_path}: {error}"
            ) from error

    def next_id(self) -> int:
        """Return the id for the next transaction.

        The last record in insertion order is assumed to carry the highest
        id, which holds as long as records are only appended.
        """

        with self._lock:
            if not self._transactions:
                return 1
            return self._transactions[-1].id + 1

    def add(self, transaction: Transaction) -> None:
        """Append a transaction whose id the caller already assigned."""

        with self._lock:
            self._transactions.append(transaction)
            self.save()
        LOGGER.info("Added transaction %s (%s %.2f)", transaction.id, transaction.kind, transaction.amount)

    def record(self, kind: str, amount: float, note: str) -> Transaction:
        """Allocate the next id and add a new transaction in one locked step."""

        with self._lock:
            transaction = Transaction(id=self.next_id(), kind=kind, amount=amount, note=note)
            self.add(transaction)
        return transaction

    def edit(self, transaction_id: int, kind: str, amount: float, note: str) -> bool:
        """Overwrite kind, amount and note of the matching transaction.

        Returns ``False`` without touching the file when no transaction has
        the given id.
        """

        with self._lock:
            for transaction in self._transactions:
                if transaction.id == transaction_id:
                    transaction.kind = kind
                    transaction.amount = amount
                    transaction.note = note
                    self.save()
                    LOGGER.info("Edited transaction %s", transaction_id)
                    return True
        LOGGER.debug("Edit skipped, transaction %s not found", transaction_id)
        return False

    def delete(self, transaction_id: int) -> bool:
        """Remove the matching transaction, keeping the others in order."""

        with self._lock:
            for index, transaction in enumerate(self._transactions):
                if transaction.id == transaction_id:
                    del self._transactions[index]
                    self.save()
                    LOGGER.info("Deleted transaction %s", transaction_id)
                    return True
        LOGGER.debug("Delete skipped, transaction %s not found", transaction_id)
        return False

    def transactions(self) -> List[Transaction]:
        """Return copies of every transaction in insertion order."""

        with self._lock:
            return [replace(transaction) for transaction in self._transactions]

    def list_transactions(self) -> List[str]:
        """Render every transaction for diagnostic output."""

        with self._lock:
            rendered = [transaction.render() for transaction in self._transactions]
        for entry in rendered:
            LOGGER.debug("%s", entry.rstrip())
        return rendered

    def summarize(self) -> Summary:
        """Total income and expenses; other kinds count towards neither."""

        income_total = 0.0
        expense_total = 0.0
        with self._lock:
            for transaction in self._transactions:
                if transaction.kind == TransactionKind.INCOME:
                    income_total += transaction.amount
                elif transaction.kind == TransactionKind.EXPENSE:
                    expense_total += transaction.amount
        return Summary(income_total, expense_total, income_total - expense_total)


def create_manager(file_path: Union[str, Path]) -> FinanceManager:
    """Build a manager for ``file_path`` and perform the initial load."""

    return FinanceManager(file_path)
