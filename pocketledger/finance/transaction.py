"""Mini README: Transaction record type and its JSON record codec.

Structure:
    * TransactionKind - the two kinds the summary understands.
    * Transaction - mutable dataclass holding id, kind, amount and note.

Kinds are stored as free text. ``TransactionKind`` is a ``str`` enum, so
its members compare equal to the plain strings read from disk, and any
other string is kept as-is.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping

from .errors import ParseError


class TransactionKind(str, Enum):
    """Transaction kinds counted by the summary."""

    INCOME = "Income"
    EXPENSE = "Expense"


@dataclass(slots=True)
class Transaction:
    """One recorded income or expense."""

    id: int
    kind: str
    amount: float
    note: str

    def render(self) -> str:
        """Return the four-line diagnostic listing for this transaction."""

        return (
            f"Transaction {self.id}\n"
            f"Type: {self.kind}\n"
            f"Amount: {self.amount:.2f}\n"
            f"Description: {self.note}\n"
        )

    def as_dict(self) -> Dict[str, object]:
        """Export the transaction using the persisted field names."""

        return {
            "id": self.id,
            "type": self.kind,
            "amount": self.amount,
            "description": self.note,
        }

    @classmethod
    def from_dict(cls, record: Mapping[str, object]) -> "Transaction":
        """Build a transaction from a persisted record.

        Missing fields fall back to zero values; fields holding the wrong
        JSON type raise ``ParseError``.
        """

        if not isinstance(record, Mapping):
            raise ParseError(f"Transaction record must be an object, got {type(record).__name__}")

        identifier = record.get("id", 0)
        kind = record.get("type", "")
        amount = record.get("amount", 0.0)
        note = record.get("description", "")

        # bool is an int subclass but never a valid id or amount.
        if isinstance(identifier, bool) or not isinstance(identifier, int):
            raise ParseError(f"Transaction id must be an integer, got {identifier!r}")
        if isinstance(amount, bool) or not isinstance(amount, (int, float)):
            raise ParseError(f"Transaction {identifier} amount must be a number, got {amount!r}")
        if not isinstance(kind, str):
            raise ParseError(f"Transaction {identifier} type must be a string, got {kind!r}")
        if not isinstance(note, str):
            raise ParseError(
                f"Transaction {identifier} description must be a string, got {note!r}"
            )
        return cls(id=identifier, kind=kind, amount=float(amount), note=note)
