"""Mini README: Typed failures raised by the transaction store.

``StorageError`` wraps filesystem problems (creating the data directory,
reading or writing the transactions file). ``ParseError`` covers file
contents that are not a valid transaction list. Both share
``PersistenceError`` so callers can handle them together.
"""

from __future__ import annotations


class PersistenceError(Exception):
    """Base class for failures while loading or saving transactions."""


class StorageError(PersistenceError):
    """The transactions file or its directory could not be read or written."""


class ParseError(PersistenceError):
    """The transactions file exists but does not hold a transaction list."""
