"""Mini README: Core package initializer for PocketLedger.

PocketLedger is a single-user finance tracker. The package keeps its public
surface small: the logging helper lives here, the transaction store lives in
``pocketledger.finance`` and the browser interface in
``pocketledger.interface``.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
