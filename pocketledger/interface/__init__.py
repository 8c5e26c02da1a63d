"""Mini README: Interactive interfaces for PocketLedger.

Exports the FastAPI application factory behind the browser view and the two
JSON endpoints.
"""

from .web_app import create_application

__all__ = ["create_application"]
