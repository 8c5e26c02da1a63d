"""Mini README: FastAPI-powered web interface for PocketLedger.

Structure:
    * create_application - application factory wiring routes and templates.
    * get_manager - dependency returning the store attached to the app.
    * _parse_id / _parse_amount - form field parsing with 400 responses.

The interface renders the transaction list, accepts add/edit/delete form
posts that redirect back to the list, and serves two read-only JSON
endpoints used by the summary button. The store is injected through
``app.state`` so tests can hand in a manager bound to a temporary file.
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import List, Optional

from fastapi import Depends, FastAPI, Form, HTTPException, Request, status
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from ..configuration import get_settings
from ..finance import FinanceManager, PersistenceError, TransactionKind, create_manager
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

KIND_CHOICES: List[str] = [kind.value for kind in TransactionKind]


def get_manager(request: Request) -> FinanceManager:
    """Return the finance manager attached to the running application."""

    return request.app.state.finance_manager


def _parse_id(value: str) -> int:
    try:
        return int(value.strip())
    except ValueError as error:
        raise HTTPException(status_code=400, detail="Invalid ID") from error


def _parse_amount(value: str) -> float:
    try:
        amount = float(value.strip())
    except ValueError as error:
        raise HTTPException(status_code=400, detail="Invalid amount") from error
    # inf and nan cannot be written as JSON.
    if not math.isfinite(amount):
        raise HTTPException(status_code=400, detail="Invalid amount")
    return amount


def _redirect_home() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)


def create_application(manager: Optional[FinanceManager] = None) -> FastAPI:
    """Create the FastAPI application around ``manager``.

    When no manager is supplied one is created for the configured
    transactions file, which is what the uvicorn factory entry point does.
    """

    settings = get_settings()
    if manager is None:
        manager = create_manager(settings.transactions_file)

    app = FastAPI(title="PocketLedger", version="0.1.0")
    app.state.finance_manager = manager
    templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
    static_directory = Path(__file__).parent / "static"
    app.mount("/static", StaticFiles(directory=str(static_directory)), name="static")

    @app.get("/", response_class=HTMLResponse)
    def index(request: Request, ledger: FinanceManager = Depends(get_manager)) -> HTMLResponse:
        """Render every transaction alongside the add form."""

        transactions = ledger.transactions()
        LOGGER.debug("Rendering index with %s transactions", len(transactions))
        return templates.TemplateResponse(
            request,
            "index.html",
            {
                "transactions": transactions,
                "kinds": KIND_CHOICES,
            },
        )

    @app.post("/add")
    def add_transaction(
        kind: str = Form("", alias="type"),
        amount: str = Form(""),
        description: str = Form(""),
        ledger: FinanceManager = Depends(get_manager),
    ) -> RedirectResponse:
        """Record a new transaction and return to the list."""

        parsed_amount = _parse_amount(amount)
        try:
            ledger.record(kind, parsed_amount, description)
        except PersistenceError as error:
            raise HTTPException(status_code=500, detail=str(error)) from error
        return _redirect_home()

    @app.get("/edit", response_class=HTMLResponse)
    def edit_form(request: Request) -> HTMLResponse:
        """Render the edit form."""

        return templates.TemplateResponse(request, "edit.html", {"kinds": KIND_CHOICES})

    @app.post("/edit")
    def edit_transaction(
        transaction_id: str = Form("", alias="id"),
        kind: str = Form("", alias="type"),
        amount: str = Form(""),
        description: str = Form(""),
        ledger: FinanceManager = Depends(get_manager),
    ) -> RedirectResponse:
        """Apply an edit; unknown ids are logged and otherwise ignored."""

        parsed_id = _parse_id(transaction_id)
        parsed_amount = _parse_amount(amount)
        try:
            found = ledger.edit(parsed_id, kind, parsed_amount, description)
        except PersistenceError as error:
            raise HTTPException(status_code=500, detail=str(error)) from error
        if not found:
            LOGGER.warning("Edit requested for unknown transaction %s", parsed_id)
        return _redirect_home()

    @app.get("/delete", response_class=HTMLResponse)
    def delete_form(request: Request) -> HTMLResponse:
        """Render the delete confirmation form."""

        return templates.TemplateResponse(request, "delete.html")

    @app.post("/delete")
    def delete_transaction(
        transaction_id: str = Form("", alias="id"),
        ledger: FinanceManager = Depends(get_manager),
    ) -> RedirectResponse:
        """Delete a transaction; unknown ids are logged and otherwise ignored."""

        parsed_id = _parse_id(transaction_id)
        try:
            found = ledger.delete(parsed_id)
        except PersistenceError as error:
            raise HTTPException(status_code=500, detail=str(error)) from error
        if not found:
            LOGGER.warning("Delete requested for unknown transaction %s", parsed_id)
        return _redirect_home()

    @app.get("/api/summary")
    def summary(ledger: FinanceManager = Depends(get_manager)) -> JSONResponse:
        """Return income, expense and net totals."""

        totals = ledger.summarize()
        LOGGER.debug(
            "Summary -> income: %.2f expense: %.2f net: %.2f",
            totals.income_total,
            totals.expense_total,
            totals.net_flow,
        )
        return JSONResponse(totals.as_dict())

    @app.get("/api/transactions")
    def api_transactions(ledger: FinanceManager = Depends(get_manager)) -> JSONResponse:
        """Return every transaction in its persisted shape."""

        return JSONResponse([transaction.as_dict() for transaction in ledger.transactions()])

    return app
