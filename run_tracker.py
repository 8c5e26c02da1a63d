"""Mini README: Entry point CLI for the PocketLedger finance tracker.

Commands:
    * run - start the FastAPI application with uvicorn.
    * list - print every stored transaction in its diagnostic form.
    * summary - print income, expense and net totals.

Settings (transactions file, host, port, log level) come from
``POCKETLEDGER_`` environment variables; command options override them.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
import uvicorn

from pocketledger.configuration import get_settings
from pocketledger.finance import create_manager
from pocketledger.logging_utils import configure_root_logger

cli = typer.Typer(help="Run and inspect the PocketLedger finance tracker.")


def _should_reload(environment: str, production: bool) -> bool:
    """Auto-reload only for development runs that did not ask for production."""

    return not production and environment.strip().lower() == "development"


def _resolve_file(file: Optional[Path]) -> Path:
    return file.expanduser() if file else get_settings().transactions_file


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload in any environment)."
    ),
) -> None:
    """Start the web interface using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level)

    # Browsers cannot open the 0.0.0.0 sentinel, so point them at localhost.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting PocketLedger on {effective_host}:{effective_port} "
        f"using {settings.transactions_file}.\n"
        f"Open your browser at http://{browser_host}:{effective_port}"
    )
    uvicorn.run(
        "pocketledger.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=_should_reload(settings.environment, production),
    )


@cli.command("list")
def list_command(
    file: Optional[Path] = typer.Option(None, help="Transactions file to read."),
) -> None:
    """Print every transaction."""

    configure_root_logger(get_settings().log_level)
    manager = create_manager(_resolve_file(file))
    if manager.load_error is not None:
        typer.echo(f"Warning: {manager.load_error}", err=True)
    for entry in manager.list_transactions():
        typer.echo(entry)


@cli.command()
def summary(
    file: Optional[Path] = typer.Option(None, help="Transactions file to read."),
) -> None:
    """Print income, expense and net totals."""

    configure_root_logger(get_settings().log_level)
    manager = create_manager(_resolve_file(file))
    if manager.load_error is not None:
        typer.echo(f"Warning: {manager.load_error}", err=True)
    totals = manager.summarize()
    typer.echo(f"Income: {totals.income_total:.2f}")
    typer.echo(f"Expense: {totals.expense_total:.2f}")
    typer.echo(f"Net flow: {totals.net_flow:.2f}")


if __name__ == "__main__":
    cli()
