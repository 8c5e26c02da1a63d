"""Mini README: Tests for settings, logging helpers and the launcher CLI."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from pocketledger.configuration import TrackerSettings, get_settings
from pocketledger.finance import Transaction, create_manager
from pocketledger.logging_utils import configure_root_logger, get_logger
from run_tracker import _should_reload, cli


def test_settings_read_prefixed_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("POCKETLEDGER_TRANSACTIONS_FILE", str(tmp_path / "ledger.json"))
    monkeypatch.setenv("POCKETLEDGER_INTERFACE_PORT", "9090")

    settings = TrackerSettings()

    assert settings.transactions_file == tmp_path / "ledger.json"
    assert settings.interface_port == 9090


def test_settings_expand_home_directory(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))

    settings = TrackerSettings(transactions_file="~/finance/transactions.json")

    assert settings.transactions_file == tmp_path / "finance" / "transactions.json"


def test_settings_reject_out_of_range_port() -> None:
    with pytest.raises(ValueError):
        TrackerSettings(interface_port=70000)


def test_configure_root_logger_accepts_level_names() -> None:
    configure_root_logger("debug")
    try:
        assert logging.getLogger().level == logging.DEBUG
        assert get_logger("pocketledger.tests").getEffectiveLevel() == logging.DEBUG
    finally:
        configure_root_logger(logging.INFO)


def test_configure_root_logger_rejects_unknown_level() -> None:
    with pytest.raises(ValueError):
        configure_root_logger("chatty")


def test_cli_list_and_summary(tmp_path: Path) -> None:
    path = tmp_path / "transactions.json"
    manager = create_manager(path)
    manager.add(Transaction(1, "Income", 500.0, "salary"))
    manager.add(Transaction(2, "Expense", 120.5, "groceries"))
    get_settings.cache_clear()
    runner = CliRunner()

    listed = runner.invoke(cli, ["list", "--file", str(path)])
    summary = runner.invoke(cli, ["summary", "--file", str(path)])

    assert listed.exit_code == 0
    assert "Transaction 2" in listed.output
    assert "Amount: 120.50" in listed.output
    assert summary.exit_code == 0
    assert "Net flow: 379.50" in summary.output


@pytest.mark.parametrize(
    ("environment", "production", "expected"),
    [
        ("development", False, True),
        ("Development", False, True),
        ("development", True, False),
        ("production", False, False),
    ],
)
def test_reload_follows_environment_and_production_flag(
    environment: str, production: bool, expected: bool
) -> None:
    assert _should_reload(environment, production) is expected


def test_settings_default_to_development(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("POCKETLEDGER_ENVIRONMENT", raising=False)

    assert TrackerSettings().environment == "development"
