"""Mini README: Tests for the FastAPI interface.

Each test builds the application around a manager bound to a temporary
file and drives it with ``TestClient``: form posts, redirects, input
parsing errors and the two JSON endpoints.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from pocketledger.finance import FinanceManager, StorageError, Transaction, create_manager
from pocketledger.interface import create_application


@pytest.fixture()
def manager(tmp_path: Path) -> FinanceManager:
    return create_manager(tmp_path / "transactions.json")


@pytest.fixture()
def client(manager: FinanceManager) -> TestClient:
    return TestClient(create_application(manager=manager))


def test_add_records_transaction_and_redirects(client: TestClient, manager: FinanceManager) -> None:
    response = client.post(
        "/add",
        data={"type": "Income", "amount": "500", "description": "salary"},
        follow_redirects=False,
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/"
    assert manager.transactions() == [Transaction(1, "Income", 500.0, "salary")]


def test_add_rejects_unparsable_amount(client: TestClient, manager: FinanceManager) -> None:
    response = client.post("/add", data={"type": "Income", "amount": "lots"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid amount"
    assert manager.transactions() == []


def test_add_rejects_non_finite_amount(client: TestClient) -> None:
    response = client.post("/add", data={"type": "Income", "amount": "inf"})

    assert response.status_code == 400


def test_edit_updates_existing_transaction(client: TestClient, manager: FinanceManager) -> None:
    manager.record("Expense", 20.0, "lunch")

    response = client.post(
        "/edit",
        data={"id": "1", "type": "Expense", "amount": "25.5", "description": "lunch with tip"},
        follow_redirects=False,
    )

    assert response.status_code == 303
    assert manager.transactions() == [Transaction(1, "Expense", 25.5, "lunch with tip")]


def test_edit_unknown_id_still_redirects(client: TestClient, manager: FinanceManager) -> None:
    manager.record("Expense", 20.0, "lunch")

    response = client.post(
        "/edit",
        data={"id": "9", "type": "Income", "amount": "1", "description": ""},
        follow_redirects=False,
    )

    assert response.status_code == 303
    assert manager.transactions() == [Transaction(1, "Expense", 20.0, "lunch")]


@pytest.mark.parametrize(
    ("form", "detail"),
    [
        ({"id": "one", "type": "Income", "amount": "1"}, "Invalid ID"),
        ({"id": "1", "type": "Income", "amount": "x"}, "Invalid amount"),
    ],
)
def test_edit_rejects_bad_input(client: TestClient, form: dict, detail: str) -> None:
    response = client.post("/edit", data=form)

    assert response.status_code == 400
    assert response.json()["detail"] == detail


def test_delete_removes_transaction(client: TestClient, manager: FinanceManager) -> None:
    manager.record("Income", 1.0, "a")
    manager.record("Income", 2.0, "b")

    response = client.post("/delete", data={"id": "1"}, follow_redirects=False)

    assert response.status_code == 303
    assert [transaction.id for transaction in manager.transactions()] == [2]


def test_delete_rejects_bad_id(client: TestClient) -> None:
    response = client.post("/delete", data={"id": ""})

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid ID"


def test_storage_failure_becomes_server_error(
    client: TestClient, manager: FinanceManager, monkeypatch: pytest.MonkeyPatch
) -> None:
    def failing_save() -> None:
        raise StorageError("disk full")

    monkeypatch.setattr(manager, "save", failing_save)

    response = client.post("/add", data={"type": "Income", "amount": "1"})

    assert response.status_code == 500
    assert response.json()["detail"] == "disk full"


def test_summary_endpoint_reports_totals(client: TestClient, manager: FinanceManager) -> None:
    manager.record("Income", 100.0, "")
    manager.record("Expense", 40.0, "")
    manager.record("Other", 1000.0, "")

    response = client.get("/api/summary")

    assert response.status_code == 200
    assert response.json() == {"IncomeTotal": 100.0, "ExpenseTotal": 40.0, "NetFlow": 60.0}


def test_transactions_endpoint_returns_persisted_shape(client: TestClient, manager: FinanceManager) -> None:
    manager.record("Income", 500.0, "salary")

    response = client.get("/api/transactions")

    assert response.json() == [
        {"id": 1, "type": "Income", "amount": 500.0, "description": "salary"}
    ]


def test_index_lists_transactions(client: TestClient, manager: FinanceManager) -> None:
    manager.record("Expense", 120.5, "groceries")

    response = client.get("/")

    assert response.status_code == 200
    assert "groceries" in response.text
    assert "120.50" in response.text


def test_form_pages_render(client: TestClient) -> None:
    edit_page = client.get("/edit")
    delete_page = client.get("/delete")

    assert edit_page.status_code == 200
    assert 'name="type"' in edit_page.text
    assert "Expense" in edit_page.text
    assert delete_page.status_code == 200
    assert 'action="/delete"' in delete_page.text
    assert "/static/style.css" in delete_page.text


def test_get_on_add_is_not_allowed(client: TestClient) -> None:
    assert client.get("/add").status_code == 405


def test_static_script_is_served(client: TestClient) -> None:
    response = client.get("/static/script.js")

    assert response.status_code == 200
    assert "/api/summary" in response.text
