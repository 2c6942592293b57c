import logging
from decimal import Decimal

from fastapi.testclient import TestClient

from ..core.dependencies import get_account_store
from ..main import app


def create_account(client: TestClient, first: str = "Ana", last: str = "Lee") -> dict:
    account_id = client.post("/account", json={"firstName": first, "lastName": last}).json()["id"]
    return client.get(f"/account/{account_id}").json()

def fund(client: TestClient, account: dict, amount: str) -> None:
    response = client.put(
        f"/account/{account['id']}",
        json={"balance": amount, "number": account["number"]},
    )
    assert response.status_code == 200

def balance_of(client: TestClient, account: dict) -> Decimal:
    return Decimal(client.get(f"/account/{account['id']}").json()["balance"])


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}

def test_create_and_get_account(client: TestClient) -> None:
    response = client.post("/account", json={"firstName": "Ana", "lastName": "Lee"})
    assert response.status_code == 201
    account_id = response.json()["id"]

    account = client.get(f"/account/{account_id}")
    assert account.status_code == 200
    body = account.json()
    assert body["id"] == account_id
    assert body["firstName"] == "Ana"
    assert body["lastName"] == "Lee"
    assert Decimal(body["balance"]) == Decimal("0")
    assert body["number"] > 0
    assert {"createdAt", "updatedAt"} <= body.keys()

def test_create_account_accepts_snake_case(client: TestClient) -> None:
    response = client.post("/account", json={"first_name": "Ana", "last_name": "Lee"})
    assert response.status_code == 201

def test_create_account_requires_names(client: TestClient) -> None:
    assert client.post("/account", json={"firstName": "", "lastName": "Lee"}).status_code == 400
    assert client.post("/account", json={"firstName": "Ana"}).status_code == 400
    assert client.post("/account", content="not json").status_code == 400

def test_list_accounts(client: TestClient) -> None:
    assert client.get("/account").status_code == 404

    ids = [client.post("/account", json={"firstName": "Ana", "lastName": str(i)}).json()["id"] for i in range(12)]

    response = client.get("/account")
    assert response.status_code == 200
    assert [account["id"] for account in response.json()] == sorted(ids)[:10]

def test_get_account_errors(client: TestClient) -> None:
    assert client.get("/account/12345").status_code == 404
    assert client.get("/account/abc").status_code == 400

def test_delete_account(client: TestClient) -> None:
    account = create_account(client)

    response = client.delete(f"/account/{account['id']}")
    assert response.status_code == 200
    assert response.json() == {"id": account["id"]}

    assert client.delete(f"/account/{account['id']}").status_code == 404
    assert client.get(f"/account/{account['id']}").status_code == 404

def test_update_balance(client: TestClient) -> None:
    account = create_account(client)

    response = client.put(
        f"/account/{account['id']}",
        json={"balance": "42.50", "number": account["number"]},
    )
    assert response.status_code == 200
    assert response.json() == {"id": account["id"]}
    assert balance_of(client, account) == Decimal("42.50")

def test_update_balance_validation(client: TestClient) -> None:
    account = create_account(client)
    fund(client, account, "10")
    url = f"/account/{account['id']}"

    assert client.put(url, json={"balance": -5, "number": account["number"]}).status_code == 400
    assert client.put(url, json={"balance": 5, "number": 0}).status_code == 400
    assert client.put(url, json={"balance": "1.234", "number": account["number"]}).status_code == 400
    assert client.put(url, json={"balance": 5, "number": account["number"] + 1}).status_code == 404
    assert client.put("/account/12345", json={"balance": 5, "number": account["number"]}).status_code == 404
    assert balance_of(client, account) == Decimal("10")

def test_transfer_moves_funds(client: TestClient) -> None:
    source = create_account(client, "Carol")
    dest = create_account(client, "Dave")
    fund(client, source, "50")
    fund(client, dest, "10")

    transfer = {"fromAccountNo": source["number"], "toAccountNo": dest["number"], "amount": 30}
    response = client.post("/transfer", json=transfer)
    assert response.status_code == 200
    assert response.json() == {"status": "success"}
    assert balance_of(client, source) == Decimal("20")
    assert balance_of(client, dest) == Decimal("40")

    again = client.post("/transfer", json=transfer)
    assert again.status_code == 409
    assert again.json()["detail"] == "Insufficient funds for transfer"
    assert balance_of(client, source) == Decimal("20")
    assert balance_of(client, dest) == Decimal("40")

def test_transfer_rejects_self_transfer(client: TestClient) -> None:
    account = create_account(client)
    fund(client, account, "50")

    response = client.post(
        "/transfer",
        json={"fromAccountNo": account["number"], "toAccountNo": account["number"], "amount": 10},
    )
    assert response.status_code == 400
    assert balance_of(client, account) == Decimal("50")

def test_transfer_rejects_non_positive_amounts(client: TestClient) -> None:
    source = create_account(client, "Carol")
    dest = create_account(client, "Dave")
    fund(client, source, "50")

    for amount in (0, -10, "0.001"):
        response = client.post(
            "/transfer",
            json={"fromAccountNo": source["number"], "toAccountNo": dest["number"], "amount": amount},
        )
        assert response.status_code == 400
    assert balance_of(client, source) == Decimal("50")

def test_transfer_to_unknown_account(client: TestClient) -> None:
    source = create_account(client)
    fund(client, source, "50")
    missing = source["number"] + 1

    response = client.post(
        "/transfer",
        json={"fromAccountNo": source["number"], "toAccountNo": missing, "amount": 10},
    )
    assert response.status_code == 404
    assert balance_of(client, source) == Decimal("50")

def test_unhandled_error_is_logged(client: TestClient, caplog) -> None:
    class BrokenStore:
        def get_accounts(self):
            raise RuntimeError("store exploded")

    app.dependency_overrides[get_account_store] = BrokenStore
    caplog.set_level(logging.INFO, logger="bank_api")

    response = TestClient(app, raise_server_exceptions=False).get("/account")

    assert response.status_code == 500
    failed = [record for record in caplog.records if record.getMessage() == "request.failed"]
    assert len(failed) == 1
    assert failed[0].path == "/account"
    assert failed[0].status_code == 500
