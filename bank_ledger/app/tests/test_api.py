import csv
import io
from decimal import Decimal

from fastapi.testclient import TestClient


def _create_customer(client: TestClient, name: str = "Jose Lema", identification: str = "1712345678") -> int:
    response = client.post(
        "/customers",
        json={"name": name, "identification": identification, "age": 35, "phone": "098254785"},
    )
    assert response.status_code == 201
    return response.json()["id"]


def _create_account(client: TestClient, customer_id: int, initial_balance: str = "100.00", **fields) -> dict:
    response = client.post(
        "/accounts",
        json={"customer_id": customer_id, "initial_balance": initial_balance, **fields},
    )
    assert response.status_code == 201
    return response.json()


def _post_movement(client: TestClient, **payload):
    return client.post("/movements", json=payload)


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_credit_then_debit_scenario(client: TestClient) -> None:
    customer_id = _create_customer(client)
    account = _create_account(client, customer_id, initial_balance="100.00")
    account_id = account["id"]

    credit = _post_movement(client, account_id=account_id, kind="CREDIT", value="50.00")
    assert credit.status_code == 201
    assert Decimal(credit.json()["available_balance"]) == Decimal("150.00")

    rejected = _post_movement(client, account_id=account_id, kind="DEBIT", value="200.00")
    assert rejected.status_code == 409
    assert rejected.json()["code"] == "INSUFFICIENT_FUNDS"
    assert "150.00" in rejected.json()["detail"]

    balance = client.get(f"/accounts/{account_id}/balance")
    assert Decimal(balance.json()["balance"]) == Decimal("150.00")

    debit = _post_movement(client, account_id=account_id, kind="DEBIT", value="150.00")
    assert debit.status_code == 201
    assert Decimal(debit.json()["available_balance"]) == Decimal("0")

    movements = client.get(f"/accounts/{account_id}/movements").json()
    assert [m["kind"] for m in movements] == ["CREDIT", "DEBIT"]


def test_movement_by_account_number(client: TestClient) -> None:
    customer_id = _create_customer(client)
    _create_account(client, customer_id, initial_balance="0.00", number="225487")

    response = _post_movement(client, account_number="225487", kind="CREDIT", value="600")
    assert response.status_code == 201
    assert Decimal(response.json()["available_balance"]) == Decimal("600")


def test_movement_errors(client: TestClient) -> None:
    customer_id = _create_customer(client)
    account_id = _create_account(client, customer_id)["id"]

    unknown_account = _post_movement(client, account_id=9999, kind="CREDIT", value="1.00")
    assert unknown_account.status_code == 404
    assert unknown_account.json()["code"] == "ACCOUNT_NOT_FOUND"

    bad_kind = _post_movement(client, account_id=account_id, kind="TRANSFER", value="1.00")
    assert bad_kind.status_code == 400
    assert bad_kind.json()["code"] == "INVALID_MOVEMENT_KIND"

    non_positive = _post_movement(client, account_id=account_id, kind="CREDIT", value="0")
    assert non_positive.status_code == 422

    missing_reference = _post_movement(client, kind="CREDIT", value="1.00")
    assert missing_reference.status_code == 422

    assert client.get("/movements/4242").status_code == 404
    assert client.delete("/movements/4242").json()["code"] == "MOVEMENT_NOT_FOUND"


def test_update_and_delete_movement(client: TestClient) -> None:
    customer_id = _create_customer(client)
    account_id = _create_account(client, customer_id, initial_balance="100.00")["id"]

    first = _post_movement(
        client, account_id=account_id, kind="CREDIT", value="50.00", timestamp="2025-03-01T10:00:00"
    ).json()
    second = _post_movement(
        client, account_id=account_id, kind="CREDIT", value="25.00", timestamp="2025-03-02T10:00:00"
    ).json()

    updated = client.put(f"/movements/{second['id']}", json={"kind": "DEBIT", "value": "30.00"})
    assert updated.status_code == 200
    assert Decimal(updated.json()["available_balance"]) == Decimal("70.00")
    assert updated.json()["timestamp"].startswith("2025-03-02T10:00:00")

    deleted = client.delete(f"/movements/{first['id']}")
    assert deleted.status_code == 204
    remaining = client.get("/movements").json()
    assert [m["id"] for m in remaining] == [second["id"]]
    assert Decimal(remaining[0]["available_balance"]) == Decimal("70.00")


def test_account_crud(client: TestClient) -> None:
    customer_id = _create_customer(client)
    account = _create_account(client, customer_id, number="478758", type="CHECKING")
    assert account["type"] == "CHECKING"

    duplicate = client.post("/accounts", json={"customer_id": customer_id, "number": "478758"})
    assert duplicate.status_code == 409
    assert duplicate.json()["code"] == "DUPLICATE_ACCOUNT_NUMBER"

    generated = _create_account(client, customer_id)
    assert len(generated["number"]) == 6

    by_number = client.get("/accounts/by-number/478758")
    assert by_number.json()["id"] == account["id"]

    listed = client.get("/accounts", params={"customer_id": customer_id}).json()
    assert {a["number"] for a in listed} == {"478758", generated["number"]}

    _post_movement(client, account_id=account["id"], kind="CREDIT", value="1.00")
    locked = client.put(
        f"/accounts/{account['id']}",
        json={"number": "478758", "type": "CHECKING", "initial_balance": "999.00", "status": True},
    )
    assert locked.status_code == 409
    assert locked.json()["code"] == "INITIAL_BALANCE_LOCKED"

    in_use = client.delete(f"/accounts/{account['id']}")
    assert in_use.status_code == 409
    assert client.delete(f"/accounts/{generated['id']}").status_code == 204
    assert client.get(f"/accounts/{generated['id']}").status_code == 404


def test_customer_crud(client: TestClient) -> None:
    customer_id = _create_customer(client)

    duplicate = client.post("/customers", json={"name": "Other", "identification": "1712345678"})
    assert duplicate.status_code == 409
    assert duplicate.json()["code"] == "DUPLICATE_CUSTOMER"

    updated = client.put(
        f"/customers/{customer_id}",
        json={"name": "Jose Lema", "identification": "1712345678", "address": "Otavalo sn y principal"},
    )
    assert updated.status_code == 200
    assert updated.json()["address"] == "Otavalo sn y principal"

    account_id = _create_account(client, customer_id)["id"]
    assert client.delete(f"/customers/{customer_id}").json()["code"] == "CUSTOMER_HAS_ACCOUNTS"
    client.delete(f"/accounts/{account_id}")
    assert client.delete(f"/customers/{customer_id}").status_code == 204
    assert client.get(f"/customers/{customer_id}").json()["code"] == "CUSTOMER_NOT_FOUND"


def test_statement_report(client: TestClient) -> None:
    customer_id = _create_customer(client)
    savings = _create_account(client, customer_id, initial_balance="2000.00", number="478758")
    _create_account(client, customer_id, initial_balance="100.00", number="225487", type="CHECKING")

    _post_movement(
        client, account_id=savings["id"], kind="DEBIT", value="575.00", timestamp="2025-03-01T09:00:00"
    )
    _post_movement(
        client, account_id=savings["id"], kind="CREDIT", value="600.00", timestamp="2025-03-10T23:30:00"
    )

    response = client.get(
        "/reports",
        params={"customer_id": customer_id, "start_date": "2025-03-01", "end_date": "2025-03-31"},
    )
    assert response.status_code == 200
    statement = response.json()
    assert statement["customer"]["name"] == "Jose Lema"
    assert statement["dateRange"] == {"start": "2025-03-01", "end": "2025-03-31"}

    first, second = statement["accounts"]
    assert Decimal(first["initialBalance"]) == Decimal("2000.00")
    assert Decimal(first["transactions"][-1]["availableBalance"]) == Decimal("2025.00")
    assert [Decimal(tx["amount"]) for tx in first["transactions"]] == [Decimal("-575"), Decimal("600")]
    assert Decimal(first["totals"]["credits"]) == Decimal("600")
    assert Decimal(first["totals"]["debits"]) == Decimal("575")
    assert second["transactions"] == []
    assert Decimal(second["totals"]["credits"]) == Decimal("0")


def test_statement_errors(client: TestClient) -> None:
    params = {"start_date": "2025-03-01", "end_date": "2025-03-31"}

    missing = client.get("/reports", params={"customer_id": 404, **params})
    assert missing.status_code == 404
    assert missing.json()["code"] == "CUSTOMER_NOT_FOUND"

    customer_id = _create_customer(client)
    no_accounts = client.get("/reports", params={"customer_id": customer_id, **params})
    assert no_accounts.status_code == 404
    assert no_accounts.json()["code"] == "NO_ACCOUNTS_FOR_CUSTOMER"

    inverted = client.get(
        "/reports",
        params={"customer_id": customer_id, "start_date": "2025-03-31", "end_date": "2025-03-01"},
    )
    assert inverted.status_code == 400
    assert inverted.json()["code"] == "INVALID_DATE_RANGE"


def test_statement_download(client: TestClient) -> None:
    customer_id = _create_customer(client)
    account_id = _create_account(client, customer_id, number="478758")["id"]
    _post_movement(client, account_id=account_id, kind="CREDIT", value="10.00", timestamp="2025-03-05T12:00:00")

    params = {"customer_id": customer_id, "start_date": "2025-03-01", "end_date": "2025-03-31"}
    response = client.get("/reports/download", params=params)
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert (
        f"account_statement_{customer_id}_2025-03-01_2025-03-31.csv"
        in response.headers["content-disposition"]
    )
    rows = list(csv.DictReader(io.StringIO(response.text)))
    assert rows[0]["account_number"] == "478758"
    assert Decimal(rows[0]["available_balance"]) == Decimal("110.00")

    as_json = client.get("/reports/download", params={**params, "format": "json"})
    assert as_json.headers["content-type"].startswith("application/json")

    as_pdf = client.get("/reports/download", params={**params, "format": "pdf"})
    assert as_pdf.status_code == 200
    assert as_pdf.headers["content-type"] == "application/pdf"
    assert as_pdf.content.startswith(b"%PDF")
    assert as_pdf.headers["content-disposition"].endswith(".pdf\"")

    unsupported = client.get("/reports/download", params={**params, "format": "xlsx"})
    assert unsupported.status_code == 400
    assert unsupported.json()["code"] == "UNSUPPORTED_FORMAT"


def test_backdated_movement_is_rejected(client: TestClient) -> None:
    customer_id = _create_customer(client)
    account_id = _create_account(client, customer_id, initial_balance="0.00")["id"]

    _post_movement(client, account_id=account_id, kind="CREDIT", value="10.00", timestamp="2025-03-06T12:00:00")
    backdated = _post_movement(
        client, account_id=account_id, kind="DEBIT", value="10.00", timestamp="2025-03-05T12:00:00"
    )
    assert backdated.status_code == 400
    assert backdated.json()["code"] == "BACKDATED_MOVEMENT"

    _post_movement(client, account_id=account_id, kind="DEBIT", value="10.00", timestamp="2025-03-07T12:00:00")
    overdraft = _post_movement(
        client, account_id=account_id, kind="DEBIT", value="10.00", timestamp="2025-03-08T12:00:00"
    )
    assert overdraft.status_code == 409
    assert len(client.get(f"/accounts/{account_id}/movements").json()) == 2
    assert Decimal(client.get(f"/accounts/{account_id}/balance").json()["balance"]) == Decimal("0")


def test_movements_order_by_timestamp_then_insertion(client: TestClient) -> None:
    customer_id = _create_customer(client)
    account_id = _create_account(client, customer_id, initial_balance="100.00")["id"]

    ids = [
        _post_movement(
            client, account_id=account_id, kind=kind, value=value, timestamp="2025-03-04T08:00:00"
        ).json()["id"]
        for kind, value in (("CREDIT", "10.00"), ("DEBIT", "30.00"), ("CREDIT", "5.00"))
    ]
    listed = client.get(f"/accounts/{account_id}/movements").json()
    assert [m["id"] for m in listed] == ids
    assert [Decimal(m["available_balance"]) for m in listed] == [
        Decimal("110"),
        Decimal("80"),
        Decimal("85"),
    ]

    # Moving the first movement later in time reorders the listing.
    retimed = client.put(
        f"/movements/{ids[0]}",
        json={"kind": "CREDIT", "value": "10.00", "timestamp": "2025-03-09T08:00:00"},
    )
    assert retimed.status_code == 200
    listed = client.get(f"/accounts/{account_id}/movements").json()
    assert [m["id"] for m in listed] == [ids[1], ids[2], ids[0]]
    assert [m["timestamp"] for m in listed] == sorted(m["timestamp"] for m in listed)
    assert Decimal(client.get(f"/accounts/{account_id}/balance").json()["balance"]) == Decimal("110")
