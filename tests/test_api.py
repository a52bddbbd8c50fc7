"""
Tests for the HTTP endpoints.
"""

import sqlite3

from fastapi.testclient import TestClient

from tests.helpers import FailingStore

CUSTOMERS = "/api/v1/customers"
PRODUCTS = "/api/v1/products"
LOGIN = "/api/v1/login"


def test_health(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_login_with_default_account(client):
    response = client.post(LOGIN, json={"username": "admin", "password": "1234"})

    assert response.status_code == 200
    assert response.json()["authenticated"] is True


def test_login_rejections_are_indistinguishable(client):
    wrong_password = client.post(LOGIN, json={"username": "admin", "password": "wrong"})
    unknown_user = client.post(LOGIN, json={"username": "nouser", "password": "anything"})

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json() == {"message": "Invalid username or password."}


def test_login_without_password_is_bad_request(client):
    response = client.post(LOGIN, json={"username": "admin"})

    assert response.status_code == 400
    assert response.json() == {"error": "Username and password are required."}


def test_restart_does_not_duplicate_default_account(app):
    with TestClient(app):
        pass
    with TestClient(app):
        pass

    conn = sqlite3.connect(app.state.store.db_path)
    try:
        count = conn.execute("SELECT COUNT(*) FROM accounts WHERE username = 'admin'").fetchone()[0]
    finally:
        conn.close()
    assert count == 1


def test_create_customer_returns_allocated_id(client):
    response = client.post(CUSTOMERS, json={"legal_name": "Acme", "tax_id": "123"})

    assert response.status_code == 200
    assert response.json() == {"id": 1, "message": "Customer registered successfully!"}


def test_customer_lifecycle_keeps_front_gap(client):
    assert client.post(CUSTOMERS, json={"legal_name": "A"}).json()["id"] == 1
    assert client.post(CUSTOMERS, json={"legal_name": "B"}).json()["id"] == 2

    deleted = client.delete(f"{CUSTOMERS}/1")
    assert deleted.status_code == 200
    assert deleted.json() == {"message": "Customer (ID: 1) deleted successfully!", "changes": 1}

    assert client.post(CUSTOMERS, json={"legal_name": "C"}).json()["id"] == 3
    names = {c["id"]: c["legal_name"] for c in client.get(CUSTOMERS).json()}
    assert names == {2: "B", 3: "C"}


def test_delete_missing_customer_is_404(client):
    client.post(CUSTOMERS, json={"legal_name": "A"})

    response = client.delete(f"{CUSTOMERS}/42")

    assert response.status_code == 404
    assert response.json() == {"message": "Customer not found."}
    assert len(client.get(CUSTOMERS).json()) == 1


def test_unknown_fields_are_rejected(client):
    response = client.post(CUSTOMERS, json={"legal_name": "A", "nickname": "x"})

    assert response.status_code == 422
    assert client.get(CUSTOMERS).json() == []


def test_product_quantity_must_be_integer(client):
    response = client.post(PRODUCTS, json={"item": "Router", "quantity": "lots"})

    assert response.status_code == 422


def test_customer_list_and_search(client):
    client.post(CUSTOMERS, json={"legal_name": "Zeta SA", "tax_id": "999"})
    client.post(CUSTOMERS, json={"legal_name": "Alpha ME", "tax_id": "111"})

    listed = client.get(CUSTOMERS).json()
    by_id = client.get(CUSTOMERS, params={"sort": "id", "direction": "desc"}).json()
    found = client.get(f"{CUSTOMERS}/search", params={"term": "lph"}).json()

    assert [c["legal_name"] for c in listed] == ["Alpha ME", "Zeta SA"]
    assert [c["id"] for c in by_id] == [2, 1]
    assert [c["tax_id"] for c in found] == ["111"]
    assert found[0]["city"] is None


def test_product_create_search_and_delete(client):
    created = client.post(
        PRODUCTS,
        json={"item": "Router", "code": "RT-100", "quantity": 3, "entry_date": "2024-01-05"},
    )
    client.post(PRODUCTS, json={"item": "Switch", "code": "SW-200", "entry_date": "2024-02-01"})

    assert created.json() == {"id": 1, "message": "Product registered successfully!"}
    assert [p["item"] for p in client.get(PRODUCTS).json()] == ["Switch", "Router"]
    found = client.get(f"{PRODUCTS}/search", params={"code": "RT-100"}).json()
    assert found == [
        {
            "id": 1,
            "item": "Router",
            "code": "RT-100",
            "quantity": 3,
            "serial_number": None,
            "entry_date": "2024-01-05",
            "exit_date": None,
            "description": None,
        }
    ]

    assert client.delete(f"{PRODUCTS}/1").json() == {"message": "Product deleted successfully!", "changes": 1}
    assert client.delete(f"{PRODUCTS}/1").status_code == 404


def test_store_failure_is_generic_server_error(client):
    client.app.state.store = FailingStore()

    created = client.post(CUSTOMERS, json={"legal_name": "A"})
    login = client.post(LOGIN, json={"username": "admin", "password": "1234"})

    assert created.status_code == 500
    assert created.json() == {"error": "Internal server error."}
    assert login.status_code == 500


def test_service_survives_a_failed_request(client):
    original = client.app.state.store
    client.app.state.store = FailingStore()
    assert client.get(PRODUCTS).status_code == 500

    client.app.state.store = original
    assert client.get(PRODUCTS).status_code == 200


def post_raw_json(client, url, body):
    # Sent pre-encoded so JSON escapes such as lone surrogates reach the server as written.
    return client.post(url, content=body.encode("ascii"), headers={"Content-Type": "application/json"})


def test_unencodable_password_is_rejected_like_any_other(client):
    known = post_raw_json(client, LOGIN, '{"username": "admin", "password": "\\ud800"}')
    unknown = post_raw_json(client, LOGIN, '{"username": "nouser", "password": "\\ud800"}')

    assert known.status_code == unknown.status_code == 401
    assert known.json() == unknown.json() == {"message": "Invalid username or password."}


def test_unencodable_username_is_a_json_server_error(client):
    response = post_raw_json(client, LOGIN, '{"username": "\\ud800", "password": "1234"}')

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error."}


def test_unencodable_field_value_is_an_insertion_error(client):
    response = post_raw_json(client, CUSTOMERS, '{"legal_name": "\\ud800"}')

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to register the customer."}
    assert client.get(CUSTOMERS).json() == []


def test_service_starts_when_default_account_cannot_be_created(app):
    app.state.store = FailingStore()

    with TestClient(app) as client:
        health = client.get("/api/v1/health")
        login = client.post(LOGIN, json={"username": "admin", "password": "1234"})

    assert health.status_code == 200
    assert login.status_code == 500
    assert login.json() == {"error": "Internal server error."}
