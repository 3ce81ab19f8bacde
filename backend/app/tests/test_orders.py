import pytest

from app.services import order_service


@pytest.fixture
def order_payload(customer):
    return {
        "customer_id": customer["id"],
        "order_date": "2024-05-30",
        "status": "completed",
        "total": "100.5",
    }


@pytest.fixture
def order(client, auth_headers, order_payload):
    r = client.post("/orders", json=order_payload, headers=auth_headers)
    assert r.status_code == 201
    return r.json()


def test_orders_require_auth(client):
    assert client.get("/orders").status_code == 401
    assert client.post("/orders", json={}).status_code == 401
    assert client.delete("/orders/1").status_code == 401


def test_create_order_returns_bare_record(order, customer):
    assert order["customer_id"] == customer["id"]
    assert order["order_date"] == "2024-05-30"
    assert order["status"] == "completed"
    assert order["total"] == "100.5"
    assert set(order) == {"id", "customer_id", "order_date", "status", "total", "created_at", "updated_at"}


def test_create_order_with_unknown_customer_names_customer_id(client, auth_headers):
    r = client.post("/orders", json={
        "customer_id": 99999,
        "order_date": "2024-05-30",
        "status": "pending",
        "total": 5,
    }, headers=auth_headers)
    assert r.status_code == 400
    assert r.json() == {"customer_id": ["The selected customer id is invalid."]}


def test_create_order_reports_all_violations(client, auth_headers):
    r = client.post("/orders", json={"order_date": "30/05/2024", "total": "lots"}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json() == {
        "customer_id": ["The customer id field is required."],
        "order_date": ["The order date field must be a valid date."],
        "status": ["The status field is required."],
        "total": ["The total field must be a number."],
    }


def test_total_accepts_numeric_strings_and_negatives(client, auth_headers, order_payload):
    r = client.post("/orders", json={**order_payload, "total": "-12.75"}, headers=auth_headers)
    assert r.status_code == 201
    assert r.json()["total"] == "-12.75"


def test_total_rejects_booleans(client, auth_headers, order_payload):
    r = client.post("/orders", json={**order_payload, "total": True}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json() == {"total": ["The total field must be a number."]}


def test_list_orders_is_a_bare_list(client, auth_headers, order):
    r = client.get("/orders", headers=auth_headers)
    assert r.status_code == 200
    assert r.json() == [order]


def test_show_order(client, auth_headers, order):
    r = client.get(f"/orders/{order['id']}", headers=auth_headers)
    assert r.status_code == 200
    assert r.json() == order


def test_missing_order_is_a_soft_404(client, auth_headers):
    for method in ("get", "put", "delete"):
        kwargs = {"headers": auth_headers}
        if method == "put":
            kwargs["json"] = {}
        r = getattr(client, method)("/orders/99999", **kwargs)
        assert r.status_code == 404
        assert r.json() == {"message": "Order not found"}


def test_update_requires_all_fields(client, auth_headers, order):
    r = client.put(f"/orders/{order['id']}", json={"status": "shipped"}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json() == {
        "customer_id": ["The customer id field is required."],
        "order_date": ["The order date field is required."],
        "total": ["The total field is required."],
    }


def test_update_order(client, auth_headers, order, order_payload):
    r = client.put(
        f"/orders/{order['id']}",
        json={**order_payload, "status": "shipped", "total": 150},
        headers=auth_headers,
    )
    assert r.status_code == 200
    body = r.json()
    assert body["id"] == order["id"]
    assert body["status"] == "shipped"
    assert body["total"] == "150"
    assert body["created_at"] == order["created_at"]


def test_update_order_cannot_point_at_missing_customer(client, auth_headers, order, order_payload):
    r = client.put(
        f"/orders/{order['id']}",
        json={**order_payload, "customer_id": 424242},
        headers=auth_headers,
    )
    assert r.status_code == 400
    assert r.json() == {"customer_id": ["The selected customer id is invalid."]}


def test_delete_order_is_204_without_body(client, auth_headers, order):
    r = client.delete(f"/orders/{order['id']}", headers=auth_headers)
    assert r.status_code == 204
    assert r.content == b""
    assert client.get(f"/orders/{order['id']}", headers=auth_headers).status_code == 404


def test_total_keeps_every_digit(client, auth_headers, order_payload):
    r = client.post("/orders", json={**order_payload, "total": "12345678901234567.89"}, headers=auth_headers)
    assert r.status_code == 201
    assert r.json()["total"] == "12345678901234567.89"

    fetched = client.get(f"/orders/{r.json()['id']}", headers=auth_headers)
    assert fetched.json()["total"] == "12345678901234567.89"


def test_out_of_range_total_is_rejected_before_saving(client, auth_headers, order_payload):
    r = client.post("/orders", json={**order_payload, "total": "1e400"}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json() == {"total": ["The total field must not have more than 38 digits."]}

    listed = client.get("/orders", headers=auth_headers)
    assert listed.status_code == 200
    assert listed.json() == []


def test_order_id_beyond_bigint_is_a_404(client, auth_headers):
    r = client.get(f"/orders/{2**70}", headers=auth_headers)
    assert r.status_code == 404
    assert r.json() == {"message": "Order not found"}


def test_customer_id_beyond_bigint_is_invalid(client, auth_headers, order_payload):
    r = client.post("/orders", json={**order_payload, "customer_id": 2**70}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json() == {"customer_id": ["The selected customer id is invalid."]}


def test_customer_removed_before_commit_names_customer_id(client, auth_headers, order_payload, monkeypatch):
    # The existence check passes but the foreign key rejects the row
    monkeypatch.setattr("app.services.order_service.customer_exists", lambda db, customer_id: True)

    r = client.post("/orders", json={**order_payload, "customer_id": 424242}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json() == {"customer_id": ["The selected customer id is invalid."]}

    assert client.post("/orders", json=order_payload, headers=auth_headers).status_code == 201


def test_order_service_session_survives_a_foreign_key_conflict(db_session, order_payload, monkeypatch):
    monkeypatch.setattr(order_service, "customer_exists", lambda db, customer_id: True)

    failed = order_service.create_order(db_session, {**order_payload, "customer_id": 424242})
    assert failed.errors == {"customer_id": ["The selected customer id is invalid."]}

    created = order_service.create_order(db_session, order_payload)
    assert created.ok
    assert created.value.customer_id == order_payload["customer_id"]
