from models.orders import Order
from tests.conftest import money


async def test_create_order_success(client, session, sample_order_data):
    """Test placing an order returns its confirmation code."""
    response = await client.post("/api/orders", json=sample_order_data)

    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "Order placed successfully"
    assert len(data["code"]) == 8
    assert data["order"]["code"] == data["code"]
    assert data["order"]["status"] == "Processing"
    assert money(data["order"]["total_amount"]) == 140
    assert [money(i["line_total"]) for i in data["order"]["line_items"]] == [100, 40]

    order = session.query(Order).filter(Order.code == data["code"]).first()
    assert order is not None
    assert order.note == "Stall 4 - Khun Somchai"


async def test_create_order_has_request_id(client, sample_order_data):
    response = await client.post("/api/orders", json=sample_order_data,
        headers={"X-Request-ID": "kiosk-42"})

    assert response.headers["X-Request-ID"] == "kiosk-42"


async def test_create_order_validation_lists_all_errors(client, session, sample_order_data):
    """Test that every business-rule violation is returned at once."""
    payload = {**sample_order_data, "note": "  ", "pickup_time": "noon"}
    payload["line_items"] = [{"name": "ผัดผัก", "quantity": 0, "unit_price": "40"}]

    response = await client.post("/api/orders", json=payload)

    assert response.status_code == 400
    body = response.json()
    assert body["detail"].startswith("Validation failed")
    assert [e["field"] for e in body["errors"]] == ["note", "pickup_time", "line_items[0].quantity"]
    assert session.query(Order).count() == 0


async def test_create_order_missing_fields(client, session):
    """Test that missing required fields are listed as validation errors."""
    response = await client.post("/api/orders", json={"note": "Stall 1"})

    assert response.status_code == 400
    assert [e["field"] for e in response.json()["errors"]] == ["pickup_time", "total_amount"]
    assert session.query(Order).count() == 0


async def test_create_order_missing_field_reported_with_range_errors(client, session, sample_order_data):
    """Test that a missing field does not hide the other violations in the body."""
    payload = {key: value for key, value in sample_order_data.items() if key != "note"}
    payload["line_items"] = [{"name": "ผัดผัก", "quantity": 0, "unit_price": "40"}]

    response = await client.post("/api/orders", json=payload)

    assert response.status_code == 400
    errors = response.json()["errors"]
    assert {"field": "note", "message": "is required"} in errors
    assert {"field": "line_items[0].quantity", "message": "must be at least 1"} in errors
    assert session.query(Order).count() == 0


async def test_create_order_wrong_types(client, session, sample_order_data):
    """Test that a body with wrong types is still declined by the schema."""
    response = await client.post("/api/orders", json={**sample_order_data, "total_amount": "lots"})

    assert response.status_code == 422
    assert session.query(Order).count() == 0


async def test_create_order_duplicate_code(client, sample_order_data):
    payload = {**sample_order_data, "code": "ABCD1234"}

    first = await client.post("/api/orders", json=payload)
    second = await client.post("/api/orders", json={**payload, "code": "abcd1234"})

    assert first.status_code == 201
    assert second.status_code == 409


async def test_create_order_allocation_exhausted(client, session, sample_order_data, monkeypatch):
    from repositories.order_repository import SqlAlchemyOrderRepository
    monkeypatch.setattr(SqlAlchemyOrderRepository, "exists", lambda self, code: True)

    response = await client.post("/api/orders", json=sample_order_data)

    assert response.status_code == 503
    assert session.query(Order).count() == 0


async def test_create_order_unicode_note(client, sample_order_data):
    response = await client.post("/api/orders", json={**sample_order_data, "note": "ร้านป้าแดง โต๊ะ 3"})

    assert response.status_code == 201
    assert response.json()["order"]["note"] == "ร้านป้าแดง โต๊ะ 3"
