from datetime import datetime
from core.config import settings


async def test_list_orders_newest_first(client, create_order):
    older = create_order(created_at=datetime(2024, 1, 16, 9, 0))
    newer = create_order(created_at=datetime(2024, 1, 16, 10, 0))

    response = await client.get("/api/orders")

    assert response.status_code == 200
    assert [o["code"] for o in response.json()] == [newer.code, older.code]


async def test_list_orders_filters(client, create_order):
    match = create_order(created_at=datetime(2024, 1, 16, 9, 0), status="Completed")
    create_order(created_at=datetime(2024, 1, 16, 10, 0))
    create_order(created_at=datetime(2024, 1, 17, 9, 0), status="Completed")

    response = await client.get("/api/orders", params={"status": "Completed", "date": "2024-01-16"})

    assert response.status_code == 200
    assert [o["code"] for o in response.json()] == [match.code]


async def test_list_orders_invalid_status(client, session):
    response = await client.get("/api/orders", params={"status": "Ready"})

    assert response.status_code == 400
    assert response.json()["allowed"] == ["Processing", "Completed", "Cancelled"]


async def test_list_orders_invalid_date(client, session):
    response = await client.get("/api/orders", params={"date": "16/01/2024"})

    assert response.status_code == 422


async def test_list_orders_requires_admin_key_when_configured(client, create_order, monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_API_KEY", "staff-only")
    create_order()

    missing = await client.get("/api/orders")
    wrong = await client.get("/api/orders", headers={"X-Admin-Key": "guess"})
    right = await client.get("/api/orders", headers={"X-Admin-Key": "staff-only"})

    assert missing.status_code == 401
    assert wrong.status_code == 401
    assert right.status_code == 200
    assert len(right.json()) == 1
