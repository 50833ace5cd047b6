import os

# Must be set before the app (and its settings) are imported
os.environ["ENV"] = "testing"
os.environ.pop("ADMIN_API_KEY", None)

import pytest
from datetime import datetime
from decimal import Decimal
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from typing import Generator

from main import app
from core.database import Base
from utils.deps import get_db
from repositories.order_repository import SqlAlchemyOrderRepository
from schemas.order_schemas import CreateOrderRequest
from services.order_service import OrderService

# SYNC SQLite for testing (matches sync service layer)
SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False}
)

TestingSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)


@pytest.fixture
def session() -> Generator[Session, None, None]:
    """
    Creates a fresh, empty database for each test.
    """
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def repository(session: Session) -> SqlAlchemyOrderRepository:
    return SqlAlchemyOrderRepository(session)


@pytest.fixture
def sample_order_data() -> dict:
    """The two-dish order used throughout the tests: 2 x 50 pork, 1 x 40 veg."""
    return {
        "note": "Stall 4 - Khun Somchai",
        "pickup_time": "12:30",
        "line_items": [
            {"menu_id": 1, "name": "กะเพราหมู", "quantity": 2, "unit_price": "50"},
            {"menu_id": 2, "name": "ผัดผัก", "quantity": 1, "unit_price": "40"},
        ],
        "total_amount": "140",
    }


@pytest.fixture
def create_order(repository, session, sample_order_data):
    """
    Factory storing an order through OrderService.

    created_at and status can be forced to place the order inside or
    outside a reporting window.
    """
    def _create(created_at: datetime | None = None, status: str | None = None, **overrides):
        data = {**sample_order_data, **overrides}
        order = OrderService.create_order(CreateOrderRequest(**data), repository)
        if created_at is not None:
            order.created_at = created_at
        if status is not None:
            order.status = status
        session.commit()
        session.refresh(order)
        return order

    return _create


@pytest.fixture
async def client(session: Session):
    """
    Yields an HTTP client that interacts with the app using the test database.
    """
    def override_get_db():
        try:
            yield session
        finally:
            pass  # Session cleanup handled by session fixture

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


def money(value) -> Decimal:
    """Decimal from a JSON money field (serialized as string or number)."""
    return Decimal(str(value))
