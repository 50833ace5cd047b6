"""Persistence for Order records."""

import time
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Iterable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.exceptions import DuplicateKeyError
from models.orders import Order
from utils.logger import get_logger, log_database_query

logger = get_logger(__name__)


class OrderRepository(ABC):
    """Keyed order store with a unique constraint on the order code."""

    @abstractmethod
    def insert(self, order: Order) -> Order:
        """Persist a new order atomically.

        Raises:
            DuplicateKeyError: an order with the same code already exists
        """

    @abstractmethod
    def exists(self, code: str) -> bool:
        """True if an order with this exact code is stored."""

    @abstractmethod
    def find_by_code(self, code: str) -> Optional[Order]:
        """Order with this exact code, or None."""

    @abstractmethod
    def find_many(
        self,
        statuses: Optional[Iterable[str]] = None,
        created_from: Optional[datetime] = None,
        created_to: Optional[datetime] = None,
        created_before: Optional[datetime] = None,
        newest_first: bool = True,
    ) -> list[Order]:
        """Orders matching every given filter.

        Args:
            statuses: accepted status values (exact match)
            created_from: inclusive lower bound on created_at
            created_to: inclusive upper bound on created_at
            created_before: exclusive upper bound on created_at
            newest_first: sort by created_at descending
        """

    @abstractmethod
    def update_by_code(self, code: str, patch: dict[str, Any]) -> Optional[Order]:
        """Apply patch to the order and return it, or None if absent."""


class SqlAlchemyOrderRepository(OrderRepository):
    """OrderRepository backed by a SQLAlchemy session."""

    IMMUTABLE_FIELDS = {"id", "code", "created_at"}

    def __init__(self, db: Session):
        self.db = db

    def insert(self, order: Order) -> Order:
        start = time.perf_counter()
        now = datetime.now()
        if order.created_at is None:
            order.created_at = now
        order.updated_at = now

        self.db.add(order)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            # Only the unique code index maps to DuplicateKeyError
            if self.exists(order.code):
                logger.warning("Order code collision on insert", extra={"code": order.code})
                raise DuplicateKeyError(order.code) from exc
            raise

        self.db.refresh(order)
        log_database_query(logger, "INSERT", "orders", (time.perf_counter() - start) * 1000, rows_affected=1)
        return order

    def exists(self, code: str) -> bool:
        return self.db.query(Order.id).filter(Order.code == code).first() is not None

    def find_by_code(self, code: str) -> Optional[Order]:
        return self.db.query(Order).filter(Order.code == code).one_or_none()

    def find_many(
        self,
        statuses: Optional[Iterable[str]] = None,
        created_from: Optional[datetime] = None,
        created_to: Optional[datetime] = None,
        created_before: Optional[datetime] = None,
        newest_first: bool = True,
    ) -> list[Order]:
        start = time.perf_counter()
        query = self.db.query(Order)

        if statuses is not None:
            query = query.filter(Order.status.in_(list(statuses)))
        if created_from is not None:
            query = query.filter(Order.created_at >= created_from)
        if created_to is not None:
            query = query.filter(Order.created_at <= created_to)
        if created_before is not None:
            query = query.filter(Order.created_at < created_before)

        if newest_first:
            query = query.order_by(Order.created_at.desc(), Order.id.desc())
        else:
            query = query.order_by(Order.created_at.asc(), Order.id.asc())

        orders = query.all()
        log_database_query(logger, "SELECT", "orders", (time.perf_counter() - start) * 1000, rows_affected=len(orders))
        return orders

    def update_by_code(self, code: str, patch: dict[str, Any]) -> Optional[Order]:
        forbidden = self.IMMUTABLE_FIELDS.intersection(patch)
        if forbidden:
            raise ValueError(f"Immutable order fields cannot be patched: {', '.join(sorted(forbidden))}")

        start = time.perf_counter()
        order = self.find_by_code(code)
        if order is None:
            return None

        changed = False
        for field, value in patch.items():
            if getattr(order, field) != value:
                setattr(order, field, value)
                changed = True

        # Re-applying identical values leaves the record untouched
        if not changed:
            return order

        order.updated_at = datetime.now()
        self.db.commit()
        self.db.refresh(order)
        log_database_query(logger, "UPDATE", "orders", (time.perf_counter() - start) * 1000, rows_affected=1)
        return order
