import re
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Optional

from fastapi import BackgroundTasks

from core.config import settings
from core.exceptions import DuplicateKeyError, NotFoundError, ValidationError
from models.enums import INITIAL_STATUS, ITEM_CATEGORIES
from models.order_items import OrderItem
from models.orders import Order
from repositories.order_repository import OrderRepository
from schemas.order_schemas import CreateOrderRequest
from services.code_allocator import allocate_order_code
from services.sheets_service import build_sheet_row, notify_order_created
from services.status_machine import apply_transition, parse_status
from utils.logger import get_logger
from utils.order_codes import is_valid_order_code, normalize_order_code

logger = get_logger(__name__)

PICKUP_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def validate_order_request(request: CreateOrderRequest) -> list[dict]:
    """Every business-rule violation in the request, in field order."""
    errors = []

    def fail(field, message):
        errors.append({"field": field, "message": message})

    if request.code is not None and not is_valid_order_code(normalize_order_code(request.code)):
        fail("code", "must be 8 characters from 0-9 and A-Z")

    if not (request.note or "").strip():
        fail("note", "is required")

    pickup_time = (request.pickup_time or "").strip()
    if not pickup_time:
        fail("pickup_time", "is required")
    elif not PICKUP_TIME_RE.match(pickup_time):
        fail("pickup_time", "must be in HH:MM format")

    if request.total_amount is None:
        fail("total_amount", "is required")
    elif request.total_amount < 0:
        fail("total_amount", "must be at least 0")

    for index, item in enumerate(request.line_items):
        prefix = f"line_items[{index}]"

        if not (item.name or "").strip():
            fail(f"{prefix}.name", "is required")
        if item.category is not None and item.category not in ITEM_CATEGORIES:
            fail(f"{prefix}.category", f"must be one of {', '.join(ITEM_CATEGORIES)}")

        if item.quantity is None:
            fail(f"{prefix}.quantity", "is required")
        elif item.quantity < 1:
            fail(f"{prefix}.quantity", "must be at least 1")

        if item.unit_price is None:
            fail(f"{prefix}.unit_price", "is required")
        elif item.unit_price < 0:
            fail(f"{prefix}.unit_price", "must be at least 0")

        if item.line_total is not None:
            if item.line_total < 0:
                fail(f"{prefix}.line_total", "must be at least 0")
            elif (item.quantity is not None and item.unit_price is not None
                    and item.line_total != item.quantity * item.unit_price):
                fail(f"{prefix}.line_total", "must equal quantity * unit_price")

    return errors


def _build_order(request: CreateOrderRequest, code: str) -> Order:
    items = [
        OrderItem(
            position=index,
            menu_id=item.menu_id,
            name=item.name.strip(),
            category=item.category,
            quantity=item.quantity,
            unit_price=item.unit_price,
            line_total=item.quantity * item.unit_price,
        )
        for index, item in enumerate(request.line_items)
    ]
    return Order(
        code=code,
        note=request.note.strip(),
        pickup_time=request.pickup_time.strip(),
        line_items=items,
        total_amount=request.total_amount,
        status=INITIAL_STATUS.value,
    )


class OrderService:

    @staticmethod
    def create_order(request: CreateOrderRequest, repository: OrderRepository,
                     bg: Optional[BackgroundTasks] = None) -> Order:
        """
        Validates and stores a new order.

        Flow:
        1. Collect every validation error (raise them together)
        2. Use the caller's code, or allocate one
        3. Insert; if an allocated code lost a race, allocate again
        4. Queue the spreadsheet notification (never awaited)
        """
        errors = validate_order_request(request)
        if errors:
            logger.warning(
                "Order rejected by validation",
                extra={"errors": errors}
            )
            raise ValidationError(errors)

        supplied_code = normalize_order_code(request.code) if request.code else None
        retries = settings.ORDER_CREATE_DUPLICATE_RETRIES

        for attempt in range(retries + 1):
            code = supplied_code or allocate_order_code(repository)
            try:
                order = repository.insert(_build_order(request, code))
                break
            except DuplicateKeyError:
                if supplied_code is not None or attempt == retries:
                    raise
                logger.warning(
                    "Allocated order code taken at insert, allocating again",
                    extra={"code": code, "attempt": attempt + 1}
                )

        items_total = sum((item.line_total for item in order.line_items), Decimal("0"))
        if items_total != order.total_amount:
            logger.warning(
                "Order total differs from line items",
                extra={"code": order.code, "total_amount": str(order.total_amount),
                       "items_total": str(items_total)}
            )

        if bg is not None:
            bg.add_task(notify_order_created, build_sheet_row(order))

        logger.info(
            "Order created",
            extra={"code": order.code, "items": len(order.line_items)}
        )
        return order

    @staticmethod
    def get_order_by_code(code: str, repository: OrderRepository) -> Order:
        normalized = normalize_order_code(code)
        order = repository.find_by_code(normalized)
        if order is None:
            raise NotFoundError(normalized)
        return order

    @staticmethod
    def list_orders(repository: OrderRepository, status: Optional[str] = None,
                    on_date: Optional[date] = None) -> list[Order]:
        """
        Orders newest first, optionally restricted to one status and to
        one local calendar day of created_at.
        """
        statuses = [parse_status(status).value] if status else None

        created_from = created_before = None
        if on_date is not None:
            created_from = datetime.combine(on_date, time.min)
            created_before = created_from + timedelta(days=1)

        return repository.find_many(
            statuses=statuses,
            created_from=created_from,
            created_before=created_before,
            newest_first=True,
        )

    @staticmethod
    def update_status(code: str, requested_status: str, repository: OrderRepository) -> Order:
        return apply_transition(repository, normalize_order_code(code), requested_status)
