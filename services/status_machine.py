"""
Order status transitions.

Any recognised status may be set from any other status: there is no
transition graph, only a membership test against OrderStatus.
Completed and Cancelled are terminal by convention only.
"""

from core.exceptions import InvalidStatusError, NotFoundError
from models.enums import OrderStatus, ORDER_STATUSES
from models.orders import Order
from repositories.order_repository import OrderRepository
from utils.logger import get_logger

logger = get_logger(__name__)


def parse_status(value: str) -> OrderStatus:
    """Exact, case-sensitive lookup of a status value."""
    try:
        return OrderStatus(value)
    except ValueError:
        raise InvalidStatusError(str(value), ORDER_STATUSES) from None


def apply_transition(repository: OrderRepository, code: str, requested_status: str) -> Order:
    """
    Set the status of the order identified by code.

    The requested status is validated before the order is looked up, so
    an unknown status is rejected whatever the current state is.
    Concurrent updates are last-writer-wins.

    Raises:
        InvalidStatusError: requested_status is not an OrderStatus value
        NotFoundError: no order has this code
    """
    status = parse_status(requested_status)

    updated = repository.update_by_code(code, {"status": status.value})
    if updated is None:
        raise NotFoundError(code)

    logger.info(
        "Order status set",
        extra={"code": code, "status": status.value}
    )
    return updated
