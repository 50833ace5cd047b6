from typing import Callable, Optional
from core.config import settings
from core.exceptions import AllocationExhaustedError
from repositories.order_repository import OrderRepository
from utils.order_codes import generate_order_code
from utils.logger import get_logger

logger = get_logger(__name__)


def allocate_order_code(
    repository: OrderRepository,
    max_attempts: Optional[int] = None,
    generator: Optional[Callable[[], str]] = None,
) -> str:
    """
    Draw order codes until one is not yet stored.

    The check-then-insert pair is racy under concurrent creators; the
    unique index on orders.code remains the authoritative guard and
    OrderService retries on DuplicateKeyError.

    Args:
        repository: store to check candidates against
        max_attempts: cap on existence checks (default ORDER_CODE_MAX_ATTEMPTS)
        generator: candidate source (default generate_order_code)

    Raises:
        AllocationExhaustedError: every candidate was already taken
    """
    if max_attempts is None:
        max_attempts = settings.ORDER_CODE_MAX_ATTEMPTS
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    generator = generator or generate_order_code

    for attempt in range(1, max_attempts + 1):
        candidate = generator()
        if not repository.exists(candidate):
            if attempt > 1:
                logger.info("Order code allocated after collisions",
                    extra={"code": candidate, "attempts": attempt})
            return candidate

        logger.warning(
            "Order code collision",
            extra={"code": candidate, "attempt": attempt, "max_attempts": max_attempts}
        )

    logger.error(
        "Order code allocation exhausted",
        extra={"max_attempts": max_attempts}
    )
    raise AllocationExhaustedError(max_attempts)
