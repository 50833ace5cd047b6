import httpx
from core.config import settings
from utils.logger import get_logger, sanitize_log_data

logger = get_logger(__name__)


def notify_order_created(payload: dict) -> bool:
    """
    Append a new order to the shop's spreadsheet ledger.

    Runs as a background task after the order is committed. The ledger is
    a convenience copy: failures are logged and reported through the
    return value, never raised into the order flow.
    """
    if settings.ENV == "testing":
        logger.info(
            "[TEST MODE] Sheet notification skipped",
            extra={"code": payload.get("code")}
        )
        return False

    if not settings.SHEETS_WEBHOOK_URL:
        logger.debug("Sheet webhook not configured, skipping", extra={"code": payload.get("code")})
        return False

    logger.debug(
        "Posting order to sheet",
        extra=sanitize_log_data({"payload": payload, "webhook_url": settings.SHEETS_WEBHOOK_URL})
    )

    try:
        response = httpx.post(
            settings.SHEETS_WEBHOOK_URL,
            json=payload,
            timeout=settings.SHEETS_TIMEOUT_SECONDS,
        )
        response.raise_for_status()

    except httpx.HTTPError as e:
        logger.error(
            f"Failed to post order to sheet: {str(e)}",
            extra={
                "code": payload.get("code"),
                "error": str(e),
                "error_type": type(e).__name__
            },
            exc_info=True
        )
        return False

    logger.info(
        "Order posted to sheet",
        extra={"code": payload.get("code"), "status_code": response.status_code}
    )
    return True


def build_sheet_row(order) -> dict:
    return {
        "code": order.code,
        "note": order.note,
        "pickup_time": order.pickup_time,
        "items": [
            {"name": item.name, "quantity": item.quantity, "unit_price": str(item.unit_price)}
            for item in order.line_items
        ],
        "total_amount": str(order.total_amount),
        "status": order.status,
        "created_at": order.created_at.isoformat(),
    }
