"""
Weekly sales summary.

Orders created inside a window and carrying an accepted status are reduced
to three figures: meat revenue, vegetable revenue and total revenue.

Line items are bucketed by their explicit category when they have one.
Legacy items without a category fall back to a keyword match on the
lower-cased item name (any meat keyword -> meat, otherwise veg). The
fallback is approximate: "ผัดผักน้ำปลา" lands in meat because "น้ำปลา"
(fish sauce) contains "ปลา". New items should always carry a category.
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional

from core.config import settings
from core.exceptions import ValidationError
from models.enums import ItemCategory
from repositories.order_repository import OrderRepository
from schemas.order_schemas import SalesSummary
from services.status_machine import parse_status
from utils.logger import get_logger

logger = get_logger(__name__)

MEAT = "meat"
VEG = "veg"

STRATEGIES = ("auto", "structured", "heuristic")
REVENUE_SOURCES = ("buckets", "order_total")


def week_start(now: datetime) -> datetime:
    """Monday 00:00:00 of the week containing now."""
    monday = now - timedelta(days=now.weekday())
    return monday.replace(hour=0, minute=0, second=0, microsecond=0)


def to_local_naive(value: Optional[datetime]) -> Optional[datetime]:
    """Aware datetimes are converted to local wall-clock time; created_at is naive local."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def resolve_window(
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    now: Optional[datetime] = None,
) -> tuple[datetime, datetime]:
    """
    Half-open reporting window [start, end).

    Defaults to the current week so far: Monday 00:00 up to now. On Monday
    at midnight that window is empty, which summarises to zero.
    """
    start, end, now = to_local_naive(start), to_local_naive(end), to_local_naive(now)

    if end is None:
        end = now or datetime.now()
    if start is None:
        start = week_start(end)

    if start > end:
        raise ValidationError([{"field": "start", "message": "must not be later than end"}])

    return start, end


def classify_by_name(name: str, meat_keywords: Iterable[str]) -> str:
    lowered = name.lower()
    if any(keyword.lower() in lowered for keyword in meat_keywords):
        return MEAT
    return VEG


def classify_item(item, strategy: str = "auto", meat_keywords: Optional[Iterable[str]] = None) -> Optional[str]:
    """
    Bucket for a line item: MEAT, VEG, or None when it belongs to neither.

    Args:
        item: anything with `name` and `category` attributes
        strategy: "structured" (category only), "heuristic" (name only)
            or "auto" (category when present, name otherwise)
        meat_keywords: substrings marking a meat dish (default MEAT_KEYWORDS)
    """
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown classification strategy: {strategy}")

    if meat_keywords is None:
        meat_keywords = settings.MEAT_KEYWORDS

    category = item.category
    if isinstance(category, ItemCategory):
        category = category.value

    if strategy == "heuristic" or (strategy == "auto" and not category):
        return classify_by_name(item.name, meat_keywords)

    if category == ItemCategory.MEAT.value:
        return MEAT
    if category == ItemCategory.VEG.value:
        return VEG
    return None


def summarize(
    repository: OrderRepository,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    statuses: Optional[list[str]] = None,
    now: Optional[datetime] = None,
    revenue_source: Optional[str] = None,
    strategy: Optional[str] = None,
) -> SalesSummary:
    """
    Reduce the orders of a window to meat / veg / revenue totals.

    Item values are always recomputed as quantity * unit_price. Revenue
    comes from exactly one source per call:
      - "buckets": meat + veg, so items in neither bucket add nothing
      - "order_total": sum of each order's stored total_amount

    Read-only; an empty window gives zero totals.
    """
    window_start, window_end = resolve_window(start, end, now)

    if statuses is None:
        statuses = settings.SUMMARY_ACCEPTED_STATUSES
    accepted = [parse_status(s).value for s in statuses]

    revenue_source = revenue_source or settings.SUMMARY_REVENUE_SOURCE
    if revenue_source not in REVENUE_SOURCES:
        raise ValueError(f"Unknown revenue source: {revenue_source}")

    strategy = strategy or settings.CATEGORY_STRATEGY
    meat_keywords = settings.MEAT_KEYWORDS

    orders = repository.find_many(
        statuses=accepted,
        created_from=window_start,
        created_before=window_end,
        newest_first=False,
    )

    meat_total = Decimal("0")
    veg_total = Decimal("0")
    stored_total = Decimal("0")

    for order in orders:
        for item in order.line_items:
            value = Decimal(item.quantity) * Decimal(item.unit_price)
            bucket = classify_item(item, strategy, meat_keywords)
            if bucket == MEAT:
                meat_total += value
            elif bucket == VEG:
                veg_total += value
        stored_total += Decimal(order.total_amount)

    if revenue_source == "buckets":
        revenue_total = meat_total + veg_total
    else:
        revenue_total = stored_total

    logger.info(
        "Sales summary computed",
        extra={
            "window_start": window_start.isoformat(),
            "window_end": window_end.isoformat(),
            "order_count": len(orders),
            "revenue_source": revenue_source,
        }
    )

    return SalesSummary(
        window_start=window_start,
        window_end=window_end,
        meat_total=meat_total,
        veg_total=veg_total,
        revenue_total=revenue_total,
        order_count=len(orders),
        revenue_source=revenue_source,
        accepted_statuses=accepted,
    )
