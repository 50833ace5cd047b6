from datetime import date, datetime
from typing import Optional
from fastapi import APIRouter, Query, Request, BackgroundTasks
from starlette import status
from utils.deps import repository_dependency, admin_dependency
from schemas.order_schemas import (CreateOrderRequest, CreateOrderResponse, OrderResponse,
    OrderStatusView, SalesSummary, UpdateStatusRequest, UpdateStatusResponse)
from services.order_service import OrderService
from services.summary_service import summarize
from middleware.rate_limiter import limiter
from utils.logger import get_logger

# Setup logger
logger = get_logger(__name__)


router = APIRouter(
    prefix="/api/orders",
    tags=["orders"]
)


@router.get("", response_model=list[OrderResponse])
@limiter.limit("60/minute")
async def list_orders(request: Request, repository: repository_dependency, _: admin_dependency,
    order_status: Optional[str] = Query(None, alias="status"),
    on_date: Optional[date] = Query(None, alias="date")):
    """
    List orders newest first (staff).
    """
    orders = OrderService.list_orders(repository, status=order_status, on_date=on_date)
    return [OrderResponse.model_validate(order) for order in orders]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CreateOrderResponse)
@limiter.limit("20/minute")
async def create_order(request: Request, body: CreateOrderRequest, repository: repository_dependency,
    bg: BackgroundTasks):
    order = OrderService.create_order(body, repository, bg)

    return CreateOrderResponse(
        message="Order placed successfully",
        code=order.code,
        order=OrderResponse.model_validate(order)
    )


@router.get("/summary/weekly", response_model=SalesSummary)
@limiter.limit("30/minute")
async def weekly_summary(request: Request, repository: repository_dependency, _: admin_dependency,
    start: Optional[datetime] = None, end: Optional[datetime] = None,
    statuses: Optional[list[str]] = Query(None, alias="status")):
    """
    Meat / veg / total revenue for the current week so far (staff).

    start and end override the window; status may be repeated to widen
    the accepted statuses.
    """
    summary = summarize(repository, start=start, end=end, statuses=statuses)

    logger.info(
        "Weekly summary served",
        extra={"order_count": summary.order_count}
    )
    return summary


@router.get("/{code}", response_model=OrderStatusView)
@limiter.limit("60/minute")
async def get_order_status(request: Request, code: str, repository: repository_dependency):
    """
    Customer status check by confirmation code (any case).
    """
    order = OrderService.get_order_by_code(code, repository)
    return OrderStatusView.model_validate(order)


@router.put("/{code}", response_model=UpdateStatusResponse)
@limiter.limit("60/minute")
async def update_order_status(request: Request, code: str, body: UpdateStatusRequest,
    repository: repository_dependency, _: admin_dependency):
    """
    Set an order's status (staff).
    """
    order = OrderService.update_status(code, body.status, repository)

    return UpdateStatusResponse(
        message="Order status updated successfully",
        order=OrderResponse.model_validate(order)
    )
