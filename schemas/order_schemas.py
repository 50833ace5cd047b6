from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class LineItemRequest(BaseModel):
    """
    One line of an order submission.

    Only types are checked here. Presence and business rules (non-empty
    name, quantity >= 1, non-negative prices, closed category set) are
    checked by OrderService so every violation is reported together.
    """
    menu_id: Optional[int] = None
    name: Optional[str] = None
    category: Optional[str] = None
    quantity: Optional[int] = None
    unit_price: Optional[Decimal] = None
    line_total: Optional[Decimal] = None


class CreateOrderRequest(BaseModel):
    # Required fields are optional here so a missing one is reported
    # together with the other violations instead of as a bare 422
    code: Optional[str] = None
    note: Optional[str] = None
    pickup_time: Optional[str] = None
    line_items: list[LineItemRequest] = Field(default_factory=list)
    total_amount: Optional[Decimal] = None


class UpdateStatusRequest(BaseModel):
    # Plain str: unknown values are reported as InvalidStatusError, not 422
    status: str


class LineItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    menu_id: Optional[int] = None
    name: str
    category: Optional[str] = None
    quantity: int
    unit_price: Decimal
    line_total: Decimal


class OrderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    code: str
    note: str
    pickup_time: str
    line_items: list[LineItemResponse]
    total_amount: Decimal
    status: str
    created_at: datetime
    updated_at: datetime


class OrderStatusView(BaseModel):
    """What a customer sees when checking an order by its code."""
    model_config = ConfigDict(from_attributes=True)

    code: str
    status: str
    note: str
    pickup_time: str
    total_amount: Decimal
    created_at: datetime


class CreateOrderResponse(BaseModel):
    message: str
    code: str
    order: OrderResponse


class UpdateStatusResponse(BaseModel):
    message: str
    order: OrderResponse


class SalesSummary(BaseModel):
    window_start: datetime
    window_end: datetime
    meat_total: Decimal
    veg_total: Decimal
    revenue_total: Decimal
    order_count: int
    revenue_source: str
    accepted_statuses: list[str]
