from models.orders import Order
from models.order_items import OrderItem
from models.enums import OrderStatus, ItemCategory

__all__ = ["Order", "OrderItem", "OrderStatus", "ItemCategory"]
