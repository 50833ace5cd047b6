import enum


class OrderStatus(str, enum.Enum):
    PROCESSING = "Processing"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


INITIAL_STATUS = OrderStatus.PROCESSING

ORDER_STATUSES = [s.value for s in OrderStatus]


class ItemCategory(str, enum.Enum):
    MEAT = "Meat"
    VEG = "Veg"
    OTHER = "Other"


ITEM_CATEGORIES = [c.value for c in ItemCategory]
