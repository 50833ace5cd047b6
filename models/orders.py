from core.database import Base
from sqlalchemy.orm import relationship
from sqlalchemy import (Column, Integer, String, Numeric, Enum)
from .enums import ORDER_STATUSES, INITIAL_STATUS
from .mixins import CreatedAtMixin, UpdatedAtMixin

class Order(Base, CreatedAtMixin, UpdatedAtMixin):
    __tablename__ = "orders"

    #pk
    id = Column(Integer, primary_key=True, index=True)

    # public confirmation code, uppercase [0-9A-Z]{8}
    code = Column(String(8), unique=True, nullable=False, index=True)

    #relationships
    line_items = relationship(
        "OrderItem",
        back_populates="order",
        order_by="OrderItem.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    note = Column(String, nullable=False)
    pickup_time = Column(String(5), nullable=False)
    total_amount = Column(Numeric(10, 2), nullable=False)
    status = Column(Enum(*ORDER_STATUSES, name="order_status"), nullable=False, default=INITIAL_STATUS.value)
