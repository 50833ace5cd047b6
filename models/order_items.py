from core.database import Base
from sqlalchemy import (Column, Integer, String, ForeignKey, Numeric, Enum)
from sqlalchemy.orm import relationship
from .enums import ITEM_CATEGORIES

class OrderItem(Base):
    __tablename__ = "order_items"

    #pk
    id = Column(Integer, primary_key=True, index=True)

    #fk
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False)

    #relationships
    order = relationship("Order", back_populates="line_items")

    position = Column(Integer, nullable=False)
    menu_id = Column(Integer, nullable=True)
    name = Column(String, nullable=False)
    # NULL for legacy items; the weekly summary infers the bucket from the name
    category = Column(Enum(*ITEM_CATEGORIES, name="item_category"), nullable=True)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    line_total = Column(Numeric(10, 2), nullable=False)
