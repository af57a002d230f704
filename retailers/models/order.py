# retailers/models/order.py
from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from retailers.database import Base
import enum

from retailers.utils.dates import utcnow


# Known status values. The status column itself accepts any string.
class OrderStatus(str, enum.Enum):
    SUBMITTED = "Submitted"
    PROCESSING = "Processing"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


# An order placed through checkout: one row per purchased product
class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    product_id = Column(String(64), nullable=False)
    product_name = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    total_price = Column(Numeric(12, 2), nullable=False) # Fixed at checkout
    status = Column(String(50), nullable=False, default=OrderStatus.SUBMITTED.value)
    shipping_address = Column(String, nullable=False)
    order_date = Column(DateTime, nullable=False, default=utcnow, index=True)

    user = relationship("User")
