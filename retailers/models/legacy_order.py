# retailers/models/legacy_order.py
from sqlalchemy import Column, Integer, String, Numeric, DateTime
from retailers.database import Base
from retailers.models.entity import TableEntityMixin
from retailers.utils.dates import utcnow


# An order created by the admin / pre-login flow in the legacy entity store.
# It is linked to storefront users only through the free-text username.
class LegacyOrder(TableEntityMixin, Base):
    __tablename__ = "legacy_orders"
    PARTITION = "Order"

    customer_id = Column(String(64), nullable=False)
    username = Column(String, nullable=False, default="", index=True)
    product_id = Column(String(64), nullable=False)
    product_name = Column(String, nullable=False, default="")
    order_date = Column(DateTime, nullable=False, default=utcnow)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False, default=0)
    total_price = Column(Numeric(12, 2), nullable=False, default=0)
    status = Column(String(50), nullable=False, default="Submitted")

    @property
    def order_id(self) -> str:
        return self.row_key
