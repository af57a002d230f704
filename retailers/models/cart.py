# retailers/models/cart.py
from decimal import Decimal
from sqlalchemy import Column, Integer, ForeignKey, String, DateTime, Numeric, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship
from retailers.database import Base

from retailers.utils.dates import utcnow


# A single product line in a user's cart.
# product_id is the row key of the product in the legacy entity store, not a foreign key.
class CartItem(Base):
    __tablename__ = "cart"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    product_id = Column(String(64), nullable=False)
    product_name = Column(String, nullable=False, default="")
    product_image_url = Column(String, nullable=True)
    quantity = Column(Integer, CheckConstraint("quantity >= 1", name="ck_cart_quantity"), nullable=False, default=1)
    unit_price = Column(Numeric(10, 2), nullable=False) # Price captured when the line was created
    date_added = Column(DateTime, nullable=False, default=utcnow)

    user = relationship("User")

    __table_args__ = (
        # One line per (user, product)
        UniqueConstraint("user_id", "product_id", name="uq_cart_user_product"),
    )

    @property
    def total_price(self) -> Decimal:
        return Decimal(self.quantity) * Decimal(self.unit_price)
