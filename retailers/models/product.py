# retailers/models/product.py
from sqlalchemy import Column, Integer, String, Numeric, CheckConstraint
from retailers.database import Base
from retailers.models.entity import TableEntityMixin

# Model Product
# A catalogue item held in the legacy entity store.
# row_key doubles as the product id referenced by cart lines and orders.
class Product(TableEntityMixin, Base):
    __tablename__ = "products"
    PARTITION = "Product"

    product_name = Column(String, nullable=False, index=True)
    description = Column(String, nullable=False, default="")

    # Price is stored as a fixed-point decimal
    price = Column(Numeric(10, 2), CheckConstraint("price >= 0", name="ck_products_price"), nullable=False)
    stock_available = Column(Integer, CheckConstraint("stock_available >= 0", name="ck_products_stock"), nullable=False, default=0)

    # Optional product image URL
    image_url = Column(String, nullable=False, default="")

    @property
    def product_id(self) -> str:
        return self.row_key
