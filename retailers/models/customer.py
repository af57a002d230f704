# retailers/models/customer.py
from sqlalchemy import Column, String
from retailers.database import Base
from retailers.models.entity import TableEntityMixin


# A customer record managed by administrators in the legacy entity store
class Customer(TableEntityMixin, Base):
    __tablename__ = "customers"
    PARTITION = "Customer"

    name = Column(String, nullable=False)
    surname = Column(String, nullable=False)
    username = Column(String, nullable=False, index=True)
    email = Column(String, nullable=False)
    shipping_address = Column(String, nullable=False, default="")

    @property
    def customer_id(self) -> str:
        return self.row_key
