from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from retailers.database import Base
import enum

from retailers.utils.dates import utcnow


# Actions recorded by the routes
class AuditAction(str, enum.Enum):
    REGISTER = "REGISTER"
    LOGIN = "LOGIN"
    CART_ADD = "CART_ADD"
    CART_UPDATE = "CART_UPDATE"
    CART_DELETE = "CART_DELETE"
    CHECKOUT = "CHECKOUT"
    ORDER_STATUS_CHANGE = "ORDER_STATUS_CHANGE"
    LEGACY_ORDER_CREATE = "LEGACY_ORDER_CREATE"
    PRODUCT_CREATE = "PRODUCT_CREATE"
    PRODUCT_UPDATE = "PRODUCT_UPDATE"
    PRODUCT_DELETE = "PRODUCT_DELETE"


class AuditResource(str, enum.Enum):
    AUTH = "auth"
    CART = "cart"
    ORDERS = "orders"
    LEGACY_ORDERS = "legacy_orders"
    PRODUCTS = "products"


# WARNING marks a saved change whose notification could not be queued
class AuditStatus(str, enum.Enum):
    SUCCESS = "SUCCESS"
    FAIL = "FAIL"
    WARNING = "WARNING"


# Audit trail of user actions
class Log(Base):
    __tablename__ = "logs"

    id = Column(Integer, primary_key=True, index=True)

    ts = Column(DateTime, default=utcnow, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    action = Column(String(50), index=True)
    resource = Column(String(50), index=True)
    status = Column(String(20), index=True)
    ip = Column(String(64), nullable=True)

    # Action specific details, e.g. order id with old and new status
    meta = Column(JSON, nullable=True)

    user = relationship("User", lazy="joined", uselist=False)

    @property
    def username(self):
        return self.user.username if self.user else None
