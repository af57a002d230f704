# retailers/models/users.py
from sqlalchemy import Column, Integer, String, Boolean, DateTime, CheckConstraint
from retailers.database import Base
import enum

from retailers.utils.dates import utcnow


class UserRole(str, enum.Enum):
    CUSTOMER = "Customer"
    ADMIN = "Admin"


# Represents a storefront account with authentication details and system role
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    role = Column(
        String(20),
        CheckConstraint("role IN ('Customer', 'Admin')", name="ck_users_role"),
        nullable=False,
        default=UserRole.CUSTOMER.value,
    )
    shipping_address = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_date = Column(DateTime, nullable=False, default=utcnow)
    last_login_date = Column(DateTime, nullable=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value
