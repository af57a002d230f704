# retailers/services/users.py
import logging
from typing import List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from retailers.models.users import User, UserRole
from retailers.utils.dates import utcnow
from retailers.utils.hashing import get_password_hash, verify_password

logger = logging.getLogger(__name__)


class DuplicateUserError(ValueError):
    """Raised when a username or email is already registered."""

    def __init__(self, field: str, value: str):
        super().__init__(f"{field} '{value}' is already registered")
        self.field = field
        self.value = value


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username.strip()).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(func.lower(User.email) == _normalize_email(email)).first()


def authenticate_user(db: Session, username_or_email: str, password: str) -> Optional[User]:
    """Return the active user matching the username or email and password, else None."""
    login = username_or_email.strip()
    user = db.query(User).filter(
        or_(User.username == login, func.lower(User.email) == login.lower()),
        User.is_active.is_(True),
    ).first()
    if not user or not verify_password(password, user.password_hash):
        return None
    return user


def register_user(
    db: Session,
    *,
    username: str,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    shipping_address: Optional[str] = None,
    role: UserRole = UserRole.CUSTOMER,
) -> User:
    username = username.strip()
    email = _normalize_email(email)

    if get_user_by_username(db, username):
        raise DuplicateUserError("Username", username)
    if get_user_by_email(db, email):
        raise DuplicateUserError("Email", email)

    user = User(
        username=username,
        email=email,
        password_hash=get_password_hash(password),
        first_name=first_name,
        last_name=last_name,
        role=role.value,
        shipping_address=shipping_address or None,
        is_active=True,
        created_date=utcnow(),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"New user registered: {user.username}")
    return user


def update_last_login(db: Session, user_id: int) -> None:
    db.query(User).filter(User.id == user_id).update({User.last_login_date: utcnow()})
    db.commit()


def list_users(db: Session) -> List[User]:
    # Customers sort before Admins, matching the admin screens
    return db.query(User).order_by(User.role.desc(), User.id).all()
