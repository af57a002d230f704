# retailers/services/cart.py
from decimal import Decimal
import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from retailers.models.cart import CartItem
from retailers.models.product import Product

logger = logging.getLogger(__name__)


def get_user_cart(db: Session, user_id: int) -> List[CartItem]:
    return (
        db.query(CartItem)
        .filter(CartItem.user_id == user_id)
        .order_by(CartItem.date_added.desc(), CartItem.id.desc())
        .all()
    )


def get_cart_item(db: Session, user_id: int, cart_id: int) -> Optional[CartItem]:
    return db.query(CartItem).filter(CartItem.id == cart_id, CartItem.user_id == user_id).first()


def cart_summary(items: List[CartItem]) -> Tuple[int, Decimal]:
    """Total number of units and total price of the given lines."""
    total_items = sum(it.quantity for it in items)
    total_price = sum((it.total_price for it in items), Decimal("0"))
    return total_items, total_price


def add_to_cart(db: Session, user_id: int, product: Product, quantity: int) -> Optional[CartItem]:
    """Add ``quantity`` units of ``product`` to the user's cart.

    An existing line for the same product is increased instead of creating a
    second one. The unit price is taken from the product only when the line is
    created. Returns None without touching the cart when quantity < 1.
    """
    if quantity < 1:
        return None

    item = db.query(CartItem).filter(
        CartItem.user_id == user_id, CartItem.product_id == product.row_key
    ).first()

    if item:
        item.quantity += quantity
    else:
        item = CartItem(
            user_id=user_id,
            product_id=product.row_key,
            product_name=product.product_name or "",
            product_image_url=product.image_url or None,
            quantity=quantity,
            unit_price=product.price,
        )
        db.add(item)

    db.commit()
    db.refresh(item)
    return item


def update_cart_item(db: Session, user_id: int, cart_id: int, quantity: int) -> Optional[CartItem]:
    if quantity < 1:
        return None
    item = get_cart_item(db, user_id, cart_id)
    if not item:
        return None
    item.quantity = quantity
    db.commit()
    db.refresh(item)
    return item


def remove_from_cart(db: Session, user_id: int, cart_id: int) -> bool:
    item = get_cart_item(db, user_id, cart_id)
    if not item:
        return False
    db.delete(item)
    db.commit()
    return True


def clear_cart(db: Session, user_id: int) -> int:
    removed = db.query(CartItem).filter(CartItem.user_id == user_id).delete()
    db.commit()
    return removed
