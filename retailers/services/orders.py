# retailers/services/orders.py
import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from retailers.models.cart import CartItem
from retailers.models.order import Order, OrderStatus
from retailers.models.users import User
from retailers.services.notifications import StatusUpdateResult, notify_order_event
from retailers.utils.dates import utcnow
from retailers.utils.queue_client import QueueClient

logger = logging.getLogger(__name__)

NO_ADDRESS = "No address provided"


def create_orders_from_cart(db: Session, user_id: int) -> int:
    """Turn every cart line of the user into an order and empty the cart.

    One order row is written per cart line, then the cart is cleared, all in
    a single transaction. Any failure rolls everything back and is re-raised,
    leaving the cart as it was. Returns the number of orders created, 0 for
    an empty cart.
    """
    try:
        rows = (
            db.query(CartItem, User.shipping_address)
            .join(User, CartItem.user_id == User.id)
            .filter(CartItem.user_id == user_id)
            .order_by(CartItem.id)
            .with_for_update(of=CartItem)
            .all()
        )
        if not rows:
            db.rollback()
            return 0

        now = utcnow()
        for line, shipping_address in rows:
            db.add(Order(
                user_id=user_id,
                product_id=line.product_id,
                product_name=line.product_name,
                quantity=line.quantity,
                unit_price=line.unit_price,
                total_price=line.total_price,
                status=OrderStatus.SUBMITTED.value,
                shipping_address=shipping_address or NO_ADDRESS,
                order_date=now,
            ))
            db.flush()

        db.query(CartItem).filter(CartItem.user_id == user_id).delete(synchronize_session=False)
        db.commit()
    except Exception:
        db.rollback()
        logger.exception(f"Checkout failed for user {user_id}, transaction rolled back")
        raise

    logger.info(f"User {user_id} checked out {len(rows)} order(s)")
    return len(rows)


def get_order(db: Session, order_id: int) -> Optional[Order]:
    return db.get(Order, order_id)


def get_user_orders(db: Session, user_id: int) -> List[Order]:
    return (
        db.query(Order)
        .filter(Order.user_id == user_id)
        .order_by(Order.order_date.desc(), Order.id.desc())
        .all()
    )


def get_all_orders(db: Session) -> List[Tuple[Order, User]]:
    return (
        db.query(Order, User)
        .join(User, Order.user_id == User.id)
        .order_by(Order.order_date.desc(), Order.id.desc())
        .all()
    )


def update_order_status(
    db: Session,
    queue: QueueClient,
    order_id: int,
    new_status: str,
    updated_by: str = "System",
) -> Optional[StatusUpdateResult]:
    """Overwrite the order status and queue a notification about the change.

    Any status may follow any other. The status change is committed before
    the notification is sent; ``notified`` is False when queuing failed.
    """
    order = db.get(Order, order_id)
    if order is None:
        return None

    previous_status = order.status
    order.status = new_status
    db.commit()
    db.refresh(order)

    notified = notify_order_event(queue, {
        "order_id": order.id,
        "customer_id": order.user_id,
        "customer_name": order.user.username if order.user else "",
        "product_name": order.product_name,
        "previous_status": previous_status,
        "new_status": new_status,
        "update_date": utcnow(),
        "updated_by": updated_by,
    })
    return StatusUpdateResult(order=order, previous_status=previous_status, new_status=new_status, notified=notified)
