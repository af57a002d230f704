# retailers/services/legacy_orders.py
from datetime import datetime
from decimal import Decimal
import logging
from typing import List, Optional

from retailers.models.customer import Customer
from retailers.models.legacy_order import LegacyOrder
from retailers.models.order import OrderStatus
from retailers.models.product import Product
from retailers.services.notifications import StatusUpdateResult, notify_order_event, notify_stock_update
from retailers.utils.dates import to_naive_utc, utcnow
from retailers.utils.entity_store import ConcurrencyConflictError, EntityStore
from retailers.utils.queue_client import QueueClient

logger = logging.getLogger(__name__)


class OrderRejectedError(ValueError):
    """The order request refers to unknown records or exceeds available stock."""


def get_legacy_order(store: EntityStore, order_id: str) -> Optional[LegacyOrder]:
    return store.get(LegacyOrder, LegacyOrder.PARTITION, order_id)


def backfill_legacy_prices(store: EntityStore, orders: List[LegacyOrder]) -> int:
    """Fill in prices of old orders saved without one, from the product's current price.

    Each write is conditional on the order's etag; an order changed meanwhile
    is skipped and left for the next listing.
    """
    fixed = 0
    for order in orders:
        if order.total_price is not None and order.total_price > 0:
            continue
        if not order.product_id:
            continue
        product = store.get(Product, Product.PARTITION, order.product_id)
        if product is None or product.price <= 0:
            continue

        order_id, etag = order.row_key, order.etag
        order.unit_price = product.price
        order.total_price = product.price * order.quantity
        try:
            store.update(order, etag)
            fixed += 1
        except ConcurrencyConflictError:
            logger.warning(f"Skipped price backfill of legacy order {order_id}: modified concurrently")
    if fixed:
        logger.info(f"Backfilled prices of {fixed} legacy order(s)")
    return fixed


def list_legacy_orders(store: EntityStore) -> List[LegacyOrder]:
    orders = store.get_all(LegacyOrder)
    backfill_legacy_prices(store, orders)
    return sorted(orders, key=lambda o: o.order_date, reverse=True)


def create_legacy_order(
    store: EntityStore,
    queue: QueueClient,
    *,
    customer_id: str,
    product_id: str,
    quantity: int,
    order_date: Optional[datetime] = None,
) -> LegacyOrder:
    customer = store.get(Customer, Customer.PARTITION, customer_id)
    product = store.get(Product, Product.PARTITION, product_id)
    if customer is None or product is None:
        raise OrderRejectedError("Invalid customer or product selected.")
    if product.stock_available < quantity:
        raise OrderRejectedError(f"Insufficient stock. Available: {product.stock_available}")

    customer_name = f"{customer.name} {customer.surname}"
    customer_username = customer.username
    unit_price = Decimal(product.price)

    previous_stock = product.stock_available
    product.stock_available = previous_stock - quantity

    order = LegacyOrder(
        customer_id=customer_id,
        username=customer_username,
        product_id=product_id,
        product_name=product.product_name,
        order_date=to_naive_utc(order_date) if order_date else utcnow(),
        quantity=quantity,
        unit_price=unit_price,
        total_price=unit_price * quantity,
        status=OrderStatus.SUBMITTED.value,
    )
    # The stock decrement and the order are committed together, conditional on the product etag
    store.save(adds=[order], updates=[(product, product.etag)])

    notify_order_event(queue, {
        "order_id": order.row_key,
        "customer_id": order.customer_id,
        "customer_name": customer_name,
        "product_name": order.product_name,
        "quantity": order.quantity,
        "total_price": order.total_price,
        "order_date": order.order_date,
        "status": order.status,
    })
    notify_stock_update(queue, {
        "product_id": product_id,
        "product_name": order.product_name,
        "previous_stock": previous_stock,
        "new_stock": previous_stock - quantity,
        "quantity_ordered": quantity,
        "updated_by": "Order System",
        "update_date": utcnow(),
    })
    return order


def edit_legacy_order(
    store: EntityStore,
    order_id: str,
    etag: str,
    *,
    order_date: datetime,
    quantity: int,
    unit_price: Decimal,
    status: str,
) -> Optional[LegacyOrder]:
    order = get_legacy_order(store, order_id)
    if order is None:
        return None
    order.order_date = to_naive_utc(order_date)
    order.quantity = quantity
    order.unit_price = unit_price
    order.total_price = unit_price * quantity
    order.status = status
    return store.update(order, etag)


def update_legacy_order_status(
    store: EntityStore,
    queue: QueueClient,
    order_id: str,
    new_status: str,
    updated_by: str = "System",
) -> Optional[StatusUpdateResult]:
    order = get_legacy_order(store, order_id)
    if order is None:
        return None

    previous_status = order.status
    order.status = new_status
    store.update(order, order.etag)

    notified = notify_order_event(queue, {
        "order_id": order.row_key,
        "customer_id": order.customer_id,
        "customer_name": order.username,
        "product_name": order.product_name,
        "previous_status": previous_status,
        "new_status": new_status,
        "update_date": utcnow(),
        "updated_by": updated_by,
    })
    return StatusUpdateResult(order=order, previous_status=previous_status, new_status=new_status, notified=notified)


def delete_legacy_order(store: EntityStore, order_id: str) -> bool:
    return store.delete(LegacyOrder, LegacyOrder.PARTITION, order_id)
