# retailers/services/history.py
"""Order history across the storefront and legacy order stores.

Storefront orders belong to a user id. Legacy orders only carry a free-text
username, so they are matched by comparing it case-insensitively with the
user's current username. A user renamed after placing a legacy order will not
see that order, and two users sharing a name see each other's legacy orders.
"""
import logging
from typing import List

from sqlalchemy.orm import Session

from retailers.models.legacy_order import LegacyOrder
from retailers.schemas.order import LegacyOrderEntry, OrderHistoryEntry, SqlOrderEntry
from retailers.services.orders import get_user_orders
from retailers.utils.entity_store import EntityStore

logger = logging.getLogger(__name__)

# Shipping history is not kept for legacy orders
LEGACY_SHIPPING_LABEL = "Legacy order store"


def get_legacy_orders_for(store: EntityStore, username: str) -> List[LegacyOrder]:
    wanted = (username or "").strip().casefold()
    if not wanted:
        return []
    return [o for o in store.get_all(LegacyOrder) if (o.username or "").strip().casefold() == wanted]


def get_order_history(db: Session, store: EntityStore, user_id: int, username: str) -> List[OrderHistoryEntry]:
    """All orders of a user from both stores, newest first."""
    entries: List[OrderHistoryEntry] = [
        SqlOrderEntry(
            order_id=o.id,
            product_name=o.product_name,
            quantity=o.quantity,
            unit_price=o.unit_price,
            total_price=o.total_price,
            status=o.status,
            order_date=o.order_date,
            shipping_address=o.shipping_address,
        )
        for o in get_user_orders(db, user_id)
    ]

    legacy = get_legacy_orders_for(store, username)
    entries.extend(
        LegacyOrderEntry(
            order_id=o.row_key,
            product_name=o.product_name,
            quantity=o.quantity,
            unit_price=o.unit_price,
            total_price=o.total_price,
            status=o.status,
            order_date=o.order_date,
            shipping_address=LEGACY_SHIPPING_LABEL,
        )
        for o in legacy
    )

    entries.sort(key=lambda e: e.order_date, reverse=True)
    logger.debug(f"Order history for user {user_id}: {len(entries) - len(legacy)} storefront, {len(legacy)} legacy")
    return entries
