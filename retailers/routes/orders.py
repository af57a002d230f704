# retailers/routes/orders.py
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from retailers.database import get_db
from retailers.models.users import User
from retailers.schemas.order import AdminOrderOut, OrderHistory, OrderOut, OrderStatusPatch, StatusUpdateOut
from retailers.services import orders as order_service
from retailers.services.history import get_order_history
from retailers.utils.audit import write_log
from retailers.utils.entity_store import EntityStore, get_store
from retailers.utils.queue_client import QueueClient, get_queue
from retailers.utils.tokenJWT import get_current_user, require_admin

router = APIRouter(prefix="/orders", tags=["Orders"])


# Orders of the current user from both order stores, newest first
@router.get("", response_model=OrderHistory)
def list_my_orders(
    db: Session = Depends(get_db),
    store: EntityStore = Depends(get_store),
    current_user: User = Depends(get_current_user)
):
    entries = get_order_history(db, store, current_user.id, current_user.username)
    return OrderHistory(
        items=entries,
        has_sql_orders=any(e.source == "sql" for e in entries),
        has_legacy_orders=any(e.source == "legacy" for e in entries),
    )


# All storefront orders with their customers (Admin only)
@router.get("/all", response_model=List[AdminOrderOut])
def list_all_orders(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    return [
        AdminOrderOut(
            **OrderOut.model_validate(order).model_dump(),
            username=user.username,
            customer_name=user.full_name,
        )
        for order, user in order_service.get_all_orders(db)
    ]


# Overwrite the status of a storefront order (Admin only)
@router.patch("/{order_id}/status", response_model=StatusUpdateOut)
def update_order_status(
    order_id: int,
    payload: OrderStatusPatch,
    request: Request,
    db: Session = Depends(get_db),
    queue: QueueClient = Depends(get_queue),
    current_user: User = Depends(require_admin)
):
    result = order_service.update_order_status(db, queue, order_id, payload.status, updated_by=current_user.username)
    if result is None:
        raise HTTPException(status_code=404, detail="Order not found")

    write_log(db, user_id=current_user.id, action="ORDER_STATUS_CHANGE", resource="orders",
              status="SUCCESS" if result.notified else "WARNING", ip=request.client.host,
              meta={"order_id": order_id, "old": result.previous_status, "new": result.new_status,
                    "notified": result.notified})

    message = f"Order status updated to {result.new_status}!"
    if not result.notified:
        message += " The order notification could not be queued."
    return StatusUpdateOut(
        order_id=order_id,
        previous_status=result.previous_status,
        new_status=result.new_status,
        notified=result.notified,
        message=message,
    )
