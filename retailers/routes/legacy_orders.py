# retailers/routes/legacy_orders.py
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from retailers.database import get_db
from retailers.models.product import Product
from retailers.models.users import User
from retailers.schemas.order import (
    LegacyOrderCreate, LegacyOrderEdit, LegacyOrderOut, OrderStatusPatch, ProductPriceOut, StatusUpdateOut
)
from retailers.services import legacy_orders as legacy_service
from retailers.utils.audit import write_log
from retailers.utils.entity_store import ConcurrencyConflictError, EntityStore, get_store
from retailers.utils.queue_client import QueueClient, get_queue
from retailers.utils.tokenJWT import require_admin

router = APIRouter(prefix="/legacy-orders", tags=["Legacy orders"])


# List orders of the legacy store, filling in missing prices (Admin only)
@router.get("", response_model=List[LegacyOrderOut])
def list_legacy_orders(
    store: EntityStore = Depends(get_store),
    current_user: User = Depends(require_admin),
):
    return legacy_service.list_legacy_orders(store)


# Price and stock of a product, used when composing an order
@router.get("/product-price/{product_id}", response_model=ProductPriceOut)
def get_product_price(
    product_id: str,
    store: EntityStore = Depends(get_store),
    current_user: User = Depends(require_admin),
):
    product = store.get(Product, Product.PARTITION, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return ProductPriceOut(price=product.price, stock=product.stock_available, product_name=product.product_name)


@router.post("", response_model=LegacyOrderOut, status_code=status.HTTP_201_CREATED)
def create_legacy_order(
    payload: LegacyOrderCreate,
    request: Request,
    db: Session = Depends(get_db),
    store: EntityStore = Depends(get_store),
    queue: QueueClient = Depends(get_queue),
    current_user: User = Depends(require_admin),
):
    try:
        order = legacy_service.create_legacy_order(
            store,
            queue,
            customer_id=payload.customer_id,
            product_id=payload.product_id,
            quantity=payload.quantity,
            order_date=payload.order_date,
        )
    except legacy_service.OrderRejectedError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ConcurrencyConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))

    write_log(db, user_id=current_user.id, action="LEGACY_ORDER_CREATE", resource="legacy_orders",
              status="SUCCESS", ip=request.client.host,
              meta={"order_id": order.row_key, "product_id": order.product_id, "qty": order.quantity})
    return order


@router.get("/{order_id}", response_model=LegacyOrderOut)
def get_legacy_order(
    order_id: str,
    store: EntityStore = Depends(get_store),
    current_user: User = Depends(require_admin),
):
    order = legacy_service.get_legacy_order(store, order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.put("/{order_id}", response_model=LegacyOrderOut)
def edit_legacy_order(
    order_id: str,
    payload: LegacyOrderEdit,
    store: EntityStore = Depends(get_store),
    current_user: User = Depends(require_admin),
):
    try:
        order = legacy_service.edit_legacy_order(
            store,
            order_id,
            payload.etag,
            order_date=payload.order_date,
            quantity=payload.quantity,
            unit_price=payload.unit_price,
            status=payload.status,
        )
    except ConcurrencyConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.post("/{order_id}/status", response_model=StatusUpdateOut)
def update_legacy_order_status(
    order_id: str,
    payload: OrderStatusPatch,
    request: Request,
    db: Session = Depends(get_db),
    store: EntityStore = Depends(get_store),
    queue: QueueClient = Depends(get_queue),
    current_user: User = Depends(require_admin),
):
    try:
        result = legacy_service.update_legacy_order_status(
            store, queue, order_id, payload.status, updated_by=current_user.username
        )
    except ConcurrencyConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if result is None:
        raise HTTPException(status_code=404, detail="Order not found")

    write_log(db, user_id=current_user.id, action="ORDER_STATUS_CHANGE", resource="legacy_orders",
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


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_legacy_order(
    order_id: str,
    store: EntityStore = Depends(get_store),
    current_user: User = Depends(require_admin),
):
    if not legacy_service.delete_legacy_order(store, order_id):
        raise HTTPException(status_code=404, detail="Order not found")
