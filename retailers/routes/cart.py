# retailers/routes/cart.py
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from retailers.database import get_db
from retailers.models.product import Product
from retailers.models.users import User
from retailers.schemas.cart import CartAddItem, CartUpdateItem, CartOut, CartItemOut, CheckoutResult
from retailers.services import cart as cart_service
from retailers.services.orders import create_orders_from_cart
from retailers.utils.audit import write_log
from retailers.utils.entity_store import EntityStore, get_store
from retailers.utils.tokenJWT import require_customer

router = APIRouter(prefix="/cart", tags=["Cart"])

def _cart_to_out(db: Session, user_id: int) -> CartOut:
    items = cart_service.get_user_cart(db, user_id)
    total_items, total_price = cart_service.cart_summary(items)
    return CartOut(
        items=[CartItemOut.model_validate(it) for it in items],
        total_items=total_items,
        total_price=total_price,
    )

@router.get("", response_model=CartOut)
def get_cart(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_customer)
):
    return _cart_to_out(db, current_user.id)

@router.post("/add", response_model=CartOut)
def add_to_cart(
    payload: CartAddItem,
    request: Request,
    db: Session = Depends(get_db),
    store: EntityStore = Depends(get_store),
    current_user: User = Depends(require_customer)
):
    product = store.get(Product, Product.PARTITION, payload.product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    # Validate stock availability
    if product.stock_available < payload.quantity:
        raise HTTPException(status_code=400, detail=f"Only {product.stock_available} units available in stock")

    item = cart_service.add_to_cart(db, current_user.id, product, payload.quantity)

    out = _cart_to_out(db, current_user.id)
    write_log(
        db,
        user_id=current_user.id,
        action="CART_ADD",
        resource="cart",
        status="SUCCESS",
        ip=request.client.host,
        meta={"product_id": payload.product_id, "qty": payload.quantity, "line_qty": item.quantity, "total": out.total_price},
    )
    return out

@router.put("/items/{item_id}", response_model=CartOut)
def update_cart_item(
    item_id: int,
    payload: CartUpdateItem,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_customer)
):
    item = cart_service.update_cart_item(db, current_user.id, item_id, payload.quantity)
    if not item:
        raise HTTPException(status_code=404, detail="Cart item not found")

    out = _cart_to_out(db, current_user.id)
    write_log(
        db,
        user_id=current_user.id,
        action="CART_UPDATE",
        resource="cart",
        status="SUCCESS",
        ip=request.client.host,
        meta={"item_id": item_id, "qty": payload.quantity, "total": out.total_price},
    )
    return out

@router.delete("/items/{item_id}", response_model=CartOut)
def delete_cart_item(
    item_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_customer)
):
    if not cart_service.remove_from_cart(db, current_user.id, item_id):
        raise HTTPException(status_code=404, detail="Cart item not found")

    out = _cart_to_out(db, current_user.id)
    write_log(
        db,
        user_id=current_user.id,
        action="CART_DELETE",
        resource="cart",
        status="SUCCESS",
        ip=request.client.host,
        meta={"item_id": item_id, "cart_items": len(out.items), "total": out.total_price},
    )
    return out

# Convert the whole cart into orders
@router.post("/checkout", response_model=CheckoutResult)
def checkout(
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_customer)
):
    try:
        created = create_orders_from_cart(db, current_user.id)
    except Exception as e:
        write_log(db, user_id=current_user.id, action="CHECKOUT", resource="cart", status="FAIL",
                  ip=request.client.host, meta={"error": str(e)})
        raise HTTPException(status_code=500, detail="An error occurred during checkout")

    if created == 0:
        raise HTTPException(status_code=400, detail="Your cart is empty")

    write_log(db, user_id=current_user.id, action="CHECKOUT", resource="cart", status="SUCCESS",
              ip=request.client.host, meta={"orders_created": created})
    return CheckoutResult(
        orders_created=created,
        message=f"Successfully placed {created} order(s)! Check your orders to see the status.",
    )
