# retailers/routes/products.py
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from retailers.database import get_db
from retailers.models.product import Product
from retailers.models.users import User
from retailers.schemas.product import ProductCreate, ProductUpdate, ProductResponse
from retailers.utils.audit import write_log
from retailers.utils.entity_store import ConcurrencyConflictError, EntityStore, get_store
from retailers.utils.tokenJWT import require_admin

router = APIRouter(prefix="/products", tags=["Products"])


def _get_or_404(store: EntityStore, product_id: str) -> Product:
    product = store.get(Product, Product.PARTITION, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


# ---- READ ----
@router.get("", response_model=List[ProductResponse])
def list_products(store: EntityStore = Depends(get_store)):
    return store.get_all(Product)


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: str, store: EntityStore = Depends(get_store)):
    return _get_or_404(store, product_id)


# ---- WRITE (Admin only) ----
@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: ProductCreate,
    request: Request,
    db: Session = Depends(get_db),
    store: EntityStore = Depends(get_store),
    current_user: User = Depends(require_admin),
):
    product = Product(
        product_name=payload.product_name.strip(),
        description=payload.description,
        price=payload.price,
        stock_available=payload.stock_available,
        image_url=payload.image_url or "",
    )
    store.add(product)

    write_log(db, user_id=current_user.id, action="PRODUCT_CREATE", resource="products", status="SUCCESS",
              ip=request.client.host, meta={"product_id": product.row_key, "price": product.price})
    return product


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: str,
    payload: ProductUpdate,
    request: Request,
    db: Session = Depends(get_db),
    store: EntityStore = Depends(get_store),
    current_user: User = Depends(require_admin),
):
    # Load the stored record, apply the edits, write only if the etag still matches
    product = _get_or_404(store, product_id)
    product.product_name = payload.product_name.strip()
    product.description = payload.description
    product.price = payload.price
    product.stock_available = payload.stock_available
    if payload.image_url:
        product.image_url = payload.image_url

    try:
        store.update(product, payload.etag)
    except ConcurrencyConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))

    write_log(db, user_id=current_user.id, action="PRODUCT_UPDATE", resource="products", status="SUCCESS",
              ip=request.client.host, meta={"product_id": product_id, "price": product.price})
    return product


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: str,
    request: Request,
    db: Session = Depends(get_db),
    store: EntityStore = Depends(get_store),
    current_user: User = Depends(require_admin),
):
    if not store.delete(Product, Product.PARTITION, product_id):
        raise HTTPException(status_code=404, detail="Product not found")
    write_log(db, user_id=current_user.id, action="PRODUCT_DELETE", resource="products", status="SUCCESS",
              ip=request.client.host, meta={"product_id": product_id})
