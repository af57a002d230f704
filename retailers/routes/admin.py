# retailers/routes/admin.py
from fastapi import APIRouter, Depends
from typing import List
from sqlalchemy.orm import Session
from pydantic import BaseModel

from retailers.database import get_db
from retailers.models.legacy_order import LegacyOrder
from retailers.models.product import Product
from retailers.models.users import User, UserRole
from retailers.schemas.product import ProductResponse
from retailers.schemas.user import UserResponse
from retailers.services.orders import get_all_orders
from retailers.services.users import list_users
from retailers.utils.entity_store import EntityStore, get_store
from retailers.utils.tokenJWT import get_current_user, require_admin

router = APIRouter(tags=["Admin"])

FEATURED_PRODUCTS = 6

# Schema for the dashboard counters
class DashboardResponse(BaseModel):
    customer_count: int
    product_count: int
    order_count: int
    featured_products: List[ProductResponse]


# All accounts, customers first (Admin only)
@router.get("/users", response_model=List[UserResponse])
def get_all_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    return list_users(db)


# Counters shown on the home page; orders from both stores are counted
@router.get("/dashboard", response_model=DashboardResponse)
def dashboard(
    db: Session = Depends(get_db),
    store: EntityStore = Depends(get_store),
    current_user: User = Depends(get_current_user)
):
    customers = [u for u in list_users(db) if u.role == UserRole.CUSTOMER.value]
    products = store.get_all(Product)
    order_count = len(get_all_orders(db)) + len(store.get_all(LegacyOrder))

    return {
        "customer_count": len(customers),
        "product_count": len(products),
        "order_count": order_count,
        "featured_products": products[:FEATURED_PRODUCTS],
    }
