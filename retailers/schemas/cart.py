from decimal import Decimal
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

# Request schema for adding an item to the cart
class CartAddItem(BaseModel):
    product_id: str = Field(min_length=1)
    quantity: int = Field(default=1, ge=1)

# Request schema for updating cart item quantity
class CartUpdateItem(BaseModel):
    quantity: int = Field(ge=1)

# Response schema for a single cart line item
class CartItemOut(BaseModel):
    id: int
    product_id: str
    product_name: str
    product_image_url: Optional[str] = None
    quantity: int
    unit_price: Decimal
    total_price: Decimal
    date_added: datetime

    class Config:
        from_attributes = True

# Response schema for the entire cart summary
class CartOut(BaseModel):
    items: List[CartItemOut]
    total_items: int
    total_price: Decimal

# Result of a checkout
class CheckoutResult(BaseModel):
    orders_created: int
    message: str
