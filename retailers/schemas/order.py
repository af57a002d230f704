from decimal import Decimal
from pydantic import BaseModel, Field
from typing import Annotated, List, Literal, Optional, Union
from datetime import datetime


# A storefront order as shown to administrators
class OrderOut(BaseModel):
    id: int
    user_id: int
    product_id: str
    product_name: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal
    status: str
    shipping_address: str
    order_date: datetime

    class Config:
        from_attributes = True


class AdminOrderOut(OrderOut):
    username: str
    customer_name: str


# Schema for updating order status
class OrderStatusPatch(BaseModel):
    status: str = Field(min_length=1, max_length=50)


class StatusUpdateOut(BaseModel):
    order_id: Union[int, str]
    previous_status: str
    new_status: str
    notified: bool
    message: str


# Order history entries. Storefront and legacy orders are told apart by "source".
class _HistoryEntryBase(BaseModel):
    product_name: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal
    status: str
    order_date: datetime
    shipping_address: str


class SqlOrderEntry(_HistoryEntryBase):
    source: Literal["sql"] = "sql"
    order_id: int


class LegacyOrderEntry(_HistoryEntryBase):
    source: Literal["legacy"] = "legacy"
    order_id: str


OrderHistoryEntry = Annotated[Union[SqlOrderEntry, LegacyOrderEntry], Field(discriminator="source")]


class OrderHistory(BaseModel):
    items: List[OrderHistoryEntry]
    has_sql_orders: bool
    has_legacy_orders: bool


# Legacy store orders
class LegacyOrderCreate(BaseModel):
    customer_id: str = Field(min_length=1)
    product_id: str = Field(min_length=1)
    quantity: int = Field(ge=1)
    order_date: Optional[datetime] = None


class LegacyOrderEdit(BaseModel):
    etag: str = Field(min_length=1)
    order_date: datetime
    quantity: int = Field(ge=1)
    unit_price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    status: str = Field(min_length=1, max_length=50)


class LegacyOrderOut(BaseModel):
    order_id: str
    partition_key: str
    row_key: str
    etag: str
    customer_id: str
    username: str
    product_id: str
    product_name: str
    order_date: datetime
    quantity: int
    unit_price: Decimal
    total_price: Decimal
    status: str

    class Config:
        from_attributes = True


class ProductPriceOut(BaseModel):
    price: Decimal
    stock: int
    product_name: str
