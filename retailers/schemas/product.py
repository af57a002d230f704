# schemas/product.py
from decimal import Decimal
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class ProductBase(BaseModel):
    product_name: str = Field(min_length=1)
    description: str = ""
    price: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    stock_available: int = Field(ge=0)
    image_url: Optional[str] = ""


class ProductCreate(ProductBase):
    pass


class ProductUpdate(ProductBase):
    # Concurrency token returned by the last read
    etag: str = Field(min_length=1)


class ProductResponse(BaseModel):
    product_id: str
    partition_key: str
    row_key: str
    etag: str
    timestamp: datetime
    product_name: str
    description: str
    price: Decimal
    stock_available: int
    image_url: str

    class Config:
        from_attributes = True
