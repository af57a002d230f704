from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class CustomerBase(BaseModel):
    name: str = Field(min_length=1)
    surname: str = Field(min_length=1)
    username: str = Field(min_length=1)
    email: EmailStr
    shipping_address: str = ""


class CustomerCreate(CustomerBase):
    pass


class CustomerUpdate(CustomerBase):
    etag: str = Field(min_length=1)


class CustomerResponse(BaseModel):
    customer_id: str
    partition_key: str
    row_key: str
    etag: Optional[str] = None
    timestamp: Optional[datetime] = None
    name: str
    surname: str
    username: str
    email: str
    shipping_address: str

    class Config:
        from_attributes = True
