from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime

# Schema for user authentication credentials
class UserLogin(BaseModel):
    username_or_email: str = Field(min_length=1)
    password: str

# Schema for user registration requests
class UserCreate(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=6, max_length=100)
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    shipping_address: Optional[str] = None

# Output schema for user profile details
class UserResponse(BaseModel):
    id: int
    username: str
    email: str
    first_name: str
    last_name: str
    full_name: str
    role: str
    shipping_address: Optional[str] = None
    is_active: bool
    created_date: datetime
    last_login_date: Optional[datetime] = None

    class Config:
        from_attributes = True

# Schema for JWT authentication token response
class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
