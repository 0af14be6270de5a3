from datetime import datetime
from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class UserBase(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None


class UserRegistration(BaseModel):
    name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=8)


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class User(UserBase):
    id: int
    role: str
    status: str
    is_subscribed: bool = False

    class Config:
        from_attributes = True


class UserDetail(User):
    subscription_id: Optional[int] = None
    daily_search_count: int = 0
    last_search_date: Optional[str] = None
    created_at: Optional[datetime] = None
