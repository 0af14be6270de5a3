# app/schemas/subscription_schema.py
from pydantic import BaseModel
from typing import Optional
from datetime import datetime

class SubscriptionCreate(BaseModel):
    plan_id: int

class Subscription(BaseModel):
    id: int
    user_id: int
    plan_type: str
    start_date: Optional[datetime] = None
    expiry_date: datetime
    payment_status: str
    amount: int
    is_test_subscription: bool = True

    class Config:
        from_attributes = True

class SubscriptionStatus(BaseModel):
    is_subscribed: bool
    is_active: bool
    plan_type: Optional[str] = None
    search_plan: str
    max_searches_per_day: int
    expiry_date: Optional[datetime] = None
    days_until_expiry: Optional[int] = None
