# app/schemas/plan_schema.py
from datetime import datetime
from pydantic import BaseModel
from typing import Optional

class PlanBase(BaseModel):
    name: str
    price: int
    duration_days: int
    max_searches_per_day: int
    is_active: bool = True
    order: int = 1

class Plan(PlanBase):
    id: int
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
