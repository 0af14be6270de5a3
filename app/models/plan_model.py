# app/models/plan_model.py
from sqlalchemy import Column, Integer, String, Boolean, Index, DateTime, func
from .base import Base

class SubscriptionPlan(Base):
    __tablename__ = 'subscription_plans'
    __table_args__ = (
        Index("ix_subscription_plans_is_active", "is_active"),
    )
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    price = Column(Integer, nullable=False)
    duration_days = Column(Integer, nullable=False, default=30)
    max_searches_per_day = Column(Integer, nullable=False)
    is_active = Column(Boolean, default=True)
    order = Column(Integer, nullable=False, default=1)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
