# app/models/subscription_model.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Boolean, func
from sqlalchemy.orm import relationship

from .base import Base

class Subscription(Base):
    __tablename__ = 'subscriptions'
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)

    # Free text plan name, e.g. "Basic Plan"; the search tier is derived from it
    plan_type = Column(String, nullable=False)

    start_date = Column(DateTime, server_default=func.now())
    expiry_date = Column(DateTime, nullable=False)

    # pending -> completed | failed
    payment_status = Column(String, default='completed', nullable=False)
    amount = Column(Integer, nullable=False, default=0)
    is_test_subscription = Column(Boolean, default=True)

    user = relationship("Users", foreign_keys=[user_id])
