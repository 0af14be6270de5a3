import re
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    func,
)
from sqlalchemy.orm import relationship, validates
from app.models.base import Base
from sqlalchemy import Boolean

SEARCH_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class Users(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255))
    role = Column(String(50), nullable=False, default="user")
    # active | blocked | inactive
    status = Column(String(20), nullable=False, default="active")

    is_subscribed = Column(Boolean, default=False, nullable=False)
    subscription_id = Column(
        Integer,
        ForeignKey("subscriptions.id", use_alter=True, name="fk_users_subscription_id"),
        nullable=True,
    )

    # Search quota state, reset once per calendar day
    daily_search_count = Column(Integer, default=0, nullable=False)
    last_search_date = Column(String(10), nullable=True)  # YYYY-MM-DD

    created_at = Column(DateTime, server_default=func.now())

    # subscriptions.user_id points back here, so the link is written in a second UPDATE
    subscription = relationship("Subscription", foreign_keys=[subscription_id], post_update=True)
    activity_logs = relationship("ActivityLog", back_populates="user")
    recipe_history = relationship("RecipeHistory", back_populates="user")

    @validates("last_search_date")
    def validate_last_search_date(self, key, value):
        if value is not None and not SEARCH_DATE_PATTERN.match(value):
            raise ValueError(f"{value} is not a valid date string in YYYY-MM-DD format!")
        return value
