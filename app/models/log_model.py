from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, Index
from sqlalchemy.orm import relationship
from app.models.base import Base

class ActivityLog(Base):
    __tablename__ = "activity_logs"
    __table_args__ = (
        Index("ix_activity_logs_user_timestamp", "user_id", "timestamp"),
        Index("ix_activity_logs_type", "activity_type_category"),
    )

    id = Column(Integer, primary_key=True, index=True)
    timestamp = Column(DateTime, default=datetime.now, nullable=False)

    # Null for anonymous events such as failed logins
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    activity_type_category = Column(String, nullable=False)

    activity_description = Column(Text, nullable=False)

    user = relationship("Users", back_populates="activity_logs")
