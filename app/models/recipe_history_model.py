from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from .base import Base


class RecipeHistory(Base):
    __tablename__ = "recipe_history"
    __table_args__ = (
        Index("ix_recipe_history_user_viewed", "user_id", "viewed_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    recipe_name = Column(String(255), nullable=False)
    source_type = Column(String(50), nullable=False, default="database")  # database, api, ai
    viewed_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("Users", back_populates="recipe_history")
