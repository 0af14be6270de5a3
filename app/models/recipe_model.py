from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, JSON, func

from .base import Base


class Recipe(Base):
    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    ingredients = Column(JSON, nullable=False, default=list)
    instructions = Column(Text, nullable=False, default="No instructions provided for this recipe.")
    prep_time = Column(Integer, default=30)
    servings = Column(Integer, default=4)
    image = Column(String, nullable=True)
    is_featured = Column(Boolean, default=False)
    created_at = Column(DateTime, server_default=func.now())
