from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class Recipe(BaseModel):
    id: int
    name: str
    ingredients: List[str] = []
    instructions: Optional[str] = None
    prep_time: Optional[int] = None
    servings: Optional[int] = None
    image: Optional[str] = None
    is_featured: bool = False

    class Config:
        from_attributes = True


class RecipeSearchRequest(BaseModel):
    ingredients: List[str] = Field(..., min_length=1, max_length=20)

    @field_validator("ingredients")
    @classmethod
    def strip_ingredients(cls, value: List[str]) -> List[str]:
        cleaned = [item.strip() for item in value if item and item.strip()]
        if not cleaned:
            raise ValueError("At least one ingredient is required.")
        return cleaned


class RecipeSearchResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    data: List[Recipe]
    source: str = "database"
    message: Optional[str] = None
    remaining_searches: int = Field(..., serialization_alias="remainingSearches")
    max_searches: int = Field(..., serialization_alias="maxSearches")


class RecipeHistoryEntry(BaseModel):
    id: int
    recipe_name: str
    source_type: str
    viewed_at: datetime

    class Config:
        from_attributes = True
