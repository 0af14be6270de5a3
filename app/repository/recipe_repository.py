from typing import List
from sqlalchemy import String, cast, delete, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.models.recipe_model import Recipe
from app.models.recipe_history_model import RecipeHistory
from app.repository.base_repository import BaseRepository


class RecipeRepository(BaseRepository[Recipe]):
    def __init__(self):
        super().__init__(Recipe)

    async def get_featured(self, db: AsyncSession, limit: int = 10) -> List[Recipe]:
        result = await db.execute(
            select(self.model)
            .filter(self.model.is_featured.is_(True))
            .order_by(self.model.created_at.desc(), self.model.id.desc())
            .limit(limit)
        )
        return result.scalars().all()

    async def search_by_ingredients(self, db: AsyncSession, ingredients: List[str], limit: int = 10) -> List[Recipe]:
        # Match any ingredient, case-insensitive, against the serialized list
        ingredients_text = func.lower(cast(self.model.ingredients, String))
        conditions = [
            ingredients_text.contains(ingredient.lower(), autoescape=True)
            for ingredient in ingredients
        ]
        result = await db.execute(
            select(self.model)
            .filter(or_(*conditions))
            .order_by(self.model.id)
            .limit(limit)
        )
        return result.scalars().all()


class RecipeHistoryRepository(BaseRepository[RecipeHistory]):
    def __init__(self):
        super().__init__(RecipeHistory)

    async def add_entry(self, db: AsyncSession, user_id: int, recipe_name: str, source_type: str = "database") -> RecipeHistory:
        entry = RecipeHistory(user_id=user_id, recipe_name=recipe_name, source_type=source_type)
        db.add(entry)
        await db.commit()
        await db.refresh(entry)
        return entry

    async def list_for_user(self, db: AsyncSession, user_id: int, limit: int = 50) -> List[RecipeHistory]:
        result = await db.execute(
            select(self.model)
            .filter(self.model.user_id == user_id)
            .order_by(self.model.viewed_at.desc(), self.model.id.desc())
            .limit(limit)
        )
        return result.scalars().all()

    async def clear_for_user(self, db: AsyncSession, user_id: int) -> int:
        result = await db.execute(delete(self.model).where(self.model.user_id == user_id))
        await db.commit()
        return result.rowcount


recipe_repository = RecipeRepository()
recipe_history_repository = RecipeHistoryRepository()
