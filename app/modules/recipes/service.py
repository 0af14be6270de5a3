import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.models.recipe_model import Recipe
from app.models.recipe_history_model import RecipeHistory
from app.models.user_model import Users
from app.modules.search_quota.service import UNLIMITED_SEARCHES
from app.repository.recipe_repository import recipe_repository, recipe_history_repository
from app.schemas.recipe_schema import Recipe as RecipeOut, RecipeSearchResponse
from app.schemas.search_quota_schema import SearchInfo

logger = logging.getLogger(__name__)


class RecipeService:
    async def get_featured_recipes(self, db: AsyncSession) -> List[Recipe]:
        return await recipe_repository.get_featured(db, limit=settings.SEARCH_RESULTS_LIMIT)

    async def search_recipes(
        self,
        db: AsyncSession,
        current_user: Users,
        ingredients: List[str],
        search_info: SearchInfo,
    ) -> RecipeSearchResponse:
        recipes = await recipe_repository.search_by_ingredients(
            db, ingredients, limit=settings.SEARCH_RESULTS_LIMIT
        )
        logger.info("Found %d recipes for ingredients %s", len(recipes), ingredients)

        await recipe_history_repository.add_entry(
            db,
            user_id=current_user.id,
            recipe_name=f"Ingredient Search: {', '.join(ingredients)}",
            source_type="database",
        )

        unlimited = search_info.max_searches == UNLIMITED_SEARCHES
        return RecipeSearchResponse(
            data=[RecipeOut.model_validate(recipe) for recipe in recipes],
            source="database",
            message=None if recipes else "No recipes found for these ingredients.",
            remaining_searches=UNLIMITED_SEARCHES if unlimited else search_info.remaining_searches,
            max_searches=search_info.max_searches,
        )

    async def get_history(self, db: AsyncSession, user_id: int) -> List[RecipeHistory]:
        return await recipe_history_repository.list_for_user(db, user_id)

    async def clear_history(self, db: AsyncSession, user_id: int) -> int:
        return await recipe_history_repository.clear_for_user(db, user_id)


recipe_service = RecipeService()
