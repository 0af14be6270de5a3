from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_current_user, get_db, enforce_search_limit
from app.models.user_model import Users
from app.modules.recipes.service import recipe_service
from app.schemas import recipe_schema
from app.schemas.search_quota_schema import SearchInfo
from app.utils.activity_logger import log_activity

router = APIRouter(
    prefix="/recipes",
    tags=["Recipes"],
)


@router.get("/featured", response_model=List[recipe_schema.Recipe])
async def get_featured_recipes(db: AsyncSession = Depends(get_db)):
    return await recipe_service.get_featured_recipes(db)


@router.post("/search", response_model=recipe_schema.RecipeSearchResponse)
async def search_recipes(
    request: recipe_schema.RecipeSearchRequest,
    current_user: Users = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    search_info: SearchInfo = Depends(enforce_search_limit),
):
    response = await recipe_service.search_recipes(
        db,
        current_user=current_user,
        ingredients=request.ingredients,
        search_info=search_info,
    )
    await log_activity(
        db=db,
        user_id=current_user.id,
        activity_type_category="Search",
        activity_description=(
            f"User '{current_user.email}' searched recipes "
            f"({search_info.daily_search_count}/{search_info.max_searches} today)."
        ),
    )
    return response


@router.get("/history", response_model=List[recipe_schema.RecipeHistoryEntry])
async def get_recipe_history(
    current_user: Users = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await recipe_service.get_history(db, current_user.id)


@router.delete("/history")
async def clear_recipe_history(
    current_user: Users = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    deleted = await recipe_service.clear_history(db, current_user.id)
    return {"success": True, "message": "Recipe history cleared", "deleted": deleted}
