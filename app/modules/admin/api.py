from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_current_admin, get_db, enforce_search_limit
from app.models.user_model import Users
from app.modules.recipes.service import recipe_service
from app.modules.search_quota.service import search_quota_service
from app.repository.user_repository import user_repository
from app.schemas import recipe_schema, user_schema
from app.schemas.search_quota_schema import SearchInfo
from app.utils.activity_logger import log_activity

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(get_current_admin)],
)


@router.post("/recipes/search", response_model=recipe_schema.RecipeSearchResponse)
async def admin_search_recipes(
    request: recipe_schema.RecipeSearchRequest,
    current_admin: Users = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
    search_info: SearchInfo = Depends(enforce_search_limit),
):
    return await recipe_service.search_recipes(
        db,
        current_user=current_admin,
        ingredients=request.ingredients,
        search_info=search_info,
    )


@router.get("/users/{user_id}", response_model=user_schema.UserDetail)
async def get_user_details(user_id: int, db: AsyncSession = Depends(get_db)):
    user = await user_repository.get_user(db, user_id=user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.post("/users/{user_id}/reset-search-count")
async def reset_user_search_count(
    user_id: int,
    current_admin: Users = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    await search_quota_service.reset_search_count(db, user_id)
    await log_activity(
        db=db,
        user_id=current_admin.id,
        activity_type_category="Data/CRUD",
        activity_description=f"Admin '{current_admin.email}' reset the search count of user {user_id}.",
    )
    return {"success": True, "message": "Search count reset successfully"}
