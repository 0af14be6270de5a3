from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_current_user, get_db
from app.models.user_model import Users
from app.modules.search_quota.service import search_quota_service
from app.schemas.search_quota_schema import SearchStatus

router = APIRouter(
    prefix="/users",
    tags=["Users"],
)


@router.get("/search-limits", response_model=SearchStatus)
async def get_search_limits(
    current_user: Users = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Current plan and today's search usage. Does not count as a search.
    """
    return await search_quota_service.get_search_status(db, current_user)
