import logging
from datetime import date, datetime
from typing import Dict, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.models.user_model import Users
from app.repository.user_repository import user_repository
from app.schemas.search_quota_schema import SearchInfo, SearchStatus

logger = logging.getLogger(__name__)

UNLIMITED_SEARCHES = 999999

FREE_PLAN = "Free"
BASIC_PLAN = "Basic"
PREMIUM_PLAN = "Premium"
PRO_PLAN = "Pro"

# Checked in order; the first keyword found in the plan type wins
PLAN_KEYWORDS = (
    ("basic", BASIC_PLAN),
    ("premium", PREMIUM_PLAN),
    ("pro", PRO_PLAN),
)


class SearchLimitExceeded(Exception):
    """Raised when a user has used up today's searches."""
    def __init__(self, limit: int, plan: str):
        self.limit = limit
        self.plan = plan
        self.upgrade_required = plan != PRO_PLAN
        self.detail = (
            f"You have reached your daily limit of {limit} searches. "
            "Upgrade your plan for more searches!"
        )
        super().__init__(self.detail)


def today_string() -> str:
    return date.today().isoformat()


def _normalize_limit(value: int) -> int:
    return UNLIMITED_SEARCHES if value is None or value < 0 else value


def plan_search_limits() -> Dict[str, int]:
    return {
        FREE_PLAN: _normalize_limit(settings.SEARCH_LIMIT_FREE),
        BASIC_PLAN: _normalize_limit(settings.SEARCH_LIMIT_BASIC),
        PREMIUM_PLAN: _normalize_limit(settings.SEARCH_LIMIT_PREMIUM),
        PRO_PLAN: _normalize_limit(settings.SEARCH_LIMIT_PRO),
    }


def has_active_subscription(user: Users, now: Optional[datetime] = None) -> bool:
    now = now or datetime.utcnow()
    subscription = user.subscription
    return bool(
        user.is_subscribed
        and subscription is not None
        and subscription.expiry_date is not None
        and subscription.expiry_date > now
    )


def plan_name_for(plan_type: Optional[str]) -> str:
    plan_type_lower = (plan_type or "").lower()
    for keyword, plan_name in PLAN_KEYWORDS:
        if keyword in plan_type_lower:
            return plan_name
    return FREE_PLAN


def resolve_plan(user: Users, now: Optional[datetime] = None) -> Tuple[str, int]:
    """Returns (plan name, daily cap) for the user's current subscription state."""
    plan_name = FREE_PLAN
    if has_active_subscription(user, now):
        plan_name = plan_name_for(user.subscription.plan_type)
    return plan_name, plan_search_limits()[plan_name]


class SearchQuotaService:
    def free_tier_fallback(self) -> SearchInfo:
        max_searches = plan_search_limits()[FREE_PLAN]
        return SearchInfo(
            max_searches=max_searches,
            daily_search_count=0,
            remaining_searches=max_searches,
            plan_name=FREE_PLAN,
        )

    async def _load_user(self, db: AsyncSession, user_id: int) -> Users:
        user = await user_repository.get_user(db, user_id=user_id)
        if user is None:
            logger.error("User not found while checking search limits: %s", user_id)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="User not found",
            )
        return user

    async def check_and_consume(self, db: AsyncSession, user: Optional[Users]) -> SearchInfo:
        """
        Counts one search against the user's daily allowance.

        The counter is zeroed the first time the user searches on a new
        calendar day. Raises SearchLimitExceeded when nothing is left.
        """
        if user is None:
            # Kept permissive: anonymous callers get the free allowance untracked
            logger.info("No user in request, skipping search limit check")
            return self.free_tier_fallback()

        user = await self._load_user(db, user.id)
        today = today_string()

        if user.last_search_date != today:
            if await user_repository.reset_daily_search_count(db, user.id, today):
                logger.info(
                    "New day detected, reset search count for user %s (last search: %s, today: %s)",
                    user.id, user.last_search_date, today,
                )
            await db.refresh(user, attribute_names=["daily_search_count", "last_search_date"])

        plan_name, max_searches = resolve_plan(user)
        used = user.daily_search_count or 0
        remaining = max(0, max_searches - used)
        logger.info(
            "User %s plan: %s, max searches: %s, current count: %s",
            user.id, plan_name, max_searches, used,
        )

        if remaining <= 0:
            logger.info("User %s has exceeded their daily search limit of %s", user.id, max_searches)
            raise SearchLimitExceeded(limit=max_searches, plan=plan_name)

        new_count = await user_repository.increment_daily_search_count(
            db, user.id, today=today, limit=max_searches
        )
        if new_count is None:
            # Another request took the last slot between the read and the update
            logger.info("User %s lost the last search slot to a concurrent request", user.id)
            raise SearchLimitExceeded(limit=max_searches, plan=plan_name)

        return SearchInfo(
            max_searches=max_searches,
            daily_search_count=new_count,
            remaining_searches=max(0, max_searches - new_count),
            plan_name=plan_name,
        )

    async def get_search_status(self, db: AsyncSession, user: Users) -> SearchStatus:
        """Read-only view of today's usage; never resets or consumes."""
        user = await self._load_user(db, user.id)
        is_new_day = user.last_search_date != today_string()
        daily_search_count = 0 if is_new_day else (user.daily_search_count or 0)

        plan_name, max_searches = resolve_plan(user)
        unlimited = max_searches == UNLIMITED_SEARCHES
        return SearchStatus(
            plan=plan_name,
            is_subscribed=bool(user.is_subscribed),
            daily_search_count=daily_search_count,
            max_searches="unlimited" if unlimited else max_searches,
            remaining_searches="unlimited" if unlimited else max(0, max_searches - daily_search_count),
            last_search_date=user.last_search_date,
            is_new_day=is_new_day,
        )

    async def reset_search_count(self, db: AsyncSession, user_id: int) -> None:
        if await user_repository.get(db, user_id) is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        await user_repository.set_daily_search_count(db, user_id, 0)
        logger.info("Search count reset for user %s", user_id)


search_quota_service = SearchQuotaService()
