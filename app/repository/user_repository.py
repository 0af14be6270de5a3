from datetime import datetime
from sqlalchemy import or_, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload
from app.models import user_model
from app.models.subscription_model import Subscription
from app.repository.base_repository import BaseRepository
from typing import Optional, List

class UserRepository(BaseRepository[user_model.Users]):
    def __init__(self):
        super().__init__(user_model.Users)

    async def create_user(self, db: AsyncSession, user: user_model.Users) -> user_model.Users:
        db.add(user)
        await db.commit()
        await db.refresh(user)
        return user

    async def get_user(self, db: AsyncSession, user_id: int) -> Optional[user_model.Users]:
        result = await db.execute(
            select(self.model)
            .options(selectinload(self.model.subscription))
            .filter(self.model.id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_user_by_email(self, db: AsyncSession, email: str) -> Optional[user_model.Users]:
        result = await db.execute(
            select(self.model)
            .options(selectinload(self.model.subscription))
            .filter(self.model.email == email.lower())
        )
        return result.scalar_one_or_none()

    async def reset_daily_search_count(self, db: AsyncSession, user_id: int, today: str) -> bool:
        """
        Zeroes the counter for a user whose last search was before today.
        Returns True when this call performed the reset.
        """
        # ISO dates order correctly as strings; the stored date never moves backward
        result = await db.execute(
            update(self.model)
            .where(
                self.model.id == user_id,
                or_(
                    self.model.last_search_date.is_(None),
                    self.model.last_search_date < today,
                ),
            )
            .values(daily_search_count=0, last_search_date=today)
            .execution_options(synchronize_session=False)
        )
        await db.commit()
        return result.rowcount > 0

    async def increment_daily_search_count(self, db: AsyncSession, user_id: int, today: str, limit: int) -> Optional[int]:
        """
        Increments the counter only while it is below `limit` and belongs to
        `today` or a later day. Returns the new count, or None when no slot was taken.
        """
        result = await db.execute(
            update(self.model)
            .where(
                self.model.id == user_id,
                self.model.daily_search_count < limit,
                self.model.last_search_date >= today,
            )
            .values(daily_search_count=self.model.daily_search_count + 1)
            .returning(self.model.daily_search_count)
            .execution_options(synchronize_session=False)
        )
        new_count = result.scalar_one_or_none()
        await db.commit()
        return new_count

    async def set_daily_search_count(self, db: AsyncSession, user_id: int, count: int = 0) -> None:
        await db.execute(
            update(self.model)
            .where(self.model.id == user_id)
            .values(daily_search_count=count)
            .execution_options(synchronize_session=False)
        )
        await db.commit()

    async def get_users_with_expired_subscription(self, db: AsyncSession, now: datetime) -> List[user_model.Users]:
        result = await db.execute(
            select(self.model)
            .join(Subscription, self.model.subscription_id == Subscription.id)
            .filter(
                self.model.is_subscribed.is_(True),
                Subscription.expiry_date <= now,
            )
        )
        return result.scalars().all()

user_repository = UserRepository()
