from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.models.plan_model import SubscriptionPlan
from app.repository.base_repository import BaseRepository


class PlanRepository(BaseRepository[SubscriptionPlan]):
    def __init__(self):
        super().__init__(SubscriptionPlan)

    async def list_active(self, db: AsyncSession) -> List[SubscriptionPlan]:
        result = await db.execute(
            select(self.model)
            .filter(self.model.is_active.is_(True))
            .order_by(self.model.order, self.model.price)
        )
        return result.scalars().all()

    async def get_active(self, db: AsyncSession, plan_id: int) -> Optional[SubscriptionPlan]:
        plan = await self.get(db, plan_id)
        if plan is None or not plan.is_active:
            return None
        return plan


plan_repository = PlanRepository()
