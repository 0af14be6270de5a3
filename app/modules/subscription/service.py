import logging
from datetime import datetime, timedelta
from typing import List

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Subscription, SubscriptionPlan, Users
from app.modules.search_quota.service import has_active_subscription, resolve_plan
from app.repository.plan_repository import plan_repository
from app.repository.user_repository import user_repository
from app.schemas.subscription_schema import SubscriptionStatus

logger = logging.getLogger(__name__)

class SubscriptionService:
    async def list_plans(self, db: AsyncSession) -> List[SubscriptionPlan]:
        return await plan_repository.list_active(db)

    async def subscribe(self, db: AsyncSession, user: Users, plan_id: int) -> Subscription:
        """
        Starts a subscription for the user without taking payment (test mode).
        Replaces whatever subscription the user had before.
        """
        plan = await plan_repository.get_active(db, plan_id)
        if not plan:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Plan not found")

        now = datetime.utcnow()
        subscription = Subscription(
            user_id=user.id,
            plan_type=plan.name,
            start_date=now,
            expiry_date=now + timedelta(days=plan.duration_days),
            payment_status="completed",
            amount=plan.price,
            is_test_subscription=True,
        )
        db.add(subscription)
        await db.flush()

        user.subscription_id = subscription.id
        user.subscription = subscription
        user.is_subscribed = True
        await db.commit()
        await db.refresh(subscription)

        logger.info("User %s subscribed to '%s' until %s", user.id, plan.name, subscription.expiry_date)
        return subscription

    def get_subscription_status(self, user: Users) -> SubscriptionStatus:
        now = datetime.utcnow()
        subscription = user.subscription
        search_plan, max_searches = resolve_plan(user, now)

        days_until_expiry = None
        if subscription and subscription.expiry_date:
            days_until_expiry = max((subscription.expiry_date - now).days, 0)

        return SubscriptionStatus(
            is_subscribed=bool(user.is_subscribed),
            is_active=has_active_subscription(user, now),
            plan_type=subscription.plan_type if subscription else None,
            search_plan=search_plan,
            max_searches_per_day=max_searches,
            expiry_date=subscription.expiry_date if subscription else None,
            days_until_expiry=days_until_expiry,
        )

    async def expire_subscriptions(self, db: AsyncSession) -> int:
        """Marks users whose subscription has run out as unsubscribed."""
        expired_users = await user_repository.get_users_with_expired_subscription(db, datetime.utcnow())
        if not expired_users:
            logger.info("No expired subscriptions found.")
            return 0

        for user in expired_users:
            logger.info("Subscription for user %s has expired. Updating status.", user.id)
            user.is_subscribed = False

        await db.commit()
        logger.info("Successfully processed %d expired subscriptions.", len(expired_users))
        return len(expired_users)

subscription_service = SubscriptionService()
