# app/tasks/subscription_tasks.py
import asyncio
import logging

from app.core.celery_app import celery_app
from app.core.database import DatabaseManager
from app.modules.subscription.service import subscription_service

logger = logging.getLogger(__name__)

async def _expire_subscriptions() -> int:
    # Worker processes get their own engine; the app's engine is bound to another loop
    manager = DatabaseManager()
    try:
        async with manager.async_session_maker() as db:
            return await subscription_service.expire_subscriptions(db)
    finally:
        await manager.close()

@celery_app.task(name="tasks.check_expired_subscriptions")
def check_expired_subscriptions():
    """
    A periodic task to mark users with a lapsed subscription as unsubscribed,
    which drops their search allowance back to the free tier.
    """
    logger.info("Running periodic task: checking for expired subscriptions")
    return asyncio.run(_expire_subscriptions())
