from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db, get_current_user
from app.models.user_model import Users
from app.modules.subscription.service import subscription_service
from app.schemas import plan_schema, subscription_schema
from app.utils.activity_logger import log_activity

router = APIRouter(
    prefix="/subscriptions",
    tags=["Subscription"],
)


@router.get("/plans", response_model=List[plan_schema.Plan])
async def get_plans(db: AsyncSession = Depends(get_db)):
    return await subscription_service.list_plans(db)


@router.post("", response_model=subscription_schema.Subscription, status_code=status.HTTP_201_CREATED)
async def subscribe(
    request: subscription_schema.SubscriptionCreate,
    current_user: Users = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    subscription = await subscription_service.subscribe(db, current_user, plan_id=request.plan_id)
    await log_activity(
        db=db,
        user_id=current_user.id,
        activity_type_category="Subscription",
        activity_description=f"User '{current_user.email}' subscribed to '{subscription.plan_type}'.",
    )
    return subscription


@router.get("/status", response_model=subscription_schema.SubscriptionStatus)
async def get_subscription_status(current_user: Users = Depends(get_current_user)):
    return subscription_service.get_subscription_status(current_user)
