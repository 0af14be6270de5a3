import pytest
from datetime import datetime, timedelta
from fastapi import HTTPException

from app.models.plan_model import SubscriptionPlan
from app.models.recipe_model import Recipe
from app.models.subscription_model import Subscription
from app.models.user_model import Users
from app.modules.auth.service import UserRegistrationError, authenticate_user, register_user
from app.modules.recipes.service import recipe_service
from app.modules.search_quota.service import UNLIMITED_SEARCHES, search_quota_service
from app.modules.subscription.service import subscription_service
from app.repository.recipe_repository import recipe_history_repository
from app.schemas.search_quota_schema import SearchInfo
from app.schemas.user_schema import UserRegistration
from app.utils.security import get_password_hash


async def add_user(db, email="cook@example.com", **kwargs):
    user = Users(name="Cook", email=email, password=get_password_hash("Secret123!"), role="user", status="active", **kwargs)
    db.add(user)
    await db.commit()
    return user


@pytest.mark.asyncio
async def test_register_user(db_session):
    user = await register_user(
        db_session,
        UserRegistration(name="New Cook", email="New.Cook@Example.com", password="Secret123!"),
    )

    assert user.id is not None
    assert user.email == "new.cook@example.com"
    assert user.role == "user"
    assert user.daily_search_count == 0
    assert user.last_search_date is None


@pytest.mark.asyncio
async def test_register_duplicate_email(db_session):
    await add_user(db_session, email="dup@example.com")

    with pytest.raises(UserRegistrationError):
        await register_user(
            db_session,
            UserRegistration(name="Dup Cook", email="dup@example.com", password="Secret123!"),
        )


@pytest.mark.asyncio
async def test_authenticate_user(db_session):
    await add_user(db_session)

    assert (await authenticate_user(db_session, "cook@example.com", "Secret123!")).email == "cook@example.com"
    assert await authenticate_user(db_session, "cook@example.com", "wrong-password") is None
    assert await authenticate_user(db_session, "nobody@example.com", "Secret123!") is None


@pytest.mark.asyncio
async def test_authenticate_blocked_user(db_session):
    user = await add_user(db_session)
    user.status = "blocked"
    await db_session.commit()

    with pytest.raises(HTTPException) as exc_info:
        await authenticate_user(db_session, "cook@example.com", "Secret123!")
    assert exc_info.value.status_code == 403


@pytest.mark.asyncio
async def test_subscribe_raises_search_tier(db_session):
    user = await add_user(db_session, daily_search_count=3, last_search_date="2020-01-01")
    plan = SubscriptionPlan(name="Premium Plan", price=199, duration_days=30, max_searches_per_day=30, order=2)
    db_session.add(plan)
    await db_session.commit()

    subscription = await subscription_service.subscribe(db_session, user, plan.id)

    assert subscription.plan_type == "Premium Plan"
    assert subscription.payment_status == "completed"
    assert user.is_subscribed is True
    assert user.subscription_id == subscription.id

    subscription_status = subscription_service.get_subscription_status(user)
    assert subscription_status.is_active is True
    assert subscription_status.search_plan == "Premium"
    assert subscription_status.max_searches_per_day == 30
    assert subscription_status.days_until_expiry in (29, 30)

    info = await search_quota_service.check_and_consume(db_session, user)
    assert info.plan_name == "Premium"
    assert info.remaining_searches == 29


@pytest.mark.asyncio
async def test_subscribe_unknown_plan(db_session):
    user = await add_user(db_session)

    with pytest.raises(HTTPException) as exc_info:
        await subscription_service.subscribe(db_session, user, 404)
    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_list_plans_only_active_in_order(db_session):
    db_session.add_all([
        SubscriptionPlan(name="Pro Plan", price=299, duration_days=30, max_searches_per_day=50, order=3),
        SubscriptionPlan(name="Basic Plan", price=99, duration_days=30, max_searches_per_day=10, order=1),
        SubscriptionPlan(name="Legacy Plan", price=49, duration_days=30, max_searches_per_day=5, order=1, is_active=False),
    ])
    await db_session.commit()

    plans = await subscription_service.list_plans(db_session)

    assert [plan.name for plan in plans] == ["Basic Plan", "Pro Plan"]


@pytest.mark.asyncio
async def test_expire_subscriptions(db_session):
    user = await add_user(db_session)
    subscription = Subscription(
        user_id=user.id,
        plan_type="Basic Plan",
        start_date=datetime.utcnow() - timedelta(days=31),
        expiry_date=datetime.utcnow() - timedelta(days=1),
        amount=99,
    )
    db_session.add(subscription)
    await db_session.flush()
    user.subscription = subscription
    user.is_subscribed = True
    await db_session.commit()

    assert await subscription_service.expire_subscriptions(db_session) == 1
    await db_session.refresh(user)
    assert user.is_subscribed is False
    assert await subscription_service.expire_subscriptions(db_session) == 0


@pytest.mark.asyncio
async def test_search_recipes_matches_any_ingredient(db_session):
    user = await add_user(db_session)
    db_session.add_all([
        Recipe(name="Tomato Soup", ingredients=["Tomato", "Onion", "Garlic"]),
        Recipe(name="Omelette", ingredients=["Egg", "Butter"]),
        Recipe(name="Fruit Salad", ingredients=["Apple", "Banana"]),
    ])
    await db_session.commit()
    info = SearchInfo(max_searches=3, daily_search_count=1, remaining_searches=2, plan_name="Free")

    response = await recipe_service.search_recipes(db_session, user, ["tomato", "EGG"], info)

    assert sorted(recipe.name for recipe in response.data) == ["Omelette", "Tomato Soup"]
    assert response.remaining_searches == 2
    assert response.max_searches == 3
    history = await recipe_history_repository.list_for_user(db_session, user.id)
    assert history[0].recipe_name == "Ingredient Search: tomato, EGG"


@pytest.mark.asyncio
async def test_search_recipes_no_match(db_session):
    user = await add_user(db_session)
    info = SearchInfo(max_searches=UNLIMITED_SEARCHES, daily_search_count=9, remaining_searches=UNLIMITED_SEARCHES - 9, plan_name="Pro")

    response = await recipe_service.search_recipes(db_session, user, ["saffron"], info)

    assert response.data == []
    assert response.message == "No recipes found for these ingredients."
    assert response.remaining_searches == UNLIMITED_SEARCHES


@pytest.mark.asyncio
async def test_clear_history(db_session):
    user = await add_user(db_session)
    await recipe_history_repository.add_entry(db_session, user.id, "Ingredient Search: rice")
    await recipe_history_repository.add_entry(db_session, user.id, "Ingredient Search: beans")

    assert await recipe_service.clear_history(db_session, user.id) == 2
    assert await recipe_service.get_history(db_session, user.id) == []
