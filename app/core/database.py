from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from app.core.config import settings
from typing import AsyncGenerator
import asyncio
import logging
from sqlalchemy.future import select
from app.utils.security import get_password_hash
from app.models.base import Base

import app.models

logger = logging.getLogger(__name__)

DEFAULT_PLANS = [
    {"name": "Basic Plan", "price": 99, "duration_days": 30, "max_searches_per_day": 10, "order": 1},
    {"name": "Premium Plan", "price": 199, "duration_days": 30, "max_searches_per_day": 30, "order": 2},
    {"name": "Pro Plan", "price": 299, "duration_days": 30, "max_searches_per_day": 50, "order": 3},
]

class DatabaseManager:
    def __init__(self, database_url: str = None):
        """Initializes the database engine and session maker upon creation."""
        self.engine = create_async_engine(database_url or settings.DATABASE_URL, echo=False)
        self.async_session_maker = async_sessionmaker(
            self.engine, expire_on_commit=False, class_=AsyncSession
        )

    async def close(self):
        """Closes the database engine connections."""
        if self.engine:
            await self.engine.dispose()

    async def get_db_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provides a database session."""
        async with self.async_session_maker() as session:
            yield session

db_manager = DatabaseManager()

async def create_admin(db_session):
    """Creates the initial admin user from environment variables or defaults."""
    if settings.ADMIN_PASSWORD == "admin":
        logger.warning("ADMIN_PASSWORD not set. Using default password for %s", settings.ADMIN_EMAIL)

    from app.models.user_model import Users as UserModel
    result = await db_session.execute(select(UserModel).filter(UserModel.email == settings.ADMIN_EMAIL))
    if result.scalar_one_or_none():
        logger.info("Admin user '%s' already exists.", settings.ADMIN_EMAIL)
        return

    admin = UserModel(
        name="Admin",
        email=settings.ADMIN_EMAIL,
        password=get_password_hash(settings.ADMIN_PASSWORD),
        role="admin",
        status="active",
    )
    db_session.add(admin)
    await db_session.commit()
    logger.info("Admin user '%s' created successfully.", settings.ADMIN_EMAIL)

async def seed_plans(db_session):
    """Inserts the default plan catalogue when it is empty."""
    from app.models.plan_model import SubscriptionPlan
    result = await db_session.execute(select(SubscriptionPlan.id).limit(1))
    if result.scalar_one_or_none() is not None:
        return

    for plan in DEFAULT_PLANS:
        db_session.add(SubscriptionPlan(**plan))
    await db_session.commit()
    logger.info("Seeded %d subscription plans.", len(DEFAULT_PLANS))

async def init_db():
    """
    Creates all database tables, the initial admin and the plan catalogue.
    """
    logger.info("Initializing database...")
    async with db_manager.engine.begin() as conn:
        logger.info("Tables known to Base.metadata: %s", list(Base.metadata.tables.keys()))
        await conn.run_sync(Base.metadata.create_all)

    async with db_manager.async_session_maker() as db:
        await create_admin(db)
        await seed_plans(db)

    logger.info("Database initialization finished successfully.")

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(init_db())
