import logging
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import user_model
from app.repository.user_repository import user_repository
from app.schemas import user_schema
from app.utils.security import get_password_hash, verify_password

logger = logging.getLogger(__name__)

class UserRegistrationError(Exception):
    """Custom exception for registration errors."""
    def __init__(self, detail: str):
        self.detail = detail

async def register_user(db: AsyncSession, user_data: user_schema.UserRegistration) -> user_model.Users:
    """
    Creates a regular user account. New accounts start on the free search tier.
    """
    email = user_data.email.lower()
    existing_user = await user_repository.get_user_by_email(db, email=email)
    if existing_user:
        raise UserRegistrationError("Email is already registered.")

    db_user = user_model.Users(
        name=user_data.name.strip(),
        email=email,
        password=get_password_hash(user_data.password),
        role="user",
        status="active",
        is_subscribed=False,
        daily_search_count=0,
        last_search_date=None,
    )
    user = await user_repository.create_user(db, user=db_user)
    logger.info("Registered user %s", user.id)
    return user

async def authenticate_user(db: AsyncSession, email: str, password: str) -> Optional[user_model.Users]:
    """
    Returns the user for valid credentials, None otherwise.
    Raises 403 for blocked or inactive accounts.
    """
    user = await user_repository.get_user_by_email(db, email=email)
    if not user or not verify_password(password, user.password):
        return None

    if user.status != "active":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Account is {user.status}. Please contact support.",
        )
    return user
