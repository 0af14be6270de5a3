import logging
from typing import AsyncGenerator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import db_manager
from jose import JWTError, jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from app.core.config import settings
from app.models import user_model
from app.schemas import token_schema
from app.schemas.search_quota_schema import SearchInfo
from app.repository.user_repository import user_repository
from app.modules.search_quota.service import search_quota_service

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token")

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async for session in db_manager.get_db_session():
        yield session

# --- User Authentication and Authorization Dependencies ---

async def get_current_user(token: str = Depends(oauth2_scheme), db: AsyncSession = Depends(get_db)) -> user_model.Users:
    """
    Dependency to get the current user from a JWT token.
    Decodes the token, validates the user, and returns the full user object.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        user_id: str = payload.get("sub")
        if user_id is None:
            raise credentials_exception

        token_data = token_schema.TokenData(
            sub=user_id,
            role=payload.get("role"),
            name=payload.get("name"),
        )

    except JWTError:
        raise credentials_exception

    user = await user_repository.get_user(db, user_id=int(token_data.sub))
    if user is None:
        raise credentials_exception

    if user.status == "blocked":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Your account has been blocked. Please contact support.",
        )

    return user

async def get_current_admin(current_user: user_model.Users = Depends(get_current_user)) -> user_model.Users:
    """
    Dependency to ensure the user is an admin.
    """
    if current_user.role != 'admin':
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="The user does not have admin privileges",
        )
    return current_user

# --- Search Quota ---

async def enforce_search_limit(
    current_user: user_model.Users = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> SearchInfo:
    """
    Counts the request against the user's daily search quota.
    SearchLimitExceeded propagates to the 429 handler; storage errors become a 500
    so the search itself never runs on an unknown quota state.
    """
    try:
        return await search_quota_service.check_and_consume(db, current_user)
    except SQLAlchemyError:
        logger.exception("Error checking search limits for user %s", current_user.id)
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error checking search limits",
        )
