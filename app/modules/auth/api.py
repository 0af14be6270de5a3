from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db, get_current_user
from app.models import user_model
from app.modules.auth import service as user_service
from app.schemas import user_schema, token_schema
from app.utils import auth
from app.utils.activity_logger import log_activity

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
)

@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=user_schema.User)
async def register(
    user_data: user_schema.UserRegistration,
    db: AsyncSession = Depends(get_db)
):
    """
    Registers a new user on the free plan.
    """
    user = await user_service.register_user(db, user_data=user_data)
    await log_activity(
        db=db,
        user_id=user.id,
        activity_type_category="Data/CRUD",
        activity_description=f"User '{user.email}' registered.",
    )
    return user


@router.post("/token", response_model=token_schema.Token)
async def login_for_access_token(
    data: user_schema.UserLogin,
    db: AsyncSession = Depends(get_db),
):
    """
    Authenticates a user or admin and returns a JWT token.
    """
    try:
        user = await user_service.authenticate_user(db, email=data.email, password=data.password)
    except HTTPException as e:
        await log_activity(
            db=db,
            user_id=None,
            activity_type_category="Login/Access",
            activity_description=f"User login blocked: {e.detail}",
        )
        raise e

    if not user:
        await log_activity(
            db=db,
            user_id=None,
            activity_type_category="Login/Access",
            activity_description="User login failed.",
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token_data_payload = {
        "sub": str(user.id),
        "role": user.role,
        "name": user.name,
        "login_at": datetime.utcnow().isoformat() + "Z",
    }

    await log_activity(
        db=db,
        user_id=user.id,
        activity_type_category="Login/Access",
        activity_description=f"User '{user.email}' logged in successfully.",
    )

    token_data = auth.create_access_token(data=token_data_payload)
    return {
        "access_token": token_data["access_token"],
        "token_type": "bearer",
        "expires_in": token_data["expires_in"],
        "user": user,
    }


@router.get("/me", response_model=user_schema.User)
async def read_users_me(current_user: user_model.Users = Depends(get_current_user)):
    """
    Retrieves the current user's profile.
    """
    return current_user
