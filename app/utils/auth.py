from datetime import datetime, timedelta
from typing import Optional, Dict, Any
from jose import jwt

from app.core.config import settings

# --- JWT Token Management ---

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> Dict[str, Any]:
    """Creates a new JWT access token and returns it along with its expiry."""
    to_encode = data.copy()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": datetime.utcnow() + expires_delta})
    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return {"access_token": encoded_jwt, "expires_in": int(expires_delta.total_seconds())}
