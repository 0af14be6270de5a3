from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file='.env', extra='ignore')

    DATABASE_URL: str = "sqlite+aiosqlite:///./recipes.db"

    APP_NAME: str = "Recipe Search API"

    # Seeded on init_db
    ADMIN_EMAIL: str = "admin@example.com"
    ADMIN_PASSWORD: str = "admin"

    # Authentication settings
    SECRET_KEY: str = "secret-key"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:5174"]

    # Daily search caps per plan tier; -1 means unlimited
    SEARCH_LIMIT_FREE: int = 3
    SEARCH_LIMIT_BASIC: int = 10
    SEARCH_LIMIT_PREMIUM: int = 30
    SEARCH_LIMIT_PRO: int = 50

    SEARCH_RESULTS_LIMIT: int = 10

    # Redis settings for Celery
    REDIS_URL: str = "redis://localhost:6379/0"

def get_settings():
    return Settings()

settings = get_settings()
