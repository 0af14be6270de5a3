from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.modules.auth.api import router as auth_router
from app.modules.recipes.api import router as recipes_router
from app.modules.subscription.api import router as subscription_router
from app.modules.users.api import router as users_router
from app.modules.admin.api import router as admin_router
from app.core.database import db_manager
from app.core.global_error_handler import register_global_exception_handlers
from app.core.config import settings

app = FastAPI(
    title=settings.APP_NAME,
    description="Recipe discovery API with subscription-based daily search limits.",
    version="1.0.0"
)

# Register global exception handlers
register_global_exception_handlers(app)

@app.on_event("shutdown")
async def shutdown_event():
    """Close database connections on shutdown."""
    await db_manager.close()

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth_router, prefix="/api")
app.include_router(recipes_router, prefix="/api")
app.include_router(subscription_router, prefix="/api")
app.include_router(users_router, prefix="/api")
app.include_router(admin_router, prefix="/api")

@app.get("/api/")
async def root():
    return {"message": f"{settings.APP_NAME} is running"}

@app.get("/api/health")
async def health_check():
    return {"status": "ok"}
