import datetime
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from app.models.log_model import ActivityLog

async def log_activity(
    db: AsyncSession,
    user_id: Optional[int],
    activity_type_category: str,
    activity_description: str,
    timestamp: Optional[datetime.datetime] = None
):
    """
    Logs user activity to the database.

    Args:
        db: The database session.
        user_id: The ID of the user performing the activity, or None for anonymous events.
        activity_type_category: The broad category of the activity (e.g., "Login/Access", "Search").
        activity_description: A human-readable description of what happened.
        timestamp: The datetime of the activity. Defaults to now.
    """
    if timestamp is None:
        timestamp = datetime.datetime.utcnow()

    log_entry = ActivityLog(
        timestamp=timestamp,
        user_id=user_id,
        activity_type_category=activity_type_category,
        activity_description=activity_description
    )

    db.add(log_entry)
    await db.commit()
