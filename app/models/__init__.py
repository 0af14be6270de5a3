from .user_model import Users
from .log_model import ActivityLog
from .plan_model import SubscriptionPlan
from .subscription_model import Subscription
from .recipe_model import Recipe
from .recipe_history_model import RecipeHistory

__all__ = [
    "Users",
    "ActivityLog",
    "SubscriptionPlan",
    "Subscription",
    "Recipe",
    "RecipeHistory",
]
