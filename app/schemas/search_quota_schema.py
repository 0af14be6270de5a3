from typing import Optional, Union
from pydantic import BaseModel


class SearchInfo(BaseModel):
    """Quota state attached to a search request once the gate lets it through."""
    max_searches: int
    daily_search_count: int
    remaining_searches: int
    plan_name: str


class SearchStatus(BaseModel):
    plan: str
    is_subscribed: bool
    daily_search_count: int
    max_searches: Union[int, str]
    remaining_searches: Union[int, str]
    last_search_date: Optional[str] = None
    is_new_day: bool
