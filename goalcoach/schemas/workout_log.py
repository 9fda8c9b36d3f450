from pydantic import Field
from typing import List, Optional
from datetime import datetime

from goalcoach.schemas.base import CamelModel


class WorkoutLogCreate(CamelModel):
    activity_name: str = Field(min_length=1)
    day_index: int = Field(ge=0)
    activity_index: int = Field(ge=0)
    amount_logged: float = Field(ge=0)
    unit: str = Field(min_length=1)
    date: Optional[datetime] = None


class WorkoutLogRead(CamelModel):
    id: int
    recommended_goal_id: int
    activity_name: str
    day_index: int
    activity_index: int
    amount_logged: float
    unit: str
    date: datetime
    is_daily_target_met: bool


class ActivityStats(CamelModel):
    activity_name: str
    total_amount: float
    average_amount: float
    total_entries: int
    days_completed: int


class WorkoutHistoryResponse(CamelModel):
    success: bool = True
    logs: List[WorkoutLogRead]
    stats: List[ActivityStats]
