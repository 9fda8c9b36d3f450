from pydantic import Field, field_validator, model_validator
from typing import Dict, List, Optional
from datetime import datetime, timezone

from goalcoach.models.goal import GoalCategoryEnum, GoalStatusEnum
from goalcoach.schemas.base import CamelModel


class GoalCreate(CamelModel):
    title: str = Field(min_length=1)
    category: GoalCategoryEnum
    specific: str = Field(min_length=1)
    measurable: str = Field(min_length=1)
    achievable: str = Field(min_length=1)
    relevant: str = Field(min_length=1)
    start_date: datetime
    end_date: datetime
    target_value: float = Field(gt=0)
    unit: str = Field(min_length=1)
    motivation: Optional[str] = None
    potential_obstacles: Optional[str] = None
    strategies: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("start_date", "end_date")
    @classmethod
    def as_naive_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self


class GoalUpdate(CamelModel):
    """Only these fields are editable after creation."""

    title: Optional[str] = Field(default=None, min_length=1)
    target_value: Optional[float] = Field(default=None, gt=0)
    category: Optional[GoalCategoryEnum] = None


class GoalRead(CamelModel):
    id: int
    title: str
    category: GoalCategoryEnum
    specific: str
    measurable: str
    achievable: str
    relevant: str
    start_date: datetime
    end_date: datetime
    target_value: float
    unit: str
    motivation: Optional[str] = None
    potential_obstacles: Optional[str] = None
    strategies: Optional[str] = None
    notes: Optional[str] = None
    current_progress: float
    status: GoalStatusEnum
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class GoalListResponse(CamelModel):
    goals: List[GoalRead]
    category_counts: Dict[str, int]


class GoalActionResponse(CamelModel):
    success: bool = True
    goal: GoalRead


class SuccessResponse(CamelModel):
    success: bool = True
