import datetime as dt
from pydantic import Field, field_validator
from typing import List, Optional

from goalcoach.models.goal import GoalStatusEnum
from goalcoach.schemas.base import CamelModel
from goalcoach.schemas.goal import GoalRead


def to_local_day(value) -> Optional[dt.date]:
    """Normalize a date, datetime or ISO string to the local calendar day."""
    if value is None or value == "":
        return None
    if isinstance(value, str):
        raw = value.strip()
        if len(raw) == 10:
            return dt.date.fromisoformat(raw)
        value = dt.datetime.fromisoformat(raw.replace("Z", "+00:00"))
    if isinstance(value, dt.datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    if isinstance(value, dt.date):
        return value
    raise ValueError("date must be an ISO date or datetime")


class ProgressValue(CamelModel):
    value: float = Field(ge=0)
    date: Optional[dt.date] = None
    notes: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, value):
        return to_local_day(value)

    def notes_change(self) -> Optional[str]:
        """None keeps the day's stored notes, an empty string clears them."""
        if "notes" not in self.model_fields_set:
            return None
        return self.notes or ""


class ProgressLogRequest(ProgressValue):
    goal_id: int


class ProgressRead(CamelModel):
    id: int
    goal_id: int
    date: dt.date
    value: float
    notes: Optional[str] = None
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None


class GoalProgressSummary(CamelModel):
    id: int
    current_progress: float
    status: GoalStatusEnum


class ProgressLogResponse(CamelModel):
    success: bool = True
    progress: ProgressRead
    goal: GoalProgressSummary


class GoalProgressResponse(CamelModel):
    success: bool = True
    progress: ProgressRead
    goal: GoalRead


class ProgressListResponse(CamelModel):
    success: bool = True
    progress: List[ProgressRead]
