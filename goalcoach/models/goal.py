import enum
from sqlalchemy import Column, Integer, String, Float, ForeignKey, Enum, DateTime, Index
from sqlalchemy.orm import relationship
from goalcoach.core.base import Base
from datetime import datetime


class GoalCategoryEnum(str, enum.Enum):
    fitness = "fitness"
    nutrition = "nutrition"
    mental_health = "mental_health"
    productivity = "productivity"
    sleep = "sleep"
    other = "other"


class GoalStatusEnum(str, enum.Enum):
    not_started = "not_started"
    in_progress = "in_progress"
    completed = "completed"
    abandoned = "abandoned"


class Goal(Base):
    __tablename__ = "goals"
    __table_args__ = (
        Index("ix_goals_user_created", "user_id", "created_at"),
        Index("ix_goals_user_status", "user_id", "status"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    category = Column(Enum(GoalCategoryEnum), nullable=False)

    specific = Column(String, nullable=False)
    measurable = Column(String, nullable=False)
    achievable = Column(String, nullable=False)
    relevant = Column(String, nullable=False)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)

    target_value = Column(Float, nullable=False)
    unit = Column(String, nullable=False)
    motivation = Column(String, nullable=True)
    potential_obstacles = Column(String, nullable=True)
    strategies = Column(String, nullable=True)
    notes = Column(String, nullable=True)

    # denormalized: min(sum of progress values, target_value)
    current_progress = Column(Float, default=0, nullable=False)
    status = Column(Enum(GoalStatusEnum), default=GoalStatusEnum.not_started, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="goals")
    progress_entries = relationship("Progress", back_populates="goal", cascade="all, delete-orphan", passive_deletes=True)
