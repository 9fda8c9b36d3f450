import enum
from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, Enum, JSON, DateTime, Index
from sqlalchemy.orm import relationship
from goalcoach.core.base import Base
from goalcoach.models.goal import GoalCategoryEnum
from datetime import datetime


class RecommendationStatusEnum(str, enum.Enum):
    suggested = "suggested"
    accepted = "accepted"
    declined = "declined"
    completed = "completed"


class RecommendationSourceEnum(str, enum.Enum):
    ai = "ai"
    rules = "rules"


class RecommendedGoal(Base):
    __tablename__ = "recommended_goals"
    __table_args__ = (
        Index("ix_recommended_user_status", "user_id", "status"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    category = Column(Enum(GoalCategoryEnum), nullable=False)
    description = Column(String, nullable=False, default="")
    plan = Column(String, nullable=False)
    reasoning = Column(String, nullable=True)
    # {"type": ..., "schedule": [{"day": 1, "activities": [...]}], "requirements": {...}, "tips": [...]}
    plan_details = Column(JSON, nullable=True)
    source = Column(Enum(RecommendationSourceEnum), default=RecommendationSourceEnum.rules, nullable=False)
    is_accepted = Column(Boolean, default=False, nullable=False)
    status = Column(Enum(RecommendationStatusEnum), default=RecommendationStatusEnum.suggested, nullable=False)
    accepted_goal_id = Column(Integer, ForeignKey("goals.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="recommended_goals")
    workout_logs = relationship("WorkoutLog", back_populates="recommended_goal", cascade="all, delete-orphan", passive_deletes=True)
