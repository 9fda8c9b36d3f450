from sqlalchemy import Column, Integer, String, Float, Boolean, ForeignKey, DateTime, Index
from sqlalchemy.orm import relationship
from goalcoach.core.base import Base
from datetime import datetime


class WorkoutLog(Base):
    """Append-only log of activities from a recommended plan's schedule."""

    __tablename__ = "workout_logs"
    __table_args__ = (
        Index("ix_workout_logs_user_date", "user_id", "date"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    recommended_goal_id = Column(Integer, ForeignKey("recommended_goals.id", ondelete="CASCADE"), nullable=False, index=True)
    activity_name = Column(String, nullable=False)
    day_index = Column(Integer, nullable=False)
    activity_index = Column(Integer, nullable=False)
    amount_logged = Column(Float, nullable=False)
    unit = Column(String, nullable=False)
    date = Column(DateTime, nullable=False, default=datetime.utcnow)
    is_daily_target_met = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="workout_logs")
    recommended_goal = relationship("RecommendedGoal", back_populates="workout_logs")
