from sqlalchemy import Column, Integer, String, Float, Boolean, ForeignKey, JSON, DateTime
from sqlalchemy.orm import relationship
from goalcoach.core.base import Base
from datetime import datetime


class OnboardingProfile(Base):
    """Survey answers collected at signup. At most one row per user."""

    __tablename__ = "onboarding_profiles"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)

    # goals and preferences
    goals = Column(JSON, default=list)
    goal_importance = Column(Integer, nullable=True)
    success_definition = Column(String, nullable=True)

    # sleep and nutrition
    sleep_hours = Column(Float, nullable=True)
    sleep_quality = Column(String, nullable=True)
    consistent_sleep = Column(Boolean, nullable=True)
    eating_habits = Column(String, nullable=True)
    water_intake = Column(Float, nullable=True)

    # activity and mental well-being
    physical_activity = Column(String, nullable=True)
    stress_level = Column(String, nullable=True)
    relaxation_frequency = Column(String, nullable=True)
    mindfulness_practice = Column(Boolean, nullable=True)

    # digital habits and routines
    screen_time = Column(Float, nullable=True)
    mindless_scrolling = Column(Boolean, nullable=True)
    existing_good_habits = Column(JSON, default=list)
    habits_to_break = Column(JSON, default=list)
    obstacles = Column(JSON, default=list)

    # productivity and motivation
    discipline_level = Column(Integer, nullable=True)
    peak_productivity_time = Column(String, nullable=True)
    reminder_preference = Column(String, nullable=True)
    habit_approach = Column(String, nullable=True)
    daily_time_commitment = Column(String, nullable=True)
    motivation_factors = Column(JSON, default=list)

    age_range = Column(String, nullable=True)
    gender = Column(String, nullable=True)
    occupation = Column(String, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="onboarding_profile")
