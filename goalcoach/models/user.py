from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.orm import relationship
from goalcoach.core.base import Base
from datetime import datetime


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, nullable=False, index=True)
    password = Column(String, nullable=True)
    name = Column(String, nullable=True)
    image = Column(String, nullable=True)
    onboarding_completed = Column(Boolean, default=False, nullable=False)
    reset_password_token = Column(String, nullable=True, index=True)
    reset_password_expires = Column(DateTime, nullable=True)
    refresh_token = Column(String, nullable=True)
    refresh_token_expires = Column(DateTime, nullable=True)
    last_login = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    onboarding_profile = relationship(
        "OnboardingProfile", back_populates="user", uselist=False,
        cascade="all, delete-orphan", passive_deletes=True,
    )
    goals = relationship("Goal", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    progress_entries = relationship("Progress", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    recommended_goals = relationship("RecommendedGoal", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    workout_logs = relationship("WorkoutLog", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
