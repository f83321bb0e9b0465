from __future__ import annotations

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import JSON, Date, DateTime, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all database models."""


class FocusPlan(Base):
    """A user's focus training plan.

    Stores the configuration the training days were generated from. At most
    one plan per user is expected to be active; the newest active one wins.

    Schema:
    - status: active, completed or archived
    - end_date / training_days_count: whichever stop condition was requested
    """

    __tablename__ = "focus_plans"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    user_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    target_daily_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    starting_daily_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    training_weekdays: Mapped[list] = mapped_column(JSON, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    training_days_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    status: Mapped[str] = mapped_column(String, nullable=False, default="active")
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow, onupdate=_utcnow)

    __table_args__ = (
        Index("idx_focus_plans_user_status", "user_id", "status"),
    )


class FocusDay(Base):
    """One generated training day of a plan.

    Segments are stored as a JSON list of {"type": "work"|"break", "minutes": int}.
    """

    __tablename__ = "focus_days"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    plan_id: Mapped[str] = mapped_column(String, ForeignKey("focus_plans.id"), nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    day_index: Mapped[int] = mapped_column(Integer, nullable=False)
    day_date: Mapped[date] = mapped_column(Date, nullable=False)
    daily_target_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    segments: Mapped[list] = mapped_column(JSON, nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False, default="pending")  # pending, completed, missed
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow, onupdate=_utcnow)

    __table_args__ = (
        UniqueConstraint("plan_id", "day_date", name="uq_focus_day_plan_date"),
        Index("idx_focus_days_plan_index", "plan_id", "day_index"),
    )


class FocusSessionLog(Base):
    """Append-only record of a completed work segment."""

    __tablename__ = "focus_session_logs"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    user_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    plan_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    day_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    segment_index: Mapped[int] = mapped_column(Integer, nullable=False)
    minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    completed_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)
