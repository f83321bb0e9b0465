"""Plan store backed by SQLAlchemy.

Persists generated schedules and exposes the lookups the session views need:
active plan for a user, days of a plan, the day for a date, the next
training day, and the work-segment session log.

Contract for plan creation:
- The configuration is validated and the schedule generated before anything
  is written, so an invalid config never leaves a plan row behind.
- The plan row is committed first, then days are written in batches, one
  commit per batch.
- A failing batch is rolled back and reported as PartialPersistenceFailure.
  Nothing is retried here.
"""

from datetime import date, datetime, timezone

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from focusramp.config.settings import settings
from focusramp.plans.errors import PartialPersistenceFailure
from focusramp.plans.models import FocusDay, FocusPlan, FocusSessionLog
from focusramp.schedule.enums import DayStatus
from focusramp.schedule.generator import generate_schedule
from focusramp.schedule.models import Segment, TrainingDay
from focusramp.schedule.schemas import PlanConfigRequest


def to_training_day(row: FocusDay) -> TrainingDay:
    """Convert a stored day into the engine's TrainingDay."""
    return TrainingDay(
        index=row.day_index,
        date=row.day_date,
        target_minutes=row.daily_target_minutes,
        segments=tuple(Segment.from_dict(item) for item in row.segments),
    )


def create_focus_plan(
    session: Session,
    user_id: str,
    request: PlanConfigRequest,
    start_date: date,
    batch_size: int | None = None,
) -> str:
    """Create an active plan and persist all of its training days.

    Args:
        session: Database session
        user_id: Owner of the plan
        request: Validated plan configuration request
        start_date: First day of the plan
        batch_size: Days per commit (defaults to settings.day_batch_size)

    Returns:
        The new plan id

    Raises:
        ConfigurationError: If the configuration is invalid (nothing written)
        PartialPersistenceFailure: If the plan was stored but some days were not
    """
    config = request.to_schedule_config(start_date)
    days = generate_schedule(config, max_dates=settings.max_training_dates)

    plan = FocusPlan(
        user_id=user_id,
        start_date=start_date,
        target_daily_minutes=config.target_daily_minutes,
        starting_daily_minutes=config.starting_daily_minutes,
        training_weekdays=[weekday.value for weekday in request.training_weekdays],
        end_date=config.end_date,
        training_days_count=config.training_days_count,
        status="active",
    )
    session.add(plan)
    session.commit()

    logger.bind(plan_id=plan.id, user_id=user_id, days=len(days)).info("Focus plan created")

    persist_days(session, user_id, plan.id, days, batch_size=batch_size)
    return plan.id


def persist_days(
    session: Session,
    user_id: str,
    plan_id: str,
    days: list[TrainingDay],
    batch_size: int | None = None,
) -> int:
    """Write training days in batches, committing after each batch.

    Returns:
        Number of days written

    Raises:
        PartialPersistenceFailure: When a batch fails; earlier batches stay committed
    """
    size = batch_size or settings.day_batch_size
    persisted = 0

    for start in range(0, len(days), size):
        batch = days[start : start + size]
        try:
            for day in batch:
                session.add(
                    FocusDay(
                        plan_id=plan_id,
                        user_id=user_id,
                        day_index=day.index,
                        day_date=day.date,
                        daily_target_minutes=day.target_minutes,
                        segments=[segment.to_dict() for segment in day.segments],
                    )
                )
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.bind(plan_id=plan_id, persisted=persisted, total=len(days), error=str(e)).error(
                "Failed to persist training days"
            )
            raise PartialPersistenceFailure(plan_id, persisted, len(days)) from e
        persisted += len(batch)

    logger.bind(plan_id=plan_id, persisted=persisted).debug("Training days persisted")
    return persisted


def get_active_plan_for_user(session: Session, user_id: str) -> FocusPlan | None:
    """Return the newest active plan for a user."""
    return session.execute(
        select(FocusPlan)
        .where(FocusPlan.user_id == user_id, FocusPlan.status == "active")
        .order_by(FocusPlan.created_at.desc())
        .limit(1)
    ).scalar_one_or_none()


def get_days_for_plan(session: Session, plan_id: str) -> list[FocusDay]:
    return list(
        session.execute(select(FocusDay).where(FocusDay.plan_id == plan_id).order_by(FocusDay.day_index.asc())).scalars()
    )


def get_day_for_date(session: Session, plan_id: str, day: date) -> FocusDay | None:
    return session.execute(
        select(FocusDay).where(FocusDay.plan_id == plan_id, FocusDay.day_date == day)
    ).scalar_one_or_none()


def get_next_training_day(session: Session, plan_id: str, on_or_after: date) -> FocusDay | None:
    """Earliest training day on or after a date, or None once the plan is over."""
    return session.execute(
        select(FocusDay)
        .where(FocusDay.plan_id == plan_id, FocusDay.day_date >= on_or_after)
        .order_by(FocusDay.day_date.asc())
        .limit(1)
    ).scalar_one_or_none()


def set_day_status(session: Session, day_id: str, status: DayStatus) -> FocusDay | None:
    day = session.get(FocusDay, day_id)
    if day is None:
        logger.bind(day_id=day_id).warning("Cannot update status of unknown training day")
        return None
    day.status = status.value
    session.flush()
    return day


def get_day_statuses(session: Session, plan_id: str) -> dict[int, DayStatus]:
    """Status per day index, for the plan summary rows."""
    rows = session.execute(select(FocusDay.day_index, FocusDay.status).where(FocusDay.plan_id == plan_id)).all()
    return {day_index: DayStatus(status) for day_index, status in rows}


def record_work_segment(
    session: Session,
    *,
    user_id: str,
    plan_id: str,
    day_id: str,
    segment_index: int,
    minutes: int,
    completed_at: datetime | None = None,
) -> FocusSessionLog:
    """Append a session-log row for a completed work segment."""
    entry = FocusSessionLog(
        user_id=user_id,
        plan_id=plan_id,
        day_id=day_id,
        segment_index=segment_index,
        minutes=minutes,
        completed_at=completed_at or datetime.now(timezone.utc),
    )
    session.add(entry)
    session.flush()
    logger.bind(user_id=user_id, day_id=day_id, segment_index=segment_index, minutes=minutes).info("Work segment logged")
    return entry


def get_session_logs(session: Session, day_id: str) -> list[FocusSessionLog]:
    return list(
        session.execute(
            select(FocusSessionLog).where(FocusSessionLog.day_id == day_id).order_by(FocusSessionLog.segment_index.asc())
        ).scalars()
    )
