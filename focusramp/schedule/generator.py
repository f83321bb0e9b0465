"""Schedule generation.

Composes date enumeration, the target ramp and segment planning into the
list of training days handed to the plan store. Pure: no I/O and no clock
reads beyond the start date already fixed in the config.
"""

from loguru import logger

from focusramp.schedule.dates import MAX_TRAINING_DATES, enumerate_training_dates
from focusramp.schedule.models import ScheduleConfig, TrainingDay
from focusramp.schedule.ramp import compute_daily_targets
from focusramp.schedule.segments import plan_segments
from focusramp.schedule.validate import validate_schedule_config


def generate_schedule(config: ScheduleConfig, max_dates: int = MAX_TRAINING_DATES) -> list[TrainingDay]:
    """Generate the ordered training days for a configuration.

    Args:
        config: Schedule configuration
        max_dates: Safety cap forwarded to the date enumerator

    Returns:
        Training days with 1-based indices, ascending by date

    Raises:
        ConfigurationError: If the configuration is invalid
    """
    validate_schedule_config(config)

    dates = enumerate_training_dates(config, max_dates=max_dates)
    targets = compute_daily_targets(config.starting_daily_minutes, config.target_daily_minutes, len(dates))

    days = [
        TrainingDay(
            index=position + 1,
            date=day_date,
            target_minutes=target,
            segments=tuple(plan_segments(target)),
        )
        for position, (day_date, target) in enumerate(zip(dates, targets, strict=True))
    ]

    logger.debug(
        "Generated training schedule",
        days=len(days),
        first_date=days[0].date.isoformat() if days else None,
        last_date=days[-1].date.isoformat() if days else None,
        target_minutes=config.target_daily_minutes,
    )
    return days
