"""Training date enumeration.

Walks the calendar one day at a time from the start date and keeps the dates
whose weekday is selected, until the stop condition is met.
"""

from datetime import date, timedelta

from loguru import logger

from focusramp.schedule.models import ScheduleConfig

MAX_TRAINING_DATES = 1000


def enumerate_training_dates(config: ScheduleConfig, max_dates: int = MAX_TRAINING_DATES) -> list[date]:
    """Enumerate training dates for a schedule configuration.

    Stop rules:
    - Count-based: stop as soon as training_days_count dates are collected
    - Date-based: stop once the current calendar day is on or after end_date,
      checked on every day so a non-training end date still terminates the scan
    - Both given: whichever is reached first wins

    The walk also stops after max_dates dates. That cap only triggers on a
    stop condition that cannot be reached in practice and is logged, not raised.

    Args:
        config: Validated schedule configuration
        max_dates: Safety cap on emitted dates

    Returns:
        Ascending list of training dates
    """
    selected = {weekday.iso_index for weekday in config.training_weekdays}
    count = config.training_days_count
    end = config.end_date

    dates: list[date] = []
    current = config.start_date

    while True:
        if current.weekday() in selected:
            dates.append(current)
            if count is not None and len(dates) >= count:
                break

        if end is not None and current >= end:
            break

        if len(dates) >= max_dates:
            logger.warning(
                "Training date enumeration hit safety cap",
                max_dates=max_dates,
                start_date=config.start_date.isoformat(),
                last_date=current.isoformat(),
            )
            break

        current += timedelta(days=1)

    return dates
