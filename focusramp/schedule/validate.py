"""Schedule configuration validation.

Runs before any date is enumerated so a bad config never produces a partial
schedule.
"""

from loguru import logger

from focusramp.schedule.errors import ConfigurationError
from focusramp.schedule.models import ScheduleConfig


def _is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def validate_schedule_config(config: ScheduleConfig) -> None:
    """Validate a schedule configuration.

    Starting minutes above the target are accepted; the ramp then holds the
    target for every day.

    Args:
        config: Configuration to validate

    Raises:
        ConfigurationError: On the first invalid field found
    """
    if not config.training_weekdays:
        _reject("EMPTY_WEEKDAYS", ["training_weekdays must contain at least one weekday"])

    if not _is_positive_int(config.target_daily_minutes):
        _reject(
            "INVALID_TARGET_MINUTES",
            [f"target_daily_minutes must be a positive integer, got {config.target_daily_minutes!r}"],
        )

    if not _is_positive_int(config.starting_daily_minutes):
        _reject(
            "INVALID_STARTING_MINUTES",
            [f"starting_daily_minutes must be a positive integer, got {config.starting_daily_minutes!r}"],
        )

    if config.end_date is None and config.training_days_count is None:
        _reject("MISSING_STOP_CONDITION", ["either end_date or training_days_count is required"])

    if config.training_days_count is not None and not _is_positive_int(config.training_days_count):
        _reject(
            "INVALID_DAYS_COUNT",
            [f"training_days_count must be a positive integer, got {config.training_days_count!r}"],
        )


def _reject(code: str, details: list[str]) -> None:
    err = ConfigurationError(code, details)
    logger.warning("Rejected schedule configuration", code=code, details=details)
    raise err
