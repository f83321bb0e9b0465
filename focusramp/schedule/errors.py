"""Schedule error types.

Standard configuration error codes:
- EMPTY_WEEKDAYS: No training weekday selected
- INVALID_TARGET_MINUTES: Target daily minutes is not a positive integer
- INVALID_STARTING_MINUTES: Starting daily minutes is not a positive integer
- MISSING_STOP_CONDITION: Neither an end date nor a training day count was given
- INVALID_DAYS_COUNT: Training day count is not a positive integer
- END_DATE_TOO_EARLY: Requested end date is not after the plan start date
"""


class ScheduleError(Exception):
    """Base exception for all schedule generation errors."""


class ConfigurationError(ScheduleError):
    """Raised when a schedule configuration is invalid.

    Raised before any date enumeration happens. Not retryable: the caller has
    to correct the configuration.

    Attributes:
        code: Error code (e.g., "EMPTY_WEEKDAYS", "MISSING_STOP_CONDITION")
        details: List of error detail strings
    """

    def __init__(self, code: str, details: list[str]):
        self.code = code
        self.details = details
        super().__init__(f"{code}: {details}")
