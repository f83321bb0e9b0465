"""Plan configuration request schema.

Validates the user-facing plan configuration before it becomes a
ScheduleConfig anchored at a concrete start date.
"""

from datetime import date

from pydantic import BaseModel, Field, model_validator

from focusramp.schedule.enums import Weekday
from focusramp.schedule.errors import ConfigurationError
from focusramp.schedule.models import DEFAULT_STARTING_MINUTES, ScheduleConfig

MIN_TARGET_MINUTES = 10
MAX_TARGET_MINUTES = 480
MAX_TRAINING_DAYS_COUNT = 365


class PlanConfigRequest(BaseModel):
    """Request model for creating a focus plan."""

    target_daily_minutes: int = Field(..., ge=MIN_TARGET_MINUTES, le=MAX_TARGET_MINUTES, description="Goal minutes per day")
    starting_daily_minutes: int = Field(default=DEFAULT_STARTING_MINUTES, ge=1, description="Minutes on the first training day")
    training_weekdays: list[Weekday] = Field(..., min_length=1, description="Weekdays to train on")
    end_date: date | None = Field(default=None, description="Inclusive last calendar date of the plan")
    training_days_count: int | None = Field(default=None, ge=1, le=MAX_TRAINING_DAYS_COUNT, description="Number of training days")

    @model_validator(mode="after")
    def require_single_stop_condition(self) -> "PlanConfigRequest":
        """Exactly one of end_date or training_days_count must be provided."""
        if (self.end_date is None) == (self.training_days_count is None):
            raise ValueError("Provide exactly one of end_date or training_days_count")
        return self

    def to_schedule_config(self, start_date: date) -> ScheduleConfig:
        """Anchor the request at a start date.

        Args:
            start_date: First day of the plan (usually today)

        Returns:
            Schedule configuration for the generator

        Raises:
            ConfigurationError: If end_date is not after start_date
        """
        if self.end_date is not None and self.end_date <= start_date:
            raise ConfigurationError(
                "END_DATE_TOO_EARLY",
                [f"end_date must be after {start_date.isoformat()}, got {self.end_date.isoformat()}"],
            )

        return ScheduleConfig(
            start_date=start_date,
            target_daily_minutes=self.target_daily_minutes,
            training_weekdays=frozenset(self.training_weekdays),
            starting_daily_minutes=self.starting_daily_minutes,
            end_date=self.end_date,
            training_days_count=self.training_days_count,
        )
