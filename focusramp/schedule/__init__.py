"""Training schedule generation."""

from focusramp.schedule.dates import enumerate_training_dates
from focusramp.schedule.enums import DayStatus, SegmentKind, Weekday
from focusramp.schedule.errors import ConfigurationError, ScheduleError
from focusramp.schedule.generator import generate_schedule
from focusramp.schedule.models import ScheduleConfig, Segment, TrainingDay
from focusramp.schedule.ramp import compute_daily_targets
from focusramp.schedule.segments import plan_segments

__all__ = [
    "ConfigurationError",
    "DayStatus",
    "ScheduleConfig",
    "ScheduleError",
    "Segment",
    "SegmentKind",
    "TrainingDay",
    "Weekday",
    "compute_daily_targets",
    "enumerate_training_dates",
    "generate_schedule",
    "plan_segments",
]
