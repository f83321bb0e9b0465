"""Core immutable data models for schedule generation.

This module defines the structures flowing through the planning pipeline:
- Schedule configuration (start, goal, weekday filter, stop condition)
- Segments (one work or break interval)
- Training days (dated target with its segment plan)

All models are frozen so a generated schedule can be handed to a store
without the generator keeping any reference it could later mutate.
"""

from dataclasses import dataclass, field
from datetime import date

from focusramp.schedule.enums import SegmentKind, Weekday

DEFAULT_STARTING_MINUTES = 10


@dataclass(frozen=True)
class ScheduleConfig:
    """Immutable configuration for one training schedule.

    Attributes:
        start_date: First calendar date considered by the enumerator
        target_daily_minutes: Goal minutes of focused work per day
        training_weekdays: Weekdays on which training happens
        starting_daily_minutes: Minutes on the first training day
        end_date: Inclusive last calendar date (optional)
        training_days_count: Number of training days to emit (optional)
    """

    start_date: date
    target_daily_minutes: int
    training_weekdays: frozenset[Weekday]
    starting_daily_minutes: int = DEFAULT_STARTING_MINUTES
    end_date: date | None = None
    training_days_count: int | None = None


@dataclass(frozen=True)
class Segment:
    """One contiguous work or break interval."""

    kind: SegmentKind
    minutes: int

    @property
    def seconds(self) -> int:
        return self.minutes * 60

    @property
    def is_work(self) -> bool:
        return self.kind == SegmentKind.WORK

    def to_dict(self) -> dict[str, str | int]:
        return {"type": self.kind.value, "minutes": self.minutes}

    @classmethod
    def from_dict(cls, data: dict) -> "Segment":
        return cls(kind=SegmentKind(data["type"]), minutes=int(data["minutes"]))


@dataclass(frozen=True)
class TrainingDay:
    """A dated training day with its target and segment plan.

    Attributes:
        index: 1-based position in the schedule
        date: Calendar date of the session
        target_minutes: Focused-work minutes for the day
        segments: Ordered work/break plan whose work minutes sum to target_minutes
    """

    index: int
    date: date
    target_minutes: int
    segments: tuple[Segment, ...] = field(default_factory=tuple)

    @property
    def work_minutes(self) -> int:
        return sum(s.minutes for s in self.segments if s.is_work)
