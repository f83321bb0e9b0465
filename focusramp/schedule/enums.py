"""Canonical enums for schedule dimensions.

All enums are string-based so they serialize directly into JSON documents
and snapshot payloads.
"""

from enum import StrEnum


class Weekday(StrEnum):
    """Weekday tags accepted in a training weekday filter."""

    MON = "Mon"
    TUE = "Tue"
    WED = "Wed"
    THU = "Thu"
    FRI = "Fri"
    SAT = "Sat"
    SUN = "Sun"

    @property
    def iso_index(self) -> int:
        """Index matching date.weekday() (Monday=0 ... Sunday=6)."""
        return _WEEKDAY_ORDER.index(self)


_WEEKDAY_ORDER: tuple[Weekday, ...] = (
    Weekday.MON,
    Weekday.TUE,
    Weekday.WED,
    Weekday.THU,
    Weekday.FRI,
    Weekday.SAT,
    Weekday.SUN,
)


class SegmentKind(StrEnum):
    """Kind of a contiguous interval within a day's plan."""

    WORK = "work"
    BREAK = "break"


class DayStatus(StrEnum):
    """Progress status of a training day as shown in the plan summary."""

    PENDING = "pending"
    COMPLETED = "completed"
    MISSED = "missed"
