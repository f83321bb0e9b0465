"""Display helpers for a generated or stored plan.

Turns training days into the rows shown on the plan overview: human date,
increment over the previous day, Pomodoro plan string and status.
"""

from dataclasses import dataclass
from datetime import date

from focusramp.schedule.enums import DayStatus, Weekday
from focusramp.schedule.models import Segment, TrainingDay

WEEKDAYS_ONLY = frozenset({Weekday.MON, Weekday.TUE, Weekday.WED, Weekday.THU, Weekday.FRI})


@dataclass(frozen=True)
class DayRow:
    """One row of the plan overview table."""

    index: int
    date_label: str
    iso_date: str
    increment_minutes: int
    daily_target_minutes: int
    pomodoro_plan: str
    status: DayStatus


def format_day_label(day: date) -> str:
    """Format a date for display, e.g. 2025-11-17 -> "Mon, Nov 17, 2025"."""
    return f"{day.strftime('%a')}, {day.strftime('%b')} {day.day}, {day.year}"


def format_pomodoro_plan(segments: list[Segment] | tuple[Segment, ...]) -> str:
    """Render segment minutes as "25 / 5 / 25"."""
    return " / ".join(str(segment.minutes) for segment in segments)


def format_training_weekdays(weekdays: list[Weekday] | frozenset[Weekday]) -> str:
    selected = frozenset(weekdays)
    if len(selected) == 7:
        return "Every day"
    if selected == WEEKDAYS_ONLY:
        return "Weekdays"
    return ", ".join(day.value for day in sorted(selected, key=lambda d: d.iso_index))


def build_day_rows(
    days: list[TrainingDay],
    statuses: dict[int, DayStatus] | None = None,
) -> list[DayRow]:
    """Build overview rows sorted by day index.

    Args:
        days: Training days in any order
        statuses: Optional status per day index; missing entries are pending

    Returns:
        Rows with increments computed against the previous day in index order
    """
    statuses = statuses or {}
    ordered = sorted(days, key=lambda d: d.index)

    rows: list[DayRow] = []
    previous: TrainingDay | None = None
    for day in ordered:
        increment = day.target_minutes - previous.target_minutes if previous else 0
        rows.append(
            DayRow(
                index=day.index,
                date_label=format_day_label(day.date),
                iso_date=day.date.isoformat(),
                increment_minutes=increment,
                daily_target_minutes=day.target_minutes,
                pomodoro_plan=format_pomodoro_plan(day.segments),
                status=statuses.get(day.index, DayStatus.PENDING),
            )
        )
        previous = day
    return rows
