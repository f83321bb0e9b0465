"""Pomodoro segment planning for a single day."""

from focusramp.schedule.enums import SegmentKind
from focusramp.schedule.errors import ConfigurationError
from focusramp.schedule.models import Segment

MAX_WORK_MINUTES = 25
BREAK_MINUTES = 5
# Days shorter than this are a single work block
SPLIT_THRESHOLD_MINUTES = 20


def plan_segments(target_minutes: int) -> list[Segment]:
    """Build the work/break plan for one day.

    Rules:
    - Under 20 minutes: one work segment, no break
    - Otherwise: work blocks of at most 25 minutes with a 5-minute break
      between consecutive blocks

    The plan starts and ends on work and its work minutes sum to target_minutes.

    Args:
        target_minutes: Focused-work minutes for the day

    Returns:
        Ordered segment list

    Raises:
        ConfigurationError: If target_minutes is not positive
    """
    if target_minutes <= 0:
        raise ConfigurationError("INVALID_TARGET_MINUTES", [f"day target must be positive, got {target_minutes}"])

    if target_minutes < SPLIT_THRESHOLD_MINUTES:
        return [Segment(kind=SegmentKind.WORK, minutes=target_minutes)]

    segments: list[Segment] = []
    remaining = target_minutes
    while remaining > 0:
        work = min(remaining, MAX_WORK_MINUTES)
        segments.append(Segment(kind=SegmentKind.WORK, minutes=work))
        remaining -= work
        if remaining > 0:
            segments.append(Segment(kind=SegmentKind.BREAK, minutes=BREAK_MINUTES))
    return segments
