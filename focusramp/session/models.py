"""Session timer and snapshot models.

TimerState is the observable state of the timer, emitted on every change.
SessionSnapshot is the persisted mirror of an in-progress timer, validated
strictly on load so a corrupted slot never rehydrates a bogus session.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class TimerStatus(StrEnum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"


@dataclass(frozen=True)
class TimerState:
    """Observable timer state.

    Attributes:
        segment_index: Index of the current segment
        seconds_remaining: Seconds left in the current segment (never above its planned duration)
        running: Whether the countdown is advancing
        finished: Whether the last segment has completed or been skipped
        completed_segments: Indices marked completed, including skipped ones
    """

    segment_index: int
    seconds_remaining: int
    running: bool
    finished: bool
    completed_segments: frozenset[int] = field(default_factory=frozenset)


class SessionSnapshot(BaseModel):
    """Persisted state of one in-progress session (one per user)."""

    model_config = ConfigDict(strict=True, frozen=True)

    owner_id: str
    plan_id: str
    day_id: str
    date: str = Field(..., description="ISO date of the training day")
    segment_index: int = Field(..., ge=0)
    segment_kind: Literal["work", "break"]
    segment_planned_minutes: int = Field(..., gt=0)
    seconds_remaining: int = Field(..., ge=0)
    running: bool
    last_updated_at_ms: int = Field(..., ge=0, description="Milliseconds since epoch of the last save")
