"""Binding between a running SessionTimer and its persisted snapshot.

SessionRecorder mirrors every timer state change into the snapshot slot and
clears the slot once the day finishes. restore_timer rebuilds a timer from a
previously saved snapshot.
"""

import time
from collections.abc import Sequence

from loguru import logger

from focusramp.schedule.models import Segment
from focusramp.session.models import SessionSnapshot, TimerState
from focusramp.session.snapshot import SnapshotCodec, effective_remaining_seconds
from focusramp.session.timer import Clock, SegmentListener, SessionTimer, StateListener


def now_ms(clock: Clock = time.time) -> int:
    return int(clock() * 1000)


class SessionRecorder:
    """Persists timer state for one owner and training day.

    Pass recorder.on_state_change as the timer's on_state_change listener.
    """

    def __init__(
        self,
        codec: SnapshotCodec,
        *,
        owner_id: str,
        plan_id: str,
        day_id: str,
        day_date: str,
        segments: Sequence[Segment],
        clock: Clock = time.time,
    ) -> None:
        self._codec = codec
        self._owner_id = owner_id
        self._plan_id = plan_id
        self._day_id = day_id
        self._day_date = day_date
        self._segments = tuple(segments)
        self._clock = clock

    def build_snapshot(self, state: TimerState) -> SessionSnapshot:
        segment = self._segments[state.segment_index]
        return SessionSnapshot(
            owner_id=self._owner_id,
            plan_id=self._plan_id,
            day_id=self._day_id,
            date=self._day_date,
            segment_index=state.segment_index,
            segment_kind=segment.kind.value,
            segment_planned_minutes=segment.minutes,
            seconds_remaining=state.seconds_remaining,
            running=state.running,
            last_updated_at_ms=now_ms(self._clock),
        )

    def on_state_change(self, state: TimerState) -> None:
        if state.finished:
            logger.info("Session finished, clearing snapshot", owner_id=self._owner_id, day_id=self._day_id)
            self._codec.clear(self._owner_id)
            return
        self._codec.save(self.build_snapshot(state))

    def abandon(self) -> None:
        """Drop the persisted session without finishing it."""
        logger.info("Session abandoned, clearing snapshot", owner_id=self._owner_id, day_id=self._day_id)
        self._codec.clear(self._owner_id)


def _snapshot_matches(snapshot: SessionSnapshot, plan_id: str, day_id: str, segments: tuple[Segment, ...]) -> bool:
    if snapshot.plan_id != plan_id or snapshot.day_id != day_id:
        return False
    if snapshot.segment_index >= len(segments):
        return False
    segment = segments[snapshot.segment_index]
    return segment.kind.value == snapshot.segment_kind and segment.minutes == snapshot.segment_planned_minutes


def restore_timer(
    segments: Sequence[Segment],
    snapshot: SessionSnapshot | None,
    *,
    plan_id: str,
    day_id: str,
    clock: Clock = time.time,
    on_state_change: StateListener | None = None,
    on_segment_complete: SegmentListener | None = None,
    on_work_segment_start: SegmentListener | None = None,
) -> SessionTimer:
    """Build a timer for a day, resuming from a snapshot when it applies.

    A snapshot for another plan or day, or one whose segment no longer matches
    the day's plan, is ignored and the timer starts idle at segment 0. A
    running snapshot resumes with the time that elapsed since it was saved
    already deducted, so a segment that ran out while the process was gone
    completes on the first tick.
    """
    plan = tuple(segments)
    listeners = {
        "on_state_change": on_state_change,
        "on_segment_complete": on_segment_complete,
        "on_work_segment_start": on_work_segment_start,
    }

    if snapshot is None or not _snapshot_matches(snapshot, plan_id, day_id, plan):
        if snapshot is not None:
            logger.info("Ignoring session snapshot for a different plan, day or segment layout", day_id=day_id)
        return SessionTimer(plan, clock=clock, **listeners)

    remaining = effective_remaining_seconds(snapshot, now_ms(clock))
    logger.debug(
        "Restoring session from snapshot",
        day_id=day_id,
        segment_index=snapshot.segment_index,
        seconds_remaining=remaining,
        running=snapshot.running,
    )
    return SessionTimer(
        plan,
        clock=clock,
        initial_index=snapshot.segment_index,
        initial_seconds_remaining=remaining,
        initial_running=snapshot.running,
        **listeners,
    )
