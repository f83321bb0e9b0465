"""Session timer state machine.

Drives one day's segment list through wall-clock time. Remaining time is
never decremented per tick; every evaluation recomputes it from the run start
instant and the accumulated elapsed time, so a process that was suspended for
an hour reports the right value on its next tick without replaying the
missed ticks.

States: idle -> running <-> paused -> finished.
"""

import math
import time
from collections.abc import Callable, Sequence

from loguru import logger

from focusramp.schedule.models import Segment
from focusramp.session.models import TimerState, TimerStatus

Clock = Callable[[], float]
StateListener = Callable[[TimerState], None]
SegmentListener = Callable[[int, Segment], None]


class SessionTimer:
    """Countdown controller over one day's segments.

    Listeners are called synchronously, in transition order:
    - on_state_change: after every transition that changes the observable state
    - on_segment_complete: when a work segment runs down to zero (never on skip)
    - on_work_segment_start: when a work segment starts running
    """

    def __init__(
        self,
        segments: Sequence[Segment],
        *,
        clock: Clock = time.time,
        initial_index: int = 0,
        initial_seconds_remaining: int | None = None,
        initial_running: bool = False,
        on_state_change: StateListener | None = None,
        on_segment_complete: SegmentListener | None = None,
        on_work_segment_start: SegmentListener | None = None,
    ):
        if not segments:
            raise ValueError("SessionTimer requires at least one segment")

        self._segments: tuple[Segment, ...] = tuple(segments)
        self._clock = clock
        self._on_state_change = on_state_change
        self._on_segment_complete = on_segment_complete
        self._on_work_segment_start = on_work_segment_start

        if not 0 <= initial_index < len(self._segments):
            logger.warning("Initial segment index out of range, starting at 0", initial_index=initial_index)
            initial_index = 0

        self._index = initial_index
        self._planned_seconds = self._segments[initial_index].seconds
        remaining = self._planned_seconds if initial_seconds_remaining is None else initial_seconds_remaining
        remaining = min(max(0, remaining), self._planned_seconds)

        self._accumulated = float(self._planned_seconds - remaining)
        self._seconds_remaining = remaining
        self._running = initial_running
        self._run_started_at: float | None = self._clock() if initial_running else None
        self._finished = False
        self._started = initial_running or remaining < self._planned_seconds
        self._completed: set[int] = set()
        self._last_emitted: TimerState | None = self.state

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def segments(self) -> tuple[Segment, ...]:
        return self._segments

    @property
    def state(self) -> TimerState:
        return TimerState(
            segment_index=self._index,
            seconds_remaining=self._seconds_remaining,
            running=self._running,
            finished=self._finished,
            completed_segments=frozenset(self._completed),
        )

    @property
    def status(self) -> TimerStatus:
        if self._finished:
            return TimerStatus.FINISHED
        if self._running:
            return TimerStatus.RUNNING
        if self._started:
            return TimerStatus.PAUSED
        return TimerStatus.IDLE

    @property
    def current_segment(self) -> Segment:
        return self._segments[self._index]

    # ------------------------------------------------------------------
    # Controls
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the current segment from its full planned duration."""
        if self._finished or self._running:
            return

        self._enter_segment(self._index, running=True)
        self._started = True

        if self.current_segment.is_work:
            self._notify_work_start(self._index)
        self._emit()

    def pause(self) -> None:
        """Fold elapsed run time into the accumulator and stop the countdown."""
        if not self._running or self._run_started_at is None:
            return

        self._accumulated += max(0.0, self._clock() - self._run_started_at)
        self._run_started_at = None
        self._running = False
        self._seconds_remaining = self._remaining_from_accumulated()
        self._emit()

    def resume(self) -> None:
        """Continue a paused segment, completing it at once if its time ran out."""
        if self._finished or self._running:
            return
        if not self._started:
            self.start()
            return

        remaining = self._planned_seconds - math.floor(self._accumulated)
        if remaining <= 0:
            self._complete_current_segment()
            return

        self._run_started_at = self._clock()
        self._running = True
        self._seconds_remaining = remaining
        self._emit()

    def skip_segment(self) -> None:
        """Advance without logging the current segment as accomplished.

        The index is still marked completed for progress display. Skipping the
        last segment finishes the session.
        """
        if self._finished:
            return

        self._completed.add(self._index)

        if self._index < len(self._segments) - 1:
            next_index = self._index + 1
            self._enter_segment(next_index, running=self._running)
            if self._running and self._segments[next_index].is_work:
                self._notify_work_start(next_index)
        else:
            self._finish()

        self._emit()

    def go_to_segment(self, index: int) -> None:
        """Jump to a segment and leave it idle. Out-of-range indices are ignored."""
        if not 0 <= index < len(self._segments):
            logger.debug("Ignoring go_to_segment with out-of-range index", index=index, segments=len(self._segments))
            return

        self._enter_segment(index, running=False)
        self._finished = False
        self._started = False
        self._emit()

    def reset(self) -> None:
        """Return to the first segment, idle, with no completion history."""
        self._enter_segment(0, running=False)
        self._finished = False
        self._started = False
        self._completed.clear()
        self._emit()

    def tick(self) -> TimerState:
        """Re-evaluate remaining time against the clock.

        Safe to call at any rate, or not at all for long stretches. A segment
        that ran out while ticks were not delivered completes exactly once.

        Returns:
            The state after evaluation
        """
        if not self._running or self._run_started_at is None:
            return self.state

        elapsed = self._accumulated + max(0.0, self._clock() - self._run_started_at)
        remaining = max(0, self._planned_seconds - math.floor(elapsed))

        if remaining == 0:
            self._complete_current_segment()
        else:
            self._seconds_remaining = remaining
            self._emit()
        return self.state

    def apply_external_state(self, external: TimerState) -> None:
        """Overwrite local state with one produced elsewhere.

        Used when another device or session advanced the same logical session.
        Does not emit on_state_change, so the persisted mirror that produced
        the state is not written back to.
        """
        if not 0 <= external.segment_index < len(self._segments):
            logger.warning(
                "Ignoring external timer state with out-of-range segment index",
                segment_index=external.segment_index,
                segments=len(self._segments),
            )
            return

        # A finished session always sits on its last segment with nothing left
        if external.finished:
            self._index = len(self._segments) - 1
            self._planned_seconds = self._segments[self._index].seconds
            self._seconds_remaining = 0
        else:
            self._index = external.segment_index
            self._planned_seconds = self._segments[self._index].seconds
            self._seconds_remaining = min(max(0, external.seconds_remaining), self._planned_seconds)
        self._accumulated = float(self._planned_seconds - self._seconds_remaining)
        self._finished = external.finished
        self._running = external.running and not external.finished
        self._run_started_at = self._clock() if self._running else None
        self._completed = set(external.completed_segments)
        self._started = self._running or self._finished or self._seconds_remaining < self._planned_seconds

        self._last_emitted = self.state

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _enter_segment(self, index: int, running: bool) -> None:
        self._index = index
        self._planned_seconds = self._segments[index].seconds
        self._seconds_remaining = self._planned_seconds
        self._accumulated = 0.0
        self._running = running
        self._run_started_at = self._clock() if running else None

    def _remaining_from_accumulated(self) -> int:
        return max(0, self._planned_seconds - math.floor(self._accumulated))

    def _complete_current_segment(self) -> None:
        index = self._index
        segment = self._segments[index]

        self._completed.add(index)
        self._seconds_remaining = 0

        if segment.is_work and self._on_segment_complete is not None:
            self._on_segment_complete(index, segment)

        if index < len(self._segments) - 1:
            next_index = index + 1
            self._enter_segment(next_index, running=True)
            self._started = True
            if self._segments[next_index].is_work:
                self._notify_work_start(next_index)
        else:
            self._finish()

        logger.debug("Segment completed", segment_index=index, kind=segment.kind.value, finished=self._finished)
        self._emit()

    def _finish(self) -> None:
        self._running = False
        self._run_started_at = None
        self._finished = True
        self._seconds_remaining = 0

    def _notify_work_start(self, index: int) -> None:
        if self._on_work_segment_start is not None:
            self._on_work_segment_start(index, self._segments[index])

    def _emit(self) -> None:
        current = self.state
        if current == self._last_emitted:
            return
        self._last_emitted = current
        if self._on_state_change is not None:
            self._on_state_change(current)
