"""Tests for the session timer state machine.

Tests verify that:
- Remaining time is recomputed from the clock, not counted down per tick
- A long suspension completes the current segment exactly once
- Only work segments fire the completion callback, and skip never fires it
- Completion auto-advances into the next segment, running
- External state is applied without echoing a state change
"""

import pytest

from focusramp.schedule.enums import SegmentKind
from focusramp.schedule.models import Segment
from focusramp.session.models import TimerState, TimerStatus
from focusramp.session.timer import SessionTimer

WORK_25 = Segment(SegmentKind.WORK, 25)
BREAK_5 = Segment(SegmentKind.BREAK, 5)
WORK_5 = Segment(SegmentKind.WORK, 5)


class Recorder:
    def __init__(self) -> None:
        self.states: list[TimerState] = []
        self.completed: list[int] = []
        self.started: list[int] = []

    def on_state_change(self, state: TimerState) -> None:
        self.states.append(state)

    def on_segment_complete(self, index: int, segment: Segment) -> None:
        self.completed.append(index)

    def on_work_segment_start(self, index: int, segment: Segment) -> None:
        self.started.append(index)


@pytest.fixture
def events() -> Recorder:
    return Recorder()


def _timer(segments, clock, events, **kwargs) -> SessionTimer:
    return SessionTimer(
        segments,
        clock=clock,
        on_state_change=events.on_state_change,
        on_segment_complete=events.on_segment_complete,
        on_work_segment_start=events.on_work_segment_start,
        **kwargs,
    )


def test_requires_segments(clock):
    with pytest.raises(ValueError):
        SessionTimer([], clock=clock)


def test_start_runs_first_segment(clock, events):
    timer = _timer([WORK_25, BREAK_5, WORK_5], clock, events)
    assert timer.status == TimerStatus.IDLE

    timer.start()

    assert timer.status == TimerStatus.RUNNING
    assert timer.state.seconds_remaining == 1500
    assert events.started == [0]
    assert len(events.states) == 1


def test_tick_recomputes_from_clock(clock, events):
    timer = _timer([WORK_25], clock, events)
    timer.start()

    clock.advance(100.4)
    assert timer.tick().seconds_remaining == 1400

    clock.advance(1)
    assert timer.tick().seconds_remaining == 1399


def test_ticks_without_change_do_not_emit(clock, events):
    timer = _timer([WORK_25], clock, events)
    timer.start()

    timer.tick()
    clock.advance(0.5)
    timer.tick()

    assert len(events.states) == 1


def test_start_while_running_is_noop(clock, events):
    timer = _timer([WORK_25], clock, events)
    timer.start()
    clock.advance(60)

    timer.start()

    assert timer.tick().seconds_remaining == 1440
    assert events.started == [0]


def test_pause_and_resume_accumulate_elapsed(clock, events):
    timer = _timer([WORK_25], clock, events)
    timer.start()
    clock.advance(100)

    timer.pause()
    assert timer.status == TimerStatus.PAUSED
    assert timer.state.seconds_remaining == 1400

    clock.advance(500)
    assert timer.tick().seconds_remaining == 1400

    timer.resume()
    clock.advance(50)
    assert timer.tick().seconds_remaining == 1350


def test_resume_from_idle_starts(clock, events):
    timer = _timer([WORK_25], clock, events)

    timer.resume()

    assert timer.status == TimerStatus.RUNNING
    assert events.started == [0]


def test_resume_with_no_time_left_completes_immediately(clock, events):
    timer = _timer([WORK_25, BREAK_5], clock, events, initial_seconds_remaining=0)
    assert timer.status == TimerStatus.PAUSED

    timer.resume()

    assert events.completed == [0]
    assert timer.state.segment_index == 1
    assert timer.status == TimerStatus.RUNNING


def test_suspension_completes_exactly_once(clock, events):
    timer = _timer([WORK_25], clock, events)
    timer.start()

    clock.advance(2000)
    state = timer.tick()

    assert state.seconds_remaining == 0
    assert state.finished
    assert events.completed == [0]

    clock.advance(2000)
    timer.tick()
    assert events.completed == [0]


def test_completion_auto_advances_running(clock, events):
    timer = _timer([WORK_25, BREAK_5, WORK_5], clock, events)
    timer.start()

    clock.advance(2000)
    state = timer.tick()

    assert events.completed == [0]
    assert state.segment_index == 1
    assert state.running
    assert state.seconds_remaining == 300
    assert state.completed_segments == frozenset({0})

    clock.advance(300)
    state = timer.tick()

    assert state.segment_index == 2
    assert events.completed == [0]
    assert events.started == [0, 2]


def test_break_completion_does_not_log(clock, events):
    timer = _timer([Segment(SegmentKind.WORK, 1), Segment(SegmentKind.BREAK, 1)], clock, events)
    timer.start()

    clock.advance(60)
    timer.tick()
    clock.advance(60)
    state = timer.tick()

    assert state.finished
    assert timer.status == TimerStatus.FINISHED
    assert events.completed == [0]
    assert state.completed_segments == frozenset({0, 1})


def test_skip_middle_segment(clock, events):
    timer = _timer([WORK_25, BREAK_5, WORK_5], clock, events)
    timer.start()
    clock.advance(1500)
    timer.tick()
    assert timer.state.segment_index == 1

    timer.skip_segment()

    state = timer.state
    assert state.segment_index == 2
    assert not state.finished
    assert state.completed_segments == frozenset({0, 1})
    assert events.completed == [0]
    assert events.started == [0, 2]


def test_skip_work_segment_does_not_log(clock, events):
    timer = _timer([WORK_25, BREAK_5, WORK_5], clock, events)
    timer.start()

    timer.skip_segment()

    assert events.completed == []
    assert timer.state.completed_segments == frozenset({0})
    assert timer.state.seconds_remaining == 300


def test_skip_last_segment_finishes(clock, events):
    timer = _timer([WORK_5], clock, events)
    timer.start()

    timer.skip_segment()

    assert timer.status == TimerStatus.FINISHED
    assert events.completed == []

    timer.skip_segment()
    assert timer.state.completed_segments == frozenset({0})


def test_go_to_segment(clock, events):
    timer = _timer([WORK_25, BREAK_5, WORK_5], clock, events)
    timer.start()
    clock.advance(30)

    timer.go_to_segment(2)

    assert timer.status == TimerStatus.IDLE
    assert timer.state.segment_index == 2
    assert timer.state.seconds_remaining == 300


def test_go_to_out_of_range_is_noop(clock, events):
    timer = _timer([WORK_25, BREAK_5], clock, events)
    timer.start()
    before = timer.state

    timer.go_to_segment(2)
    timer.go_to_segment(-1)

    assert timer.state == before


def test_reset_clears_history(clock, events):
    timer = _timer([WORK_25, BREAK_5], clock, events)
    timer.start()
    timer.skip_segment()

    timer.reset()

    assert timer.status == TimerStatus.IDLE
    assert timer.state == TimerState(segment_index=0, seconds_remaining=1500, running=False, finished=False)


def test_apply_external_state_does_not_emit(clock, events):
    timer = _timer([WORK_25, BREAK_5, WORK_5], clock, events)
    timer.start()
    emitted = len(events.states)
    external = TimerState(
        segment_index=2,
        seconds_remaining=120,
        running=True,
        finished=False,
        completed_segments=frozenset({0, 1}),
    )

    timer.apply_external_state(external)

    assert timer.state == external
    assert len(events.states) == emitted

    clock.advance(20)
    assert timer.tick().seconds_remaining == 100
    assert len(events.states) == emitted + 1


def test_apply_external_state_out_of_range_ignored(clock, events):
    timer = _timer([WORK_25], clock, events)
    before = timer.state

    timer.apply_external_state(TimerState(segment_index=3, seconds_remaining=10, running=True, finished=False))

    assert timer.state == before


def test_finished_external_state_lands_on_last_segment(clock, events):
    timer = _timer([WORK_25, BREAK_5, WORK_5], clock, events)

    timer.apply_external_state(
        TimerState(segment_index=0, seconds_remaining=120, running=True, finished=True, completed_segments=frozenset({0}))
    )

    assert timer.status == TimerStatus.FINISHED
    assert timer.state == TimerState(
        segment_index=2,
        seconds_remaining=0,
        running=False,
        finished=True,
        completed_segments=frozenset({0}),
    )
    assert events.states == []


def _finished_timer(clock, events) -> SessionTimer:
    timer = _timer([WORK_5], clock, events)
    timer.start()
    clock.advance(300)
    timer.tick()
    assert timer.status == TimerStatus.FINISHED
    return timer


def test_resume_on_finished_timer_is_noop(clock, events):
    timer = _finished_timer(clock, events)
    before = timer.state
    emitted, completed = len(events.states), list(events.completed)

    clock.advance(60)
    timer.resume()

    assert timer.state == before
    assert len(events.states) == emitted
    assert events.completed == completed


def test_start_on_finished_timer_is_noop(clock, events):
    timer = _finished_timer(clock, events)
    before = timer.state
    emitted, started = len(events.states), list(events.started)

    timer.start()

    assert timer.state == before
    assert timer.status == TimerStatus.FINISHED
    assert len(events.states) == emitted
    assert events.started == started


def test_pause_while_idle_is_noop(clock, events):
    timer = _timer([WORK_25], clock, events)
    before = timer.state

    timer.pause()

    assert timer.state == before
    assert timer.status == TimerStatus.IDLE
    assert events.states == []


def test_pause_while_paused_is_noop(clock, events):
    timer = _timer([WORK_25], clock, events)
    timer.start()
    clock.advance(10)
    timer.pause()
    before = timer.state
    emitted = len(events.states)

    clock.advance(10)
    timer.pause()

    assert timer.state == before
    assert timer.state.seconds_remaining == 1490
    assert len(events.states) == emitted
    assert events.completed == []
