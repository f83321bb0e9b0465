"""Session timer, snapshot codec and snapshot stores."""

from focusramp.session.models import SessionSnapshot, TimerState, TimerStatus
from focusramp.session.recorder import SessionRecorder, restore_timer
from focusramp.session.snapshot import SnapshotCodec, effective_remaining_seconds
from focusramp.session.store import InMemoryKeyValueStore, KeyValueStore, RedisKeyValueStore
from focusramp.session.timer import SessionTimer

__all__ = [
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "RedisKeyValueStore",
    "SessionRecorder",
    "SessionSnapshot",
    "SessionTimer",
    "SnapshotCodec",
    "TimerState",
    "TimerStatus",
    "effective_remaining_seconds",
    "restore_timer",
]
