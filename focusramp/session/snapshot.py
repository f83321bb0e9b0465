"""Session snapshot codec.

Saves, validates, loads and clears the single in-progress snapshot per user
in an injected key-value store, and recovers true remaining time from the
snapshot's wall-clock stamp.

Local storage is best-effort: store failures are logged and never raised, and
a malformed stored value is erased and reported as no snapshot.
"""

import math

from loguru import logger
from pydantic import ValidationError

from focusramp.config.settings import settings
from focusramp.session.models import SessionSnapshot
from focusramp.session.store import KeyValueStore


class SnapshotCodec:
    """Serializer for the per-user active session slot."""

    def __init__(self, store: KeyValueStore, key_prefix: str | None = None) -> None:
        self._store = store
        self._key_prefix = key_prefix if key_prefix is not None else settings.snapshot_key_prefix

    def key_for(self, owner_id: str) -> str:
        return f"{self._key_prefix}{owner_id}"

    def save(self, snapshot: SessionSnapshot) -> None:
        """Write the snapshot, replacing any previous one for the same owner."""
        key = self.key_for(snapshot.owner_id)
        try:
            self._store.set(key, snapshot.model_dump_json())
        except Exception as e:
            logger.warning("Failed to save session snapshot", owner_id=snapshot.owner_id, error=str(e))

    def load(self, owner_id: str) -> SessionSnapshot | None:
        """Load the owner's snapshot.

        Returns:
            The snapshot, or None when absent, unreadable or malformed.
            Malformed values are erased.
        """
        key = self.key_for(owner_id)
        try:
            raw = self._store.get(key)
        except UnicodeDecodeError:
            logger.warning("Undecodable persisted session snapshot found, clearing", owner_id=owner_id)
            self.clear(owner_id)
            return None
        except Exception as e:
            logger.warning("Failed to read session snapshot", owner_id=owner_id, error=str(e))
            return None

        if not raw:
            return None

        try:
            snapshot = SessionSnapshot.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("Invalid persisted session snapshot found, clearing", owner_id=owner_id, errors=e.error_count())
            self.clear(owner_id)
            return None

        if snapshot.owner_id != owner_id:
            logger.warning("Persisted session snapshot belongs to another owner, clearing", owner_id=owner_id)
            self.clear(owner_id)
            return None

        return snapshot

    def clear(self, owner_id: str) -> None:
        try:
            self._store.delete(self.key_for(owner_id))
        except Exception as e:
            logger.warning("Failed to clear session snapshot", owner_id=owner_id, error=str(e))


def effective_remaining_seconds(snapshot: SessionSnapshot, now_ms: int) -> int:
    """Remaining seconds for a snapshot as of now_ms.

    A paused snapshot is returned unchanged. A running one loses the whole
    seconds elapsed since it was saved, clamped at zero.
    """
    if not snapshot.running:
        return snapshot.seconds_remaining

    elapsed_seconds = math.floor((now_ms - snapshot.last_updated_at_ms) / 1000)
    return max(0, snapshot.seconds_remaining - elapsed_seconds)
