"""In-memory event store implementation.

Appends are serialized by a lock so several handler threads may share one
instance. Passes the same contract tests as the SQLAlchemy adapter.
"""

import threading
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone

from emporium.interfaces.eventstore import (
    DuplicateEventIdError,
    EventEnvelope,
    EventEnvelopeBatch,
    EventStore,
    VersionConflictError,
)


class InMemoryEventStore(EventStore):
    """Non-durable EventStore keeping the log in a list."""

    def __init__(self):
        self._events: list[EventEnvelope] = []
        self._event_ids: set[str] = set()
        self._tips: dict[str, int] = {}
        self._lock = threading.Lock()

    # --------------------------------------------------------------------- #
    # Interface implementation
    # --------------------------------------------------------------------- #

    def append(
        self, events: Sequence[EventEnvelope] | EventEnvelopeBatch
    ) -> Sequence[EventEnvelope]:
        batch = (
            events
            if isinstance(events, EventEnvelopeBatch)
            else EventEnvelopeBatch.from_events(events)
        )

        with self._lock:
            expected_version = self._tips.get(batch.stream_id, 0) + 1
            if batch.starting_version != expected_version:
                raise VersionConflictError(
                    f"expected first version {expected_version}, got {batch.starting_version}"
                )
            for event in batch.events:
                if event.event_id in self._event_ids:
                    raise DuplicateEventIdError(f"duplicate event_id {event.event_id}")

            recorded_at = datetime.now(timezone.utc)
            appended = []
            for offset, event in enumerate(batch.events, start=1):
                row = event.as_insertable_row()
                row["global_seq"] = len(self._events) + offset
                row["recorded_at"] = recorded_at
                appended.append(EventEnvelope(**row))

            self._events.extend(appended)
            self._event_ids.update(e.event_id for e in appended)
            self._tips[batch.stream_id] = appended[-1].version
        return appended

    def read_stream(
        self, stream_id: str, from_version: int = 1, to_version: int | None = None
    ) -> Iterable[EventEnvelope]:
        if from_version < 1:
            raise ValueError("from_version must be >= 1")
        if to_version is not None and to_version < from_version:
            raise ValueError("to_version must be >= from_version")

        with self._lock:
            snapshot = [e for e in self._events if e.stream_id == stream_id]

        for event in snapshot:
            if event.version < from_version:
                continue
            if to_version is not None and event.version > to_version:
                break
            yield event

    def read_since(
        self, global_seq: int = 0, limit: int | None = None
    ) -> Iterable[EventEnvelope]:
        if global_seq < 0:
            raise ValueError("global_seq must be >= 0")
        if limit is not None and limit <= 0:
            raise ValueError("limit cannot be <= 0")

        # global_seq n lives at index n - 1
        with self._lock:
            end = None if limit is None else global_seq + limit
            snapshot = self._events[global_seq:end]
        yield from snapshot
