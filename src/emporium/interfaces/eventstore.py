"""Event store port for EMPORIUM.

The event store is the ledger's audit trail and its only record of store
state: every store is rebuilt from its own stream.

This module defines:
- `EventEnvelope`, the persisted wrapper around a serialized domain event.
- `EventEnvelopeBatch`, the unit of an atomic append (one stream, contiguous versions).
- `EventStore`, the append/read port.
- An adapter-agnostic exception hierarchy.

Contract overview
-----------------
Append:
- Atomic write of a batch belonging to a **single stream**.
- `global_seq` is assigned by the store; `recorded_at` is normalized to UTC.
- Returns envelopes in the **same order** as provided.
- The first version of the batch must be the stream tip + 1, otherwise
  `VersionConflictError`. This is what rejects two writers that loaded the same
  store version and both try to save.
- Duplicate `event_id` -> `DuplicateEventIdError`.
- Client-side invariant violations -> `InvalidEnvelopeError`.
- Driver/connection problems -> `StoreUnavailableError`.

Reads:
- `read_stream(stream_id, from_version=1, to_version=None)` ascending by version.
- `read_since(global_seq=0, limit=None)` ascending by global sequence.
- Empty results yield an empty iterator; invalid ranges raise `ValueError`.
"""

import abc
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

EVENT_ID_LENGTH = 26

# --- Exceptions to standardize adapter behavior ---


class EventStoreError(Exception):
    """Base class for event store errors."""


class VersionConflictError(EventStoreError):
    """Stream version precondition failed (optimistic concurrency)."""


class DuplicateEventIdError(EventStoreError):
    """event_id must be globally unique; duplicate detected."""


class InvalidEnvelopeError(EventStoreError):
    """The event envelope is invalid."""


class StoreUnavailableError(EventStoreError):
    """Operational/timeout/connection errors; callers may retry."""


# --- Envelope DTO ---


@dataclass(frozen=True, slots=True)
class EventEnvelope:
    """Persisted event wrapper.

    Notes:
      - `global_seq` is None before persistence and assigned by the store.
      - `recorded_at`, if set, must be tz-aware UTC; the store sets it on append.
    """

    # pylint: disable=too-many-instance-attributes

    stream_id: str
    stream_type: str
    version: int
    event_id: str  # 26-char ULID
    event_type: str
    payload: dict[str, Any]
    metadata: dict[str, Any] | None = None
    recorded_at: datetime | None = None
    global_seq: int | None = None

    def __post_init__(self) -> None:
        if len(self.event_id) != EVENT_ID_LENGTH:
            raise InvalidEnvelopeError("event_id must be a 26-character ULID.")
        if self.version < 1:
            raise InvalidEnvelopeError("version must be >= 1")
        if self.global_seq is not None and self.global_seq < 1:
            raise InvalidEnvelopeError("global_seq must be >= 1 when set")
        if self.recorded_at is not None:
            if self.recorded_at.tzinfo is None or self.recorded_at.utcoffset() is None:
                raise InvalidEnvelopeError("recorded_at must be tz-aware.")
            if self.recorded_at.utcoffset() != timedelta(0):
                raise InvalidEnvelopeError("recorded_at must be UTC.")
        if (
            not self.stream_id.strip()
            or not self.stream_type.strip()
            or not self.event_type.strip()
        ):
            raise InvalidEnvelopeError(
                "stream_id, stream_type, and event_type must be non-empty."
            )

    def as_insertable_row(self) -> dict[str, Any]:
        """Column mapping for an insert; store-assigned fields are left out."""
        return {
            "stream_id": self.stream_id,
            "stream_type": self.stream_type,
            "version": self.version,
            "event_id": self.event_id,
            "event_type": self.event_type,
            "payload": self.payload,
            "metadata": self.metadata,
        }


@dataclass(frozen=True, slots=True)
class EventEnvelopeBatch:
    """A single-stream, atomic append batch.

    Invariants enforced:
      - All events share the same (stream_id, stream_type).
      - Versions are strictly contiguous within the batch.
      - global_seq is None for all events.
      - event_id is unique within the batch.
    """

    stream_id: str
    stream_type: str
    events: Sequence[EventEnvelope]

    def __post_init__(self) -> None:
        if not self.events:
            raise InvalidEnvelopeError("Empty batch is not allowed.")

        for event in self.events:
            if (
                event.stream_id != self.stream_id
                or event.stream_type != self.stream_type
            ):
                raise InvalidEnvelopeError("Mixed streams in a single batch.")
            if event.global_seq is not None:
                raise InvalidEnvelopeError(
                    "global_seq must be None before persistence."
                )

        ids = [event.event_id for event in self.events]
        if len(ids) != len(set(ids)):
            raise InvalidEnvelopeError("Duplicate event_id within batch.")

        versions = [e.version for e in self.events]
        if versions != list(range(versions[0], versions[0] + len(versions))):
            raise InvalidEnvelopeError(
                "Versions in batch must be contiguous and ordered."
            )

    @property
    def starting_version(self) -> int:
        """The first version in the batch."""
        return self.events[0].version

    @classmethod
    def from_events(cls, events: Sequence[EventEnvelope]) -> "EventEnvelopeBatch":
        """Create a batch from a sequence of events, enforcing invariants.

        Raises:
            InvalidEnvelopeError: If the events list is empty or violates batch invariants.
        """
        if not events:
            raise InvalidEnvelopeError("Empty batch is not allowed.")
        return cls(
            stream_id=events[0].stream_id,
            stream_type=events[0].stream_type,
            events=events,
        )


# --- Event Store Interface ---


class EventStore(abc.ABC):
    """An abstract base class for an event store."""

    @abc.abstractmethod
    def append(
        self, events: EventEnvelopeBatch | Sequence[EventEnvelope]
    ) -> Sequence[EventEnvelope]:
        """Persist events atomically.

        Raises:
            InvalidEnvelopeError: mixed streams, non-contiguous versions, or
                other invariant violations.
            VersionConflictError: the batch does not start at the stream tip + 1.
            DuplicateEventIdError: an event_id already exists.
            StoreUnavailableError: operational/timeout/connection errors.

        Returns:
            The persisted events with `global_seq` and `recorded_at` populated,
            in the same order as provided.
        """

    @abc.abstractmethod
    def read_stream(
        self, stream_id: str, from_version: int = 1, to_version: int | None = None
    ) -> Iterable[EventEnvelope]:
        """Yield events of one stream ordered by version, bounds inclusive.

        Raises:
            ValueError: if from_version < 1 or to_version < from_version.
        """

    @abc.abstractmethod
    def read_since(
        self, global_seq: int = 0, limit: int | None = None
    ) -> Iterable[EventEnvelope]:
        """Yield events with `global_seq` greater than the given value, ascending.

        Raises:
            ValueError: if global_seq < 0 or limit is not None and limit < 1.
        """
