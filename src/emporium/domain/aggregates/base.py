"""Base class for all aggregates."""

import abc
from collections.abc import Sequence
from typing import ClassVar, NoReturn, TypeVar

from emporium.domain.errors import AggregateIdMismatchError, UnknownEventTypeError
from emporium.domain.events import DomainEvent

A = TypeVar("A", bound="Aggregate")


class Aggregate(abc.ABC):
    """Generic base class for event-sourced aggregates.

    State is only ever changed by applying events. Commands on a concrete
    aggregate validate their preconditions first and then enqueue one or more
    events; enqueuing applies the event immediately so the in-memory state and
    the pending event list never drift apart.
    """

    STREAM_TYPE: ClassVar[str]
    """Identifier of the event stream type this aggregate is stored under."""

    def __init__(self, aggregate_id: str) -> None:
        self.aggregate_id: str = aggregate_id
        self._version: int = 0
        self._pending_events: list[DomainEvent] = []

    # --- Construction Paths ---

    @classmethod
    def rehydrate(
        cls: type[A], aggregate_id: str, event_stream: Sequence[DomainEvent]
    ) -> A:
        """Rebuild an aggregate from its past events.

        Args:
            aggregate_id: The ID of the aggregate to rebuild.
            event_stream: The events to apply, oldest first.

        Returns:
            The aggregate in the state represented by the event stream, with
            its version equal to the number of events applied.

        Raises:
            AggregateIdMismatchError: If an event belongs to another aggregate.
            UnknownEventTypeError: If the aggregate cannot handle one of the events.
        """
        aggregate = cls(aggregate_id)
        for event in event_stream:
            aggregate._apply_checked(event)
            aggregate._version += 1
        return aggregate

    # --- Event Application ---

    def _apply_checked(self, event: DomainEvent) -> None:
        """Internal gate. Do not override."""
        if event.aggregate_id != self.aggregate_id:
            raise AggregateIdMismatchError(self.aggregate_id, event.aggregate_id)
        self._apply(event)

    @abc.abstractmethod
    def _apply(self, event: DomainEvent) -> None:
        """Mutate state according to a single event.

        Implementations should call `_unhandled(event)` for event types they do
        not recognise. ID matching is enforced by the base class.
        """

    def _unhandled(self, event: DomainEvent) -> NoReturn:
        raise UnknownEventTypeError(self.STREAM_TYPE, type(event).__name__)

    # --- Plumbing ---

    def _enqueue(self, event: DomainEvent) -> None:
        self._apply_checked(event)
        self._pending_events.append(event)

    def dequeue_uncommitted(self) -> list[DomainEvent]:
        """Hand over all events recorded since the last call.

        Note: This is NOT thread-safe; callers serialize access per aggregate.
        """

        uncommitted_events = self._pending_events
        self._pending_events = []
        return uncommitted_events

    @property
    def version(self) -> int:
        """The version of the aggregate as last loaded or saved."""
        return self._version

    def mark_committed(self, count: int) -> None:
        """Advance the version after `count` events have been persisted."""
        self._version += count
