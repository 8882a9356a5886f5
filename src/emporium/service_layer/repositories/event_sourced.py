"""Module for event-sourced repositories."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from emporium.domain.aggregates import Aggregate, Store
from emporium.interfaces.eventstore import EventEnvelope, EventStore
from emporium.interfaces.id_generator import IdGenerator

from .errors import AggregateNotFoundError, ReadOnlyRepositoryError
from .event_mapper import EventMapper

# pylint: disable=too-few-public-methods

# ============================================================================
#                      Generic Event-Sourced Repository
# ============================================================================


T = TypeVar("T", bound=Aggregate)


class EventSourcedRepository(Generic[T]):
    """Loads aggregates from their streams and appends their new events.

    Built without an `event_id_generator` the repository is read-only.
    """

    def __init__(
        self,
        event_store: EventStore,
        event_id_generator: IdGenerator | None = None,
        event_mapper: EventMapper | None = None,
        *,
        aggregate_cls: type[T],
    ) -> None:
        self.event_store = event_store
        self.event_id_generator = event_id_generator
        self.event_mapper = event_mapper if event_mapper is not None else EventMapper()
        self.aggregate_cls = aggregate_cls

    # --- Loads ---

    def load(self, aggregate_id: str) -> T:
        """Rehydrate an aggregate from its full stream.

        Raises:
            AggregateNotFoundError: If the stream is empty.
        """

        if not (
            envelopes := list(self.event_store.read_stream(stream_id=aggregate_id))
        ):
            raise AggregateNotFoundError(
                aggregate_type_name=self.aggregate_cls.__name__,
                aggregate_id=aggregate_id,
            )

        events = [self.event_mapper.to_domain_event(envelope) for envelope in envelopes]
        return self.aggregate_cls.rehydrate(aggregate_id, events)

    # --- Saves ---

    def store_events(
        self, aggregate: T, metadata: dict[str, Any] | None = None
    ) -> list[EventEnvelope]:
        """Append the aggregate's uncommitted events as one batch.

        Versions continue from `aggregate.version`, so a concurrent writer
        that saved first makes the append fail with `VersionConflictError`.
        Nothing is appended when there are no pending events.

        Returns:
            The persisted envelopes.
        """
        if self.event_id_generator is None:
            raise ReadOnlyRepositoryError(
                f"{type(self).__name__} was built without an event id generator."
            )

        if not (events := aggregate.dequeue_uncommitted()):
            return []

        envelopes = [
            self.event_mapper.to_envelope(
                stream_id=aggregate.aggregate_id,
                stream_type=aggregate.STREAM_TYPE,
                version=aggregate.version + i,
                event_id=self.event_id_generator.new_id(),
                event=event,
                metadata=metadata,
            )
            for i, event in enumerate(events, start=1)
        ]

        persisted = list(self.event_store.append(envelopes))
        aggregate.mark_committed(len(persisted))
        return persisted


# ============================================================================
#                             Concrete Repositories
# ============================================================================


class StoreRepository(EventSourcedRepository[Store]):
    """Repository for Store aggregates."""

    def __init__(
        self,
        event_store: EventStore,
        event_id_generator: IdGenerator | None = None,
        event_mapper: EventMapper | None = None,
    ) -> None:
        super().__init__(
            event_store,
            event_id_generator,
            event_mapper,
            aggregate_cls=Store,
        )
