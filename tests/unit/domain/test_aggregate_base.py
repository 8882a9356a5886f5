"""Unit tests for the Aggregate base class."""

from dataclasses import dataclass

import pytest

from emporium.domain.aggregates.base import Aggregate
from emporium.domain.errors import AggregateIdMismatchError, UnknownEventTypeError
from emporium.domain.events import DomainEvent

# pylint: disable=protected-access,too-few-public-methods


@dataclass(frozen=True, slots=True)
class Ticked(DomainEvent):
    """Fake event for a counter stream."""

    counter_id: str

    @property
    def aggregate_id(self) -> str:
        return self.counter_id


@dataclass(frozen=True, slots=True)
class Ignored(Ticked):
    """Fake event the counter does not handle."""


class Counter(Aggregate):
    """Minimal aggregate counting Ticked events."""

    STREAM_TYPE = "Counter"

    def __init__(self, aggregate_id: str) -> None:
        super().__init__(aggregate_id)
        self.ticks = 0

    def tick(self) -> None:
        self._enqueue(Ticked(self.aggregate_id))

    def _apply(self, event: DomainEvent) -> None:
        match event:
            case Ignored():
                self._unhandled(event)
            case Ticked():
                self.ticks += 1
            case _:
                self._unhandled(event)


class TestRehydrate:
    """Rebuilding aggregates from past events."""

    @staticmethod
    def test_applies_events_and_sets_version():
        """Version equals the number of events applied."""
        counter = Counter.rehydrate("C1", [Ticked("C1"), Ticked("C1")])
        assert counter.ticks == 2
        assert counter.version == 2
        assert not counter.dequeue_uncommitted()

    @staticmethod
    def test_rejects_foreign_event():
        """Events of another aggregate are refused."""
        with pytest.raises(AggregateIdMismatchError):
            Counter.rehydrate("C1", [Ticked("C2")])

    @staticmethod
    def test_rejects_unhandled_event():
        """Unknown event types surface as UnknownEventTypeError."""
        with pytest.raises(UnknownEventTypeError, match="Counter cannot apply"):
            Counter.rehydrate("C1", [Ignored("C1")])


class TestPendingEvents:
    """Enqueuing, dequeuing and committing."""

    @staticmethod
    def test_enqueue_applies_immediately():
        """State changes as soon as an event is enqueued."""
        counter = Counter("C1")
        counter.tick()
        assert counter.ticks == 1
        assert counter.version == 0

    @staticmethod
    def test_dequeue_hands_over_once():
        """A second dequeue returns nothing."""
        counter = Counter("C1")
        counter.tick()
        counter.tick()
        assert len(counter.dequeue_uncommitted()) == 2
        assert counter.dequeue_uncommitted() == []

    @staticmethod
    def test_mark_committed_advances_version():
        """Committing advances the version by the persisted count."""
        counter = Counter.rehydrate("C1", [Ticked("C1")])
        counter.tick()
        counter.mark_committed(len(counter.dequeue_uncommitted()))
        assert counter.version == 2
