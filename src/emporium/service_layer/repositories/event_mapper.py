"""Conversions between DomainEvents and EventEnvelopes."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING, Any

from emporium.domain.events import DOMAIN_EVENT_REGISTRY
from emporium.interfaces.eventstore import EventEnvelope

if TYPE_CHECKING:
    from emporium.domain.events import DomainEvent


class UnknownEventTypeInStoreError(ValueError):
    """Raised when a persisted event type has no registered class."""

    def __init__(self, event_type: str) -> None:
        super().__init__(f"Unknown event type: {event_type}")
        self.event_type = event_type


class EventMapper:
    """Maps between DomainEvents and EventEnvelopes using an event registry."""

    def __init__(
        self, event_registry: dict[str, type[DomainEvent]] | None = None
    ) -> None:
        self.event_registry = (
            event_registry if event_registry is not None else DOMAIN_EVENT_REGISTRY
        )

    @staticmethod
    def to_envelope(  # pylint: disable=too-many-arguments
        stream_id: str,
        stream_type: str,
        version: int,
        event_id: str,
        event: DomainEvent,
        metadata: dict[str, Any] | None = None,
    ) -> EventEnvelope:
        """Serialize a DomainEvent; its fields become the JSON payload."""
        return EventEnvelope(
            stream_id=stream_id,
            stream_type=stream_type,
            version=version,
            event_id=event_id,
            event_type=type(event).__name__,
            payload=asdict(event),
            metadata=metadata,
        )

    def to_domain_event(self, envelope: EventEnvelope) -> DomainEvent:
        """Rebuild the DomainEvent stored in an envelope.

        Raises:
            UnknownEventTypeInStoreError: If `event_type` is not registered.
        """
        if not (cls := self.event_registry.get(envelope.event_type)):
            raise UnknownEventTypeInStoreError(envelope.event_type)
        return cls(**envelope.payload)
