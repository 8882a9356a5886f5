"""Unit tests for EventMapper."""

import pytest

from emporium.domain import events
from emporium.service_layer.repositories import EventMapper
from emporium.service_layer.repositories.event_mapper import (
    UnknownEventTypeInStoreError,
)

EVENT = events.ItemPurchased(
    store_id="S1",
    item_id="I1",
    quantity=2,
    amount=20,
    buyer="bob",
    kind="sale",
)


def test_to_envelope_serializes_fields():
    """The event's fields become the payload; its class name the event type."""
    envelope = EventMapper.to_envelope(
        stream_id="S1",
        stream_type="Store",
        version=3,
        event_id="E" * 26,
        event=EVENT,
        metadata={"command": "PurchaseItem"},
    )
    assert envelope.event_type == "ItemPurchased"
    assert envelope.payload == {
        "store_id": "S1",
        "item_id": "I1",
        "quantity": 2,
        "amount": 20,
        "buyer": "bob",
        "kind": "sale",
    }
    assert envelope.metadata == {"command": "PurchaseItem"}
    assert envelope.version == 3


def test_roundtrip_through_registry(make_envelope):
    """An envelope maps back onto an equal domain event."""
    mapper = EventMapper()
    envelope = mapper.to_envelope("S1", "Store", 1, "E" * 26, EVENT)
    assert mapper.to_domain_event(envelope) == EVENT


def test_unknown_event_type_raises(make_envelope):
    """Unregistered event types are rejected."""
    envelope = make_envelope(event_type="Nope")
    with pytest.raises(UnknownEventTypeInStoreError, match="Unknown event type: Nope"):
        EventMapper().to_domain_event(envelope)


def test_custom_registry(make_envelope):
    """A mapper can be built over a different registry."""
    mapper = EventMapper({"TestEvent": events.DeliveryInitiated})
    envelope = make_envelope(
        event_type="TestEvent",
        payload={"store_id": "S1", "item_id": "I1", "buyer": "bob"},
    )
    assert mapper.to_domain_event(envelope) == events.DeliveryInitiated(
        store_id="S1", item_id="I1", buyer="bob"
    )
