"""Unit tests for read-side views."""

import pytest

from emporium.adapters.escrow import Coin
from emporium.bootstrap import bootstrap
from emporium.domain import events
from emporium.domain.errors import ItemNotFoundError
from emporium.service_layer import commands, views
from emporium.service_layer.repositories import AggregateNotFoundError

# pylint: disable=redefined-outer-name


@pytest.fixture
def seeded(make_add_item):
    """An in-memory app with one store holding two items, one of them sold out."""
    app = bootstrap(in_memory=True)
    bus = app.message_bus
    cap = bus.handle(commands.CreateStore())
    kettle = bus.handle(make_add_item(cap, title="Kettle", supply=1))
    mug = bus.handle(make_add_item(cap, title="Mug", price=4))
    bus.handle(
        commands.PurchaseItem(
            store_id=cap.store_id,
            item_id=kettle,
            quantity=1,
            recipient="bob",
            payment=Coin(10),
        )
    )
    return app, cap, kettle, mug


def test_store_view(seeded):
    """The store view reflects balance, items and version."""
    app, cap, kettle, mug = seeded
    view = views.store_view(app.uow, cap.store_id)
    assert view.store_id == cap.store_id
    assert view.owner_cap_id == cap.cap_id
    assert view.balance == 10
    assert view.item_count == 2
    assert view.version == 5
    assert [i.item_id for i in view.items] == [kettle, mug]


def test_item_view(seeded):
    """Item views show availability and listing."""
    app, cap, kettle, _ = seeded
    item = views.item_view(app.uow, cap.store_id, kettle)
    assert (item.title, item.available, item.listed) == ("Kettle", 0, False)


def test_item_view_unknown_item(seeded):
    """A missing item raises ItemNotFoundError."""
    app, cap, _, _ = seeded
    with pytest.raises(ItemNotFoundError):
        views.item_view(app.uow, cap.store_id, "Z" * 26)


def test_unknown_store():
    """A missing store raises AggregateNotFoundError."""
    app = bootstrap(in_memory=True)
    with pytest.raises(AggregateNotFoundError):
        views.store_view(app.uow, "nope")


def test_list_items(seeded):
    """Listing can hide unlisted items."""
    app, cap, kettle, mug = seeded
    assert [i.item_id for i in views.list_items(app.uow, cap.store_id)] == [kettle, mug]
    assert [
        i.item_id for i in views.list_items(app.uow, cap.store_id, listed_only=True)
    ] == [mug]


def test_store_history(seeded):
    """History returns domain events oldest first."""
    app, cap, _, _ = seeded
    history = views.store_history(app.uow, cap.store_id)
    assert [type(e) for e in history] == [
        events.StoreCreated,
        events.ItemAdded,
        events.ItemAdded,
        events.ItemPurchased,
        events.ItemUnlisted,
    ]
    assert views.store_history(app.uow, "nope") == []


def test_event_log_paging(seeded):
    """The event log pages by global sequence."""
    app, _, _, _ = seeded
    everything = views.event_log(app.uow)
    assert [e.global_seq for e in everything] == [1, 2, 3, 4, 5]
    page = views.event_log(app.uow, since=2, limit=2)
    assert [e.global_seq for e in page] == [3, 4]


def test_views_are_frozen(seeded):
    """Read models cannot be mutated."""
    app, cap, _, _ = seeded
    view = views.store_view(app.uow, cap.store_id)
    with pytest.raises(AttributeError):
        view.balance = 0  # type: ignore[misc]
