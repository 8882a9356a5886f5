"""Read-side queries.

Views never mutate anything: stores are rehydrated from their streams
through a read-only repository and returned as plain snapshots.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from emporium.domain.events import DomainEvent
from emporium.interfaces.eventstore import EventEnvelope
from emporium.service_layer.repositories import EventMapper, StoreRepository

if TYPE_CHECKING:
    from emporium.domain.aggregates import Store
    from emporium.domain.inventory import Item
    from emporium.domain.value_objects import TransactionRating
    from emporium.interfaces.unit_of_work import AbstractUnitOfWork

# pylint: disable=too-many-instance-attributes


@dataclass(frozen=True)
class ItemView:
    """Read model of an item."""

    item_id: str
    store_id: str
    title: str
    description: str
    url: str
    price: int
    category: int
    total_supply: int
    available: int
    listed: bool

    @classmethod
    def from_item(cls, item: Item) -> ItemView:
        return cls(
            item_id=item.item_id,
            store_id=item.store_id,
            title=item.title,
            description=item.description,
            url=item.url,
            price=item.price,
            category=item.category,
            total_supply=item.total_supply,
            available=item.available,
            listed=item.listed,
        )


@dataclass(frozen=True)
class StoreView:
    """Read model of a store: account state plus its items in listing order."""

    store_id: str
    owner_cap_id: str
    balance: int
    item_count: int
    version: int
    items: tuple[ItemView, ...]

    @classmethod
    def from_store(cls, store: Store) -> StoreView:
        return cls(
            store_id=store.aggregate_id,
            owner_cap_id=store.owner_cap_id or "",
            balance=store.balance,
            item_count=store.item_count,
            version=store.version,
            items=tuple(ItemView.from_item(item) for item in store.items.values()),
        )


def _load_store(uow: AbstractUnitOfWork, store_id: str) -> Store:
    with uow:
        return StoreRepository(uow.eventstore).load(store_id)


def store_view(uow: AbstractUnitOfWork, store_id: str) -> StoreView:
    """Current state of a store.

    Raises:
        AggregateNotFoundError: If no store has this id.
    """
    return StoreView.from_store(_load_store(uow, store_id))


def item_view(uow: AbstractUnitOfWork, store_id: str, item_id: str) -> ItemView:
    """Current state of one item.

    Raises:
        AggregateNotFoundError: If no store has this id.
        ItemNotFoundError: If the store has no such item.
    """
    return ItemView.from_item(_load_store(uow, store_id).get_item(item_id))


def list_items(
    uow: AbstractUnitOfWork, store_id: str, *, listed_only: bool = False
) -> list[ItemView]:
    """Items of a store in the order they were added."""
    items = store_view(uow, store_id).items
    return [item for item in items if item.listed or not listed_only]


def store_history(uow: AbstractUnitOfWork, store_id: str) -> list[DomainEvent]:
    """Every event of a store, oldest first. Empty for unknown stores."""
    mapper = EventMapper()
    with uow:
        return [
            mapper.to_domain_event(envelope)
            for envelope in uow.eventstore.read_stream(store_id)
        ]


def event_log(
    uow: AbstractUnitOfWork, since: int = 0, limit: int | None = None
) -> list[EventEnvelope]:
    """Envelopes across all stores with `global_seq > since`, in log order."""
    with uow:
        return list(uow.eventstore.read_since(since, limit))


def ratings_for_item(
    uow: AbstractUnitOfWork, store_id: str, item_id: str
) -> list[TransactionRating]:
    with uow:
        return uow.ratings.for_item(store_id, item_id)


def ratings_by_buyer(uow: AbstractUnitOfWork, buyer: str) -> list[TransactionRating]:
    with uow:
        return uow.ratings.by_buyer(buyer)
