"""Events

Every event belongs to a store stream; the store id is the aggregate id.
Amounts are integers in the currency's smallest unit.
"""

import abc
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DomainEvent(abc.ABC):
    """Base class for all domain events.
    Requires a way to determine the owning aggregate ID.
    """

    @property
    @abc.abstractmethod
    def aggregate_id(self) -> str:
        """Return the ID of the aggregate this event belongs to."""


@dataclass(frozen=True, slots=True)
class StoreEvent(DomainEvent):
    """Base for events recorded on a store stream."""

    store_id: str

    @property
    def aggregate_id(self) -> str:
        return self.store_id


@dataclass(frozen=True, slots=True)
class StoreCreated(StoreEvent):
    """A store was opened and bound to its owner capability."""

    owner_cap_id: str


@dataclass(frozen=True, slots=True)
class ItemAdded(StoreEvent):
    """An item was listed with a fixed supply."""

    item_id: str
    title: str
    description: str
    url: str
    price: int
    supply: int
    category: int


@dataclass(frozen=True, slots=True)
class ItemPurchased(StoreEvent):
    """Funds entered escrow for an item.

    `kind` distinguishes a sale (inventory leaves), a delivery confirmation
    (inventory untouched) and a return (inventory comes back).
    """

    item_id: str
    quantity: int
    amount: int
    buyer: str
    kind: str


@dataclass(frozen=True, slots=True)
class ItemUnlisted(StoreEvent):
    """An item stopped accepting purchases."""

    item_id: str
    reason: str


@dataclass(frozen=True, slots=True)
class StoreWithdrawal(StoreEvent):
    """Funds left escrow to a recipient chosen by the owner."""

    amount: int
    recipient: str


@dataclass(frozen=True, slots=True)
class DeliveryInitiated(StoreEvent):
    """The seller signalled that delivery to a buyer has started."""

    item_id: str
    buyer: str


# Registry of domain event types for deserialization
DOMAIN_EVENT_REGISTRY: dict[str, type[DomainEvent]] = {
    "StoreCreated": StoreCreated,
    "ItemAdded": ItemAdded,
    "ItemPurchased": ItemPurchased,
    "ItemUnlisted": ItemUnlisted,
    "StoreWithdrawal": StoreWithdrawal,
    "DeliveryInitiated": DeliveryInitiated,
}
