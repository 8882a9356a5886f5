"""Module defining Commands.

Every mutation of the ledger is expressed as one of these commands and sent
through `MessageBus.handle`. Commands carry caller-supplied values only; ids,
the mint authority and the escrow vault are provided by the handlers'
injected dependencies.
"""

from dataclasses import dataclass

from emporium.domain.value_objects import StoreOwnerCap
from emporium.interfaces.escrow import Payment

# pylint: disable=too-many-instance-attributes


@dataclass(frozen=True)
class Command:
    """Base class for all commands."""

    def as_metadata(self) -> dict[str, str]:
        """Headers recorded with the events this command produces."""
        return {"command": type(self).__name__}


@dataclass(frozen=True)
class CreateStore(Command):
    """Open a new store. Handled result: the store's `StoreOwnerCap`."""


@dataclass(frozen=True)
class AddItem(Command):
    """List a new item. Handled result: the new item id."""

    store_id: str
    owner_cap: StoreOwnerCap
    title: str
    description: str
    url: str
    price: int
    supply: int
    category: int


@dataclass(frozen=True)
class UnlistItem(Command):
    """Stop an item from accepting purchases."""

    store_id: str
    owner_cap: StoreOwnerCap
    item_id: str


@dataclass(frozen=True)
class WithdrawFromStore(Command):
    """Move escrowed funds to a recipient."""

    store_id: str
    owner_cap: StoreOwnerCap
    amount: int
    recipient: str


@dataclass(frozen=True)
class PurchaseItem(Command):
    """Buy `quantity` units. Handled result: the delivered `PurchasedItem` copies.

    The cost is split off `payment`; any remainder stays with the caller.
    """

    store_id: str
    item_id: str
    quantity: int
    recipient: str
    payment: Payment


@dataclass(frozen=True)
class InitiateDelivery(Command):
    """Signal that delivery of an item to a buyer has started."""

    store_id: str
    item_id: str
    buyer: str


@dataclass(frozen=True)
class ConfirmDelivery(Command):
    """Confirm delivery; credits the store with the item price."""

    store_id: str
    item_id: str
    buyer: str


@dataclass(frozen=True)
class RefundPurchase(Command):
    """Return `quantity` units to availability."""

    store_id: str
    item_id: str
    quantity: int
    buyer: str


@dataclass(frozen=True)
class RateTransaction(Command):
    """Rate an item. Handled result: the `TransactionRating`."""

    store_id: str
    item_id: str
    rating: int
    review: str
    buyer: str
