"""Module including value objects used across the domain layer."""

from dataclasses import dataclass
from enum import Enum

RATING_MIN = 1
RATING_MAX = 5


class PurchaseKind(Enum):
    """Why funds entered a store's escrow."""

    SALE = "sale"
    DELIVERY_CONFIRMED = "delivery_confirmed"
    RETURN = "return"


class UnlistReason(Enum):
    """Why an item stopped accepting purchases."""

    MANUAL = "manual"
    SOLD_OUT = "sold_out"


@dataclass(frozen=True)
class StoreOwnerCap:
    """Capability whose possession authorizes mutations of one store.

    `store_id` is a back-reference used for lookup only; authorization compares
    `cap_id` against the id recorded on the store.
    """

    cap_id: str
    store_id: str


@dataclass(frozen=True)
class PurchasedItem:
    """A transferable copy of an item record, minted on purchase."""

    copy_id: str
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


@dataclass(frozen=True)
class TransactionRating:
    """A buyer's rating of a store item. Immutable once created."""

    rating_id: str
    store_id: str
    item_id: str
    rating: int
    review: str
    buyer: str
