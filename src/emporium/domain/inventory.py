"""Inventory ledger.

`Item` is an entity owned by the `Store` aggregate. Its descriptive fields,
price, category and total supply are fixed at creation; only `available` and
`listed` change, and only through the mutators below, which the store calls
while applying events.

Invariants:
    - 0 <= available <= total_supply
    - available == 0 implies listed is False
"""

from __future__ import annotations

from emporium.domain import errors
from emporium.domain.value_objects import PurchasedItem

# pylint: disable=too-many-instance-attributes,too-many-arguments


class Item:
    """A sellable item with a bounded, mutable availability."""

    def __init__(
        self,
        item_id: str,
        store_id: str,
        *,
        title: str,
        description: str,
        url: str,
        price: int,
        category: int,
        total_supply: int,
    ) -> None:
        self.item_id = item_id
        self.store_id = store_id
        self.title = title
        self.description = description
        self.url = url
        self.price = price
        self.category = category
        self.total_supply = total_supply
        self.available = total_supply
        self.listed = True

    def __repr__(self) -> str:
        return (
            f"Item(item_id={self.item_id!r}, available={self.available}/"
            f"{self.total_supply}, listed={self.listed})"
        )

    # --- Guards ---

    def ensure_can_decrease(self, quantity: int) -> None:
        """Raise if `quantity` units cannot be taken out of availability.

        Raises:
            InsufficientInventoryError: If `quantity` exceeds `available`.
        """
        if quantity > self.available:
            raise errors.InsufficientInventoryError(
                self.item_id, quantity, self.available
            )

    def ensure_can_increase(self, quantity: int) -> None:
        """Raise if `quantity` units cannot be put back into availability.

        Raises:
            SupplyExceededError: If availability would exceed total supply.
        """
        if self.available + quantity > self.total_supply:
            raise errors.SupplyExceededError(
                self.item_id, quantity, self.available, self.total_supply
            )

    # --- Mutators ---

    def decrease_available(self, quantity: int) -> None:
        """Take `quantity` units out of availability, unlisting at zero."""
        self.ensure_can_decrease(quantity)
        self.available -= quantity
        if self.available == 0:
            self.listed = False

    def increase_available(self, quantity: int) -> None:
        """Put `quantity` units back. Does not relist the item."""
        self.ensure_can_increase(quantity)
        self.available += quantity

    def unlist(self) -> None:
        self.listed = False

    # --- Snapshots ---

    def snapshot(self, copy_id: str) -> PurchasedItem:
        """Mint an independent copy of the current item record."""
        return PurchasedItem(
            copy_id=copy_id,
            item_id=self.item_id,
            store_id=self.store_id,
            title=self.title,
            description=self.description,
            url=self.url,
            price=self.price,
            category=self.category,
            total_supply=self.total_supply,
            available=self.available,
            listed=self.listed,
        )
