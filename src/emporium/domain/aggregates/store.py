"""Store aggregate.

A store owns its item collection and its escrowed balance. Every command
checks all of its preconditions before the first event is enqueued, so a
failed command leaves the store exactly as it was.
"""

from typing import ClassVar

from emporium.domain import errors, events
from emporium.domain.inventory import Item
from emporium.domain.value_objects import PurchaseKind, StoreOwnerCap, UnlistReason

from .base import Aggregate

# pylint: disable=too-many-arguments


class Store(Aggregate):
    """Aggregate root representing a store account and its inventory."""

    STREAM_TYPE: ClassVar[str] = "Store"

    def __init__(self, aggregate_id: str) -> None:
        super().__init__(aggregate_id)
        self.owner_cap_id: str | None = None
        self.balance: int = 0
        self.item_count: int = 0
        self.items: dict[str, Item] = {}

    # --- Construction Paths ---

    @classmethod
    def create(cls, aggregate_id: str, owner_cap_id: str) -> "Store":
        """Open a new store with zero balance, bound to `owner_cap_id`."""
        store = cls(aggregate_id)
        store._enqueue(
            events.StoreCreated(store_id=aggregate_id, owner_cap_id=owner_cap_id)
        )
        return store

    # --- Queries ---

    def get_item(self, item_id: str) -> Item:
        """Return an item of this store.

        Raises:
            ItemNotFoundError: If the store has no item with this id.
        """
        if (item := self.items.get(item_id)) is None:
            raise errors.ItemNotFoundError(self.aggregate_id, item_id)
        return item

    def is_owned_by(self, cap: StoreOwnerCap) -> bool:
        """Whether `cap` is the capability recorded for this store."""
        return cap.cap_id == self.owner_cap_id

    # --- Owner Commands ---

    def add_item(
        self,
        cap: StoreOwnerCap,
        item_id: str,
        *,
        title: str,
        description: str,
        url: str,
        price: int,
        supply: int,
        category: int,
    ) -> None:
        """List a new item with `available == total_supply == supply`.

        Raises:
            NotOwnerError: If `cap` does not own this store.
            InvalidPriceError: If `price <= 0`.
            InvalidSupplyError: If `supply <= 0`.
        """
        self._ensure_owner(cap)
        if price <= 0:
            raise errors.InvalidPriceError(price)
        if supply <= 0:
            raise errors.InvalidSupplyError(supply)

        self._enqueue(
            events.ItemAdded(
                store_id=self.aggregate_id,
                item_id=item_id,
                title=title,
                description=description,
                url=url,
                price=price,
                supply=supply,
                category=category,
            )
        )

    def unlist_item(self, cap: StoreOwnerCap, item_id: str) -> None:
        """Stop an item from accepting purchases. Repeating the call is allowed.

        Raises:
            NotOwnerError: If `cap` does not own this store.
            ItemNotFoundError: If the item does not exist.
        """
        self._ensure_owner(cap)
        self.get_item(item_id)
        self._enqueue(
            events.ItemUnlisted(
                store_id=self.aggregate_id,
                item_id=item_id,
                reason=UnlistReason.MANUAL.value,
            )
        )

    def withdraw(self, cap: StoreOwnerCap, amount: int, recipient: str) -> None:
        """Move `amount` out of escrow to `recipient`.

        Raises:
            NotOwnerError: If `cap` does not own this store.
            InvalidWithdrawalAmountError: If `amount` is not in `1..balance`.
        """
        self._ensure_owner(cap)
        if amount <= 0 or amount > self.balance:
            raise errors.InvalidWithdrawalAmountError(
                self.aggregate_id, amount, self.balance
            )
        self._enqueue(
            events.StoreWithdrawal(
                store_id=self.aggregate_id, amount=amount, recipient=recipient
            )
        )

    # --- Transactions ---

    def purchase_item(
        self, item_id: str, quantity: int, buyer: str, payment_value: int
    ) -> int:
        """Sell `quantity` units of an item.

        Checks run in a fixed order, so a call that is invalid in several ways
        always reports the same error: quantity, existence, availability,
        payment, listing.

        Returns:
            The amount (price * quantity) that moves into escrow.

        Raises:
            InvalidQuantityError: If `quantity <= 0`.
            ItemNotFoundError: If the item does not exist.
            InsufficientInventoryError: If fewer than `quantity` units are available.
            InsufficientPaymentError: If `payment_value < price * quantity`.
            ItemIsNotListedError: If the item is unlisted.
        """
        self._ensure_positive_quantity(item_id, quantity)
        item = self.get_item(item_id)
        item.ensure_can_decrease(quantity)
        cost = item.price * quantity
        if payment_value < cost:
            raise errors.InsufficientPaymentError(required=cost, provided=payment_value)
        if not item.listed:
            raise errors.ItemIsNotListedError(item_id)

        self._enqueue(
            events.ItemPurchased(
                store_id=self.aggregate_id,
                item_id=item_id,
                quantity=quantity,
                amount=cost,
                buyer=buyer,
                kind=PurchaseKind.SALE.value,
            )
        )
        if item.available == 0:
            self._enqueue(
                events.ItemUnlisted(
                    store_id=self.aggregate_id,
                    item_id=item_id,
                    reason=UnlistReason.SOLD_OUT.value,
                )
            )
        return cost

    def initiate_delivery(self, item_id: str, buyer: str) -> None:
        """Signal that delivery to `buyer` has started. No state changes."""
        self.get_item(item_id)
        self._enqueue(
            events.DeliveryInitiated(
                store_id=self.aggregate_id, item_id=item_id, buyer=buyer
            )
        )

    def confirm_delivery(self, item_id: str, buyer: str) -> int:
        """Credit escrow with the item price on delivery confirmation.

        The credit is newly minted and independent of the original sale;
        inventory is untouched.

        Returns:
            The amount to mint into escrow.
        """
        item = self.get_item(item_id)
        self._enqueue(
            events.ItemPurchased(
                store_id=self.aggregate_id,
                item_id=item_id,
                quantity=1,
                amount=item.price,
                buyer=buyer,
                kind=PurchaseKind.DELIVERY_CONFIRMED.value,
            )
        )
        return item.price

    def refund_purchase(self, item_id: str, quantity: int, buyer: str) -> int:
        """Take `quantity` units back into availability.

        The item stays unlisted if it was unlisted. Escrow is credited with
        newly minted funds rather than debited.

        Returns:
            The amount (price * quantity) to mint into escrow.

        Raises:
            InvalidQuantityError: If `quantity <= 0`.
            ItemNotFoundError: If the item does not exist.
            SupplyExceededError: If availability would exceed total supply.
        """
        self._ensure_positive_quantity(item_id, quantity)
        item = self.get_item(item_id)
        item.ensure_can_increase(quantity)
        amount = item.price * quantity
        self._enqueue(
            events.ItemPurchased(
                store_id=self.aggregate_id,
                item_id=item_id,
                quantity=quantity,
                amount=amount,
                buyer=buyer,
                kind=PurchaseKind.RETURN.value,
            )
        )
        return amount

    # --- Event Application ---

    def _apply(self, event: events.DomainEvent) -> None:
        match event:
            case events.StoreCreated():
                self.owner_cap_id = event.owner_cap_id
            case events.ItemAdded():
                self.items[event.item_id] = Item(
                    event.item_id,
                    event.store_id,
                    title=event.title,
                    description=event.description,
                    url=event.url,
                    price=event.price,
                    category=event.category,
                    total_supply=event.supply,
                )
                self.item_count += 1
            case events.ItemPurchased():
                self._apply_purchase(event)
            case events.ItemUnlisted():
                self.items[event.item_id].unlist()
            case events.StoreWithdrawal():
                self._debit(event.amount)
            case events.DeliveryInitiated():
                pass
            case _:
                self._unhandled(event)

    def _apply_purchase(self, event: events.ItemPurchased) -> None:
        item = self.items[event.item_id]
        match PurchaseKind(event.kind):
            case PurchaseKind.SALE:
                item.decrease_available(event.quantity)
            case PurchaseKind.RETURN:
                item.increase_available(event.quantity)
            case PurchaseKind.DELIVERY_CONFIRMED:
                pass
        self._credit(event.amount)

    # --- Internal Helpers ---

    def _ensure_owner(self, cap: StoreOwnerCap) -> None:
        if not self.is_owned_by(cap):
            raise errors.NotOwnerError(self.aggregate_id, cap.cap_id)

    @staticmethod
    def _ensure_positive_quantity(item_id: str, quantity: int) -> None:
        if quantity <= 0:
            raise errors.InvalidQuantityError(item_id, quantity)

    def _credit(self, amount: int) -> None:
        self.balance += amount

    def _debit(self, amount: int) -> None:
        if amount > self.balance:
            raise errors.InvalidWithdrawalAmountError(
                self.aggregate_id, amount, self.balance
            )
        self.balance -= amount
