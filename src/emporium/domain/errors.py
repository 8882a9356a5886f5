"""Domain-layer error definitions."""

# ============================================================================
#                           General domain errors
# ============================================================================


class DomainError(Exception):
    """Base class for domain-layer errors."""


class AggregateIdMismatchError(DomainError):
    """Raised when an event targets a different aggregate_id than the receiver."""

    def __init__(self, aggregate_id: str, event_aggregate_id: str) -> None:
        super().__init__(
            f"Event aggregate ID '{event_aggregate_id}' does not match "
            f"aggregate ID '{aggregate_id}'."
        )
        self.aggregate_id = aggregate_id
        self.event_aggregate_id = event_aggregate_id


class UnknownEventTypeError(DomainError):
    """Raised when an aggregate is asked to apply an event it does not handle."""

    def __init__(self, stream_type: str, event_type: str) -> None:
        super().__init__(f"{stream_type} cannot apply event type {event_type}.")
        self.stream_type = stream_type
        self.event_type = event_type


# ============================================================================
#                           Authorization errors
# ============================================================================


class NotOwnerError(DomainError):
    """Raised when the presented capability does not belong to the store."""

    def __init__(self, store_id: str, cap_id: str) -> None:
        super().__init__(f"Capability {cap_id} does not own store {store_id}.")
        self.store_id = store_id
        self.cap_id = cap_id


# ============================================================================
#                           Inventory errors
# ============================================================================


class ItemNotFoundError(DomainError):
    """Raised when an item id is not part of the store's collection."""

    def __init__(self, store_id: str, item_id: str) -> None:
        super().__init__(f"Item {item_id} not found in store {store_id}.")
        self.store_id = store_id
        self.item_id = item_id


class InvalidPriceError(DomainError):
    """Raised when an item is created with a non-positive price."""

    def __init__(self, price: int) -> None:
        super().__init__(f"Price must be positive, got {price}.")
        self.price = price


class InvalidSupplyError(DomainError):
    """Raised when an item is created with a non-positive supply."""

    def __init__(self, supply: int) -> None:
        super().__init__(f"Supply must be positive, got {supply}.")
        self.supply = supply


class InvalidQuantityError(DomainError):
    """Raised when a quantity would violate availability or supply bounds."""

    def __init__(self, item_id: str, quantity: int, message: str | None = None) -> None:
        super().__init__(message or f"Invalid quantity {quantity} for item {item_id}.")
        self.item_id = item_id
        self.quantity = quantity


class InsufficientInventoryError(InvalidQuantityError):
    """Raised when more units are requested than are available."""

    def __init__(self, item_id: str, quantity: int, available: int) -> None:
        super().__init__(
            item_id,
            quantity,
            f"Item {item_id} has {available} available, {quantity} requested.",
        )
        self.available = available


class SupplyExceededError(InvalidQuantityError):
    """Raised when returning units would push availability above total supply."""

    def __init__(
        self, item_id: str, quantity: int, available: int, total_supply: int
    ) -> None:
        super().__init__(
            item_id,
            quantity,
            f"Returning {quantity} of item {item_id} would exceed its total supply "
            f"of {total_supply} ({available} available).",
        )
        self.available = available
        self.total_supply = total_supply


class ItemIsNotListedError(DomainError):
    """Raised when a purchase targets an item that is not listed."""

    def __init__(self, item_id: str) -> None:
        super().__init__(f"Item {item_id} is not listed.")
        self.item_id = item_id


# ============================================================================
#                           Escrow errors
# ============================================================================


class InsufficientPaymentError(DomainError):
    """Raised when the supplied payment does not cover price times quantity."""

    def __init__(self, required: int, provided: int) -> None:
        super().__init__(f"Payment of {provided} is less than the required {required}.")
        self.required = required
        self.provided = provided


class InvalidWithdrawalAmountError(DomainError):
    """Raised when a withdrawal is zero, negative or larger than the balance."""

    def __init__(self, store_id: str, amount: int, balance: int) -> None:
        super().__init__(
            f"Cannot withdraw {amount} from store {store_id} (balance {balance})."
        )
        self.store_id = store_id
        self.amount = amount
        self.balance = balance


# ============================================================================
#                           Rating errors
# ============================================================================


class InvalidRatingError(DomainError):
    """Raised when a rating falls outside the accepted scale."""

    def __init__(self, rating: int, minimum: int, maximum: int) -> None:
        super().__init__(f"Rating must be between {minimum} and {maximum}, got {rating}.")
        self.rating = rating
        self.minimum = minimum
        self.maximum = maximum
