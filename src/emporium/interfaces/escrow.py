"""Escrow ports.

The ledger never looks inside the currency it escrows. It needs:

- `Payment`: a fungible amount the caller hands over; it can report its value,
  split a part off, and absorb another payment.
- `MintAuthority`: creates new currency out of nothing. Delivery confirmation
  and refunds credit escrow this way.
- `Vault`: holds the coins backing each store's balance (put / take).
- `Wallets`: receives anything transferred out of the ledger (withdrawn coins,
  purchased item copies, rating records).

The store aggregate tracks the balance as an integer; the vault holds the
matching coins. Handlers keep them in step by touching the vault only after
the store's events have been committed, while still holding the store lock.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Any


class EscrowError(Exception):
    """Base class for escrow collaborator errors."""


class InsufficientFundsError(EscrowError):
    """Raised when more value is requested than a payment or vault holds."""

    def __init__(self, requested: int, available: int) -> None:
        super().__init__(f"Requested {requested}, only {available} available.")
        self.requested = requested
        self.available = available


class Payment(abc.ABC):
    """An opaque fungible amount of currency."""

    @property
    @abc.abstractmethod
    def value(self) -> int:
        """The amount this payment is worth."""

    @abc.abstractmethod
    def split(self, amount: int) -> Payment:
        """Detach `amount` into a new payment, reducing this one.

        Raises:
            InsufficientFundsError: If `amount` exceeds `value`.
        """

    @abc.abstractmethod
    def join(self, other: Payment) -> None:
        """Absorb `other` into this payment, leaving `other` empty."""


class MintAuthority(abc.ABC):
    """Source of newly created currency."""

    @abc.abstractmethod
    def mint(self, amount: int) -> Payment:
        """Create a payment worth `amount`."""


class Vault(abc.ABC):
    """Custody of the coins backing each store's escrow balance."""

    @abc.abstractmethod
    def put(self, store_id: str, payment: Payment) -> None:
        """Deposit a payment into a store's escrow."""

    @abc.abstractmethod
    def take(self, store_id: str, amount: int) -> Payment:
        """Remove `amount` from a store's escrow.

        Raises:
            InsufficientFundsError: If the store's escrow holds less than `amount`.
        """

    @abc.abstractmethod
    def value(self, store_id: str) -> int:
        """Total value held for a store (0 for unknown stores)."""


class Wallets(abc.ABC):
    """Destination for assets transferred out of the ledger."""

    @abc.abstractmethod
    def deliver(self, recipient: str, asset: Any) -> None:
        """Transfer `asset` to `recipient`."""

    @abc.abstractmethod
    def holdings(self, recipient: str) -> list[Any]:
        """Everything delivered to `recipient` so far, oldest first."""


@dataclass(frozen=True, slots=True)
class EscrowBundle:
    """The escrow collaborators used by transaction handlers."""

    mint: MintAuthority
    vault: Vault
    wallets: Wallets
