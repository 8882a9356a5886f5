"""In-memory currency and custody.

`Coin` is a mutable fungible amount. Splitting and joining move value
between coins; nothing else creates value except `InMemoryMintAuthority`,
which keeps a running total so tests can check conservation.
"""

from __future__ import annotations

import threading
from collections import defaultdict
from typing import Any

from emporium.interfaces.escrow import (
    EscrowBundle,
    InsufficientFundsError,
    MintAuthority,
    Payment,
    Vault,
    Wallets,
)


class Coin(Payment):
    """A fungible amount of in-memory currency."""

    def __init__(self, value: int = 0) -> None:
        if value < 0:
            raise ValueError("coin value cannot be negative")
        self._value = value
        self._lock = threading.Lock()

    @property
    def value(self) -> int:
        return self._value

    def split(self, amount: int) -> Coin:
        if amount < 0:
            raise ValueError("split amount cannot be negative")
        with self._lock:
            if amount > self._value:
                raise InsufficientFundsError(amount, self._value)
            self._value -= amount
        return Coin(amount)

    def join(self, other: Payment) -> None:
        if other is self:
            return
        taken = other.split(other.value)
        with self._lock:
            self._value += taken.value

    def __repr__(self) -> str:
        return f"Coin({self._value})"


class InMemoryMintAuthority(MintAuthority):
    """Mints `Coin`s and records how much has been minted."""

    def __init__(self) -> None:
        self.total_minted = 0
        self._lock = threading.Lock()

    def mint(self, amount: int) -> Coin:
        if amount < 0:
            raise ValueError("cannot mint a negative amount")
        with self._lock:
            self.total_minted += amount
        return Coin(amount)


class InMemoryVault(Vault):
    """One coin per store holding its escrowed value."""

    def __init__(self) -> None:
        self._coins: dict[str, Coin] = defaultdict(Coin)
        self._lock = threading.Lock()

    def put(self, store_id: str, payment: Payment) -> None:
        with self._lock:
            coin = self._coins[store_id]
        coin.join(payment)

    def take(self, store_id: str, amount: int) -> Coin:
        with self._lock:
            coin = self._coins[store_id]
        return coin.split(amount)

    def value(self, store_id: str) -> int:
        with self._lock:
            coin = self._coins.get(store_id)
        return 0 if coin is None else coin.value


class InMemoryWallets(Wallets):
    """Per-recipient lists of delivered assets."""

    def __init__(self) -> None:
        self._holdings: dict[str, list[Any]] = defaultdict(list)
        self._lock = threading.Lock()

    def deliver(self, recipient: str, asset: Any) -> None:
        with self._lock:
            self._holdings[recipient].append(asset)

    def holdings(self, recipient: str) -> list[Any]:
        with self._lock:
            return list(self._holdings.get(recipient, ()))

    def balance(self, recipient: str) -> int:
        """Total value of the coins delivered to `recipient`."""
        return sum(a.value for a in self.holdings(recipient) if isinstance(a, Payment))


def build_in_memory_escrow() -> EscrowBundle:
    """A fresh mint, vault and wallet set sharing nothing with other bundles."""
    return EscrowBundle(
        mint=InMemoryMintAuthority(),
        vault=InMemoryVault(),
        wallets=InMemoryWallets(),
    )
