"""Escrow adapters.

Only an in-memory currency exists; it backs tests, the CLI demo and any
embedding application without a real token system.
"""

from .memory import (
    Coin,
    InMemoryMintAuthority,
    InMemoryVault,
    InMemoryWallets,
    build_in_memory_escrow,
)

__all__ = [
    "Coin",
    "InMemoryMintAuthority",
    "InMemoryVault",
    "InMemoryWallets",
    "build_in_memory_escrow",
]
