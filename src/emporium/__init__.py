"""EMPORIUM

An event-sourced ledger for multi-tenant marketplaces.
Each store owns an inventory of sellable items and an escrowed balance;
every listing, sale, delivery, refund and withdrawal is recorded as an
immutable event so store history can be audited and replayed.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
