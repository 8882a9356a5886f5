"""Domain layer for EMPORIUM.

Contains business rules: the store aggregate, the inventory ledger, value
objects and domain events. This package is deliberately technology-agnostic.

Dependency rule: do not import from `emporium.adapters` or `emporium.entrypoints`.
"""
