"""Adapters (infrastructure) for EMPORIUM.

Concrete implementations of the ports in `emporium.interfaces`: event stores,
rating books, escrow collaborators, ID generators and the SQLAlchemy unit of
work, plus persistence mapping and migrations.

Dependency rule: may import `emporium.domain` and `emporium.interfaces`; the
domain must not import this package.
"""
