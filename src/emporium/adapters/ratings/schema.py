"""Schema of the ``transaction_ratings`` table.

One row per rating, written once. The rating range is checked again here so
a row inserted outside the service layer cannot break the 1..5 rule.
"""

from __future__ import annotations

from sqlalchemy import CheckConstraint, Column, Index, Integer, String, Table, Text, text

from emporium.adapters.db.metadata import metadata
from emporium.adapters.db.sa_types import BIGINT_PK, ULID, UTCDateTime

__all__ = ["transaction_ratings"]

transaction_ratings = Table(
    "transaction_ratings",
    metadata,
    Column("seq", BIGINT_PK, primary_key=True, autoincrement=True),
    Column("rating_id", ULID, nullable=False, unique=True),
    Column("store_id", ULID, nullable=False),
    Column("item_id", ULID, nullable=False),
    Column("rating", Integer, nullable=False),
    Column("review", Text, nullable=False),
    Column("buyer", String(200), nullable=False),
    Column(
        "recorded_at",
        UTCDateTime(),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    ),
    CheckConstraint("rating BETWEEN 1 AND 5", name="rating_range"),
    Index("ix_transaction_ratings_store_item", "store_id", "item_id"),
    Index("ix_transaction_ratings_buyer", "buyer"),
    comment="Buyer ratings of store items.",
)
