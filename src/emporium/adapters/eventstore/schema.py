"""Event store schema.

The append-only ``event_store`` table holds every store event EMPORIUM has
ever recorded. Store state exists nowhere else: a store is rebuilt by reading
its stream in version order.

Constraints (enforced here):

| Constraint                      | Purpose                              |
|---------------------------------|--------------------------------------|
| UNIQUE(stream_id, version)      | rejects concurrent writers per store |
| UNIQUE(event_id)                | ULID uniqueness                      |
| CHECK(length(event_id) = 26)    | ULID length                          |
| CHECK(version >= 1)             | stream versions start at 1           |

UPDATE and DELETE are blocked by triggers installed in the migration.
"""

from __future__ import annotations

from sqlalchemy import (
    CheckConstraint,
    Column,
    Identity,
    Index,
    Integer,
    String,
    Table,
    UniqueConstraint,
    text,
)

from emporium.adapters.db.metadata import metadata
from emporium.adapters.db.sa_types import BIGINT_PK, PORTABLE_JSON, ULID, UTCDateTime

__all__ = ["event_store"]

event_store = Table(
    "event_store",
    metadata,
    Column(
        "global_seq",
        BIGINT_PK,
        Identity(start=1),
        nullable=False,
        primary_key=True,
        comment="Ledger-wide sequence; defines the order of the event log.",
    ),
    Column(
        "stream_id",
        ULID,
        nullable=False,
        comment="Store id the event belongs to.",
    ),
    Column(
        "stream_type",
        String(100),
        nullable=False,
        comment="Aggregate type of the stream ('Store').",
    ),
    Column(
        "version",
        Integer,
        nullable=False,
        comment="Position of the event in its store stream (starts at 1).",
    ),
    Column(
        "event_id",
        ULID,
        nullable=False,
        unique=True,
        comment="ULID identifying this event.",
    ),
    Column(
        "event_type",
        String(120),
        nullable=False,
        comment="Registered domain event name (e.g. 'ItemPurchased').",
    ),
    Column(
        "recorded_at",
        UTCDateTime(),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="Server-assigned UTC timestamp.",
    ),
    Column(
        "payload",
        PORTABLE_JSON,
        nullable=False,
        comment="Event fields as a JSON object.",
    ),
    Column(
        "metadata",
        PORTABLE_JSON,
        nullable=True,
        comment="Headers such as the command that produced the event.",
    ),
    UniqueConstraint("stream_id", "version"),
    CheckConstraint("version >= 1", name="positive_version"),
    CheckConstraint("length(event_id) = 26", name="event_id_26_char"),
    Index(None, "stream_id", "global_seq"),
    Index(None, "event_type"),
    comment="Append-only log of store events.",
)
