"""Create event_store table

Revision ID: 5e0c1a7d2b91
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

from emporium.adapters.db.sa_types import BIGINT_PK, PORTABLE_JSON, UTCDateTime

# pylint: disable=no-member

# revision identifiers, used by Alembic.
revision: str = "5e0c1a7d2b91"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create the event log and make it append-only."""
    dialect = op.get_bind().dialect.name

    op.create_table(
        "event_store",
        sa.Column(
            "global_seq",
            BIGINT_PK,
            sa.Identity(always=False, start=1),
            nullable=False,
            comment="Ledger-wide sequence; defines the order of the event log.",
        ),
        sa.Column(
            "stream_id",
            sa.String(length=26),
            nullable=False,
            comment="Store id the event belongs to.",
        ),
        sa.Column(
            "stream_type",
            sa.String(length=100),
            nullable=False,
            comment="Aggregate type of the stream ('Store').",
        ),
        sa.Column(
            "version",
            sa.Integer(),
            nullable=False,
            comment="Position of the event in its store stream (starts at 1).",
        ),
        sa.Column(
            "event_id",
            sa.String(length=26),
            nullable=False,
            comment="ULID identifying this event.",
        ),
        sa.Column(
            "event_type",
            sa.String(length=120),
            nullable=False,
            comment="Registered domain event name (e.g. 'ItemPurchased').",
        ),
        sa.Column(
            "recorded_at",
            UTCDateTime(),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="Server-assigned UTC timestamp.",
        ),
        sa.Column(
            "payload",
            PORTABLE_JSON,
            nullable=False,
            comment="Event fields as a JSON object.",
        ),
        sa.Column(
            "metadata",
            PORTABLE_JSON,
            nullable=True,
            comment="Headers such as the command that produced the event.",
        ),
        sa.CheckConstraint(
            "length(event_id) = 26", name=op.f("ck_event_store_event_id_26_char")
        ),
        sa.CheckConstraint(
            "version >= 1", name=op.f("ck_event_store_positive_version")
        ),
        sa.PrimaryKeyConstraint("global_seq", name=op.f("pk_event_store")),
        sa.UniqueConstraint("event_id", name=op.f("uq_event_store_event_id")),
        sa.UniqueConstraint(
            "stream_id", "version", name=op.f("uq_event_store_stream_id_version")
        ),
        comment="Append-only log of store events.",
    )
    op.create_index(
        op.f("ix_event_store_event_store_event_type"),
        "event_store",
        ["event_type"],
        unique=False,
    )
    op.create_index(
        op.f("ix_event_store_event_store_stream_id_event_store_global_seq"),
        "event_store",
        ["stream_id", "global_seq"],
        unique=False,
    )

    # ---- append-only enforcement ----
    if dialect == "postgresql":  # pylint: disable=magic-value-comparison
        op.execute(
            """
            CREATE OR REPLACE FUNCTION event_store_forbid_mod() RETURNS trigger
            LANGUAGE plpgsql AS $$
            BEGIN
              RAISE EXCEPTION 'event_store is append-only; % not allowed', TG_OP
              USING ERRCODE = '0A000';
            END;
            $$;
            """
        )
        op.execute(
            """
            CREATE TRIGGER tr_event_store_append_only
            BEFORE UPDATE OR DELETE ON event_store
            FOR EACH ROW
            EXECUTE FUNCTION event_store_forbid_mod();
            """
        )
    else:
        op.execute(
            """
            CREATE TRIGGER tr_event_store_no_update
            BEFORE UPDATE ON event_store
            BEGIN
              SELECT RAISE(ABORT, 'event_store is append-only; UPDATE not allowed');
            END;
            """
        )
        op.execute(
            """
            CREATE TRIGGER tr_event_store_no_delete
            BEFORE DELETE ON event_store
            BEGIN
              SELECT RAISE(ABORT, 'event_store is append-only; DELETE not allowed');
            END;
            """
        )


def downgrade() -> None:
    """Drop the event log and its triggers."""
    dialect = op.get_bind().dialect.name

    if dialect == "postgresql":  # pylint: disable=magic-value-comparison
        op.execute("DROP TRIGGER IF EXISTS tr_event_store_append_only ON event_store;")
        op.execute("DROP FUNCTION IF EXISTS event_store_forbid_mod();")
    else:
        op.execute("DROP TRIGGER IF EXISTS tr_event_store_no_delete;")
        op.execute("DROP TRIGGER IF EXISTS tr_event_store_no_update;")

    op.drop_index(
        op.f("ix_event_store_event_store_stream_id_event_store_global_seq"),
        table_name="event_store",
    )
    op.drop_index(
        op.f("ix_event_store_event_store_event_type"), table_name="event_store"
    )
    op.drop_table("event_store")
