"""Create transaction_ratings table

Revision ID: 9b4f2e6a8c13
Revises: 5e0c1a7d2b91
Create Date: 2026-10-19

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

from emporium.adapters.db.sa_types import BIGINT_PK, UTCDateTime

# pylint: disable=no-member

# revision identifiers, used by Alembic.
revision: str = "9b4f2e6a8c13"
down_revision: str | Sequence[str] | None = "5e0c1a7d2b91"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create the ratings table."""
    op.create_table(
        "transaction_ratings",
        sa.Column("seq", BIGINT_PK, autoincrement=True, nullable=False),
        sa.Column("rating_id", sa.String(length=26), nullable=False),
        sa.Column("store_id", sa.String(length=26), nullable=False),
        sa.Column("item_id", sa.String(length=26), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("review", sa.Text(), nullable=False),
        sa.Column("buyer", sa.String(length=200), nullable=False),
        sa.Column(
            "recorded_at",
            UTCDateTime(),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.CheckConstraint(
            "rating BETWEEN 1 AND 5", name=op.f("ck_transaction_ratings_rating_range")
        ),
        sa.PrimaryKeyConstraint("seq", name=op.f("pk_transaction_ratings")),
        sa.UniqueConstraint(
            "rating_id", name=op.f("uq_transaction_ratings_rating_id")
        ),
        comment="Buyer ratings of store items.",
    )
    op.create_index(
        "ix_transaction_ratings_store_item",
        "transaction_ratings",
        ["store_id", "item_id"],
        unique=False,
    )
    op.create_index(
        "ix_transaction_ratings_buyer",
        "transaction_ratings",
        ["buyer"],
        unique=False,
    )


def downgrade() -> None:
    """Drop the ratings table."""
    op.drop_index("ix_transaction_ratings_buyer", table_name="transaction_ratings")
    op.drop_index(
        "ix_transaction_ratings_store_item", table_name="transaction_ratings"
    )
    op.drop_table("transaction_ratings")
