"""Alembic round-trip smoke test for SQLite.

Upgrading to head creates both tables and the append-only triggers;
downgrading to base removes them. A file database is used so the schema
persists across connections.
"""

from __future__ import annotations

from pathlib import Path

from alembic import command
from sqlalchemy import create_engine, text

from emporium import config


def _names(url: str, kind: str) -> set[str]:
    eng = create_engine(url)
    try:
        with eng.connect() as c:
            rows = c.execute(
                text("SELECT name FROM sqlite_master WHERE type = :kind"),
                {"kind": kind},
            )
            return {row[0] for row in rows}
    finally:
        eng.dispose()


def test_alembic_upgrade_downgrade_roundtrip_sqlite(tmp_path: Path):
    """Upgrade creates the schema; downgrade to base drops it."""
    url = f"sqlite:///{tmp_path / 'emporium.db'}"

    command.upgrade(config.build_alembic_config(url), "head")
    assert {"event_store", "transaction_ratings"} <= _names(url, "table")
    assert {"tr_event_store_no_update", "tr_event_store_no_delete"} <= _names(
        url, "trigger"
    )
    assert {
        "ix_transaction_ratings_store_item",
        "ix_transaction_ratings_buyer",
    } <= _names(url, "index")

    command.downgrade(config.build_alembic_config(url), "base")
    assert not {"event_store", "transaction_ratings"} & _names(url, "table")
    assert not _names(url, "trigger")
