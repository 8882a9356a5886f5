"""Unit tests for the shared metadata."""

from emporium.adapters.db.metadata import metadata
from emporium.adapters.eventstore.schema import event_store
from emporium.adapters.ratings.schema import transaction_ratings


def test_tables_registered():
    """Both tables live on the shared metadata."""
    assert set(metadata.tables) == {"event_store", "transaction_ratings"}
    assert event_store.metadata is metadata
    assert transaction_ratings.metadata is metadata


def test_ratings_indexes_have_explicit_names():
    """Rating indexes keep the names the migration creates."""
    assert {ix.name for ix in transaction_ratings.indexes} == {
        "ix_transaction_ratings_store_item",
        "ix_transaction_ratings_buyer",
    }
