"""Unit tests for repository errors."""

from emporium.service_layer.repositories import (
    AggregateNotFoundError,
    ReadOnlyRepositoryError,
    RepositoryError,
)


def test_aggregate_not_found_message_and_fields():
    """The message names the aggregate type and id."""
    err = AggregateNotFoundError("Store", "S1")
    assert str(err) == "Store with ID S1 not found."
    assert (err.aggregate_type_name, err.aggregate_id) == ("Store", "S1")
    assert isinstance(err, RepositoryError)


def test_read_only_is_a_repository_error():
    """ReadOnlyRepositoryError derives from RepositoryError."""
    assert issubclass(ReadOnlyRepositoryError, RepositoryError)
