"""Package for repository implementations."""

from .errors import AggregateNotFoundError, ReadOnlyRepositoryError, RepositoryError
from .event_mapper import EventMapper
from .event_sourced import EventSourcedRepository, StoreRepository

__all__ = [
    "AggregateNotFoundError",
    "EventMapper",
    "EventSourcedRepository",
    "ReadOnlyRepositoryError",
    "RepositoryError",
    "StoreRepository",
]
