"""In-memory event store.

Events live only as long as the instance. Used by unit tests and by
``bootstrap(in_memory=True)``.
"""

from .eventstore import InMemoryEventStore

__all__ = ["InMemoryEventStore"]
