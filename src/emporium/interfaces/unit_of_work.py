"""Unit of Work interface for EMPORIUM.

Defines the AbstractUnitOfWork contract: a context-managed transaction
boundary exposing the event store and the rating book.
"""

from __future__ import annotations

import abc

from .eventstore import EventStore
from .ratings import RatingBook


class AbstractUnitOfWork(abc.ABC):
    """Contract for a transactional unit of work.

    Everything written through `eventstore` and `ratings` inside one
    `with uow:` block becomes visible on `commit()`; leaving the block without
    committing discards it.
    """

    eventstore: EventStore
    ratings: RatingBook

    def __enter__(self) -> AbstractUnitOfWork:
        """Enter the unit of work context and return the unit."""
        return self

    def __exit__(self, *args):
        """Exit the unit of work context, rolling back anything uncommitted."""
        self.rollback()

    @abc.abstractmethod
    def commit(self):
        """Persist changes and finalize the transaction."""

    @abc.abstractmethod
    def rollback(self):
        """Revert changes and clean up transactional resources."""
