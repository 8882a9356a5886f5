"""Unit of Work implementations.

`SqlAlchemyUnitOfWork` opens one Connection per ``with`` block and binds the
event store and rating book to it, so store events and ratings written in the
same block commit or roll back together. The connection is thread-local: one
instance serves handlers running on several threads.

`InMemoryUnitOfWork` shares a single in-memory event store and rating book.
Appends are atomic per batch, so there is nothing to roll back.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from emporium.adapters.eventstore.in_memory_adapters import InMemoryEventStore
from emporium.adapters.eventstore.sqlalchemy_adapters import SqlAlchemyEventStore
from emporium.adapters.ratings.memory import InMemoryRatingBook
from emporium.adapters.ratings.sqlalchemy_adapter import SqlAlchemyRatingBook
from emporium.interfaces.unit_of_work import AbstractUnitOfWork

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine

    from emporium.interfaces.eventstore import EventStore
    from emporium.interfaces.ratings import RatingBook


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """SQLAlchemy-backed Unit of Work."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self._local = threading.local()

    @property
    def connection(self) -> Connection:
        """Connection of the block the current thread is in."""
        return self._local.connection

    @property
    def eventstore(self) -> EventStore:  # type: ignore[override]
        return self._local.eventstore

    @property
    def ratings(self) -> RatingBook:  # type: ignore[override]
        return self._local.ratings

    def __enter__(self):
        connection = self.engine.connect()
        self._local.connection = connection
        self._local.eventstore = SqlAlchemyEventStore(connection)
        self._local.ratings = SqlAlchemyRatingBook(connection)
        return super().__enter__()

    def __exit__(self, *args):
        try:
            super().__exit__(*args)
        finally:
            self.connection.close()

    def commit(self):
        self.connection.commit()

    def rollback(self):
        self.connection.rollback()


class InMemoryUnitOfWork(AbstractUnitOfWork):
    """Unit of work over in-memory adapters; counts commits for tests."""

    def __init__(
        self,
        eventstore: InMemoryEventStore | None = None,
        ratings: InMemoryRatingBook | None = None,
    ) -> None:
        self.eventstore = eventstore if eventstore is not None else InMemoryEventStore()
        self.ratings = ratings if ratings is not None else InMemoryRatingBook()
        self.commits = 0
        self._lock = threading.Lock()

    def commit(self):
        with self._lock:
            self.commits += 1

    def rollback(self):
        pass
