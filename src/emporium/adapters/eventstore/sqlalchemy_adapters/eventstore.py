"""SQLAlchemy-backed EventStore adapter.

Persists envelopes in the ``event_store`` table through a caller-owned
Connection; the unit of work decides when to commit. Driver errors are mapped
onto the event store exception hierarchy:

- duplicate ``event_id``                 -> DuplicateEventIdError
- duplicate ``(stream_id, version)``     -> VersionConflictError
- other integrity / data errors          -> InvalidEnvelopeError
- any other DBAPI error                  -> StoreUnavailableError
"""

from collections.abc import Iterable, Sequence
from typing import NoReturn, cast

from sqlalchemy import RowMapping, Select, func, insert, select
from sqlalchemy.engine import Connection
from sqlalchemy.exc import DataError, DBAPIError, IntegrityError

from emporium.adapters.eventstore.schema import event_store
from emporium.interfaces.eventstore import (
    DuplicateEventIdError,
    EventEnvelope,
    EventEnvelopeBatch,
    EventStore,
    InvalidEnvelopeError,
    StoreUnavailableError,
    VersionConflictError,
)

# constraint names differ between backends, so match on column keywords
EVENT_ID_KEYWORDS = ("event_id",)
STREAM_VERSION_KEYWORDS = ("stream_id", "version")


class SqlAlchemyEventStore(EventStore):
    """EventStore over the ``event_store`` table."""

    def __init__(self, connection: Connection):
        self.connection = connection

    # --------------------------------------------------------------------- #
    # Interface implementation
    # --------------------------------------------------------------------- #

    def append(
        self, events: Sequence[EventEnvelope] | EventEnvelopeBatch
    ) -> Sequence[EventEnvelope]:
        batch = (
            events
            if isinstance(events, EventEnvelopeBatch)
            else EventEnvelopeBatch.from_events(events)
        )

        tip = self._fetch_stream_tip(batch.stream_id)
        expected_first = 1 if tip is None else tip + 1
        if batch.starting_version != expected_first:
            raise VersionConflictError(
                f"expected first version {expected_first}, got {batch.starting_version}"
            )

        try:
            persisted_rows = self._insert_returning(batch)
        except IntegrityError as e:
            self._raise_from_integrity_error(e)
        except DataError as e:
            raise InvalidEnvelopeError(str(e)) from e
        except DBAPIError as e:
            raise StoreUnavailableError(str(e)) from e

        return [EventEnvelope(**row) for row in persisted_rows]

    def read_stream(
        self, stream_id: str, from_version: int = 1, to_version: int | None = None
    ) -> Iterable[EventEnvelope]:
        if from_version < 1:
            raise ValueError("from_version must be >= 1")
        if to_version is not None and to_version < from_version:
            raise ValueError("to_version must be >= from_version")

        stmt: Select = (
            select(event_store)
            .where(event_store.c.stream_id == stream_id)
            .where(event_store.c.version >= from_version)
            .order_by(event_store.c.version.asc())
        )
        if to_version is not None:
            stmt = stmt.where(event_store.c.version <= to_version)

        for row in self.connection.execute(stmt).mappings().all():
            yield EventEnvelope(**row)

    def read_since(
        self, global_seq: int = 0, limit: int | None = None
    ) -> Iterable[EventEnvelope]:
        if global_seq < 0:
            raise ValueError("global_seq must be >= 0")
        if limit is not None and limit < 1:
            raise ValueError("limit cannot be <= 0")

        stmt: Select = (
            select(event_store)
            .where(event_store.c.global_seq > global_seq)
            .order_by(event_store.c.global_seq.asc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)

        for row in self.connection.execute(stmt).mappings().all():
            yield EventEnvelope(**row)

    # --------------------------------------------------------------------- #
    # Internals
    # --------------------------------------------------------------------- #

    def _fetch_stream_tip(self, stream_id: str) -> int | None:
        """Highest version recorded for `stream_id`, or None for a new stream."""
        stmt = select(func.max(event_store.c.version)).where(
            event_store.c.stream_id == stream_id
        )
        return cast(int | None, self.connection.execute(stmt).scalar_one_or_none())

    def _insert_returning(self, batch: EventEnvelopeBatch) -> Sequence[RowMapping]:
        """Insert the batch in one statement and return the stored rows in input order."""
        rows = [event.as_insertable_row() for event in batch.events]
        inserted = (
            self.connection.execute(
                insert(event_store).values(rows).returning(event_store)
            )
            .mappings()
            .all()
        )
        return sorted(inserted, key=lambda row: row["version"])

    @staticmethod
    def _raise_from_integrity_error(integrity_error: IntegrityError) -> NoReturn:
        """Translate an IntegrityError into the matching event store error."""
        msg = str(integrity_error.orig or integrity_error)
        lowered = msg.lower()

        if "unique" in lowered or "duplicate" in lowered:
            if all(kw in lowered for kw in STREAM_VERSION_KEYWORDS):
                raise VersionConflictError(msg) from integrity_error
            if all(kw in lowered for kw in EVENT_ID_KEYWORDS):
                raise DuplicateEventIdError(msg) from integrity_error

        raise InvalidEnvelopeError(msg) from integrity_error
