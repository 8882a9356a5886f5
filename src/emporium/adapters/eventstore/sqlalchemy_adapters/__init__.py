"""SQLAlchemy-backed event store."""

from .eventstore import SqlAlchemyEventStore

__all__ = ["SqlAlchemyEventStore"]
