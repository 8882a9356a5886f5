"""Supported database dialects.

EMPORIUM runs on PostgreSQL in production and SQLite for development and
tests. Dialect checks go through `DialectName` instead of raw strings.
"""

from __future__ import annotations

from enum import Enum

from sqlalchemy.engine import URL, make_url


class UnsupportedDialect(Exception):
    """Raised when an unsupported database dialect is encountered."""


class DialectName(str, Enum):
    """Normalized names of the supported SQLAlchemy dialects."""

    POSTGRES = "postgresql"
    SQLITE = "sqlite"

    @classmethod
    def from_string(cls, dialect_str: str) -> DialectName:
        """Normalize a dialect or driver-qualified name ('sqlite+pysqlite', 'postgres').

        Raises:
            UnsupportedDialect: if the dialect is not recognized.
        """
        base = (dialect_str or "").strip().lower().split("+", 1)[0]
        if base in {"postgres", "postgresql", "pg"}:
            return cls.POSTGRES
        if base == "sqlite":
            return cls.SQLITE
        raise UnsupportedDialect(f"Unsupported dialect: {dialect_str!r}")

    @classmethod
    def from_url(cls, url: str | URL) -> DialectName:
        """Dialect of a database URL."""
        return cls.from_string(make_url(str(url)).get_backend_name())
