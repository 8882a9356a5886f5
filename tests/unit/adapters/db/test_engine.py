"""Unit tests for the database engine helpers."""

from typing import TYPE_CHECKING

from sqlalchemy.engine import make_url

from emporium.adapters.db.engine import SQLITE_BUSY_TIMEOUT_MS, is_sqlite

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


def test_is_sqlite_true_for_sqlite_url():
    """is_sqlite() should return True for SQLite URLs."""
    assert is_sqlite("sqlite:///:memory:")
    assert is_sqlite(make_url("sqlite+pysqlite:///file.db"))


def test_is_sqlite_false_for_postgres_url():
    """is_sqlite() should return False for Postgres URLs."""
    assert not is_sqlite("postgresql://u:p@localhost/db")


def test_sqlite_pragmas_applied(sqlite_engine_file: "Engine"):
    """SQLite engines created by make_engine() apply the expected PRAGMAs."""
    with sqlite_engine_file.connect() as cxn:
        fk = cxn.exec_driver_sql("PRAGMA foreign_keys;").scalar()
        jm = cxn.exec_driver_sql("PRAGMA journal_mode;").scalar()
        sync = cxn.exec_driver_sql("PRAGMA synchronous;").scalar()
        busy = cxn.exec_driver_sql("PRAGMA busy_timeout;").scalar()
    assert fk == 1
    assert jm.lower() == "wal"
    assert sync == 1
    assert busy == SQLITE_BUSY_TIMEOUT_MS
