"""ID generators for EMPORIUM."""

import threading

from ulid import monotonic

from emporium.interfaces.id_generator import IdGenerator

# pylint: disable=too-few-public-methods


class ULIDGenerator(IdGenerator):
    """Thread-safe monotonic ULID generator.

    ULIDs are 26-character, lexicographically sortable identifiers, so ids
    minted later in a process sort after earlier ones. Backed by `ulid-py`.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def new_id(self) -> str:
        """Generate a new ULID (serialized across threads)."""
        with self._lock:
            return str(monotonic.new())


class SimpleIdGenerator(IdGenerator):
    """Sequential, zero-padded IDs with an optional prefix.

    Note:
        Not suitable for production use; primarily for tests and demos where
        readable, predictable ids help.
    """

    def __init__(self, prefix: str = "", length: int = 26) -> None:
        self._counter = 0
        self._prefix = prefix
        self._length = length
        self._lock = threading.Lock()

    def new_id(self) -> str:
        """Generate the next identifier in sequence."""
        with self._lock:
            self._counter += 1
            digits = self._length - len(self._prefix)
            return f"{self._prefix}{self._counter:0{digits}d}"
