"""Per-owner mutual exclusion for the cart read-modify-write cycle.

A cart mutation reads the product, reads the cart, computes and writes the
new cart. Two overlapping cycles for the same owner would otherwise lose one
of the writes. Holding the owner's lock across the whole cycle serializes
them; owners never contend with each other.

The locks live in process memory, so they protect a single server process.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class _Entry:
    __slots__ = ("lock", "users")

    def __init__(self):
        self.lock = threading.Lock()
        self.users = 0


class OwnerLocks:
    """Registry of one lock per owner, discarded once nobody holds or waits on it."""

    def __init__(self):
        self._guard = threading.Lock()
        self._entries: dict[str, _Entry] = {}

    @contextmanager
    def hold(self, owner_id) -> Iterator[None]:
        key = str(owner_id)
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = _Entry()
            entry.users += 1

        entry.lock.acquire()
        try:
            yield
        finally:
            entry.lock.release()
            with self._guard:
                entry.users -= 1
                if entry.users == 0:
                    del self._entries[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)
