"""Separate-chaining hash table that also counts repeated insertions.

Each key is stored once. Putting an existing key again leaves its value alone
and bumps the entry's occurrence counter instead, which is what the word
statistics engine uses to count words.

Example:
    table: HashTable[int] = HashTable()
    table.put("alice", 25)
    table.put("alice", 99)
    table.get("alice")  # 25
    table.size()  # 2
    len(table)  # 1
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterator

_logger = logging.getLogger(__name__)

V = TypeVar("V")

# Large enough that typical inputs never trigger a rehash
DEFAULT_CAPACITY = 500

# Rehash once size / capacity reaches this ratio
LOAD_FACTOR_THRESHOLD = 1.0

_HASH_MULTIPLIER = 31
_HASH_MASK = 0xFFFFFFFF
_HASH_SIGN_BIT = 0x80000000


def string_hash(key: str) -> int:
    """Compute a stable signed 32-bit polynomial hash of a string.

    Python's built-in ``hash()`` for strings is salted per process, so bucket
    layouts would differ between runs. This one depends only on the key.

    Args:
        key: The string to hash.

    Returns:
        Hash value in the signed 32-bit range.
    """
    h = 0
    for ch in key:
        h = (h * _HASH_MULTIPLIER + ord(ch)) & _HASH_MASK
    if h & _HASH_SIGN_BIT:
        h -= 1 << 32
    return h


@dataclass
class Entry(Generic[V]):
    """A key, the first value stored under it, and how often it was put."""

    key: str
    value: V
    occurrences: int = 1


class HashTable(Generic[V]):
    """Hash table with separate chaining and load-factor-driven doubling.

    ``size()`` counts every ``put`` (including repeats of an existing key)
    minus every ``remove``. ``len()`` counts distinct keys.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        """Create an empty table.

        Args:
            capacity: Number of buckets to start with.

        Raises:
            ValueError: If capacity is negative.
        """
        if capacity < 0:
            raise ValueError(f"capacity must be non-negative, got {capacity}")
        self._buckets: list[list[Entry[V]]] = [[] for _ in range(capacity)]
        self._size = 0
        self._entry_count = 0

    @property
    def capacity(self) -> int:
        """Current number of buckets."""
        return len(self._buckets)

    @property
    def load_factor(self) -> float:
        """Logical size divided by capacity."""
        if not self._buckets:
            return float("inf") if self._size else 0.0
        return self._size / len(self._buckets)

    def size(self) -> int:
        """Return the logical size (puts minus removes)."""
        return self._size

    def __len__(self) -> int:
        return self._entry_count

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str) or not self._buckets:
            return False
        return self._find(key) is not None

    def _index(self, key: str) -> int:
        return abs(string_hash(key)) % len(self._buckets)

    def _find(self, key: str) -> Entry[V] | None:
        for entry in self._buckets[self._index(key)]:
            if entry.key == key:
                return entry
        return None

    def put(self, key: str, value: V) -> None:
        """Insert a key, or count one more occurrence of an existing key.

        The value is only stored on first insertion; later puts of the same
        key keep the original value.

        Args:
            key: Key to insert.
            value: Value to store if the key is new.
        """
        if not self._buckets:
            self._rehash(1)
        bucket = self._buckets[self._index(key)]
        for entry in bucket:
            if entry.key == key:
                entry.occurrences += 1
                break
        else:
            bucket.insert(0, Entry(key, value))
            self._entry_count += 1
        self._size += 1
        self._update_load_factor()

    def get(self, key: str) -> V:
        """Return the value stored under key.

        Raises:
            KeyError: If key is not present.
        """
        return self._get_entry(key).value

    def _get_entry(self, key: str) -> Entry[V]:
        """Return the entry for key, including its occurrence count.

        Raises:
            KeyError: If key is not present.
        """
        entry = self._find(key) if self._buckets else None
        if entry is None:
            raise KeyError(key)
        return entry

    def remove(self, key: str) -> V:
        """Remove key and return its value.

        The logical size drops by one no matter how many times the key was put.

        Raises:
            KeyError: If key is not present.
        """
        if self._buckets:
            bucket = self._buckets[self._index(key)]
            for i, entry in enumerate(bucket):
                if entry.key == key:
                    del bucket[i]
                    self._entry_count -= 1
                    self._size -= 1
                    self._update_load_factor()
                    return entry.value
        raise KeyError(key)

    def entries(self) -> Iterator[Entry[V]]:
        """Iterate over live entries, bucket by bucket, head to tail."""
        for bucket in self._buckets:
            yield from bucket

    def _update_load_factor(self) -> None:
        if self.load_factor >= LOAD_FACTOR_THRESHOLD:
            self._rehash(max(1, len(self._buckets) * 2))

    def _rehash(self, new_capacity: int) -> None:
        # Re-putting resets occurrences to 1; the logical size is kept.
        _logger.debug(
            "Rehashing table: %d -> %d buckets (size %d)",
            len(self._buckets),
            new_capacity,
            self._size,
        )
        rebuilt: HashTable[V] = HashTable(new_capacity)
        for entry in self.entries():
            rebuilt.put(entry.key, entry.value)
        self._buckets = rebuilt._buckets
