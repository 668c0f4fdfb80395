"""Tests for wordstat.hash_table module."""

from __future__ import annotations

import logging

import pytest

import wordstat
from wordstat.hash_table import (
    DEFAULT_CAPACITY,
    LOAD_FACTOR_THRESHOLD,
    Entry,
    HashTable,
    string_hash,
)


class TestStringHash:
    """Tests for string_hash function."""

    def test_empty_string(self) -> None:
        """Test hashing the empty string."""
        assert string_hash("") == 0

    def test_known_values(self) -> None:
        """Test a few hand-computed hashes."""
        assert string_hash("a") == 97
        assert string_hash("ab") == 97 * 31 + 98

    def test_signed_32_bit_range(self) -> None:
        """Test that long keys stay within the signed 32-bit range."""
        for key in ["a" * 50, "overflowing key " * 10, "zzzzzzzzzzzz"]:
            h = string_hash(key)
            assert -(2**31) <= h < 2**31

    def test_wraps_negative(self) -> None:
        """Test that overflow wraps into the negative range."""
        assert string_hash("polygenelubricants") == -(2**31)

    def test_bucket_index_of_negative_hash(self) -> None:
        """Test that keys with the most negative hash are still stored."""
        table: HashTable[int] = HashTable(7)
        table.put("polygenelubricants", 1)
        assert table.get("polygenelubricants") == 1

    def test_deterministic(self) -> None:
        """Test that the same key always hashes the same."""
        assert string_hash("wordstat") == string_hash("word" + "stat")


class TestConstruction:
    """Tests for HashTable construction."""

    def test_default_capacity(self) -> None:
        """Test the default capacity of 500."""
        table: HashTable[int] = HashTable()
        assert DEFAULT_CAPACITY == 500
        assert table.capacity == DEFAULT_CAPACITY
        assert table.size() == 0
        assert len(table) == 0

    def test_given_capacity(self) -> None:
        """Test constructing with an explicit capacity."""
        table: HashTable[int] = HashTable(7)
        assert table.capacity == 7

    def test_zero_capacity(self) -> None:
        """Test that a zero-capacity table is allowed and grows on put."""
        table: HashTable[int] = HashTable(0)
        assert table.capacity == 0
        assert table.load_factor == 0.0
        table.put("a", 1)
        assert table.get("a") == 1
        assert table.size() == 1
        assert table.load_factor < LOAD_FACTOR_THRESHOLD

    def test_zero_capacity_lookups(self) -> None:
        """Test lookups on a zero-capacity table."""
        table: HashTable[int] = HashTable(0)
        assert "a" not in table
        with pytest.raises(KeyError):
            table.get("a")
        with pytest.raises(KeyError):
            table.remove("a")

    def test_negative_capacity(self) -> None:
        """Test that a negative capacity is rejected."""
        with pytest.raises(ValueError, match="capacity"):
            HashTable(-1)


class TestPutGetRemove:
    """Tests for put, get, the entry accessor and remove."""

    def test_basic_operations(self) -> None:
        """Test the basic put/get/remove cycle."""
        table: HashTable[int] = HashTable()
        table.put("Alice", 25)
        table.put("Bob", 30)
        table.put("Charlie", 35)

        assert table.get("Alice") == 25
        assert table.get("Bob") == 30
        assert table.get("Charlie") == 35
        assert table.size() == 3

        assert table.remove("Bob") == 30
        with pytest.raises(KeyError):
            table.get("Bob")
        assert table.size() == 2

        with pytest.raises(KeyError):
            table.remove("John")
        with pytest.raises(KeyError):
            table.get("John")

    def test_duplicate_put_keeps_first_value(self) -> None:
        """Test that a repeated put counts instead of overwriting."""
        table: HashTable[str] = HashTable()
        table.put("key", "first")
        table.put("key", "second")
        assert table.get("key") == "first"
        assert table._get_entry("key").occurrences == 2

    def test_size_counts_every_put(self) -> None:
        """Test that size counts repeated puts while len counts keys."""
        table: HashTable[str] = HashTable()
        for _ in range(9):
            table.put("test", "test")
        assert table.size() == 9
        assert len(table) == 1
        assert table._get_entry("test").occurrences == 9

    def test_remove_counted_key_drops_size_by_one(self) -> None:
        """Test that removing a repeated key only decrements size once."""
        table: HashTable[str] = HashTable()
        for _ in range(3):
            table.put("x", "x")
        table.put("y", "y")
        assert table.remove("x") == "x"
        assert table.size() == 3
        assert len(table) == 1
        assert "x" not in table

    def test_entry_accessor(self) -> None:
        """Test that the entry accessor exposes key, value and count."""
        table: HashTable[int] = HashTable()
        table.put("k", 5)
        entry = table._get_entry("k")
        assert entry == Entry("k", 5, 1)

    def test_entry_accessor_missing(self) -> None:
        """Test that the entry accessor raises KeyError for a missing key."""
        table: HashTable[int] = HashTable()
        with pytest.raises(KeyError):
            table._get_entry("missing")

    def test_entry_accessor_not_public(self) -> None:
        """Test that entries are only reachable inside the package."""
        assert not hasattr(HashTable, "get_entry")
        assert "Entry" not in wordstat.__all__

    def test_contains(self) -> None:
        """Test membership checks."""
        table: HashTable[int] = HashTable()
        table.put("present", 1)
        assert "present" in table
        assert "absent" not in table
        assert 42 not in table

    def test_reinsert_after_remove(self) -> None:
        """Test that a removed key starts counting again from one."""
        table: HashTable[int] = HashTable()
        table.put("a", 1)
        table.put("a", 1)
        table.remove("a")
        table.put("a", 2)
        assert table.get("a") == 2
        assert table._get_entry("a").occurrences == 1

    def test_collisions_in_one_bucket(self) -> None:
        """Test that chained keys in a single bucket stay distinct."""
        table: HashTable[int] = HashTable(1)
        # Capacity 1 rehashes as it fills, so every key must survive that too
        keys = [f"key{i}" for i in range(20)]
        for i, key in enumerate(keys):
            table.put(key, i)
        for i, key in enumerate(keys):
            assert table.get(key) == i
        assert len(table) == 20


class TestRehash:
    """Tests for load-factor maintenance."""

    def test_rehash_on_full_load(self) -> None:
        """Test that reaching a load factor of 1.0 doubles the capacity."""
        overload: HashTable[int] = HashTable(2)
        overload.put("Jeff", 3)
        assert overload.capacity == 2
        overload.put("John", 1)
        assert overload.capacity == 4
        assert overload.get("John") == 1
        assert overload.get("Jeff") == 3
        assert overload.size() == 2

    def test_rehash_resets_occurrences(self) -> None:
        """Test that rebuilt entries start counting from one again."""
        table: HashTable[str] = HashTable(2)
        table.put("a", "a")
        table.put("a", "a")  # size 2 == capacity, rehash
        assert table.capacity == 4
        assert table._get_entry("a").occurrences == 1
        assert table.size() == 2

    def test_load_factor_stays_below_threshold(self) -> None:
        """Test the load invariant across puts and removes of distinct keys."""
        table: HashTable[int] = HashTable(3)
        puts = 0
        removes = 0
        for i in range(100):
            table.put(f"w{i}", i)
            puts += 1
            assert table.load_factor < LOAD_FACTOR_THRESHOLD
            if i % 3 == 0:
                table.remove(f"w{i}")
                removes += 1
                assert table.load_factor < LOAD_FACTOR_THRESHOLD
        assert table.size() == puts - removes
        assert len(table) == puts - removes

    def test_values_survive_many_rehashes(self) -> None:
        """Test that keys and values are kept through repeated growth."""
        table: HashTable[int] = HashTable(1)
        for i in range(200):
            table.put(str(i), i * i)
        assert table.capacity >= 200
        for i in range(200):
            assert table.get(str(i)) == i * i

    def test_rehash_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that a rehash emits a debug record."""
        table: HashTable[int] = HashTable(1)
        with caplog.at_level(logging.DEBUG, logger="wordstat.hash_table"):
            table.put("a", 1)
        assert "Rehashing table" in caplog.text


class TestEntries:
    """Tests for iterating over entries."""

    def test_entries_cover_all_keys(self) -> None:
        """Test that entries() yields every live key once."""
        table: HashTable[int] = HashTable(5)
        for i in range(4):
            table.put(f"k{i}", i)
        table.remove("k2")
        keys = sorted(entry.key for entry in table.entries())
        assert keys == ["k0", "k1", "k3"]

    def test_bucket_order_is_newest_first(self) -> None:
        """Test that new keys go to the head of their bucket."""
        table: HashTable[int] = HashTable(DEFAULT_CAPACITY)
        # Force a shared bucket by picking keys with equal bucket indexes
        first = "aa"
        target = abs(string_hash(first)) % DEFAULT_CAPACITY
        second = next(
            f"b{i}"
            for i in range(10000)
            if abs(string_hash(f"b{i}")) % DEFAULT_CAPACITY == target
        )
        table.put(first, 1)
        table.put(second, 2)
        assert [entry.key for entry in table.entries()] == [second, first]

    def test_empty_table(self) -> None:
        """Test iterating over an empty table."""
        table: HashTable[int] = HashTable()
        assert list(table.entries()) == []
