"""Named-slot cache for search-path scans.

This module provides the cache used by the symbol index. Every slot stores
the key it was computed for; once the caller's current key differs, the slot
is recomputed and replaced wholesale.

The whole cache is an immutable mapping that is swapped for a new one on
every write. Readers never block, and a slow ``compute`` in one slot never
holds anything another caller needs.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Hashable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, TypeVar

from kompl.core.cache.base import Cache
from kompl.logger import get_logger

logger = get_logger("cache.scan")

V = TypeVar("V")

_EMPTY: Mapping[str, "ScanCacheEntry"] = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class ScanCacheEntry:
    """Value of one slot together with the key it was computed for."""

    key: Hashable
    value: Any


class ScanCache(Cache):
    """Cache holding at most one ``(key, value)`` entry per slot name.

    Example:
        >>> cache = ScanCache()
        >>> cache.get_or_compute("all-files", ("/lib",), lambda: ["a.py"])
        ['a.py']
        >>> cache.has_changed("all-files", ("/lib",))
        False
        >>> cache.has_changed("all-files", ("/lib", "/site"))
        True

    Thread safety:
        Lookups read a single immutable snapshot. Writes build a new snapshot
        and publish it with compare-and-set; the lock only covers the identity
        check and the reference swap. Two callers that both see a stale key
        may both recompute, and the last writer wins.
    """

    def __init__(self) -> None:
        """Initialize an empty scan cache."""
        self._entries: Mapping[str, ScanCacheEntry] = _EMPTY
        self._swap_lock = threading.Lock()

    def get_or_compute(self, slot: str, key: Hashable, compute: Callable[[], V]) -> V:
        """Get the value of a slot, computing it when missing or stale.

        ``compute`` runs outside any lock, so concurrent callers may compute
        the same slot twice.

        Args:
            slot: Name of the cached computation
            key: Current invalidation key (the search-path snapshot)
            compute: Zero-argument function producing a fresh value

        Returns:
            The value stored under an equal key, or the freshly computed one
        """
        entry = self._entries.get(slot)
        if entry is not None and entry.key == key:
            return entry.value

        logger.debug("Scan cache miss for slot {!r}", slot)
        value = compute()
        new_entry = ScanCacheEntry(key=key, value=value)
        self._update(lambda entries: MappingProxyType({**entries, slot: new_entry}))
        return value

    def get(self, slot: str) -> Any | None:
        """Get the value stored in a slot, whatever key it was computed for.

        Args:
            slot: The slot name

        Returns:
            The stored value if the slot is filled, None otherwise
        """
        entry = self._entries.get(slot)
        return None if entry is None else entry.value

    def has_changed(self, slot: str, key: Hashable) -> bool:
        """Check whether a slot would be recomputed for ``key``.

        Args:
            slot: The slot name
            key: The invalidation key to compare

        Returns:
            True if the slot is empty or was computed for a different key
        """
        entry = self._entries.get(slot)
        return entry is None or entry.key != key

    def clear(self, slot: str | None = None) -> None:
        """Clear cache slots.

        Args:
            slot: If provided, clear only this slot. If None, clear all slots.
        """
        if slot is None:
            self.flush()
            return
        self._update(
            lambda entries: MappingProxyType({name: entry for name, entry in entries.items() if name != slot})
        )

    def flush(self) -> None:
        """Drop every slot in one swap; the next lookup of any slot recomputes."""
        self._update(lambda _entries: _EMPTY)
        logger.debug("Scan cache flushed")

    def snapshot(self) -> Mapping[str, ScanCacheEntry]:
        """Return the current immutable view of all slots."""
        return self._entries

    def _update(self, transform: Callable[[Mapping[str, ScanCacheEntry]], Mapping[str, ScanCacheEntry]]) -> None:
        while True:
            current = self._entries
            updated = transform(current)
            with self._swap_lock:
                if self._entries is current:
                    self._entries = updated
                    return

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, slot: object) -> bool:
        return slot in self._entries
