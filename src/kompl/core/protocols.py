"""Core protocols for type hints and abstractions.

This module defines protocols (structural types) that describe the contracts
that the indexing and completion components must satisfy. Using protocols
keeps the engine decoupled from concrete listers, caches and parsers and
makes them easy to replace with stubs in tests.
"""

from collections.abc import Callable, Hashable
from typing import Protocol, TypeVar

from kompl.core.types import ContextHint

__all__ = [
    "Cache",
    "EntryLister",
    "ContextParser",
    "V",
]

V = TypeVar("V")


class Cache(Protocol):
    """Protocol for named-slot caches keyed on volatile external state.

    Each slot holds at most one value together with the key it was computed
    for. A value is only served while the caller's current key still equals
    the stored one.
    """

    def get_or_compute(self, slot: str, key: Hashable, compute: Callable[[], V]) -> V:
        """Return the value cached for ``slot`` under ``key``, computing it on a miss.

        Args:
            slot: Name of the cached computation
            key: Current value of the invalidation key
            compute: Zero-argument function producing a fresh value

        Returns:
            The cached or freshly computed value
        """
        ...

    def get(self, slot: str) -> object | None:
        """Return whatever value is stored for ``slot`` regardless of its key."""
        ...

    def clear(self, slot: str | None = None) -> None:
        """Clear one slot, or every slot when ``slot`` is None."""
        ...

    def has_changed(self, slot: str, key: Hashable) -> bool:
        """Return True when ``slot`` is empty or was computed for a different key."""
        ...


class EntryLister(Protocol):
    """Enumerates the leaf entries of one kind of search-path root."""

    def list_entries(self, root: str) -> list[str]:
        """List entry names under ``root``, relative to it.

        Args:
            root: Location of the root (directory, archive, glob, tag)

        Returns:
            Relative entry names; may contain duplicates
        """
        ...


class ContextParser(Protocol):
    """Turns code surrounding the cursor into a structured hint."""

    def parse(self, snippet: str) -> ContextHint | None:
        """Return a hint for ``snippet``, or None when it carries no usable context."""
        ...
