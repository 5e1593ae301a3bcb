"""Cached views over everything reachable from the search path.

``SymbolIndex`` scans every root of the current search path with
``PathIndex`` and derives three views from the combined listing:

- grouped names: compiled/stub entries as dotted names, grouped by their
  first segment (type-style candidates)
- module names: dotted names of source modules
- resources: every entry that is neither code nor an archive

The raw listing and each view live in their own cache slot keyed by the
search path itself, so a change to the path (a root added, removed or
reordered) makes every view recompute on its next access.
"""

from __future__ import annotations

import sys
from collections import defaultdict
from collections.abc import Callable, Sequence
from typing import TypeVar

from kompl.core.cache.scan import ScanCache
from kompl.core.protocols import Cache
from kompl.infrastructure.search_path.layout import PYTHON_LAYOUT, ScanLayout
from kompl.infrastructure.search_path.listers import PathIndex
from kompl.logger import get_logger

logger = get_logger("search_path.index")

__all__ = ["SymbolIndex", "SearchPathKey"]

SearchPathKey = tuple[str, ...]
SearchPathSource = Callable[[], Sequence[str]] | Sequence[str] | None

T = TypeVar("T")

ALL_FILES_SLOT = "all-files"
GROUPED_NAMES_SLOT = "grouped-names"
MODULE_NAMES_SLOT = "module-names"
RESOURCES_SLOT = "resources"


def _to_dotted(entry: str) -> str:
    return entry.replace("\\", "/").strip("/").replace("/", ".")


class SymbolIndex:
    """Search-path scanner with per-view caching.

    Args:
        search_path: The roots to scan. A callable is re-evaluated on every
            access so the index follows a live list such as ``sys.path``;
            a sequence is snapshotted. Defaults to ``sys.path``.
        cache: Slot cache to memoize scans in
        layout: Storage conventions for classifying entries
        scan_archives: Whether archive roots are opened at all
    """

    def __init__(
        self,
        search_path: SearchPathSource = None,
        cache: Cache | None = None,
        layout: ScanLayout = PYTHON_LAYOUT,
        scan_archives: bool = True,
    ) -> None:
        if search_path is None:
            self._search_path: Callable[[], Sequence[str]] = lambda: sys.path
        elif callable(search_path):
            self._search_path = search_path
        else:
            roots = tuple(search_path)
            self._search_path = lambda: roots
        self.cache = cache if cache is not None else ScanCache()
        self.layout = layout
        self.scan_archives = scan_archives
        self.path_index = PathIndex(layout=layout, scan_archives=scan_archives)

    def search_path_key(self) -> SearchPathKey:
        """Snapshot of the current search path; the invalidation key of every slot."""
        return tuple(str(root) for root in self._search_path())

    def all_files(self) -> list[str]:
        """Entries of every root, concatenated in search-path order."""
        key = self.search_path_key()
        return self.cache.get_or_compute(ALL_FILES_SLOT, key, lambda: self._scan(key))

    def grouped_names(self) -> dict[str, frozenset[str]]:
        """Dotted compiled-entry names grouped by their first segment."""
        return self._view(GROUPED_NAMES_SLOT, self._build_grouped_names, dict)

    def module_names(self) -> frozenset[str]:
        """Dotted names of every source module on the search path."""
        return self._view(MODULE_NAMES_SLOT, self._build_module_names, frozenset)

    def resources(self) -> tuple[str, ...]:
        """Non-code entries, in scan order, duplicates kept."""
        return self._view(RESOURCES_SLOT, self._build_resources, tuple)

    def with_settings(self, layout: ScanLayout, scan_archives: bool) -> SymbolIndex:
        """Return an index over the same search path with other scan settings.

        Returns ``self`` when the settings already match; otherwise a new
        index with its own cache, since views built under one layout or
        archive setting are not valid under another.
        """
        if layout == self.layout and scan_archives == self.scan_archives:
            return self
        return SymbolIndex(search_path=self._search_path, layout=layout, scan_archives=scan_archives)

    def flush(self) -> None:
        self.cache.clear()

    def _view(self, slot: str, build: Callable[[], T], empty: Callable[[], T]) -> T:
        def compute() -> T:
            try:
                return build()
            except Exception:
                logger.exception(f"Building index view {slot!r} failed; serving an empty view")
                return empty()

        return self.cache.get_or_compute(slot, self.search_path_key(), compute)

    def _scan(self, key: SearchPathKey) -> list[str]:
        entries: list[str] = []
        for root in key:
            root_entries = self.path_index.list_entries(root)
            logger.debug(f"Scanned {len(root_entries)} entries under {root!r}")
            entries.extend(root_entries)
        logger.info(f"Scanned {len(key)} search-path roots, {len(entries)} entries")
        return entries

    def _build_grouped_names(self) -> dict[str, frozenset[str]]:
        suffix = self.layout.compiled_suffix
        groups: defaultdict[str, set[str]] = defaultdict(set)
        for entry in self.all_files():
            if not entry.endswith(suffix) or self.layout.is_synthetic(entry):
                continue
            name = _to_dotted(entry[: -len(suffix)])
            if not name:
                continue
            head = name.split(".", 1)[0] if "." in name else ""
            groups[head].add(name)
        return {head: frozenset(names) for head, names in groups.items()}

    def _build_module_names(self) -> frozenset[str]:
        suffix = self.layout.source_suffix
        marker = self.layout.package_marker
        names: set[str] = set()
        for entry in self.all_files():
            if not entry.endswith(suffix) or self.layout.is_metadata(entry):
                continue
            name = _to_dotted(entry[: -len(suffix)])
            if marker is not None:
                if name == marker:
                    continue
                if name.endswith("." + marker):
                    name = name[: -len(marker) - 1]
            if not name or not self.layout.is_importable(name):
                continue
            if self.layout.hyphenate:
                name = name.replace("_", "-")
            names.add(name)
        return frozenset(names)

    def _build_resources(self) -> tuple[str, ...]:
        layout = self.layout
        resources: list[str] = []
        for entry in self.all_files():
            if (
                not entry
                or entry.endswith(layout.source_suffix)
                or entry.endswith(layout.compiled_suffix)
                or layout.is_archive(entry)
            ):
                continue
            resources.append(entry.lstrip("/\\"))
        return tuple(resources)
