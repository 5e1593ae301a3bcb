"""Enumeration of entries under a single search-path root.

Each kind of root has its own lister; ``PathIndex`` picks one by the root's
kind and turns enumeration failures into an empty contribution so one broken
root never aborts a whole scan. Results are never memoized here.
"""

from __future__ import annotations

import os
import sys
import zipfile
from enum import Enum

from kompl.core.protocols import EntryLister
from kompl.infrastructure.search_path.layout import PYTHON_LAYOUT, ScanLayout
from kompl.logger import get_logger

logger = get_logger("search_path.listers")

__all__ = [
    "BUILTIN_ROOT",
    "RootKind",
    "classify_root",
    "DirectoryLister",
    "ArchiveLister",
    "GlobArchiveLister",
    "BuiltinModuleLister",
    "EmptyLister",
    "PathIndex",
]

BUILTIN_ROOT = "<builtin>"


class RootKind(str, Enum):
    """Storage kind of a search-path root."""

    EMPTY = "empty"
    GLOB = "glob"
    ARCHIVE = "archive"
    BUILTIN = "builtin"
    DIRECTORY = "directory"


def classify_root(root: str, archive_suffixes: tuple[str, ...]) -> RootKind:
    """Decide which lister handles ``root``."""
    if not root:
        return RootKind.EMPTY
    if root == BUILTIN_ROOT:
        return RootKind.BUILTIN
    if root.endswith("*"):
        return RootKind.GLOB
    if root.lower().endswith(archive_suffixes):
        return RootKind.ARCHIVE
    return RootKind.DIRECTORY


class EmptyLister:
    """Lister for roots that contribute nothing (the empty root)."""

    def list_entries(self, root: str) -> list[str]:
        return []


class DirectoryLister:
    """Recursively lists files under a plain directory.

    Symlinked directories are never descended, which keeps enumeration finite
    when links form a cycle. Symlinked files are listed like regular files.
    """

    def list_entries(self, root: str) -> list[str]:
        if not os.path.isdir(root):
            return []

        def on_error(error: OSError) -> None:
            logger.debug(f"Skipping unreadable directory {error.filename}: {error.strerror}")

        entries: list[str] = []
        for dirpath, _dirnames, filenames in os.walk(root, onerror=on_error, followlinks=False):
            for filename in filenames:
                entries.append(os.path.relpath(os.path.join(dirpath, filename), root))
        return entries


class ArchiveLister:
    """Lists the file entries stored inside a zip-format archive."""

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled

    def list_entries(self, root: str) -> list[str]:
        if not self.enabled:
            return []
        with zipfile.ZipFile(root) as archive:
            return [info.filename for info in archive.infolist() if not info.is_dir()]


class GlobArchiveLister:
    """Lists every archive found directly inside the directory of a ``dir/*`` root.

    The entries of all matching archives are concatenated.
    """

    def __init__(self, archive_lister: ArchiveLister, archive_suffixes: tuple[str, ...]) -> None:
        self._archive_lister = archive_lister
        self._archive_suffixes = archive_suffixes

    def list_entries(self, root: str) -> list[str]:
        base = root.rstrip("*")
        directory = os.path.dirname(base) if base.endswith(("/", os.sep)) else base
        directory = directory or os.curdir
        entries: list[str] = []
        for name in sorted(os.listdir(directory)):
            if not name.lower().endswith(self._archive_suffixes):
                continue
            path = os.path.join(directory, name)
            try:
                entries.extend(self._archive_lister.list_entries(path))
            except (OSError, zipfile.BadZipFile, ValueError) as error:
                logger.warning(f"Skipping unreadable archive {path}: {error}")
        return entries


class BuiltinModuleLister:
    """Reports modules compiled into the interpreter as pseudo source entries.

    Such modules have no file on any search-path root, so they are only
    visible through this tag root.
    """

    def __init__(self, source_suffix: str) -> None:
        self._source_suffix = source_suffix

    def list_entries(self, root: str) -> list[str]:
        return [
            name.replace(".", "/") + self._source_suffix
            for name in sorted(sys.builtin_module_names)
        ]


class PathIndex:
    """Enumerates one search-path root using the lister for its kind.

    Example:
        >>> index = PathIndex(scan_archives=False)
        >>> index.list_entries("")
        []
    """

    def __init__(
        self,
        layout: ScanLayout = PYTHON_LAYOUT,
        scan_archives: bool = True,
        listers: dict[RootKind, EntryLister] | None = None,
    ) -> None:
        self.layout = layout
        archive_lister = ArchiveLister(enabled=scan_archives)
        self._listers: dict[RootKind, EntryLister] = {
            RootKind.EMPTY: EmptyLister(),
            RootKind.DIRECTORY: DirectoryLister(),
            RootKind.ARCHIVE: archive_lister,
            RootKind.GLOB: GlobArchiveLister(archive_lister, layout.archive_suffixes),
            RootKind.BUILTIN: BuiltinModuleLister(layout.source_suffix),
        }
        if listers:
            self._listers.update(listers)

    def kind_of(self, root: str) -> RootKind:
        return classify_root(root, self.layout.archive_suffixes)

    def list_entries(self, root: str) -> list[str]:
        """List entries under ``root``; failures yield an empty list."""
        kind = self.kind_of(root)
        try:
            return list(self._listers[kind].list_entries(root))
        except (OSError, zipfile.BadZipFile, ValueError) as error:
            logger.warning(f"Cannot enumerate {kind.value} root {root!r}: {error}")
            return []
