"""Storage conventions used to turn raw search-path entries into symbol views."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["ScanLayout", "PYTHON_LAYOUT", "JVM_LAYOUT", "LAYOUTS", "get_layout"]


@dataclass(frozen=True)
class ScanLayout:
    """Suffixes and markers describing how symbols are laid out on disk.

    Attributes:
        compiled_suffix: Suffix of entries feeding the grouped (type) view
        source_suffix: Suffix of entries feeding the module-name view
        archive_suffixes: Suffixes of archive containers
        metadata_roots: A first path segment ending in any of these is
            package metadata, not code
        synthetic_markers: Substrings marking generated/anonymous entries
        hyphenate: Convert ``_`` to ``-`` in module names
        package_marker: Trailing module segment naming the package itself
            (dropped from module names)
        identifier_names: Keep only module names whose every dotted segment
            is a valid identifier, which drops directories such as
            ``site-packages`` reached through a nested root
    """

    name: str
    compiled_suffix: str
    source_suffix: str
    archive_suffixes: tuple[str, ...]
    metadata_roots: tuple[str, ...] = ()
    synthetic_markers: tuple[str, ...] = ()
    hyphenate: bool = False
    package_marker: str | None = None
    identifier_names: bool = False

    def is_archive(self, entry: str) -> bool:
        return entry.lower().endswith(self.archive_suffixes)

    def is_synthetic(self, entry: str) -> bool:
        return any(marker in entry for marker in self.synthetic_markers)

    def is_metadata(self, entry: str) -> bool:
        first = entry.replace("\\", "/").lstrip("/").split("/", 1)[0]
        return bool(self.metadata_roots) and first.endswith(self.metadata_roots)

    def is_importable(self, name: str) -> bool:
        if not self.identifier_names:
            return True
        return all(part.isidentifier() for part in name.split("."))


PYTHON_LAYOUT = ScanLayout(
    name="python",
    compiled_suffix=".pyi",
    source_suffix=".py",
    archive_suffixes=(".zip", ".whl", ".egg"),
    metadata_roots=(".dist-info", ".egg-info", "EGG-INFO"),
    synthetic_markers=("__",),
    package_marker="__init__",
    identifier_names=True,
)

JVM_LAYOUT = ScanLayout(
    name="jvm",
    compiled_suffix=".class",
    source_suffix=".clj",
    archive_suffixes=(".jar", ".zip"),
    metadata_roots=("META-INF",),
    synthetic_markers=("__", "$"),
    hyphenate=True,
)

LAYOUTS = {layout.name: layout for layout in (PYTHON_LAYOUT, JVM_LAYOUT)}


def get_layout(name: str | None) -> ScanLayout:
    """Look up a layout by name; unknown or empty names fall back to the Python layout."""
    if not name:
        return PYTHON_LAYOUT
    return LAYOUTS.get(name.strip().lower(), PYTHON_LAYOUT)
