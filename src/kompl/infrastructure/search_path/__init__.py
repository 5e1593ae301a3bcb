"""Search-path scanning: per-root listers, storage layouts and the cached symbol index."""

from kompl.infrastructure.search_path.index import SymbolIndex
from kompl.infrastructure.search_path.layout import JVM_LAYOUT, PYTHON_LAYOUT, ScanLayout, get_layout
from kompl.infrastructure.search_path.listers import BUILTIN_ROOT, PathIndex, RootKind, classify_root

__all__ = [
    "SymbolIndex",
    "ScanLayout",
    "PYTHON_LAYOUT",
    "JVM_LAYOUT",
    "get_layout",
    "PathIndex",
    "RootKind",
    "BUILTIN_ROOT",
    "classify_root",
]
