"""Caching implementations for kompl.

The scan cache memoizes expensive search-path scans per named slot and
drops a slot's value as soon as the search path it was computed for changes.
"""

from kompl.core.cache.base import Cache
from kompl.core.cache.scan import ScanCache, ScanCacheEntry

__all__ = [
    "Cache",
    "ScanCache",
    "ScanCacheEntry",
]
