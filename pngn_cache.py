#!/usr/bin/env python3
"""
🐧 PNGN Styler - Render Cache Module
====================================
Copyright (c) 2025 PNGN-Tec LLC

Memoization Layer
=================
Keyed memoization shared by the width calculator and the escape-sequence
builder. Rendering the same styles and strings frame after frame must not
recompute display widths or re-assemble escape codes.

Core Features
=============
- Compute-on-miss lookups via get_or_compute()
- Optional size bound with LRU or FIFO eviction (None = unbounded)
- Per-entry access metadata for diagnostics
- Thread-safe access through a per-cache lock
- Hit/miss/eviction statistics with computed hit rate

Module Interface
================
- RenderCache: Bounded or unbounded keyed cache
- CacheEntry: Stored value plus access metadata

Example Usage
=============
```python
from pngn_cache import RenderCache

cache = RenderCache("widths", max_size=1000)
width = cache.get_or_compute("hello", lambda: 5)
print(cache.get_stats()["hit_rate"])
```
"""

import threading
import logging
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Hashable, Optional

from pngn_config import CacheStrategy

# Configure logging
logger = logging.getLogger('pngn_cache')


@dataclass
class CacheEntry:
    """
    Cached value with metadata.

    Tracks creation time and access patterns for cache diagnostics.
    """
    value: Any
    created: float = field(default_factory=time.time)
    last_access: float = field(default_factory=time.time)
    access_count: int = 0

    def touch(self):
        """Update access count and time for LRU tracking"""
        self.access_count += 1
        self.last_access = time.time()


class RenderCache:
    """
    Thread-safe keyed memoization cache.

    Entries are computed once per distinct key and reused until cleared or
    evicted. With a size bound the least-recently-used entry goes first
    (LRU) or the oldest insertion goes first (FIFO).

    Attributes:
        name: Label used in logs and statistics
        stats: Dictionary containing hit/miss/eviction counters
    """

    def __init__(self,
                 name: str,
                 max_size: Optional[int] = None,
                 strategy: CacheStrategy = CacheStrategy.LRU,
                 enabled: bool = True):
        """
        Initialize cache.

        Args:
            name: Label used in logs and statistics
            max_size: Maximum number of entries (None for unbounded)
            strategy: Eviction strategy when bounded
            enabled: Whether values are stored at all
        """
        if max_size is not None and max_size <= 0:
            raise ValueError("Cache size must be positive or None")

        self.name = name
        self._entries: "OrderedDict[Hashable, CacheEntry]" = OrderedDict()
        self._max_size = max_size
        self._strategy = strategy
        self._enabled = enabled
        self._lock = threading.Lock()

        self.stats = {
            'hits': 0,
            'misses': 0,
            'evictions': 0,
            'computations': 0,
        }

        logger.debug(f"RenderCache '{name}' created with max_size={max_size}, "
                     f"strategy={strategy.value}, enabled={enabled}")

    # ========================================================================
    # LOOKUP
    # ========================================================================

    def get_or_compute(self, key: Hashable, compute: Callable[[], Any]) -> Any:
        """
        Return the cached value for key, computing and storing it on a miss.

        Args:
            key: Hashable cache key
            compute: Zero-argument function producing the value

        Returns:
            Cached or freshly computed value
        """
        if self._enabled:
            with self._lock:
                entry = self._entries.get(key)
                if entry is not None:
                    self._record_hit(key, entry)
                    return entry.value
                self.stats['misses'] += 1

        value = compute()

        with self._lock:
            self.stats['computations'] += 1
            if not self._enabled:
                return value
            # Another thread may have stored the key while we computed
            existing = self._entries.get(key)
            if existing is not None:
                return existing.value
            self._enforce_limit()
            self._entries[key] = CacheEntry(value=value)

        return value

    def get(self, key: Hashable, default: Any = None) -> Any:
        """Get a cached value without computing on miss."""
        if not self._enabled:
            return default

        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self.stats['misses'] += 1
                return default
            self._record_hit(key, entry)
            return entry.value

    def put(self, key: Hashable, value: Any):
        """Store a value, replacing any existing entry."""
        if not self._enabled:
            return

        with self._lock:
            if key in self._entries:
                del self._entries[key]
            else:
                self._enforce_limit()
            self._entries[key] = CacheEntry(value=value)

    def _record_hit(self, key: Hashable, entry: CacheEntry):
        """Update hit counters. Caller holds the lock."""
        entry.touch()
        if self._strategy is CacheStrategy.LRU:
            self._entries.move_to_end(key)
        self.stats['hits'] += 1

    def _enforce_limit(self):
        """Evict entries until one more fits. Caller holds the lock."""
        if self._max_size is None:
            return

        while self._entries and len(self._entries) >= self._max_size:
            # Front of the dict is least recently used (LRU) or oldest (FIFO)
            self._entries.popitem(last=False)
            self.stats['evictions'] += 1

    # ========================================================================
    # MANAGEMENT
    # ========================================================================

    def clear(self):
        """Drop every entry. Counters are kept."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.debug(f"RenderCache '{self.name}' cleared ({count} entries)")

    def resize(self, max_size: Optional[int]):
        """
        Change the size bound, evicting immediately if needed.

        Args:
            max_size: New maximum number of entries (None for unbounded)
        """
        if max_size is not None and max_size <= 0:
            raise ValueError("Cache size must be positive or None")

        with self._lock:
            self._max_size = max_size
            if max_size is not None:
                while len(self._entries) > max_size:
                    self._entries.popitem(last=False)
                    self.stats['evictions'] += 1

    def set_enabled(self, enabled: bool):
        """
        Enable or disable storage at runtime.

        Args:
            enabled: Whether values should be stored
        """
        with self._lock:
            self._enabled = enabled
            if not enabled:
                self._entries.clear()
        logger.info(f"RenderCache '{self.name}' {'enabled' if enabled else 'disabled and cleared'}")

    @property
    def max_size(self) -> Optional[int]:
        return self._max_size

    @property
    def enabled(self) -> bool:
        return self._enabled

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._entries

    def entry(self, key: Hashable) -> Optional[CacheEntry]:
        """Get the raw entry (value plus metadata) without counting a hit."""
        with self._lock:
            return self._entries.get(key)

    def get_stats(self) -> Dict[str, Any]:
        """
        Get cache statistics.

        Returns:
            Dictionary of statistics including:
            - name: Cache label
            - size: Current number of entries
            - max_size: Size bound (None if unbounded)
            - hits / misses / evictions / computations: Counters
            - hit_rate: Hits as a fraction of lookups
            - enabled: Whether caching is enabled
        """
        with self._lock:
            stats = self.stats.copy()
            stats['size'] = len(self._entries)

        total_requests = stats['hits'] + stats['misses']
        if total_requests > 0:
            stats['hit_rate'] = stats['hits'] / total_requests
        else:
            stats['hit_rate'] = 0.0

        stats['name'] = self.name
        stats['max_size'] = self._max_size
        stats['enabled'] = self._enabled
        return stats
