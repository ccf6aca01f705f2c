#!/usr/bin/env python3
"""
🐧 PNGN Styler - Width Calculation Module
=========================================
Copyright (c) 2025 PNGN-Tec LLC

Display Width Measurement
=========================
Accurate display-width measurement for terminal rendering, providing the
foundation for wrapping, alignment and box drawing.

Core Features
=============
- Wide (CJK, emoji) characters take 2 columns, combining marks none
- Escape sequences and control characters count as zero columns
- Thread-safe memoization through a RenderCache
- Precomputed per-codepoint widths for the hot ranges
- Width-aware slicing, padding and truncation

Technical Implementation
========================
- Uses the wcwidth library for per-character measurement
- Strips SGR and other escape sequences before measuring
- Falls back to character-by-character measurement when a string
  contains control characters
- Per-codepoint table for ASCII, control and combining ranges

Module Interface
================
- WidthCalculator: Memoizing calculator
- get_width() / get_widths(): Shared-calculator measurement
- strip_ansi(): Remove escape sequences
- truncate() / pad_right() / take_width(): Width-aware string helpers
- clear_default_cache(): Drop the shared calculator's widths

Example Usage
=============
```python
from pngn_width import get_width, truncate

width = get_width("你好")               # Returns 4
short = truncate("hello world", 8)      # Returns "hello..."
```
"""

import re
import threading
import logging
from typing import Optional, List, Dict, Any, Iterator, Tuple

from wcwidth import wcwidth, wcswidth

from pngn_cache import RenderCache
from pngn_config import get_cache_config

# Configure logging
logger = logging.getLogger('pngn_width')

# OSC (BEL or ST terminated), CSI and two-character escape sequences
ANSI_ESCAPE = re.compile(r'\x1B(?:\][^\x07\x1B]*(?:\x07|\x1B\\)|[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')

# Codepoint ranges with a fixed width, preloaded into every calculator
_FIXED_WIDTH_RANGES = (
    (0x0020, 0x007E, 1),  # Printable ASCII
    (0x0000, 0x001F, 0),  # C0 controls
    (0x007F, 0x009F, 0),  # DEL and C1 controls
    (0x0300, 0x036F, 0),  # Combining diacritical marks
    (0x1AB0, 0x1AFF, 0),  # Combining diacritical marks extended
    (0x1DC0, 0x1DFF, 0),  # Combining diacritical marks supplement
    (0x20D0, 0x20FF, 0),  # Combining marks for symbols
    (0xFE20, 0xFE2F, 0),  # Combining half marks
)


def strip_ansi(text: str) -> str:
    """Remove terminal escape sequences from text."""
    if '\x1b' not in text:
        return text
    return ANSI_ESCAPE.sub('', text)


def _tokenize(text: str) -> Iterator[Tuple[bool, str]]:
    """Yield (is_escape, chunk) pairs: whole escape sequences or single characters."""
    pos = 0
    for match in ANSI_ESCAPE.finditer(text):
        for char in text[pos:match.start()]:
            yield False, char
        yield True, match.group(0)
        pos = match.end()
    for char in text[pos:]:
        yield False, char


class WidthCalculator:
    """
    Memoizing display width calculator.

    Wide characters count 2 columns; combining marks, control characters
    and escape sequences count none. A string is measured once and then
    served from a RenderCache until cleared or evicted. Safe to share
    between threads.

    Attributes:
        stats: 'calculations' (strings actually measured) and
            'control_chars_handled' (strings needing the slow path)
    """

    def __init__(self,
                 cache_size: Optional[int] = None,
                 enable_cache: Optional[bool] = None,
                 use_codepoint_cache: bool = True):
        """
        Args:
            cache_size: Bound on memoized strings (config value if None)
            enable_cache: Memoize strings at all (config value if None)
            use_codepoint_cache: Keep a per-codepoint width table
        """
        cache_config = get_cache_config()
        if cache_size is None:
            cache_size = cache_config.width_cache_size
        if enable_cache is None:
            enable_cache = cache_config.enable_caching

        self._cache = RenderCache(
            "width",
            max_size=cache_size,
            strategy=cache_config.eviction_strategy,
            enabled=enable_cache,
        )

        self._use_codepoint_cache = use_codepoint_cache
        self._codepoint_lock = threading.Lock()
        self._codepoint_cache: Dict[int, int] = (
            self._build_codepoint_cache() if use_codepoint_cache else {}
        )

        self._stats_lock = threading.Lock()
        self.stats = {
            'calculations': 0,
            'control_chars_handled': 0,
        }

        logger.debug(f"WidthCalculator ready (cache_size={cache_size}, cache_enabled={enable_cache})")

    @property
    def cache(self) -> RenderCache:
        return self._cache

    def get_width(self, text: str) -> int:
        """
        Columns text occupies on screen.

        Args:
            text: Any string, escape sequences allowed

        Returns:
            Column count, 0 for empty text
        """
        if not text:
            return 0
        return self._cache.get_or_compute(text, lambda: self._calculate_width(text))

    def get_widths(self, texts: List[str]) -> List[int]:
        """get_width() for each string, in order."""
        return [self.get_width(text) for text in texts]

    def max_width(self, lines: List[str]) -> int:
        """Widest line of a block, 0 for an empty block."""
        return max(self.get_widths(lines), default=0)

    def char_width(self, char: str) -> int:
        """
        Width of a single character, never negative.

        Args:
            char: One character

        Returns:
            0, 1 or 2
        """
        cached = self._codepoint_cache.get(ord(char))
        if cached is not None:
            return cached

        width = wcwidth(char)
        if width is None or width < 0:
            width = 0

        if self._use_codepoint_cache:
            with self._codepoint_lock:
                self._codepoint_cache[ord(char)] = width
        return width

    def _calculate_width(self, text: str) -> int:
        with self._stats_lock:
            self.stats['calculations'] += 1
        text = strip_ansi(text)

        # wcswidth gives -1 when any character is non-printable
        width = wcswidth(text)
        if width >= 0:
            return width

        with self._stats_lock:
            self.stats['control_chars_handled'] += 1
        return sum(self.char_width(char) for char in text)

    @staticmethod
    def _build_codepoint_cache() -> Dict[int, int]:
        """Width table for the fixed-width codepoint ranges."""
        return {
            code: width
            for first, last, width in _FIXED_WIDTH_RANGES
            for code in range(first, last + 1)
        }

    # ========================================================================
    # WIDTH-AWARE STRING HELPERS
    # ========================================================================

    def take_width(self, text: str, width: int) -> str:
        """
        Longest prefix of text that fits in width columns.

        Escape sequences are copied through without counting. A wide
        character that would straddle the limit is dropped.
        """
        if width <= 0:
            return ""

        out = []
        used = 0
        for is_escape, chunk in _tokenize(text):
            if is_escape:
                out.append(chunk)
                continue
            char_width = self.char_width(chunk)
            if used + char_width > width:
                break
            out.append(chunk)
            used += char_width
        return "".join(out)

    def truncate(self, text: str, max_width: int, suffix: str = "...") -> str:
        """
        Truncate text to max_width columns, ending in suffix when cut.

        Args:
            text: Text to truncate
            max_width: Column budget
            suffix: Marker appended to truncated text

        Returns:
            Text unchanged if it fits, otherwise a truncated copy. When the
            suffix alone is at least as wide as the budget, the suffix
            itself is cut to fit.
        """
        if max_width <= 0 or not text:
            return ""
        if self.get_width(text) <= max_width:
            return text

        suffix_width = self.get_width(suffix)
        if suffix_width >= max_width:
            return self.take_width(suffix, max_width)
        return self.take_width(text, max_width - suffix_width) + suffix

    def pad_right(self, text: str, width: int, char: str = " ") -> str:
        """Right-pad text with char up to width columns."""
        current = self.get_width(text)
        if current >= width:
            return text
        return text + char * (width - current)

    def pad_left(self, text: str, width: int, char: str = " ") -> str:
        """Left-pad text with char up to width columns."""
        current = self.get_width(text)
        if current >= width:
            return text
        return char * (width - current) + text

    # ========================================================================
    # CACHE MANAGEMENT
    # ========================================================================

    def clear_cache(self):
        """Forget every memoized string width (the codepoint table stays)."""
        self._cache.clear()

    def get_stats(self) -> Dict[str, Any]:
        """
        Measurement counters plus the string cache statistics.

        Returns:
            Dictionary with 'calculations', 'control_chars_handled' and
            'cache' (RenderCache.get_stats())
        """
        with self._stats_lock:
            stats: Dict[str, Any] = dict(self.stats)
        stats['cache'] = self._cache.get_stats()
        return stats

    def set_cache_enabled(self, enabled: bool):
        """Turn string memoization on or off at run time."""
        self._cache.set_enabled(enabled)


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

_default_calculator = None
_calculator_lock = threading.Lock()


def get_default_calculator() -> WidthCalculator:
    """Shared calculator behind the module-level functions, created on first use."""
    global _default_calculator

    if _default_calculator is None:
        with _calculator_lock:
            if _default_calculator is None:
                _default_calculator = WidthCalculator()

    return _default_calculator


def get_width(text: str) -> int:
    """
    Display width with the shared calculator.

    Example:
        >>> get_width("Hello")
        5
        >>> get_width("你好")
        4
        >>> get_width("\\x1b[1mHi\\x1b[0m")
        2
    """
    return get_default_calculator().get_width(text)


def get_widths(texts: List[str]) -> List[int]:
    """
    Display widths with the shared calculator.

    Example:
        >>> get_widths(["A", "你", "👋"])
        [1, 2, 2]
    """
    return get_default_calculator().get_widths(texts)


def truncate(text: str, max_width: int, suffix: str = "...") -> str:
    return get_default_calculator().truncate(text, max_width, suffix)


def pad_right(text: str, width: int, char: str = " ") -> str:
    return get_default_calculator().pad_right(text, width, char)


def take_width(text: str, width: int) -> str:
    return get_default_calculator().take_width(text, width)


def clear_default_cache():
    """Forget the shared calculator's memoized widths."""
    if _default_calculator is not None:
        _default_calculator.clear_cache()


def get_default_stats() -> Dict[str, Any]:
    """Statistics of the shared calculator, {} before its first use."""
    if _default_calculator is not None:
        return _default_calculator.get_stats()
    return {}
