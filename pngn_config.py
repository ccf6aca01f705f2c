#!/usr/bin/env python3
"""
🐧 PNGN Styler - Configuration Module
=====================================
Copyright (c) 2025 PNGN-Tec LLC

Styler Settings
===============
One place for the knobs the renderer reads at run time:
- How many display widths and escape sequences to memoize
- Whether the oldest or the least recently used entry is evicted
- Which color profile and background brightness to assume
- Which marker the ellipsis overflow policy appends
- An optional fixed viewport

Sections
========
Settings are grouped into dataclass sections (CacheConfig,
RenderingConfig) under StylerConfig. Each section checks itself in
validate() and raises ValueError on a bad value.

Environment Overrides
=====================
- PNGN_WIDTH_CACHE_SIZE: Width cache bound ("none" for unbounded)
- PNGN_SEQUENCE_CACHE_SIZE: Sequence cache bound ("none" for unbounded)
- PNGN_CACHE_ENABLED: Master cache switch
- PNGN_COLOR_PROFILE: none, ansi16, ansi256 or truecolor
- NO_COLOR: Any non-empty value forces the "none" profile
- PNGN_LIGHT_MODE: Resolve adaptive colors for a light background
- PNGN_DEBUG: Enable debug mode (log level DEBUG)

Runtime Changes
===============
The process-wide ConfigurationManager swaps in a new configuration with
reload(). An invalid configuration is refused and the previous one stays
active. Listeners get (old, new) after every successful swap.
"""

import threading
import logging
import os
from typing import Any, Callable, List, Optional, Tuple
from dataclasses import dataclass, field
from enum import Enum

# Configure logging
logger = logging.getLogger('pngn_config')

# Profile names accepted by RenderingConfig.color_profile
COLOR_PROFILE_NAMES = ("none", "ansi16", "ansi256", "truecolor")

_TRUE_VALUES = ('true', '1', 'yes', 'on')

ConfigCallback = Callable[["StylerConfig", "StylerConfig"], None]


class CacheStrategy(Enum):
    """Which entry a full cache gives up"""
    LRU = "lru"
    FIFO = "fifo"


# ============================================================================
# SECTIONS
# ============================================================================

@dataclass
class CacheConfig:
    """
    Memoization settings.

    Attributes:
        width_cache_size: Bound on memoized display widths (None = unbounded)
        sequence_cache_size: Bound on memoized escape sequences (None = unbounded)
        eviction_strategy: LRU or FIFO once a bound is reached
        enable_caching: Turn every cache on or off
    """

    width_cache_size: Optional[int] = 10000
    sequence_cache_size: Optional[int] = 1000
    eviction_strategy: CacheStrategy = CacheStrategy.LRU
    enable_caching: bool = True

    def validate(self) -> bool:
        for label, size in (("Width", self.width_cache_size),
                            ("Sequence", self.sequence_cache_size)):
            if size is not None and size <= 0:
                raise ValueError(f"{label} cache size must be positive or None, got {size}")
        if not isinstance(self.eviction_strategy, CacheStrategy):
            raise ValueError(f"Unknown eviction strategy: {self.eviction_strategy!r}")
        return True


@dataclass
class RenderingConfig:
    """
    Terminal assumptions used when no capability is passed explicitly.

    Attributes:
        color_profile: One of COLOR_PROFILE_NAMES
        dark_mode: Pick the dark member of adaptive colors
        default_width: Fixed content width, None to size from content
        default_height: Fixed content height, None to size from content
        ellipsis: Marker appended by the ellipsis overflow policy
    """

    color_profile: str = "truecolor"
    dark_mode: bool = True
    default_width: Optional[int] = None
    default_height: Optional[int] = None
    ellipsis: str = "..."

    def validate(self) -> bool:
        if self.color_profile not in COLOR_PROFILE_NAMES:
            raise ValueError(f"Color profile must be one of {COLOR_PROFILE_NAMES}, "
                             f"got {self.color_profile!r}")
        for label, size in (("width", self.default_width), ("height", self.default_height)):
            if size is not None and size <= 0:
                raise ValueError(f"Default {label} must be positive, got {size}")
        return True


@dataclass
class StylerConfig:
    """
    Top-level configuration: sections plus debug settings.

    The engine only emits log records and never configures logging, so
    debug_mode and log_level are published for the host application to
    read when it sets up its own handlers.
    """

    cache: CacheConfig = field(default_factory=CacheConfig)
    rendering: RenderingConfig = field(default_factory=RenderingConfig)
    debug_mode: bool = False
    log_level: str = "INFO"

    def validate(self) -> bool:
        """Check every section; raises ValueError on the first bad value."""
        self.cache.validate()
        self.rendering.validate()
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log level: {self.log_level!r}")
        return True


# ============================================================================
# ENVIRONMENT
# ============================================================================

def _parse_cache_size(raw: str) -> Optional[int]:
    """Parse a cache size override, where 'none' or '0' means unbounded."""
    if raw.strip().lower() in ('none', 'unbounded', '0', ''):
        return None
    size = int(raw)
    if size < 0:
        raise ValueError(f"cache size must not be negative, got {size}")
    return size


def _parse_profile(raw: str) -> str:
    name = raw.strip().lower()
    if name not in COLOR_PROFILE_NAMES:
        raise ValueError(f"color profile must be one of {COLOR_PROFILE_NAMES}")
    return name


def _parse_flag(raw: str) -> bool:
    return raw.strip().lower() in _TRUE_VALUES


def _set_debug(config: StylerConfig, enabled: bool):
    config.debug_mode = enabled
    if enabled:
        config.log_level = "DEBUG"


# (variable, apply(config, raw value)), applied in order
_ENV_OVERRIDES: List[Tuple[str, Callable[[StylerConfig, str], Any]]] = [
    ('PNGN_WIDTH_CACHE_SIZE',
     lambda c, v: setattr(c.cache, 'width_cache_size', _parse_cache_size(v))),
    ('PNGN_SEQUENCE_CACHE_SIZE',
     lambda c, v: setattr(c.cache, 'sequence_cache_size', _parse_cache_size(v))),
    ('PNGN_CACHE_ENABLED',
     lambda c, v: setattr(c.cache, 'enable_caching', _parse_flag(v))),
    ('PNGN_COLOR_PROFILE',
     lambda c, v: setattr(c.rendering, 'color_profile', _parse_profile(v))),
    ('NO_COLOR',
     lambda c, v: setattr(c.rendering, 'color_profile', "none") if v else None),
    ('PNGN_LIGHT_MODE',
     lambda c, v: setattr(c.rendering, 'dark_mode', not _parse_flag(v))),
    ('PNGN_DEBUG',
     lambda c, v: _set_debug(c, _parse_flag(v))),
]


def apply_environment(config: StylerConfig) -> StylerConfig:
    """
    Apply environment overrides to a configuration in place.

    Args:
        config: Configuration to update

    Returns:
        The same configuration object
    """
    for name, apply in _ENV_OVERRIDES:
        raw = os.environ.get(name)
        if raw is None:
            continue
        try:
            apply(config, raw)
        except ValueError as e:
            logger.warning(f"Ignoring {name}={raw!r}: {e}")
    return config


# ============================================================================
# MANAGER
# ============================================================================

class ConfigurationManager:
    """
    Process-wide holder of the active configuration.

    Constructing it always returns the same instance. Safe to use from
    several threads.
    """

    _instance = None
    _instance_lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    instance = super().__new__(cls)
                    instance._ready = False
                    cls._instance = instance
        return cls._instance

    def __init__(self):
        if self._ready:
            return

        self._state_lock = threading.RLock()
        self._listeners: List[ConfigCallback] = []
        self._config = apply_environment(StylerConfig())
        try:
            self._config.validate()
        except ValueError as e:
            logger.warning(f"Environment configuration rejected, using defaults: {e}")
            self._config = StylerConfig()
        self._ready = True
        logger.info(f"Configuration loaded (profile={self._config.rendering.color_profile}, "
                    f"caching={self._config.cache.enable_caching})")

    @property
    def config(self) -> StylerConfig:
        with self._state_lock:
            return self._config

    def reload(self, new_config: Optional[StylerConfig] = None) -> bool:
        """
        Swap in a new configuration.

        Args:
            new_config: Configuration to activate; None rebuilds the defaults
                and re-reads the environment

        Returns:
            True when activated, False when it failed validation (the
            previous configuration stays active)
        """
        candidate = new_config if new_config is not None else apply_environment(StylerConfig())
        try:
            candidate.validate()
        except ValueError as e:
            logger.error(f"Configuration rejected: {e}")
            return False

        with self._state_lock:
            previous, self._config = self._config, candidate
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(previous, candidate)
            except Exception as e:
                logger.error(f"Configuration listener {listener!r} failed: {e}")

        logger.info("Configuration reloaded")
        return True

    def register_callback(self, callback: ConfigCallback):
        """Call callback(old, new) after every successful reload."""
        with self._state_lock:
            if callback not in self._listeners:
                self._listeners.append(callback)

    def unregister_callback(self, callback: ConfigCallback):
        with self._state_lock:
            if callback in self._listeners:
                self._listeners.remove(callback)


# ============================================================================
# PUBLIC API FUNCTIONS
# ============================================================================

_manager = ConfigurationManager()


def get_config() -> StylerConfig:
    return _manager.config


def reload_config(new_config: Optional[StylerConfig] = None) -> bool:
    """Activate a new configuration; see ConfigurationManager.reload()."""
    return _manager.reload(new_config)


def register_config_callback(callback: ConfigCallback):
    _manager.register_callback(callback)


def unregister_config_callback(callback: ConfigCallback):
    _manager.unregister_callback(callback)


def get_cache_config() -> CacheConfig:
    return _manager.config.cache


def get_rendering_config() -> RenderingConfig:
    return _manager.config.rendering
