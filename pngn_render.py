#!/usr/bin/env python3
"""
🐧 PNGN Styler - Render Module
==============================
Copyright (c) 2025 PNGN-Tec LLC

Style Rendering Pipeline
========================
Pure rendering of styled content to escape-coded terminal text. No I/O:
callers write the returned string wherever they like.

Core Features
=============
- Full box model: content -> wrap/align -> padding -> border -> margin
- Decorations and colors resolved for the terminal's color profile
- Optional per-character gradient foreground
- Border colors independent of content colors
- Content trees of styled leaves in rows and columns
- Memoized display widths and escape sequences

Escape Contract
===============
- Every styled line is <decorations><colors><content><RESET>
- Decorations are emitted as bold, faint, italic, underline, blink,
  inverse, strikethrough, hidden
- Empty content with decorations renders as <decorations><RESET>,
  empty content without decorations renders as ""
- Margins are never styled

Technical Implementation
========================
- StyleRenderer owns a WidthCalculator and an escape-sequence RenderCache
- Sequence cache keys are (style fingerprint, role, profile, dark mode)
- A lazily created default renderer backs the module-level functions

Module Interface
================
- TerminalCapability: Color profile, fixed size and light/dark mode
- StyleRenderer: render(), render_lines(), render_tree(), measure_width(),
  clear_caches(), cache_stats()
- create_renderer(): Factory function
- render() / render_tree() / measure_width() / clear_caches() /
  cache_stats(): Module-level convenience over the default renderer

Example Usage
=============
```python
from pngn_render import render, TerminalCapability
from pngn_style import Style
from pngn_color import ColorProfile

card = Style().border("rounded").padding(0, 1).foreground("hotPink").bold()
print(render("Hello, PNGN!", card, TerminalCapability(ColorProfile.ANSI256)))
```
"""

import time
import threading
import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional

from pngn_border import BorderSide, render_box
from pngn_cache import RenderCache
from pngn_color import ColorProfile, to_sequence
from pngn_config import (
    StylerConfig, get_cache_config, get_rendering_config, register_config_callback,
)
from pngn_gradient import GradientInput, paint_lines, to_gradient
from pngn_layout import (
    LayoutDirection, Node, StackNode, TextNode,
    apply_margin, apply_padding, flow_text, join_horizontal, join_vertical, pad_block,
)
from pngn_style import Style, StyleProps
from pngn_width import WidthCalculator

# Configure logging
logger = logging.getLogger('pngn_render')


class ANSI:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    FAINT = "\033[2m"
    ITALIC = "\033[3m"
    UNDERLINE = "\033[4m"
    BLINK = "\033[5m"
    INVERSE = "\033[7m"
    HIDDEN = "\033[8m"
    STRIKETHROUGH = "\033[9m"


DECORATION_SEQUENCES = (
    ('bold', ANSI.BOLD),
    ('faint', ANSI.FAINT),
    ('italic', ANSI.ITALIC),
    ('underline', ANSI.UNDERLINE),
    ('blink', ANSI.BLINK),
    ('inverse', ANSI.INVERSE),
    ('strikethrough', ANSI.STRIKETHROUGH),
    ('hidden', ANSI.HIDDEN),
)

# Sequence roles
ROLE_TEXT = "text"
ROLE_TEXT_NO_FOREGROUND = "text-nofg"
ROLE_BORDER = "border"
ROLE_DECORATIONS = "decorations"


@dataclass(frozen=True)
class TerminalCapability:
    """
    What the target terminal supports.

    Attributes:
        profile: Color capability
        width: Fixed content width overriding style widths
        height: Fixed content height overriding style heights
        dark_mode: Whether the background is dark (picks adaptive colors)
    """
    profile: ColorProfile = ColorProfile.TRUE_COLOR
    width: Optional[int] = None
    height: Optional[int] = None
    dark_mode: bool = True

    @classmethod
    def from_config(cls) -> "TerminalCapability":
        """Capability described by the current rendering configuration."""
        rendering = get_rendering_config()
        return cls(
            profile=ColorProfile.from_name(rendering.color_profile),
            width=rendering.default_width,
            height=rendering.default_height,
            dark_mode=rendering.dark_mode,
        )


class StyleRenderer:
    """
    Renders styled content to terminal text.

    Holds the width and escape-sequence caches, so reusing one renderer
    across frames avoids recomputing widths and sequences. Safe to share
    across threads.

    Attributes:
        widths: Display width calculator
        stats: Render counters
    """

    def __init__(self,
                 width_cache_size: Optional[int] = None,
                 sequence_cache_size: Optional[int] = None,
                 enable_cache: Optional[bool] = None,
                 watch_config: bool = False):
        """
        Initialize renderer.

        Args:
            width_cache_size: Width cache bound (uses config if None)
            sequence_cache_size: Sequence cache bound (uses config if None)
            enable_cache: Whether caching is enabled (uses config if None)
            watch_config: Resize caches when the configuration is reloaded
        """
        cache_config = get_cache_config()
        if sequence_cache_size is None:
            sequence_cache_size = cache_config.sequence_cache_size
        if enable_cache is None:
            enable_cache = cache_config.enable_caching

        self.widths = WidthCalculator(cache_size=width_cache_size, enable_cache=enable_cache)
        self._sequences = RenderCache(
            "sequence",
            max_size=sequence_cache_size,
            strategy=cache_config.eviction_strategy,
            enabled=enable_cache,
        )
        self._stats_lock = threading.Lock()

        self.stats = {
            'renders': 0,
            'tree_renders': 0,
            'total_render_time_ms': 0.0,
        }

        if watch_config:
            register_config_callback(self._on_config_change)

        logger.info(f"StyleRenderer initialized with sequence_cache_size={sequence_cache_size}, "
                    f"cache_enabled={enable_cache}")

    def _on_config_change(self, old_config: StylerConfig, new_config: StylerConfig):
        """Apply cache settings from a reloaded configuration."""
        cache = new_config.cache
        self.widths.cache.resize(cache.width_cache_size)
        self.widths.set_cache_enabled(cache.enable_caching)
        self._sequences.resize(cache.sequence_cache_size)
        self._sequences.set_enabled(cache.enable_caching)
        logger.info("StyleRenderer caches updated from configuration")

    # ========================================================================
    # MEASUREMENT AND SEQUENCES
    # ========================================================================

    def measure_width(self, text: str) -> int:
        """Display width of text, memoized per distinct string."""
        return self.widths.get_width(text)

    def sequence_for(self, style: Style,
                     capability: Optional[TerminalCapability] = None,
                     role: str = ROLE_TEXT) -> str:
        """
        Opening escape sequence for a style.

        Args:
            style: Style to resolve
            capability: Terminal capability (from config if None)
            role: "text" (decorations and colors), "text-nofg" (without
                foreground), "border" (border colors) or "decorations"

        Returns:
            Escape sequence, "" when the style emits nothing for the role
        """
        capability = capability or TerminalCapability.from_config()
        key = (style.fingerprint(), role, int(capability.profile), capability.dark_mode)
        return self._sequences.get_or_compute(
            key, lambda: self._build_sequence(style.resolved(), role, capability)
        )

    def _build_sequence(self, props: StyleProps, role: str, capability: TerminalCapability) -> str:
        profile = capability.profile
        dark_mode = capability.dark_mode

        if role == ROLE_BORDER:
            return (to_sequence(props.border_foreground, profile, dark_mode=dark_mode)
                    + to_sequence(props.border_background, profile, background=True, dark_mode=dark_mode))

        decorations = "".join(seq for name, seq in DECORATION_SEQUENCES if getattr(props, name))
        if role == ROLE_DECORATIONS:
            return decorations

        foreground = "" if role == ROLE_TEXT_NO_FOREGROUND else \
            to_sequence(props.foreground, profile, dark_mode=dark_mode)
        background = to_sequence(props.background, profile, background=True, dark_mode=dark_mode)
        return decorations + foreground + background

    # ========================================================================
    # RENDERING
    # ========================================================================

    def render(self, content: str,
               style: Optional[Style] = None,
               capability: Optional[TerminalCapability] = None,
               gradient: Optional[GradientInput] = None) -> str:
        """
        Render content with a style.

        Args:
            content: Text, may contain newlines
            style: Style to apply (empty style if None)
            capability: Terminal capability (from config if None)
            gradient: Per-character foreground gradient (spec, preset name
                or CSS-like string)

        Returns:
            Escape-coded terminal text
        """
        return "\n".join(self.render_lines(content, style, capability, gradient))

    def render_lines(self, content: str,
                     style: Optional[Style] = None,
                     capability: Optional[TerminalCapability] = None,
                     gradient: Optional[GradientInput] = None) -> List[str]:
        """Same as render() but returns the output lines."""
        start_time = time.time()
        style = style or Style()
        capability = capability or TerminalCapability.from_config()
        props = style.resolved()

        if content == "":
            decorations = self.sequence_for(style, capability, ROLE_DECORATIONS)
            lines = [decorations + ANSI.RESET] if decorations else [""]
        else:
            lines = self._render_content(content, style, props, capability, gradient)

        self._record_render(start_time)
        return lines

    def _render_content(self, content: str, style: Style, props: StyleProps,
                        capability: TerminalCapability,
                        gradient: Optional[GradientInput]) -> List[str]:
        if props.inline:
            # Inline text stays on one line and skips the box model
            content = content.replace("\n", " ")

        lines = flow_text(
            content, props,
            width=capability.width,
            height=capability.height,
            ellipsis=get_rendering_config().ellipsis,
            calculator=self.widths,
        )

        if props.inline:
            return self._paint(lines, style, capability, gradient)

        lines = apply_padding(lines, props.padding, self.widths)
        lines = pad_block(lines, self.widths.max_width(lines), self.widths)
        lines = self._paint(lines, style, capability, gradient)
        return self._frame(lines, style, props, capability)

    def _paint(self, lines: List[str], style: Style,
               capability: TerminalCapability,
               gradient: Optional[GradientInput]) -> List[str]:
        """Wrap content lines in decorations and colors."""
        if gradient is None:
            sequence = self.sequence_for(style, capability, ROLE_TEXT)
            if not sequence:
                return lines
            return [sequence + line + ANSI.RESET for line in lines]

        spec = to_gradient(gradient)
        prefix = self.sequence_for(style, capability, ROLE_TEXT_NO_FOREGROUND)
        painted = paint_lines(spec, lines, capability.profile,
                              dark_mode=capability.dark_mode,
                              char_width=self.widths.char_width)
        return [prefix + body + ANSI.RESET if (prefix or emitted) else body
                for body, emitted in painted]

    def _frame(self, lines: List[str], style: Style, props: StyleProps,
               capability: TerminalCapability) -> List[str]:
        """Border and margin around an already painted block."""
        sides = props.border_sides if props.border_sides is not None else BorderSide.ALL
        if props.border is not None and sides != BorderSide.NONE:
            border_sequence = self.sequence_for(style, capability, ROLE_BORDER)
            paint = None
            if border_sequence:
                paint = lambda glyphs: border_sequence + glyphs + ANSI.RESET
            lines = render_box(lines, props.border, sides,
                               width=self.widths.max_width(lines),
                               measure=self.widths.get_width,
                               paint=paint)
        return apply_margin(lines, props.margin)

    def _record_render(self, start_time: float):
        elapsed_ms = (time.time() - start_time) * 1000
        with self._stats_lock:
            self.stats['renders'] += 1
            self.stats['total_render_time_ms'] += elapsed_ms

    # ========================================================================
    # CONTENT TREES
    # ========================================================================

    def render_tree(self, node: Node,
                    capability: Optional[TerminalCapability] = None) -> str:
        """
        Render a content tree.

        Leaves use their own width/height hints; the capability supplies
        the color profile and light/dark mode. Stack styles are the parent
        style of their children.
        """
        capability = capability or TerminalCapability.from_config()
        with self._stats_lock:
            self.stats['tree_renders'] += 1
        return "\n".join(self._render_node(node, capability, None))

    def _render_node(self, node: Node, capability: TerminalCapability,
                     parent: Optional[Style]) -> List[str]:
        if isinstance(node, TextNode):
            style = node.style or Style()
            if parent is not None and style.parent is None:
                style = style.inherit(parent)
            leaf_capability = replace(capability, width=node.width, height=node.height)
            return self.render_lines(node.text, style, leaf_capability)

        if isinstance(node, StackNode):
            stack_style = node.style
            if stack_style is not None and parent is not None and stack_style.parent is None:
                stack_style = stack_style.inherit(parent)
            child_parent = stack_style if stack_style is not None else parent

            blocks = [self._render_node(child, capability, child_parent) for child in node.children]
            if node.direction is LayoutDirection.HORIZONTAL:
                lines = join_horizontal(blocks, node.align, node.gap, self.widths)
            else:
                lines = join_vertical(blocks, node.align, node.gap, self.widths)

            if stack_style is None or not lines:
                return lines
            props = stack_style.resolved()
            lines = apply_padding(lines, props.padding, self.widths)
            return self._frame(lines, stack_style, props, capability)

        raise TypeError(f"Not a content node: {node!r}")

    # ========================================================================
    # CACHE MANAGEMENT
    # ========================================================================

    def clear_caches(self):
        """Drop every cached width and escape sequence."""
        self.widths.clear_cache()
        self._sequences.clear()
        logger.debug("Render caches cleared")

    def cache_stats(self) -> Dict[str, Any]:
        """
        Combined cache statistics.

        Returns:
            Dictionary with totals (size, hits, misses, evictions,
            hit_rate) plus the width_cache and sequence_cache breakdowns
        """
        width_stats = self.widths.cache.get_stats()
        sequence_stats = self._sequences.get_stats()

        totals: Dict[str, Any] = {
            key: width_stats[key] + sequence_stats[key]
            for key in ('size', 'hits', 'misses', 'evictions')
        }
        lookups = totals['hits'] + totals['misses']
        totals['hit_rate'] = totals['hits'] / lookups if lookups else 0.0
        totals['width_cache'] = width_stats
        totals['sequence_cache'] = sequence_stats
        return totals

    def get_stats(self) -> Dict[str, Any]:
        """Render counters plus cache statistics."""
        with self._stats_lock:
            stats: Dict[str, Any] = dict(self.stats)
        if stats['renders']:
            stats['avg_render_time_ms'] = stats['total_render_time_ms'] / stats['renders']
        else:
            stats['avg_render_time_ms'] = 0.0
        stats['caches'] = self.cache_stats()
        return stats


# ============================================================================
# FACTORY FUNCTION
# ============================================================================

def create_renderer(width_cache_size: Optional[int] = None,
                    sequence_cache_size: Optional[int] = None,
                    enable_cache: Optional[bool] = None) -> StyleRenderer:
    """Factory function for renderer creation"""
    return StyleRenderer(width_cache_size, sequence_cache_size, enable_cache)


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

_default_renderer = None
_renderer_lock = threading.Lock()


def get_renderer() -> StyleRenderer:
    """Shared renderer behind the module-level functions, created on first use."""
    global _default_renderer

    if _default_renderer is None:
        with _renderer_lock:
            if _default_renderer is None:
                _default_renderer = StyleRenderer(watch_config=True)

    return _default_renderer


def render(content: str,
           style: Optional[Style] = None,
           capability: Optional[TerminalCapability] = None,
           gradient: Optional[GradientInput] = None) -> str:
    """
    Render content with the default renderer.

    Example:
        >>> render("", Style().bold(), TerminalCapability())
        '\\x1b[1m\\x1b[0m'
    """
    return get_renderer().render(content, style, capability, gradient)


def render_tree(node: Node, capability: Optional[TerminalCapability] = None) -> str:
    """Render a content tree with the default renderer."""
    return get_renderer().render_tree(node, capability)


def measure_width(text: str) -> int:
    """Display width with the default renderer's cache."""
    return get_renderer().measure_width(text)


def clear_caches():
    """Clear the default renderer's caches."""
    if _default_renderer is not None:
        _default_renderer.clear_caches()


def cache_stats() -> Dict[str, Any]:
    """Cache statistics of the default renderer (empty before first use)."""
    if _default_renderer is not None:
        return _default_renderer.cache_stats()
    return {}
