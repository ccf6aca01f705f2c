#!/usr/bin/env python3
"""
🐧 PNGN Styler - Border Composition Module
==========================================
Copyright (c) 2025 PNGN-Tec LLC

Box Drawing System
==================
Border glyph sets, side masks and box rendering around blocks of text.

Core Features
=============
- Immutable border presets (normal, rounded, thick, double, ascii, ...)
- Side masks with derived corner visibility
- Custom borders by merge, keyword construction or glyph pattern
- Width-aware box rendering with optional glyph painting (colors)
- Divider rows using junction glyphs

Corner Rules
============
A corner shows its corner glyph only when both adjacent sides are on.
With one adjacent side on it shows that side's edge glyph, with neither
it is a space. Edges whose side is off are spaces, so every row of a box
keeps the same width.

Module Interface
================
- Border / BorderSide: Glyph set and side mask
- resolve_glyph(): Glyph for a position under a side mask
- render_box(): Frame a block of lines
- merge_borders() / create_border() / border_from_pattern(): Customization
- get_border(): Preset lookup by name
"""

import logging
from dataclasses import dataclass, fields, replace
from enum import IntFlag
from typing import Callable, Dict, List, Mapping, Optional, Any

from pngn_width import get_width

# Configure logging
logger = logging.getLogger('pngn_border')


class BorderError(ValueError):
    """Raised when a border is constructed from invalid glyphs."""


class BorderSide(IntFlag):
    """Which sides of a box are drawn"""
    NONE = 0
    TOP = 1
    RIGHT = 2
    BOTTOM = 4
    LEFT = 8
    ALL = 15


def has_side(sides: int, side: int) -> bool:
    """Whether every bit of side is set in sides."""
    return (sides & side) == side


def combine_sides(*sides: int) -> BorderSide:
    """Union of side masks."""
    result = BorderSide.NONE
    for side in sides:
        result |= side
    return BorderSide(result)


# ============================================================================
# BORDER GLYPH SET
# ============================================================================

REQUIRED_GLYPHS = (
    'top', 'bottom', 'left', 'right',
    'top_left', 'top_right', 'bottom_left', 'bottom_right',
)

JUNCTION_GLYPHS = (
    'middle_left', 'middle_right', 'middle_top', 'middle_bottom', 'middle',
)


@dataclass(frozen=True)
class Border:
    """
    Glyphs of a box frame.

    The eight edge and corner glyphs are required. Junction glyphs are used
    for dividers and stay None when a style has none.
    """
    top: str
    bottom: str
    left: str
    right: str
    top_left: str
    top_right: str
    bottom_left: str
    bottom_right: str
    middle_left: Optional[str] = None
    middle_right: Optional[str] = None
    middle_top: Optional[str] = None
    middle_bottom: Optional[str] = None
    middle: Optional[str] = None

    def __post_init__(self):
        for name in REQUIRED_GLYPHS:
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise BorderError(f"Border glyph '{name}' must be a non-empty string, got {value!r}")
        for name in JUNCTION_GLYPHS:
            value = getattr(self, name)
            if value is not None and (not isinstance(value, str) or not value):
                raise BorderError(f"Border glyph '{name}' must be a non-empty string or None")

    def glyph(self, position: str) -> Optional[str]:
        """Raw glyph at a position name."""
        if position not in _POSITIONS:
            raise BorderError(f"Unknown border position: {position!r}")
        return getattr(self, position)

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


_POSITIONS = frozenset(REQUIRED_GLYPHS + JUNCTION_GLYPHS)


def uniform_border(char: str) -> Border:
    """Border drawn with one glyph everywhere."""
    return Border(*([char] * 8), middle_left=char, middle_right=char,
                  middle_top=char, middle_bottom=char, middle=char)


def _box_drawing(horizontal: str, vertical: str, corners: str,
                 junctions: Optional[str] = None) -> Border:
    """Build a border from a horizontal glyph, a vertical glyph, 4 corners and 5 junctions."""
    tl, tr, bl, br = corners
    kwargs: Dict[str, Any] = {}
    if junctions:
        kwargs = dict(zip(JUNCTION_GLYPHS, junctions))
    return Border(horizontal, horizontal, vertical, vertical, tl, tr, bl, br, **kwargs)


# ============================================================================
# PRESETS
# ============================================================================

NONE = uniform_border(" ")
NORMAL = _box_drawing("─", "│", "┌┐└┘", "├┤┬┴┼")
ROUNDED = _box_drawing("─", "│", "╭╮╰╯", "├┤┬┴┼")
THICK = _box_drawing("━", "┃", "┏┓┗┛", "┣┫┳┻╋")
DOUBLE = _box_drawing("═", "║", "╔╗╚╝", "╠╣╦╩╬")
ASCII = _box_drawing("-", "|", "++++", "+++++")
DOTTED = _box_drawing("─", "│", "····")
DASHED = _box_drawing("╌", "╎", "┌┐└┘")
BLOCK = uniform_border("█")
MINIMAL = _box_drawing(" ", " ", "┌┐└┘")
# Keeps the frame's spacing without drawing anything
HIDDEN = uniform_border(" ")

BORDERS: Dict[str, Border] = {
    'none': NONE,
    'normal': NORMAL,
    'rounded': ROUNDED,
    'thick': THICK,
    'double': DOUBLE,
    'ascii': ASCII,
    'dotted': DOTTED,
    'dashed': DASHED,
    'block': BLOCK,
    'minimal': MINIMAL,
    'hidden': HIDDEN,
}


def get_border(name: str, default: Border = NORMAL) -> Border:
    """
    Look up a preset by name (case-insensitive).

    Unknown names fall back to default.
    """
    border = BORDERS.get(name.strip().lower())
    if border is None:
        logger.debug(f"Unknown border preset {name!r}, using default")
        return default
    return border


# ============================================================================
# CUSTOMIZATION
# ============================================================================

def merge_borders(base: Border, overlay: Optional[Mapping[str, Optional[str]]] = None,
                  **overrides: Optional[str]) -> Border:
    """
    Field-by-field override of a base border.

    Args:
        base: Border providing every glyph not overridden
        overlay: Mapping of position name to glyph
        **overrides: Same as overlay, as keywords

    Returns:
        New border; unspecified fields keep the base glyphs
        (a None edge or corner glyph counts as unspecified)

    Example:
        >>> merge_borders(NORMAL, top_left="+").top_left
        '+'
    """
    changes: Dict[str, Optional[str]] = dict(overlay or {})
    changes.update(overrides)
    unknown = set(changes) - _POSITIONS
    if unknown:
        raise BorderError(f"Unknown border positions: {sorted(unknown)}")
    for name in REQUIRED_GLYPHS:
        if changes.get(name, "") is None:
            del changes[name]
    return replace(base, **changes)


def create_border(**glyphs: Optional[str]) -> Border:
    """Border from keyword glyphs; missing required glyphs become spaces."""
    unknown = set(glyphs) - _POSITIONS
    if unknown:
        raise BorderError(f"Unknown border positions: {sorted(unknown)}")
    values: Dict[str, Optional[str]] = {name: " " for name in REQUIRED_GLYPHS}
    values.update({k: v for k, v in glyphs.items() if v is not None})
    return Border(**values)


def border_from_pattern(pattern: str) -> Border:
    """
    Border from a glyph pattern.

    Eight glyphs are read as top-left, top, top-right, left, right,
    bottom-left, bottom, bottom-right. Nine or more are read as a 3x3 grid
    (row by row) whose centre glyph is ignored, e.g. "╭─╮│ │╰─╯".

    Raises:
        BorderError: If the pattern has fewer than 8 glyphs
    """
    glyphs = list(pattern)
    if len(glyphs) < 8:
        raise BorderError(f"Border pattern needs at least 8 glyphs, got {len(glyphs)}")

    if len(glyphs) == 8:
        tl, t, tr, l, r, bl, b, br = glyphs
    else:
        tl, t, tr, l, _, r, bl, b, br = glyphs[:9]

    return Border(top=t, bottom=b, left=l, right=r,
                  top_left=tl, top_right=tr, bottom_left=bl, bottom_right=br)


# ============================================================================
# RENDERING
# ============================================================================

_CORNERS = {
    # corner: (vertical side, horizontal side, vertical edge, horizontal edge)
    'top_left': (BorderSide.TOP, BorderSide.LEFT, 'left', 'top'),
    'top_right': (BorderSide.TOP, BorderSide.RIGHT, 'right', 'top'),
    'bottom_left': (BorderSide.BOTTOM, BorderSide.LEFT, 'left', 'bottom'),
    'bottom_right': (BorderSide.BOTTOM, BorderSide.RIGHT, 'right', 'bottom'),
}

_EDGES = {
    'top': BorderSide.TOP,
    'bottom': BorderSide.BOTTOM,
    'left': BorderSide.LEFT,
    'right': BorderSide.RIGHT,
}


def resolve_glyph(border: Border, position: str, sides: int = BorderSide.ALL) -> str:
    """
    Glyph to draw at a position given the active sides.

    Args:
        border: Glyph set
        position: Field name such as 'top' or 'bottom_left'
        sides: Active side mask

    Returns:
        Single glyph or a space

    Example:
        >>> resolve_glyph(NORMAL, "top_left", BorderSide.LEFT)
        '│'
    """
    if sides == BorderSide.NONE:
        return " "

    if position in _CORNERS:
        row_side, column_side, vertical_edge, horizontal_edge = _CORNERS[position]
        has_row = has_side(sides, row_side)
        has_column = has_side(sides, column_side)
        if not has_row and not has_column:
            return " "
        if not has_row:
            return getattr(border, vertical_edge)
        if not has_column:
            return getattr(border, horizontal_edge)
        return getattr(border, position)

    if position in _EDGES:
        return getattr(border, position) if has_side(sides, _EDGES[position]) else " "

    glyph = border.glyph(position)
    return glyph if glyph is not None else " "


def _identity(glyphs: str) -> str:
    return glyphs


def render_box(lines: List[str],
               border: Border,
               sides: int = BorderSide.ALL,
               width: Optional[int] = None,
               measure: Callable[[str], int] = get_width,
               paint: Optional[Callable[[str], str]] = None) -> List[str]:
    """
    Frame lines with a border.

    Args:
        lines: Content lines (may contain escape sequences)
        border: Glyph set
        sides: Active side mask
        width: Inner width (defaults to the widest line)
        measure: Display width function
        paint: Wraps each run of border glyphs, e.g. to color them

    Returns:
        Framed lines, all of display width inner width + 2; no rows for
        empty input
    """
    if not lines:
        return []

    paint = paint or _identity
    inner = width if width is not None else max(measure(line) for line in lines)

    left = paint(resolve_glyph(border, 'left', sides))
    right = paint(resolve_glyph(border, 'right', sides))

    result = []
    if has_side(sides, BorderSide.TOP):
        result.append(paint(
            resolve_glyph(border, 'top_left', sides)
            + resolve_glyph(border, 'top', sides) * inner
            + resolve_glyph(border, 'top_right', sides)
        ))

    for line in lines:
        padding = max(0, inner - measure(line))
        result.append(left + line + " " * padding + right)

    if has_side(sides, BorderSide.BOTTOM):
        result.append(paint(
            resolve_glyph(border, 'bottom_left', sides)
            + resolve_glyph(border, 'bottom', sides) * inner
            + resolve_glyph(border, 'bottom_right', sides)
        ))

    return result


def render_divider(border: Border, width: int, sides: int = BorderSide.ALL) -> str:
    """
    Horizontal divider row matching a box of the given inner width.

    Uses the middle-left/middle-right junctions where the border has them
    and the side is active, the plain vertical edges otherwise.
    """
    if has_side(sides, BorderSide.LEFT):
        left = border.middle_left or border.left
    else:
        left = " "
    if has_side(sides, BorderSide.RIGHT):
        right = border.middle_right or border.right
    else:
        right = " "
    return left + border.top * width + right
