#!/usr/bin/env python3
"""
🐧 PNGN Styler - Gradient Engine Module
=======================================
Copyright (c) 2025 PNGN-Tec LLC

Multi-Stop Color Gradients
==========================
Gradients are ordered color stops with a direction and an easing curve.
They color text character by character, fill background blocks and paint
border glyph runs.

Core Features
=============
- Multi-stop interpolation with linear, ease-in, ease-out and ease-in-out
- Horizontal, vertical, diagonal and radial directions
- Per-character coloring of single lines and full 2-D blocks
- Shift, scale, reverse, rotate, blend and optimize operations
- Time-driven animated and pulsing variants (the caller supplies time)
- Presets: rainbow, sunset, ocean, forest, fire, pastel, monochrome
- CSS-like linear-gradient() / radial-gradient() parsing and formatting

Technical Implementation
========================
- Cell positions are computed as numpy grids for the whole block
- Segment lookup, easing and channel interpolation are vectorized
- Non-RGB stop colors are approximated through fixed RGB tables
- Half-up rounding so results match scalar interpolation exactly

Position Rules
==============
- horizontal: column / (width - 1)
- vertical: row / (height - 1)
- diagonal-down: (column + row) / (width + height - 2)
- diagonal-up: (column + (height - 1 - row)) / (width + height - 2)
- radial: distance from center / radius, clamped to [0, 1]

Single-line text treats vertical and diagonal gradients as horizontal.

Example Usage
=============
```python
from pngn_gradient import rainbow, apply_to_text
from pngn_color import ColorProfile

print(apply_to_text(rainbow(), "Hello gradients", ColorProfile.TRUE_COLOR))
```
"""

import math
import re
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from pngn_color import (
    Color, ColorError, ColorInput, ColorProfile, Rgb, WHITE,
    RED, YELLOW, GREEN, CYAN, BLUE, MAGENTA,
    parse_color, rgb_to_hex, to_rgb, to_sequence,
)
from pngn_width import get_default_calculator

# Configure logging
logger = logging.getLogger('pngn_gradient')

RESET = "\x1b[0m"


# ============================================================================
# TYPES
# ============================================================================

class GradientDirection(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    DIAGONAL_DOWN = "diagonal-down"
    DIAGONAL_UP = "diagonal-up"
    RADIAL = "radial"


class Easing(Enum):
    LINEAR = "linear"
    EASE_IN = "ease-in"
    EASE_OUT = "ease-out"
    EASE_IN_OUT = "ease-in-out"


@dataclass(frozen=True)
class GradientStop:
    """Color at a position in [0, 1] (clamped)."""
    position: float
    color: Color

    def __post_init__(self):
        object.__setattr__(self, "position", min(1.0, max(0.0, float(self.position))))
        if not isinstance(self.color, Color):
            object.__setattr__(self, "color", parse_color(self.color))


@dataclass(frozen=True)
class GradientSpec:
    """
    Gradient definition.

    Stops are sorted by position on construction. For radial gradients
    center is in normalized block coordinates and radius None means the
    distance from center to the farthest corner.
    """
    stops: Tuple[GradientStop, ...]
    direction: GradientDirection = GradientDirection.HORIZONTAL
    easing: Easing = Easing.LINEAR
    center: Tuple[float, float] = (0.5, 0.5)
    radius: Optional[float] = None

    def __post_init__(self):
        stops = tuple(s if isinstance(s, GradientStop) else GradientStop(*s) for s in self.stops)
        object.__setattr__(self, "stops", tuple(sorted(stops, key=lambda s: s.position)))
        object.__setattr__(self, "direction", GradientDirection(self.direction))
        object.__setattr__(self, "easing", Easing(self.easing))
        if self.radius is not None and self.radius <= 0:
            raise ValueError("Gradient radius must be positive")

    def color_at(self, position: float, dark_mode: bool = True) -> Color:
        return color_at(self, position, dark_mode)


# ============================================================================
# EASING AND INTERPOLATION
# ============================================================================

def ease(t: float, easing: Easing = Easing.LINEAR) -> float:
    """
    Apply an easing curve to t in [0, 1].

    Example:
        >>> ease(0.25, Easing.EASE_IN_OUT)
        0.125
    """
    return float(_ease_array(np.array([t], dtype=float), easing)[0])


def _ease_array(t: np.ndarray, easing: Easing) -> np.ndarray:
    if easing is Easing.EASE_IN:
        return t * t
    if easing is Easing.EASE_OUT:
        return 1 - (1 - t) * (1 - t)
    if easing is Easing.EASE_IN_OUT:
        return np.where(t < 0.5, 2 * t * t, 1 - 2 * (1 - t) * (1 - t))
    return t


def colors_at(spec: GradientSpec, positions: Sequence[float], dark_mode: bool = True) -> List[Color]:
    """
    Gradient colors at many positions at once.

    Adaptive stops are interpolated through the member dark_mode selects.

    Positions at or before the first stop get the first stop's color and
    positions at or after the last stop get the last stop's color, in their
    original variant. Everything in between is an interpolated Rgb.
    """
    p = np.clip(np.asarray(positions, dtype=float).ravel(), 0.0, 1.0)
    stops = spec.stops

    if not stops:
        return [WHITE] * p.size
    if len(stops) == 1:
        return [stops[0].color] * p.size

    stop_positions = np.array([s.position for s in stops], dtype=float)
    stop_rgb = np.array([to_rgb(s.color, dark_mode) for s in stops], dtype=float)
    last = len(stops) - 1

    # Segment i spans stops i and i + 1
    segment = np.clip(np.searchsorted(stop_positions, p, side='right') - 1, 0, last - 1)
    start = stop_positions[segment]
    span = stop_positions[segment + 1] - start
    local = np.where(span > 0, (p - start) / np.where(span > 0, span, 1.0), 1.0)
    eased = _ease_array(np.clip(local, 0.0, 1.0), spec.easing)

    channels = stop_rgb[segment] + (stop_rgb[segment + 1] - stop_rgb[segment]) * eased[:, np.newaxis]
    channels = np.clip(np.floor(channels + 0.5), 0, 255).astype(int).tolist()

    first_pos = stop_positions[0]
    last_pos = stop_positions[last]
    memo: Dict[Tuple[int, int, int], Color] = {}
    result: List[Color] = []
    for value, rgb in zip(p.tolist(), channels):
        if value <= first_pos:
            result.append(stops[0].color)
        elif value >= last_pos:
            result.append(stops[last].color)
        else:
            key = (rgb[0], rgb[1], rgb[2])
            color = memo.get(key)
            if color is None:
                color = memo[key] = Rgb(*key)
            result.append(color)
    return result


def color_at(spec: GradientSpec, position: float, dark_mode: bool = True) -> Color:
    """
    Gradient color at a position in [0, 1] (clamped).

    An empty gradient yields white.
    """
    return colors_at(spec, [position], dark_mode)[0]


# ============================================================================
# POSITION GRIDS
# ============================================================================

def position_grid(spec: GradientSpec, width: int, height: int) -> np.ndarray:
    """
    Gradient position of every cell of a width x height block.

    Returns:
        Array of shape (height, width) with values in [0, 1]
    """
    if width <= 0 or height <= 0:
        return np.zeros((max(height, 0), max(width, 0)), dtype=float)

    x, y = np.meshgrid(np.arange(width, dtype=float), np.arange(height, dtype=float))
    direction = spec.direction

    if direction is GradientDirection.HORIZONTAL:
        return x / (width - 1) if width > 1 else np.zeros_like(x)

    if direction is GradientDirection.VERTICAL:
        return y / (height - 1) if height > 1 else np.zeros_like(y)

    if direction in (GradientDirection.DIAGONAL_DOWN, GradientDirection.DIAGONAL_UP):
        denominator = width + height - 2
        if denominator <= 0:
            return np.zeros_like(x)
        if direction is GradientDirection.DIAGONAL_DOWN:
            return (x + y) / denominator
        return (x + (height - 1 - y)) / denominator

    # Radial
    cx, cy = spec.center
    nx = x / (width - 1) if width > 1 else np.full_like(x, cx)
    ny = y / (height - 1) if height > 1 else np.full_like(y, cy)
    radius = spec.radius
    if radius is None:
        radius = max(math.hypot(cx - corner_x, cy - corner_y)
                     for corner_x in (0.0, 1.0) for corner_y in (0.0, 1.0))
        radius = radius or 1.0
    return np.clip(np.hypot(nx - cx, ny - cy) / radius, 0.0, 1.0)


def text_gradient_colors(spec: GradientSpec, text: str,
                         preserve_spaces: bool = False,
                         dark_mode: bool = True) -> List[Optional[Color]]:
    """
    Color for every character of a single line.

    Character i sits at i / (n - 1). Vertical and diagonal gradients behave
    like horizontal ones on a single line; radial gradients use the
    distance along the line. Spaces get None unless preserve_spaces.
    """
    chars = list(text)
    if not chars:
        return []

    if spec.direction is GradientDirection.RADIAL:
        positions = position_grid(spec, len(chars), 1)[0]
    else:
        positions = position_grid(replace(spec, direction=GradientDirection.HORIZONTAL), len(chars), 1)[0]

    colors = colors_at(spec, positions, dark_mode)
    return [None if (ch == " " and not preserve_spaces) else color
            for ch, color in zip(chars, colors)]


def _paint(chars: Sequence[str], colors: Sequence[Optional[Color]],
           profile: ColorProfile, dark_mode: bool, background: bool = False) -> Tuple[str, bool]:
    """Prefix characters with color sequences, emitting only on change."""
    out = []
    emitted = False
    previous = None
    for ch, color in zip(chars, colors):
        if color is not None:
            sequence = to_sequence(color, profile, background=background, dark_mode=dark_mode)
            if sequence and sequence != previous:
                out.append(sequence)
                previous = sequence
                emitted = True
        out.append(ch)
    return "".join(out), emitted


# ============================================================================
# APPLICATION
# ============================================================================

def apply_to_text(spec: GradientSpec, text: str,
                  profile: ColorProfile = ColorProfile.TRUE_COLOR,
                  preserve_spaces: bool = False,
                  dark_mode: bool = True) -> str:
    """
    Color text character by character.

    Multi-line text is colored over its full 2-D block.

    Returns:
        Escape-coded text ending in a reset when any color was emitted
    """
    if "\n" in text:
        return "\n".join(apply_to_lines(spec, text.split("\n"), profile, preserve_spaces, dark_mode))

    body, emitted = _paint(list(text), text_gradient_colors(spec, text, preserve_spaces, dark_mode),
                           profile, dark_mode)
    return body + RESET if emitted else body


def paint_lines(spec: GradientSpec, lines: List[str],
                profile: ColorProfile = ColorProfile.TRUE_COLOR,
                preserve_spaces: bool = False,
                dark_mode: bool = True,
                char_width: Optional[Callable[[str], int]] = None) -> List[Tuple[str, bool]]:
    """
    Color a block of lines over its full 2-D extent.

    Column positions are display columns, so a wide character takes the
    color of the column it starts in.

    Returns:
        (painted line without trailing reset, whether any color was
        emitted) for every line
    """
    if not lines:
        return []

    if len(lines) == 1 and spec.direction is not GradientDirection.RADIAL:
        # A single line runs along its width whatever the direction
        spec = replace(spec, direction=GradientDirection.HORIZONTAL)

    char_width = char_width or get_default_calculator().char_width
    widths = [sum(char_width(ch) for ch in line) for line in lines]
    block_width = max(max(widths), 1)

    grid = position_grid(spec, block_width, len(lines))
    cell_colors = colors_at(spec, grid.ravel(), dark_mode)

    painted = []
    for row, line in enumerate(lines):
        colors: List[Optional[Color]] = []
        column = 0
        for ch in line:
            if ch == " " and not preserve_spaces:
                colors.append(None)
            else:
                colors.append(cell_colors[row * block_width + min(column, block_width - 1)])
            column += char_width(ch)
        painted.append(_paint(list(line), colors, profile, dark_mode))
    return painted


def apply_to_lines(spec: GradientSpec, lines: List[str],
                   profile: ColorProfile = ColorProfile.TRUE_COLOR,
                   preserve_spaces: bool = False,
                   dark_mode: bool = True) -> List[str]:
    """Color a block of lines; each colored line ends in a reset."""
    return [body + RESET if emitted else body
            for body, emitted in paint_lines(spec, lines, profile, preserve_spaces, dark_mode)]


def background_gradient(spec: GradientSpec, width: int, height: int,
                        char: str = "█",
                        profile: ColorProfile = ColorProfile.TRUE_COLOR,
                        background: bool = False,
                        dark_mode: bool = True) -> List[str]:
    """
    Fill a width x height block with a gradient.

    Args:
        char: Fill character
        background: Color the cell background instead of the character

    Returns:
        One escape-coded string per row
    """
    if width <= 0 or height <= 0:
        return []

    grid = position_grid(spec, width, height)
    cell_colors = colors_at(spec, grid.ravel(), dark_mode)

    rows = []
    for row in range(height):
        colors = cell_colors[row * width:(row + 1) * width]
        body, emitted = _paint([char] * width, colors, profile, dark_mode, background)
        rows.append(body + RESET if emitted else body)
    return rows


def border_gradient(spec: GradientSpec, glyphs: str, dark_mode: bool = True) -> List[Color]:
    """Color for each glyph of a border run, first to last."""
    if not glyphs:
        return []
    count = len(glyphs)
    positions = [i / (count - 1) if count > 1 else 0.0 for i in range(count)]
    return colors_at(spec, positions, dark_mode)


# ============================================================================
# CONSTRUCTION AND TRANSFORMATION
# ============================================================================

def create_gradient(colors: Sequence[ColorInput],
                    direction: GradientDirection = GradientDirection.HORIZONTAL,
                    easing: Easing = Easing.LINEAR) -> GradientSpec:
    """
    Gradient with evenly spaced stops.

    No colors gives a single white stop, one color a single stop.
    """
    parsed = [parse_color(c) for c in colors]
    if not parsed:
        stops = (GradientStop(0.0, WHITE),)
    elif len(parsed) == 1:
        stops = (GradientStop(0.0, parsed[0]),)
    else:
        stops = tuple(GradientStop(i / (len(parsed) - 1), c) for i, c in enumerate(parsed))
    return GradientSpec(stops, direction, easing)


def shift_gradient(spec: GradientSpec, offset: float) -> GradientSpec:
    """Move every stop by offset, clamped to [0, 1] without wrap-around."""
    return replace(spec, stops=tuple(GradientStop(s.position + offset, s.color) for s in spec.stops))


def scale_gradient(spec: GradientSpec, start: float, end: float) -> GradientSpec:
    """Map stop positions from [0, 1] onto [start, end]."""
    span = end - start
    return replace(spec, stops=tuple(GradientStop(start + s.position * span, s.color) for s in spec.stops))


def reverse_gradient(spec: GradientSpec) -> GradientSpec:
    """Mirror stop positions."""
    return replace(spec, stops=tuple(GradientStop(1.0 - s.position, s.color) for s in spec.stops))


def rotate_gradient(spec: GradientSpec, angle: float) -> GradientSpec:
    """
    Turn a linear gradient by angle degrees (screen convention, snapped to 45).

    Radial gradients have no orientation and come back unchanged.

    Example:
        >>> rotate_gradient(create_gradient(["red", "blue"]), 90).direction
        <GradientDirection.VERTICAL: 'vertical'>
    """
    if spec.direction is GradientDirection.RADIAL:
        return spec
    direction, reversed_stops = _ANGLE_DIRECTIONS[_snap_angle(_DIRECTION_ANGLES[spec.direction] + angle)]
    rotated = replace(spec, direction=direction)
    return reverse_gradient(rotated) if reversed_stops else rotated


def animated_gradient(spec: GradientSpec, time: float, speed: float = 1.0) -> GradientSpec:
    """Gradient shifted by (time * speed) mod 1."""
    return shift_gradient(spec, (time * speed) % 1)


def pulsing_gradient(spec: GradientSpec, time: float, intensity: float = 0.3) -> GradientSpec:
    """
    Gradient whose stop colors brighten and dim with sin(time).

    Every channel is scaled by sin(time) * intensity + 1 and clamped.
    """
    pulse = math.sin(time) * intensity + 1
    stops = []
    for stop in spec.stops:
        r, g, b = to_rgb(stop.color)
        scaled = (max(0, min(255, int(math.floor(c * pulse + 0.5)))) for c in (r, g, b))
        stops.append(GradientStop(stop.position, Rgb(*scaled)))
    return replace(spec, stops=tuple(stops))


def optimize_gradient(spec: GradientSpec) -> GradientSpec:
    """Drop stops that repeat the previous stop's color."""
    kept: List[GradientStop] = []
    for stop in spec.stops:
        if kept and to_rgb(kept[-1].color) == to_rgb(stop.color):
            continue
        kept.append(stop)
    return replace(spec, stops=tuple(kept))


def blend_gradients(first: GradientSpec, second: GradientSpec, factor: float) -> GradientSpec:
    """
    Mix two gradients.

    Stops are placed at the union of both stop positions (plus 0 and 1);
    factor 0 reproduces first and 1 reproduces second.
    """
    factor = min(1.0, max(0.0, factor))
    positions = sorted({0.0, 1.0} | {s.position for s in first.stops} | {s.position for s in second.stops})
    colors_a = colors_at(first, positions)
    colors_b = colors_at(second, positions)
    stops = []
    for position, a, b in zip(positions, colors_a, colors_b):
        mixed = tuple(int(math.floor(x + (y - x) * factor + 0.5)) for x, y in zip(to_rgb(a), to_rgb(b)))
        stops.append(GradientStop(position, Rgb(*mixed)))
    return replace(first, stops=tuple(stops))


# ============================================================================
# PRESETS
# ============================================================================

def rainbow(direction: GradientDirection = GradientDirection.HORIZONTAL) -> GradientSpec:
    return GradientSpec((
        GradientStop(0.0, RED), GradientStop(0.16, YELLOW), GradientStop(0.33, GREEN),
        GradientStop(0.5, CYAN), GradientStop(0.66, BLUE), GradientStop(0.83, MAGENTA),
        GradientStop(1.0, RED),
    ), direction)


def sunset(direction: GradientDirection = GradientDirection.HORIZONTAL) -> GradientSpec:
    return GradientSpec((
        GradientStop(0.0, Rgb(255, 94, 77)),
        GradientStop(0.5, Rgb(255, 154, 0)),
        GradientStop(1.0, Rgb(255, 206, 84)),
    ), direction, Easing.EASE_IN_OUT)


def ocean(direction: GradientDirection = GradientDirection.VERTICAL) -> GradientSpec:
    return GradientSpec((
        GradientStop(0.0, Rgb(64, 224, 208)),
        GradientStop(0.5, Rgb(70, 130, 180)),
        GradientStop(1.0, Rgb(25, 25, 112)),
    ), direction, Easing.EASE_IN_OUT)


def forest(direction: GradientDirection = GradientDirection.VERTICAL) -> GradientSpec:
    return GradientSpec((
        GradientStop(0.0, Rgb(34, 139, 34)),
        GradientStop(0.5, Rgb(0, 100, 0)),
        GradientStop(1.0, Rgb(85, 107, 47)),
    ), direction)


def fire(direction: GradientDirection = GradientDirection.VERTICAL) -> GradientSpec:
    return GradientSpec((
        GradientStop(0.0, Rgb(255, 255, 0)),
        GradientStop(0.4, Rgb(255, 165, 0)),
        GradientStop(0.7, Rgb(255, 69, 0)),
        GradientStop(1.0, Rgb(139, 0, 0)),
    ), direction, Easing.EASE_OUT)


def pastel(direction: GradientDirection = GradientDirection.HORIZONTAL) -> GradientSpec:
    return GradientSpec((
        GradientStop(0.0, Rgb(255, 182, 193)),
        GradientStop(0.25, Rgb(221, 160, 221)),
        GradientStop(0.5, Rgb(173, 216, 230)),
        GradientStop(0.75, Rgb(144, 238, 144)),
        GradientStop(1.0, Rgb(255, 255, 224)),
    ), direction, Easing.EASE_IN_OUT)


def monochrome(start: ColorInput, end: ColorInput,
               direction: GradientDirection = GradientDirection.HORIZONTAL) -> GradientSpec:
    return GradientSpec((
        GradientStop(0.0, parse_color(start)),
        GradientStop(1.0, parse_color(end)),
    ), direction)


PRESETS: Dict[str, Callable[..., GradientSpec]] = {
    'rainbow': rainbow,
    'sunset': sunset,
    'ocean': ocean,
    'forest': forest,
    'fire': fire,
    'pastel': pastel,
}

# Used when a gradient string cannot be understood
DEFAULT_GRADIENT = GradientSpec((GradientStop(0.0, WHITE),))


# ============================================================================
# CSS-LIKE GRADIENT STRINGS
# ============================================================================

_LINEAR_PATTERN = re.compile(r'^linear-gradient\((.*)\)$', re.IGNORECASE | re.DOTALL)
_RADIAL_PATTERN = re.compile(r'^radial-gradient\((.*)\)$', re.IGNORECASE | re.DOTALL)
_ANGLE_PATTERN = re.compile(r'^(-?\d+(?:\.\d+)?)deg$', re.IGNORECASE)
_CIRCLE_PATTERN = re.compile(
    r'^circle(?:\s+at\s+(?:(center)|(\d+(?:\.\d+)?)%(?:\s+(\d+(?:\.\d+)?)%)?))?$',
    re.IGNORECASE,
)
_STOP_PATTERN = re.compile(r'^(.*?)(?:\s+(-?\d+(?:\.\d+)?)%)?$', re.DOTALL)

# Screen convention: 0deg runs left to right, 90deg top to bottom
_KEYWORD_ANGLES = {
    'to right': 0.0, 'to bottom right': 45.0, 'to bottom': 90.0, 'to bottom left': 135.0,
    'to left': 180.0, 'to top left': 225.0, 'to top': 270.0, 'to top right': 315.0,
}

# Snapped angle -> (direction, stops reversed)
_ANGLE_DIRECTIONS = {
    0: (GradientDirection.HORIZONTAL, False),
    45: (GradientDirection.DIAGONAL_DOWN, False),
    90: (GradientDirection.VERTICAL, False),
    135: (GradientDirection.DIAGONAL_UP, True),
    180: (GradientDirection.HORIZONTAL, True),
    225: (GradientDirection.DIAGONAL_DOWN, True),
    270: (GradientDirection.VERTICAL, True),
    315: (GradientDirection.DIAGONAL_UP, False),
}

_DIRECTION_ANGLES = {
    GradientDirection.HORIZONTAL: 0,
    GradientDirection.DIAGONAL_DOWN: 45,
    GradientDirection.VERTICAL: 90,
    GradientDirection.DIAGONAL_UP: 315,
}


def _split_arguments(body: str) -> List[str]:
    """Split on commas outside parentheses."""
    parts = []
    depth = 0
    current = []
    for ch in body:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        if ch == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
    parts.append("".join(current).strip())
    return [p for p in parts if p]


def _parse_stops(parts: List[str]) -> Tuple[GradientStop, ...]:
    """Parse '<color> [<n>%]' items; missing positions are spread evenly."""
    parsed = []
    for part in parts:
        match = _STOP_PATTERN.match(part)
        color_text, percent = match.group(1).strip(), match.group(2)
        color = parse_color(color_text)
        position = float(percent) / 100 if percent is not None else None
        parsed.append((position, color))

    count = len(parsed)
    stops = []
    for index, (position, color) in enumerate(parsed):
        if position is None:
            position = index / (count - 1) if count > 1 else 0.0
        stops.append(GradientStop(position, color))
    return tuple(stops)


def _snap_angle(angle: float) -> int:
    return int(math.floor((angle % 360) / 45 + 0.5)) * 45 % 360


def _parse(text: str) -> Optional[GradientSpec]:
    """Parse a gradient string, None when the syntax is not recognized."""
    value = text.strip()

    linear = _LINEAR_PATTERN.match(value)
    if linear:
        parts = _split_arguments(linear.group(1))
        angle = 0.0
        if parts:
            head = parts[0].lower()
            angle_match = _ANGLE_PATTERN.match(head)
            if angle_match:
                angle = float(angle_match.group(1))
                parts = parts[1:]
            elif head in _KEYWORD_ANGLES:
                angle = _KEYWORD_ANGLES[head]
                parts = parts[1:]
        if not parts:
            return None
        direction, reversed_stops = _ANGLE_DIRECTIONS[_snap_angle(angle)]
        spec = GradientSpec(_parse_stops(parts), direction)
        return reverse_gradient(spec) if reversed_stops else spec

    radial = _RADIAL_PATTERN.match(value)
    if radial:
        parts = _split_arguments(radial.group(1))
        center = (0.5, 0.5)
        if parts:
            circle = _CIRCLE_PATTERN.match(parts[0])
            if circle:
                parts = parts[1:]
                if circle.group(2) is not None:
                    x = float(circle.group(2)) / 100
                    y = float(circle.group(3)) / 100 if circle.group(3) is not None else x
                    center = (min(1.0, max(0.0, x)), min(1.0, max(0.0, y)))
        if not parts:
            return None
        return GradientSpec(_parse_stops(parts), GradientDirection.RADIAL, center=center)

    return None


def parse_gradient_string(text: str) -> GradientSpec:
    """
    Parse a CSS-like gradient string.

    Supports linear-gradient(<angle>deg | to <side>, stops...) and
    radial-gradient(circle [at X% Y%], stops...). Stops are a color
    (name, hex, rgb(), hsl()) with an optional percentage. Linear angles
    snap to the nearest 45 degrees.

    Unrecognized syntax falls back to DEFAULT_GRADIENT (plain white).
    """
    try:
        spec = _parse(text) if isinstance(text, str) else None
    except ColorError as e:
        logger.warning(f"Invalid color in gradient {text!r}: {e}")
        spec = None

    if spec is None:
        logger.warning(f"Unrecognized gradient syntax {text!r}, using default gradient")
        return DEFAULT_GRADIENT
    return spec


def validate_gradient_syntax(text: str) -> bool:
    """Whether a gradient string parses without falling back."""
    try:
        return isinstance(text, str) and _parse(text) is not None
    except ColorError:
        return False


def convert_gradient_format(spec: GradientSpec) -> str:
    """
    Format a gradient as a CSS-like string.

    Example:
        >>> convert_gradient_format(create_gradient(["red", "#0000ff"]))
        'linear-gradient(0deg, #800000 0%, #0000ff 100%)'
    """
    stops = ", ".join(
        f"{rgb_to_hex(*to_rgb(stop.color))} {int(math.floor(stop.position * 100 + 0.5))}%"
        for stop in spec.stops
    )
    if spec.direction is GradientDirection.RADIAL:
        cx, cy = spec.center
        return (f"radial-gradient(circle at {int(math.floor(cx * 100 + 0.5))}% "
                f"{int(math.floor(cy * 100 + 0.5))}%, {stops})")
    return f"linear-gradient({_DIRECTION_ANGLES[spec.direction]}deg, {stops})"


GradientInput = Union[GradientSpec, str]


def to_gradient(value: GradientInput) -> GradientSpec:
    """Accept a GradientSpec, a preset name or a CSS-like string."""
    if isinstance(value, GradientSpec):
        return value
    preset = PRESETS.get(value.strip().lower())
    if preset is not None:
        return preset()
    return parse_gradient_string(value)
