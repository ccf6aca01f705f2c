#!/usr/bin/env python3
"""
🐧 PNGN Styler - Block Effects Module
=====================================
Copyright (c) 2025 PNGN-Tec LLC

Static Block Effects
====================
Deterministic transforms over a block of rendered lines and over single
colors. Every effect is a pure function of its inputs, so results can be
cached or composed with the renderer's output freely.

Core Features
=============
- Drop shadow and inner shadow using shade glyphs
- Glow halo computed from a distance field around the content
- Pattern fills (dots, stripes, checkerboard, diagonal, cross, wave)
- Styled border glyph sets with solid color or gradient painting
- Layer blending of colors (overlay, multiply, screen, dodge, burn)

Technical Implementation
========================
- Glow distances and pattern masks are computed as numpy grids
- Layer blending runs on numpy channel vectors with half-up rounding
- Shadow runs are measured in display columns (escape sequences ignored)
- Glow, inner shadow and pattern effects work one cell per character on
  plain lines

Example Usage
=============
```python
from pngn_effects import GlowConfig, glow

for line in glow(["PNGN"], GlowConfig(radius=2)):
    print(line)
```
"""

import math
import logging
from dataclasses import dataclass
from enum import Enum
from itertools import groupby
from typing import List, Optional, Sequence

import numpy as np

from pngn_border import Border, BorderSide, create_border, render_box
from pngn_color import (
    BRIGHT_BLACK, WHITE, Color, ColorProfile, NoColor, Rgb,
    parse_color, to_rgb, to_sequence,
)
from pngn_gradient import GradientInput, border_gradient, to_gradient
from pngn_width import get_width

# Configure logging
logger = logging.getLogger('pngn_effects')

RESET = "\x1b[0m"

SHADE_DARK = "▓"
SHADE_MEDIUM = "▒"
SHADE_LIGHT = "░"
FULL_BLOCK = "█"


def _paint_run(run: str, color: Optional[Color], profile: Optional[ColorProfile],
               dark_mode: bool) -> str:
    """Wrap a glyph run in one color, or return it unchanged."""
    if not run or color is None or profile is None:
        return run
    sequence = to_sequence(color, profile, dark_mode=dark_mode)
    return f"{sequence}{run}{RESET}" if sequence else run


# ============================================================================
# SHADOWS
# ============================================================================

@dataclass(frozen=True)
class ShadowConfig:
    """
    Shadow placement.

    Attributes:
        offset_x: Columns the shadow is shifted right (negative: left)
        offset_y: Rows the shadow extends below (negative: above)
        color: Shade color, used when a profile is given
        glyph: Shade character
    """
    offset_x: int = 1
    offset_y: int = 1
    color: Color = BRIGHT_BLACK
    glyph: str = SHADE_DARK


def _shadow_line(line: str, config: ShadowConfig, profile: Optional[ColorProfile],
                 dark_mode: bool) -> str:
    width = get_width(line)
    if config.offset_x >= 0:
        lead, shade = " " * config.offset_x, width
    else:
        lead, shade = "", max(0, width + config.offset_x)
    return lead + _paint_run(config.glyph * shade, config.color, profile, dark_mode)


def drop_shadow(lines: Sequence[str],
                config: ShadowConfig = ShadowConfig(),
                profile: Optional[ColorProfile] = None,
                dark_mode: bool = True) -> List[str]:
    """
    Cast a shade block beside the content.

    Each content row has a shadow row of the same display width shifted by
    offset_x. With offset_y > 0 the first offset_y shadow rows follow the
    content; with offset_y < 0 the shadow rows after the first -offset_y
    precede it. offset_y == 0 leaves the block unchanged.

    Args:
        lines: Content block
        config: Shadow placement
        profile: Color the shade when given

    Returns:
        New block with shadow rows
    """
    content = list(lines)
    shadow = [_shadow_line(line, config, profile, dark_mode) for line in content]

    if config.offset_y > 0:
        return content + shadow[:config.offset_y]
    if config.offset_y < 0:
        return shadow[-config.offset_y:] + content
    return content


def inner_shadow(lines: Sequence[str], glyph: str = SHADE_DARK) -> List[str]:
    """Replace the outermost cells of the block with a shade glyph."""
    content = list(lines)
    last_row = len(content) - 1
    result = []
    for y, line in enumerate(content):
        if y in (0, last_row):
            result.append(glyph * len(line))
            continue
        result.append("".join(
            glyph if x in (0, len(line) - 1) else ch
            for x, ch in enumerate(line)
        ))
    return result


# ============================================================================
# GLOW
# ============================================================================

@dataclass(frozen=True)
class GlowConfig:
    """Halo radius in cells, color and strength (0..1)."""
    radius: float = 2.0
    color: Color = WHITE
    intensity: float = 1.0

    def __post_init__(self):
        if self.radius <= 0:
            raise ValueError(f"Glow radius must be positive, got {self.radius}")


def glow(lines: Sequence[str],
         config: GlowConfig = GlowConfig(),
         profile: Optional[ColorProfile] = None,
         dark_mode: bool = True) -> List[str]:
    """
    Surround content with a halo of shade glyphs.

    The block grows by ceil(radius) cells on every side. A cell at distance
    d from the nearest non-space character gets strength
    (1 - d / radius) * intensity: above 0.7 a dark shade, above 0.4 a
    medium shade, above 0.1 a light shade, otherwise a space. Content
    characters are drawn on top of the halo.

    Returns:
        The enlarged block; the halo is colored when a profile is given
    """
    content = list(lines)
    pad = int(math.ceil(config.radius))
    height = len(content)
    width = max((len(line) for line in content), default=0)
    out_height, out_width = height + 2 * pad, width + 2 * pad

    mask = np.zeros((height, width), dtype=bool)
    for y, line in enumerate(content):
        for x, ch in enumerate(line):
            mask[y, x] = ch != " "
    points = np.argwhere(mask)

    if points.size == 0:
        logger.debug("Glow requested for a blank block")
        return [" " * out_width for _ in range(out_height)]

    ys, xs = np.mgrid[-pad:height + pad, -pad:width + pad]
    distance = np.hypot(ys[..., np.newaxis] - points[:, 0],
                        xs[..., np.newaxis] - points[:, 1]).min(axis=2)
    strength = np.where(distance <= config.radius,
                        np.clip(1 - distance / config.radius, 0.0, None) * config.intensity,
                        0.0)
    halo = np.full(strength.shape, " ", dtype="<U1")
    halo[strength > 0.1] = SHADE_LIGHT
    halo[strength > 0.4] = SHADE_MEDIUM
    halo[strength > 0.7] = SHADE_DARK

    result = []
    for row in range(out_height):
        cells = list(halo[row])
        y = row - pad
        if 0 <= y < height:
            for x, ch in enumerate(content[y]):
                if ch != " ":
                    cells[x + pad] = ch
        result.append(_paint_halo(cells, content[y] if 0 <= y < height else "", pad,
                                  config.color, profile, dark_mode))
    return result


def _paint_halo(cells: List[str], source: str, pad: int, color: Color,
                profile: Optional[ColorProfile], dark_mode: bool) -> str:
    """Color halo runs only; content characters pass through untouched."""
    if profile is None:
        return "".join(cells)

    def is_halo(index: int) -> bool:
        x = index - pad
        if 0 <= x < len(source) and source[x] != " ":
            return False
        return cells[index] != " "

    out = []
    for halo_run, group in groupby(range(len(cells)), key=is_halo):
        run = "".join(cells[i] for i in group)
        out.append(_paint_run(run, color, profile, dark_mode) if halo_run else run)
    return "".join(out)


# ============================================================================
# PATTERNS
# ============================================================================

class PatternType(Enum):
    DOTS = "dots"
    STRIPES = "stripes"
    CHECKERBOARD = "checkerboard"
    DIAGONAL = "diagonal"
    CROSS = "cross"
    WAVE = "wave"


@dataclass(frozen=True)
class PatternConfig:
    """Pattern kind, colors of filled and empty cells, and cell scale."""
    kind: PatternType = PatternType.CHECKERBOARD
    foreground: Color = WHITE
    background: Color = BRIGHT_BLACK
    scale: int = 1

    def __post_init__(self):
        object.__setattr__(self, "kind", PatternType(self.kind))
        if self.scale < 1:
            raise ValueError(f"Pattern scale must be at least 1, got {self.scale}")


def pattern_mask(width: int, height: int, config: PatternConfig) -> np.ndarray:
    """
    Filled cells of a pattern.

    Returns:
        Boolean array of shape (height, width)
    """
    y, x = np.mgrid[0:max(height, 0), 0:max(width, 0)]
    s = config.scale
    kind = config.kind

    if kind in (PatternType.DOTS, PatternType.CHECKERBOARD):
        return (x // s + y // s) % 2 == 0
    if kind is PatternType.STRIPES:
        return (y // s) % 2 == 0
    if kind is PatternType.DIAGONAL:
        return (x + y) % (2 * s) < s
    if kind is PatternType.CROSS:
        return (x % s == 0) | (y % s == 0)
    return np.sin(x / s) * np.sin(y / s) > 0


def generate_pattern(width: int, height: int,
                     config: PatternConfig = PatternConfig(),
                     profile: Optional[ColorProfile] = None,
                     dark_mode: bool = True) -> List[str]:
    """
    Fill a width x height block with a pattern.

    Filled cells are full blocks, empty cells light shades. With a profile
    filled runs take the foreground color and empty runs the background
    color.
    """
    mask = pattern_mask(width, height, config)
    rows = []
    for row in mask:
        out = []
        for filled, group in groupby(row.tolist()):
            glyph = FULL_BLOCK if filled else SHADE_LIGHT
            color = config.foreground if filled else config.background
            out.append(_paint_run(glyph * len(list(group)), color, profile, dark_mode))
        rows.append("".join(out))
    return rows


def apply_pattern(lines: Sequence[str], config: PatternConfig = PatternConfig()) -> List[str]:
    """Fill the spaces of a plain block with the pattern cell at their position."""
    content = list(lines)
    width = max((len(line) for line in content), default=0)
    pattern = generate_pattern(width, len(content), config)
    return [
        "".join(pattern[y][x] if ch == " " else ch for x, ch in enumerate(line))
        for y, line in enumerate(content)
    ]


# ============================================================================
# STYLED BORDERS
# ============================================================================

class BorderKind(Enum):
    SOLID = "solid"
    DASHED = "dashed"
    DOTTED = "dotted"
    DOUBLE = "double"


# kind -> (horizontal, vertical, corners tl tr bl br)
_KIND_GLYPHS = {
    BorderKind.SOLID: ("─", "│", "┌┐└┘"),
    BorderKind.DASHED: ("┄", "┆", "┌┐└┘"),
    BorderKind.DOTTED: ("┈", "┊", "┌┐└┘"),
    BorderKind.DOUBLE: ("═", "║", "╔╗╚╝"),
}


@dataclass(frozen=True)
class BorderStyle:
    """
    Line kind plus how the frame is painted.

    A gradient takes precedence over a solid color.
    """
    kind: BorderKind = BorderKind.SOLID
    color: Optional[Color] = None
    gradient: Optional[GradientInput] = None

    def __post_init__(self):
        object.__setattr__(self, "kind", BorderKind(self.kind))
        if self.color is not None and not isinstance(self.color, Color):
            object.__setattr__(self, "color", parse_color(self.color))


def create_styled_border(border_style: BorderStyle) -> Border:
    """Glyph set for a border kind."""
    horizontal, vertical, corners = _KIND_GLYPHS[border_style.kind]
    return create_border(
        top=horizontal, bottom=horizontal, left=vertical, right=vertical,
        top_left=corners[0], top_right=corners[1],
        bottom_left=corners[2], bottom_right=corners[3],
    )


def render_styled_box(lines: List[str],
                      border_style: BorderStyle,
                      profile: ColorProfile = ColorProfile.TRUE_COLOR,
                      dark_mode: bool = True,
                      sides: int = BorderSide.ALL) -> List[str]:
    """
    Frame a block with a styled border.

    Gradient borders color every glyph run from its first to its last
    glyph; solid colors wrap each run in one sequence.
    """
    border = create_styled_border(border_style)

    if border_style.gradient is not None:
        spec = to_gradient(border_style.gradient)

        def paint(run: str) -> str:
            out = []
            previous = None
            for ch, color in zip(run, border_gradient(spec, run, dark_mode)):
                sequence = to_sequence(color, profile, dark_mode=dark_mode)
                if sequence and sequence != previous:
                    out.append(sequence)
                    previous = sequence
                out.append(ch)
            return "".join(out) + RESET if previous else run
    else:
        def paint(run: str) -> str:
            return _paint_run(run, border_style.color, profile, dark_mode)

    return render_box(lines, border, sides, paint=paint)


# ============================================================================
# LAYER BLENDING
# ============================================================================

class LayerMode(Enum):
    OVERLAY = "overlay"
    MULTIPLY = "multiply"
    SCREEN = "screen"
    COLOR_DODGE = "color-dodge"
    COLOR_BURN = "color-burn"


@dataclass(frozen=True)
class LayerEffect:
    """Blend mode, layer color and opacity (clamped to 0..1)."""
    mode: LayerMode
    color: Color
    opacity: float = 1.0

    def __post_init__(self):
        object.__setattr__(self, "mode", LayerMode(self.mode))
        if not isinstance(self.color, Color):
            object.__setattr__(self, "color", parse_color(self.color))
        object.__setattr__(self, "opacity", min(1.0, max(0.0, float(self.opacity))))


def apply_layer_effect(base: Color, effect: LayerEffect, dark_mode: bool = True) -> Color:
    """
    Blend a layer color onto a base color.

    The mode result is mixed with the base by opacity:
    result = mode(base, layer) * opacity + base * (1 - opacity).
    Overlay is a plain alpha mix. Dodge against a white layer and burn
    against a black layer saturate to 255 and 0.

    Args:
        base: Color underneath
        effect: Layer to apply
        dark_mode: Member picked from Adaptive colors

    Returns:
        Blended Rgb; NoColor bases come back unchanged

    Example:
        >>> apply_layer_effect(Rgb(200, 100, 50), LayerEffect(LayerMode.MULTIPLY, Rgb(255, 128, 0)))
        Rgb(r=200, g=50, b=0)
    """
    if isinstance(base, NoColor):
        return base

    b = np.array(to_rgb(base, dark_mode), dtype=float)
    e = np.array(to_rgb(effect.color, dark_mode), dtype=float)
    mode = effect.mode

    with np.errstate(divide='ignore', invalid='ignore'):
        if mode is LayerMode.MULTIPLY:
            mixed = b * e / 255
        elif mode is LayerMode.SCREEN:
            mixed = 255 - (255 - b) * (255 - e) / 255
        elif mode is LayerMode.COLOR_DODGE:
            mixed = np.where(e >= 255, 255.0, b / (1 - e / 255))
        elif mode is LayerMode.COLOR_BURN:
            mixed = np.where(e <= 0, 0.0, 255 - (255 - b) / (e / 255))
        else:
            mixed = e

    result = mixed * effect.opacity + b * (1 - effect.opacity)
    r, g, bl = np.clip(np.floor(result + 0.5), 0, 255).astype(int).tolist()
    return Rgb(r, g, bl)
