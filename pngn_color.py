#!/usr/bin/env python3
"""
🐧 PNGN Styler - Color Model Module
===================================
Copyright (c) 2025 PNGN-Tec LLC

Terminal Color System
=====================
A closed set of color variants resolved to escape sequences for whatever
color profile the terminal supports, with downgrading from true color to
256 and 16 colors.

Core Features
=============
- Color variants: NoColor, Ansi16, Ansi256, Rgb, Hex, Adaptive
- Validation at construction (out-of-range values raise ColorError)
- Profile-aware resolution to SGR escape sequences
- Deterministic true color -> 256 -> 16 color downgrading
- Lighten, darken, blend and interpolation helpers
- Named palette with ANSI and extended RGB shades
- Parsing of names, hex, rgb() and hsl() strings

Technical Implementation
========================
- Frozen dataclasses for every variant (hashable, usable as cache keys)
- Nearest-color search vectorized with numpy
- The 256 -> 16 color table is built once at import
- CSS color strings parsed with Pillow's ImageColor
- Half-up rounding throughout so conversions match xterm tables

Module Interface
================
- ColorProfile: Terminal color capability (ordered)
- to_sequence(): Resolve a color to an escape sequence
- sgr_params(): Resolve a color to SGR parameters only
- parse_color(): Coerce strings, ints and tuples to colors
- lighten() / darken() / blend() / color_steps(): Manipulation
- PALETTE: Named colors

Example Usage
=============
```python
from pngn_color import ColorProfile, hex_color, to_sequence

coral = hex_color("#ff7f50")
to_sequence(coral, ColorProfile.TRUE_COLOR)    # '\\x1b[38;2;255;127;80m'
to_sequence(coral, ColorProfile.ANSI256)       # '\\x1b[38;5;210m'
```
"""

import math
import re
import logging
import numbers
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, List, Dict, Tuple, Union, Any

import numpy as np
from PIL import ImageColor

# Configure logging
logger = logging.getLogger('pngn_color')

# Type alias for RGB triples
RGBTuple = Tuple[int, int, int]

ESC = "\x1b"

_HEX_PATTERN = re.compile(r'^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$')


class ColorError(ValueError):
    """Raised when a color is constructed from invalid values."""


def _round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values."""
    return int(math.floor(value + 0.5))


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


# ============================================================================
# COLOR PROFILE
# ============================================================================

class ColorProfile(IntEnum):
    """Terminal color capability, ordered from least to most capable"""
    NO_COLOR = 0
    ANSI16 = 1
    ANSI256 = 2
    TRUE_COLOR = 3

    @classmethod
    def from_name(cls, name: str) -> "ColorProfile":
        """
        Parse a profile name.

        Accepts "none", "ansi16"/"16"/"ansi", "ansi256"/"256" and
        "truecolor"/"24bit"/"rgb" (case-insensitive).
        """
        key = name.strip().lower().replace("-", "").replace("_", "")
        aliases = {
            "none": cls.NO_COLOR, "nocolor": cls.NO_COLOR, "off": cls.NO_COLOR,
            "ansi": cls.ANSI16, "ansi16": cls.ANSI16, "16": cls.ANSI16,
            "ansi256": cls.ANSI256, "256": cls.ANSI256,
            "truecolor": cls.TRUE_COLOR, "24bit": cls.TRUE_COLOR, "rgb": cls.TRUE_COLOR,
        }
        if key not in aliases:
            raise ValueError(f"Unknown color profile: {name!r}")
        return aliases[key]


# ============================================================================
# COLOR VARIANTS
# ============================================================================

class Color:
    """Base class of every color variant."""

    __slots__ = ()


def _check_channel(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ColorError(f"{name} must be an integer, got {value!r}")
    if not 0 <= value <= 255:
        raise ColorError(f"{name} must be in 0..255, got {value}")
    return int(value)


@dataclass(frozen=True)
class NoColor(Color):
    """Absence of color. Resolves to an empty sequence."""


@dataclass(frozen=True)
class Ansi16(Color):
    """One of the 16 standard terminal colors (0-7 normal, 8-15 bright)."""
    code: int

    def __post_init__(self):
        code = _check_channel("ANSI code", self.code)
        if code > 15:
            raise ColorError(f"ANSI code must be in 0..15, got {code}")
        object.__setattr__(self, "code", code)


@dataclass(frozen=True)
class Ansi256(Color):
    """An xterm 256-color palette index."""
    code: int

    def __post_init__(self):
        object.__setattr__(self, "code", _check_channel("ANSI256 code", self.code))


@dataclass(frozen=True)
class Rgb(Color):
    """24-bit color."""
    r: int
    g: int
    b: int

    def __post_init__(self):
        object.__setattr__(self, "r", _check_channel("red", self.r))
        object.__setattr__(self, "g", _check_channel("green", self.g))
        object.__setattr__(self, "b", _check_channel("blue", self.b))

    @property
    def rgb(self) -> RGBTuple:
        return (self.r, self.g, self.b)


@dataclass(frozen=True)
class Hex(Color):
    """
    24-bit color written as hex.

    Accepts 3 or 6 hex digits with an optional leading '#'; stored in the
    normalized lowercase '#rrggbb' form.
    """
    raw: str

    def __post_init__(self):
        object.__setattr__(self, "raw", _normalize_hex(self.raw))

    @property
    def rgb(self) -> RGBTuple:
        return hex_to_rgb(self.raw)


@dataclass(frozen=True)
class Adaptive(Color):
    """Pair of colors chosen by terminal background brightness."""
    light: Color
    dark: Color

    def __post_init__(self):
        if not isinstance(self.light, Color) or not isinstance(self.dark, Color):
            raise ColorError("Adaptive color needs two Color values")


# ============================================================================
# CONSTRUCTORS
# ============================================================================

def no_color() -> NoColor:
    return NoColor()


def ansi(code: int) -> Ansi16:
    return Ansi16(code)


def ansi256(code: int) -> Ansi256:
    return Ansi256(code)


def rgb(r: int, g: int, b: int) -> Rgb:
    return Rgb(r, g, b)


def hex_color(value: str) -> Hex:
    return Hex(value)


def adaptive(light: Color, dark: Color) -> Adaptive:
    return Adaptive(light, dark)


# ============================================================================
# CONVERSIONS
# ============================================================================

def _normalize_hex(value: str) -> str:
    if not isinstance(value, str):
        raise ColorError(f"Hex color must be a string, got {value!r}")
    match = _HEX_PATTERN.match(value.strip())
    if not match:
        raise ColorError(f"Invalid hex color: {value!r}")
    digits = match.group(1).lower()
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return "#" + digits


def hex_to_rgb(value: str) -> RGBTuple:
    """
    Parse a hex color string.

    Args:
        value: '#rgb', '#rrggbb', 'rgb' or 'rrggbb'

    Returns:
        (r, g, b) tuple

    Raises:
        ColorError: If the string is not a valid hex color
    """
    digits = _normalize_hex(value)[1:]
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Format channels as lowercase '#rrggbb'."""
    color = Rgb(r, g, b)
    return f"#{color.r:02x}{color.g:02x}{color.b:02x}"


def rgb_to_ansi256(r: int, g: int, b: int) -> int:
    """
    Map a 24-bit color onto the xterm 256-color palette.

    Grays use the 24-step grayscale ramp (232-255), pure black and white
    use cube corners 16 and 231; everything else uses the 6x6x6 cube.
    """
    if r == g == b:
        if r < 8:
            return 16
        if r > 248:
            return 231
        return _round_half_up((r - 8) / 247 * 24) + 232

    return (16
            + 36 * _round_half_up(r / 255 * 5)
            + 6 * _round_half_up(g / 255 * 5)
            + _round_half_up(b / 255 * 5))


# Reference RGB values for nearest-color search onto the 16 ANSI colors
ANSI16_REFERENCE = np.array([
    (0, 0, 0), (205, 0, 0), (0, 205, 0), (205, 205, 0),
    (0, 0, 238), (205, 0, 205), (0, 205, 205), (229, 229, 229),
    (127, 127, 127), (255, 0, 0), (0, 255, 0), (255, 255, 0),
    (92, 92, 255), (255, 0, 255), (0, 255, 255), (255, 255, 255),
], dtype=np.int64)

# Approximate RGB values of the 16 ANSI colors used for interpolation
ANSI16_APPROX_RGB: Tuple[RGBTuple, ...] = (
    (0, 0, 0), (128, 0, 0), (0, 128, 0), (128, 128, 0),
    (0, 0, 128), (128, 0, 128), (0, 128, 128), (192, 192, 192),
    (128, 128, 128), (255, 0, 0), (0, 255, 0), (255, 255, 0),
    (0, 0, 255), (255, 0, 255), (0, 255, 255), (255, 255, 255),
)


def _nearest_ansi16(colors: np.ndarray) -> np.ndarray:
    """
    Nearest ANSI16 reference index for each row of an (N, 3) array.

    Ties resolve to the lowest index.
    """
    diff = colors[:, np.newaxis, :] - ANSI16_REFERENCE[np.newaxis, :, :]
    distances = (diff * diff).sum(axis=2)
    return np.argmin(distances, axis=1)


def rgb_to_ansi16(r: int, g: int, b: int) -> int:
    """Nearest of the 16 ANSI colors by Euclidean distance."""
    return int(_nearest_ansi16(np.array([(r, g, b)], dtype=np.int64))[0])


def ansi256_to_rgb(code: int) -> RGBTuple:
    """Approximate RGB value of a 256-color palette index."""
    if code < 16:
        return ANSI16_APPROX_RGB[code]
    if code < 232:
        n = code - 16
        return ((n // 36) * 51, ((n % 36) // 6) * 51, (n % 6) * 51)
    level = (code - 232) * 10 + 8
    return (level, level, level)


def _build_ansi256_downgrade_table() -> Tuple[int, ...]:
    """Map every 256-color index to one of the 16 ANSI colors."""
    approx = np.array([ansi256_to_rgb(code) for code in range(256)], dtype=np.int64)
    nearest = _nearest_ansi16(approx)
    # Indices below 16 already are ANSI colors
    return tuple(code if code < 16 else int(nearest[code]) for code in range(256))


ANSI256_TO_ANSI16 = _build_ansi256_downgrade_table()


def ansi256_to_ansi16(code: int) -> int:
    """Deterministic downgrade of a 256-color index to the 16-color set."""
    return ANSI256_TO_ANSI16[Ansi256(code).code]


def to_rgb(color: Color, dark_mode: bool = True) -> RGBTuple:
    """
    Approximate RGB triple for any color variant.

    Non-RGB variants go through fixed tables. NoColor maps to black and
    Adaptive picks its dark or light member.
    """
    if isinstance(color, Rgb):
        return color.rgb
    if isinstance(color, Hex):
        return color.rgb
    if isinstance(color, Ansi16):
        return ANSI16_APPROX_RGB[color.code]
    if isinstance(color, Ansi256):
        return ansi256_to_rgb(color.code)
    if isinstance(color, Adaptive):
        return to_rgb(color.dark if dark_mode else color.light, dark_mode)
    return (0, 0, 0)


# ============================================================================
# ESCAPE SEQUENCE RESOLUTION
# ============================================================================

def _ansi16_params(code: int, background: bool) -> str:
    base = 40 if background else 30
    if code < 8:
        return str(base + code)
    return str(base + 60 + (code - 8))


def sgr_params(color: Optional[Color],
               profile: ColorProfile,
               background: bool = False,
               dark_mode: bool = True) -> str:
    """
    SGR parameter string for a color under a profile.

    Args:
        color: Color to resolve (None behaves like NoColor)
        profile: Terminal color capability
        background: Resolve as background instead of foreground
        dark_mode: Pick the dark member of adaptive colors

    Returns:
        Parameters such as "31", "38;5;209" or "48;2;0;0;0", or "" when
        nothing should be emitted
    """
    if color is None or isinstance(color, NoColor) or profile == ColorProfile.NO_COLOR:
        return ""

    if isinstance(color, Adaptive):
        return sgr_params(color.dark if dark_mode else color.light, profile, background, dark_mode)

    if isinstance(color, Ansi16):
        return _ansi16_params(color.code, background)

    if isinstance(color, Ansi256):
        if profile < ColorProfile.ANSI256:
            return _ansi16_params(ansi256_to_ansi16(color.code), background)
        return f"{48 if background else 38};5;{color.code}"

    if isinstance(color, (Rgb, Hex)):
        r, g, b = color.rgb
        if profile == ColorProfile.TRUE_COLOR:
            return f"{48 if background else 38};2;{r};{g};{b}"
        if profile == ColorProfile.ANSI256:
            return f"{48 if background else 38};5;{rgb_to_ansi256(r, g, b)}"
        return _ansi16_params(rgb_to_ansi16(r, g, b), background)

    raise ColorError(f"Not a color: {color!r}")


def to_sequence(color: Optional[Color],
                profile: ColorProfile,
                background: bool = False,
                dark_mode: bool = True) -> str:
    """
    Resolve a color to a complete escape sequence.

    Example:
        >>> to_sequence(Ansi16(1), ColorProfile.ANSI16)
        '\\x1b[31m'
        >>> to_sequence(Ansi16(9), ColorProfile.ANSI16, background=True)
        '\\x1b[101m'
    """
    params = sgr_params(color, profile, background, dark_mode)
    return f"{ESC}[{params}m" if params else ""


# ============================================================================
# MANIPULATION
# ============================================================================

def _channels(color: Color) -> Optional[RGBTuple]:
    """RGB channels of directly manipulable colors, None otherwise."""
    if isinstance(color, (Rgb, Hex)):
        return color.rgb
    return None


def _rebuild(template: Color, channels: RGBTuple) -> Color:
    """New color of the same kind as template (Hex stays Hex)."""
    if isinstance(template, Hex):
        return Hex(rgb_to_hex(*channels))
    return Rgb(*channels)


def lighten(color: Color, amount: float) -> Color:
    """
    Scale RGB channels up by (1 + amount), clamped to 255.

    Args:
        color: Color to lighten; non-RGB colors are returned unchanged
        amount: Fraction in [0, 1] (clamped)
    """
    channels = _channels(color)
    if channels is None:
        return color
    factor = 1 + _clamp(amount)
    return _rebuild(color, tuple(min(255, _round_half_up(c * factor)) for c in channels))


def darken(color: Color, amount: float) -> Color:
    """
    Scale RGB channels down by (1 - amount).

    Args:
        color: Color to darken; non-RGB colors are returned unchanged
        amount: Fraction in [0, 1] (clamped)
    """
    channels = _channels(color)
    if channels is None:
        return color
    factor = 1 - _clamp(amount)
    return _rebuild(color, tuple(max(0, _round_half_up(c * factor)) for c in channels))


def blend(foreground: Color, background: Color, alpha: float = 0.5) -> Color:
    """
    Mix two colors.

    RGB colors are interpolated per channel with alpha weighting the
    foreground. Any other pair picks the foreground when alpha > 0.5 and
    the background otherwise.
    """
    alpha = _clamp(alpha)
    fg = _channels(foreground)
    bg = _channels(background)
    if fg is None or bg is None:
        return foreground if alpha > 0.5 else background
    return Rgb(*(_round_half_up(f * alpha + b * (1 - alpha)) for f, b in zip(fg, bg)))


def color_steps(start: Color, end: Color, steps: int) -> List[Color]:
    """
    Evenly interpolated colors from start to end inclusive.

    Non-RGB endpoints cannot be interpolated, so every step is start.
    """
    if steps <= 1:
        return [start]
    if steps == 2:
        return [start, end]

    a = _channels(start)
    b = _channels(end)
    if a is None or b is None:
        return [start] * steps

    result: List[Color] = []
    for i in range(steps):
        t = i / (steps - 1)
        result.append(Rgb(*(_round_half_up(x + (y - x) * t) for x, y in zip(a, b))))
    return result


def is_visible(color: Optional[Color]) -> bool:
    """Whether a color emits anything at all."""
    return color is not None and not isinstance(color, NoColor)


# ============================================================================
# NAMED PALETTE
# ============================================================================

BLACK = Ansi16(0)
RED = Ansi16(1)
GREEN = Ansi16(2)
YELLOW = Ansi16(3)
BLUE = Ansi16(4)
MAGENTA = Ansi16(5)
CYAN = Ansi16(6)
WHITE = Ansi16(7)
BRIGHT_BLACK = Ansi16(8)
BRIGHT_RED = Ansi16(9)
BRIGHT_GREEN = Ansi16(10)
BRIGHT_YELLOW = Ansi16(11)
BRIGHT_BLUE = Ansi16(12)
BRIGHT_MAGENTA = Ansi16(13)
BRIGHT_CYAN = Ansi16(14)
BRIGHT_WHITE = Ansi16(15)

PALETTE: Dict[str, Color] = {
    # Standard colors (30-37)
    'black': BLACK, 'red': RED, 'green': GREEN, 'yellow': YELLOW,
    'blue': BLUE, 'magenta': MAGENTA, 'cyan': CYAN, 'white': WHITE,

    # Bright colors (90-97)
    'brightBlack': BRIGHT_BLACK, 'brightRed': BRIGHT_RED,
    'brightGreen': BRIGHT_GREEN, 'brightYellow': BRIGHT_YELLOW,
    'brightBlue': BRIGHT_BLUE, 'brightMagenta': BRIGHT_MAGENTA,
    'brightCyan': BRIGHT_CYAN, 'brightWhite': BRIGHT_WHITE,
    'gray': BRIGHT_BLACK, 'grey': BRIGHT_BLACK,

    # Orange shades
    'orange': Rgb(255, 140, 0), 'deepOrange': Rgb(255, 87, 34),
    'lightOrange': Rgb(255, 183, 77), 'darkOrange': Rgb(230, 81, 0),

    # Purple shades
    'purple': Rgb(128, 0, 128), 'deepPurple': Rgb(103, 58, 183),
    'lightPurple': Rgb(186, 104, 200), 'darkPurple': Rgb(74, 20, 140),
    'indigo': Rgb(63, 81, 181), 'violet': Rgb(238, 130, 238),

    # Pink shades
    'pink': Rgb(233, 30, 99), 'lightPink': Rgb(244, 143, 177),
    'deepPink': Rgb(255, 20, 147), 'hotPink': Rgb(255, 105, 180),

    # Teal and cyan variants
    'teal': Rgb(0, 150, 136), 'lightTeal': Rgb(77, 182, 172),
    'darkTeal': Rgb(0, 77, 64), 'aqua': Rgb(0, 255, 255),
    'turquoise': Rgb(64, 224, 208),

    # Brown shades
    'brown': Rgb(121, 85, 72), 'lightBrown': Rgb(161, 136, 127),
    'darkBrown': Rgb(62, 39, 35),

    # Green variants
    'lime': Rgb(205, 220, 57), 'lightGreen': Rgb(139, 195, 74),
    'darkGreen': Rgb(27, 94, 32), 'forest': Rgb(34, 139, 34),
    'mint': Rgb(152, 251, 152), 'olive': Rgb(128, 128, 0),

    # Blue variants
    'lightBlue': Rgb(3, 169, 244), 'darkBlue': Rgb(13, 71, 161),
    'navy': Rgb(0, 0, 128), 'royal': Rgb(65, 105, 225),
    'sky': Rgb(135, 206, 235), 'steel': Rgb(70, 130, 180),

    # Red variants
    'crimson': Rgb(220, 20, 60), 'scarlet': Rgb(255, 36, 0),
    'maroon': Rgb(128, 0, 0), 'coral': Rgb(255, 127, 80),

    # Yellow variants
    'gold': Rgb(255, 215, 0), 'amber': Rgb(255, 193, 7),
    'lemon': Rgb(255, 244, 67),

    # Gray variants
    'lightGray': Rgb(189, 189, 189), 'darkGray': Rgb(66, 66, 66),
    'silver': Rgb(192, 192, 192), 'charcoal': Rgb(54, 69, 79),

    # Neon colors
    'neonGreen': Rgb(57, 255, 20), 'neonBlue': Rgb(0, 149, 255),
    'neonPink': Rgb(255, 16, 240), 'neonYellow': Rgb(255, 255, 0),
    'neonOrange': Rgb(255, 128, 0), 'neonPurple': Rgb(177, 3, 252),

    # Pastel colors
    'pastelPink': Rgb(255, 209, 220), 'pastelBlue': Rgb(174, 198, 207),
    'pastelGreen': Rgb(162, 210, 162), 'pastelYellow': Rgb(255, 254, 162),
    'pastelPurple': Rgb(221, 160, 221), 'pastelOrange': Rgb(255, 179, 71),
}


def _palette_key(name: str) -> str:
    return name.strip().lower().replace("_", "").replace("-", "").replace(" ", "")


_PALETTE_LOOKUP = {_palette_key(name): color for name, color in PALETTE.items()}


def named_color(name: str, default: Optional[Color] = None) -> Optional[Color]:
    """
    Look up a palette color by name.

    Matching ignores case, spaces, hyphens and underscores, so 'hotPink',
    'hot_pink' and 'Hot Pink' are the same color.
    """
    return _PALETTE_LOOKUP.get(_palette_key(name), default)


ColorInput = Union[Color, str, int, Tuple[int, int, int]]


def parse_color(value: ColorInput, default: Color = WHITE) -> Color:
    """
    Coerce loosely typed input to a Color.

    Args:
        value: A Color, a palette or CSS color name, '#hex', 'rgb(...)',
            'hsl(...)', an int (0-15 ANSI, 16-255 ANSI256) or an (r, g, b)
            tuple
        default: Returned when a name is not recognized

    Returns:
        Parsed color

    Raises:
        ColorError: On malformed hex strings or out-of-range numbers
    """
    if isinstance(value, Color):
        return value

    if isinstance(value, numbers.Integral) and not isinstance(value, bool):
        return Ansi16(value) if 0 <= value <= 15 else Ansi256(value)

    if isinstance(value, tuple):
        if len(value) != 3:
            raise ColorError(f"RGB tuple needs 3 channels, got {value!r}")
        return Rgb(*value)

    if not isinstance(value, str):
        raise ColorError(f"Cannot interpret {value!r} as a color")

    text = value.strip()
    if not text:
        return default

    if text.startswith("#"):
        return Hex(text)

    palette_color = named_color(text)
    if palette_color is not None:
        return palette_color

    try:
        channels = ImageColor.getrgb(text)
    except ValueError:
        logger.debug(f"Unrecognized color {value!r}, using {default!r}")
        return default
    return Rgb(*channels[:3])
