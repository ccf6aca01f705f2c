#!/usr/bin/env python3
"""
🐧 PNGN Styler - Style Value Module
===================================
Copyright (c) 2025 PNGN-Tec LLC

Immutable Style Values
======================
A Style is an immutable record of optional visual properties plus an
optional parent. Every builder call returns a new Style, so styles can be
shared freely between threads and used as cache keys.

Property Groups
===============
- Colors: foreground, background
- Borders: border, border_sides, border_foreground, border_background
- Spacing: padding, margin (top/right/bottom/left)
- Decorations: bold, italic, underline, strikethrough, inverse, blink,
  faint, hidden, inline
- Dimensions: width, height, min/max width and height
- Alignment: horizontal_align, vertical_align
- Text: transform, overflow, word_break

Inheritance
===========
Only colors, decoration flags, transform and word_break are inherited
from a parent when unset locally. Spacing, dimensions and borders never
inherit.

Example Usage
=============
```python
from pngn_style import Style

title = Style().bold().foreground("hotPink").padding(0, 1)
child = Style().underline().inherit(title)
child.get("bold")      # True, inherited
child.get("padding")   # None, spacing never inherits
```
"""

import re
import hashlib
import logging
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Callable, Dict, Iterator, Optional, Tuple, Union

from pngn_color import Color, ColorInput, parse_color
from pngn_border import Border, BorderSide, get_border

# Configure logging
logger = logging.getLogger('pngn_style')


# ============================================================================
# ENUMS
# ============================================================================

class HorizontalAlign(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFY = "justify"


class VerticalAlign(Enum):
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


class Overflow(Enum):
    """What happens to text wider than the available width"""
    VISIBLE = "visible"
    HIDDEN = "hidden"
    WRAP = "wrap"
    ELLIPSIS = "ellipsis"


class WordBreak(Enum):
    """How words longer than the width are treated when wrapping"""
    NORMAL = "normal"
    BREAK_ALL = "break-all"
    KEEP_ALL = "keep-all"


# ============================================================================
# TEXT TRANSFORM
# ============================================================================

_CAPITALIZE_PATTERN = re.compile(r'\b\w')

TRANSFORM_KINDS = ("none", "uppercase", "lowercase", "capitalize", "custom")


@dataclass(frozen=True)
class TextTransform:
    """Case transform applied to content before layout."""
    kind: str = "none"
    function: Optional[Callable[[str], str]] = None

    def __post_init__(self):
        if self.kind not in TRANSFORM_KINDS:
            raise ValueError(f"Unknown text transform: {self.kind!r}")
        if self.kind == "custom" and not callable(self.function):
            raise ValueError("Custom text transform needs a callable")

    @classmethod
    def custom(cls, function: Callable[[str], str]) -> "TextTransform":
        return cls("custom", function)

    def apply(self, text: str) -> str:
        if self.kind == "uppercase":
            return text.upper()
        if self.kind == "lowercase":
            return text.lower()
        if self.kind == "capitalize":
            return _CAPITALIZE_PATTERN.sub(lambda m: m.group(0).upper(), text)
        if self.kind == "custom":
            return self.function(text)
        return text

    def key(self) -> str:
        """Stable identity used in style fingerprints."""
        if self.kind != "custom":
            return self.kind
        fn = self.function
        name = getattr(fn, "__qualname__", type(fn).__name__)
        return f"custom:{getattr(fn, '__module__', '')}.{name}:{id(fn)}"


NO_TRANSFORM = TextTransform("none")
UPPERCASE = TextTransform("uppercase")
LOWERCASE = TextTransform("lowercase")
CAPITALIZE = TextTransform("capitalize")


# ============================================================================
# SPACING
# ============================================================================

@dataclass(frozen=True)
class Spacing:
    """Per-side spacing in cells."""
    top: int = 0
    right: int = 0
    bottom: int = 0
    left: int = 0

    def __post_init__(self):
        for name in ('top', 'right', 'bottom', 'left'):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ValueError(f"Spacing {name} must be a non-negative integer, got {value!r}")

    @classmethod
    def of(cls, top: int, right: Optional[int] = None,
           bottom: Optional[int] = None, left: Optional[int] = None) -> "Spacing":
        """
        CSS shorthand: 1 value for all sides, 2 for vertical/horizontal,
        3 for top/horizontal/bottom, 4 for top/right/bottom/left.
        """
        if right is None:
            return cls(top, top, top, top)
        if bottom is None:
            return cls(top, right, top, right)
        if left is None:
            return cls(top, right, bottom, right)
        return cls(top, right, bottom, left)

    @property
    def horizontal(self) -> int:
        return self.left + self.right

    @property
    def vertical(self) -> int:
        return self.top + self.bottom

    def is_zero(self) -> bool:
        return self.top == self.right == self.bottom == self.left == 0


ZERO_SPACING = Spacing()

SpacingInput = Union[Spacing, int, Tuple[int, ...]]


def to_spacing(value: SpacingInput) -> Spacing:
    """Coerce an int, a 1-4 tuple or a Spacing."""
    if isinstance(value, Spacing):
        return value
    if isinstance(value, int):
        return Spacing.of(value)
    if isinstance(value, (tuple, list)) and 1 <= len(value) <= 4:
        return Spacing.of(*value)
    raise ValueError(f"Cannot interpret {value!r} as spacing")


# ============================================================================
# STYLE PROPERTIES
# ============================================================================

@dataclass(frozen=True)
class StyleProps:
    """Every style property; None means unset."""
    foreground: Optional[Color] = None
    background: Optional[Color] = None

    border: Optional[Border] = None
    border_sides: Optional[BorderSide] = None
    border_foreground: Optional[Color] = None
    border_background: Optional[Color] = None

    padding: Optional[Spacing] = None
    margin: Optional[Spacing] = None

    bold: Optional[bool] = None
    italic: Optional[bool] = None
    underline: Optional[bool] = None
    strikethrough: Optional[bool] = None
    inverse: Optional[bool] = None
    blink: Optional[bool] = None
    faint: Optional[bool] = None
    hidden: Optional[bool] = None
    inline: Optional[bool] = None

    width: Optional[int] = None
    height: Optional[int] = None
    min_width: Optional[int] = None
    min_height: Optional[int] = None
    max_width: Optional[int] = None
    max_height: Optional[int] = None

    horizontal_align: Optional[HorizontalAlign] = None
    vertical_align: Optional[VerticalAlign] = None

    transform: Optional[TextTransform] = None
    overflow: Optional[Overflow] = None
    word_break: Optional[WordBreak] = None

    def __post_init__(self):
        for name in DIMENSION_PROPS:
            value = getattr(self, name)
            if value is not None and (not isinstance(value, int) or isinstance(value, bool) or value < 0):
                raise ValueError(f"{name} must be a non-negative integer, got {value!r}")

    def items(self) -> Iterator[Tuple[str, Any]]:
        """(name, value) pairs of every set property, in declaration order."""
        for name in PROP_NAMES:
            value = getattr(self, name)
            if value is not None:
                yield name, value


DIMENSION_PROPS = ('width', 'height', 'min_width', 'min_height', 'max_width', 'max_height')
COLOR_PROPS = ('foreground', 'background', 'border_foreground', 'border_background')
DECORATION_PROPS = ('bold', 'italic', 'underline', 'strikethrough', 'inverse',
                    'blink', 'faint', 'hidden', 'inline')
PROP_NAMES = tuple(f.name for f in fields(StyleProps))

INHERITABLE_PROPS = frozenset(
    ('foreground', 'background', 'transform', 'word_break') + DECORATION_PROPS
)

_ENUM_PROPS = {
    'horizontal_align': HorizontalAlign,
    'vertical_align': VerticalAlign,
    'overflow': Overflow,
    'word_break': WordBreak,
}


def _coerce(name: str, value: Any) -> Any:
    """Normalize a loosely typed property value."""
    if name not in PROP_NAMES:
        raise ValueError(f"Unknown style property: {name!r}")
    if value is None:
        return None
    if name in COLOR_PROPS:
        return parse_color(value)
    if name in ('padding', 'margin'):
        return to_spacing(value)
    if name == 'border':
        return get_border(value) if isinstance(value, str) else value
    if name == 'border_sides':
        return BorderSide(value)
    if name in _ENUM_PROPS:
        return _ENUM_PROPS[name](value)
    if name == 'transform':
        if isinstance(value, TextTransform):
            return value
        if isinstance(value, str):
            return TextTransform(value)
        if callable(value):
            return TextTransform.custom(value)
        raise ValueError(f"Cannot interpret {value!r} as a text transform")
    if name in DECORATION_PROPS:
        return bool(value)
    return value


def _canonical(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, TextTransform):
        return value.key()
    return repr(value)


# ============================================================================
# STYLE
# ============================================================================

class Style:
    """
    Immutable style value with optional parent.

    Builders never mutate; each returns a new Style sharing the parent.
    """

    __slots__ = ('_props', '_parent', '_resolved', '_fingerprint')

    def __init__(self, props: Optional[StyleProps] = None, parent: Optional["Style"] = None):
        self._props = props if props is not None else StyleProps()
        self._parent = parent
        self._resolved: Optional[StyleProps] = None
        self._fingerprint: Optional[str] = None

    @property
    def props(self) -> StyleProps:
        """Locally set properties (no inheritance)."""
        return self._props

    @property
    def parent(self) -> Optional["Style"]:
        return self._parent

    def _with(self, **changes: Any) -> "Style":
        return Style(replace(self._props, **changes), self._parent)

    # ========================================================================
    # GENERIC ACCESS
    # ========================================================================

    def set(self, name: str, value: Any) -> "Style":
        """New style with one property set (None unsets it)."""
        return self._with(**{name: _coerce(name, value)})

    def update(self, **props: Any) -> "Style":
        """New style with several properties set."""
        return self._with(**{name: _coerce(name, value) for name, value in props.items()})

    def unset(self, name: str) -> "Style":
        return self.set(name, None)

    def get(self, name: str) -> Any:
        """Resolved value of a property, including inheritance."""
        if name not in PROP_NAMES:
            raise ValueError(f"Unknown style property: {name!r}")
        return getattr(self.resolved(), name)

    def has(self, name: str) -> bool:
        return self.get(name) is not None

    def to_dict(self) -> Dict[str, Any]:
        """Resolved properties that are set."""
        return dict(self.resolved().items())

    # ========================================================================
    # RESOLUTION
    # ========================================================================

    def resolved(self) -> StyleProps:
        """
        Effective properties after inheritance.

        Walks the parent chain nearest-first; an unset inheritable property
        takes the first ancestor value found.
        """
        if self._resolved is not None:
            return self._resolved

        values = {name: value for name, value in self._props.items()}
        ancestor = self._parent
        while ancestor is not None:
            for name in INHERITABLE_PROPS:
                if values.get(name) is None:
                    inherited = getattr(ancestor._props, name)
                    if inherited is not None:
                        values[name] = inherited
            ancestor = ancestor._parent

        self._resolved = StyleProps(**values)
        return self._resolved

    def fingerprint(self) -> str:
        """
        Canonical digest of the resolved properties.

        Equal resolved properties give equal fingerprints regardless of the
        order builders were called in or how the values were inherited.
        """
        if self._fingerprint is None:
            parts = [f"{name}={_canonical(value)}" for name, value in self.resolved().items()]
            self._fingerprint = hashlib.md5("|".join(parts).encode()).hexdigest()
        return self._fingerprint

    def merge(self, other: "Style") -> "Style":
        """
        Flat override: other's resolved properties win where set.

        The result has no parent.
        """
        overrides = dict(other.resolved().items())
        return Style(replace(self.resolved(), **overrides))

    def inherit(self, parent: "Style") -> "Style":
        """Same local properties with a new parent."""
        return Style(self._props, parent)

    def copy(self) -> "Style":
        return Style(self._props, self._parent)

    def reset(self) -> "Style":
        """Empty style without parent."""
        return Style()

    # ========================================================================
    # COLORS
    # ========================================================================

    def foreground(self, color: ColorInput) -> "Style":
        return self.set('foreground', color)

    color = foreground

    def background(self, color: ColorInput) -> "Style":
        return self.set('background', color)

    # ========================================================================
    # BORDERS
    # ========================================================================

    def border(self, border: Union[Border, str], sides: Optional[int] = None) -> "Style":
        """Set border glyphs, and the active sides when given."""
        style = self.set('border', border)
        if sides is not None:
            style = style.set('border_sides', sides)
        return style

    def border_sides(self, sides: int) -> "Style":
        return self.set('border_sides', sides)

    def _toggle_side(self, side: BorderSide, enable: bool) -> "Style":
        current = self._props.border_sides
        if current is None:
            current = BorderSide.ALL
        sides = current | side if enable else current & ~side
        return self._with(border_sides=BorderSide(sides & BorderSide.ALL))

    def border_top(self, enable: bool = True) -> "Style":
        return self._toggle_side(BorderSide.TOP, enable)

    def border_right(self, enable: bool = True) -> "Style":
        return self._toggle_side(BorderSide.RIGHT, enable)

    def border_bottom(self, enable: bool = True) -> "Style":
        return self._toggle_side(BorderSide.BOTTOM, enable)

    def border_left(self, enable: bool = True) -> "Style":
        return self._toggle_side(BorderSide.LEFT, enable)

    def border_foreground(self, color: ColorInput) -> "Style":
        return self.set('border_foreground', color)

    def border_background(self, color: ColorInput) -> "Style":
        return self.set('border_background', color)

    # ========================================================================
    # SPACING
    # ========================================================================

    def padding(self, top: int, right: Optional[int] = None,
                bottom: Optional[int] = None, left: Optional[int] = None) -> "Style":
        return self._with(padding=Spacing.of(top, right, bottom, left))

    def _spacing_side(self, name: str, side: str, value: int) -> "Style":
        current = getattr(self._props, name) or ZERO_SPACING
        return self._with(**{name: replace(current, **{side: value})})

    def padding_top(self, value: int) -> "Style":
        return self._spacing_side('padding', 'top', value)

    def padding_right(self, value: int) -> "Style":
        return self._spacing_side('padding', 'right', value)

    def padding_bottom(self, value: int) -> "Style":
        return self._spacing_side('padding', 'bottom', value)

    def padding_left(self, value: int) -> "Style":
        return self._spacing_side('padding', 'left', value)

    def margin(self, top: int, right: Optional[int] = None,
               bottom: Optional[int] = None, left: Optional[int] = None) -> "Style":
        return self._with(margin=Spacing.of(top, right, bottom, left))

    def margin_top(self, value: int) -> "Style":
        return self._spacing_side('margin', 'top', value)

    def margin_right(self, value: int) -> "Style":
        return self._spacing_side('margin', 'right', value)

    def margin_bottom(self, value: int) -> "Style":
        return self._spacing_side('margin', 'bottom', value)

    def margin_left(self, value: int) -> "Style":
        return self._spacing_side('margin', 'left', value)

    # ========================================================================
    # DECORATIONS
    # ========================================================================

    def bold(self, value: bool = True) -> "Style":
        return self._with(bold=value)

    def italic(self, value: bool = True) -> "Style":
        return self._with(italic=value)

    def underline(self, value: bool = True) -> "Style":
        return self._with(underline=value)

    def strikethrough(self, value: bool = True) -> "Style":
        return self._with(strikethrough=value)

    def inverse(self, value: bool = True) -> "Style":
        return self._with(inverse=value)

    reverse = inverse

    def blink(self, value: bool = True) -> "Style":
        return self._with(blink=value)

    def faint(self, value: bool = True) -> "Style":
        return self._with(faint=value)

    dim = faint

    def hidden(self, value: bool = True) -> "Style":
        return self._with(hidden=value)

    def inline(self, value: bool = True) -> "Style":
        return self._with(inline=value)

    # ========================================================================
    # DIMENSIONS AND ALIGNMENT
    # ========================================================================

    def width(self, value: int) -> "Style":
        return self._with(width=value)

    def height(self, value: int) -> "Style":
        return self._with(height=value)

    def min_width(self, value: int) -> "Style":
        return self._with(min_width=value)

    def min_height(self, value: int) -> "Style":
        return self._with(min_height=value)

    def max_width(self, value: int) -> "Style":
        return self._with(max_width=value)

    def max_height(self, value: int) -> "Style":
        return self._with(max_height=value)

    def align(self, value: Union[HorizontalAlign, str]) -> "Style":
        return self.set('horizontal_align', value)

    def valign(self, value: Union[VerticalAlign, str]) -> "Style":
        return self.set('vertical_align', value)

    def center(self) -> "Style":
        return self._with(horizontal_align=HorizontalAlign.CENTER)

    def middle(self) -> "Style":
        return self._with(vertical_align=VerticalAlign.MIDDLE)

    # ========================================================================
    # TEXT HANDLING
    # ========================================================================

    def transform(self, value: Union[TextTransform, str, Callable[[str], str]]) -> "Style":
        return self.set('transform', value)

    text_transform = transform

    def uppercase(self) -> "Style":
        return self._with(transform=UPPERCASE)

    def lowercase(self) -> "Style":
        return self._with(transform=LOWERCASE)

    def capitalize(self) -> "Style":
        return self._with(transform=CAPITALIZE)

    def overflow(self, value: Union[Overflow, str]) -> "Style":
        return self.set('overflow', value)

    def word_wrap(self, enable: bool = True) -> "Style":
        return self._with(overflow=Overflow.WRAP if enable else Overflow.VISIBLE)

    def word_break(self, value: Union[WordBreak, str]) -> "Style":
        return self.set('word_break', value)

    # ========================================================================
    # PROTOCOL
    # ========================================================================

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Style):
            return NotImplemented
        return self._props == other._props and self._parent == other._parent

    def __hash__(self) -> int:
        return hash((self._props, self._parent))

    def __repr__(self) -> str:
        props = ", ".join(f"{name}={value!r}" for name, value in self._props.items())
        parent = ", parent=..." if self._parent is not None else ""
        return f"Style({props}{parent})"


def style(**props: Any) -> Style:
    """
    Build a style from keyword properties.

    Example:
        >>> style(bold=True, foreground="red", padding=(0, 1)).get("padding")
        Spacing(top=0, right=1, bottom=0, left=1)
    """
    return Style().update(**props)


# ============================================================================
# PRESETS
# ============================================================================

STYLES: Dict[str, Style] = {
    'base': Style(),
    'bold': Style().bold(),
    'italic': Style().italic(),
    'underline': Style().underline(),
    'strikethrough': Style().strikethrough(),
    'faint': Style().faint(),
    'center': Style().center().middle(),
    'hidden': Style().hidden(),
}
