"""Tests for immutable style values, inheritance and fingerprints."""

import pytest

from pngn_border import NORMAL, ROUNDED, BorderSide
from pngn_color import Ansi16, Rgb
from pngn_style import (
    CAPITALIZE, STYLES, HorizontalAlign, Overflow, Spacing, Style, TextTransform,
    VerticalAlign, WordBreak, style, to_spacing,
)


def test_builders_do_not_mutate() -> None:
    base = Style()
    bold = base.bold()
    assert base.get("bold") is None
    assert bold.get("bold") is True


def test_colors_are_coerced() -> None:
    s = Style().foreground("hotPink").background(4)
    assert s.get("foreground") == Rgb(255, 105, 180)
    assert s.get("background") == Ansi16(4)


def test_inheritance_rules() -> None:
    parent = Style().bold().foreground("red").padding(1).width(10)
    child = Style().underline().inherit(parent)
    assert child.get("bold") is True
    assert child.get("foreground") == Ansi16(1)
    assert child.get("underline") is True
    assert child.get("padding") is None
    assert child.get("width") is None


def test_local_value_beats_inherited() -> None:
    child = Style().foreground("blue").inherit(Style().foreground("red"))
    assert child.get("foreground") == Ansi16(4)


def test_inheritance_walks_the_chain() -> None:
    grandparent = Style().italic()
    parent = Style().inherit(grandparent)
    child = Style().inherit(parent)
    assert child.get("italic") is True


def test_fingerprint_ignores_builder_order() -> None:
    a = Style().bold().foreground("red").padding(0, 1)
    b = Style().padding(0, 1).foreground("red").bold()
    assert a.fingerprint() == b.fingerprint()
    assert a.fingerprint() != Style().bold().fingerprint()


def test_fingerprint_of_inherited_equals_local() -> None:
    assert Style().inherit(Style().bold()).fingerprint() == Style().bold().fingerprint()


def test_merge_is_flat_override() -> None:
    merged = Style().bold().foreground("red").merge(Style().foreground("blue").italic())
    assert merged.parent is None
    assert merged.get("bold") is True
    assert merged.get("italic") is True
    assert merged.get("foreground") == Ansi16(4)


def test_equality_and_hash() -> None:
    assert Style().bold() == Style().bold()
    assert hash(Style().bold()) == hash(Style().bold())
    assert Style().bold() != Style().italic()


def test_spacing_shorthand() -> None:
    assert Spacing.of(1) == Spacing(1, 1, 1, 1)
    assert Spacing.of(1, 2) == Spacing(1, 2, 1, 2)
    assert Spacing.of(1, 2, 3) == Spacing(1, 2, 3, 2)
    assert Spacing.of(1, 2, 3, 4) == Spacing(1, 2, 3, 4)
    assert to_spacing((0, 1)) == Spacing(0, 1, 0, 1)
    assert Spacing(1, 2, 3, 4).horizontal == 6


def test_negative_values_rejected() -> None:
    with pytest.raises(ValueError):
        Spacing(-1, 0, 0, 0)
    with pytest.raises(ValueError):
        Style().width(-1)


def test_unknown_property_rejected() -> None:
    with pytest.raises(ValueError):
        Style().set("colour", "red")


def test_border_builders() -> None:
    s = Style().border("rounded")
    assert s.get("border") is ROUNDED
    assert s.get("border_sides") is None

    s = Style().border(NORMAL).border_top(False)
    assert s.get("border_sides") == BorderSide.RIGHT | BorderSide.BOTTOM | BorderSide.LEFT
    assert s.border_top().get("border_sides") == BorderSide.ALL


def test_side_spacing_builders() -> None:
    s = Style().padding(1).padding_left(3).margin_bottom(2)
    assert s.get("padding") == Spacing(1, 1, 1, 3)
    assert s.get("margin") == Spacing(0, 0, 2, 0)


def test_enum_builders_accept_strings() -> None:
    s = Style().align("center").valign("bottom").overflow("ellipsis").word_break("break-all")
    assert s.get("horizontal_align") is HorizontalAlign.CENTER
    assert s.get("vertical_align") is VerticalAlign.BOTTOM
    assert s.get("overflow") is Overflow.ELLIPSIS
    assert s.get("word_break") is WordBreak.BREAK_ALL


def test_word_wrap_toggle() -> None:
    assert Style().word_wrap(False).get("overflow") is Overflow.VISIBLE
    assert Style().word_wrap().get("overflow") is Overflow.WRAP


def test_transforms() -> None:
    assert CAPITALIZE.apply("hello big world") == "Hello Big World"
    assert Style().uppercase().get("transform").apply("abc") == "ABC"
    custom = Style().transform(lambda text: text[::-1]).get("transform")
    assert custom.apply("abc") == "cba"
    with pytest.raises(ValueError):
        TextTransform("sideways")


def test_style_factory_and_presets() -> None:
    s = style(bold=True, foreground="red", padding=(0, 1))
    assert s.get("padding") == Spacing(0, 1, 0, 1)
    assert STYLES["center"].get("horizontal_align") is HorizontalAlign.CENTER
    assert STYLES["center"].get("vertical_align") is VerticalAlign.MIDDLE


def test_reset_and_unset() -> None:
    s = Style().bold().italic()
    assert s.unset("bold").get("bold") is None
    assert s.reset() == Style()
    assert s.to_dict() == {"bold": True, "italic": True}
