"""Tests for wrapping, alignment, spacing and block composition."""

import pytest

from pngn_layout import (
    BOTTOM, CENTER, align_horizontal, align_vertical, apply_margin, apply_padding,
    flow_text, join_horizontal, join_vertical, place, wrap_line,
)
from pngn_style import HorizontalAlign, Overflow, Spacing, Style, VerticalAlign, WordBreak


# ============================================================================
# WRAPPING
# ============================================================================

def test_greedy_wrap() -> None:
    assert wrap_line("the quick brown fox", 10) == ["the quick", "brown fox"]


def test_short_line_untouched() -> None:
    assert wrap_line("hi there", 20) == ["hi there"]
    assert wrap_line("hi there", None) == ["hi there"]


def test_visible_overflow_disables_wrap() -> None:
    assert wrap_line("the quick brown fox", 5, overflow=Overflow.VISIBLE) == ["the quick brown fox"]


@pytest.mark.parametrize("options, expected", [
    ({}, ["abcdefghij"]),
    ({"word_break": WordBreak.BREAK_ALL}, ["abcd", "efgh", "ij"]),
    ({"overflow": Overflow.ELLIPSIS}, ["a..."]),
    ({"overflow": Overflow.HIDDEN}, ["abcd"]),
])
def test_long_word_policies(options, expected) -> None:
    assert wrap_line("abcdefghij", 4, **options) == expected


def test_broken_word_continues_line() -> None:
    assert wrap_line("abcdef gh", 4, word_break=WordBreak.BREAK_ALL) == ["abcd", "ef", "gh"]
    assert wrap_line("abcdef g", 4, word_break=WordBreak.BREAK_ALL) == ["abcd", "ef g"]


def test_wide_characters_wrap_by_columns() -> None:
    assert wrap_line("你好 世界", 4) == ["你好", "世界"]


# ============================================================================
# ALIGNMENT
# ============================================================================

@pytest.mark.parametrize("align, expected", [
    (HorizontalAlign.LEFT, "hi   "),
    (HorizontalAlign.CENTER, " hi  "),
    (HorizontalAlign.RIGHT, "   hi"),
])
def test_align_horizontal(align: HorizontalAlign, expected: str) -> None:
    assert align_horizontal("hi", 5, align) == expected


def test_align_never_cuts() -> None:
    assert align_horizontal("toolong", 3, HorizontalAlign.CENTER) == "toolong"


def test_justify_spreads_remainder_left() -> None:
    assert align_horizontal("a b c", 8, HorizontalAlign.JUSTIFY) == "a   b  c"
    assert align_horizontal("single", 8, HorizontalAlign.JUSTIFY) == "single  "


def test_align_vertical() -> None:
    assert align_vertical(["a"], 3, VerticalAlign.MIDDLE) == ["", "a", ""]
    assert align_vertical(["a"], 3, VerticalAlign.BOTTOM) == ["", "", "a"]
    assert align_vertical(["a"], 2) == ["a", ""]
    assert align_vertical(["a", "b", "c"], 2, VerticalAlign.BOTTOM) == ["a", "b"]


# ============================================================================
# SPACING
# ============================================================================

def test_padding_makes_rectangle() -> None:
    assert apply_padding(["ab", "c"], Spacing(1, 1, 0, 2)) == ["     ", "  ab ", "  c  "]
    assert apply_padding(["ab"], None) == ["ab"]


def test_margin_has_no_right_side() -> None:
    assert apply_margin(["x"], Spacing(1, 3, 1, 2)) == ["", "  x", ""]


# ============================================================================
# TEXT FLOW
# ============================================================================

def test_fixed_width_aligns_every_line() -> None:
    props = Style().width(6).center().resolved()
    assert flow_text("hi", props) == ["  hi  "]


def test_fixed_width_defaults_to_left() -> None:
    props = Style().width(6).resolved()
    assert flow_text("hi\nthere", props) == ["hi    ", "there "]


def test_max_width_only_wraps() -> None:
    props = Style().max_width(5).resolved()
    assert flow_text("aa bb cc", props) == ["aa bb", "cc"]


def test_min_width_pads() -> None:
    assert flow_text("ab", Style().min_width(4).resolved()) == ["ab  "]
    assert flow_text("abcdef", Style().min_width(4).resolved()) == ["abcdef"]


def test_alignment_within_block() -> None:
    props = Style().align("right").resolved()
    assert flow_text("a\nbcd", props) == ["  a", "bcd"]


def test_heights() -> None:
    assert flow_text("a", Style().height(3).resolved()) == ["a", "", ""]
    assert flow_text("a", Style().height(3).valign("bottom").resolved()) == ["", "", "a"]
    assert flow_text("a\nb\nc", Style().max_height(2).resolved()) == ["a", "b"]
    assert flow_text("a", Style().min_height(2).resolved()) == ["a", ""]


def test_capability_size_overrides_style() -> None:
    props = Style().width(10).resolved()
    assert flow_text("hi", props, width=4) == ["hi  "]


def test_transform_before_layout() -> None:
    assert flow_text("hello", Style().uppercase().resolved()) == ["HELLO"]


def test_ellipsis_marker_is_configurable() -> None:
    props = Style().width(4).overflow("ellipsis").resolved()
    assert flow_text("abcdefgh", props, ellipsis="~") == ["abc~"]


# ============================================================================
# COMPOSITION
# ============================================================================

def test_join_horizontal() -> None:
    assert join_horizontal(["a", "b\nc"]) == ["ab", " c"]
    assert join_horizontal(["a", "b\nc"], BOTTOM) == [" b", "ac"]
    assert join_horizontal(["a", "b"], gap=2) == ["a  b"]
    assert join_horizontal([]) == []


def test_join_vertical() -> None:
    assert join_vertical(["a", "bcd"], CENTER) == [" a ", "bcd"]
    assert join_vertical(["ab", "c"], gap=1) == ["ab", "  ", "c "]


def test_place() -> None:
    assert place(5, 3, CENTER, CENTER, "x") == ["     ", "  x  ", "     "]
    assert place(2, 1, CENTER, CENTER, "wide") == ["wide"]
