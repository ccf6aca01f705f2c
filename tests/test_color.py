"""Tests for color variants, conversions and escape sequence resolution."""

import pytest

from pngn_color import (
    Adaptive, Ansi16, Ansi256, ColorError, ColorProfile, Hex, NoColor, Rgb, WHITE,
    ansi256_to_ansi16, ansi256_to_rgb, blend, color_steps, darken, hex_to_rgb,
    is_visible, lighten, named_color, parse_color, rgb_to_ansi16, rgb_to_ansi256,
    rgb_to_hex, sgr_params, to_rgb, to_sequence,
)


# ============================================================================
# VARIANTS
# ============================================================================

def test_hex_is_normalized() -> None:
    assert Hex("#FFF").raw == "#ffffff"
    assert Hex("a0b1c2").raw == "#a0b1c2"
    assert Hex("#fff") == Hex("#FFFFFF")


@pytest.mark.parametrize("factory", [
    lambda: Hex("#12345"),
    lambda: Hex("zzz"),
    lambda: Ansi16(16),
    lambda: Ansi256(256),
    lambda: Rgb(256, 0, 0),
    lambda: Rgb(-1, 0, 0),
])
def test_invalid_colors_raise(factory) -> None:
    with pytest.raises(ColorError):
        factory()


def test_color_error_is_value_error() -> None:
    assert issubclass(ColorError, ValueError)


def test_profile_from_name() -> None:
    assert ColorProfile.from_name("256") is ColorProfile.ANSI256
    assert ColorProfile.from_name("TrueColor") is ColorProfile.TRUE_COLOR
    assert ColorProfile.from_name("none") is ColorProfile.NO_COLOR
    with pytest.raises(ValueError):
        ColorProfile.from_name("hdr")


# ============================================================================
# CONVERSIONS
# ============================================================================

@pytest.mark.parametrize("rgb", [(0, 0, 0), (255, 128, 0), (18, 52, 86), (255, 255, 255)])
def test_hex_round_trip(rgb) -> None:
    assert hex_to_rgb(rgb_to_hex(*rgb)) == rgb


def test_short_hex() -> None:
    assert hex_to_rgb("#abc") == (170, 187, 204)


@pytest.mark.parametrize("rgb, expected", [
    ((0, 0, 0), 16),
    ((5, 5, 5), 16),
    ((255, 255, 255), 231),
    ((128, 128, 128), 244),
    ((255, 0, 0), 196),
    ((255, 127, 80), 210),
])
def test_rgb_to_ansi256(rgb, expected: int) -> None:
    assert rgb_to_ansi256(*rgb) == expected


def test_gray_ramp_stays_in_range() -> None:
    for level in range(8, 249):
        assert 232 <= rgb_to_ansi256(level, level, level) <= 255


def test_ansi256_to_rgb() -> None:
    assert ansi256_to_rgb(196) == (255, 0, 0)
    assert ansi256_to_rgb(232) == (8, 8, 8)
    assert ansi256_to_rgb(1) == (128, 0, 0)


def test_nearest_ansi16() -> None:
    assert rgb_to_ansi16(255, 0, 0) == 9
    assert rgb_to_ansi16(0, 0, 0) == 0
    assert rgb_to_ansi16(250, 250, 250) == 15


def test_ansi256_downgrade() -> None:
    assert ansi256_to_ansi16(5) == 5
    assert ansi256_to_ansi16(196) == 9
    assert all(0 <= ansi256_to_ansi16(code) <= 15 for code in range(256))


def test_to_rgb() -> None:
    assert to_rgb(Hex("#102030")) == (16, 32, 48)
    assert to_rgb(NoColor()) == (0, 0, 0)
    pair = Adaptive(light=Rgb(1, 1, 1), dark=Rgb(2, 2, 2))
    assert to_rgb(pair) == (2, 2, 2)
    assert to_rgb(pair, dark_mode=False) == (1, 1, 1)


# ============================================================================
# ESCAPE SEQUENCES
# ============================================================================

def test_truecolor_sequences() -> None:
    assert to_sequence(Rgb(1, 2, 3), ColorProfile.TRUE_COLOR) == "\x1b[38;2;1;2;3m"
    assert to_sequence(Hex("#010203"), ColorProfile.TRUE_COLOR, background=True) == "\x1b[48;2;1;2;3m"


def test_downgraded_sequences() -> None:
    coral = Rgb(255, 127, 80)
    assert to_sequence(coral, ColorProfile.ANSI256) == "\x1b[38;5;210m"
    assert to_sequence(Rgb(255, 0, 0), ColorProfile.ANSI16) == "\x1b[91m"
    assert to_sequence(Ansi256(196), ColorProfile.ANSI16) == "\x1b[91m"
    assert to_sequence(Ansi256(196), ColorProfile.TRUE_COLOR) == "\x1b[38;5;196m"


def test_ansi16_codes() -> None:
    assert to_sequence(Ansi16(1), ColorProfile.ANSI16) == "\x1b[31m"
    assert to_sequence(Ansi16(9), ColorProfile.ANSI16, background=True) == "\x1b[101m"
    assert sgr_params(Ansi16(4), ColorProfile.TRUE_COLOR, background=True) == "44"


def test_nothing_emitted_without_color() -> None:
    assert to_sequence(None, ColorProfile.TRUE_COLOR) == ""
    assert to_sequence(NoColor(), ColorProfile.TRUE_COLOR) == ""
    assert to_sequence(Rgb(255, 0, 0), ColorProfile.NO_COLOR) == ""
    assert to_sequence(Ansi16(1), ColorProfile.NO_COLOR) == ""


def test_adaptive_sequence_follows_mode() -> None:
    pair = Adaptive(light=Ansi16(0), dark=Ansi16(15))
    assert to_sequence(pair, ColorProfile.ANSI16) == "\x1b[97m"
    assert to_sequence(pair, ColorProfile.ANSI16, dark_mode=False) == "\x1b[30m"


# ============================================================================
# MANIPULATION
# ============================================================================

def test_lighten_and_darken_keep_variant() -> None:
    assert lighten(Rgb(100, 100, 100), 0.5) == Rgb(150, 150, 150)
    assert lighten(Rgb(200, 200, 200), 1.0) == Rgb(255, 255, 255)
    assert darken(Hex("#646464"), 0.5) == Hex("#323232")
    assert lighten(Ansi16(3), 0.5) == Ansi16(3)


def test_blend() -> None:
    assert blend(Rgb(255, 0, 0), Rgb(0, 0, 255), 0.5) == Rgb(128, 0, 128)
    assert blend(Rgb(255, 0, 0), Rgb(0, 0, 255), 1.0) == Rgb(255, 0, 0)
    assert blend(Ansi16(1), Ansi16(4), 0.6) == Ansi16(1)
    assert blend(Ansi16(1), Ansi16(4), 0.5) == Ansi16(4)


def test_color_steps() -> None:
    steps = color_steps(Rgb(0, 0, 0), Rgb(255, 255, 255), 3)
    assert steps == [Rgb(0, 0, 0), Rgb(128, 128, 128), Rgb(255, 255, 255)]
    assert color_steps(Ansi16(1), Ansi16(2), 3) == [Ansi16(1)] * 3


def test_is_visible() -> None:
    assert is_visible(Ansi16(0))
    assert not is_visible(NoColor())
    assert not is_visible(None)


# ============================================================================
# PARSING
# ============================================================================

def test_named_colors() -> None:
    assert named_color("hotPink") == Rgb(255, 105, 180)
    assert named_color("hot_pink") == Rgb(255, 105, 180)
    assert named_color("Hot Pink") == Rgb(255, 105, 180)
    assert named_color("no such color") is None


@pytest.mark.parametrize("value, expected", [
    ("red", Ansi16(1)),
    ("brightCyan", Ansi16(14)),
    ("#FFF", Hex("#ffffff")),
    (3, Ansi16(3)),
    (200, Ansi256(200)),
    ((1, 2, 3), Rgb(1, 2, 3)),
    ("rgb(1, 2, 3)", Rgb(1, 2, 3)),
    ("", WHITE),
    ("definitely-not-a-color", WHITE),
])
def test_parse_color(value, expected) -> None:
    assert parse_color(value) == expected


def test_parse_color_passes_colors_through() -> None:
    color = Rgb(9, 9, 9)
    assert parse_color(color) is color


def test_parse_color_rejects_malformed_hex() -> None:
    with pytest.raises(ColorError):
        parse_color("#12")
