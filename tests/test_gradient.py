"""Tests for gradient interpolation, painting, transforms and string parsing."""

import pytest

from pngn_color import RED, BLUE, WHITE, Adaptive, ColorProfile, Hex, Rgb
from pngn_gradient import (
    DEFAULT_GRADIENT, RESET, Easing, GradientDirection, GradientSpec, GradientStop,
    animated_gradient, apply_to_lines, apply_to_text, background_gradient, blend_gradients,
    border_gradient, color_at, convert_gradient_format, create_gradient, ease,
    optimize_gradient, parse_gradient_string, position_grid, rainbow, reverse_gradient,
    rotate_gradient, scale_gradient, shift_gradient, to_gradient, validate_gradient_syntax,
)

RED_SEQ = "\x1b[38;2;255;0;0m"
BLUE_SEQ = "\x1b[38;2;0;0;255m"


@pytest.fixture
def red_to_blue() -> GradientSpec:
    return create_gradient(["#ff0000", "#0000ff"])


# ============================================================================
# INTERPOLATION
# ============================================================================

def test_endpoints_return_stop_colors(red_to_blue: GradientSpec) -> None:
    assert color_at(red_to_blue, 0.0) == Hex("#ff0000")
    assert color_at(red_to_blue, 1.0) == Hex("#0000ff")
    assert color_at(red_to_blue, -3.0) == Hex("#ff0000")
    assert color_at(red_to_blue, 7.0) == Hex("#0000ff")


def test_midpoint_rounds_half_up(red_to_blue: GradientSpec) -> None:
    assert color_at(red_to_blue, 0.5) == Rgb(128, 0, 128)


def test_degenerate_gradients() -> None:
    assert color_at(GradientSpec(()), 0.3) == WHITE
    single = GradientSpec((GradientStop(0.4, RED),))
    assert color_at(single, 0.0) == RED
    assert color_at(single, 1.0) == RED


def test_stops_are_sorted_and_clamped() -> None:
    spec = GradientSpec((GradientStop(1.5, BLUE), GradientStop(-1, RED)))
    assert [stop.position for stop in spec.stops] == [0.0, 1.0]
    assert spec.stops[0].color == RED


def test_easing() -> None:
    assert ease(0.25, Easing.EASE_IN_OUT) == 0.125
    assert ease(0.5, Easing.EASE_IN) == 0.25
    assert ease(0.5, Easing.EASE_OUT) == 0.75
    assert ease(0.3) == 0.3


# ============================================================================
# POSITION GRIDS
# ============================================================================

def test_vertical_grid() -> None:
    grid = position_grid(GradientSpec((), GradientDirection.VERTICAL), 2, 3)
    assert grid.shape == (3, 2)
    assert grid[:, 0].tolist() == [0.0, 0.5, 1.0]
    assert grid[:, 1].tolist() == [0.0, 0.5, 1.0]


def test_diagonal_grids() -> None:
    down = position_grid(GradientSpec((), GradientDirection.DIAGONAL_DOWN), 3, 3)
    assert down[0, 0] == 0.0
    assert down[2, 2] == 1.0
    up = position_grid(GradientSpec((), GradientDirection.DIAGONAL_UP), 3, 3)
    assert up[2, 0] == 0.0
    assert up[0, 2] == 1.0


def test_radial_grid() -> None:
    grid = position_grid(GradientSpec((), GradientDirection.RADIAL), 3, 3)
    assert grid[1, 1] == 0.0
    assert grid[0, 0] == pytest.approx(1.0)
    assert grid[2, 2] == pytest.approx(1.0)


# ============================================================================
# PAINTING
# ============================================================================

def test_apply_to_text(red_to_blue: GradientSpec) -> None:
    assert apply_to_text(red_to_blue, "ab") == f"{RED_SEQ}a{BLUE_SEQ}b{RESET}"


def test_spaces_are_not_colored(red_to_blue: GradientSpec) -> None:
    assert apply_to_text(red_to_blue, "a b") == f"{RED_SEQ}a {BLUE_SEQ}b{RESET}"


def test_repeated_color_emitted_once() -> None:
    spec = GradientSpec((GradientStop(0.0, RED),))
    assert apply_to_text(spec, "abc") == f"\x1b[31mabc{RESET}"


def test_no_color_profile_leaves_text(red_to_blue: GradientSpec) -> None:
    assert apply_to_text(red_to_blue, "abc", ColorProfile.NO_COLOR) == "abc"


def test_vertical_gradient_on_single_line_runs_horizontally(red_to_blue: GradientSpec) -> None:
    vertical = create_gradient(["#ff0000", "#0000ff"], GradientDirection.VERTICAL)
    assert apply_to_text(vertical, "ab") == apply_to_text(red_to_blue, "ab")


def test_vertical_gradient_over_lines() -> None:
    spec = create_gradient(["#ff0000", "#0000ff"], GradientDirection.VERTICAL)
    assert apply_to_lines(spec, ["aa", "bb"]) == [
        f"{RED_SEQ}aa{RESET}",
        f"{BLUE_SEQ}bb{RESET}",
    ]


def test_multiline_text_uses_block(red_to_blue: GradientSpec) -> None:
    vertical = create_gradient(["#ff0000", "#0000ff"], GradientDirection.VERTICAL)
    assert apply_to_text(vertical, "a\nb") == f"{RED_SEQ}a{RESET}\n{BLUE_SEQ}b{RESET}"


def test_background_gradient(red_to_blue: GradientSpec) -> None:
    rows = background_gradient(red_to_blue, 2, 2, char=" ", background=True)
    assert rows == [f"\x1b[48;2;255;0;0m \x1b[48;2;0;0;255m {RESET}"] * 2
    assert background_gradient(red_to_blue, 0, 2) == []


def test_border_gradient(red_to_blue: GradientSpec) -> None:
    colors = border_gradient(red_to_blue, "───")
    assert colors == [Hex("#ff0000"), Rgb(128, 0, 128), Hex("#0000ff")]
    assert border_gradient(red_to_blue, "") == []


# ============================================================================
# TRANSFORMS
# ============================================================================

def test_shift_clamps_without_wrap() -> None:
    spec = GradientSpec((GradientStop(0.8, RED),))
    assert shift_gradient(spec, 0.5).stops[0].position == 1.0
    assert shift_gradient(spec, -1.0).stops[0].position == 0.0


def test_scale_and_reverse(red_to_blue: GradientSpec) -> None:
    scaled = scale_gradient(red_to_blue, 0.2, 0.6)
    assert [s.position for s in scaled.stops] == pytest.approx([0.2, 0.6])
    reversed_spec = reverse_gradient(red_to_blue)
    assert reversed_spec.stops[0].color == Hex("#0000ff")


def test_rotate_gradient(red_to_blue: GradientSpec) -> None:
    quarter = rotate_gradient(red_to_blue, 90)
    assert quarter.direction is GradientDirection.VERTICAL
    assert quarter.stops == red_to_blue.stops

    half = rotate_gradient(red_to_blue, 180)
    assert half.direction is GradientDirection.HORIZONTAL
    assert half.stops[0].color == Hex("#0000ff")

    assert rotate_gradient(red_to_blue, 360) == red_to_blue
    assert rotate_gradient(rotate_gradient(red_to_blue, 45), -45) == red_to_blue

    radial = GradientSpec(red_to_blue.stops, GradientDirection.RADIAL)
    assert rotate_gradient(radial, 90) is radial


def test_animated_gradient_wraps_time(red_to_blue: GradientSpec) -> None:
    assert animated_gradient(red_to_blue, 1.25) == shift_gradient(red_to_blue, 0.25)


def test_optimize_drops_repeats() -> None:
    spec = create_gradient(["red", "red", "blue"])
    assert len(optimize_gradient(spec).stops) == 2


def test_blend_gradients_endpoints(red_to_blue: GradientSpec) -> None:
    other = create_gradient(["#000000", "#ffffff"])
    assert color_at(blend_gradients(red_to_blue, other, 0.0), 0.0) == Rgb(255, 0, 0)
    assert color_at(blend_gradients(red_to_blue, other, 1.0), 1.0) == Rgb(255, 255, 255)


def test_adaptive_stops_follow_light_mode() -> None:
    swap = Adaptive(light=Rgb(255, 255, 255), dark=Rgb(0, 0, 0))
    spec = GradientSpec(((0.0, swap), (1.0, Rgb(0, 0, 0))))

    assert apply_to_lines(spec, ["abc"], dark_mode=False) == [
        "\x1b[38;2;255;255;255ma\x1b[38;2;128;128;128mb\x1b[38;2;0;0;0mc" + RESET
    ]
    assert apply_to_lines(spec, ["abc"], dark_mode=True) == ["\x1b[38;2;0;0;0mabc" + RESET]
    assert color_at(spec, 0.5, dark_mode=False) == Rgb(128, 128, 128)
    assert background_gradient(spec, 3, 1, dark_mode=False)[0].count("128;128;128") == 1


# ============================================================================
# STRING FORMAT
# ============================================================================

def test_parse_linear_angle() -> None:
    spec = parse_gradient_string("linear-gradient(90deg, red, blue)")
    assert spec.direction is GradientDirection.VERTICAL
    assert [s.color for s in spec.stops] == [RED, BLUE]


def test_parse_keyword_reverses() -> None:
    spec = parse_gradient_string("linear-gradient(to left, red, blue)")
    assert spec.direction is GradientDirection.HORIZONTAL
    assert spec.stops[0].color == BLUE


def test_parse_explicit_positions() -> None:
    spec = parse_gradient_string("linear-gradient(#ff0000 10%, rgb(0, 0, 255) 90%)")
    assert [s.position for s in spec.stops] == pytest.approx([0.1, 0.9])
    assert spec.stops[1].color == Rgb(0, 0, 255)


def test_parse_radial() -> None:
    spec = parse_gradient_string("radial-gradient(circle at 25% 75%, red, blue)")
    assert spec.direction is GradientDirection.RADIAL
    assert spec.center == (0.25, 0.75)


def test_unrecognized_falls_back() -> None:
    assert parse_gradient_string("conic-gradient(red, blue)") is DEFAULT_GRADIENT
    assert parse_gradient_string("linear-gradient(#12, blue)") is DEFAULT_GRADIENT
    assert not validate_gradient_syntax("nonsense")
    assert validate_gradient_syntax("linear-gradient(red, blue)")


def test_convert_gradient_format(red_to_blue: GradientSpec) -> None:
    assert convert_gradient_format(red_to_blue) == "linear-gradient(0deg, #ff0000 0%, #0000ff 100%)"


def test_format_parses_back(red_to_blue: GradientSpec) -> None:
    parsed = parse_gradient_string(convert_gradient_format(red_to_blue))
    assert parsed.direction is GradientDirection.HORIZONTAL
    assert parsed.stops == red_to_blue.stops


def test_to_gradient() -> None:
    assert to_gradient("rainbow") == rainbow()
    assert to_gradient("linear-gradient(red, blue)").stops[1].color == BLUE
