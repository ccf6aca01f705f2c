"""End-to-end tests of the style renderer."""

import pytest

import pngn_render
from pngn_color import Adaptive, Ansi16, ColorProfile, Rgb
from pngn_config import reload_config
from pngn_gradient import create_gradient
from pngn_layout import LayoutDirection, StackNode, TextNode
from pngn_render import ANSI, StyleRenderer, TerminalCapability, render
from pngn_style import Style
from pngn_width import get_width

RESET = ANSI.RESET


# ============================================================================
# ESCAPE CONTRACT
# ============================================================================

def test_empty_content(renderer: StyleRenderer, truecolor: TerminalCapability) -> None:
    assert renderer.render("", Style().bold(), truecolor) == "\x1b[1m\x1b[0m"
    assert renderer.render("", Style(), truecolor) == ""
    assert renderer.render("", Style().foreground("red"), truecolor) == ""


def test_plain_text_passes_through(renderer: StyleRenderer, truecolor: TerminalCapability) -> None:
    assert renderer.render("hi", None, truecolor) == "hi"


def test_decorations_before_colors(renderer: StyleRenderer, truecolor: TerminalCapability) -> None:
    s = Style().foreground(Rgb(1, 2, 3)).bold()
    assert renderer.render("hi", s, truecolor) == f"\x1b[1m\x1b[38;2;1;2;3mhi{RESET}"


def test_decoration_order_is_fixed(renderer: StyleRenderer, truecolor: TerminalCapability) -> None:
    s = Style().hidden().strikethrough().underline().bold().faint()
    assert renderer.render("x", s, truecolor) == f"\x1b[1m\x1b[2m\x1b[4m\x1b[9m\x1b[8mx{RESET}"


def test_every_line_is_wrapped(renderer: StyleRenderer, truecolor: TerminalCapability) -> None:
    s = Style().italic()
    assert renderer.render("a\nb", s, truecolor) == f"\x1b[3ma{RESET}\n\x1b[3mb{RESET}"


def test_profile_downgrade(renderer: StyleRenderer) -> None:
    s = Style().foreground(Rgb(255, 127, 80))
    assert renderer.render("x", s, TerminalCapability(ColorProfile.ANSI256)) == f"\x1b[38;5;210mx{RESET}"
    assert renderer.render("x", s, TerminalCapability(ColorProfile.ANSI16)) == f"\x1b[91mx{RESET}"


def test_no_color_keeps_decorations(renderer: StyleRenderer) -> None:
    s = Style().foreground("red").bold()
    no_color = TerminalCapability(ColorProfile.NO_COLOR)
    assert renderer.render("hi", s, no_color) == f"\x1b[1mhi{RESET}"
    assert renderer.render("hi", Style().foreground("red"), no_color) == "hi"


def test_adaptive_color_follows_mode(renderer: StyleRenderer) -> None:
    s = Style().foreground(Adaptive(light=Ansi16(0), dark=Ansi16(7)))
    dark = TerminalCapability(ColorProfile.ANSI16, dark_mode=True)
    light = TerminalCapability(ColorProfile.ANSI16, dark_mode=False)
    assert renderer.render("x", s, dark) == f"\x1b[37mx{RESET}"
    assert renderer.render("x", s, light) == f"\x1b[30mx{RESET}"


# ============================================================================
# BOX MODEL
# ============================================================================

def test_border(renderer: StyleRenderer, truecolor: TerminalCapability) -> None:
    out = renderer.render("hi", Style().border("normal"), truecolor)
    assert out == "┌──┐\n│hi│\n└──┘"


def test_border_uses_only_border_colors(renderer: StyleRenderer, truecolor: TerminalCapability) -> None:
    s = Style().border("normal").foreground(Rgb(0, 255, 0))
    assert renderer.render("hi", s, truecolor).split("\n") == [
        "┌──┐",
        f"│\x1b[38;2;0;255;0mhi{RESET}│",
        "└──┘",
    ]


def test_border_colors(renderer: StyleRenderer, truecolor: TerminalCapability) -> None:
    red = "\x1b[38;2;255;0;0m"
    s = Style().border("normal").border_foreground(Rgb(255, 0, 0))
    assert renderer.render("hi", s, truecolor).split("\n") == [
        f"{red}┌──┐{RESET}",
        f"{red}│{RESET}hi{red}│{RESET}",
        f"{red}└──┘{RESET}",
    ]


def test_border_sides(renderer: StyleRenderer, truecolor: TerminalCapability) -> None:
    s = Style().border("ascii").border_left(False).border_right(False)
    assert renderer.render("hi", s, truecolor) == "----\n hi \n----"
    hidden = Style().border("ascii", sides=0)
    assert renderer.render("hi", hidden, truecolor) == "hi"


def test_padding_is_styled_margin_is_not(renderer: StyleRenderer, truecolor: TerminalCapability) -> None:
    s = Style().padding(0, 1).background(Ansi16(4)).margin_left(2)
    assert renderer.render("hi", s, truecolor) == f"  \x1b[44m hi {RESET}"


def test_margin_adds_blank_lines(renderer: StyleRenderer, truecolor: TerminalCapability) -> None:
    assert renderer.render("hi", Style().margin(1, 0, 0, 2), truecolor) == "\n  hi"


def test_box_width(renderer: StyleRenderer, truecolor: TerminalCapability) -> None:
    s = Style().border("rounded").padding(0, 1)
    lines = renderer.render("one\nthree", s, truecolor).split("\n")
    assert len(lines) == 4
    assert {get_width(line) for line in lines} == {9}


def test_fixed_width_centers(renderer: StyleRenderer, truecolor: TerminalCapability) -> None:
    assert renderer.render("hi", Style().width(6).center(), truecolor) == "  hi  "


def test_capability_width_overrides(renderer: StyleRenderer) -> None:
    narrow = TerminalCapability(ColorProfile.TRUE_COLOR, width=4)
    assert renderer.render("hi", Style().width(10), narrow) == "hi  "


def test_wrapping_with_ellipsis(renderer: StyleRenderer, truecolor: TerminalCapability) -> None:
    s = Style().width(5).overflow("ellipsis")
    assert renderer.render("abcdefghij", s, truecolor) == "ab..."


def test_inline_skips_box_model(renderer: StyleRenderer, truecolor: TerminalCapability) -> None:
    s = Style().inline().padding(1).border("normal")
    assert renderer.render("a\nb", s, truecolor) == "a b"


# ============================================================================
# GRADIENTS
# ============================================================================

def test_gradient_foreground(renderer: StyleRenderer, truecolor: TerminalCapability) -> None:
    gradient = create_gradient(["#ff0000", "#0000ff"])
    out = renderer.render("ab", Style().foreground("green"), truecolor, gradient=gradient)
    assert out == f"\x1b[38;2;255;0;0ma\x1b[38;2;0;0;255mb{RESET}"


def test_gradient_keeps_decorations(renderer: StyleRenderer, truecolor: TerminalCapability) -> None:
    gradient = create_gradient(["#ff0000", "#0000ff"])
    out = renderer.render("ab", Style().bold(), truecolor, gradient=gradient)
    assert out == f"\x1b[1m\x1b[38;2;255;0;0ma\x1b[38;2;0;0;255mb{RESET}"


def test_gradient_string(renderer: StyleRenderer, truecolor: TerminalCapability) -> None:
    out = renderer.render("ab", None, truecolor, gradient="linear-gradient(90deg, #ff0000, #0000ff)")
    # Vertical gradient on one line runs across it
    assert out == f"\x1b[38;2;255;0;0ma\x1b[38;2;0;0;255mb{RESET}"


# ============================================================================
# CONTENT TREES
# ============================================================================

def test_horizontal_stack(renderer: StyleRenderer, truecolor: TerminalCapability) -> None:
    tree = StackNode([TextNode("a"), TextNode("b\nc")], LayoutDirection.HORIZONTAL, gap=1)
    assert renderer.render_tree(tree, truecolor) == "a b\n  c"


def test_stack_frame(renderer: StyleRenderer, truecolor: TerminalCapability) -> None:
    tree = StackNode([TextNode("ab"), TextNode("c")], style=Style().border("ascii"))
    assert renderer.render_tree(tree, truecolor) == "+--+\n|ab|\n|c |\n+--+"


def test_stack_style_is_inherited(renderer: StyleRenderer, truecolor: TerminalCapability) -> None:
    tree = StackNode([TextNode("x"), TextNode("y", Style().italic())], style=Style().bold())
    assert renderer.render_tree(tree, truecolor).split("\n") == [
        f"\x1b[1mx{RESET}",
        f"\x1b[1m\x1b[3my{RESET}",
    ]


def test_leaf_size_hints(renderer: StyleRenderer, truecolor: TerminalCapability) -> None:
    tree = StackNode([TextNode("a", width=3), TextNode("b")], LayoutDirection.HORIZONTAL)
    assert renderer.render_tree(tree, truecolor) == "a  b"


def test_render_tree_rejects_other_values(renderer: StyleRenderer) -> None:
    with pytest.raises(TypeError):
        renderer.render_tree("not a node")


# ============================================================================
# CACHING AND DEFAULTS
# ============================================================================

def test_sequences_are_cached(renderer: StyleRenderer, truecolor: TerminalCapability) -> None:
    s = Style().bold().foreground("red")
    renderer.render("one", s, truecolor)
    renderer.render("two", Style().foreground("red").bold(), truecolor)

    stats = renderer.cache_stats()
    assert stats['sequence_cache']['computations'] == 1
    assert stats['sequence_cache']['hits'] == 1
    assert stats['size'] == stats['width_cache']['size'] + stats['sequence_cache']['size']


def test_clear_caches(renderer: StyleRenderer, truecolor: TerminalCapability) -> None:
    renderer.render("hi", Style().bold().border("normal"), truecolor)
    renderer.clear_caches()
    assert renderer.cache_stats()['size'] == 0


def test_render_stats(renderer: StyleRenderer, truecolor: TerminalCapability) -> None:
    renderer.render("a", None, truecolor)
    renderer.render("b", None, truecolor)
    stats = renderer.get_stats()
    assert stats['renders'] == 2
    assert stats['avg_render_time_ms'] >= 0.0
    assert 'caches' in stats


def test_module_level_render() -> None:
    assert render("", Style().bold(), TerminalCapability()) == "\x1b[1m\x1b[0m"
    assert pngn_render.measure_width("你好") == 4
    assert 'width_cache' in pngn_render.cache_stats()


def test_capability_from_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.setenv("PNGN_LIGHT_MODE", "1")
    assert reload_config()

    capability = TerminalCapability.from_config()
    assert capability.profile is ColorProfile.NO_COLOR
    assert capability.dark_mode is False
    assert render("hi", Style().foreground("red")) == "hi"
