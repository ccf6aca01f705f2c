#!/usr/bin/env python3
"""
🐧 PNGN Styler - Layout / Text-Flow Module
==========================================
Copyright (c) 2025 PNGN-Tec LLC

Text Flow and Block Composition
===============================
Turns raw content into a block of lines that fits the requested size,
and composes blocks next to and above each other.

Core Features
=============
- Case transforms before layout
- Greedy word wrapping with overflow and word-break policies
- Horizontal alignment (left, center, right, justify)
- Vertical alignment with padding or truncation to a height
- Padding and margin around blocks
- Horizontal/vertical joins and placement inside a fixed area
- Content tree nodes (text leaves and stacks)

Box Model Order
===============
content -> wrap/align -> padding -> border -> margin

All measurements are display widths: wide characters count 2 columns,
combining marks, control characters and escape sequences count none.

Module Interface
================
- flow_text(): Full text-flow pipeline for one leaf
- wrap_line() / wrap_lines(): Word wrapping
- align_horizontal() / align_vertical(): Alignment
- apply_padding() / apply_margin(): Spacing
- join_horizontal() / join_vertical() / place(): Composition
- TextNode / StackNode: Content tree
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Union

from pngn_style import (
    HorizontalAlign, VerticalAlign, Overflow, WordBreak,
    Spacing, Style, StyleProps, TextTransform,
)
from pngn_width import WidthCalculator, get_default_calculator

# Configure logging
logger = logging.getLogger('pngn_layout')

# Relative positions for joins and placement
TOP = LEFT = 0.0
CENTER = 0.5
BOTTOM = RIGHT = 1.0

Block = Union[str, Sequence[str]]


def _calc(calculator: Optional[WidthCalculator]) -> WidthCalculator:
    return calculator if calculator is not None else get_default_calculator()


def _lines(block: Block) -> List[str]:
    if isinstance(block, str):
        return block.split("\n")
    return list(block)


def _clamp_position(position: float) -> float:
    return min(1.0, max(0.0, position))


# ============================================================================
# TRANSFORM AND WRAP
# ============================================================================

def apply_transform(text: str, transform: Optional[TextTransform]) -> str:
    """Apply a case transform; None leaves text unchanged."""
    if transform is None:
        return text
    return transform.apply(text)


def _break_word(word: str, width: int, calc: WidthCalculator) -> List[str]:
    """Hard-split a word into chunks of at most width columns."""
    chunks = []
    rest = word
    while rest:
        chunk = calc.take_width(rest, width)
        if not chunk:
            # A single character wider than the line
            chunk = rest[0]
        chunks.append(chunk)
        rest = rest[len(chunk):]
    return chunks


def wrap_line(line: str,
              width: Optional[int],
              overflow: Optional[Overflow] = None,
              word_break: Optional[WordBreak] = None,
              ellipsis: str = "...",
              calculator: Optional[WidthCalculator] = None) -> List[str]:
    """
    Greedy word wrap of a single line.

    Words are packed while the line stays within width. A word wider than
    width sits alone on its own overflowing line unless overflow is
    ELLIPSIS (truncated with a marker) or HIDDEN (hard-truncated), or
    word_break is BREAK_ALL (split across lines). Overflow VISIBLE
    disables wrapping.

    Args:
        line: Text without newlines
        width: Target width (None or <= 0 disables wrapping)
        overflow: Overflow policy (None behaves like WRAP)
        word_break: Long-word policy
        ellipsis: Marker used by the ELLIPSIS policy
        calculator: Width calculator (default shared one if None)

    Returns:
        Wrapped lines
    """
    if width is None or width <= 0 or overflow is Overflow.VISIBLE:
        return [line]

    calc = _calc(calculator)
    if calc.get_width(line) <= width:
        return [line]

    wrapped: List[str] = []
    current = ""
    for word in line.split(" "):
        if calc.get_width(word) > width:
            if current:
                wrapped.append(current)
            current = ""
            if word_break is WordBreak.BREAK_ALL:
                pieces = _break_word(word, width, calc)
                wrapped.extend(pieces[:-1])
                current = pieces[-1]
            elif overflow is Overflow.ELLIPSIS:
                wrapped.append(calc.truncate(word, width, ellipsis))
            elif overflow is Overflow.HIDDEN:
                wrapped.append(calc.take_width(word, width))
            else:
                wrapped.append(word)
            continue

        candidate = current + " " + word if current else word
        if calc.get_width(candidate) <= width:
            current = candidate
        else:
            if current:
                wrapped.append(current)
            current = word

    if current:
        wrapped.append(current)
    return wrapped or [""]


def wrap_lines(lines: Sequence[str], width: Optional[int], **options) -> List[str]:
    """wrap_line() over several lines, flattened."""
    result: List[str] = []
    for line in lines:
        result.extend(wrap_line(line, width, **options))
    return result


# ============================================================================
# ALIGNMENT
# ============================================================================

def _justify(line: str, width: int, calc: WidthCalculator) -> str:
    words = line.split()
    if len(words) < 2:
        return calc.pad_right(line, width)

    gaps = len(words) - 1
    spaces = width - sum(calc.get_width(word) for word in words)
    if spaces < gaps:
        return line
    base, extra = divmod(spaces, gaps)

    parts = []
    for index, word in enumerate(words[:-1]):
        parts.append(word)
        # Remainder goes to the earliest gaps
        parts.append(" " * (base + (1 if index < extra else 0)))
    parts.append(words[-1])
    return "".join(parts)


def align_horizontal(line: str,
                     width: int,
                     align: Optional[HorizontalAlign] = HorizontalAlign.LEFT,
                     calculator: Optional[WidthCalculator] = None) -> str:
    """
    Pad a line to width columns.

    Lines already at least width wide are returned unchanged. Center puts
    floor(diff / 2) spaces before the text.

    Example:
        >>> align_horizontal("hi", 5, HorizontalAlign.CENTER)
        ' hi  '
    """
    calc = _calc(calculator)
    diff = width - calc.get_width(line)
    if diff <= 0:
        return line

    if align is HorizontalAlign.RIGHT:
        return " " * diff + line
    if align is HorizontalAlign.CENTER:
        left = diff // 2
        return " " * left + line + " " * (diff - left)
    if align is HorizontalAlign.JUSTIFY:
        return _justify(line, width, calc)
    return line + " " * diff


def align_vertical(lines: Sequence[str],
                   height: int,
                   align: Optional[VerticalAlign] = VerticalAlign.TOP) -> List[str]:
    """
    Pad or truncate a block to exactly height lines.

    Extra lines are dropped from the end; blank lines are added above,
    below or around the content. Lines are never reordered.
    """
    lines = list(lines)
    if len(lines) >= height:
        return lines[:max(height, 0)]

    missing = height - len(lines)
    if align is VerticalAlign.BOTTOM:
        return [""] * missing + lines
    if align is VerticalAlign.MIDDLE:
        top = missing // 2
        return [""] * top + lines + [""] * (missing - top)
    return lines + [""] * missing


# ============================================================================
# SPACING
# ============================================================================

def apply_padding(lines: Sequence[str],
                  padding: Optional[Spacing],
                  calculator: Optional[WidthCalculator] = None) -> List[str]:
    """
    Surround a block with blank cells.

    Lines are first right-padded to the block width so the padded block is
    rectangular.
    """
    lines = list(lines)
    if padding is None or padding.is_zero():
        return lines

    calc = _calc(calculator)
    width = calc.max_width(lines)
    left = " " * padding.left
    right = " " * padding.right
    blank = " " * (width + padding.horizontal)

    body = [left + calc.pad_right(line, width) + right for line in lines]
    return [blank] * padding.top + body + [blank] * padding.bottom


def apply_margin(lines: Sequence[str], margin: Optional[Spacing]) -> List[str]:
    """
    Offset a block with unstyled space.

    Adds blank lines above and below and spaces on the left. The right
    margin produces no trailing characters.
    """
    lines = list(lines)
    if margin is None or margin.is_zero():
        return lines

    left = " " * margin.left
    return [""] * margin.top + [left + line for line in lines] + [""] * margin.bottom


def pad_block(lines: Sequence[str], width: int,
              calculator: Optional[WidthCalculator] = None) -> List[str]:
    """Right-pad every line to width columns."""
    calc = _calc(calculator)
    return [calc.pad_right(line, width) for line in lines]


# ============================================================================
# TEXT FLOW
# ============================================================================

def flow_text(text: str,
              props: StyleProps,
              width: Optional[int] = None,
              height: Optional[int] = None,
              ellipsis: str = "...",
              calculator: Optional[WidthCalculator] = None) -> List[str]:
    """
    Lay out content for one styled leaf, before padding and borders.

    Steps: transform, split on newlines, wrap, align horizontally, then
    fit the height.

    Args:
        text: Raw content
        props: Resolved style properties
        width: Fixed width overriding props.width
        height: Fixed height overriding props.height
        ellipsis: Marker for the ELLIPSIS overflow policy
        calculator: Width calculator

    Width Rules:
    - A fixed width wraps and aligns every line to exactly that width
    - max_width only wraps
    - min_width pads narrower blocks up
    - With an alignment but no width, lines align within the widest line

    Height Rules:
    - A fixed height pads or truncates (default top alignment)
    - min_height pads, max_height truncates
    """
    calc = _calc(calculator)
    text = apply_transform(text, props.transform)
    lines = text.split("\n")

    fixed_width = width if width is not None else props.width
    wrap_width = fixed_width if fixed_width is not None else props.max_width
    if wrap_width:
        lines = wrap_lines(lines, wrap_width,
                           overflow=props.overflow,
                           word_break=props.word_break,
                           ellipsis=ellipsis,
                           calculator=calc)

    target = fixed_width
    block_width = calc.max_width(lines)
    if target is None and props.min_width is not None and block_width < props.min_width:
        target = props.min_width
    if target is None and props.horizontal_align is not None:
        target = block_width
    if target is not None:
        align = props.horizontal_align or HorizontalAlign.LEFT
        lines = [align_horizontal(line, target, align, calc) for line in lines]

    fixed_height = height if height is not None else props.height
    if fixed_height is None:
        if props.min_height is not None and len(lines) < props.min_height:
            fixed_height = props.min_height
        elif props.max_height is not None and len(lines) > props.max_height:
            fixed_height = props.max_height
    if fixed_height is not None:
        lines = align_vertical(lines, fixed_height, props.vertical_align or VerticalAlign.TOP)

    return lines


# ============================================================================
# COMPOSITION
# ============================================================================

def join_horizontal(blocks: Sequence[Block],
                    position: float = TOP,
                    gap: int = 0,
                    calculator: Optional[WidthCalculator] = None) -> List[str]:
    """
    Place blocks side by side.

    Shorter blocks get floor(missing * position) blank lines above them,
    so 0.0 aligns tops, 0.5 centers and 1.0 aligns bottoms. Every block is
    padded to its own width.
    """
    calc = _calc(calculator)
    parts = [_lines(block) for block in blocks]
    if not parts:
        return []

    position = _clamp_position(position)
    height = max(len(part) for part in parts)
    rows = [""] * height
    separator = " " * max(gap, 0)

    for index, part in enumerate(parts):
        width = calc.max_width(part)
        missing = height - len(part)
        top = int(math.floor(missing * position))
        padded = [""] * top + part + [""] * (missing - top)
        for row, line in enumerate(padded):
            if index > 0:
                rows[row] += separator
            rows[row] += calc.pad_right(line, width)
    return rows


def join_vertical(blocks: Sequence[Block],
                  position: float = LEFT,
                  gap: int = 0,
                  calculator: Optional[WidthCalculator] = None) -> List[str]:
    """
    Stack blocks on top of each other.

    Narrower lines get floor(missing * position) spaces on the left and
    the rest on the right, so every line has the same width.
    """
    calc = _calc(calculator)
    parts = [_lines(block) for block in blocks]
    if not parts:
        return []

    position = _clamp_position(position)
    width = max(calc.max_width(part) for part in parts)

    rows: List[str] = []
    for index, part in enumerate(parts):
        if index > 0:
            rows.extend([" " * width] * max(gap, 0))
        for line in part:
            missing = width - calc.get_width(line)
            left = int(math.floor(missing * position))
            rows.append(" " * left + line + " " * (missing - left))
    return rows


def place(width: int, height: int,
          horizontal: float, vertical: float,
          block: Block,
          calculator: Optional[WidthCalculator] = None) -> List[str]:
    """
    Position a block inside a width x height area.

    A block larger than the area in either dimension is not cut in that
    dimension.
    """
    calc = _calc(calculator)
    lines = _lines(block)
    content_width = calc.max_width(lines)

    if content_width < width:
        missing = width - content_width
        left = int(math.floor(missing * _clamp_position(horizontal)))
        lines = [" " * left + calc.pad_right(line, content_width) + " " * (missing - left)
                 for line in lines]
        row_width = width
    else:
        row_width = content_width

    if len(lines) < height:
        missing = height - len(lines)
        top = int(math.floor(missing * _clamp_position(vertical)))
        blank = " " * row_width
        lines = [blank] * top + lines + [blank] * (missing - top)

    return lines


# ============================================================================
# CONTENT TREE
# ============================================================================

class LayoutDirection(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass
class TextNode:
    """Leaf of the content tree: text with an optional style and size hints."""
    text: str
    style: Optional[Style] = None
    width: Optional[int] = None
    height: Optional[int] = None


@dataclass
class StackNode:
    """
    Container laying out children in a row or column.

    align is a relative position (0.0 start, 0.5 center, 1.0 end) across
    the stacking axis. The style contributes padding, border and margin
    around the joined children, and acts as the parent style of children.
    """
    children: List[Union["TextNode", "StackNode"]] = field(default_factory=list)
    direction: LayoutDirection = LayoutDirection.VERTICAL
    gap: int = 0
    align: float = 0.0
    style: Optional[Style] = None


Node = Union[TextNode, StackNode]
