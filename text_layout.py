"""
Text layout helpers for drawing Hebrew on a PDF page.

The PDF drawing primitive places a run of characters left to right from a
baseline point and does no bidirectional reordering. This module provides:
- RTL token layout: draw the words of a right-to-left phrase in reversed
  order so the phrase reads correctly
- Visual-order conversion of a single run for LTR-only renderers
"""

from typing import Any, List, NamedTuple, Protocol, Sequence, Union

import arabic_reshaper
from bidi.algorithm import get_display


class FontMetrics(Protocol):
    """Anything that can measure a run of text at a given size, in points."""

    def width_of_text_at_size(self, text: str, size: float) -> float:
        ...


class DrawInstruction(NamedTuple):
    """One literal run of text to draw at an absolute position."""

    text: str
    x: float
    y: float
    size: float
    font: Any


# ========= TEXT HELPERS =========
def fix_hebrew(text: str) -> str:
    """Convert Hebrew text to visual (LTR drawing) order."""
    if not text:
        return text
    return get_display(arabic_reshaper.reshape(text))


def split_tokens(phrase: str) -> List[str]:
    """Split a phrase into tokens on whitespace, keeping logical order."""
    return phrase.split()


def visual_order(tokens: Sequence[str]) -> List[str]:
    """Reverse logical token order into drawing order (applying it twice restores the input)."""
    return list(reversed(tokens))


# ========= RTL LAYOUT =========
def layout_rtl(
    tokens: Union[str, Sequence[str]],
    start_x: float,
    y: float,
    font: FontMetrics,
    size: float,
) -> List[DrawInstruction]:
    """
    Lay out a right-to-left phrase as separate left-to-right draw calls.

    Tokens are drawn in reversed order starting at start_x. After each token
    the cursor advances by the token width plus one space width, both
    measured with the same font and size. Every instruction shares the same
    baseline; there is no wrapping.

    Args:
        tokens: Phrase to split on whitespace, or tokens in logical order
        start_x: X coordinate of the leftmost token
        y: Baseline Y coordinate
        font: Font used for measuring
        size: Font size in points

    Returns:
        Draw instructions in visual (left to right) order
    """
    if isinstance(tokens, str):
        tokens = split_tokens(tokens)

    instructions: List[DrawInstruction] = []
    if not tokens:
        return instructions

    space_width = font.width_of_text_at_size(" ", size)
    current_x = start_x

    for token in visual_order(tokens):
        instructions.append(DrawInstruction(token, current_x, y, size, font))
        current_x += font.width_of_text_at_size(token, size) + space_width

    return instructions


def layout_plain(text: str, x: float, y: float, font: FontMetrics, size: float) -> List[DrawInstruction]:
    """A single run drawn as-is at (x, y)."""
    if not text:
        return []
    return [DrawInstruction(text, x, y, size, font)]
