"""
Module: text.flow

Purpose:
    Lay prose into a rectangular box split into equal columns. Words are
    wrapped greedily to the column width, lines are packed top to bottom
    and columns left to right. Text that does not fit is returned as
    overflow, ready to be laid out in the same box on the next page.

Key Functions:
    - wrap_text(): Greedy word wrap against a width measure
    - layout(): Place wrapped lines into columns, return overflow

Key Classes:
    - TextFlow: Sticky column count and gutter around layout()
    - PlacedLine: One line of text at its baseline position
    - LayoutResult: Placed lines plus overflow text

Dependencies:
    - printbook.text.metrics: TextMetrics protocol (width, ascent, leading)

Used By:
    - printbook.text.render: draw_lines()
    - Application drawing code
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, List, Tuple

from printbook.text.metrics import TextMetrics

logger = logging.getLogger(__name__)

DEFAULT_GUTTER = 20.0
LEADING_FACTOR = 1.25


@dataclass(frozen=True)
class PlacedLine:
    """
    A line of text positioned at its baseline.

    Attributes:
        text: Line content
        x: Left edge of the column
        y: Baseline
        column: 0-based column index
    """

    text: str
    x: float
    y: float
    column: int = 0


@dataclass(frozen=True)
class LayoutResult:
    """Lines placed in the box and the text that did not fit."""

    lines: Tuple[PlacedLine, ...]
    overflow: str = ""

    @property
    def has_overflow(self) -> bool:
        return self.overflow != ""

    @property
    def texts(self) -> List[str]:
        return [line.text for line in self.lines]


def wrap_text(text: str, max_width: float, measure: Callable[[str], float]) -> List[str]:
    """
    Greedy word wrap.

    Paragraphs are split on newlines and empty paragraphs give empty
    lines. Words are split on single spaces, and a paragraph of only
    spaces gives no line. A word wider than `max_width` stays whole on
    its own line.

    Example:
        >>> wrap_text("aa bb cc", 5, len)
        ['aa bb', 'cc']
    """
    lines: List[str] = []
    for paragraph in text.split("\n"):
        if paragraph == "":
            lines.append("")
            continue

        line = ""
        for word in paragraph.split(" "):
            if word == "":
                continue
            candidate = f"{line} {word}" if line else word
            if line and measure(candidate) > max_width:
                lines.append(line)
                line = word
            else:
                line = candidate
        # Paragraphs of only spaces produce no line
        if line:
            lines.append(line)
    return lines


def resolve_leading(metrics: TextMetrics) -> float:
    """Line advance: the metrics' leading when positive, else 1.25 x font size."""
    leading = metrics.leading()
    if leading is None or leading <= 0:
        return LEADING_FACTOR * metrics.font_size
    return leading


def max_lines_per_column(box_h: float, ascent: float, leading: float) -> int:
    """How many baselines fit in a column; always at least one."""
    return max(1, math.floor((box_h - ascent) / leading) + 1)


def layout(
    text: str,
    x: float,
    y: float,
    w: float,
    h: float,
    columns: int,
    gutter: float,
    metrics: TextMetrics,
) -> LayoutResult:
    """
    Lay text into a box of `columns` columns separated by `gutter`.

    Args:
        text: Text to place
        x, y: Top-left of the box
        w, h: Box size
        columns: Column count, clamped to at least 1
        gutter: Space between columns
        metrics: Width, ascent and leading source

    Returns:
        LayoutResult with placed lines and overflow joined by newlines
    """
    if text == "":
        return LayoutResult(lines=(), overflow="")

    columns = max(1, math.floor(columns))
    column_width = (w - gutter * (columns - 1)) / columns
    ascent = metrics.ascent()
    leading = resolve_leading(metrics)
    per_column = max_lines_per_column(h, ascent, leading)

    wrapped = wrap_text(text, column_width, metrics.measure_width)

    placed: List[PlacedLine] = []
    index = 0
    for column in range(columns):
        if index >= len(wrapped):
            break
        col_x = x + column * (column_width + gutter)
        for row in range(per_column):
            if index >= len(wrapped):
                break
            placed.append(PlacedLine(wrapped[index], col_x, y + ascent + row * leading, column))
            index += 1

    overflow = "\n".join(wrapped[index:])
    if overflow:
        logger.debug(f"Placed {len(placed)} lines, {len(wrapped) - index} overflow")
    return LayoutResult(lines=tuple(placed), overflow=overflow)


class TextFlow:
    """
    Column layout with sticky settings.

    Column count and gutter persist across layout() calls, so a story
    can be continued page after page with the same column structure.

    Example:
        >>> flow = TextFlow().set_columns(2, gutter=12)
        >>> result = flow.layout(story, 36, 36, 540, 720, metrics)
        >>> while result.has_overflow:
        ...     result = flow.layout(result.overflow, 36, 36, 540, 720, metrics)
    """

    def __init__(self, columns: int = 1, gutter: float = DEFAULT_GUTTER):
        self._columns = 1
        self._gutter = DEFAULT_GUTTER
        self.columns = columns
        self.gutter = gutter

    @property
    def columns(self) -> int:
        return self._columns

    @columns.setter
    def columns(self, value: float) -> None:
        self._columns = max(1, math.floor(value))

    @property
    def gutter(self) -> float:
        return self._gutter

    @gutter.setter
    def gutter(self, value: float) -> None:
        self._gutter = float(value)

    def set_columns(self, columns: float, gutter: float = None) -> "TextFlow":
        """Set column count (and gutter when given); returns self."""
        self.columns = columns
        if gutter is not None:
            self.gutter = gutter
        return self

    def layout(
        self,
        text: str,
        box_x: float,
        box_y: float,
        box_w: float,
        box_h: float,
        metrics: TextMetrics,
    ) -> LayoutResult:
        return layout(text, box_x, box_y, box_w, box_h, self._columns, self._gutter, metrics)
