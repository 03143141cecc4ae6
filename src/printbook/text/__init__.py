"""
Module: text

Purpose:
    Multi-column text flow with overflow, plus the font metrics adapters
    and raster rendering that go with it.
"""

from .metrics import PillowMetrics, ReportLabMetrics, TextMetrics, load_font
from .flow import (
    DEFAULT_GUTTER,
    LayoutResult,
    PlacedLine,
    TextFlow,
    layout,
    wrap_text,
)
from .render import draw_lines

__all__ = [
    "DEFAULT_GUTTER",
    "LayoutResult",
    "PlacedLine",
    "PillowMetrics",
    "ReportLabMetrics",
    "TextFlow",
    "TextMetrics",
    "draw_lines",
    "layout",
    "load_font",
    "wrap_text",
]
