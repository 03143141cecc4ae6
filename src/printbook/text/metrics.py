"""
Module: text.metrics

Purpose:
    Text measurement for the flow engine. The engine only needs a width
    measure, the font ascent and an optional leading; these adapters
    supply them from a Pillow font (raster pages) or from ReportLab's
    font tables (points, for vector-sized layout).

Key Classes:
    - TextMetrics: Protocol the flow engine consumes
    - PillowMetrics: Pillow FreeType font, pixel units
    - ReportLabMetrics: ReportLab standard or registered font, point units

Key Functions:
    - load_font(): First available TrueType font, else Pillow's default

Dependencies:
    - PIL.ImageFont
    - reportlab.pdfbase.pdfmetrics
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol, Sequence

from PIL import ImageFont
from reportlab.pdfbase import pdfmetrics

logger = logging.getLogger(__name__)

DEFAULT_FONT_NAMES = (
    "DejaVuSans.ttf",
    "arial.ttf",
    "Arial.ttf",
    "LiberationSans-Regular.ttf",
)


class TextMetrics(Protocol):
    font_size: float

    def measure_width(self, text: str) -> float: ...

    def ascent(self) -> float: ...

    def leading(self) -> Optional[float]: ...


def load_font(size: int, font_names: Sequence[str] = DEFAULT_FONT_NAMES) -> ImageFont.FreeTypeFont:
    """
    Load the first TrueType font found, falling back to Pillow's default.

    Args:
        size: Font size in pixels
        font_names: Candidate font files, tried in order

    Returns:
        Font object
    """
    for font_name in font_names:
        try:
            return ImageFont.truetype(font_name, size)
        except (IOError, OSError):
            continue

    logger.warning("Could not load TrueType font, using default")
    return ImageFont.load_default(size=size)


class PillowMetrics:
    """
    Metrics from a Pillow font, in pixels.

    Example:
        >>> metrics = PillowMetrics(load_font(18))
        >>> metrics.measure_width("hello") > 0
        True
    """

    def __init__(self, font: ImageFont.FreeTypeFont, leading: Optional[float] = None):
        self.font = font
        self.font_size = float(getattr(font, "size", 10))
        self._leading = leading

    @classmethod
    def from_size(cls, size: int, leading: Optional[float] = None) -> "PillowMetrics":
        return cls(load_font(size), leading=leading)

    def measure_width(self, text: str) -> float:
        return float(self.font.getlength(text))

    def ascent(self) -> float:
        return float(self.font.getmetrics()[0])

    def leading(self) -> Optional[float]:
        return self._leading


class ReportLabMetrics:
    """Metrics from ReportLab's font tables, in points."""

    def __init__(self, font_name: str = "Helvetica", font_size: float = 12, leading: Optional[float] = None):
        # Fails early for fonts ReportLab does not know
        pdfmetrics.getFont(font_name)
        self.font_name = font_name
        self.font_size = float(font_size)
        self._leading = leading

    def measure_width(self, text: str) -> float:
        return pdfmetrics.stringWidth(text, self.font_name, self.font_size)

    def ascent(self) -> float:
        return pdfmetrics.getAscent(self.font_name, self.font_size)

    def leading(self) -> Optional[float]:
        return self._leading
