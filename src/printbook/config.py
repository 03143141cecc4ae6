"""
Module: config

Purpose:
    Configuration dataclass for a book. Immutable configuration with
    validation on construction.

Key Classes:
    - BookConfig: Trim size, unit, page target, output name

Key Functions:
    - BookConfig.from_format(): Build a config from a named page format

Dependencies:
    - reportlab.lib.pagesizes: Named page format tables
    - printbook.core.units: Unit validation

Used By:
    - printbook.book.document: Book state
    - printbook.output.writer: Page sizes
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from reportlab.lib import pagesizes

from printbook.core.units import from_reference_units, to_reference_units, validate_unit

DEFAULT_FILENAME = "book.pdf"
DEFAULT_UNIT = "in"
DEFAULT_CANVAS_WIDTH_PX = 500
DEFAULT_JPEG_QUALITY = 92

# Named formats, (width, height) in points
PAGE_FORMATS: Dict[str, Tuple[float, float]] = {
    "a3": pagesizes.A3,
    "a4": pagesizes.A4,
    "a5": pagesizes.A5,
    "a6": pagesizes.A6,
    "b5": pagesizes.B5,
    "letter": pagesizes.LETTER,
    "legal": pagesizes.LEGAL,
    "tabloid": pagesizes.ELEVENSEVENTEEN,
}


@dataclass(frozen=True)
class BookConfig:
    """
    Configuration for a book (immutable).

    Attributes:
        trim_width: Final cut width, in `unit`
        trim_height: Final cut height, in `unit`
        unit: Document unit ("in", "cm", "mm", "pt", "px")
        total_pages: Target page count, or None for an open-ended book
        filename: Default output filename
        canvas_width_px: Pixel width of a captured trim frame
        jpeg_quality: JPEG quality used when embedding page rasters

    Example:
        >>> config = BookConfig(trim_width=4, trim_height=6, total_pages=8)
        >>> config.canvas_size_px
        (500, 750)
    """

    trim_width: float
    trim_height: float
    unit: str = DEFAULT_UNIT
    total_pages: Optional[int] = None
    filename: str = DEFAULT_FILENAME
    canvas_width_px: int = DEFAULT_CANVAS_WIDTH_PX
    jpeg_quality: int = DEFAULT_JPEG_QUALITY

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.trim_width <= 0:
            raise ValueError(f"trim_width must be positive: {self.trim_width}")
        if self.trim_height <= 0:
            raise ValueError(f"trim_height must be positive: {self.trim_height}")
        # Normalise long unit names ("inch") to their token
        object.__setattr__(self, "unit", validate_unit(self.unit))
        if self.total_pages is not None and self.total_pages < 1:
            raise ValueError(f"total_pages must be positive: {self.total_pages}")
        if self.canvas_width_px <= 0:
            raise ValueError(f"canvas_width_px must be positive: {self.canvas_width_px}")
        if not 1 <= self.jpeg_quality <= 95:
            raise ValueError(f"jpeg_quality must be in 1..95: {self.jpeg_quality}")
        if not self.filename:
            raise ValueError("filename must not be empty")

    @classmethod
    def from_format(
        cls,
        name: str,
        total_pages: Optional[int] = None,
        filename: str = DEFAULT_FILENAME,
        **kwargs,
    ) -> "BookConfig":
        """
        Build a millimetre config from a named page format like "a5".

        Raises:
            ValueError: If the format name is unknown
        """
        key = name.lower()
        if key not in PAGE_FORMATS:
            raise ValueError(
                f"Unknown page format '{name}'. Available: {list(PAGE_FORMATS)}"
            )
        width_pt, height_pt = PAGE_FORMATS[key]
        return cls(
            trim_width=from_reference_units(to_reference_units(width_pt, "pt"), "mm"),
            trim_height=from_reference_units(to_reference_units(height_pt, "pt"), "mm"),
            unit="mm",
            total_pages=total_pages,
            filename=filename,
            **kwargs,
        )

    @property
    def canvas_height_px(self) -> int:
        """Frame height in pixels, following the trim aspect ratio."""
        return round(self.canvas_width_px * self.trim_height / self.trim_width)

    @property
    def canvas_size_px(self) -> Tuple[int, int]:
        return (self.canvas_width_px, self.canvas_height_px)

    @property
    def is_landscape(self) -> bool:
        return self.trim_width > self.trim_height
