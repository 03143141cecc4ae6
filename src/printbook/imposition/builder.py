"""
Module: imposition.builder

Purpose:
    Build a two-up document from captured page rasters and a spread
    ordering. Solo spreads render at trim + 2 x bleed; paired spreads
    render landscape at 2 x trim + 2 x bleed with the inner bleed removed.

Key Functions:
    - build_spread_document(): Render spreads through a DocumentWriter

Key Classes:
    - SheetGeometry: Trim, bleed, unit and mark settings for output sheets

Failure Policy:
    Every spread is validated before anything is written. A bad ordering
    fails the whole build; the writer never receives a partial document.

Dependencies:
    - PIL: Spread rasters
    - printbook.imposition.compositor: composite_spread()
    - printbook.book.marks: Mark geometry
    - printbook.output.writer: DocumentWriter, RasterPlacement

Used By:
    - printbook.book.document: save() in spread mode, save_saddle_stitch()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from PIL import Image

from printbook.book.bleed import bleed_offset_px
from printbook.book.marks import Mark, compute_marks
from printbook.imposition.compositor import bleed_px_for, composite_spread
from printbook.imposition.spreads import Spread, validate_spreads
from printbook.output.writer import DocumentWriter, RasterPlacement

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SheetGeometry:
    """
    Physical geometry of the output sheets, in document units.

    Attributes:
        trim_width: Single page trim width
        trim_height: Page trim height
        bleed: Bleed amount (>= 0)
        unit: Document unit
        print_marks: Whether to add trim/bleed marks
        frame_px: Pixel size of the captured trim frame, when known
    """

    trim_width: float
    trim_height: float
    bleed: float
    unit: str
    print_marks: bool = False
    frame_px: Optional[Tuple[int, int]] = None

    def __post_init__(self) -> None:
        if self.trim_width <= 0 or self.trim_height <= 0:
            raise ValueError(f"trim size must be positive: {self.trim_width}x{self.trim_height}")
        if self.bleed < 0:
            raise ValueError(f"bleed must be >= 0: {self.bleed}")

    @property
    def solo_size(self) -> Tuple[float, float]:
        return (self.trim_width + 2 * self.bleed, self.trim_height + 2 * self.bleed)

    @property
    def spread_size(self) -> Tuple[float, float]:
        """Two trims plus outer bleed only, no bleed at the gutter."""
        return (2 * self.trim_width + 2 * self.bleed, self.trim_height + 2 * self.bleed)


def build_spread_document(
    pages: Sequence[Image.Image],
    spreads: Sequence[Spread],
    geometry: SheetGeometry,
    writer: DocumentWriter,
) -> DocumentWriter:
    """
    Render spreads of page rasters through a writer.

    Args:
        pages: Bleed-inclusive page rasters in capture order
        spreads: Ordering from build_reader_spreads() or build_saddle_stitch()
        geometry: Sheet geometry
        writer: Empty writer to receive the pages

    Returns:
        The writer, holding one page per spread

    Raises:
        InvalidPageCount: If a spread refers to a missing page
        ValueError: If paired pages differ in pixel size
    """
    validate_spreads(spreads, len(pages))

    # Composite everything before touching the writer
    sheets: List[Tuple[Tuple[float, float], Image.Image, Tuple[Mark, ...]]] = []
    for spread in spreads:
        if spread.is_solo:
            image = pages[spread.left]
            size = geometry.solo_size
            marks = _marks(geometry, geometry.trim_width)
        else:
            bleed_px, trim_px = _gutter_cut(geometry, pages[spread.left])
            image = composite_spread(pages[spread.left], pages[spread.right], bleed_px, trim_px)
            size = geometry.spread_size
            marks = _marks(geometry, 2 * geometry.trim_width)
        sheets.append((size, image, marks))

    for (width, height), image, marks in sheets:
        writer.add_page(
            width,
            height,
            [RasterPlacement(image, 0, 0, width, height)],
            marks,
            bleed=geometry.bleed,
        )

    logger.info(f"Imposed {len(pages)} pages onto {len(sheets)} sheets")
    return writer


def _gutter_cut(geometry: SheetGeometry, page: Image.Image) -> Tuple[int, Optional[int]]:
    """Left bleed strip and frame width in pixels for cutting at the gutter."""
    if geometry.frame_px is None:
        return bleed_px_for(page.width, geometry.trim_width, geometry.bleed), None
    if geometry.bleed <= 0:
        return 0, geometry.frame_px[0]
    bleed_px, _ = bleed_offset_px(geometry.frame_px, (geometry.trim_width, geometry.trim_height), geometry.bleed)
    return bleed_px, geometry.frame_px[0]


def _marks(geometry: SheetGeometry, trim_width: float) -> Tuple[Mark, ...]:
    if not geometry.print_marks:
        return ()
    return compute_marks(trim_width, geometry.trim_height, geometry.bleed, geometry.unit)
