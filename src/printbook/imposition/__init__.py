"""
Module: imposition

Purpose:
    Reorder and composite captured pages for two-up output: reader
    spreads for screen and proof reading, saddle-stitch signatures for
    printing and folding.

Key Functions:
    - build_reader_spreads(): Cover / pairs / back cover ordering
    - build_saddle_stitch(): Printer signature ordering
    - composite_spread(): Join two pages without a doubled gutter
    - build_spread_document(): Render spreads through a writer

Key Classes:
    - Spread: Page index pairing
    - SheetGeometry: Output sheet geometry
    - InvalidPageCount: Scheme preconditions unmet

Used By:
    - printbook.book.document: Spread and saddle-stitch export
"""

from .spreads import (
    InvalidPageCount,
    Spread,
    build_reader_spreads,
    build_saddle_stitch,
    validate_spreads,
)
from .compositor import bleed_px_for, composite_spread, trim_view
from .builder import SheetGeometry, build_spread_document

__all__ = [
    # Orderings
    "InvalidPageCount",
    "Spread",
    "build_reader_spreads",
    "build_saddle_stitch",
    "validate_spreads",
    # Rasters
    "bleed_px_for",
    "composite_spread",
    "trim_view",
    # Documents
    "SheetGeometry",
    "build_spread_document",
]
