"""
Module: book

Purpose:
    Page/document state, bleed compositing and print mark geometry.
"""

from .bleed import BLANK_PIXEL, BleedBuffer, bleed_offset_px, bleed_raster_size, composite
from .marks import Mark, MarkKind, compute_marks, mark_margin
from .document import (
    AlreadyComplete,
    Book,
    BookState,
    InvalidPhaseError,
    Page,
    saddle_filename,
)

__all__ = [
    # State
    "AlreadyComplete",
    "Book",
    "BookState",
    "InvalidPhaseError",
    "Page",
    "saddle_filename",
    # Bleed
    "BLANK_PIXEL",
    "BleedBuffer",
    "bleed_offset_px",
    "bleed_raster_size",
    "composite",
    # Marks
    "Mark",
    "MarkKind",
    "compute_marks",
    "mark_margin",
]
