"""
Module: book.marks

Purpose:
    Geometry for print marks. Trim (crop) marks are drawn solid at the
    four trim corners; bleed marks are drawn dashed at the four corners
    of the bleed box. Every mark lies outside the bleed box, in the slug
    margin the writer adds around the page.

Key Functions:
    - compute_marks(): Line segments for one page
    - mark_margin(): Slug width needed to hold the marks

Key Classes:
    - Mark: Single line segment tagged trim or bleed
    - MarkKind: TRIM (solid) or BLEED (dashed)

Coordinates:
    Document units, origin at the top-left of the bleed box, y down.
    The trim box spans (bleed, bleed) to (bleed + trim_w, bleed + trim_h).

Dependencies:
    - printbook.core.units: mm constants -> document unit

Used By:
    - printbook.book.document: Marks for each captured page
    - printbook.imposition.builder: Marks for solo and spread pages
    - printbook.output.writer: Stroking the segments
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from printbook.core.units import from_reference_units

logger = logging.getLogger(__name__)

# Mark constants, millimetres
MARK_GAP_MM = 1.0
MARK_ARM_MM = 4.0
MARK_HAIRLINE_MM = 0.3
MARK_DASH_MM = 1.0

Point = Tuple[float, float]

# (name, horizontal direction, vertical direction) for each corner
_CORNERS = (
    ("tl", -1, -1),
    ("tr", 1, -1),
    ("bl", -1, 1),
    ("br", 1, 1),
)


class MarkKind(str, Enum):
    TRIM = "trim"
    BLEED = "bleed"


@dataclass(frozen=True)
class Mark:
    """
    A print mark line segment.

    Attributes:
        kind: TRIM (solid) or BLEED (dashed)
        start: Start point (x, y) in document units
        end: End point (x, y) in document units
        corner: "tl", "tr", "bl" or "br"
    """

    kind: MarkKind
    start: Point
    end: Point
    corner: str

    @property
    def is_dashed(self) -> bool:
        return self.kind is MarkKind.BLEED

    @property
    def is_horizontal(self) -> bool:
        return self.start[1] == self.end[1]


def mark_margin(unit: str) -> float:
    """Slug width (gap + arm) that holds the marks, in `unit`."""
    return from_reference_units(MARK_GAP_MM + MARK_ARM_MM, unit)


def compute_marks(
    trim_width: float,
    trim_height: float,
    bleed: float,
    unit: str,
) -> Tuple[Mark, ...]:
    """
    Compute trim and bleed marks for a page.

    Trim marks sit collinear with the trim edges and point outward from
    each trim corner. They start `bleed + gap` from the trim edge, so they
    clear the bleed zone, and run `arm` further. Bleed marks (only when
    bleed > 0) sit collinear with the bleed box edges, starting `gap`
    beyond the bleed edge.

    Args:
        trim_width: Trim width in `unit` (2 x trim for a spread)
        trim_height: Trim height in `unit`
        bleed: Bleed amount in `unit` (>= 0)
        unit: Document unit

    Returns:
        Tuple of Marks: 8 trim marks, plus 8 bleed marks when bleed > 0

    Raises:
        ValueError: If bleed is negative or the trim size is not positive

    Example:
        >>> marks = compute_marks(100, 150, 3, "mm")
        >>> len(marks)
        16
    """
    if bleed < 0:
        raise ValueError(f"bleed must be >= 0: {bleed}")
    if trim_width <= 0 or trim_height <= 0:
        raise ValueError(f"trim size must be positive: {trim_width}x{trim_height}")

    gap = from_reference_units(MARK_GAP_MM, unit)
    arm = from_reference_units(MARK_ARM_MM, unit)

    marks: List[Mark] = []

    # Trim corners, arms start past the bleed
    offset = bleed + gap
    trim_x = {-1: bleed, 1: bleed + trim_width}
    trim_y = {-1: bleed, 1: bleed + trim_height}
    for corner, hdir, vdir in _CORNERS:
        marks.extend(
            _corner_marks(MarkKind.TRIM, corner, trim_x[hdir], trim_y[vdir], hdir, vdir, offset, arm)
        )

    if bleed > 0:
        page_x = {-1: 0.0, 1: trim_width + 2 * bleed}
        page_y = {-1: 0.0, 1: trim_height + 2 * bleed}
        for corner, hdir, vdir in _CORNERS:
            marks.extend(
                _corner_marks(MarkKind.BLEED, corner, page_x[hdir], page_y[vdir], hdir, vdir, gap, arm)
            )

    logger.debug(
        f"Computed {len(marks)} marks for trim {trim_width}x{trim_height} "
        f"bleed {bleed} {unit}"
    )
    return tuple(marks)


def _corner_marks(
    kind: MarkKind,
    corner: str,
    cx: float,
    cy: float,
    hdir: int,
    vdir: int,
    offset: float,
    arm: float,
) -> Tuple[Mark, Mark]:
    """Horizontal and vertical arm for one corner at (cx, cy)."""
    horizontal = Mark(
        kind=kind,
        start=(cx + offset * hdir, cy),
        end=(cx + (offset + arm) * hdir, cy),
        corner=corner,
    )
    vertical = Mark(
        kind=kind,
        start=(cx, cy + offset * vdir),
        end=(cx, cy + (offset + arm) * vdir),
        corner=corner,
    )
    return horizontal, vertical
