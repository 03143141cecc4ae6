"""
Module: output.inspect

Purpose:
    Read back the page boxes of a written PDF, so a caller can check
    sheet sizes, trim and bleed before sending a file to print.

Key Functions:
    - read_page_boxes(): MediaBox, BleedBox and TrimBox of every page

Key Classes:
    - PageBoxes: Boxes of one page, in points

Dependencies:
    - pypdf: PDF parsing
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Union

from pypdf import PdfReader

from printbook.core.units import to_points

logger = logging.getLogger(__name__)

Box = Tuple[float, float, float, float]


@dataclass(frozen=True)
class PageBoxes:
    """
    Page boxes as (left, bottom, right, top) in PDF points.

    Attributes:
        media: MediaBox
        bleed: BleedBox (MediaBox when absent)
        trim: TrimBox (MediaBox when absent)
    """

    media: Box
    bleed: Box
    trim: Box

    @property
    def trim_size(self) -> Tuple[float, float]:
        return (self.trim[2] - self.trim[0], self.trim[3] - self.trim[1])

    @property
    def bleed_size(self) -> Tuple[float, float]:
        return (self.bleed[2] - self.bleed[0], self.bleed[3] - self.bleed[1])

    @property
    def media_size(self) -> Tuple[float, float]:
        return (self.media[2] - self.media[0], self.media[3] - self.media[1])

    @property
    def is_landscape(self) -> bool:
        width, height = self.trim_size
        return width > height

    def bleed_in(self, unit: str) -> float:
        """Horizontal bleed margin converted to `unit`."""
        margin_pt = self.trim[0] - self.bleed[0]
        return margin_pt / to_points(1, unit)


def _box(rect) -> Box:
    return (float(rect.left), float(rect.bottom), float(rect.right), float(rect.top))


def read_page_boxes(source: Union[str, Path, bytes]) -> List[PageBoxes]:
    """
    Read the boxes of every page.

    Args:
        source: PDF path or PDF bytes

    Returns:
        One PageBoxes per page, in page order

    Raises:
        FileNotFoundError: If the path does not exist
        pypdf.errors.PdfReadError: If the data is not a readable PDF
    """
    if isinstance(source, bytes):
        reader = PdfReader(io.BytesIO(source))
    else:
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"PDF not found: {path}")
        reader = PdfReader(path)

    boxes = [
        PageBoxes(media=_box(page.mediabox), bleed=_box(page.bleedbox), trim=_box(page.trimbox))
        for page in reader.pages
    ]
    logger.debug(f"Read boxes of {len(boxes)} pages")
    return boxes
