"""
Module: imposition.compositor

Purpose:
    Raster operations for imposition: joining two bleed-inclusive pages
    into one spread without a doubled gutter, and cropping a page back
    to its trim area.

Key Functions:
    - composite_spread(): Two pages side by side, inner bleed removed
    - bleed_px_for(): Bleed width in pixels of a bleed-inclusive raster
    - trim_view(): Crop a raster to its trim box

Dependencies:
    - PIL: Image cropping and pasting

Used By:
    - printbook.imposition.builder: Spread documents
    - printbook.book.document: trim_view()
"""

from __future__ import annotations

from typing import Optional, Tuple

from PIL import Image

from printbook.book.bleed import BLANK_PIXEL


def bleed_px_for(raster_width: int, trim_width: float, bleed: float) -> int:
    """
    Bleed width in pixels for a raster covering trim + 2 x bleed.

    Example:
        >>> bleed_px_for(540, 4.0, 0.25)
        30
    """
    if bleed <= 0:
        return 0
    return round(raster_width * bleed / (trim_width + 2 * bleed))


def composite_spread(
    left: Image.Image,
    right: Image.Image,
    bleed_px: int,
    trim_px: Optional[int] = None,
) -> Image.Image:
    """
    Place two pages edge to edge, each without its inner bleed strip.

    The left page keeps [bleed | trim], the right page keeps [trim | bleed],
    so only the outer edges carry bleed. The right bleed strip of a page can
    be a pixel wider or narrower than the left one after rounding, so the
    cut is placed by the frame width when it is known.

    Args:
        left: Left page raster, bleed-inclusive
        right: Right page raster, same size as left
        bleed_px: Left bleed strip width in pixels (0 for no bleed)
        trim_px: Width of the trim frame in pixels; defaults to a page
            with equal bleed strips on both sides

    Returns:
        RGBA spread raster

    Raises:
        ValueError: If the pages differ in size or the strips do not fit
            the page

    Example:
        >>> spread = composite_spread(left, right, bleed_px=30, trim_px=390)
        >>> spread.width == left.width + 390  # 30 px bleed, 390 px frame
        True
    """
    if left.size != right.size:
        raise ValueError(f"Spread pages differ in size: {left.size} vs {right.size}")
    raw_w, height = left.size
    if trim_px is None:
        trim_px = raw_w - 2 * bleed_px
    if bleed_px < 0 or trim_px <= 0 or bleed_px + trim_px > raw_w:
        raise ValueError(f"Invalid bleed_px {bleed_px} / trim_px {trim_px} for page width {raw_w}")

    left_w = bleed_px + trim_px
    right_w = raw_w - bleed_px
    spread = Image.new("RGBA", (left_w + right_w, height), BLANK_PIXEL)
    spread.paste(left.convert("RGBA").crop((0, 0, left_w, height)), (0, 0))
    spread.paste(right.convert("RGBA").crop((bleed_px, 0, raw_w, height)), (left_w, 0))
    return spread


def trim_view(raster: Image.Image, trim_box: Tuple[int, int, int, int]) -> Image.Image:
    """Crop a raster to its (left, top, right, bottom) trim box."""
    if trim_box == (0, 0, raster.width, raster.height):
        return raster.copy()
    return raster.crop(trim_box)
