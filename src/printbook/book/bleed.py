"""
Module: book.bleed

Purpose:
    Bleed buffer and bleed compositing. The bleed buffer is a second
    raster the caller paints full-bleed artwork into; at capture time it
    is scaled to fill the bleed-inclusive page and the trim frame is
    placed on top, centred within the bleed.

Key Functions:
    - composite(): Combine a trim frame and an optional bleed raster
    - bleed_offset_px(): Pixel offset of the trim frame inside the bleed

Key Classes:
    - BleedBuffer: Optional raster; inactive buffers ignore all drawing

Blank State:
    Pixels nobody drew into are fully transparent RGBA (0, 0, 0, 0).
    When a page is written to PDF the raster is flattened onto white
    paper, so an untouched bleed zone prints as paper.

Dependencies:
    - PIL: Image compositing

Used By:
    - printbook.book.document: Compositing at capture time
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional, Tuple, Union

from PIL import Image, ImageDraw

logger = logging.getLogger(__name__)

BLANK_PIXEL = (0, 0, 0, 0)

Color = Union[str, Tuple[int, ...]]


class BleedBuffer:
    """
    Raster for artwork that should reach into the bleed.

    A buffer is either active (holds an RGBA raster sized like the trim
    frame) or inactive. Every drawing call on an inactive buffer is a
    no-op. The buffer tracks whether anything was drawn since the last
    clear, so an untouched buffer never contributes to a page.

    Example:
        >>> buffer = BleedBuffer((400, 600))
        >>> buffer.fill("navy")
        >>> buffer.is_dirty
        True
    """

    def __init__(self, size: Optional[Tuple[int, int]] = None):
        self._image: Optional[Image.Image] = (
            Image.new("RGBA", size, BLANK_PIXEL) if size is not None else None
        )
        self._dirty = False

    @property
    def active(self) -> bool:
        return self._image is not None

    @property
    def size(self) -> Optional[Tuple[int, int]]:
        return self._image.size if self._image is not None else None

    @property
    def is_dirty(self) -> bool:
        """True when something was drawn since the last clear."""
        return self._dirty

    @contextmanager
    def draw(self) -> Iterator[Optional[ImageDraw.ImageDraw]]:
        """
        Yield an ImageDraw for the buffer, or None when inactive.

        Example:
            >>> with buffer.draw() as d:
            ...     if d is not None:
            ...         d.rectangle((0, 0, 50, 50), fill="red")
        """
        if self._image is None:
            yield None
            return
        yield ImageDraw.Draw(self._image)
        self._dirty = True

    def fill(self, color: Color) -> None:
        """Fill the whole buffer with a colour."""
        if self._image is None:
            return
        self._image.paste(Image.new("RGBA", self._image.size, color))
        self._dirty = True

    def paste(self, image: Image.Image, position: Tuple[int, int] = (0, 0)) -> None:
        """
        Alpha-composite an image onto the buffer.

        Raises:
            ValueError: If the image does not fit inside the buffer
        """
        if self._image is None:
            return
        x, y = position
        if x < 0 or y < 0 or x + image.width > self._image.width or y + image.height > self._image.height:
            raise ValueError(
                f"Image {image.size} at {position} does not fit bleed buffer {self._image.size}"
            )
        self._image.alpha_composite(image.convert("RGBA"), (x, y))
        self._dirty = True

    def snapshot(self) -> Optional[Image.Image]:
        """Copy of the buffer raster if anything was drawn, else None."""
        if self._image is None or not self._dirty:
            return None
        return self._image.copy()

    def clear(self) -> None:
        if self._image is None:
            return
        self._image.paste(BLANK_PIXEL, (0, 0, self._image.width, self._image.height))
        self._dirty = False


def bleed_offset_px(frame_size: Tuple[int, int], trim_size: Tuple[float, float], bleed: float) -> Tuple[int, int]:
    """
    Pixel offset of the trim frame inside the bleed-inclusive raster.

    Derived from the ratio of physical bleed to physical trim size, so the
    offset is right at any capture resolution.
    """
    width_px, height_px = frame_size
    trim_w, trim_h = trim_size
    return (round(width_px * bleed / trim_w), round(height_px * bleed / trim_h))


def bleed_raster_size(frame_size: Tuple[int, int], trim_size: Tuple[float, float], bleed: float) -> Tuple[int, int]:
    """Pixel size of the bleed-inclusive raster for a trim frame."""
    width_px, height_px = frame_size
    trim_w, trim_h = trim_size
    return (
        round(width_px * (trim_w + 2 * bleed) / trim_w),
        round(height_px * (trim_h + 2 * bleed) / trim_h),
    )


def composite(
    trim_raster: Image.Image,
    bleed_raster: Optional[Image.Image],
    trim_size: Tuple[float, float],
    bleed: float,
) -> Image.Image:
    """
    Composite a trim frame and an optional bleed raster into one page.

    Args:
        trim_raster: Captured frame covering the trim area
        bleed_raster: Full-bleed artwork the size of the frame, or None
            when nothing was drawn into the bleed buffer
        trim_size: (width, height) of the trim in document units
        bleed: Bleed amount in document units

    Returns:
        RGBA raster. With bleed == 0 this is a copy of the frame.

    Raises:
        ValueError: If bleed is negative or the bleed raster size does not
            match the frame

    Example:
        >>> page = composite(frame, None, (4, 6), 0.125)
        >>> page.size
        (531, 781)  # for a 500x750 frame
    """
    if bleed < 0:
        raise ValueError(f"bleed must be >= 0: {bleed}")
    frame = trim_raster.convert("RGBA")
    if bleed == 0:
        return frame.copy()

    if bleed_raster is not None and bleed_raster.size != trim_raster.size:
        raise ValueError(
            f"Bleed raster size {bleed_raster.size} does not match frame size {trim_raster.size}"
        )

    out_size = bleed_raster_size(frame.size, trim_size, bleed)
    offset = bleed_offset_px(frame.size, trim_size, bleed)

    page = Image.new("RGBA", out_size, BLANK_PIXEL)
    if bleed_raster is not None:
        scaled = bleed_raster.convert("RGBA").resize(out_size, Image.Resampling.LANCZOS)
        page.paste(scaled, (0, 0))
    page.alpha_composite(frame, offset)

    logger.debug(f"Composited {frame.size} frame into {out_size} page at offset {offset}")
    return page
