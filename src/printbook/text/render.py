"""
Module: text.render

Purpose:
    Draw a LayoutResult onto a Pillow raster, so laid-out prose can be
    put on a page frame before it is captured.

Key Functions:
    - draw_lines(): Render placed lines at their baselines
"""

from __future__ import annotations

import logging
from typing import Tuple, Union

from PIL import Image, ImageDraw, ImageFont

from printbook.text.flow import LayoutResult

logger = logging.getLogger(__name__)


def draw_lines(
    image: Image.Image,
    result: LayoutResult,
    font: ImageFont.FreeTypeFont,
    fill: Union[str, Tuple[int, ...]] = "black",
) -> Image.Image:
    """
    Render placed lines onto a copy of `image`.

    Line positions are baselines, so text is anchored left-baseline ("ls").

    Args:
        image: Page raster
        result: Output of layout()
        font: Font used for measuring the layout
        fill: Text colour

    Returns:
        New image with the text drawn
    """
    out = image.copy()
    draw = ImageDraw.Draw(out)
    for line in result.lines:
        if line.text:
            draw.text((line.x, line.y), line.text, fill=fill, font=font, anchor="ls")

    logger.debug(f"Drew {len(result.lines)} lines")
    return out
