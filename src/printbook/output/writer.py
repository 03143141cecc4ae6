"""
Module: output.writer

Purpose:
    Write pages to PDF using ReportLab. Each page is a list of raster
    placements plus optional print mark segments. Geometry arrives in
    document units with a top-left origin and is converted to PDF points
    (bottom-left origin) here.

Key Classes:
    - DocumentWriter: Protocol every writer satisfies
    - PdfDocumentWriter: ReportLab implementation
    - RasterPlacement: One raster positioned on a page

Page Boxes:
    The bleed box spans the page raster. When marks are present a slug of
    gap + arm is added on every side to carry them, so the MediaBox grows
    while TrimBox and BleedBox stay on the artwork.

Dependencies:
    - reportlab: PDF generation
    - PIL: Raster flattening and JPEG encoding
    - printbook.book.marks: Mark geometry and constants

Used By:
    - printbook.book.document: Page-by-page book output
    - printbook.imposition.builder: Spread and saddle-stitch output
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Protocol, Sequence, Tuple, Union

from PIL import Image
from reportlab.lib.colors import black, white
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from printbook.book.marks import (
    MARK_DASH_MM,
    MARK_HAIRLINE_MM,
    Mark,
    mark_margin,
)
from printbook.core.units import to_points, validate_unit

logger = logging.getLogger(__name__)

MARK_BLEND_MODE = "Difference"
PAPER_COLOR = "white"


@dataclass(frozen=True)
class RasterPlacement:
    """
    A raster placed on a page.

    Attributes:
        image: PIL image (RGBA images are flattened onto paper)
        x: Left edge in document units, from the bleed box left
        y: Top edge in document units, from the bleed box top
        width: Placed width in document units
        height: Placed height in document units
    """

    image: Image.Image
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Placement size must be positive: {self.width}x{self.height}")


@dataclass(frozen=True)
class _PageRecord:
    width: float
    height: float
    bleed: float
    placements: Tuple[RasterPlacement, ...]
    marks: Tuple[Mark, ...] = field(default_factory=tuple)


class DocumentWriter(Protocol):
    """Collaborator that turns page placements into a document."""

    @property
    def page_count(self) -> int: ...

    def add_page(
        self,
        width: float,
        height: float,
        placements: Sequence[RasterPlacement],
        marks: Sequence[Mark] = (),
        *,
        bleed: float = 0.0,
    ) -> None: ...

    def to_bytes(self) -> bytes: ...

    def save(self, path: Union[str, Path]) -> Path: ...


class PdfDocumentWriter:
    """
    Collect pages and render them to PDF with ReportLab.

    Pages are buffered so the same document can be serialised more than
    once (bytes for a caller, a file on disk).

    Example:
        >>> writer = PdfDocumentWriter("in")
        >>> writer.add_page(4, 6, [RasterPlacement(img, 0, 0, 4, 6)])
        >>> writer.save("book.pdf")
    """

    def __init__(self, unit: str, *, jpeg_quality: int = 92, title: str = ""):
        self.unit = validate_unit(unit)
        self.jpeg_quality = jpeg_quality
        self.title = title
        self._pages: List[_PageRecord] = []

    @property
    def page_count(self) -> int:
        return len(self._pages)

    def add_page(
        self,
        width: float,
        height: float,
        placements: Sequence[RasterPlacement],
        marks: Sequence[Mark] = (),
        *,
        bleed: float = 0.0,
    ) -> None:
        """
        Append a page.

        Args:
            width: Bleed box width in document units
            height: Bleed box height in document units
            placements: Rasters to draw, in order
            marks: Print marks, coordinates relative to the bleed box
            bleed: Bleed amount, used for the TrimBox
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Page size must be positive: {width}x{height}")
        self._pages.append(
            _PageRecord(
                width=width,
                height=height,
                bleed=bleed,
                placements=tuple(placements),
                marks=tuple(marks),
            )
        )

    def to_bytes(self) -> bytes:
        """Render every page and return the PDF bytes."""
        buf = io.BytesIO()
        self._render(buf)
        return buf.getvalue()

    def save(self, path: Union[str, Path]) -> Path:
        """
        Render the document to a file.

        Raises:
            IOError: If the file cannot be written
        """
        output_path = Path(path)
        if output_path.parent != Path(""):
            output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(self.to_bytes())
        logger.info(f"Wrote {self.page_count} pages to {output_path}")
        return output_path

    def _render(self, buf: io.BytesIO) -> None:
        if not self._pages:
            logger.warning("No pages added, writing empty PDF")

        c = canvas.Canvas(buf)
        if self.title:
            c.setTitle(self.title)

        for page in self._pages:
            self._render_page(c, page)
            c.showPage()

        c.save()

    def _render_page(self, c: canvas.Canvas, page: _PageRecord) -> None:
        slug = mark_margin(self.unit) if page.marks else 0.0
        media_w_pt = self._pt(page.width + 2 * slug)
        media_h_pt = self._pt(page.height + 2 * slug)
        c.setPageSize((media_w_pt, media_h_pt))

        # Boxes apply to this and later pages, so set them on every page
        bleed_box = (
            self._pt(slug),
            self._pt(slug),
            self._pt(slug + page.width),
            self._pt(slug + page.height),
        )
        trim_box = (
            self._pt(slug + page.bleed),
            self._pt(slug + page.bleed),
            self._pt(slug + page.width - page.bleed),
            self._pt(slug + page.height - page.bleed),
        )
        c.setBleedBox(bleed_box)
        c.setTrimBox(trim_box)

        for placement in page.placements:
            c.drawImage(
                self._to_reader(placement.image),
                self._pt(slug + placement.x),
                media_h_pt - self._pt(slug + placement.y + placement.height),
                width=self._pt(placement.width),
                height=self._pt(placement.height),
            )

        if page.marks:
            self._draw_marks(c, page.marks, slug, media_h_pt)

    def _draw_marks(
        self,
        c: canvas.Canvas,
        marks: Sequence[Mark],
        slug: float,
        media_h_pt: float,
    ) -> None:
        """
        Stroke mark segments as hairlines.

        White in Difference blend mode inverts whatever lies beneath, so
        marks stay visible on any background. Canvases without blend mode
        support get solid black.
        """
        c.saveState()
        if hasattr(c, "setBlendMode"):
            c.setBlendMode(MARK_BLEND_MODE)
            c.setStrokeColor(white)
        else:
            logger.warning("Canvas has no blend mode support, drawing marks in black")
            c.setStrokeColor(black)

        c.setLineWidth(to_points(MARK_HAIRLINE_MM, "mm"))
        dash_pt = to_points(MARK_DASH_MM, "mm")

        for mark in marks:
            if mark.is_dashed:
                c.setDash(dash_pt, dash_pt)
            else:
                c.setDash()
            c.line(
                self._pt(slug + mark.start[0]),
                media_h_pt - self._pt(slug + mark.start[1]),
                self._pt(slug + mark.end[0]),
                media_h_pt - self._pt(slug + mark.end[1]),
            )
        c.restoreState()

    def _pt(self, amount: float) -> float:
        return to_points(amount, self.unit)

    def _to_reader(self, img: Image.Image) -> ImageReader:
        """Flatten onto paper and encode as JPEG for embedding."""
        buf = io.BytesIO()
        flatten_on_paper(img).save(buf, format="JPEG", quality=self.jpeg_quality)
        buf.seek(0)
        return ImageReader(buf)


def flatten_on_paper(img: Image.Image) -> Image.Image:
    """
    Return an RGB copy of `img` composited onto white paper.

    Transparent pixels (the blank state of bleed and spread rasters)
    become paper colour.
    """
    if img.mode == "RGB":
        return img
    rgba = img.convert("RGBA")
    paper = Image.new("RGB", rgba.size, PAPER_COLOR)
    paper.paste(rgba, mask=rgba.getchannel("A"))
    return paper
