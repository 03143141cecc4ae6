"""
Module: book.document

Purpose:
    The Book: page/document state for one print run. Tracks trim size,
    bleed, the page counter and page target, holds every captured page
    raster, and signals completion once the target is reached.

    Capture pipeline per page:
    Frame → Bleed composite (if bleed) → Marks (if enabled) → Writer

Key Classes:
    - Book: Document state machine
    - BookState: COLLECTING → COMPLETE
    - Page: One captured page
    - InvalidPhaseError: Fixed configuration changed after capture began
    - AlreadyComplete: Capture after the book completed

Dependencies:
    - PIL: Page rasters
    - printbook.book.bleed: BleedBuffer, composite()
    - printbook.book.marks: compute_marks()
    - printbook.imposition: Spread and saddle-stitch export
    - printbook.output.writer: PdfDocumentWriter

Used By:
    - Application drawing code (one capture_frame() per rendered frame)
    - printbook.capture.sources: capture_all()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from PIL import Image

from printbook.book.bleed import BleedBuffer, bleed_offset_px, bleed_raster_size, composite
from printbook.book.marks import Mark, compute_marks
from printbook.config import BookConfig
from printbook.core.units import convert
from printbook.imposition import (
    InvalidPageCount,
    SheetGeometry,
    build_reader_spreads,
    build_saddle_stitch,
    build_spread_document,
    trim_view,
)
from printbook.output.writer import DocumentWriter, PdfDocumentWriter, RasterPlacement

logger = logging.getLogger(__name__)

SADDLE_SUFFIX = "-saddle.pdf"

CompletionCallback = Callable[["Book"], None]
WriterFactory = Callable[[], DocumentWriter]


class InvalidPhaseError(RuntimeError):
    """Fixed configuration was changed after the first capture."""
    pass


class AlreadyComplete(RuntimeError):
    """A frame was captured after the book reached its page target."""
    pass


class BookState(str, Enum):
    COLLECTING = "collecting"
    COMPLETE = "complete"


@dataclass(frozen=True)
class Page:
    """
    A captured page.

    Attributes:
        index: 0-based capture index
        image: Page raster, bleed-inclusive when bleed is configured
        marks: Print marks drawn on the page (empty when disabled)
        trim_box_px: (left, top, right, bottom) of the captured frame
            inside `image`; the whole image when there is no bleed
    """

    index: int
    image: Image.Image
    marks: Tuple[Mark, ...] = ()
    trim_box_px: Optional[Tuple[int, int, int, int]] = None

    def __post_init__(self) -> None:
        if self.trim_box_px is None:
            object.__setattr__(self, "trim_box_px", (0, 0, self.image.width, self.image.height))

    @property
    def width_px(self) -> int:
        return self.image.width

    @property
    def height_px(self) -> int:
        return self.image.height

    @property
    def number(self) -> int:
        """1-based page number."""
        return self.index + 1


class Book:
    """
    Page/document state for a print-ready book.

    Configuration (bleed, spread mode, DPI) is only legal before the first
    capture. Each capture_frame() appends one page; when the page counter
    reaches `total_pages` the book completes and completion callbacks run
    exactly once. Open-ended books (total_pages=None) complete on finish().

    Example:
        >>> book = Book(BookConfig(trim_width=4, trim_height=6, total_pages=8))
        >>> book.configure_bleed(0.125)
        >>> while not book.is_complete:
        ...     book.bleed.fill(background_for(book.progress))
        ...     book.capture_frame(render_frame(book.page_number))
        >>> book.save()
    """

    def __init__(
        self,
        config: BookConfig,
        writer_factory: Optional[WriterFactory] = None,
    ):
        self.config = config
        self._writer_factory: WriterFactory = writer_factory or (
            lambda: PdfDocumentWriter(
                config.unit,
                jpeg_quality=config.jpeg_quality,
                title=Path(config.filename).stem,
            )
        )
        self._writer = self._writer_factory()

        self._bleed = 0.0
        self._print_marks = False
        self._spread = False
        self._saddle_stitch = False
        self._dpi: Optional[int] = None
        self._canvas_size: Tuple[int, int] = config.canvas_size_px

        self.bleed = BleedBuffer()
        self.filename = config.filename
        self.page = 0

        self._pages: List[Page] = []
        self._state = BookState.COLLECTING
        self._completion_fired = False
        self._callbacks: List[CompletionCallback] = []

    # ─────────────────────────────────────────────────────────────────────────
    # Configuration (before first capture)
    # ─────────────────────────────────────────────────────────────────────────

    def configure_bleed(self, amount: float, unit: Optional[str] = None) -> None:
        """
        Add bleed on all four sides and enable print marks.

        Args:
            amount: Bleed size
            unit: Unit of `amount`; defaults to the book unit

        Raises:
            InvalidPhaseError: If a page was already captured
            ValueError: If amount is negative
            UnknownUnit: If unit is not recognised
        """
        self._require_unstarted("configure_bleed")
        if amount < 0:
            raise ValueError(f"bleed must be >= 0: {amount}")

        self._bleed = convert(amount, unit or self.config.unit, self.config.unit)
        self._print_marks = True
        self.bleed = BleedBuffer(self._canvas_size) if self._bleed > 0 else BleedBuffer()

        logger.info(
            f"Bleed set to {self._bleed:g} {self.config.unit}, "
            f"page size {self.bleed_width:g}x{self.bleed_height:g}"
        )

    def set_print_marks(self, enabled: bool) -> None:
        """Show or hide print marks. configure_bleed() enables them."""
        self._print_marks = bool(enabled)

    def set_spread(self, enabled: bool) -> None:
        """
        Export reader spreads from save() and to_bytes().

        Raises:
            InvalidPhaseError: If a page was already captured
        """
        self._require_unstarted("set_spread")
        self._spread = bool(enabled)

    def set_saddle_stitch(self, enabled: bool) -> None:
        """Also write the saddle-stitch PDF whenever save() runs."""
        self._saddle_stitch = bool(enabled)

    def set_dpi(self, dpi: int) -> None:
        """
        Size captured frames so the trim width renders at `dpi`.

        Raises:
            InvalidPhaseError: If a page was already captured
            ValueError: If dpi is not positive
        """
        self._require_unstarted("set_dpi")
        if dpi <= 0:
            raise ValueError(f"dpi must be positive: {dpi}")
        self._dpi = dpi
        trim_w_in = convert(self.config.trim_width, self.config.unit, "in")
        trim_h_in = convert(self.config.trim_height, self.config.unit, "in")
        self._canvas_size = (round(dpi * trim_w_in), round(dpi * trim_h_in))
        if self.bleed.active:
            self.bleed = BleedBuffer(self._canvas_size)
        logger.info(f"DPI set to {dpi}, frame size {self._canvas_size[0]}x{self._canvas_size[1]} px")

    def on_complete(self, callback: CompletionCallback) -> CompletionCallback:
        """Register a completion callback; returns it so it can decorate."""
        self._callbacks.append(callback)
        return callback

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def unit(self) -> str:
        return self.config.unit

    @property
    def trim_width(self) -> float:
        return self.config.trim_width

    @property
    def trim_height(self) -> float:
        return self.config.trim_height

    @property
    def total_pages(self) -> Optional[int]:
        return self.config.total_pages

    @property
    def bleed_amount(self) -> float:
        return self._bleed

    @property
    def bleed_width(self) -> float:
        """Page width including bleed on both sides."""
        return self.trim_width + 2 * self._bleed

    @property
    def bleed_height(self) -> float:
        """Page height including bleed on both sides."""
        return self.trim_height + 2 * self._bleed

    @property
    def print_marks_enabled(self) -> bool:
        return self._print_marks

    @property
    def spread_enabled(self) -> bool:
        return self._spread

    @property
    def saddle_stitch_enabled(self) -> bool:
        return self._saddle_stitch

    @property
    def dpi(self) -> Optional[int]:
        return self._dpi

    @property
    def pixel_density(self) -> float:
        """Captured frame pixels per configured canvas pixel."""
        return self._canvas_size[0] / self.config.canvas_width_px

    @property
    def canvas_size(self) -> Tuple[int, int]:
        """Pixel size expected for a captured trim frame."""
        return self._canvas_size

    @property
    def bleed_canvas_size(self) -> Tuple[int, int]:
        """Pixel size of a bleed-inclusive page raster."""
        return bleed_raster_size(self._canvas_size, (self.trim_width, self.trim_height), self._bleed)

    @property
    def page_number(self) -> int:
        return self.page + 1

    @property
    def progress(self) -> float:
        """0 on the first page, 1 on the last; 1 for single-page or open-ended books."""
        if self.total_pages is not None and self.total_pages > 1:
            return self.page / (self.total_pages - 1)
        return 1.0

    @property
    def state(self) -> BookState:
        return self._state

    @property
    def is_complete(self) -> bool:
        return self._state is BookState.COMPLETE

    @property
    def pages(self) -> Tuple[Page, ...]:
        return tuple(self._pages)

    @property
    def geometry(self) -> SheetGeometry:
        return SheetGeometry(
            trim_width=self.trim_width,
            trim_height=self.trim_height,
            bleed=self._bleed,
            unit=self.unit,
            print_marks=self._print_marks,
            frame_px=self._frame_size(),
        )

    def _frame_size(self) -> Tuple[int, int]:
        """Pixel size of the captured trim frames."""
        if self._pages:
            left, top, right, bottom = self._pages[0].trim_box_px
            return (right - left, bottom - top)
        return self._canvas_size

    def is_first_page(self) -> bool:
        return self.page == 0

    def is_last_page(self) -> bool:
        """True on the final page; always False for open-ended books."""
        return self.total_pages is not None and self.page == self.total_pages - 1

    # ─────────────────────────────────────────────────────────────────────────
    # Capture
    # ─────────────────────────────────────────────────────────────────────────

    def capture_frame(self, frame: Image.Image) -> Page:
        """
        Capture one rendered frame as the next page.

        Composites the bleed buffer behind the frame when bleed is set,
        computes marks when enabled, hands the page to the writer and
        clears the bleed buffer.

        Args:
            frame: Rendered trim-area raster

        Returns:
            The captured Page

        Raises:
            AlreadyComplete: If the book already reached its page target
            ValueError: If the bleed buffer and frame sizes differ
        """
        if self.is_complete:
            raise AlreadyComplete(
                f"Book is complete ({len(self._pages)} pages); no further pages can be captured"
            )

        trim_size = (self.trim_width, self.trim_height)
        image = composite(frame, self.bleed.snapshot(), trim_size, self._bleed)
        ox, oy = bleed_offset_px(frame.size, trim_size, self._bleed) if self._bleed > 0 else (0, 0)
        marks: Tuple[Mark, ...] = ()
        if self._print_marks:
            marks = compute_marks(self.trim_width, self.trim_height, self._bleed, self.unit)

        page = Page(
            index=self.page,
            image=image,
            marks=marks,
            trim_box_px=(ox, oy, ox + frame.width, oy + frame.height),
        )
        self._writer.add_page(
            self.bleed_width,
            self.bleed_height,
            [RasterPlacement(image, 0, 0, self.bleed_width, self.bleed_height)],
            marks,
            bleed=self._bleed,
        )
        self._pages.append(page)
        self.bleed.clear()
        self.page += 1

        logger.debug(f"Captured page {page.number} ({image.width}x{image.height} px)")

        if self.total_pages is not None and self.page >= self.total_pages:
            self._complete()
        return page

    def finish(self, filename: Optional[str] = None) -> None:
        """
        Complete the book explicitly. Needed for open-ended books.

        Args:
            filename: Optional new output filename
        """
        if filename:
            self.filename = filename
        self._complete()

    def _complete(self) -> None:
        self._state = BookState.COMPLETE
        if self._completion_fired:
            return
        self._completion_fired = True
        logger.info(f"Book complete with {len(self._pages)} pages")
        for callback in self._callbacks:
            callback(self)

    def _require_unstarted(self, operation: str) -> None:
        if self.page > 0:
            raise InvalidPhaseError(
                f"{operation}() must be called before the first page is captured"
            )

    # ─────────────────────────────────────────────────────────────────────────
    # Output
    # ─────────────────────────────────────────────────────────────────────────

    def page_images(self) -> List[Image.Image]:
        return [p.image for p in self._pages]

    def trim_view(self, index: int) -> Image.Image:
        """Page raster cropped to its trim area."""
        page = self._pages[index]
        return trim_view(page.image, page.trim_box_px)

    def build_reader_spreads(self) -> DocumentWriter:
        """
        Reader-spread document: cover solo, interior pairs, back cover solo.

        Raises:
            InvalidPageCount: If the page count does not allow spreads
        """
        spreads = build_reader_spreads(len(self._pages))
        return build_spread_document(self.page_images(), spreads, self.geometry, self._writer_factory())

    def build_saddle_stitch(self) -> DocumentWriter:
        """
        Saddle-stitch document in printer spread order.

        Raises:
            InvalidPageCount: If the page count is zero or not a multiple of 4
        """
        spreads = build_saddle_stitch(len(self._pages))
        return build_spread_document(self.page_images(), spreads, self.geometry, self._writer_factory())

    def _output_writer(self) -> DocumentWriter:
        if not self._spread:
            return self._writer
        try:
            return self.build_reader_spreads()
        except InvalidPageCount as e:
            logger.error(f"Spread export failed, writing single pages instead: {e}")
            return self._writer

    def to_bytes(self) -> bytes:
        """PDF bytes of the book (reader spreads in spread mode)."""
        return self._output_writer().to_bytes()

    def save(self, filename: Optional[Union[str, Path]] = None) -> Path:
        """
        Write the book PDF.

        In spread mode the reader-spread document is written. When the page
        count does not allow spreads the single-page document is written
        instead and the failure is logged.

        With saddle stitch enabled the signature document is written next
        to it as "<name>-saddle.pdf". A page count that does not allow
        saddle stitch is logged and only the book PDF is written.
        """
        path = self._output_writer().save(filename or self.filename)
        if self._saddle_stitch:
            try:
                self.save_saddle_stitch(saddle_filename(str(path)))
            except InvalidPageCount as e:
                logger.error(f"Saddle-stitch export skipped: {e}")
        return path

    def save_saddle_stitch(self, filename: Optional[Union[str, Path]] = None) -> Path:
        """
        Write the saddle-stitch PDF.

        Defaults to the book filename with "-saddle.pdf" in place of ".pdf".

        Raises:
            InvalidPageCount: If there are no pages or the count is not a
                multiple of 4
        """
        if not self._pages:
            raise InvalidPageCount("Saddle stitch: no pages to export", 0, suggested=4)
        writer = self.build_saddle_stitch()
        return writer.save(filename or saddle_filename(self.filename))


def saddle_filename(filename: str) -> str:
    """book.pdf -> book-saddle.pdf"""
    if filename.lower().endswith(".pdf"):
        return filename[: -len(".pdf")] + SADDLE_SUFFIX
    return filename + SADDLE_SUFFIX
