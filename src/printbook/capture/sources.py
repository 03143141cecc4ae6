"""
Module: capture.sources

Purpose:
    Frame sources that supply one Pillow raster per page: a list of
    image files, or the pages of an existing PDF rendered with PyMuPDF.
    Each source sizes its frames to the book's capture canvas, so pages
    can be fed straight into Book.capture_frame().

Key Classes:
    - ImageFileSource: Frames from image files
    - PdfPageSource: Frames rendered from PDF pages

Key Functions:
    - capture_all(): Feed every frame of a source into a book

Dependencies:
    - PIL: Image loading and resizing
    - fitz (PyMuPDF): PDF rendering
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Iterator, List, Optional, Sequence, Tuple, Union

import fitz
from PIL import Image

if TYPE_CHECKING:
    from printbook.book.document import Book

logger = logging.getLogger(__name__)

IMAGE_SUFFIXES = (".png", ".jpg", ".jpeg", ".tif", ".tiff", ".bmp", ".webp")

PathLike = Union[str, Path]


class ImageFileSource:
    """
    Frames loaded from image files, in the given order.

    Args:
        paths: Image file paths
        size: Frame size in pixels; frames of another size are resized

    Example:
        >>> source = ImageFileSource.from_directory("pages/", size=book.canvas_size)
        >>> len(source)
        12
    """

    def __init__(self, paths: Sequence[PathLike], size: Optional[Tuple[int, int]] = None):
        self.paths: List[Path] = [Path(p) for p in paths]
        self.size = size
        missing = [p for p in self.paths if not p.exists()]
        if missing:
            raise FileNotFoundError(f"Image not found: {missing[0]}")

    @classmethod
    def from_directory(
        cls,
        directory: PathLike,
        size: Optional[Tuple[int, int]] = None,
    ) -> "ImageFileSource":
        """All images in a directory, sorted by file name."""
        directory = Path(directory)
        if not directory.is_dir():
            raise NotADirectoryError(f"Not a directory: {directory}")
        paths = sorted(p for p in directory.iterdir() if p.suffix.lower() in IMAGE_SUFFIXES)
        logger.info(f"Found {len(paths)} images in {directory}")
        return cls(paths, size=size)

    def __len__(self) -> int:
        return len(self.paths)

    def __iter__(self) -> Iterator[Image.Image]:
        for path in self.paths:
            with Image.open(path) as img:
                frame = img.convert("RGBA")
            yield _fit(frame, self.size)


class PdfPageSource:
    """
    Frames rendered from the pages of a PDF.

    Each page is rendered to exactly `size` pixels when given, otherwise
    at `dpi`.

    Args:
        pdf_path: Source PDF
        size: Frame size in pixels
        dpi: Render resolution when no size is given
    """

    def __init__(self, pdf_path: PathLike, size: Optional[Tuple[int, int]] = None, dpi: int = 150):
        self.pdf_path = Path(pdf_path)
        if not self.pdf_path.exists():
            raise FileNotFoundError(f"PDF not found: {self.pdf_path}")
        if dpi <= 0:
            raise ValueError(f"dpi must be positive: {dpi}")
        self.size = size
        self.dpi = dpi

    def __len__(self) -> int:
        with fitz.open(str(self.pdf_path)) as doc:
            return doc.page_count

    def __iter__(self) -> Iterator[Image.Image]:
        with fitz.open(str(self.pdf_path)) as doc:
            for page in doc:
                yield self.render(page)

    def render(self, page: fitz.Page) -> Image.Image:
        """Render one page to an RGB frame."""
        if self.size is not None:
            matrix = fitz.Matrix(self.size[0] / page.rect.width, self.size[1] / page.rect.height)
        else:
            matrix = fitz.Matrix(self.dpi / 72.0, self.dpi / 72.0)

        pix = page.get_pixmap(matrix=matrix, alpha=False)
        image = Image.frombytes("RGB", (pix.width, pix.height), pix.samples)
        # Fractional scale factors can round a pixel short
        return _fit(image, self.size)


def _fit(image: Image.Image, size: Optional[Tuple[int, int]]) -> Image.Image:
    if size is None or image.size == tuple(size):
        return image
    return image.resize(size, Image.Resampling.LANCZOS)


def capture_all(book: "Book", source) -> int:
    """
    Capture every frame of a source into a book.

    Stops early when the book completes. An open-ended book is finished
    once the source runs out.

    Returns:
        Number of pages captured
    """
    captured = 0
    for frame in source:
        if book.is_complete:
            logger.warning(f"Book complete after {captured} pages, ignoring remaining frames")
            break
        book.capture_frame(frame)
        captured += 1

    if book.total_pages is None:
        book.finish()
    elif not book.is_complete:
        logger.warning(f"Source ran out after {captured} of {book.total_pages} pages")
    return captured
