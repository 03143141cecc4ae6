"""Top-level package for printbook.

Assembles rendered page rasters into print-ready PDFs with bleed,
print marks, reader spreads and saddle-stitch imposition, and lays
prose into multi-column boxes with overflow.

Provides subpackages:
- printbook.core – unit conversion
- printbook.book – page/document state, bleed, print marks
- printbook.imposition – reader spreads and saddle stitch
- printbook.text – multi-column text flow
- printbook.output – PDF writing and inspection
- printbook.capture – frame sources
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    # In dev mode, read directly from pyproject.toml
    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.1.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    # Fallback to importlib.metadata for installed package
    try:
        from importlib.metadata import PackageNotFoundError, version as pkg_version
        return pkg_version("printbook")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__copyright__ = "Copyright 2026 The printbook authors"

from .core.units import UnknownUnit, convert
from .config import BookConfig, PAGE_FORMATS
from .book.document import AlreadyComplete, Book, BookState, InvalidPhaseError, Page
from .imposition import InvalidPageCount, Spread, build_reader_spreads, build_saddle_stitch
from .text import LayoutResult, PlacedLine, TextFlow, layout, wrap_text

__all__: list[str] = [
    "__version__",
    "__copyright__",
    "AlreadyComplete",
    "Book",
    "BookConfig",
    "BookState",
    "InvalidPageCount",
    "InvalidPhaseError",
    "LayoutResult",
    "PAGE_FORMATS",
    "Page",
    "PlacedLine",
    "Spread",
    "TextFlow",
    "UnknownUnit",
    "build_reader_spreads",
    "build_saddle_stitch",
    "convert",
    "layout",
    "wrap_text",
]
