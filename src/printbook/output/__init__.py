"""
Module: output

Purpose:
    PDF writing (ReportLab) and read-back of page boxes (pypdf).
"""

from .writer import (
    DocumentWriter,
    PdfDocumentWriter,
    RasterPlacement,
    flatten_on_paper,
)
from .inspect import PageBoxes, read_page_boxes

__all__ = [
    "DocumentWriter",
    "PageBoxes",
    "PdfDocumentWriter",
    "RasterPlacement",
    "flatten_on_paper",
    "read_page_boxes",
]
