"""
Module: capture

Purpose:
    Frame sources for feeding pages into a Book.
"""

from .sources import ImageFileSource, PdfPageSource, capture_all

__all__ = ["ImageFileSource", "PdfPageSource", "capture_all"]
