"""
Unit tests for reading page boxes back from PDFs.
"""

import pytest
from PIL import Image

from printbook.output.inspect import PageBoxes, read_page_boxes
from printbook.output.writer import PdfDocumentWriter, RasterPlacement


class TestReadPageBoxes:
    """Tests for read_page_boxes()."""

    def test_read_when_path_then_boxes_per_page(self, tmp_path):
        # Arrange
        writer = PdfDocumentWriter("pt")
        img = Image.new("RGB", (20, 30), "white")
        writer.add_page(200, 300, [RasterPlacement(img, 0, 0, 200, 300)])
        writer.add_page(300, 200, [RasterPlacement(img, 0, 0, 300, 200)])
        path = writer.save(tmp_path / "boxes.pdf")

        # Act
        boxes = read_page_boxes(path)

        # Assert
        assert [b.media_size for b in boxes] == [
            pytest.approx((200, 300)),
            pytest.approx((300, 200)),
        ]
        assert not boxes[0].is_landscape
        assert boxes[1].is_landscape

    def test_read_when_missing_file_then_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_page_boxes(tmp_path / "missing.pdf")


class TestPageBoxes:
    """Tests for PageBoxes dataclass."""

    def test_bleed_in_when_inches_then_converted(self):
        # 9 pt of bleed on each side
        boxes = PageBoxes(media=(0, 0, 318, 450), bleed=(0, 0, 318, 450), trim=(9, 9, 309, 441))

        assert boxes.bleed_in("in") == pytest.approx(0.125)
        assert boxes.trim_size == (300, 432)
