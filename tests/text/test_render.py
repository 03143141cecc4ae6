"""
Unit tests for drawing laid-out text onto rasters.
"""

from PIL import Image

from printbook.text.flow import LayoutResult, PlacedLine, TextFlow
from printbook.text.metrics import PillowMetrics
from printbook.text.render import draw_lines


class TestDrawLines:
    """Tests for draw_lines()."""

    def test_draw_when_lines_then_pixels_change_on_copy(self):
        # Arrange
        page = Image.new("RGB", (300, 200), "white")
        metrics = PillowMetrics.from_size(20)
        result = TextFlow().layout("Hello there", 10, 10, 280, 180, metrics)

        # Act
        drawn = draw_lines(page, result, metrics.font)

        # Assert
        assert drawn.convert("L").getextrema()[0] < 128
        assert page.convert("L").getextrema() == (255, 255)

    def test_draw_when_no_lines_then_unchanged(self):
        page = Image.new("RGB", (50, 50), "white")

        drawn = draw_lines(page, LayoutResult(lines=()), PillowMetrics.from_size(12).font)

        assert drawn.tobytes() == page.tobytes()

    def test_draw_when_empty_line_then_skipped(self):
        page = Image.new("RGB", (50, 50), "white")
        result = LayoutResult(lines=(PlacedLine("", 5, 20),))

        drawn = draw_lines(page, result, PillowMetrics.from_size(12).font)

        assert drawn.tobytes() == page.tobytes()
