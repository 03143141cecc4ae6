"""
Unit tests for text metrics adapters.
"""

import pytest

from printbook.text.flow import TextFlow
from printbook.text.metrics import PillowMetrics, ReportLabMetrics, load_font


class TestPillowMetrics:
    """Tests for PillowMetrics."""

    def test_measure_when_longer_text_then_wider(self):
        # Arrange
        metrics = PillowMetrics.from_size(18)

        # Act & Assert
        assert metrics.measure_width("hello world") > metrics.measure_width("hello")

    def test_ascent_when_loaded_then_positive(self):
        assert PillowMetrics.from_size(18).ascent() > 0

    def test_leading_when_not_given_then_none(self):
        assert PillowMetrics(load_font(12)).leading() is None

    def test_font_size_when_loaded_then_matches_request(self):
        assert PillowMetrics(load_font(24)).font_size == 24

    def test_load_font_when_no_candidates_then_default_font(self):
        font = load_font(16, font_names=("does-not-exist.ttf",))

        assert font.getlength("abc") > 0


class TestReportLabMetrics:
    """Tests for ReportLabMetrics."""

    def test_measure_when_helvetica_then_matches_font_tables(self):
        metrics = ReportLabMetrics("Helvetica", 10)

        # Helvetica "H" is 722/1000 em
        assert metrics.measure_width("H") == pytest.approx(7.22)

    def test_ascent_when_helvetica_then_scaled(self):
        assert ReportLabMetrics("Helvetica", 10).ascent() == pytest.approx(7.18)

    def test_layout_when_reportlab_metrics_then_lines_fit_column(self):
        # Arrange
        metrics = ReportLabMetrics("Times-Roman", 11, leading=14)
        flow = TextFlow().set_columns(2, gutter=12)

        # Act
        result = flow.layout("the quick brown fox jumps over the lazy dog " * 20, 36, 36, 300, 200, metrics)

        # Assert
        column_width = (300 - 12) / 2
        assert result.lines
        for line in result.lines:
            assert metrics.measure_width(line.text) <= column_width
