"""
Unit tests for the text flow engine.
"""

import pytest

from printbook.text.flow import (
    DEFAULT_GUTTER,
    LayoutResult,
    TextFlow,
    layout,
    max_lines_per_column,
    resolve_leading,
    wrap_text,
)


class CharMetrics:
    """One unit per character, fixed ascent."""

    def __init__(self, font_size=10.0, ascent=8.0, leading=None):
        self.font_size = font_size
        self._ascent = ascent
        self._leading = leading

    def measure_width(self, text):
        return float(len(text))

    def ascent(self):
        return self._ascent

    def leading(self):
        return self._leading


class ExplodingMetrics:
    """Fails on any measurement."""

    font_size = 10.0

    def measure_width(self, text):
        raise AssertionError("measure_width called")

    def ascent(self):
        raise AssertionError("ascent called")

    def leading(self):
        raise AssertionError("leading called")


STORY = (
    "It was a bright cold day in April and the clocks were striking thirteen. "
    "Winston Smith slipped quickly through the glass doors of Victory Mansions.\n"
    "\n"
    "The hallway smelt of boiled cabbage and old rag mats."
)


class TestWrapText:
    """Tests for wrap_text()."""

    def test_wrap_when_two_words_fit_then_third_wraps(self):
        assert wrap_text("aa bb cc", 5, len) == ["aa bb", "cc"]

    def test_wrap_when_newlines_then_empty_paragraphs_kept(self):
        assert wrap_text("one\n\ntwo", 10, len) == ["one", "", "two"]

    def test_wrap_when_repeated_spaces_then_empty_words_skipped(self):
        assert wrap_text("aa   bb", 10, len) == ["aa bb"]

    def test_wrap_when_paragraph_only_spaces_then_no_line(self):
        assert wrap_text("a\n   \nb", 10, len) == ["a", "b"]

    def test_wrap_when_word_wider_than_column_then_kept_whole(self):
        assert wrap_text("a enormousword b", 4, len) == ["a", "enormousword", "b"]

    def test_wrap_when_every_line_then_within_width_unless_single_word(self):
        lines = wrap_text(STORY, 20, len)

        for line in lines:
            assert len(line) <= 20 or " " not in line


class TestLayout:
    """Tests for layout()."""

    def test_layout_when_fits_then_no_overflow(self):
        # Act
        result = layout("aa bb cc", 0, 0, 5, 100, 1, 0, CharMetrics())

        # Assert
        assert result.texts == ["aa bb", "cc"]
        assert result.overflow == ""
        assert not result.has_overflow

    def test_layout_when_empty_text_then_metrics_not_called(self):
        result = layout("", 0, 0, 100, 100, 2, 10, ExplodingMetrics())

        assert result == LayoutResult(lines=(), overflow="")

    def test_layout_when_placed_then_baselines_follow_leading(self):
        # Arrange
        metrics = CharMetrics(font_size=10, ascent=8)

        # Act
        result = layout("a b c", 5, 10, 1, 100, 1, 0, metrics)

        # Assert
        assert [line.y for line in result.lines] == pytest.approx([18, 30.5, 43])
        assert all(line.x == 5 for line in result.lines)

    def test_layout_when_box_short_then_overflow_joined_by_newlines(self):
        # Arrange: ascent 8, leading 10 -> 2 lines in a height of 18
        metrics = CharMetrics(ascent=8, leading=10)

        # Act
        result = layout("a b c d", 0, 0, 1, 18, 1, 0, metrics)

        # Assert
        assert result.texts == ["a", "b"]
        assert result.overflow == "c\nd"

    def test_layout_when_text_fits_first_column_then_second_unused(self):
        # Arrange: width 30, gutter 10 -> column width 10
        metrics = CharMetrics(ascent=8, leading=10)

        # Act
        result = layout("a b c d", 0, 0, 30, 18, 2, 10, metrics)

        # Assert
        assert [(line.text, line.x, line.column) for line in result.lines] == [
            ("a b c d", 0, 0),
        ]

    def test_layout_when_columns_fill_then_left_to_right(self):
        metrics = CharMetrics(ascent=8, leading=10)

        result = layout("aaaa bbbb cccc dddd eeee", 0, 0, 14, 18, 2, 4, metrics)

        assert [(line.text, line.x) for line in result.lines] == [
            ("aaaa", 0), ("bbbb", 0), ("cccc", 9), ("dddd", 9),
        ]
        assert result.overflow == "eeee"

    def test_layout_when_overflow_fed_back_then_same_lines_reproduced(self):
        # Arrange
        metrics = CharMetrics(ascent=8, leading=10)
        single = layout(STORY, 0, 0, 24, 10_000, 1, 0, metrics).texts

        # Act
        collected = []
        text = STORY
        for _ in range(100):
            result = layout(text, 0, 0, 24, 38, 1, 0, metrics)
            collected.extend(result.texts)
            if not result.has_overflow:
                break
            text = result.overflow

        # Assert
        assert not result.has_overflow
        assert collected == single

    @pytest.mark.parametrize("columns", [0, -2, 0.5])
    def test_layout_when_columns_below_one_then_single_column(self, columns):
        # Act
        result = layout("aa bb", 0, 0, 10, 100, columns, 5, CharMetrics())

        # Assert
        assert result.texts == ["aa bb"]
        assert result.lines[0].column == 0

    @pytest.mark.parametrize("leading", [0, -10])
    def test_layout_when_leading_not_positive_then_font_size_based(self, leading):
        # Arrange
        metrics = CharMetrics(font_size=10, ascent=8, leading=leading)

        # Act
        result = layout("a b", 0, 0, 1, 100, 1, 0, metrics)

        # Assert
        assert [line.y for line in result.lines] == pytest.approx([8, 20.5])

    def test_max_lines_when_box_shorter_than_ascent_then_one(self):
        assert max_lines_per_column(2, 8, 10) == 1

    def test_resolve_leading_when_none_then_font_size_based(self):
        assert resolve_leading(CharMetrics(font_size=16)) == pytest.approx(20)
        assert resolve_leading(CharMetrics(leading=14)) == 14


class TestTextFlow:
    """Tests for TextFlow sticky settings."""

    def test_init_when_defaults_then_one_column_default_gutter(self):
        flow = TextFlow()

        assert flow.columns == 1
        assert flow.gutter == DEFAULT_GUTTER

    @pytest.mark.parametrize("value,expected", [(0, 1), (-3, 1), (2.7, 2), (3, 3)])
    def test_columns_when_set_then_clamped(self, value, expected):
        flow = TextFlow()

        flow.columns = value

        assert flow.columns == expected

    def test_set_columns_when_chained_then_returns_flow(self):
        # Act
        flow = TextFlow().set_columns(2, gutter=12)

        # Assert
        assert flow.columns == 2
        assert flow.gutter == 12

    def test_set_columns_when_no_gutter_then_gutter_kept(self):
        flow = TextFlow(gutter=8).set_columns(3)

        assert flow.gutter == 8

    def test_layout_when_settings_sticky_then_used_each_call(self):
        # Arrange
        flow = TextFlow().set_columns(2, gutter=4)
        metrics = CharMetrics(ascent=8, leading=10)

        # Act
        first = flow.layout("aaaa bbbb cccc dddd eeee", 0, 0, 14, 18, metrics)
        second = flow.layout(first.overflow, 0, 0, 14, 18, metrics)

        # Assert
        assert {line.column for line in first.lines} == {0, 1}
        assert second.texts == ["eeee"]
