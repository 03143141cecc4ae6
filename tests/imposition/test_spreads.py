"""
Unit tests for spread orderings.
"""

import pytest

from printbook.imposition.spreads import (
    InvalidPageCount,
    Spread,
    build_reader_spreads,
    build_saddle_stitch,
    validate_spreads,
)


class TestReaderSpreads:
    """Tests for build_reader_spreads()."""

    def test_build_when_six_pages_then_cover_pairs_back(self):
        # Act
        spreads = build_reader_spreads(6)

        # Assert
        assert [s.as_tuple() for s in spreads] == [(0, None), (1, 2), (3, 4), (5, None)]

    def test_build_when_two_pages_then_both_solo(self):
        assert [s.as_tuple() for s in build_reader_spreads(2)] == [(0, None), (1, None)]

    def test_build_when_every_page_then_used_once_in_order(self):
        spreads = build_reader_spreads(12)

        flat = [i for s in spreads for i in s.indices]
        assert flat == list(range(12))

    @pytest.mark.parametrize("count", [0, 1])
    def test_build_when_fewer_than_two_then_raises(self, count):
        with pytest.raises(InvalidPageCount) as exc_info:
            build_reader_spreads(count)
        assert exc_info.value.page_count == count

    def test_build_when_odd_count_then_raises_with_suggestion(self):
        with pytest.raises(InvalidPageCount) as exc_info:
            build_reader_spreads(5)
        assert exc_info.value.suggested == 6

    def test_invalid_page_count_when_raised_then_is_value_error(self):
        with pytest.raises(ValueError):
            build_reader_spreads(7)


class TestSaddleStitch:
    """Tests for build_saddle_stitch()."""

    def test_build_when_eight_pages_then_printer_order(self):
        # Act
        spreads = build_saddle_stitch(8)

        # Assert
        assert [s.as_tuple() for s in spreads] == [(7, 0), (1, 6), (5, 2), (3, 4)]

    def test_build_when_four_pages_then_two_sheets(self):
        assert [s.as_tuple() for s in build_saddle_stitch(4)] == [(3, 0), (1, 2)]

    def test_build_when_valid_then_every_page_exactly_once(self):
        spreads = build_saddle_stitch(16)

        flat = sorted(i for s in spreads for i in s.indices)
        assert flat == list(range(16))

    @pytest.mark.parametrize("count,suggested", [(6, 8), (9, 12), (1, 4), (0, 4)])
    def test_build_when_not_multiple_of_four_then_raises_with_suggestion(self, count, suggested):
        # Act
        with pytest.raises(InvalidPageCount) as exc_info:
            build_saddle_stitch(count)

        # Assert
        assert exc_info.value.suggested == suggested
        assert str(suggested) in str(exc_info.value)


class TestValidateSpreads:
    """Tests for validate_spreads()."""

    def test_validate_when_index_missing_then_raises(self):
        with pytest.raises(InvalidPageCount, match="refers to page 4"):
            validate_spreads([Spread(0), Spread(3, 4)], 4)

    def test_validate_when_all_present_then_passes(self):
        validate_spreads(build_saddle_stitch(8), 8)
