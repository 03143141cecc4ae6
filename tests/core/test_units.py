"""
Unit tests for the unit converter.
"""

import pytest

from printbook.core.units import (
    MM_PER_UNIT,
    UNITS,
    UnknownUnit,
    convert,
    from_reference_units,
    to_points,
    to_reference_units,
    validate_unit,
)


class TestValidateUnit:
    """Tests for validate_unit()."""

    @pytest.mark.parametrize("token", ["in", "cm", "mm", "pt", "px"])
    def test_validate_when_canonical_token_then_returned(self, token):
        assert validate_unit(token) == token

    @pytest.mark.parametrize(
        "alias,token",
        [("inch", "in"), ("centimeter", "cm"), ("millimeter", "mm"), ("point", "pt"), ("pixel", "px")],
    )
    def test_validate_when_long_alias_then_canonical(self, alias, token):
        assert validate_unit(alias) == token

    @pytest.mark.parametrize("bad", ["furlong", "IN", "", None, 5])
    def test_validate_when_unrecognised_then_raises_unknown_unit(self, bad):
        with pytest.raises(UnknownUnit):
            validate_unit(bad)

    def test_unknown_unit_when_raised_then_names_token_and_recognised_set(self):
        # Act
        with pytest.raises(UnknownUnit) as exc_info:
            convert(1, "furlong", "mm")

        # Assert
        assert exc_info.value.unit == "furlong"
        assert "furlong" in str(exc_info.value)
        for token in UNITS:
            assert token in str(exc_info.value)

    def test_unknown_unit_when_caught_as_value_error_then_matches(self):
        with pytest.raises(ValueError):
            to_reference_units(1, "league")


class TestConversion:
    """Tests for reference-unit conversion."""

    def test_to_reference_when_inches_then_millimetres(self):
        assert to_reference_units(1, "in") == pytest.approx(25.4)

    def test_from_reference_when_centimetres_then_divides_by_ten(self):
        assert from_reference_units(10, "cm") == pytest.approx(1.0)

    def test_convert_when_inch_to_points_then_72(self):
        assert convert(1, "in", "pt") == pytest.approx(72)

    def test_convert_when_inch_to_pixels_then_96(self):
        assert convert(1, "in", "px") == pytest.approx(96)

    def test_to_points_when_millimetres_then_matches_convert(self):
        assert to_points(25.4, "mm") == pytest.approx(72)

    @pytest.mark.parametrize("unit", sorted(MM_PER_UNIT))
    def test_round_trip_when_any_unit_then_amount_preserved(self, unit):
        # Arrange
        amount = 3.7

        # Act
        result = from_reference_units(to_reference_units(amount, unit), unit)

        # Assert
        assert result == pytest.approx(amount)

    def test_convert_when_same_unit_then_identity(self):
        assert convert(0.125, "in", "in") == pytest.approx(0.125)
