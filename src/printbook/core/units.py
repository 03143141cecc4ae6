"""
Module: core.units

Purpose:
    Convert lengths between the linear units a book can be specified in.
    Millimetres are the reference unit; every other unit is a fixed
    ratio to it.

Key Functions:
    - to_reference_units(): amount in unit -> millimetres
    - from_reference_units(): millimetres -> amount in unit
    - convert(): unit -> unit
    - validate_unit(): canonical token for a unit name

Dependencies:
    - None (pure arithmetic)

Used By:
    - printbook.config: BookConfig validation
    - printbook.book.document: bleed conversion, DPI
    - printbook.book.marks: gap/arm constants
    - printbook.output.writer: document unit -> PDF points
"""

from __future__ import annotations

from typing import Dict, Tuple

# Millimetres per unit
MM_PER_UNIT: Dict[str, float] = {
    "in": 25.4,
    "cm": 10.0,
    "mm": 1.0,
    "pt": 25.4 / 72,
    "px": 25.4 / 96,
}

UNITS: Tuple[str, ...] = tuple(MM_PER_UNIT)

_ALIASES: Dict[str, str] = {
    "inch": "in",
    "inches": "in",
    "centimeter": "cm",
    "centimeters": "cm",
    "millimeter": "mm",
    "millimeters": "mm",
    "point": "pt",
    "points": "pt",
    "pixel": "px",
    "pixels": "px",
}


class UnknownUnit(ValueError):
    """Raised for a unit token outside the recognised set."""

    def __init__(self, unit: object):
        self.unit = unit
        super().__init__(
            f"Unknown unit {unit!r}. Use one of: {', '.join(UNITS)}"
        )


def validate_unit(unit: str) -> str:
    """
    Return the canonical token for a unit name.

    Accepts the short tokens in UNITS and their long English names.

    Raises:
        UnknownUnit: If the name is not recognised
    """
    if isinstance(unit, str):
        if unit in MM_PER_UNIT:
            return unit
        if unit in _ALIASES:
            return _ALIASES[unit]
    raise UnknownUnit(unit)


def to_reference_units(amount: float, unit: str) -> float:
    """
    Convert an amount in `unit` to millimetres.

    Example:
        >>> to_reference_units(1, "in")
        25.4
    """
    return amount * MM_PER_UNIT[validate_unit(unit)]


def from_reference_units(amount: float, unit: str) -> float:
    """
    Convert an amount in millimetres to `unit`.

    Example:
        >>> from_reference_units(10, "cm")
        1.0
    """
    return amount / MM_PER_UNIT[validate_unit(unit)]


def convert(amount: float, from_unit: str, to_unit: str) -> float:
    """Convert an amount between two units."""
    return from_reference_units(to_reference_units(amount, from_unit), to_unit)


def to_points(amount: float, unit: str) -> float:
    """Convert an amount to PDF points (1/72 inch)."""
    return convert(amount, unit, "pt")
