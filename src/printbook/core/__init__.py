"""
Core helpers shared by every other printbook module.

Currently this is the unit converter: all user-facing lengths are given
in a declared unit and converted through millimetres.
"""

from .units import (
    MM_PER_UNIT,
    UNITS,
    UnknownUnit,
    convert,
    from_reference_units,
    to_points,
    to_reference_units,
    validate_unit,
)

__all__ = [
    "MM_PER_UNIT",
    "UNITS",
    "UnknownUnit",
    "convert",
    "from_reference_units",
    "to_points",
    "to_reference_units",
    "validate_unit",
]
