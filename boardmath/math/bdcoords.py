"""Conversions between board coordinates and BigDecimal coordinates."""

from __future__ import annotations

from typing import TYPE_CHECKING

from boardmath.config import DEFAULT_WORKING_PRECISION
from boardmath.math.bigdecimal import BigDecimal

if TYPE_CHECKING:
    from boardmath.geometry.types import BDCoords, Coords, DoubleCoords

__all__ = [
    "from_coords",
    "from_double_coords",
    "coords_to_int",
    "coords_to_doubles",
    "are_coords_integers",
    "are_bd_coords_equal",
    "stringify_bd_coords",
]


def from_coords(coords: Coords, precision: int = DEFAULT_WORKING_PRECISION) -> BDCoords:
    """Lift integer coordinates to exact BigDecimal coordinates.

    Raises:
        ScaleOutOfRange: If precision is outside [0, MAX_SCALE]
    """
    return (BigDecimal.from_int(coords[0], precision), BigDecimal.from_int(coords[1], precision))


def from_double_coords(coords: DoubleCoords, precision: int = DEFAULT_WORKING_PRECISION) -> BDCoords:
    """Lift float coordinates to BigDecimal coordinates.

    Raises:
        NonFiniteInput: If either coordinate is NaN or infinite
        ScaleOutOfRange: If precision is outside [0, MAX_SCALE]
    """
    return (BigDecimal.from_number(coords[0], precision), BigDecimal.from_number(coords[1], precision))


def coords_to_int(coords: BDCoords) -> Coords:
    """Round both coordinates to the nearest integer (halves toward +inf)."""
    return (coords[0].to_int(), coords[1].to_int())


def coords_to_doubles(coords: BDCoords) -> DoubleCoords:
    """Cast both coordinates to floats. Same range caveats as BigDecimal.to_number()."""
    return (coords[0].to_number(), coords[1].to_number())


def are_coords_integers(coords: BDCoords) -> bool:
    return coords[0].is_integer() and coords[1].is_integer()


def are_bd_coords_equal(coords1: BDCoords, coords2: BDCoords) -> bool:
    """Value equality of both components, regardless of scale."""
    return coords1[0] == coords2[0] and coords1[1] == coords2[1]


def stringify_bd_coords(coords: BDCoords) -> str:
    """Format as "(x, y)" using each coordinate's rounded string."""
    return f"({coords[0].to_string()}, {coords[1].to_string()})"
