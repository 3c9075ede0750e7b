"""Exact 2D geometry over an unbounded integer board.

Lines are kept in general form (A*x + B*y + C = 0) with integer
coefficients wherever the inputs are board squares, so intersections that
land on a grid point are exact. Fractional results are BigDecimal.
"""

from boardmath.geometry import bounds, intersection, vectors
from boardmath.geometry.bounds import BoundingBox, BoundingBoxBD, DoubleBoundingBox, UnboundedRectangle
from boardmath.geometry.types import (
    BDCoords,
    ClosestPoint,
    Coords,
    DoubleCoords,
    IntersectionPoint,
    LineCoefficients,
    LineCoefficientsBD,
    Ray,
    Vec2,
)

__all__ = [
    # Modules
    "bounds",
    "intersection",
    "vectors",
    # Types
    "Coords",
    "Vec2",
    "DoubleCoords",
    "BDCoords",
    "LineCoefficients",
    "LineCoefficientsBD",
    "Ray",
    "IntersectionPoint",
    "ClosestPoint",
    # Boxes
    "BoundingBox",
    "BoundingBoxBD",
    "DoubleBoundingBox",
    "UnboundedRectangle",
]
