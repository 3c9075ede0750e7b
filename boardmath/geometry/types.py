"""Coordinate, line and result types shared by the geometry engine."""

from dataclasses import dataclass

from boardmath.errors import GeometryError
from boardmath.math.bigdecimal import BigDecimal

# Integer board square [x, y]
Coords = tuple[int, int]
# Integer direction [dx, dy]
Vec2 = tuple[int, int]
# Float coordinates, only for values known to fit a double
DoubleCoords = tuple[float, float]
# Arbitrary-precision coordinates
BDCoords = tuple[BigDecimal, BigDecimal]

# Coefficients (A, B, C) of the general-form line A*x + B*y + C = 0.
# Integer when derived from board squares, which keeps intersections exact.
LineCoefficients = tuple[int, int, int]
LineCoefficientsBD = tuple[BigDecimal, BigDecimal, BigDecimal]


@dataclass(frozen=True)
class Ray:
    """A ray from an integer start point out to infinity along a vector.

    Attributes:
        start: Board square the ray starts from.
        vector: Direction of travel. Never (0, 0).
        line: General-form coefficients of the containing line.
    """

    start: Coords
    vector: Vec2
    line: LineCoefficients

    @classmethod
    def from_start_and_vector(cls, start: Coords, vector: Vec2) -> "Ray":
        """Create a ray, deriving its line coefficients.

        Raises:
            GeometryError: If vector is the zero vector
        """
        from boardmath.geometry.vectors import line_from_point_and_vector

        if vector[0] == 0 and vector[1] == 0:
            raise GeometryError(f"Ray direction cannot be the zero vector (start={start})")
        return cls(start=start, vector=vector, line=line_from_point_and_vector(start, vector))


@dataclass(frozen=True)
class IntersectionPoint:
    """A point where a line crosses a bounding box edge.

    Attributes:
        coords: The intersection.
        positive_dot_product: True if the point lies in the direction of
            travel from the line's start (or on the start itself).
    """

    coords: BDCoords
    positive_dot_product: bool


@dataclass(frozen=True)
class ClosestPoint:
    """The point of a segment nearest to a query point."""

    coords: BDCoords
    distance: BigDecimal
