"""Vector and line construction helpers.

Lines use the general form A*x + B*y + C = 0. Integer variants are exact and
preferred whenever the inputs are board squares; the *_bd variants accept
BigDecimal coordinates.
"""

import math

from boardmath.geometry.types import (
    BDCoords,
    Coords,
    DoubleCoords,
    LineCoefficients,
    LineCoefficientsBD,
    Vec2,
)
from boardmath.math import bdcoords, bimath
from boardmath.math.bigdecimal import BigDecimal, hypot

__all__ = [
    # Constants
    "VECTORS_ORTHOGONAL",
    "VECTORS_DIAGONAL",
    "VECTORS_HIPPOGONAL",
    # Construction
    "vec2_key",
    "vec2_from_key",
    "vector_to_doubles",
    "line_from_point_and_vector",
    "line_from_point_and_vector_bd",
    "line_from_two_points",
    "line_from_two_points_bd",
    "coefficients_to_bd",
    "vector_from_points",
    "vector_from_points_bd",
    "line_c_from_point_and_vector",
    "line_c_from_point_and_vector_bd",
    # Operations
    "are_lines_equal",
    "xy_components_from_angle",
    "dot_product",
    "dot_product_bd",
    "negate_vector",
    "negate_vector_bd",
    "abs_vector",
    "normalize_vector",
    "perpendicular_vector",
    "perpendicular_line",
    # Distances
    "euclidean_distance",
    "euclidean_distance_bd",
    "euclidean_distance_doubles",
    "manhattan_distance",
    "chebyshev_distance",
    "chebyshev_distance_bd",
    "chebyshev_distance_doubles",
]

# Positive (absolute) directions only; negate for the other half
VECTORS_ORTHOGONAL: tuple[Vec2, ...] = ((1, 0), (0, 1))
VECTORS_DIAGONAL: tuple[Vec2, ...] = ((1, 1), (1, -1))
VECTORS_HIPPOGONAL: tuple[Vec2, ...] = ((1, 2), (1, -2), (2, 1), (2, -1))

_ZERO = BigDecimal.from_int(0)
_ONE = BigDecimal.from_int(1)


# =============================================================================
# Construction
# =============================================================================


def vec2_key(vector: Vec2) -> str:
    """Key string of a vector: (dx, dy) -> "dx,dy"."""
    return f"{vector[0]},{vector[1]}"


def vec2_from_key(key: str) -> Vec2:
    """Inverse of vec2_key: "dx,dy" -> (dx, dy)."""
    dx, dy = key.split(",")
    return (int(dx), int(dy))


def vector_to_doubles(vector: Vec2) -> DoubleCoords:
    return (float(vector[0]), float(vector[1]))


def line_from_point_and_vector(coords: Coords, vector: Vec2) -> LineCoefficients:
    """General-form coefficients of the line through coords along vector."""
    a = vector[1]
    b = -vector[0]
    c = vector[0] * coords[1] - vector[1] * coords[0]
    return (a, b, c)


def line_from_point_and_vector_bd(coords: BDCoords, vector: Vec2) -> LineCoefficientsBD:
    """line_from_point_and_vector for BigDecimal coordinates."""
    vx, vy = bdcoords.from_coords(vector)
    c = vx.multiply_fixed(coords[1]).subtract(vy.multiply_fixed(coords[0]))
    return (vy, vx.negate(), c)


def line_from_two_points(coords1: Coords, coords2: Coords) -> LineCoefficients:
    """General-form coefficients of the line through two points.

    Uses cross-multiplication, (y - y1)(x2 - x1) = (x - x1)(y2 - y1), so
    no division is involved. A vertical line x = x1 is (1, 0, -x1).
    """
    if coords1[0] == coords2[0]:
        return (1, 0, -coords1[0])

    a = coords2[1] - coords1[1]  # y2 - y1
    b = coords1[0] - coords2[0]  # x1 - x2
    c = coords2[0] * coords1[1] - coords1[0] * coords2[1]  # x2*y1 - x1*y2
    return (a, b, c)


def line_from_two_points_bd(coords1: BDCoords, coords2: BDCoords) -> LineCoefficientsBD:
    """line_from_two_points for BigDecimal coordinates."""
    if coords1[0] == coords2[0]:
        return (_ONE, _ZERO, coords1[0].negate())

    a = coords2[1].subtract(coords1[1])
    b = coords1[0].subtract(coords2[0])
    c = coords2[0].multiply_fixed(coords1[1]).subtract(coords1[0].multiply_fixed(coords2[1]))
    return (a, b, c)


def coefficients_to_bd(line: LineCoefficients) -> LineCoefficientsBD:
    return (BigDecimal.from_int(line[0]), BigDecimal.from_int(line[1]), BigDecimal.from_int(line[2]))


def vector_from_points(start: Coords, end: Coords) -> Vec2:
    return (end[0] - start[0], end[1] - start[1])


def vector_from_points_bd(start: BDCoords, end: BDCoords) -> BDCoords:
    return (end[0].subtract(start[0]), end[1].subtract(start[1]))


def line_c_from_point_and_vector(coords: Coords, vector: Vec2) -> int:
    """The C coefficient of the line through coords along vector.

    Unique per line among all lines sharing the same slope, so it can key
    parallel lines.
    """
    return vector[0] * coords[1] - vector[1] * coords[0]


def line_c_from_point_and_vector_bd(coords: BDCoords, vector: BDCoords) -> BigDecimal:
    """line_c_from_point_and_vector for BigDecimal coordinates."""
    # Coordinates first: they usually carry more precision than the vector
    return coords[1].multiply_fixed(vector[0]).subtract(coords[0].multiply_fixed(vector[1]))


# =============================================================================
# Operations
# =============================================================================


def are_lines_equal(line1: LineCoefficients, line2: LineCoefficients) -> bool:
    """True if two general-form lines coincide (proportional coefficients)."""
    a1, b1, c1 = line1
    a2, b2, c2 = line2
    return a1 * b2 == a2 * b1 and a1 * c2 == a2 * c1 and b1 * c2 == b2 * c1


def xy_components_from_angle(theta: float) -> DoubleCoords:
    """Components of the unit vector at angle theta (radians)."""
    return (math.cos(theta), math.sin(theta))


def dot_product(v1: Vec2, v2: Vec2) -> int:
    """Positive when the vectors roughly point the same way."""
    return v1[0] * v2[0] + v1[1] * v2[1]


def dot_product_bd(v1: BDCoords, v2: BDCoords) -> BigDecimal:
    return v1[0].multiply_fixed(v2[0]).add(v1[1].multiply_fixed(v2[1]))


def negate_vector(vector: Vec2) -> Vec2:
    return (-vector[0], -vector[1])


def negate_vector_bd(vector: BDCoords) -> BDCoords:
    return (vector[0].negate(), vector[1].negate())


def abs_vector(vector: Vec2) -> Vec2:
    """The positive form of a direction: pointing right, or up when vertical."""
    if vector[0] < 0 or (vector[0] == 0 and vector[1] < 0):
        return negate_vector(vector)
    return vector


def normalize_vector(vector: Vec2) -> Vec2:
    """Smallest integer vector with the same direction. (0, 0) stays (0, 0)."""
    divisor = bimath.gcd(vector[0], vector[1])
    if divisor == 0:
        return (0, 0)
    return (vector[0] // divisor, vector[1] // divisor)


def perpendicular_vector(vector: Vec2) -> Vec2:
    """The vector rotated 90 degrees counter-clockwise."""
    return (-vector[1], vector[0])


def perpendicular_line(line: LineCoefficients, point: BDCoords) -> LineCoefficientsBD:
    """Coefficients of the line through point perpendicular to line.

    The normal of A*x + B*y + C = 0 is (A, B), so the perpendicular is
    B*x - A*y + (A*py - B*px) = 0.
    """
    a, b = BigDecimal.from_int(line[0]), BigDecimal.from_int(line[1])
    c = point[1].multiply_fixed(a).subtract(point[0].multiply_fixed(b))
    return (b, a.negate(), c)


# =============================================================================
# Distances
# =============================================================================


def euclidean_distance(point1: Coords, point2: Coords) -> BigDecimal:
    return euclidean_distance_bd(bdcoords.from_coords(point1), bdcoords.from_coords(point2))


def euclidean_distance_bd(point1: BDCoords, point2: BDCoords) -> BigDecimal:
    """Straight-line distance, computed with the floating-point model."""
    return hypot(point2[0].subtract(point1[0]), point2[1].subtract(point1[1]))


def euclidean_distance_doubles(point1: DoubleCoords, point2: DoubleCoords) -> float:
    return math.hypot(point2[0] - point1[0], point2[1] - point1[1])


def manhattan_distance(point1: Coords, point2: Coords) -> int:
    """Sum of the x and y distances."""
    return bimath.abs_int(point2[0] - point1[0]) + bimath.abs_int(point2[1] - point1[1])


def chebyshev_distance(point1: Coords, point2: Coords) -> int:
    """Larger of the x and y distances; one king step is always distance 1."""
    return bimath.max_int(bimath.abs_int(point2[0] - point1[0]), bimath.abs_int(point2[1] - point1[1]))


def chebyshev_distance_bd(point1: BDCoords, point2: BDCoords) -> BigDecimal:
    return max(abs(point2[0].subtract(point1[0])), abs(point2[1].subtract(point1[1])))


def chebyshev_distance_doubles(point1: DoubleCoords, point2: DoubleCoords) -> float:
    return max(abs(point2[0] - point1[0]), abs(point2[1] - point1[1]))
