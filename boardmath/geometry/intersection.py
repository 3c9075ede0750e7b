"""Intersections of lines, segments, rays and bounding boxes.

Every function is pure. "No intersection" (including parallel and
coincident lines) is reported as None, never as an exception.

Integer-coefficient variants are preferred whenever the lines come from
board squares: the numerators are computed exactly and the only rounding is
the single final division, so an intersection on a grid point comes back
with no fractional residue.
"""

from collections.abc import Callable

import structlog

from boardmath.errors import GeometryError
from boardmath.geometry.bounds import BoundingBox, BoundingBoxBD, box_to_bd
from boardmath.geometry.types import (
    BDCoords,
    ClosestPoint,
    Coords,
    IntersectionPoint,
    LineCoefficients,
    LineCoefficientsBD,
    Ray,
    Vec2,
)
from boardmath.geometry.vectors import (
    chebyshev_distance_bd,
    coefficients_to_bd,
    dot_product,
    dot_product_bd,
    euclidean_distance_bd,
    line_from_point_and_vector,
    line_from_point_and_vector_bd,
    line_from_two_points,
    perpendicular_line,
    perpendicular_vector,
    vector_from_points,
    vector_from_points_bd,
)
from boardmath.math import bdcoords, bimath
from boardmath.math.bigdecimal import BigDecimal

logger = structlog.get_logger()

__all__ = [
    # Line intersections
    "intersect_lines",
    "intersect_lines_bd",
    "intersect_line_and_vertical_line",
    "intersect_line_and_vertical_line_bd",
    "intersect_line_and_horizontal_line",
    "intersect_line_and_horizontal_line_bd",
    # Composite intersections
    "is_point_on_segment",
    "intersect_segments",
    "intersect_line_and_segment",
    "intersect_ray_and_segment",
    "intersect_rays",
    # High-level algorithms
    "find_line_box_intersections",
    "find_line_box_intersections_bd",
    "closest_point_on_segment",
    "find_cross_sectional_width_points",
    # Utilities
    "round_point_to_nearest_gridpoint",
]

_ZERO = BigDecimal.from_int(0)


# =============================================================================
# Line intersections
# =============================================================================


def intersect_lines(line1: LineCoefficients, line2: LineCoefficients) -> BDCoords | None:
    """Intersection of two integer general-form lines by Cramer's rule.

    Returns None when the determinant is zero (parallel or coincident).
    """
    a1, b1, c1 = line1
    a2, b2, c2 = line2

    determinant = a1 * b2 - a2 * b1
    if determinant == 0:
        return None

    determinant_bd = BigDecimal.from_int(determinant)
    x = BigDecimal.from_int(c2 * b1 - c1 * b2).divide_fixed(determinant_bd)
    y = BigDecimal.from_int(a2 * c1 - a1 * c2).divide_fixed(determinant_bd)
    return (x, y)


def intersect_lines_bd(line1: LineCoefficientsBD, line2: LineCoefficientsBD) -> BDCoords | None:
    """intersect_lines for BigDecimal coefficients."""
    a1, b1, c1 = line1
    a2, b2, c2 = line2

    determinant = a1.multiply_fixed(b2).subtract(a2.multiply_fixed(b1))
    if determinant.is_zero():
        return None

    x = c2.multiply_fixed(b1).subtract(c1.multiply_fixed(b2)).divide_fixed(determinant)
    y = a2.multiply_fixed(c1).subtract(a1.multiply_fixed(c2)).divide_fixed(determinant)
    return (x, y)


def _solve_for_unknown_axis(known_coefficient: int, unknown_coefficient: int, c: int, known_value: int) -> BigDecimal:
    """unknown = -(known_coefficient * known_value + C) / unknown_coefficient."""
    if unknown_coefficient == 0:
        raise GeometryError("Cannot solve for axis: its coefficient is zero")

    numerator = -(known_coefficient * known_value + c)
    return BigDecimal.from_int(numerator).divide_fixed(BigDecimal.from_int(unknown_coefficient))


def _solve_for_unknown_axis_bd(
    known_coefficient: BigDecimal, unknown_coefficient: BigDecimal, c: BigDecimal, known_value: BigDecimal
) -> BigDecimal:
    if unknown_coefficient.is_zero():
        raise GeometryError("Cannot solve for axis: its coefficient is zero")

    numerator = known_coefficient.multiply_fixed(known_value).add(c).negate()
    return numerator.divide_fixed(unknown_coefficient)


def intersect_line_and_vertical_line(line: LineCoefficients, x: int) -> BDCoords:
    """Where a non-vertical line crosses the vertical line at x.

    Raises:
        GeometryError: If line is itself vertical (B == 0)
    """
    a, b, c = line
    return (BigDecimal.from_int(x), _solve_for_unknown_axis(a, b, c, x))


def intersect_line_and_vertical_line_bd(line: LineCoefficientsBD, x: BigDecimal) -> BDCoords:
    a, b, c = line
    return (x, _solve_for_unknown_axis_bd(a, b, c, x))


def intersect_line_and_horizontal_line(line: LineCoefficients, y: int) -> BDCoords:
    """Where a non-horizontal line crosses the horizontal line at y.

    Raises:
        GeometryError: If line is itself horizontal (A == 0)
    """
    a, b, c = line
    return (_solve_for_unknown_axis(b, a, c, y), BigDecimal.from_int(y))


def intersect_line_and_horizontal_line_bd(line: LineCoefficientsBD, y: BigDecimal) -> BDCoords:
    a, b, c = line
    return (_solve_for_unknown_axis_bd(b, a, c, y), y)


# =============================================================================
# Composite intersections
# =============================================================================


def is_point_on_segment(point: BDCoords, segment_start: BDCoords, segment_end: BDCoords) -> bool:
    """True if point lies within the segment's bounding box.

    Only equivalent to "on the segment" for points already known to be
    collinear with it, such as the intersection of its line with another.
    """
    min_x = min(segment_start[0], segment_end[0])
    max_x = max(segment_start[0], segment_end[0])
    min_y = min(segment_start[1], segment_end[1])
    max_y = max(segment_start[1], segment_end[1])

    return min_x <= point[0] <= max_x and min_y <= point[1] <= max_y


def intersect_segments(
    line1: LineCoefficients,
    s1p1: BDCoords,
    s1p2: BDCoords,
    line2: LineCoefficients,
    s2p1: BDCoords,
    s2p2: BDCoords,
) -> BDCoords | None:
    """Intersection of two line segments, or None (including when collinear).

    The containing lines are passed in rather than derived from the end
    points, which may be imprecise; exact coefficients keep the result exact.
    """
    intersection = intersect_lines(line1, line2)
    if intersection is None:
        return None

    if is_point_on_segment(intersection, s1p1, s1p2) and is_point_on_segment(intersection, s2p1, s2p2):
        return intersection
    return None


def intersect_line_and_segment(
    line: LineCoefficientsBD,
    segment_line: LineCoefficients,
    segment_start: BDCoords,
    segment_end: BDCoords,
) -> BDCoords | None:
    """Intersection of an infinite line and a segment, or None."""
    intersection = intersect_lines_bd(line, coefficients_to_bd(segment_line))
    if intersection is None:
        return None

    if is_point_on_segment(intersection, segment_start, segment_end):
        return intersection
    return None


def _is_ahead_of_ray(ray: Ray, point: BDCoords) -> bool:
    """True unless point lies behind the ray's start: (point - start) . vector >= 0."""
    to_point = vector_from_points_bd(bdcoords.from_coords(ray.start), point)
    return dot_product_bd(bdcoords.from_coords(ray.vector), to_point) >= _ZERO


def intersect_ray_and_segment(ray: Ray, segment_start: Coords, segment_end: Coords) -> BDCoords | None:
    """Intersection of a ray and an integer segment, or None.

    When the ray is collinear with the segment and starts on one of its end
    points, the start is the single intersection if the ray points away from
    the other end point. Pointing along the segment would give infinitely
    many, which is reported as None.
    """
    segment_line = line_from_two_points(segment_start, segment_end)
    intersection = intersect_lines(ray.line, segment_line)

    if intersection is None:
        if ray.start == segment_start:
            opposite = segment_end
        elif ray.start == segment_end:
            opposite = segment_start
        else:
            return None  # Parallel, or collinear without touching at the start

        points_toward_opposite = dot_product(ray.vector, vector_from_points(ray.start, opposite)) > 0
        logger.debug(
            "ray_segment_collinear",
            start=ray.start,
            vector=ray.vector,
            points_toward_segment=points_toward_opposite,
        )
        if points_toward_opposite:
            return None
        return bdcoords.from_coords(ray.start)

    segment_start_bd = bdcoords.from_coords(segment_start)
    segment_end_bd = bdcoords.from_coords(segment_end)
    if not is_point_on_segment(intersection, segment_start_bd, segment_end_bd):
        return None

    if not _is_ahead_of_ray(ray, intersection):
        return None
    return intersection


def intersect_rays(ray1: Ray, ray2: Ray) -> BDCoords | None:
    """Intersection of two rays, or None if parallel, collinear, or behind either start."""
    intersection = intersect_lines(ray1.line, ray2.line)
    if intersection is None:
        return None

    if not _is_ahead_of_ray(ray1, intersection) or not _is_ahead_of_ray(ray2, intersection):
        return None
    return intersection


# =============================================================================
# High-level algorithms
# =============================================================================


def _quadrant_normalized_sum(coords: BDCoords, vector: Vec2) -> BigDecimal:
    """x + y after mirroring coords as if vector pointed into the first quadrant.

    Larger sums are further along the direction of travel.
    """
    x, y = coords
    if vector[0] < 0:
        x = x.negate()
    if vector[1] < 0:
        y = y.negate()
    return x.add(y)


def _line_box_intersections(
    line: LineCoefficients | LineCoefficientsBD,
    vector: Vec2,
    start_sum: BigDecimal,
    box: BoundingBox | BoundingBoxBD,
    box_bd: BoundingBoxBD,
    intersect_vertical: Callable[..., BDCoords],
    intersect_horizontal: Callable[..., BDCoords],
) -> list[IntersectionPoint]:
    """Shared edge clipping for integer and BigDecimal lines and boxes."""
    candidates: list[BDCoords] = []

    # A non-zero dx means the line can cross the vertical edges
    if vector[0] != 0:
        for edge_x in (box.left, box.right):
            point = intersect_vertical(line, edge_x)
            if box_bd.bottom <= point[1] <= box_bd.top:
                candidates.append(point)

    if vector[1] != 0:
        for edge_y in (box.bottom, box.top):
            point = intersect_horizontal(line, edge_y)
            if box_bd.left <= point[0] <= box_bd.right:
                candidates.append(point)

    # A line through a corner hits two edges at the same point
    unique: list[BDCoords] = []
    for point in candidates:
        if not any(bdcoords.are_bd_coords_equal(point, seen) for seen in unique):
            unique.append(point)

    intersections = [
        IntersectionPoint(
            coords=point,
            positive_dot_product=_quadrant_normalized_sum(point, vector) >= start_sum,
        )
        for point in unique
    ]
    intersections.sort(key=lambda i: _quadrant_normalized_sum(i.coords, vector))

    logger.debug(
        "line_box_intersections",
        vector=vector,
        count=len(intersections),
        points=[bdcoords.stringify_bd_coords(i.coords) for i in intersections],
    )
    return intersections


def find_line_box_intersections(start: Coords, vector: Vec2, box: BoundingBox) -> list[IntersectionPoint]:
    """Where the infinite line through start along vector crosses box's edges.

    Returns at most two points, ordered along the direction of travel, each
    tagged with whether it lies ahead of start.
    """
    line = line_from_point_and_vector(start, vector)

    start_x = -start[0] if vector[0] < 0 else start[0]
    start_y = -start[1] if vector[1] < 0 else start[1]
    start_sum = BigDecimal.from_int(start_x + start_y)

    return _line_box_intersections(
        line,
        vector,
        start_sum,
        box,
        box_to_bd(box),
        intersect_line_and_vertical_line,
        intersect_line_and_horizontal_line,
    )


def find_line_box_intersections_bd(start: BDCoords, vector: Vec2, box: BoundingBoxBD) -> list[IntersectionPoint]:
    """find_line_box_intersections for a fractional start point and box."""
    line = line_from_point_and_vector_bd(start, vector)
    start_sum = _quadrant_normalized_sum(start, vector)

    return _line_box_intersections(
        line,
        vector,
        start_sum,
        box,
        box,
        intersect_line_and_vertical_line_bd,
        intersect_line_and_horizontal_line_bd,
    )


def closest_point_on_segment(
    segment_line: LineCoefficients,
    segment_start: BDCoords,
    segment_end: BDCoords,
    point: BDCoords,
) -> ClosestPoint:
    """The point of the segment nearest to point, with its Euclidean distance.

    Drops a perpendicular onto the segment's line. If its foot falls outside
    the segment, the end point with the smaller Chebyshev distance is used.
    """
    perpendicular = perpendicular_line(segment_line, point)
    closest = intersect_line_and_segment(perpendicular, segment_line, segment_start, segment_end)

    if closest is None:
        to_start = chebyshev_distance_bd(point, segment_start)
        to_end = chebyshev_distance_bd(point, segment_end)
        closest = segment_start if to_start < to_end else segment_end

    return ClosestPoint(coords=closest, distance=euclidean_distance_bd(closest, point))


def find_cross_sectional_width_points(vector: Vec2, box: BoundingBox) -> tuple[Coords, Coords]:
    """The two corners spanning box's width as seen looking along vector.

    Looking along a vertical vector (from below) gives the left-most and
    right-most corners.
    """
    normal = perpendicular_vector(vector)
    corners: list[Coords] = [
        (box.left, box.top),
        (box.right, box.top),
        (box.left, box.bottom),
        (box.right, box.bottom),
    ]

    min_corner = max_corner = corners[0]
    min_projection = max_projection = dot_product(corners[0], normal)

    for corner in corners[1:]:
        projection = dot_product(corner, normal)
        if projection < min_projection:
            min_projection, min_corner = projection, corner
        if projection > max_projection:
            max_projection, max_corner = projection, corner

    return (min_corner, max_corner)


# =============================================================================
# Utilities
# =============================================================================


def _round_to_nearest_multiple(value: int, multiple: int) -> int:
    """Round half away from zero to a multiple of a positive even number."""
    half = multiple // 2
    if value >= 0:
        return bimath.div_trunc(value + half, multiple) * multiple
    return bimath.div_trunc(value - half, multiple) * multiple


def round_point_to_nearest_gridpoint(point: BDCoords, grid_size: int) -> Coords:
    """Snap point to the nearest multiple of grid_size on each axis.

    (5200, 1100) with a grid size of 10000 gives (10000, 0).
    """
    x, y = bdcoords.coords_to_int(point)
    return (_round_to_nearest_multiple(x, grid_size), _round_to_nearest_multiple(y, grid_size))
