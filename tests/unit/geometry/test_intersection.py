"""Tests for line, segment, ray and box intersections."""

import math

import pytest
from structlog.testing import capture_logs

from boardmath.errors import GeometryError
from boardmath.geometry.bounds import BoundingBox, box_to_bd
from boardmath.geometry.intersection import (
    closest_point_on_segment,
    find_cross_sectional_width_points,
    find_line_box_intersections,
    find_line_box_intersections_bd,
    intersect_line_and_horizontal_line,
    intersect_line_and_horizontal_line_bd,
    intersect_line_and_segment,
    intersect_line_and_vertical_line,
    intersect_line_and_vertical_line_bd,
    intersect_lines,
    intersect_lines_bd,
    intersect_ray_and_segment,
    intersect_rays,
    intersect_segments,
    is_point_on_segment,
    round_point_to_nearest_gridpoint,
)
from boardmath.geometry.types import Ray
from boardmath.geometry.vectors import coefficients_to_bd, line_from_two_points
from boardmath.math import bdcoords
from tests.helpers import make_bd, make_bd_coords


class TestLineIntersections:
    """Tests for infinite line intersections."""

    def test_crossing_lines(self) -> None:
        """Lines through integer points meet exactly on the grid."""
        point = intersect_lines((4, -4, 0), (-4, -4, 16))
        assert point == make_bd_coords(2, 2)
        assert bdcoords.are_coords_integers(point)

    def test_parallel_lines(self) -> None:
        """Parallel lines have no intersection."""
        assert intersect_lines((1, -1, 0), (1, -1, 1)) is None

    def test_coincident_lines(self) -> None:
        """Coincident lines are reported as None too."""
        assert intersect_lines((1, -1, 1), (2, -2, 2)) is None

    def test_fractional_intersection(self) -> None:
        """Non-grid intersections keep their fraction."""
        x, y = intersect_lines((1, -1, 0), (5, 5, -25))
        assert x.to_exact_string() == "2.5"
        assert y.to_exact_string() == "2.5"

    def test_bd_lines(self) -> None:
        """BigDecimal coefficients give the same answer."""
        point = intersect_lines_bd(coefficients_to_bd((4, -4, 0)), coefficients_to_bd((-4, -4, 16)))
        assert point == make_bd_coords(2, 2)

    def test_bd_parallel_lines(self) -> None:
        """A zero determinant gives None."""
        assert intersect_lines_bd(coefficients_to_bd((1, 1, 0)), coefficients_to_bd((2, 2, 5))) is None


class TestAxisIntersections:
    """Tests for crossings with vertical and horizontal lines."""

    def test_vertical(self) -> None:
        """y = x crosses x = 3 at (3, 3)."""
        assert intersect_line_and_vertical_line((1, -1, 0), 3) == make_bd_coords(3, 3)

    def test_vertical_line_against_vertical(self) -> None:
        """A vertical line never crosses another vertical line."""
        with pytest.raises(GeometryError):
            intersect_line_and_vertical_line((1, 0, -3), 5)

    def test_horizontal(self) -> None:
        """x - 2y = 0 crosses y = 2 at (4, 2)."""
        assert intersect_line_and_horizontal_line((1, -2, 0), 2) == make_bd_coords(4, 2)

    def test_horizontal_line_against_horizontal(self) -> None:
        """A horizontal line never crosses another horizontal line."""
        with pytest.raises(GeometryError):
            intersect_line_and_horizontal_line((0, 1, -3), 5)

    def test_bd_variants(self) -> None:
        """Fractional axis values are solved at working precision."""
        line = coefficients_to_bd((1, -1, 0))
        assert intersect_line_and_vertical_line_bd(line, make_bd(0.5)) == make_bd_coords(0.5, 0.5)
        assert intersect_line_and_horizontal_line_bd(line, make_bd(-1.5)) == make_bd_coords(-1.5, -1.5)


class TestSegments:
    """Tests for segment intersections."""

    def test_crossing_segments(self) -> None:
        """The diagonals of a square meet at its center."""
        line1 = line_from_two_points((0, 0), (4, 4))
        line2 = line_from_two_points((0, 4), (4, 0))
        point = intersect_segments(
            line1, make_bd_coords(0, 0), make_bd_coords(4, 4), line2, make_bd_coords(0, 4), make_bd_coords(4, 0)
        )
        assert point == make_bd_coords(2, 2)
        assert bdcoords.are_coords_integers(point)

    def test_segments_that_miss(self) -> None:
        """The lines cross, but beyond the end of one segment."""
        line1 = line_from_two_points((0, 0), (1, 1))
        line2 = line_from_two_points((0, 4), (4, 0))
        point = intersect_segments(
            line1, make_bd_coords(0, 0), make_bd_coords(1, 1), line2, make_bd_coords(0, 4), make_bd_coords(4, 0)
        )
        assert point is None

    def test_line_and_segment(self) -> None:
        """An infinite line only needs to cross the segment."""
        segment_line = line_from_two_points((0, 4), (4, 0))
        line = coefficients_to_bd((1, -1, 0))
        assert intersect_line_and_segment(line, segment_line, make_bd_coords(0, 4), make_bd_coords(4, 0)) == (
            make_bd_coords(2, 2)
        )
        assert intersect_line_and_segment(line, segment_line, make_bd_coords(0, 4), make_bd_coords(1, 3)) is None

    def test_is_point_on_segment(self) -> None:
        """End points are on the segment; points past them are not."""
        start, end = make_bd_coords(0, 0), make_bd_coords(4, 0)
        assert is_point_on_segment(start, start, end)
        assert is_point_on_segment(end, start, end)
        assert is_point_on_segment(make_bd_coords(2.5, 0), start, end)
        assert not is_point_on_segment(make_bd_coords(4.5, 0), start, end)


class TestRays:
    """Tests for ray intersections."""

    def test_ray_hits_segment(self, diagonal_ray: Ray) -> None:
        """The diagonal ray crosses the anti-diagonal segment halfway."""
        point = intersect_ray_and_segment(diagonal_ray, (5, 0), (0, 5))
        assert point == make_bd_coords(2.5, 2.5)
        assert point[0].to_exact_string() == "2.5"

    def test_ray_pointing_away(self) -> None:
        """A segment behind the ray is not hit."""
        ray = Ray.from_start_and_vector((0, 0), (-1, -1))
        assert intersect_ray_and_segment(ray, (5, 0), (0, 5)) is None

    def test_ray_misses_segment(self, diagonal_ray: Ray) -> None:
        """The line crosses, but outside the segment."""
        assert intersect_ray_and_segment(diagonal_ray, (5, 0), (4, 1)) is None

    def test_parallel_ray(self, diagonal_ray: Ray) -> None:
        """A parallel segment off the ray's line is never hit."""
        assert intersect_ray_and_segment(diagonal_ray, (1, 0), (5, 4)) is None

    def test_collinear_ray_pointing_away(self) -> None:
        """A ray leaving a segment from its end point hits only that point."""
        ray = Ray.from_start_and_vector((0, 0), (-1, 0))
        with capture_logs() as logs:
            point = intersect_ray_and_segment(ray, (0, 0), (5, 0))
        assert point == make_bd_coords(0, 0)
        assert any(entry["event"] == "ray_segment_collinear" for entry in logs)

    def test_collinear_ray_from_far_end(self) -> None:
        """The check works from either end point."""
        ray = Ray.from_start_and_vector((5, 0), (1, 0))
        assert intersect_ray_and_segment(ray, (0, 0), (5, 0)) == make_bd_coords(5, 0)

    def test_collinear_ray_along_segment(self) -> None:
        """Infinitely many intersections are reported as None."""
        ray = Ray.from_start_and_vector((0, 0), (1, 0))
        assert intersect_ray_and_segment(ray, (0, 0), (5, 0)) is None

    def test_rays_crossing(self) -> None:
        """Both rays point toward the crossing."""
        ray1 = Ray.from_start_and_vector((0, 0), (1, 0))
        ray2 = Ray.from_start_and_vector((2, -2), (0, 1))
        assert intersect_rays(ray1, ray2) == make_bd_coords(2, 0)

    def test_rays_behind_start(self) -> None:
        """The crossing lies behind the second ray."""
        ray1 = Ray.from_start_and_vector((0, 0), (1, 0))
        ray2 = Ray.from_start_and_vector((2, -2), (0, -1))
        assert intersect_rays(ray1, ray2) is None

    def test_parallel_rays(self) -> None:
        """Parallel rays never meet."""
        ray1 = Ray.from_start_and_vector((0, 0), (1, 1))
        ray2 = Ray.from_start_and_vector((0, 1), (2, 2))
        assert intersect_rays(ray1, ray2) is None


class TestLineBoxIntersections:
    """Tests for clipping lines to boxes."""

    def test_diagonal_through_wide_box(self, wide_box: BoundingBox) -> None:
        """The diagonal exits through the bottom and top edges."""
        intersections = find_line_box_intersections((0, 0), (1, 1), wide_box)
        assert [i.coords for i in intersections] == [make_bd_coords(-5, -5), make_bd_coords(5, 5)]
        assert [i.positive_dot_product for i in intersections] == [False, True]

    def test_corner_deduplicated(self, square_box: BoundingBox) -> None:
        """A line through two corners touches four edges but two points."""
        intersections = find_line_box_intersections((0, 0), (1, 1), square_box)
        assert [i.coords for i in intersections] == [make_bd_coords(-5, -5), make_bd_coords(5, 5)]

    def test_order_follows_direction(self, wide_box: BoundingBox) -> None:
        """Reversing the vector reverses the order and the tags."""
        forward = find_line_box_intersections((0, 0), (1, 0), wide_box)
        assert [i.coords for i in forward] == [make_bd_coords(-10, 0), make_bd_coords(10, 0)]
        assert [i.positive_dot_product for i in forward] == [False, True]

        backward = find_line_box_intersections((0, 0), (-1, 0), wide_box)
        assert [i.coords for i in backward] == [make_bd_coords(10, 0), make_bd_coords(-10, 0)]
        assert [i.positive_dot_product for i in backward] == [False, True]

    def test_start_outside_box(self, wide_box: BoundingBox) -> None:
        """Both points lie ahead of a start below the box."""
        intersections = find_line_box_intersections((0, -20), (0, 1), wide_box)
        assert [i.coords for i in intersections] == [make_bd_coords(0, -5), make_bd_coords(0, 5)]
        assert all(i.positive_dot_product for i in intersections)

    def test_line_misses_box(self, wide_box: BoundingBox) -> None:
        """A line outside the box gives no points."""
        assert find_line_box_intersections((0, 20), (1, 0), wide_box) == []

    def test_logs_intersection_count(self, wide_box: BoundingBox) -> None:
        """The clipping result is logged at debug level."""
        with capture_logs() as logs:
            find_line_box_intersections((0, 0), (1, 1), wide_box)
        entries = [entry for entry in logs if entry["event"] == "line_box_intersections"]
        assert len(entries) == 1
        assert entries[0]["count"] == 2

    def test_bd_variant(self, wide_box: BoundingBox) -> None:
        """A fractional start point is clipped the same way."""
        intersections = find_line_box_intersections_bd(make_bd_coords(0.5, 0.5), (0, 1), box_to_bd(wide_box))
        assert [i.coords for i in intersections] == [make_bd_coords(0.5, -5), make_bd_coords(0.5, 5)]
        assert [i.positive_dot_product for i in intersections] == [False, True]


class TestClosestPoint:
    """Tests for nearest points on segments."""

    def test_perpendicular_foot_on_segment(self) -> None:
        """The foot of the perpendicular is the closest point."""
        closest = closest_point_on_segment((0, -4, 0), make_bd_coords(0, 0), make_bd_coords(4, 0), make_bd_coords(2, 3))
        assert closest.coords == make_bd_coords(2, 0)
        assert closest.distance.to_number() == pytest.approx(3.0)
        assert is_point_on_segment(closest.coords, make_bd_coords(0, 0), make_bd_coords(4, 0))

    def test_foot_beyond_segment(self) -> None:
        """Past the end, the nearer end point wins."""
        closest = closest_point_on_segment((0, -4, 0), make_bd_coords(0, 0), make_bd_coords(4, 0), make_bd_coords(6, 1))
        assert closest.coords == make_bd_coords(4, 0)
        assert closest.distance.to_number() == pytest.approx(math.sqrt(5), rel=1e-6)


class TestCrossSection:
    """Tests for cross-sectional width corners."""

    def test_vertical_vector(self) -> None:
        """Looking straight up, the top corners span the width."""
        assert find_cross_sectional_width_points((0, 1), BoundingBox(0, 4, 0, 2)) == ((4, 2), (0, 2))

    def test_diagonal_vector(self) -> None:
        """Looking along (1, 1), the off-diagonal corners span the width."""
        first, second = find_cross_sectional_width_points((1, 1), BoundingBox(0, 4, 0, 4))
        assert {first, second} == {(4, 0), (0, 4)}


class TestGridRounding:
    """Tests for snapping to grid points."""

    @pytest.mark.parametrize(
        "point,expected",
        [
            ((5200, 1100), (10000, 0)),
            ((-5200, -4900), (-10000, 0)),
            ((5000, -5000), (10000, -10000)),
            ((0, 14999), (0, 10000)),
        ],
    )
    def test_round_to_gridpoint(self, point: tuple[int, int], expected: tuple[int, int]) -> None:
        """Each axis snaps to the nearest multiple, halves away from zero."""
        assert round_point_to_nearest_gridpoint(make_bd_coords(*point), 10000) == expected
