"""Pytest configuration and fixtures."""

import pytest

from boardmath.geometry.bounds import BoundingBox
from boardmath.geometry.types import Ray


@pytest.fixture
def wide_box() -> BoundingBox:
    """A 20x10 box centered on the origin."""
    return BoundingBox(left=-10, right=10, bottom=-5, top=5)


@pytest.fixture
def square_box() -> BoundingBox:
    """A 10x10 box centered on the origin."""
    return BoundingBox(left=-5, right=5, bottom=-5, top=5)


@pytest.fixture
def diagonal_ray() -> Ray:
    """A ray from the origin along (1, 1)."""
    return Ray.from_start_and_vector((0, 0), (1, 1))
