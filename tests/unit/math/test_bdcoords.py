"""Tests for BigDecimal coordinate conversions."""

import pytest

from boardmath.errors import NonFiniteInput
from boardmath.math import bdcoords
from tests.helpers import make_bd, make_bd_coords


class TestLifting:
    """Tests for converting into BigDecimal coordinates."""

    def test_from_coords_exact(self) -> None:
        """Integer squares are lifted exactly, however large."""
        x, y = bdcoords.from_coords((10**40, -7))
        assert x.to_int() == 10**40
        assert y == make_bd(-7)

    def test_from_coords_precision(self) -> None:
        """The requested precision becomes the scale."""
        x, y = bdcoords.from_coords((1, 2), precision=50)
        assert x.scale == 50
        assert y.scale == 50

    def test_from_double_coords(self) -> None:
        """Binary fractions survive the conversion exactly."""
        assert bdcoords.from_double_coords((0.25, -1.5)) == make_bd_coords(0.25, -1.5)

    def test_from_double_coords_rejects_nan(self) -> None:
        """NaN has no BigDecimal representation."""
        with pytest.raises(NonFiniteInput):
            bdcoords.from_double_coords((float("nan"), 0.0))


class TestLowering:
    """Tests for converting out of BigDecimal coordinates."""

    def test_coords_to_int_rounds_half_up(self) -> None:
        """Halves round toward positive infinity on both axes."""
        assert bdcoords.coords_to_int(make_bd_coords(2.5, -2.5)) == (3, -2)

    def test_coords_to_doubles(self) -> None:
        """Representable values cast exactly."""
        assert bdcoords.coords_to_doubles(make_bd_coords(0.75, -3)) == (0.75, -3.0)


class TestPredicates:
    """Tests for coordinate predicates and rendering."""

    def test_are_coords_integers(self) -> None:
        """Both axes must be whole."""
        assert bdcoords.are_coords_integers(make_bd_coords(3, -4))
        assert not bdcoords.are_coords_integers(make_bd_coords(3, 0.5))

    def test_are_bd_coords_equal_across_scales(self) -> None:
        """Equality is by value, not by representation."""
        assert bdcoords.are_bd_coords_equal(make_bd_coords(1.5, 2), make_bd_coords(1.5, 2, precision=40))
        assert not bdcoords.are_bd_coords_equal(make_bd_coords(1.5, 2), make_bd_coords(1.5, 3))

    def test_stringify(self) -> None:
        """Coordinates are shown with their rounded strings."""
        assert bdcoords.stringify_bd_coords(make_bd_coords(2.5, -1)) == "(2.5, -1)"
