"""Bounding boxes over board coordinates.

Boxes are inclusive on every side. Integer boxes describe sets of board
squares; BigDecimal boxes describe regions such as the visible viewport.
"""

from collections.abc import Iterable
from dataclasses import dataclass, replace

from boardmath.geometry.types import BDCoords, Coords, DoubleCoords
from boardmath.math import bimath
from boardmath.math.bigdecimal import BigDecimal

__all__ = [
    # Types
    "BoundingBox",
    "BoundingBoxBD",
    "DoubleBoundingBox",
    "UnboundedRectangle",
    # Construction
    "box_from_coords_list",
    "starting_position_box",
    "box_to_bd",
    "double_box_to_bd",
    "expand_box_to_contain_square",
    "expand_box_to_contain_square_bd",
    "merge_boxes",
    "merge_boxes_bd",
    "translate_box",
    # Operations
    "box_contains_box",
    "box_contains_box_bd",
    "are_boxes_disjoint",
    "box_contains_square",
    "box_contains_square_bd",
    "box_contains_square_double",
    "box_center_bd",
    "stringify_bd_box",
]


@dataclass(frozen=True)
class BoundingBox:
    """An arbitrarily large rectangle with integer sides."""

    left: int
    right: int
    bottom: int
    top: int


@dataclass(frozen=True)
class BoundingBoxBD:
    """A rectangle with BigDecimal sides, for fractional regions."""

    left: BigDecimal
    right: BigDecimal
    bottom: BigDecimal
    top: BigDecimal


@dataclass(frozen=True)
class DoubleBoundingBox:
    """A rectangle with float sides."""

    left: float
    right: float
    bottom: float
    top: float


@dataclass(frozen=True)
class UnboundedRectangle:
    """A BoundingBox where any side may be None, meaning it extends to infinity."""

    left: int | None
    right: int | None
    bottom: int | None
    top: int | None


# Bounding box of the classical starting position
_CLASSICAL_BOX = BoundingBox(left=1, right=8, bottom=1, top=8)

_TWO = BigDecimal.from_int(2)


# =============================================================================
# Construction
# =============================================================================


def box_from_coords_list(coords_list: Iterable[Coords]) -> BoundingBox:
    """Smallest box containing every coordinate.

    Raises:
        ValueError: If coords_list is empty
    """
    iterator = iter(coords_list)
    first = next(iterator, None)
    if first is None:
        raise ValueError("Cannot build a bounding box from an empty coordinate list")

    box = BoundingBox(left=first[0], right=first[0], bottom=first[1], top=first[1])
    for coords in iterator:
        box = expand_box_to_contain_square(box, coords)
    return box


def starting_position_box(coords_list: list[Coords]) -> BoundingBox:
    """box_from_coords_list, falling back to the classical 1..8 box when empty."""
    if not coords_list:
        return _CLASSICAL_BOX
    return box_from_coords_list(coords_list)


def box_to_bd(box: BoundingBox) -> BoundingBoxBD:
    return BoundingBoxBD(
        left=BigDecimal.from_int(box.left),
        right=BigDecimal.from_int(box.right),
        bottom=BigDecimal.from_int(box.bottom),
        top=BigDecimal.from_int(box.top),
    )


def double_box_to_bd(box: DoubleBoundingBox) -> BoundingBoxBD:
    return BoundingBoxBD(
        left=BigDecimal.from_number(box.left),
        right=BigDecimal.from_number(box.right),
        bottom=BigDecimal.from_number(box.bottom),
        top=BigDecimal.from_number(box.top),
    )


def expand_box_to_contain_square(box: BoundingBox, coords: Coords) -> BoundingBox:
    """Return the box grown just enough to include coords."""
    x, y = coords
    return replace(
        box,
        left=bimath.min_int(box.left, x),
        right=bimath.max_int(box.right, x),
        bottom=bimath.min_int(box.bottom, y),
        top=bimath.max_int(box.top, y),
    )


def expand_box_to_contain_square_bd(box: BoundingBoxBD, coords: BDCoords) -> BoundingBoxBD:
    x, y = coords
    return replace(
        box,
        left=min(box.left, x),
        right=max(box.right, x),
        bottom=min(box.bottom, y),
        top=max(box.top, y),
    )


def merge_boxes(box1: BoundingBox, box2: BoundingBox) -> BoundingBox:
    """Smallest box containing both boxes."""
    return BoundingBox(
        left=bimath.min_int(box1.left, box2.left),
        right=bimath.max_int(box1.right, box2.right),
        bottom=bimath.min_int(box1.bottom, box2.bottom),
        top=bimath.max_int(box1.top, box2.top),
    )


def merge_boxes_bd(box1: BoundingBoxBD, box2: BoundingBoxBD) -> BoundingBoxBD:
    return BoundingBoxBD(
        left=min(box1.left, box2.left),
        right=max(box1.right, box2.right),
        bottom=min(box1.bottom, box2.bottom),
        top=max(box1.top, box2.top),
    )


def translate_box(box: BoundingBox, translation: Coords) -> BoundingBox:
    dx, dy = translation
    return BoundingBox(left=box.left + dx, right=box.right + dx, bottom=box.bottom + dy, top=box.top + dy)


# =============================================================================
# Operations
# =============================================================================


def box_contains_box(outer: BoundingBox | UnboundedRectangle, inner: BoundingBox) -> bool:
    """True if inner lies entirely within outer. Touching edges count as inside."""
    if outer.left is not None and inner.left < outer.left:
        return False
    if outer.right is not None and inner.right > outer.right:
        return False
    if outer.bottom is not None and inner.bottom < outer.bottom:
        return False
    if outer.top is not None and inner.top > outer.top:
        return False
    return True


def box_contains_box_bd(outer: BoundingBoxBD, inner: BoundingBoxBD) -> bool:
    return (
        inner.left >= outer.left
        and inner.right <= outer.right
        and inner.bottom >= outer.bottom
        and inner.top <= outer.top
    )


def are_boxes_disjoint(box1: DoubleBoundingBox, box2: DoubleBoundingBox) -> bool:
    """True if the boxes have zero overlapping area. Shared edges are disjoint."""
    return (
        box1.right <= box2.left
        or box1.left >= box2.right
        or box1.top <= box2.bottom
        or box1.bottom >= box2.top
    )


def box_contains_square(box: BoundingBox | UnboundedRectangle, square: Coords) -> bool:
    x, y = square
    if box.left is not None and x < box.left:
        return False
    if box.right is not None and x > box.right:
        return False
    if box.bottom is not None and y < box.bottom:
        return False
    if box.top is not None and y > box.top:
        return False
    return True


def box_contains_square_bd(box: BoundingBoxBD, square: BDCoords) -> bool:
    x, y = square
    return box.left <= x <= box.right and box.bottom <= y <= box.top


def box_contains_square_double(box: DoubleBoundingBox, square: DoubleCoords) -> bool:
    x, y = square
    return box.left <= x <= box.right and box.bottom <= y <= box.top


def box_center_bd(box: BoundingBoxBD) -> BDCoords:
    """Midpoint of the box, at the scale of its left and bottom sides."""
    x_sum = box.left.add(box.right)
    y_sum = box.bottom.add(box.top)
    return (x_sum.divide_fixed(_TWO), y_sum.divide_fixed(_TWO))


def stringify_bd_box(box: BoundingBoxBD) -> str:
    """Exact decimal rendering of every side, for debugging."""
    return (
        f"Box: left={box.left.to_exact_string()}, right={box.right.to_exact_string()}, "
        f"bottom={box.bottom.to_exact_string()}, top={box.top.to_exact_string()}"
    )
