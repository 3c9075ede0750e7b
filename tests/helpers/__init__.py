"""Test helpers module for shared test utilities.

- factories: BigDecimal and coordinate builders
"""

from tests.helpers.factories import make_bd, make_bd_coords

__all__ = [
    "make_bd",
    "make_bd_coords",
]
