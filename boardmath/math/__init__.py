"""Arbitrary-precision numeric core.

This package provides the number type every geometry calculation runs on:
- bimath: helpers for arbitrary-precision integers
- BigDecimal: binary fixed/floating-point decimals (mantissa / 2**scale)
- bdcoords: conversions between board and BigDecimal coordinates
"""

from boardmath.math import bdcoords, bimath
from boardmath.math.bigdecimal import (
    E,
    LN2,
    BigDecimal,
    bits_for_decimal_places,
    exp,
    hypot,
    ln,
    log10,
    normalize,
    power,
    power_int,
    sqrt,
)

__all__ = [
    # Modules
    "bimath",
    "bdcoords",
    # BigDecimal
    "BigDecimal",
    "normalize",
    "power_int",
    "power",
    "sqrt",
    "hypot",
    "ln",
    "log10",
    "exp",
    "bits_for_decimal_places",
    "E",
    "LN2",
]
