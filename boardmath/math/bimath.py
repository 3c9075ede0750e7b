"""Helpers for arbitrary-precision integers.

Python's int is already arbitrary precision, so this module only adds the
pieces the BigDecimal layer needs on top of it: bit lengths, logarithms of
integers too large for a float, truncating division, and debug formatting.
"""

from __future__ import annotations

import math

from boardmath.errors import DomainError

__all__ = [
    "LN2",
    "LOG10_OF_2",
    "abs_int",
    "bit_length",
    "count_digits",
    "log2",
    "log10",
    "ln",
    "pos_mod",
    "div_trunc",
    "rem_trunc",
    "min_int",
    "max_int",
    "compare",
    "clamp",
    "gcd",
    "estimate_int_size",
    "to_debug_binary_string",
]

LN2 = math.log(2)
LOG10_OF_2 = math.log10(2)

# Significant bits of a float64; ints wider than this are shifted before math.log
_FLOAT_MANTISSA_BITS = 53

# Each chunk is 64 bits (8 bytes) on a 64-bit engine
_CHUNK_BITS = 64
_CHUNK_BYTES = _CHUNK_BITS // 8


# =============================================================================
# Basic operations
# =============================================================================


def abs_int(n: int) -> int:
    """Absolute value of an int."""
    return -n if n < 0 else n


def bit_length(n: int) -> int:
    """Number of bits needed to store |n|. Zero has a bit length of 0."""
    return n.bit_length()


def count_digits(n: int) -> int:
    """Estimate the number of base-10 digits in n, excluding the sign.

    Derived from the bit length, so it is exact most of the time and never
    off by more than one digit.
    """
    return math.floor(bit_length(n) * LOG10_OF_2) + 1


def pos_mod(a: int, b: int) -> int:
    """Positive remainder of a / b, for positive b."""
    return ((a % b) + b) % b


def div_trunc(a: int, b: int) -> int:
    """Integer division with truncation toward zero.

    Python's // rounds toward negative infinity. The BigDecimal division
    routines are specified in terms of truncating division, which matters for
    negative operands.

    Raises:
        ZeroDivisionError: If b is zero
    """
    if b == 0:
        raise ZeroDivisionError("Division by zero in div_trunc")

    # Same sign: the quotient is non-negative, floor and truncate agree
    if (a >= 0) == (b >= 0):
        return a // b
    return -(abs_int(a) // abs_int(b))


def rem_trunc(a: int, b: int) -> int:
    """Remainder matching div_trunc: the result has the sign of the dividend.

    Raises:
        ZeroDivisionError: If b is zero
    """
    return a - div_trunc(a, b) * b


def min_int(a: int, b: int) -> int:
    """Smaller of two ints."""
    return a if a < b else b


def max_int(a: int, b: int) -> int:
    """Larger of two ints."""
    return a if a > b else b


def compare(a: int, b: int) -> int:
    """Return -1 if a < b, 0 if a == b, and 1 if a > b."""
    return -1 if a < b else 1 if a > b else 0


def clamp(value: int, low: int, high: int) -> int:
    """Clamp value to the inclusive range [low, high]."""
    return low if value < low else high if value > high else value


# =============================================================================
# Logarithms
# =============================================================================


def log2(n: int) -> int:
    """Integer base-2 logarithm (floor).

    Raises:
        DomainError: If n is not positive
    """
    if n <= 0:
        raise DomainError(f"log2 requires a positive integer, got {n}")
    return bit_length(n) - 1


def log10(n: int) -> int:
    """Integer base-10 logarithm (floor).

    Raises:
        DomainError: If n is not positive
    """
    if n <= 0:
        raise DomainError(f"log10 requires a positive integer, got {n}")
    return len(str(n)) - 1


def ln(n: int) -> float:
    """Natural logarithm of an arbitrarily large positive int, as a float.

    Ints wider than a float mantissa are shifted down to 53 significant bits
    first, so the cast never overflows: ln(n) = ln(n >> s) + s * ln(2).

    Raises:
        DomainError: If n is not positive
    """
    if n <= 0:
        raise DomainError(f"ln requires a positive integer, got {n}")

    shift = bit_length(n) - _FLOAT_MANTISSA_BITS
    if shift <= 0:
        return math.log(n)
    return math.log(n >> shift) + shift * LN2


# =============================================================================
# Number theory
# =============================================================================


def gcd(a: int, b: int) -> int:
    """Greatest common divisor using the binary (Stein's) algorithm.

    The result is always non-negative. gcd(0, 0) is 0.
    """
    a = abs_int(a)
    b = abs_int(b)

    if a == b:
        return a
    if a == 0:
        return b
    if b == 0:
        return a

    # Strip shared factors of two, re-applied at the end
    shared_twos = 0
    while not ((a | b) & 1):
        shared_twos += 1
        a >>= 1
        b >>= 1

    while a & 1 == 0:
        a >>= 1

    while b != 0:
        while b & 1 == 0:
            b >>= 1
        if a > b:
            a, b = b, a
        b -= a

    return a << shared_twos


# =============================================================================
# Debugging
# =============================================================================


def estimate_int_size(n: int) -> int:
    """Estimate the memory footprint of an arbitrary-precision integer in bytes.

    Models a 64-bit engine: a two-pointer object header plus the bits of the
    integer rounded up to whole 64-bit words.
    """
    header_bytes = 2 * _CHUNK_BYTES
    chunk_count = -(-bit_length(n) // _CHUNK_BITS)
    return header_bytes + _CHUNK_BYTES * chunk_count


def to_debug_binary_string(n: int) -> str:
    """Render n in two's complement, exactly as a machine would store it.

    The bits are padded to whole 64-bit chunks, grouped by 4 with "_", and
    followed by an annotation with the chunk, byte and bit counts.

    Examples:
        >>> to_debug_binary_string(5)[-37:]
        '0000_0101 (1-chunk, 8 bytes, 64 bits)'
    """
    if n == 0:
        min_bits = 0
    elif n > 0:
        min_bits = bit_length(n)
    else:
        # -N needs one more bit than N - 1, e.g. -8 (1000) needs 4 bits like 7 (111) + sign
        min_bits = bit_length(-n - 1) + 1

    # Non-negative values reserve a 0 sign bit
    effective_bits = min_bits + 1 if n >= 0 else min_bits
    chunk_count = max(1, -(-effective_bits // _CHUNK_BITS))
    display_bits = chunk_count * _CHUNK_BITS

    display_value = n & ((1 << display_bits) - 1)
    binary = format(display_value, f"0{display_bits}b")
    grouped = "_".join(binary[i : i + 4] for i in range(0, display_bits, 4))

    annotation = f"({chunk_count}-chunk, {chunk_count * _CHUNK_BYTES} bytes, {display_bits} bits)"
    return f"0b{grouped} {annotation}"
