"""Arbitrary-precision binary decimal numbers (BigDecimal).

A BigDecimal pairs an arbitrary-precision integer (the mantissa) with a
binary scale. The represented value is always exactly

    mantissa / 2**scale

For example 2.75 is stored as mantissa=11, scale=2: 11 is 0b1011, and the two
right-most bits are the fraction 0.11 (0.75). A negative scale represents a
very large number whose low bits are all zero.

Two arithmetic models coexist:

- Fixed-point: the result keeps the first operand's scale. Predictable,
  non-growing representation; used for the default working precision.
- Floating-point: the result is normalized to a target number of significant
  mantissa bits, so tiny values never underflow to zero. Used by sqrt, exp,
  power and the *_floating operations.

All rounding is "round half toward positive infinity": add 2**(shift - 1)
before an arithmetic right shift.
"""

from __future__ import annotations

import math
import struct

import structlog

from boardmath.config import (
    DEFAULT_MANTISSA_BITS,
    DEFAULT_PRECISION_CONFIG,
    DEFAULT_WORKING_PRECISION,
    MAX_SCALE,
    PrecisionConfig,
)
from boardmath.errors import (
    DivisionByZero,
    DomainError,
    ExpDidNotConverge,
    NonFiniteInput,
    ScaleOutOfRange,
    SqrtDidNotConverge,
)
from boardmath.math import bimath

logger = structlog.get_logger()

__all__ = [
    # Classes
    "BigDecimal",
    # Floating-point model functions
    "normalize",
    "power_int",
    "power",
    "sqrt",
    "hypot",
    "ln",
    "log10",
    "exp",
    # Helpers
    "bits_for_decimal_places",
    # Constants
    "E",
    "LN2",
    "MAX_SCALE_BEFORE_INFINITY",
]

# =============================================================================
# Constants
# =============================================================================

# 2**0 .. 2**1023; 2**1024 is already infinite as a float
_POWERS_OF_TWO: tuple[float, ...] = tuple(2.0**i for i in range(1024))

# Scales above this cannot be cast through the power-of-two table
MAX_SCALE_BEFORE_INFINITY = len(_POWERS_OF_TWO) - 1

# IEEE-754 double layout
_FRACTION_BITS = 52
_FRACTION_MASK = (1 << _FRACTION_BITS) - 1
_EXPONENT_MASK = 0x7FF
_EXPONENT_BIAS = 1023
_SUBNORMAL_SCALE = _EXPONENT_BIAS - 1 + _FRACTION_BITS  # 1074


# =============================================================================
# Internal helpers
# =============================================================================


def _check_scale(scale: int) -> None:
    if not -MAX_SCALE <= scale <= MAX_SCALE:
        raise ScaleOutOfRange(f"Scale must be between -{MAX_SCALE} and {MAX_SCALE}. Received: {scale}")


def _check_precision(precision: int) -> None:
    if not 0 <= precision <= MAX_SCALE:
        raise ScaleOutOfRange(f"Precision must be between 0 and {MAX_SCALE}. Received: {precision}")


def _rescale_mantissa(mantissa: int, from_scale: int, to_scale: int) -> int:
    """Re-express a mantissa at another scale, rounding half up when bits are dropped."""
    difference = from_scale - to_scale
    if difference == 0:
        return mantissa
    if difference < 0:
        # Increasing precision is a pure shift, never lossy
        return mantissa << -difference
    half = 1 << (difference - 1)
    return (mantissa + half) >> difference


def _shift_left(n: int, shift: int) -> int:
    """n * 2**shift; a negative shift is an arithmetic right shift."""
    return n << shift if shift >= 0 else n >> -shift


def _round_to_int(mantissa: int, scale: int) -> int:
    if scale <= 0:
        return mantissa << -scale
    return (mantissa + (1 << (scale - 1))) >> scale


def _int_to_float(n: int) -> float:
    try:
        return float(n)
    except OverflowError:
        return math.inf if n > 0 else -math.inf


def _normalized(mantissa: int, scale: int, precision_bits: int) -> BigDecimal:
    """Trim or extend a raw (mantissa, scale) pair to precision_bits significant bits.

    Works on the raw pair so intermediate scales (e.g. the summed scale of a
    product) may temporarily exceed the scale bounds.
    """
    shift = bimath.bit_length(mantissa) - precision_bits
    new_scale = scale - shift

    if shift > 0:
        half = 1 << (shift - 1)
        mantissa = (mantissa + half) >> shift
    elif shift < 0:
        mantissa <<= -shift

    return BigDecimal(mantissa, new_scale)


# =============================================================================
# BigDecimal class
# =============================================================================


class BigDecimal:
    """Exact binary fraction mantissa / 2**scale.

    Instances are treated as immutable. The only exception is
    rescale_in_place(); clone with copy() before calling it on a shared value.

    Operators use the fixed-point model: + - * / % all keep the left
    operand's scale. Floating-point operations are only available by name.
    The builtins min() and max() work directly through the comparison
    operators.
    """

    __slots__ = ("mantissa", "scale")
    __hash__ = None  # type: ignore[assignment]  # Equal values may have different scales

    def __init__(self, mantissa: int, scale: int) -> None:
        """Create from a raw mantissa and scale.

        Raises:
            ScaleOutOfRange: If scale is outside [-MAX_SCALE, MAX_SCALE]
        """
        _check_scale(scale)
        self.mantissa = mantissa
        self.scale = scale

    # --- Construction ---

    @classmethod
    def from_number(cls, num: float, precision: int = DEFAULT_WORKING_PRECISION) -> BigDecimal:
        """Create from a float by decoding its IEEE-754 bits directly.

        The result has exactly `precision` fractional bits. Values too small
        for that precision underflow to zero.

        Args:
            num: Finite float (ints are converted to float first)
            precision: Target scale

        Raises:
            NonFiniteInput: If num is NaN or infinite
            ScaleOutOfRange: If precision is outside [0, MAX_SCALE]
        """
        _check_precision(precision)
        num = float(num)
        if not math.isfinite(num):
            raise NonFiniteInput(f"Cannot create a BigDecimal from a non-finite number. Received: {num}")

        if num == 0:
            return cls(0, precision)

        bits = struct.unpack(">q", struct.pack(">d", num))[0]
        sign = -1 if bits < 0 else 1
        exponent = (bits >> _FRACTION_BITS) & _EXPONENT_MASK
        fraction = bits & _FRACTION_MASK

        if exponent == 0:
            # Subnormal: no implicit leading bit
            mantissa = sign * fraction
            raw_scale = _SUBNORMAL_SCALE
        else:
            significand = (1 << _FRACTION_BITS) | fraction
            mantissa = sign * significand
            raw_scale = _EXPONENT_BIAS + _FRACTION_BITS - exponent

        return cls(_rescale_mantissa(mantissa, raw_scale, precision), precision)

    @classmethod
    def from_int(cls, n: int, precision: int = DEFAULT_WORKING_PRECISION) -> BigDecimal:
        """Create an exact representation of an integer at the given precision.

        Raises:
            ScaleOutOfRange: If precision is outside [0, MAX_SCALE]
        """
        _check_precision(precision)
        return cls(n << precision, precision)

    def copy(self) -> BigDecimal:
        """Return an independent copy."""
        return BigDecimal(self.mantissa, self.scale)

    # --- Rescaling ---

    def rescaled(self, scale: int) -> BigDecimal:
        """Return this value at another scale, rounding half up if precision drops.

        Raises:
            ScaleOutOfRange: If scale is outside [-MAX_SCALE, MAX_SCALE]
        """
        _check_scale(scale)
        return BigDecimal(_rescale_mantissa(self.mantissa, self.scale, scale), scale)

    def rescale_in_place(self, scale: int) -> None:
        """Change this value's scale, rounding half up if precision drops. Mutating.

        Raises:
            ScaleOutOfRange: If scale is outside [-MAX_SCALE, MAX_SCALE]
        """
        _check_scale(scale)
        self.mantissa = _rescale_mantissa(self.mantissa, self.scale, scale)
        self.scale = scale

    def with_default_precision(self) -> BigDecimal:
        """Rescale to the default working precision of the fixed-point model."""
        return self.rescaled(DEFAULT_WORKING_PRECISION)

    def has_default_precision(self) -> bool:
        """True if the scale is the default working precision.

        Anything else has likely passed through a floating-point operation.
        """
        return self.scale == DEFAULT_WORKING_PRECISION

    # --- Fixed-point arithmetic ---

    def add(self, other: BigDecimal) -> BigDecimal:
        """self + other at self's scale.

        If other has more precision it is rounded to self's scale first.
        """
        return BigDecimal(self.mantissa + _rescale_mantissa(other.mantissa, other.scale, self.scale), self.scale)

    def subtract(self, other: BigDecimal) -> BigDecimal:
        """self - other at self's scale.

        If other has more precision it is rounded to self's scale first.
        """
        return BigDecimal(self.mantissa - _rescale_mantissa(other.mantissa, other.scale, self.scale), self.scale)

    def multiply_fixed(self, other: BigDecimal) -> BigDecimal:
        """[Fixed-point model] self * other at self's scale.

        The raw product has scale self.scale + other.scale, so it is shifted
        by other.scale (rounding half up when that drops bits).
        """
        raw_product = self.mantissa * other.mantissa
        return BigDecimal(_rescale_mantissa(raw_product, self.scale + other.scale, self.scale), self.scale)

    def multiply_floating(self, other: BigDecimal, mantissa_bits: int = DEFAULT_MANTISSA_BITS) -> BigDecimal:
        """[Floating-point model] self * other, keeping mantissa_bits significant bits."""
        return _normalized(self.mantissa * other.mantissa, self.scale + other.scale, mantissa_bits)

    def divide_fixed(self, other: BigDecimal, working_precision: int = DEFAULT_WORKING_PRECISION) -> BigDecimal:
        """[Fixed-point model] self / other at self's scale.

        The dividend is scaled up by other.scale plus `working_precision`
        extra bits, divided (truncating), then rounded back down by the
        extra bits.

        Raises:
            DivisionByZero: If other is zero
        """
        if other.mantissa == 0:
            raise DivisionByZero("Division by zero is not allowed.")

        scaled_dividend = _shift_left(self.mantissa, other.scale + working_precision)
        quotient = bimath.div_trunc(scaled_dividend, other.mantissa)

        if working_precision <= 0:
            return BigDecimal(quotient, self.scale)

        half = 1 << (working_precision - 1)
        return BigDecimal((quotient + half) >> working_precision, self.scale)

    def divide_floating(self, other: BigDecimal, mantissa_bits: int = DEFAULT_MANTISSA_BITS) -> BigDecimal:
        """[Floating-point model] self / other, keeping mantissa_bits significant bits.

        The dividend is shifted far enough that the quotient can only be zero
        when the dividend is zero.

        Raises:
            DivisionByZero: If other is zero
        """
        if other.mantissa == 0:
            raise DivisionByZero("Division by zero is not allowed.")
        if self.mantissa == 0:
            return BigDecimal(0, mantissa_bits)

        bit_difference = bimath.bit_length(other.mantissa) - bimath.bit_length(self.mantissa)
        # +1 guards against an off-by-one bit lost to truncation
        required_shift = max(bit_difference, 0) + mantissa_bits + 1

        quotient = bimath.div_trunc(self.mantissa << required_shift, other.mantissa)
        new_scale = self.scale - other.scale + required_shift

        return _normalized(quotient, new_scale, mantissa_bits)

    def mod(self, other: BigDecimal) -> BigDecimal:
        """Remainder of self / other at self's scale.

        The divisor is truncated (not rounded) to self's scale, and the
        remainder takes the sign of the dividend.

        Raises:
            DivisionByZero: If other is zero, or truncates to zero at self's scale
        """
        if other.mantissa == 0:
            raise DivisionByZero("Cannot perform modulo operation with a zero divisor.")

        shift = self.scale - other.scale
        if shift >= 0:
            divisor = other.mantissa << shift
        else:
            divisor = bimath.div_trunc(other.mantissa, 1 << -shift)
        if divisor == 0:
            raise DivisionByZero(
                f"Divisor {other!r} truncates to zero at the dividend's scale {self.scale}"
            )

        return BigDecimal(bimath.rem_trunc(self.mantissa, divisor), self.scale)

    def negate(self) -> BigDecimal:
        """Return -self."""
        return BigDecimal(-self.mantissa, self.scale)

    def abs(self) -> BigDecimal:
        """Return |self|."""
        return BigDecimal(bimath.abs_int(self.mantissa), self.scale)

    # --- Rounding ---

    def floor(self) -> BigDecimal:
        """Largest integer <= self, at the same scale. floor(-2.5) == -3."""
        if self.scale <= 0:
            return self.copy()
        return BigDecimal((self.mantissa >> self.scale) << self.scale, self.scale)

    def ceil(self) -> BigDecimal:
        """Smallest integer >= self, at the same scale. ceil(-2.5) == -2."""
        if self.scale <= 0:
            return self.copy()
        floored = (self.mantissa >> self.scale) << self.scale
        if floored != self.mantissa:
            floored += 1 << self.scale
        return BigDecimal(floored, self.scale)

    def is_integer(self) -> bool:
        """True if every fractional bit is zero."""
        if self.scale <= 0:
            return True
        return self.mantissa & ((1 << self.scale) - 1) == 0

    # --- Comparison ---

    def compare(self, other: BigDecimal) -> int:
        """Return -1 if self < other, 0 if equal, and 1 if self > other.

        Exact: the operand with fewer fractional bits is shifted up, never
        rounded.
        """
        m1 = self.mantissa
        m2 = other.mantissa
        if self.scale > other.scale:
            m2 <<= self.scale - other.scale
        elif other.scale > self.scale:
            m1 <<= other.scale - self.scale
        return bimath.compare(m1, m2)

    def is_zero(self) -> bool:
        """True if the value is zero."""
        return self.mantissa == 0

    def clamp(self, low: BigDecimal, high: BigDecimal) -> BigDecimal:
        """Clamp to the inclusive range [low, high]."""
        if self.compare(low) < 0:
            return low
        if self.compare(high) > 0:
            return high
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BigDecimal):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, BigDecimal):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, BigDecimal):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, BigDecimal):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, BigDecimal):
            return NotImplemented
        return self.compare(other) >= 0

    # --- Operators (fixed-point model) ---

    def __add__(self, other: object) -> BigDecimal:
        if not isinstance(other, BigDecimal):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> BigDecimal:
        if not isinstance(other, BigDecimal):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other: object) -> BigDecimal:
        if not isinstance(other, BigDecimal):
            return NotImplemented
        return self.multiply_fixed(other)

    def __truediv__(self, other: object) -> BigDecimal:
        if not isinstance(other, BigDecimal):
            return NotImplemented
        return self.divide_fixed(other)

    def __mod__(self, other: object) -> BigDecimal:
        if not isinstance(other, BigDecimal):
            return NotImplemented
        return self.mod(other)

    def __neg__(self) -> BigDecimal:
        return self.negate()

    def __pos__(self) -> BigDecimal:
        return self

    def __abs__(self) -> BigDecimal:
        return self.abs()

    # --- Conversion ---

    def to_int(self) -> int:
        """Round to the nearest int, halves toward positive infinity.

        2.5 becomes 3 and -2.5 becomes -2.
        """
        return _round_to_int(self.mantissa, self.scale)

    def to_number(self) -> float:
        """Fast cast to float through a power-of-two table.

        Only exact when the mantissa fits a float and the scale is at most
        1023. Larger scales return 0.0; magnitudes beyond the float range
        return a signed infinity.
        """
        if self.scale >= 0:
            if self.scale > MAX_SCALE_BEFORE_INFINITY:
                return 0.0
            return _int_to_float(self.mantissa) / _POWERS_OF_TWO[self.scale]

        exponent = -self.scale
        mantissa_as_float = _int_to_float(self.mantissa)
        if math.isinf(mantissa_as_float) or self.mantissa == 0:
            return mantissa_as_float
        if exponent > MAX_SCALE_BEFORE_INFINITY:
            return math.inf if self.mantissa > 0 else -math.inf
        return mantissa_as_float * _POWERS_OF_TWO[exponent]

    def to_exact_string(self) -> str:
        """The exact decimal expansion of the value.

        Binary fractions always terminate in decimal: fraction / 2**s equals
        fraction * 5**s / 10**s. The digits can suggest more precision than
        there is (1/1024 = 0.0009765625 is only good to ~3 places); see
        effective_decimal_places().
        """
        if self.mantissa == 0:
            return "0"
        if self.scale <= 0:
            return str(self.to_int())

        is_negative = self.mantissa < 0
        abs_mantissa = bimath.abs_int(self.mantissa)

        integer_part = abs_mantissa >> self.scale
        fractional_part = abs_mantissa - (integer_part << self.scale)

        sign = "-" if is_negative else ""
        if fractional_part == 0:
            return f"{sign}{integer_part}"

        decimal_digits = str(fractional_part * 5**self.scale).rjust(self.scale, "0").rstrip("0")
        return f"{sign}{integer_part}.{decimal_digits}"

    def effective_decimal_places(self) -> int:
        """Decimal places the scale actually supports: floor(scale * log10(2)).

        Negative results approximate the number of trailing zeros of a large
        integer.
        """
        return math.floor(self.scale * bimath.LOG10_OF_2)

    def to_string(self) -> str:
        """Human-readable value, rounded to its effective decimal places.

        Trims the spurious digits produced by binary-to-decimal conversion.
        Use to_exact_string() for the stored value.
        """
        if self.mantissa == 0:
            return "0"

        decimal_places = self.effective_decimal_places()
        if decimal_places <= 0:
            return str(self.to_int())

        # Scale by 10**P exactly, then round once
        rounded = _round_to_int(self.mantissa * 10**decimal_places, self.scale)

        abs_str = str(bimath.abs_int(rounded))
        if len(abs_str) > decimal_places:
            integer_part = abs_str[:-decimal_places]
            fractional_part = abs_str[-decimal_places:]
        else:
            integer_part = "0"
            fractional_part = abs_str.rjust(decimal_places, "0")

        fractional_part = fractional_part.rstrip("0")
        sign = "-" if rounded < 0 else ""

        if not fractional_part:
            return f"{sign}{integer_part}"
        return f"{sign}{integer_part}.{fractional_part}"

    def to_debug_binary_string(self) -> str:
        """The mantissa's two's complement bits, as stored."""
        return bimath.to_debug_binary_string(self.mantissa)

    def describe(self) -> str:
        """Multi-line debug summary: fields, bits and every conversion."""
        return "\n".join(
            [
                repr(self),
                f"Binary string: {self.to_debug_binary_string()}",
                f"Converted to Exact String: {self.to_exact_string()}",
                f"Converted to String: {self.to_string()}",
                f"Converted to Number: {self.to_number()}",
                f"Converted to Int: {self.to_int()}",
            ]
        )

    def __repr__(self) -> str:
        return f"BigDecimal(mantissa={self.mantissa}, scale={self.scale})"

    def __str__(self) -> str:
        return self.to_string()


# =============================================================================
# Floating-point model functions
# =============================================================================


def normalize(bd: BigDecimal, precision_bits: int = DEFAULT_MANTISSA_BITS) -> BigDecimal:
    """Rescale so the mantissa has precision_bits significant bits.

    The scale may become negative to represent large numbers. Rounding can
    carry into one extra bit.
    """
    return _normalized(bd.mantissa, bd.scale, precision_bits)


def power_int(base: BigDecimal, exponent: int) -> BigDecimal:
    """base ** exponent for an integer exponent, by repeated squaring.

    Negative exponents invert the base with floating division first.

    Raises:
        DomainError: If exponent is not an int
        DivisionByZero: If base is zero and exponent is negative
    """
    if not isinstance(exponent, int):
        raise DomainError(f"Exponent must be an integer. Received: {exponent}")

    if exponent < 0:
        inverted_base = BigDecimal.from_int(1).divide_floating(base)
        return power_int(inverted_base, -exponent)

    result = BigDecimal.from_int(1)
    current_power = base

    while exponent > 0:
        if exponent & 1:
            result = result.multiply_floating(current_power)
        current_power = current_power.multiply_floating(current_power)
        exponent >>= 1

    return result


def power(
    base: BigDecimal,
    exponent: float,
    mantissa_bits: int = DEFAULT_MANTISSA_BITS,
    config: PrecisionConfig | None = None,
) -> BigDecimal:
    """base ** exponent for any real exponent.

    Integer exponents go through power_int(); everything else uses
    exp(exponent * ln(base)), with exp's term cap taken from config.

    Raises:
        DomainError: Negative base with a non-integer exponent (complex result)
        DivisionByZero: Zero base with a negative exponent
    """
    is_integer_exponent = isinstance(exponent, int) or float(exponent).is_integer()

    if base.mantissa < 0 and not is_integer_exponent:
        raise DomainError(
            "Power of a negative base to a non-integer exponent results in a complex number, "
            "which is not supported."
        )
    if base.mantissa == 0:
        if exponent > 0:
            return BigDecimal(0, mantissa_bits)
        if exponent < 0:
            raise DivisionByZero("0 raised to a negative power is undefined (division by zero).")
        return BigDecimal.from_int(1, mantissa_bits)  # 0**0 is conventionally 1

    if is_integer_exponent:
        return power_int(base, int(exponent))

    product = exponent * ln(base)
    return exp(BigDecimal.from_number(product, mantissa_bits), mantissa_bits, config)


def sqrt(
    bd: BigDecimal, mantissa_bits: int = DEFAULT_MANTISSA_BITS, config: PrecisionConfig | None = None
) -> BigDecimal:
    """[Floating-point model] Square root by Newton's method.

    x_{k+1} = (x_k + n / x_k) / 2, with the quotient computed at twice the
    target precision. Stops once two successive iterates agree when
    normalized to mantissa_bits.

    Args:
        bd: Non-negative value
        mantissa_bits: Significant bits of the result
        config: Source of the iteration cap (default: DEFAULT_PRECISION_CONFIG)

    Raises:
        DomainError: If bd is negative
        SqrtDidNotConverge: If the iteration cap is reached
    """
    if bd.mantissa < 0:
        raise DomainError(f"Cannot calculate the square root of a negative number: {bd.to_exact_string()}")
    if bd.mantissa == 0:
        return BigDecimal(0, bd.scale)

    # Seed with 2**(integer bit length / 2), halves rounded up
    integer_bit_length = bimath.bit_length(bd.mantissa) - bd.scale
    guess_scale = math.floor(-integer_bit_length / 2 + 0.5)
    x_k = _normalized(1, guess_scale, mantissa_bits)
    last_rounded = x_k

    max_iterations = (config or DEFAULT_PRECISION_CONFIG).sqrt_max_iterations
    for iteration in range(max_iterations):
        n_div_xk = bd.divide_floating(x_k, mantissa_bits * 2)
        # n_div_xk first: it carries more precision, so the sum keeps it
        total = n_div_xk.add(x_k)
        x_k = BigDecimal(total.mantissa >> 1, total.scale)

        rounded = normalize(x_k, mantissa_bits)
        if rounded == last_rounded:
            logger.debug("sqrt_converged", iterations=iteration + 1, mantissa_bits=mantissa_bits)
            return rounded
        last_rounded = rounded

    logger.warning("sqrt_did_not_converge", value=repr(bd), max_iterations=max_iterations)
    raise SqrtDidNotConverge(f"sqrt failed to converge after {max_iterations} iterations.")


def hypot(
    a: BigDecimal, b: BigDecimal, mantissa_bits: int = DEFAULT_MANTISSA_BITS, config: PrecisionConfig | None = None
) -> BigDecimal:
    """[Floating-point model] sqrt(a**2 + b**2), the length of the vector (a, b)."""
    sum_of_squares = a.multiply_fixed(a).add(b.multiply_fixed(b))
    return sqrt(sum_of_squares, mantissa_bits, config)


def ln(bd: BigDecimal) -> float:
    """Natural logarithm as a float: ln(mantissa) - scale * ln(2).

    Raises:
        DomainError: If bd is not positive
    """
    if bd.mantissa <= 0:
        raise DomainError(f"Logarithm is undefined for non-positive values: {bd.to_exact_string()}")
    return bimath.ln(bd.mantissa) - bd.scale * bimath.LN2


def log10(bd: BigDecimal) -> float:
    """Base-10 logarithm as a float.

    Raises:
        DomainError: If bd is not positive
    """
    return ln(bd) / math.log(10)


def exp(
    bd: BigDecimal, mantissa_bits: int = DEFAULT_MANTISSA_BITS, config: PrecisionConfig | None = None
) -> BigDecimal:
    """[Floating-point model] e ** bd.

    Uses argument reduction e**x = e**y * 2**k with k = round(x / ln 2), sums
    the Taylor series of e**y (y is small, so it converges quickly), then
    applies 2**k as a pure scale adjustment. The term cap comes from config
    (default: DEFAULT_PRECISION_CONFIG).

    Raises:
        ExpDidNotConverge: If the series has not settled within the term cap
        ScaleOutOfRange: If the result's scale leaves the representable range
    """
    k = bd.divide_floating(LN2, mantissa_bits).to_int()
    k_ln2 = BigDecimal.from_int(k, mantissa_bits).multiply_floating(LN2, mantissa_bits)
    # Low-scale inputs would round k*ln2 to an integer and lose y entirely
    y = bd.rescaled(max(bd.scale, k_ln2.scale, mantissa_bits)).subtract(k_ln2)

    total = BigDecimal.from_int(1, mantissa_bits)
    term = total
    last_total = BigDecimal.from_int(0, mantissa_bits)

    max_iterations = (config or DEFAULT_PRECISION_CONFIG).exp_max_iterations
    for n in range(1, max_iterations + 1):
        # term_n = term_{n-1} * (y / n)
        y_div_n = y.divide_floating(BigDecimal.from_int(n, mantissa_bits), mantissa_bits)
        term = term.multiply_floating(y_div_n, mantissa_bits)
        total = total.add(term)

        if total == last_total:
            logger.debug("exp_converged", terms=n, k=k, mantissa_bits=mantissa_bits)
            # value * 2**k == mantissa / 2**(scale - k)
            return BigDecimal(total.mantissa, total.scale - k)

        last_total = total

    logger.warning("exp_did_not_converge", value=repr(bd), max_iterations=max_iterations)
    raise ExpDidNotConverge(f"exp failed to converge after {max_iterations} iterations.")


# =============================================================================
# Helpers
# =============================================================================


def bits_for_decimal_places(decimal_places: int) -> int:
    """Minimum fractional bits needed for the given decimal places, rounded up.

    One decimal digit is about 3.32 bits, so 3 places need 10 bits
    (2**10 ~= 1000). Add some working precision on top in practice: 3.1 at
    4 bits is 3.125, which drifts quickly under arithmetic.
    """
    if decimal_places == 0:
        return 0
    return bimath.log2(10**decimal_places) + 1


# =============================================================================
# Module-level constants
# =============================================================================

E = BigDecimal.from_number(math.e)
LN2 = BigDecimal.from_number(math.log(2))
