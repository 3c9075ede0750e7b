"""Error classes for boardmath.

Every error raised by the numeric core or the geometry engine derives from
BoardMathError. None of them are retryable: they signal invalid input or a
broken internal invariant.
"""


class BoardMathError(ArithmeticError):
    """Base error for boardmath operations."""

    pass


class BigDecimalError(BoardMathError):
    """Base error for BigDecimal operations."""

    pass


class ScaleOutOfRange(BigDecimalError):
    """Scale or requested precision is outside the supported range."""

    pass


class NonFiniteInput(BigDecimalError, ValueError):
    """Cannot build a BigDecimal from NaN or infinity."""

    pass


class DivisionByZero(BigDecimalError, ZeroDivisionError):
    """Division, modulo, or negative power of zero."""

    pass


class DomainError(BigDecimalError, ValueError):
    """Operation is undefined (or complex) for the given operand."""

    pass


class DidNotConverge(BigDecimalError):
    """An iterative algorithm exceeded its iteration cap."""

    pass


class SqrtDidNotConverge(DidNotConverge):
    """Newton iteration for the square root did not converge."""

    pass


class ExpDidNotConverge(DidNotConverge):
    """Taylor series for the exponential did not converge."""

    pass


class GeometryError(BoardMathError):
    """Degenerate geometric input (zero vector, zero coefficient)."""

    pass
