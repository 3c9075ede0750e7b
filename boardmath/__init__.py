"""boardmath - arbitrary-precision numbers and exact geometry for infinite boards."""

from boardmath.config import DEFAULT_PRECISION_CONFIG, PrecisionConfig
from boardmath.errors import BoardMathError
from boardmath.math.bigdecimal import BigDecimal

__version__ = "0.1.0"
__all__ = ["BigDecimal", "PrecisionConfig", "DEFAULT_PRECISION_CONFIG", "BoardMathError", "__version__"]
