"""Precision configuration for the BigDecimal core."""

from pydantic import BaseModel, Field, model_validator


class PrecisionConfig(BaseModel):
    """Precision and iteration limits of the BigDecimal core.

    DEFAULT_PRECISION_CONFIG fixes the package-wide scale bounds and the
    default precisions of both arithmetic models at import time. The
    iteration caps are also read per call: sqrt, hypot, exp and power accept
    a `config` argument and fall back to the default instance without one.

    Attributes:
        working_precision: Fractional bits used by the fixed-point model
            (default: 23, roughly float32 precision).
        mantissa_bits: Significant bits kept by the floating-point model
            (default: 23).
        max_scale: Largest absolute scale a BigDecimal may carry. Anything
            beyond it is assumed to be running away toward infinity.
        sqrt_max_iterations: Newton iteration cap for square roots.
        exp_max_iterations: Taylor series term cap for the exponential.
    """

    working_precision: int = Field(default=23, ge=0)
    mantissa_bits: int = Field(default=23, ge=1)
    max_scale: int = Field(default=100_000, ge=1)

    sqrt_max_iterations: int = Field(default=100, ge=1)
    exp_max_iterations: int = Field(default=100, ge=1)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_precision_within_max_scale(self) -> "PrecisionConfig":
        if self.working_precision > self.max_scale:
            raise ValueError(
                f"working_precision {self.working_precision} exceeds max_scale {self.max_scale}"
            )
        if self.mantissa_bits > self.max_scale:
            raise ValueError(
                f"mantissa_bits {self.mantissa_bits} exceeds max_scale {self.max_scale}"
            )
        return self


# Default configuration instance
DEFAULT_PRECISION_CONFIG = PrecisionConfig()

DEFAULT_WORKING_PRECISION = DEFAULT_PRECISION_CONFIG.working_precision
DEFAULT_MANTISSA_BITS = DEFAULT_PRECISION_CONFIG.mantissa_bits
MAX_SCALE = DEFAULT_PRECISION_CONFIG.max_scale
