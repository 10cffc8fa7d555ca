"""
decimath — Десятичная арифметика с фиксированной точкой

Значение хранится как целое число минимальных единиц (int64) и scale
(число дробных цифр). Все понижения точности: банковское округление.
"""

from decimath.core.domain import DecimalValue, Fill, Money
from decimath.core.errors import (
    DecimalContractViolation,
    DecimalDecodeError,
    DecimalMathError,
    DecimalOverflowError,
    DivisionByZeroError,
    InvalidArgumentError,
    ScaleMismatchError,
    ScaleOutOfRangeError,
)
from decimath.core.codec.formatting import PLAIN, FormatOptions
from decimath.core.math.allocation import allocate_proportionally, split_evenly
from decimath.core.math.pow10 import MAX_SCALE
from decimath.core.math.rounding import StepRounding
from decimath.logging_config import configure_logging, get_logger

__version__ = "0.1.0"

__all__ = [
    # Values
    "DecimalValue",
    "Money",
    "Fill",
    "StepRounding",
    "MAX_SCALE",
    # Formatting
    "FormatOptions",
    "PLAIN",
    # Allocation
    "allocate_proportionally",
    "split_evenly",
    # Errors
    "DecimalMathError",
    "DecimalContractViolation",
    "ScaleOutOfRangeError",
    "DecimalOverflowError",
    "DivisionByZeroError",
    "ScaleMismatchError",
    "InvalidArgumentError",
    "DecimalDecodeError",
    # Logging
    "configure_logging",
    "get_logger",
]
