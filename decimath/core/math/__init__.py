"""
Core math modules для decimath

Целочисленные примитивы: int64 с контролем переполнения, степени десяти,
банковское округление и выравнивание по шагу.

Распределение сумм (allocation) импортируется напрямую:
decimath.core.math.allocation.
"""

# int64
from decimath.core.math.int64 import (
    INT64_MAX,
    INT64_MIN,
    check_int64,
    checked_add,
    checked_mul,
    checked_neg,
    checked_sub,
    fits_int64,
    trunc_divmod,
)

# Powers of ten
from decimath.core.math.pow10 import (
    MAX_SCALE,
    P10,
    is_valid_scale,
    pow10,
    scale_units,
)

# Rounding
from decimath.core.math.rounding import (
    StepRounding,
    divide_half_to_even,
    round_half_to_even,
    round_to_step,
)

__all__ = [
    # int64
    "INT64_MAX",
    "INT64_MIN",
    "fits_int64",
    "check_int64",
    "checked_add",
    "checked_sub",
    "checked_mul",
    "checked_neg",
    "trunc_divmod",
    # Powers of ten
    "MAX_SCALE",
    "P10",
    "is_valid_scale",
    "pow10",
    "scale_units",
    # Rounding
    "StepRounding",
    "round_half_to_even",
    "divide_half_to_even",
    "round_to_step",
]
