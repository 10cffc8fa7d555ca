"""
Domain models для decimath

- DecimalValue: неизменяемое десятичное значение с фиксированной точкой
- Money: сумма в валюте с каноническим scale
- quantity: лоты, тики, notional, VWAP, бюджет покупки
"""

from decimath.core.domain.decimal_value import DecimalValue
from decimath.core.domain.money import DEFAULT_CURRENCY_SCALE, DEFAULT_MINOR_UNITS, Money
from decimath.core.domain.quantity import (
    BPS_DENOMINATOR,
    Fill,
    apply_bps,
    apply_ratio,
    clamp,
    clamp_quantity,
    max_buy_quantity,
    notional,
    round_price,
    round_quantity,
    round_to_lot,
    round_to_tick,
    vwap,
)

__all__ = [
    # DecimalValue
    "DecimalValue",
    # Money
    "Money",
    "DEFAULT_MINOR_UNITS",
    "DEFAULT_CURRENCY_SCALE",
    # Quantity
    "BPS_DENOMINATOR",
    "Fill",
    "round_quantity",
    "clamp_quantity",
    "round_price",
    "round_to_lot",
    "clamp",
    "round_to_tick",
    "notional",
    "vwap",
    "apply_bps",
    "apply_ratio",
    "max_buy_quantity",
]
