"""
Quantity — Лоты, тики, notional и бюджет покупки

Торговые вычисления поверх DecimalValue:
- LOT: округление количества (целого или десятичного) к размеру лота
- TICK: округление цены к шагу цены
- NOTIONAL: price × quantity, VWAP по исполнениям
- ADJUSTMENTS: корректировки цены в basis points и в рациональной доле
- BUDGET: максимальное количество под денежный бюджет с учётом комиссии

Размер лота и тик задаются в минимальных единицах scale соответствующего
значения (например, tick=5 при price.scale=2 означает шаг 0.05).

Все предусловия (шаг > 0, непустые исполнения и т.д.) выбрасывают
DecimalContractViolation.
"""

from typing import Final, NamedTuple, Sequence

from decimath.core.domain.decimal_value import DecimalValue
from decimath.core.errors import InvalidArgumentError, ScaleMismatchError
from decimath.core.math.int64 import check_int64, checked_add
from decimath.core.math.pow10 import pow10
from decimath.core.math.rounding import StepRounding, round_to_step


# =============================================================================
# CONSTANTS
# =============================================================================

# Знаменатель basis points: 1 bps = 1 / 10_000
BPS_DENOMINATOR: Final[int] = 10_000


# =============================================================================
# TYPES
# =============================================================================


class Fill(NamedTuple):
    """Исполнение: количество и цена за 1 базовую единицу."""

    quantity: DecimalValue
    price: DecimalValue


def _apply_signed_ratio(value: DecimalValue, numerator: int, denominator: int) -> DecimalValue:
    # Банковское округление симметрично: x * (-k/d) == -(x * (k/d))
    scaled = value.multiply_ratio(abs(numerator), abs(denominator))
    if (numerator < 0) != (denominator < 0):
        return -scaled
    return scaled


# =============================================================================
# LOT
# =============================================================================


def round_quantity(quantity: int, lot_size: int, mode: StepRounding = StepRounding.FLOOR) -> int:
    """
    Округление целого количества штук/контрактов к границе лота.

    Args:
        quantity: Количество штук (может быть отрицательным для шортов)
        lot_size: Размер лота в штуках (> 0)
        mode: Режим округления (по умолчанию FLOOR)

    Raises:
        InvalidArgumentError: Если lot_size <= 0

    Examples:
        >>> round_quantity(-7, 5)
        -10
    """
    return round_to_step(quantity, lot_size, mode)


def clamp_quantity(quantity: int, min_value: int, max_value: int) -> int:
    """Ограничение целого количества диапазоном [min_value, max_value]."""
    if min_value > max_value:
        raise InvalidArgumentError(
            f"Invalid bounds in clamp_quantity: min {min_value} > max {max_value}"
        )
    return max(min_value, min(quantity, max_value))


def round_to_lot(
    quantity: DecimalValue,
    lot_size: int,
    mode: StepRounding = StepRounding.FLOOR,
) -> DecimalValue:
    """
    Округление десятичного количества к границе лота.

    Args:
        quantity: Количество
        lot_size: Размер лота в минимальных единицах quantity.scale (> 0)
        mode: Режим округления

    Returns:
        Количество, кратное лоту, с тем же scale
    """
    return DecimalValue(units=round_to_step(quantity.units, lot_size, mode), scale=quantity.scale)


def clamp(quantity: DecimalValue, min_value: DecimalValue, max_value: DecimalValue) -> DecimalValue:
    """
    Ограничение количества диапазоном [min_value, max_value].

    Raises:
        ScaleMismatchError: Если scale границ и количества различаются
        InvalidArgumentError: Если min_value > max_value
    """
    if not (quantity.scale == min_value.scale == max_value.scale):
        raise ScaleMismatchError(
            f"Scale mismatch in clamp: {quantity.scale}, {min_value.scale}, {max_value.scale}"
        )
    if min_value.units > max_value.units:
        raise InvalidArgumentError(f"Invalid bounds in clamp: min {min_value} > max {max_value}")

    if quantity.units < min_value.units:
        return min_value
    if quantity.units > max_value.units:
        return max_value
    return quantity


# =============================================================================
# TICK
# =============================================================================


def round_price(price: DecimalValue, tick: int, mode: StepRounding) -> DecimalValue:
    """
    Округление цены к шагу цены.

    Args:
        price: Цена (деньги за 1 базовую единицу)
        tick: Шаг цены в минимальных единицах price.scale (> 0)
        mode: Режим округления

    Raises:
        InvalidArgumentError: Если tick <= 0

    Examples:
        >>> round_price(DecimalValue(units=10_007, scale=2), 5, StepRounding.NEAREST).units
        10005
    """
    return DecimalValue(units=round_to_step(price.units, tick, mode), scale=price.scale)


def round_to_tick(price: DecimalValue, tick: int, mode: StepRounding) -> DecimalValue:
    return round_price(price, tick, mode)


# =============================================================================
# NOTIONAL
# =============================================================================


def notional(price: DecimalValue, quantity: DecimalValue) -> DecimalValue:
    """
    Денежный объём: price × quantity.

    Вычисляется как price * quantity.units / 10^quantity.scale
    с банковским округлением; результат в scale цены.

    Examples:
        >>> notional(DecimalValue(units=10_050, scale=2), DecimalValue(units=15, scale=1)).units
        15075
    """
    return _apply_signed_ratio(price, quantity.units, pow10(quantity.scale))


def vwap(fills: Sequence[Fill]) -> DecimalValue:
    """
    Средневзвешенная по объёму цена (VWAP).

    VWAP = Σ notional_i / Σ quantity_i, результат в scale цены.

    Args:
        fills: Исполнения (quantity, price)

    Raises:
        InvalidArgumentError: Пустой список или нулевое суммарное количество
        ScaleMismatchError: Если scale цен или количеств различаются
        DecimalOverflowError: При переполнении сумм
    """
    if not fills:
        raise InvalidArgumentError("fills must be non-empty")

    price_scale = fills[0].price.scale
    quantity_scale = fills[0].quantity.scale
    total_notional = DecimalValue.zero(price_scale)
    total_quantity = 0

    for fill in fills:
        if fill.price.scale != price_scale:
            raise ScaleMismatchError(
                f"Price scale mismatch in vwap: expected {price_scale}, got {fill.price.scale}"
            )
        if fill.quantity.scale != quantity_scale:
            raise ScaleMismatchError(
                f"Quantity scale mismatch in vwap: expected {quantity_scale}, "
                f"got {fill.quantity.scale}"
            )
        total_notional = total_notional + notional(fill.price, fill.quantity)
        total_quantity = checked_add(total_quantity, fill.quantity.units)

    if total_quantity == 0:
        raise InvalidArgumentError("Total quantity must not be zero in vwap")

    # notional / (total_quantity / 10^qs) == notional * 10^qs / total_quantity
    return _apply_signed_ratio(total_notional, pow10(quantity_scale), total_quantity)


# =============================================================================
# ADJUSTMENTS
# =============================================================================


def apply_bps(price: DecimalValue, bps: int) -> DecimalValue:
    """
    Корректировка цены в basis points: price × (1 + bps / 10_000).

    Examples:
        >>> apply_bps(DecimalValue(units=10_000, scale=2), 15).units
        10015
    """
    return _apply_signed_ratio(price, BPS_DENOMINATOR + bps, BPS_DENOMINATOR)


def apply_ratio(price: DecimalValue, pct_numerator: int, pct_denominator: int) -> DecimalValue:
    """
    Корректировка цены на долю: price × (1 + pct_numerator / pct_denominator).

    Args:
        price: Базовая цена
        pct_numerator: Знаковый числитель (например, +15 для +15/100)
        pct_denominator: Знаменатель (> 0; 100 для процентов)

    Raises:
        InvalidArgumentError: Если pct_denominator <= 0
    """
    if pct_denominator <= 0:
        raise InvalidArgumentError(f"pct_denominator must be positive, got {pct_denominator}")
    return _apply_signed_ratio(price, pct_denominator + pct_numerator, pct_denominator)


# =============================================================================
# BUDGET
# =============================================================================


def max_buy_quantity(
    budget: DecimalValue,
    unit_price: DecimalValue,
    quantity_scale: int,
    lot_size: int | None = None,
    fee_bps: int = 0,
) -> DecimalValue:
    """
    Максимальное количество, покупаемое на бюджет с учётом комиссии.

    Ищется максимальное q (в минимальных единицах quantity_scale) такое, что
    effective_price × q / 10^quantity_scale <= budget, где
    effective_price = apply_bps(unit_price, fee_bps). Затем q округляется
    вниз к лоту.

    Args:
        budget: Денежный бюджет (включая комиссию), >= 0
        unit_price: Цена за 1 базовую единицу, > 0
        quantity_scale: Scale результата
        lot_size: Размер лота в минимальных единицах quantity_scale (None → 1)
        fee_bps: Комиссия в basis points (15 → 0.15%)

    Returns:
        Количество с scale = quantity_scale, не превышающее бюджет

    Raises:
        InvalidArgumentError: Отрицательный бюджет, неположительная цена
            (в том числе после комиссии) или lot_size <= 0
        ScaleOutOfRangeError: Если quantity_scale вне 0..MAX_SCALE
        DecimalOverflowError: Если количество не помещается в int64

    Examples:
        >>> max_buy_quantity(DecimalValue(units=100_000, scale=2),
        ...                  DecimalValue(units=25_000, scale=2), 3).units
        4000
    """
    if budget.units < 0:
        raise InvalidArgumentError(f"budget must be non-negative, got {budget}")
    if unit_price.units <= 0:
        raise InvalidArgumentError(f"unit_price must be positive, got {unit_price}")
    lot = 1 if lot_size is None else lot_size
    if lot <= 0:
        raise InvalidArgumentError(f"lot_size must be positive, got {lot}")

    effective = apply_bps(unit_price, fee_bps)
    if effective.units <= 0:
        raise InvalidArgumentError(
            f"Effective price must be positive, got {effective} at fee_bps={fee_bps}"
        )

    # q <= budget.units * 10^(qs + ps) / (effective.units * 10^bs), оба множителя > 0
    numerator = budget.units * pow10(quantity_scale) * pow10(effective.scale)
    denominator = effective.units * pow10(budget.scale)
    units = check_int64(numerator // denominator, "max_buy_quantity")

    if lot > 1:
        units = round_to_step(units, lot, StepRounding.FLOOR)
    return DecimalValue(units=max(units, 0), scale=quantity_scale)
