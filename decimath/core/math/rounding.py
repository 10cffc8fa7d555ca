"""
Rounding — Ядро банковского округления (round half to even)

Единственный источник истины для округления во всей библиотеке:
каждое понижение scale, каждое деление и каждое умножение на дробь
проходит через round_half_to_even.

Также содержит округление к кратному шагу (lot/tick) с режимами
FLOOR / CEIL / NEAREST: тонкие потребители используют его вместо
собственной реализации округления.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Точная половина округляется к чётному соседу
2. Направление ±1 определяется знаком остатка
3. divisor <= 0 → нарушение контракта (не восстановимо)
"""

from enum import Enum

from decimath.core.errors import InvalidArgumentError
from decimath.core.math.int64 import checked_mul, trunc_divmod

# =============================================================================
# ENUMS
# =============================================================================


class StepRounding(str, Enum):
    """Режим округления к дискретному шагу (размер лота, тик цены)."""

    FLOOR = "floor"  # к -inf
    CEIL = "ceil"  # к +inf
    NEAREST = "nearest"  # к ближайшему, половина → к чётному


# =============================================================================
# ROUND HALF TO EVEN
# =============================================================================


def round_half_to_even(quotient: int, remainder: int, divisor: int) -> int:
    """
    Банковское округление результата целочисленного деления.

    Алгоритм:
        half = divisor // 2
        remainder == 0                      → quotient
        divisor чётный и |remainder| == half → к чётному из (quotient, quotient ± 1)
        |remainder| > half                  → quotient ± 1 (по знаку remainder)
        иначе                               → quotient

    Args:
        quotient: Частное q = numerator / divisor (усечённое к нулю)
        remainder: Остаток r (знак делимого, |r| < divisor)
        divisor: Делитель (строго > 0)

    Returns:
        q, q + 1 или q - 1

    Raises:
        InvalidArgumentError: Если divisor <= 0

    Examples:
        >>> round_half_to_even(12, 50, 100)
        12
        >>> round_half_to_even(13, 50, 100)
        14
        >>> round_half_to_even(13, -50, 100)
        12
    """
    if divisor <= 0:
        raise InvalidArgumentError(
            f"Divisor must be positive in round_half_to_even, got {divisor}"
        )

    if remainder == 0:
        return quotient

    abs_remainder = abs(remainder)
    half = divisor // 2
    is_tie = divisor % 2 == 0 and abs_remainder == half

    if is_tie:
        should_round = quotient % 2 != 0
    else:
        should_round = abs_remainder > half

    if not should_round:
        return quotient
    return quotient + 1 if remainder > 0 else quotient - 1


def divide_half_to_even(numerator: int, divisor: int) -> int:
    """
    Деление numerator / divisor с банковским округлением.

    Знак делителя переносится в делимое, чтобы ничья разрешалась к чётному
    соседу истинного частного и при отрицательном делителе.

    Raises:
        DivisionByZeroError: Если divisor == 0
    """
    if divisor < 0:
        numerator, divisor = -numerator, -divisor
    quotient, remainder = trunc_divmod(numerator, divisor)
    return round_half_to_even(quotient, remainder, divisor)


# =============================================================================
# ROUND TO STEP
# =============================================================================


def round_to_step(units: int, step: int, mode: StepRounding = StepRounding.FLOOR) -> int:
    """
    Выравнивание целого значения по кратному шагу.

    Args:
        units: Значение в минимальных единицах (может быть отрицательным)
        step: Шаг (размер лота / тик) в тех же единицах, > 0
        mode: FLOOR (к -inf), CEIL (к +inf), NEAREST (половина → к чётному кратному)

    Returns:
        Кратное step

    Raises:
        InvalidArgumentError: Если step <= 0
        DecimalOverflowError: Если результат не помещается в int64

    Examples:
        >>> round_to_step(-7, 5, StepRounding.FLOOR)
        -10
        >>> round_to_step(7, 5, StepRounding.CEIL)
        10
        >>> round_to_step(25, 10, StepRounding.NEAREST)
        20
    """
    if step <= 0:
        raise InvalidArgumentError(f"step must be > 0, got {step}")

    div, rem = trunc_divmod(units, step)
    if rem == 0:
        return checked_mul(div, step)

    mode = StepRounding(mode)
    if mode is StepRounding.FLOOR:
        if units < 0:
            div -= 1
    elif mode is StepRounding.CEIL:
        if units > 0:
            div += 1
    else:
        div = round_half_to_even(div, rem, step)

    return checked_mul(div, step)
