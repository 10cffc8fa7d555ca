"""
Pow10 — Таблица степеней 10 и примитив масштабирования units

Модуль содержит:
- Предвычисленную таблицу P10 (10^0 .. 10^18), неизменяемую на весь процесс
- pow10(scale): lookup в таблице с проверкой диапазона
- scale_units(units, delta): умножение/деление units на 10^|delta|
  с банковским округлением при понижении и контролем переполнения

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Таблица P10 write-once: tuple, инициализируется при импорте
2. |delta| > MAX_SCALE → ScaleOutOfRangeError
3. Повышение scale точное (без округления), но проверяется на переполнение
4. Понижение scale: всегда через round_half_to_even
"""

from typing import Final

from decimath.core.errors import ScaleOutOfRangeError
from decimath.core.math.int64 import checked_mul, trunc_divmod
from decimath.core.math.rounding import round_half_to_even

# =============================================================================
# ТАБЛИЦА СТЕПЕНЕЙ 10
# =============================================================================

# Максимальный поддерживаемый scale (10^18: наибольшая степень 10 в int64)
MAX_SCALE: Final[int] = 18

P10: Final[tuple[int, ...]] = tuple(10**exponent for exponent in range(MAX_SCALE + 1))


def is_valid_scale(scale: int) -> bool:
    """True если scale в диапазоне таблицы степеней (0..MAX_SCALE)."""
    return 0 <= scale <= MAX_SCALE


def pow10(scale: int) -> int:
    """
    10 в степени scale (lookup в таблице P10).

    Args:
        scale: Неотрицательный показатель, 0..MAX_SCALE

    Returns:
        10^scale

    Raises:
        ScaleOutOfRangeError: Если scale вне 0..MAX_SCALE
    """
    if not is_valid_scale(scale):
        raise ScaleOutOfRangeError(f"scale must be 0 <= scale <= {MAX_SCALE}, got {scale}")
    return P10[scale]


# =============================================================================
# МАСШТАБИРОВАНИЕ UNITS
# =============================================================================


def scale_units(units: int, delta: int) -> int:
    """
    Умножение или деление units на 10^|delta|.

    delta > 0: units * 10^delta (точно, с проверкой переполнения)
    delta < 0: units / 10^|delta| с усечением + round_half_to_even
    delta == 0: units без изменений

    Args:
        units: Значение в минимальных единицах
        delta: Знаковая дельта scale (newScale - scale)

    Returns:
        Пересчитанное значение units

    Raises:
        ScaleOutOfRangeError: Если |delta| > MAX_SCALE
        DecimalOverflowError: Если результат не помещается в int64

    Examples:
        >>> scale_units(123, 2)
        12300
        >>> scale_units(125, -1)
        12
        >>> scale_units(-125, -1)
        -12
    """
    if delta == 0:
        return units

    multiplier = pow10(abs(delta))

    if delta > 0:
        return checked_mul(units, multiplier)

    quotient, remainder = trunc_divmod(units, multiplier)
    return round_half_to_even(quotient, remainder, multiplier)
