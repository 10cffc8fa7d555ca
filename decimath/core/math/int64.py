"""
Int64 — Целочисленная арифметика с контролем переполнения

Модуль моделирует нативный знаковый 64-битный integer поверх Python int:
- Все операции над units (add/sub/mul/neg) проверяют диапазон int64
- Переполнение → DecimalOverflowError (никогда не wraparound)
- trunc_divmod: деление с усечением к нулю (остаток несёт знак делимого)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Любой результат вне [INT64_MIN, INT64_MAX] детектируется до использования
2. Промежуточные произведения проверяются так же, как итоговые значения
3. trunc_divmod: q = trunc(n / d), r = n - q*d, |r| < |d|, sign(r) == sign(n)
"""

from typing import Final

from decimath.core.errors import DecimalOverflowError, DivisionByZeroError

# =============================================================================
# ГРАНИЦЫ INT64
# =============================================================================

INT64_MAX: Final[int] = 2**63 - 1
INT64_MIN: Final[int] = -(2**63)


# =============================================================================
# ПРОВЕРКИ ДИАПАЗОНА
# =============================================================================


def fits_int64(value: int) -> bool:
    """True если value представим как знаковый 64-битный integer."""
    return INT64_MIN <= value <= INT64_MAX


def check_int64(value: int, operation: str) -> int:
    """
    Проверка, что результат операции помещается в int64.

    Args:
        value: Результат вычисления
        operation: Описание операции (для сообщения об ошибке)

    Returns:
        value без изменений

    Raises:
        DecimalOverflowError: Если value вне диапазона int64
    """
    if not fits_int64(value):
        raise DecimalOverflowError(f"Overflow in {operation}: result {value} does not fit int64")
    return value


def checked_add(a: int, b: int) -> int:
    return check_int64(a + b, f"add: {a} + {b}")


def checked_sub(a: int, b: int) -> int:
    return check_int64(a - b, f"subtract: {a} - {b}")


def checked_mul(a: int, b: int) -> int:
    return check_int64(a * b, f"multiply: {a} * {b}")


def checked_neg(a: int) -> int:
    # -INT64_MIN не представим
    return check_int64(-a, f"negate: -({a})")


# =============================================================================
# ДЕЛЕНИЕ С УСЕЧЕНИЕМ
# =============================================================================


def trunc_divmod(numerator: int, divisor: int) -> tuple[int, int]:
    """
    Целочисленное деление с усечением к нулю.

    Python `//` округляет к -inf; здесь воспроизводится семантика
    нативного деления: частное усекается к нулю, остаток несёт знак делимого.
    Именно такая пара (quotient, remainder) ожидается round_half_to_even.

    Args:
        numerator: Делимое
        divisor: Делитель (не ноль)

    Returns:
        (quotient, remainder)

    Raises:
        DivisionByZeroError: Если divisor == 0

    Examples:
        >>> trunc_divmod(7, 2)
        (3, 1)
        >>> trunc_divmod(-7, 2)
        (-3, -1)
        >>> trunc_divmod(7, -2)
        (-3, 1)
    """
    if divisor == 0:
        raise DivisionByZeroError(f"Division by zero: {numerator} / 0")

    quotient = abs(numerator) // abs(divisor)
    if (numerator < 0) != (divisor < 0):
        quotient = -quotient
    remainder = numerator - quotient * divisor
    return quotient, remainder
