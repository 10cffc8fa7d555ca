"""
Parsing — ASCII-парсер десятичной строки в (units, scale)

Однопроходный конечный автомат по грамматике:

    value     := sign? digits (sep digits)? exponent?
    sign      := '+' | '-'
    sep       := '.' | ','
    exponent  := ('e'|'E') expsign? digits
    expsign   := '+' | '-'
    digits    := ['0'-'9']+

Разделители групп разрядов, внутренние пробелы, несколько разделителей,
разделитель без последующей цифры, "голый" знак и экспонента без мантиссы
отклоняются. Пробелы по краям должен обрезать вызывающий код.

Парсер не округляет: scale = число цифр после разделителя,
скорректированное экспонентой.

Отказ разбора: восстановимая ситуация: возвращается None.
"""

from typing import Final

from decimath.core.math.int64 import INT64_MAX, fits_int64
from decimath.core.math.pow10 import MAX_SCALE, P10

_DIGITS: Final[str] = "0123456789"
_SEPARATORS: Final[str] = ".,"
_SIGNS: Final[str] = "+-"
_EXPONENT_MARKERS: Final[str] = "eE"

# |units| не может превышать модуль INT64_MIN
_MAX_MAGNITUDE: Final[int] = INT64_MAX + 1


def parse_decimal(text: str) -> tuple[int, int] | None:
    """
    Разбор ASCII-строки в пару (units, scale).

    Args:
        text: Строка без окружающих пробелов

    Returns:
        (units, scale) или None если строка не соответствует грамматике,
        либо результат не помещается в int64 / scale вне 0..MAX_SCALE

    Examples:
        >>> parse_decimal("12.34")
        (1234, 2)
        >>> parse_decimal("12,34")
        (1234, 2)
        >>> parse_decimal("-4.5e+2")
        (-450, 0)
        >>> parse_decimal("1.2E-3")
        (12, 4)
        >>> parse_decimal("123.") is None
        True
    """
    if not text:
        return None

    # Состояние мантиссы
    negative = False
    at_start = True
    saw_digits = False
    saw_separator = False
    magnitude = 0
    scale = 0

    # Состояние экспоненты
    in_exponent = False
    exp_negative = False
    exp_value = 0
    saw_exp_sign = False
    saw_exp_digit = False

    for char in text:
        if char in _SIGNS:
            if in_exponent:
                # Знак экспоненты допустим только сразу после 'e'
                if saw_exp_digit or saw_exp_sign:
                    return None
                saw_exp_sign = True
                exp_negative = char == "-"
                continue
            if not at_start:
                return None
            at_start = False
            negative = char == "-"
            continue

        if char in _SEPARATORS:
            if in_exponent or not saw_digits or saw_separator:
                return None
            saw_separator = True
            continue

        if char in _EXPONENT_MARKERS:
            if in_exponent or not saw_digits:
                return None
            in_exponent = True
            continue

        if char not in _DIGITS:
            # Любой другой символ, включая пробел и не-ASCII цифры
            return None

        digit = ord(char) - 48
        if in_exponent:
            saw_exp_digit = True
            exp_value = exp_value * 10 + digit
            if exp_value > INT64_MAX:
                return None
        else:
            magnitude = magnitude * 10 + digit
            if magnitude > _MAX_MAGNITUDE:
                return None
            if saw_separator:
                scale += 1
            saw_digits = True
            at_start = False

    if not saw_digits:
        return None
    if saw_separator and scale == 0:
        return None
    if in_exponent and not saw_exp_digit:
        return None

    units = -magnitude if negative else magnitude
    if not fits_int64(units):
        return None

    if exp_value:
        if exp_negative:
            # Отрицательная экспонента добавляет дробные цифры
            scale += exp_value
        elif exp_value >= scale:
            # Сдвиг точки вправо за пределы дробной части
            shift = exp_value - scale
            # Ноль представим при любом сдвиге
            if units:
                if shift > MAX_SCALE:
                    return None
                units *= P10[shift]
                if not fits_int64(units):
                    return None
            scale = 0
        else:
            scale -= exp_value

    if scale > MAX_SCALE:
        return None

    return units, scale
