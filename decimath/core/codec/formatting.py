"""
Formatting — Быстрый ASCII-форматтер DecimalValue

Рендеринг без округления: scale значения никогда не меняется.
- Разделитель групп каждые три цифры целой части справа (опционально)
- Десятичный разделитель + минимальная ширина дробной части
  (дополнение нулями справа, если scale меньше запрошенной ширины)
- Знак выводится только для отрицательных значений
- Нулевая ширина дробной части подавляет разделитель

Только ASCII: разделители: ровно один ASCII-символ.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from decimath.core.errors import InvalidArgumentError
from decimath.core.math.pow10 import pow10

if TYPE_CHECKING:
    from decimath.core.domain.decimal_value import DecimalValue


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class FormatOptions:
    """Параметры форматирования.

    Attributes:
        group_separator: Разделитель групп разрядов (None: без группировки)
        decimal_separator: Десятичный разделитель
        min_fraction_digits: Минимальная ширина дробной части (None: равна scale)
    """

    group_separator: str | None = " "
    decimal_separator: str = "."
    min_fraction_digits: int | None = None


# Каноническая форма для str(): без группировки, точка, ровно scale цифр
PLAIN: Final[FormatOptions] = FormatOptions(group_separator=None)

_GROUP_SIZE: Final[int] = 3


def _check_separator(separator: str, name: str) -> str:
    if len(separator) != 1 or not separator.isascii():
        raise InvalidArgumentError(
            f"{name} must be a single ASCII character, got {separator!r}"
        )
    return separator


def _group_digits(digits: str, separator: str) -> str:
    head = len(digits) % _GROUP_SIZE or _GROUP_SIZE
    groups = [digits[:head]]
    groups.extend(digits[i:i + _GROUP_SIZE] for i in range(head, len(digits), _GROUP_SIZE))
    return separator.join(groups)


# =============================================================================
# FORMAT
# =============================================================================


def format_units(
    units: int,
    scale: int,
    group_separator: str | None = " ",
    decimal_separator: str = ".",
    min_fraction_digits: int | None = None,
) -> str:
    """
    Форматирование пары (units, scale) в ASCII-строку.

    Args:
        units: Значение в минимальных единицах
        scale: Число дробных цифр (0..MAX_SCALE)
        group_separator: Разделитель групп (None: без группировки)
        decimal_separator: Десятичный разделитель
        min_fraction_digits: Минимальная ширина дробной части; если меньше scale,
            используется scale (форматтер ничего не отбрасывает)

    Returns:
        ASCII-строка, например "1 234 567.89"

    Raises:
        ScaleOutOfRangeError: Если scale вне таблицы степеней
        InvalidArgumentError: Если разделитель не один ASCII-символ
            или min_fraction_digits < 0

    Examples:
        >>> format_units(123456789, 2)
        '1 234 567.89'
        >>> format_units(-12345, 0, decimal_separator=",")
        '-12 345'
        >>> format_units(5, 1, group_separator=None, min_fraction_digits=3)
        '0.500'
    """
    divisor = pow10(scale)
    _check_separator(decimal_separator, "decimal_separator")
    if group_separator is not None:
        _check_separator(group_separator, "group_separator")
    if min_fraction_digits is not None and min_fraction_digits < 0:
        raise InvalidArgumentError(
            f"min_fraction_digits must be non-negative, got {min_fraction_digits}"
        )

    magnitude = abs(units)
    int_part, frac_part = divmod(magnitude, divisor)

    fraction_width = max(scale, min_fraction_digits if min_fraction_digits is not None else scale)

    int_digits = str(int_part)
    if group_separator is not None and len(int_digits) > _GROUP_SIZE:
        int_digits = _group_digits(int_digits, group_separator)

    parts = ["-"] if units < 0 else []
    parts.append(int_digits)

    if fraction_width > 0:
        fraction = str(frac_part).rjust(scale, "0") if scale > 0 else ""
        parts.append(decimal_separator)
        parts.append(fraction.ljust(fraction_width, "0"))

    return "".join(parts)


def format_decimal(
    value: "DecimalValue",
    group_separator: str | None = " ",
    decimal_separator: str = ".",
    min_fraction_digits: int | None = None,
) -> str:
    """Форматирование DecimalValue (см. format_units)."""
    return format_units(
        value.units,
        value.scale,
        group_separator=group_separator,
        decimal_separator=decimal_separator,
        min_fraction_digits=min_fraction_digits,
    )


def format_with_options(value: "DecimalValue", options: FormatOptions) -> str:
    """Форматирование DecimalValue по готовому набору FormatOptions."""
    return format_decimal(
        value,
        group_separator=options.group_separator,
        decimal_separator=options.decimal_separator,
        min_fraction_digits=options.min_fraction_digits,
    )
