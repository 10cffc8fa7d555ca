"""
Wire — Структурное декодирование / кодирование десятичного значения

Декодирование выполняется явной последовательностью попыток в фиксированном
порядке; каждая попытка возвращает DecodeAttempt (успех или причина отказа),
первая успешная попытка прерывает перебор:

    1. EXACT_NUMBER  : decimal.Decimal, int, float (через кратчайший repr)
    2. GOOGLE_DECIMAL: объект google.type.Decimal {"value": "<string>"}
    3. STRING        : строка по канонической ASCII-грамматике

Если все попытки неуспешны → DecimalDecodeError("Expected decimal number").
Управление перебором не строится на исключениях.

Кодирование:
- encode_value: JSON-число (float), как plain literal без кавычек
- to_json_literal: точная текстовая форма числа
"""

import json
import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Final

from decimath.core.codec.formatting import PLAIN, format_with_options
from decimath.core.codec.parsing import parse_decimal
from decimath.core.contracts.validators import GoogleDecimalValidator
from decimath.core.errors import DecimalDecodeError
from decimath.core.math.int64 import fits_int64
from decimath.core.math.pow10 import MAX_SCALE, P10
from decimath.logging_config import get_logger

if TYPE_CHECKING:
    from decimath.core.domain.decimal_value import DecimalValue

logger = get_logger(__name__)


# =============================================================================
# RESULT
# =============================================================================


class DecodeStrategy(str, Enum):
    """Стратегия декодирования (в порядке приоритета)."""

    EXACT_NUMBER = "exact_number"
    GOOGLE_DECIMAL = "google_decimal"
    STRING = "string"


@dataclass(frozen=True)
class DecodeAttempt:
    """Результат одной попытки декодирования."""

    strategy: DecodeStrategy
    units: int | None = None
    scale: int | None = None
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.units is not None and self.scale is not None


def _success(strategy: DecodeStrategy, parsed: tuple[int, int]) -> DecodeAttempt:
    return DecodeAttempt(strategy=strategy, units=parsed[0], scale=parsed[1])


def _failure(strategy: DecodeStrategy, reason: str) -> DecodeAttempt:
    return DecodeAttempt(strategy=strategy, reason=reason)


# =============================================================================
# ATTEMPTS
# =============================================================================


def decimal_to_units_scale(value: Decimal) -> tuple[int, int] | None:
    """
    Точное отображение Decimal → (units, scale) с естественным scale.

    Естественный scale = -exponent при отрицательной экспоненте, иначе 0
    (положительная экспонента разворачивается в units).

    Returns:
        (units, scale) или None для NaN/Inf, scale > MAX_SCALE,
        либо units вне int64

    Examples:
        >>> decimal_to_units_scale(Decimal("5.12"))
        (512, 2)
        >>> decimal_to_units_scale(Decimal("1E+2"))
        (100, 0)
    """
    if not value.is_finite():
        return None

    sign, digits, exponent = value.as_tuple()
    mantissa = int("".join(map(str, digits))) if digits else 0
    if sign:
        mantissa = -mantissa

    if exponent >= 0:
        if mantissa == 0:
            units = 0
        elif exponent > MAX_SCALE:
            return None
        else:
            units = mantissa * P10[exponent]
        scale = 0
    else:
        units = mantissa
        scale = -exponent

    if scale > MAX_SCALE or not fits_int64(units):
        return None
    return units, scale


def attempt_exact_number(raw: Any) -> DecodeAttempt:
    """Попытка 1: точное числовое значение (Decimal / int / float)."""
    strategy = DecodeStrategy.EXACT_NUMBER

    if isinstance(raw, bool):
        return _failure(strategy, "bool is not a number")
    if isinstance(raw, int):
        if not fits_int64(raw):
            return _failure(strategy, f"integer {raw} does not fit int64")
        return _success(strategy, (raw, 0))
    if isinstance(raw, float):
        if not math.isfinite(raw):
            return _failure(strategy, f"non-finite float {raw!r}")
        # Кратчайший repr сохраняет цифры JSON-литерала ("5.12", "1e-06")
        raw = Decimal(repr(raw))
    if not isinstance(raw, Decimal):
        return _failure(strategy, f"not a number: {type(raw).__name__}")

    parsed = decimal_to_units_scale(raw)
    if parsed is None:
        return _failure(strategy, f"decimal {raw} is not representable")
    return _success(strategy, parsed)


_GOOGLE_DECIMAL_VALIDATOR: Final[GoogleDecimalValidator] = GoogleDecimalValidator()


def attempt_google_decimal(raw: Any) -> DecodeAttempt:
    """Попытка 2: объект google.type.Decimal {"value": "<string>"}."""
    strategy = DecodeStrategy.GOOGLE_DECIMAL

    if not isinstance(raw, dict):
        return _failure(strategy, f"not an object: {type(raw).__name__}")

    error = _GOOGLE_DECIMAL_VALIDATOR.first_error(raw)
    if error is not None:
        return _failure(strategy, f"schema violation: {error}")

    parsed = parse_decimal(raw["value"].strip())
    if parsed is None:
        return _failure(strategy, f"malformed decimal string {raw['value']!r}")
    return _success(strategy, parsed)


def attempt_string(raw: Any) -> DecodeAttempt:
    """Попытка 3: строка по канонической грамматике (края обрезаются)."""
    strategy = DecodeStrategy.STRING

    if not isinstance(raw, str):
        return _failure(strategy, f"not a string: {type(raw).__name__}")

    parsed = parse_decimal(raw.strip())
    if parsed is None:
        return _failure(strategy, f"malformed decimal string {raw!r}")
    return _success(strategy, parsed)


# Фиксированный порядок попыток
DECODE_ORDER: Final[tuple[tuple[DecodeStrategy, Callable[[Any], DecodeAttempt]], ...]] = (
    (DecodeStrategy.EXACT_NUMBER, attempt_exact_number),
    (DecodeStrategy.GOOGLE_DECIMAL, attempt_google_decimal),
    (DecodeStrategy.STRING, attempt_string),
)


# =============================================================================
# DECODE
# =============================================================================


def run_attempts(raw: Any) -> list[DecodeAttempt]:
    """
    Выполнение попыток в порядке DECODE_ORDER до первой успешной.

    Returns:
        Список выполненных попыток; последняя: успешная, если успех был
    """
    attempts: list[DecodeAttempt] = []
    for strategy, attempt in DECODE_ORDER:
        result = attempt(raw)
        attempts.append(result)
        if result.ok:
            break
        logger.debug(
            "decode_attempt_failed",
            extra={"attempt": strategy.value, "reason": result.reason},
        )
    return attempts


def decode_units_scale(raw: Any) -> tuple[int, int]:
    """
    Декодирование внешнего представления в (units, scale).

    Args:
        raw: Decimal, int, float, dict google.type.Decimal или str

    Returns:
        (units, scale)

    Raises:
        DecimalDecodeError: Если ни одна стратегия не подошла
    """
    attempts = run_attempts(raw)
    last = attempts[-1]
    if last.ok:
        return last.units, last.scale

    reasons = tuple(f"{a.strategy.value}: {a.reason}" for a in attempts)
    logger.warning("decode_failed", extra={"input_type": type(raw).__name__})
    raise DecimalDecodeError("Expected decimal number", reasons)


def load_json(text: str | bytes) -> Any:
    """
    Разбор JSON-документа с точными числами (float → Decimal).

    Raises:
        DecimalDecodeError: Если текст не является валидным JSON
    """
    try:
        return json.loads(text, parse_float=Decimal)
    except json.JSONDecodeError as e:
        raise DecimalDecodeError(f"Invalid JSON: {e.msg}") from e


def decode_json(text: str | bytes) -> tuple[int, int]:
    """Декодирование одиночного JSON-значения (число, строка или объект)."""
    return decode_units_scale(load_json(text))


def decode_json_array(text: str | bytes) -> list[tuple[int, int]]:
    """
    Декодирование JSON-массива значений.

    Raises:
        DecimalDecodeError: Если документ не массив или элемент не декодируется
    """
    document = load_json(text)
    if not isinstance(document, list):
        raise DecimalDecodeError("Expected JSON array of decimal numbers")
    return [decode_units_scale(item) for item in document]


# =============================================================================
# ENCODE
# =============================================================================


def encode_value(value: "DecimalValue") -> float:
    """
    Кодирование в JSON-число (float).

    Точность ограничена IEEE-754 double; для точной формы: to_json_literal.
    """
    return value.units / 10**value.scale


def to_json_literal(value: "DecimalValue") -> str:
    """Точный JSON-литерал числа (каноническая форма, без кавычек)."""
    return format_with_options(value, PLAIN)
