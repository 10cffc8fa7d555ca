"""
DecimalValue — Неизменяемое десятичное значение с фиксированной точкой

Значение = units / 10^scale, где:
- units: знаковый 64-битный integer (величина в минимальных единицах)
- scale: число подразумеваемых дробных цифр, 0..MAX_SCALE

Immutable Pydantic модель: каждая операция возвращает новый экземпляр.
Ноль не зависит от scale: 0 при любом scale: один и тот же ноль.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. scale всегда в 0..MAX_SCALE, units всегда в диапазоне int64
2. Понижение scale, деление и умножение на дробь: только через
   round_half_to_even (банковское округление)
3. Сравнение точное: оба операнда приводятся к max(scale) повышением
4. Сложение/вычитание сохраняют scale ЛЕВОГО операнда; правый операнд
   при более мелком scale молча округляется к scale левого
5. Переполнение детектируется до формирования результата
"""

from decimal import Decimal
import math
from typing import Any, Iterable

from pydantic import BaseModel, Field, SerializationInfo, model_serializer, model_validator

from decimath.core.codec.formatting import PLAIN, format_decimal, format_with_options
from decimath.core.codec.parsing import parse_decimal
from decimath.core.codec.wire import (
    decode_json,
    decode_json_array,
    decode_units_scale,
    encode_value,
    load_json,
)
from decimath.core.contracts.validators import DecimalValueValidator
from decimath.core.errors import (
    DecimalDecodeError,
    DecimalOverflowError,
    DivisionByZeroError,
    InvalidArgumentError,
    ScaleMismatchError,
    ScaleOutOfRangeError,
)
from decimath.core.math.int64 import (
    INT64_MAX,
    INT64_MIN,
    check_int64,
    checked_add,
    checked_mul,
    checked_neg,
    checked_sub,
)
from decimath.core.math.pow10 import MAX_SCALE, P10, is_valid_scale, pow10, scale_units
from decimath.core.math.rounding import divide_half_to_even


class DecimalValue(BaseModel):
    """
    Десятичное значение с фиксированной точкой.

    Создание:
        DecimalValue(units=12345, scale=2)        # 123.45
        DecimalValue.parse("123.45")              # None при ошибке разбора
        DecimalValue.from_float(123.45, scale=2)  # банковское округление
        DecimalValue.from_decimal(Decimal("123.45"))
        DecimalValue.model_validate({"value": "123.45"})  # google.type.Decimal

    Immutable модель (frozen=True); операции возвращают новые экземпляры.
    """

    units: int = Field(
        ...,
        strict=True,
        ge=INT64_MIN,
        le=INT64_MAX,
        description="Величина в минимальных единицах (знаковый int64)",
    )
    scale: int = Field(
        0,
        strict=True,
        ge=0,
        le=MAX_SCALE,
        description="Число подразумеваемых дробных цифр",
    )

    model_config = {"frozen": True}  # Immutable

    # =========================================================================
    # DECODE / ENCODE
    # =========================================================================

    @model_validator(mode="before")
    @classmethod
    def decode_external(cls, data: Any) -> Any:
        """
        Декодирование внешних представлений.

        Структурная форма {"units", "scale"} и готовые экземпляры проходят
        без изменений; остальное (число, строка, google.type.Decimal)
        декодируется по фиксированному порядку попыток.
        """
        if isinstance(data, DecimalValue):
            return data
        if isinstance(data, dict) and "value" not in data:
            return data
        units, scale = decode_units_scale(data)
        return {"units": units, "scale": scale}

    @model_serializer(mode="plain")
    def serialize(self, info: SerializationInfo) -> Any:
        """JSON: число (float); python-режим: точный Decimal."""
        if info.mode_is_json():
            return encode_value(self)
        return self.to_decimal()

    @classmethod
    def decode(cls, raw: Any) -> "DecimalValue":
        """
        Декодирование из Decimal / int / float / str / google.type.Decimal.

        Raises:
            DecimalDecodeError: Если ни одно представление не подошло
        """
        units, scale = decode_units_scale(raw)
        return cls(units=units, scale=scale)

    @classmethod
    def decode_json(cls, text: str | bytes) -> "DecimalValue":
        """Декодирование JSON-значения с точными числами."""
        units, scale = decode_json(text)
        return cls(units=units, scale=scale)

    @classmethod
    def decode_json_array(cls, text: str | bytes) -> list["DecimalValue"]:
        return [cls(units=units, scale=scale) for units, scale in decode_json_array(text)]

    @classmethod
    def model_validate_json(
        cls,
        json_data: str | bytes | bytearray,
        *,
        strict: bool | None = None,
        context: Any | None = None,
        **kwargs: Any,
    ) -> "DecimalValue":
        """
        Валидация JSON без потери точности.

        JSON-числа разбираются как Decimal (load_json), а не как float
        pydantic-core, затем данные проходят обычный model_validate.

        Raises:
            DecimalDecodeError: Если текст не является валидным JSON
            ValidationError: Если значение не декодируется
        """
        return cls.model_validate(load_json(json_data), strict=strict, context=context, **kwargs)

    @classmethod
    def from_dict(cls, data: Any) -> "DecimalValue":
        """
        Создание из структурной формы {"units": int, "scale": int}.

        Raises:
            DecimalDecodeError: Если данные нарушают контракт decimal_value
        """
        error = DecimalValueValidator().first_error(data)
        if error is not None:
            raise DecimalDecodeError(f"Invalid decimal value object: {error}")
        return cls(units=data["units"], scale=data["scale"])

    def to_dict(self) -> dict[str, int]:
        return {"units": self.units, "scale": self.scale}

    # =========================================================================
    # CONSTRUCTORS
    # =========================================================================

    @classmethod
    def zero(cls, scale: int = 0) -> "DecimalValue":
        return cls(units=0, scale=scale)

    @classmethod
    def parse(cls, text: str) -> "DecimalValue | None":
        """
        Разбор ASCII-строки (см. parse_decimal).

        Returns:
            DecimalValue или None если строка некорректна
        """
        parsed = parse_decimal(text)
        if parsed is None:
            return None
        return cls(units=parsed[0], scale=parsed[1])

    @classmethod
    def from_string(cls, text: str) -> "DecimalValue":
        """
        Разбор ASCII-строки с исключением вместо None.

        Raises:
            DecimalDecodeError: Если строка некорректна
        """
        value = cls.parse(text)
        if value is None:
            raise DecimalDecodeError(f"Malformed decimal string: {text!r}")
        return value

    @classmethod
    def from_float(cls, value: float, scale: int) -> "DecimalValue | None":
        """
        Конверсия float → DecimalValue с банковским округлением.

        Масштабирование и округление выполняются в домене float
        (round() в Python: round half to even).

        Args:
            value: Значение в основных единицах (например, 123.45)
            scale: Число дробных цифр (0..MAX_SCALE)

        Returns:
            DecimalValue или None для NaN/Inf и невалидного scale

        Raises:
            DecimalOverflowError: Если масштабированное значение вне int64
        """
        if not math.isfinite(value) or not is_valid_scale(scale):
            return None
        operation = f"from_float({value!r}, {scale})"
        scaled = value * P10[scale]
        if not math.isfinite(scaled):
            raise DecimalOverflowError(f"Overflow in {operation}")
        # round() возвращает int; -0.0 нормализуется в 0
        return cls(units=check_int64(round(scaled), operation), scale=scale)

    @classmethod
    def from_decimal(cls, value: Decimal, scale: int | None = None) -> "DecimalValue":
        """
        Конверсия decimal.Decimal → DecimalValue.

        Без scale используется естественный scale (-exponent для дробных,
        иначе 0). С явным scale значение пересчитывается: повышение точное,
        понижение: банковское округление.

        Raises:
            InvalidArgumentError: Для NaN/Inf
            ScaleOutOfRangeError: Если итоговый scale вне 0..MAX_SCALE
            DecimalOverflowError: Если units не помещаются в int64
        """
        if not value.is_finite():
            raise InvalidArgumentError(f"Decimal must be finite, got {value}")

        sign, digits, exponent = value.as_tuple()
        mantissa = int("".join(map(str, digits)) or "0")
        if sign:
            mantissa = -mantissa

        target = max(-exponent, 0) if scale is None else scale
        if not is_valid_scale(target):
            raise ScaleOutOfRangeError(f"scale must be 0 <= scale <= {MAX_SCALE}, got {target}")

        # units = mantissa * 10^(exponent + target)
        shift = exponent + target
        if mantissa == 0:
            units = 0
        elif shift > MAX_SCALE:
            raise DecimalOverflowError(f"Overflow in from_decimal: {value} at scale {target}")
        elif shift >= 0:
            units = mantissa * P10[shift]
        elif -shift > len(digits):
            units = 0
        else:
            units = divide_half_to_even(mantissa, 10**-shift)

        return cls(units=check_int64(units, f"from_decimal({value}, {target})"), scale=target)

    # =========================================================================
    # CONVERSIONS
    # =========================================================================

    def to_decimal(self) -> Decimal:
        """Точное представление в decimal.Decimal."""
        return Decimal(self.units).scaleb(-self.scale)

    def to_float(self) -> float:
        return self.units / P10[self.scale]

    def __float__(self) -> float:
        return self.to_float()

    # =========================================================================
    # RESCALE
    # =========================================================================

    def rescaled(self, new_scale: int) -> "DecimalValue":
        """
        Изменение scale.

        new_scale > scale: units * 10^Δ (точно)
        new_scale < scale: units / 10^Δ с банковским округлением
        new_scale == scale: возвращается тот же экземпляр

        Raises:
            ScaleOutOfRangeError: Если new_scale вне 0..MAX_SCALE
            DecimalOverflowError: При переполнении int64

        Examples:
            >>> DecimalValue(units=-125, scale=2).rescaled(1).units
            -12
        """
        if new_scale == self.scale:
            return self
        if not is_valid_scale(new_scale):
            raise ScaleOutOfRangeError(
                f"scale must be 0 <= scale <= {MAX_SCALE}, got {new_scale}"
            )
        return DecimalValue(units=scale_units(self.units, new_scale - self.scale), scale=new_scale)

    # =========================================================================
    # ARITHMETIC
    # =========================================================================

    def __add__(self, other: object) -> "DecimalValue":
        # scale результата = scale левого операнда
        if not isinstance(other, DecimalValue):
            return NotImplemented
        right = other.rescaled(self.scale)
        return DecimalValue(units=checked_add(self.units, right.units), scale=self.scale)

    def __sub__(self, other: object) -> "DecimalValue":
        if not isinstance(other, DecimalValue):
            return NotImplemented
        right = other.rescaled(self.scale)
        return DecimalValue(units=checked_sub(self.units, right.units), scale=self.scale)

    def __mul__(self, other: object) -> "DecimalValue":
        """
        Умножение на DecimalValue или int.

        DecimalValue: сырое произведение имеет scale = lhs.scale + rhs.scale,
        затем понижается до scale левого операнда (банковское округление).
        int: scale сохраняется, округление не требуется.
        """
        if isinstance(other, DecimalValue):
            raw = checked_mul(self.units, other.units)
            return DecimalValue(units=scale_units(raw, -other.scale), scale=self.scale)
        if isinstance(other, int) and not isinstance(other, bool):
            return DecimalValue(units=checked_mul(self.units, other), scale=self.scale)
        return NotImplemented

    def __rmul__(self, other: object) -> "DecimalValue":
        if isinstance(other, int) and not isinstance(other, bool):
            return self.__mul__(other)
        return NotImplemented

    def multiply_ratio(self, numerator: int, denominator: int) -> "DecimalValue":
        """
        Умножение на рациональный множитель numerator / denominator.

        Отрицательные коэффициенты выражаются вызывающим кодом через
        отрицание результата, а не внутри этого примитива.

        Raises:
            InvalidArgumentError: Если numerator < 0 или denominator <= 0
            DecimalOverflowError: При переполнении units * numerator

        Examples:
            >>> DecimalValue(units=105, scale=2).multiply_ratio(1, 2).units
            52
        """
        if numerator < 0:
            raise InvalidArgumentError(
                f"Numerator must be non-negative in multiply_ratio, got {numerator}"
            )
        if denominator <= 0:
            raise InvalidArgumentError(
                f"Denominator must be positive in multiply_ratio, got {denominator}"
            )
        product = checked_mul(self.units, numerator)
        return DecimalValue(units=divide_half_to_even(product, denominator), scale=self.scale)

    def __truediv__(self, other: object) -> "DecimalValue":
        """
        Деление на DecimalValue или int с сохранением scale левого операнда.

        Для DecimalValue scale делителя переносится в числитель:
        (lhs.units * 10^rhs.scale) / rhs.units, затем банковское округление.

        Raises:
            DivisionByZeroError: Если делитель равен нулю
        """
        if isinstance(other, DecimalValue):
            if other.units == 0:
                raise DivisionByZeroError(f"Division by zero: {self} / {other}")
            numerator = checked_mul(self.units, pow10(other.scale))
            quotient = divide_half_to_even(numerator, other.units)
        elif isinstance(other, int) and not isinstance(other, bool):
            if other == 0:
                raise DivisionByZeroError(f"Division by zero: {self} / 0")
            quotient = divide_half_to_even(self.units, other)
        else:
            return NotImplemented
        return DecimalValue(units=check_int64(quotient, f"divide: {self} / {other}"), scale=self.scale)

    def __neg__(self) -> "DecimalValue":
        return DecimalValue(units=checked_neg(self.units), scale=self.scale)

    def __abs__(self) -> "DecimalValue":
        if self.units >= 0:
            return self
        return -self

    @classmethod
    def sum(cls, values: Iterable["DecimalValue"], scale: int) -> "DecimalValue":
        """
        Сумма последовательности значений с одинаковым scale.

        Args:
            values: Значения (каждое обязано иметь scale == scale)
            scale: Ожидаемый общий scale

        Returns:
            Сумма с тем же scale (ноль для пустой последовательности)

        Raises:
            ScaleMismatchError: Если scale какого-либо элемента отличается
            DecimalOverflowError: При переполнении накопленной суммы
        """
        if not is_valid_scale(scale):
            raise ScaleOutOfRangeError(f"scale must be 0 <= scale <= {MAX_SCALE}, got {scale}")
        total = 0
        for value in values:
            if value.scale != scale:
                raise ScaleMismatchError(
                    f"Scale mismatch in sum: expected {scale}, got {value.scale}"
                )
            total = checked_add(total, value.units)
        return cls(units=total, scale=scale)

    # =========================================================================
    # ALLOCATION
    # =========================================================================

    def allocate_proportionally(self, weights: list[int]) -> list["DecimalValue"]:
        """Пропорциональное распределение (метод наибольшего остатка)."""
        from decimath.core.math.allocation import allocate_proportionally

        return allocate_proportionally(self, weights)

    def split_evenly(self, parts: int) -> list["DecimalValue"]:
        """Равное распределение на parts частей."""
        from decimath.core.math.allocation import split_evenly

        return split_evenly(self, parts)

    # =========================================================================
    # COMPARISON
    # =========================================================================

    def _aligned(self, other: "DecimalValue") -> tuple[int, int]:
        # Повышение scale точное; широкие int исключают переполнение
        if self.scale == other.scale:
            return self.units, other.units
        scale = max(self.scale, other.scale)
        return (
            self.units * P10[scale - self.scale],
            other.units * P10[scale - other.scale],
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DecimalValue):
            return NotImplemented
        left, right = self._aligned(other)
        return left == right

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, DecimalValue):
            return NotImplemented
        left, right = self._aligned(other)
        return left != right

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, DecimalValue):
            return NotImplemented
        left, right = self._aligned(other)
        return left < right

    def __le__(self, other: object) -> bool:
        if not isinstance(other, DecimalValue):
            return NotImplemented
        left, right = self._aligned(other)
        return left <= right

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, DecimalValue):
            return NotImplemented
        left, right = self._aligned(other)
        return left > right

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, DecimalValue):
            return NotImplemented
        left, right = self._aligned(other)
        return left >= right

    def __hash__(self) -> int:
        # Согласован с равенством через разные scale: хвостовые нули отбрасываются
        units, scale = self.units, self.scale
        while scale > 0 and units % 10 == 0:
            units //= 10
            scale -= 1
        return hash((units, scale))

    # =========================================================================
    # PREDICATES
    # =========================================================================

    @property
    def is_zero(self) -> bool:
        return self.units == 0

    @property
    def is_positive(self) -> bool:
        return self.units > 0

    @property
    def is_negative(self) -> bool:
        return self.units < 0

    @property
    def sign(self) -> int:
        """-1, 0 или +1."""
        return (self.units > 0) - (self.units < 0)

    def __bool__(self) -> bool:
        return self.units != 0

    # =========================================================================
    # FORMATTING
    # =========================================================================

    def format(
        self,
        group_separator: str | None = " ",
        decimal_separator: str = ".",
        min_fraction_digits: int | None = None,
    ) -> str:
        """
        ASCII-форматирование (например, "1 234 567.89").

        См. decimath.core.codec.formatting.format_units.
        """
        return format_decimal(
            self,
            group_separator=group_separator,
            decimal_separator=decimal_separator,
            min_fraction_digits=min_fraction_digits,
        )

    def __str__(self) -> str:
        return format_with_options(self, PLAIN)
