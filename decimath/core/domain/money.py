"""
Money — Денежная сумма в валюте с каноническим scale

Сумма при создании выравнивается к числу минимальных единиц валюты
(ISO 4217 для фиата, принятые минимальные единицы для криптовалют).
Неизвестная валюта получает scale DEFAULT_CURRENCY_SCALE.

Арифметика и сравнение допускаются только в пределах одной валюты.
Конверсия выполняется по рациональному курсу (quote за 1 base)
с банковским округлением на scale целевой валюты.
"""

from typing import Any, Final, Mapping

from pydantic import BaseModel, Field, model_validator

from decimath.core.codec.wire import load_json
from decimath.core.domain.decimal_value import DecimalValue
from decimath.core.errors import InvalidArgumentError
from decimath.logging_config import get_logger

logger = get_logger(__name__)


# =============================================================================
# CURRENCY SCALES
# =============================================================================

# Scale для валюты, отсутствующей в таблице
DEFAULT_CURRENCY_SCALE: Final[int] = 2

DEFAULT_MINOR_UNITS: Final[Mapping[str, int]] = {
    "USD": 2,
    "EUR": 2,
    "RUB": 2,
    "GBP": 2,
    "CHF": 2,
    "CNY": 2,
    "JPY": 0,
    "KRW": 0,
    "KWD": 3,
    "BHD": 3,
    "CLP": 0,
    # Криптовалюты
    "BTC": 8,  # satoshi
    "ETH": 18,  # wei
    "USDT": 6,
    "USDC": 6,
    "BNB": 18,
    "SOL": 9,  # lamport
    "XRP": 6,
    "ADA": 6,
    "DOGE": 8,
    "DOT": 10,
}


# =============================================================================
# MONEY MODEL
# =============================================================================


class Money(BaseModel):
    """
    Денежная сумма.

    Immutable модель (frozen=True). Код валюты хранится в верхнем регистре,
    amount.scale всегда равен Money.scale_for(currency).
    """

    amount: DecimalValue = Field(..., description="Сумма на scale валюты")
    currency: str = Field(..., min_length=1, description="Код валюты (например, 'USD')")

    model_config = {"frozen": True}  # Immutable

    @model_validator(mode="before")
    @classmethod
    def align_to_currency(cls, data: Any) -> Any:
        """Нормализация кода валюты и выравнивание суммы к её scale."""
        if not isinstance(data, dict):
            return data

        currency = data.get("currency")
        amount = data.get("amount")
        if not isinstance(currency, str) or amount is None:
            return data

        currency = currency.upper()
        if not isinstance(amount, DecimalValue):
            amount = DecimalValue.model_validate(amount)

        scale = cls.scale_for(currency)
        if amount.scale != scale:
            logger.debug(
                "money_rescaled",
                extra={"currency": currency, "from_scale": amount.scale, "to_scale": scale},
            )
            amount = amount.rescaled(scale)

        return {**data, "amount": amount, "currency": currency}

    @classmethod
    def model_validate_json(
        cls,
        json_data: str | bytes | bytearray,
        *,
        strict: bool | None = None,
        context: Any | None = None,
        **kwargs: Any,
    ) -> "Money":
        """Валидация JSON с точной суммой (числа разбираются как Decimal)."""
        return cls.model_validate(load_json(json_data), strict=strict, context=context, **kwargs)

    @staticmethod
    def scale_for(currency: str) -> int:
        """
        Число минимальных единиц валюты (регистр кода не важен).

        Returns:
            Scale валюты; DEFAULT_CURRENCY_SCALE для неизвестного кода
        """
        return DEFAULT_MINOR_UNITS.get(currency.upper(), DEFAULT_CURRENCY_SCALE)

    # =========================================================================
    # CONVERSION
    # =========================================================================

    def convert(self, quote_currency: str, numerator: int, denominator: int) -> "Money":
        """
        Конверсия в другую валюту по рациональному курсу numerator/denominator.

        Сумма сначала пересчитывается к scale целевой валюты, затем
        умножается на курс (банковское округление).

        Args:
            quote_currency: Код целевой валюты
            numerator: Числитель курса (>= 0)
            denominator: Знаменатель курса (> 0)

        Raises:
            InvalidArgumentError: Отрицательный числитель или denominator <= 0
            DecimalOverflowError: При переполнении

        Examples:
            >>> Money(amount=DecimalValue(units=1000, scale=2), currency="USD").convert(
            ...     "JPY", 15_012, 100).amount.units
            1501
        """
        base = self.amount.rescaled(self.scale_for(quote_currency))
        converted = base.multiply_ratio(numerator, denominator)
        return Money(amount=converted, currency=quote_currency)

    # =========================================================================
    # ARITHMETIC / COMPARISON
    # =========================================================================

    def _check_currency(self, other: "Money", operation: str) -> None:
        if other.currency != self.currency:
            raise InvalidArgumentError(
                f"Currency mismatch in {operation}: {self.currency} vs {other.currency}"
            )

    def __add__(self, other: object) -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        self._check_currency(other, "add")
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def __sub__(self, other: object) -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        self._check_currency(other, "subtract")
        return Money(amount=self.amount - other.amount, currency=self.currency)

    def __neg__(self) -> "Money":
        return Money(amount=-self.amount, currency=self.currency)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_currency(other, "compare")
        return self.amount < other.amount

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_currency(other, "compare")
        return self.amount <= other.amount

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_currency(other, "compare")
        return self.amount > other.amount

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_currency(other, "compare")
        return self.amount >= other.amount

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"
