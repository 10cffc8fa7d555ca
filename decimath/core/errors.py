"""
Errors — Иерархия исключений decimath

Два класса отказов:

1. DecimalContractViolation: нарушение предусловия (ошибка программиста):
   деление на ноль, scale вне таблицы степеней, переполнение int64,
   неверные границы (min > max), отрицательные веса, parts <= 0.
   Операция прерывается немедленно; значение НИКОГДА не клампится.

2. DecimalDecodeError: восстановимая ошибка разбора/декодирования
   внешнего представления. Используется для валидации на границе системы.

КРИТИЧЕСКИЙ ИНВАРИАНТ:
    Ни одна операция не возвращает "правдоподобное, но неверное" значение —
    переполнение и невалидный scale детектируются ДО вычисления результата.
"""


class DecimalMathError(Exception):
    """Базовое исключение decimath."""


# =============================================================================
# FATAL: CONTRACT VIOLATIONS
# =============================================================================


class DecimalContractViolation(DecimalMathError, ValueError):
    """
    Нарушение контракта операции (невосстановимо на месте вызова).

    Вызывающий код не должен перехватывать это исключение для "починки"
    значения: оно сигнализирует об ошибке в инвариантах вызывающей стороны.
    """


class ScaleOutOfRangeError(DecimalContractViolation):
    """Scale или дельта scale вне диапазона таблицы степеней 10 (0..18)."""


class DecimalOverflowError(DecimalContractViolation, OverflowError):
    """Результат (или промежуточное произведение) не помещается в int64."""


class DivisionByZeroError(DecimalContractViolation, ZeroDivisionError):
    """Делитель равен нулю."""


class ScaleMismatchError(DecimalContractViolation):
    """Операнды обязаны иметь одинаковый scale, но он различается."""


class InvalidArgumentError(DecimalContractViolation):
    """Аргумент нарушает предусловие (веса, parts, границы, шаг, валюта)."""


# =============================================================================
# RECOVERABLE: DECODE FAILURES
# =============================================================================


class DecimalDecodeError(DecimalMathError, ValueError):
    """
    Ошибка декодирования внешнего представления ("corrupted data").

    Attributes:
        description: Человекочитаемое описание ошибки
        reasons: Причины отказа каждой попытки декодирования (в порядке попыток)
    """

    def __init__(self, description: str, reasons: tuple[str, ...] = ()):
        self.description = description
        self.reasons = reasons
        message = description
        if reasons:
            message = f"{description} ({'; '.join(reasons)})"
        super().__init__(message)
