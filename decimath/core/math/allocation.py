"""
Allocation — Распределение суммы без потери минимальных единиц

Методы:
- allocate_proportionally: пропорционально целым весам (метод наибольшего остатка)
- split_evenly: равными долями

ИНВАРИАНТ: сумма долей в точности равна исходной сумме, scale сохраняется.

Остаток распределяется по одной минимальной единице со знаком суммы:
для отрицательной суммы доли получают -1, симметрично положительному случаю.
"""

from decimath.core.domain.decimal_value import DecimalValue
from decimath.core.errors import InvalidArgumentError
from decimath.core.math.int64 import checked_add, checked_mul, trunc_divmod
from decimath.logging_config import get_logger

logger = get_logger(__name__)


def _distribute_leftover(shares: list[int], leftover: int, order: list[int]) -> None:
    step = 1 if leftover > 0 else -1
    for index in order[: abs(leftover)]:
        shares[index] += step


def allocate_proportionally(total: DecimalValue, weights: list[int]) -> list[DecimalValue]:
    """
    Пропорциональное распределение total по целым весам.

    Алгоритм (метод наибольшего остатка):
    1. Базовая доля i = trunc(total.units * w_i / Σw)
    2. Остаток total.units - Σ базовых долей раздаётся по одной единице
       долям с наибольшим дробным остатком; при равенстве остатков
       приоритет у меньшего индекса

    Нулевые веса получают ноль (кроме случая Σw == 0, когда
    выполняется равное распределение).

    Args:
        total: Распределяемая сумма
        weights: Неотрицательные целые веса (хотя бы один)

    Returns:
        Доли в порядке весов, каждая с total.scale

    Raises:
        InvalidArgumentError: Пустые веса или отрицательный вес
        DecimalOverflowError: Если total.units * w_i или Σw вне int64

    Examples:
        >>> [d.units for d in allocate_proportionally(DecimalValue(units=100), [2, 3, 5])]
        [20, 30, 50]
    """
    if not weights:
        raise InvalidArgumentError("weights must not be empty")

    weight_sum = 0
    for index, weight in enumerate(weights):
        if weight < 0:
            raise InvalidArgumentError(f"weights must be non-negative, got {weight} at index {index}")
        weight_sum = checked_add(weight_sum, weight)

    if weight_sum == 0:
        logger.debug("allocation_zero_weights_fallback", extra={"parts": len(weights)})
        return split_evenly(total, len(weights))

    shares: list[int] = []
    remainders: list[int] = []
    for weight in weights:
        share, remainder = trunc_divmod(checked_mul(total.units, weight), weight_sum)
        shares.append(share)
        # Общий знаменатель Σw: сравнение |r| эквивалентно сравнению дробей
        remainders.append(abs(remainder))

    leftover = total.units - sum(shares)
    if leftover:
        order = sorted(range(len(weights)), key=lambda i: (-remainders[i], i))
        _distribute_leftover(shares, leftover, order)

    return [DecimalValue(units=share, scale=total.scale) for share in shares]


def split_evenly(total: DecimalValue, parts: int) -> list[DecimalValue]:
    """
    Равное распределение total на parts частей.

    Остаток раздаётся по одной единице первым (младшим по индексу) частям.

    Raises:
        InvalidArgumentError: Если parts <= 0

    Examples:
        >>> [d.units for d in split_evenly(DecimalValue(units=10), 3)]
        [4, 3, 3]
    """
    if parts <= 0:
        raise InvalidArgumentError(f"parts must be positive, got {parts}")

    share, leftover = trunc_divmod(total.units, parts)
    shares = [share] * parts
    if leftover:
        _distribute_leftover(shares, leftover, list(range(parts)))

    return [DecimalValue(units=units, scale=total.scale) for units in shares]
