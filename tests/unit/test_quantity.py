"""
Тесты для торговых вычислений: лоты, тики, notional, VWAP, бюджет

Проверяет:
1. Округление количества и цены к шагу (FLOOR / CEIL / NEAREST)
2. Ограничение диапазоном
3. Notional и VWAP с банковским округлением
4. Корректировки цены в bps и в доле (включая отрицательные)
5. Максимальное количество под бюджет с комиссией и лотом
"""

import pytest

from decimath.core.domain import (
    DecimalValue,
    Fill,
    apply_bps,
    apply_ratio,
    clamp,
    clamp_quantity,
    max_buy_quantity,
    notional,
    round_price,
    round_quantity,
    round_to_lot,
    round_to_tick,
    vwap,
)
from decimath.core.errors import (
    DecimalOverflowError,
    InvalidArgumentError,
    ScaleMismatchError,
    ScaleOutOfRangeError,
)
from decimath.core.math import StepRounding


def dv(units: int, scale: int = 0) -> DecimalValue:
    return DecimalValue(units=units, scale=scale)


# =============================================================================
# LOT / TICK
# =============================================================================


class TestLotRounding:
    """Тесты округления количества к лоту"""

    @pytest.mark.parametrize(
        "quantity,lot,mode,expected",
        [
            (17, 10, StepRounding.FLOOR, 10),
            (-17, 10, StepRounding.FLOOR, -20),
            (17, 10, StepRounding.CEIL, 20),
            (-17, 10, StepRounding.CEIL, -10),
            (15, 10, StepRounding.NEAREST, 20),
            (25, 10, StepRounding.NEAREST, 20),
            (-15, 10, StepRounding.NEAREST, -20),
            (20, 10, StepRounding.CEIL, 20),
        ],
    )
    def test_round_quantity(self, quantity, lot, mode, expected) -> None:
        """Округление штук к лоту во всех режимах"""
        assert round_quantity(quantity, lot, mode) == expected

    def test_round_quantity_default_floor(self) -> None:
        """Режим по умолчанию: FLOOR"""
        assert round_quantity(99, 100) == 0

    def test_round_quantity_invalid_lot(self) -> None:
        """Размер лота должен быть положительным"""
        with pytest.raises(InvalidArgumentError):
            round_quantity(10, 0)

    def test_round_to_lot(self) -> None:
        """Десятичное количество к границе лота"""
        # 1.237 при лоте 0.005 → 1.235 (FLOOR) / 1.240 (CEIL)
        quantity = dv(1237, 3)
        assert round_to_lot(quantity, 5) == dv(1235, 3)
        assert round_to_lot(quantity, 5, StepRounding.CEIL) == dv(1240, 3)
        assert round_to_lot(quantity, 5).scale == 3

    def test_round_to_lot_invalid(self) -> None:
        """Неположительный лот отклоняется"""
        with pytest.raises(InvalidArgumentError):
            round_to_lot(dv(1), -1)


class TestTickRounding:
    """Тесты округления цены к тику"""

    @pytest.mark.parametrize(
        "units,tick,mode,expected",
        [
            (10_007, 5, StepRounding.FLOOR, 10_005),
            (10_007, 5, StepRounding.CEIL, 10_010),
            (10_007, 5, StepRounding.NEAREST, 10_005),
            (10_008, 5, StepRounding.NEAREST, 10_010),
            (-10_007, 5, StepRounding.FLOOR, -10_010),
            (10_050, 100, StepRounding.NEAREST, 10_000),  # 100.5 тиков → 100
            (10_150, 100, StepRounding.NEAREST, 10_200),  # 101.5 тиков → 102
        ],
    )
    def test_round_price(self, units, tick, mode, expected) -> None:
        """Округление цены к шагу"""
        result = round_price(dv(units, 2), tick, mode)
        assert result == dv(expected, 2)
        assert round_to_tick(dv(units, 2), tick, mode) == result

    def test_invalid_tick(self) -> None:
        """Неположительный шаг цены отклоняется"""
        with pytest.raises(InvalidArgumentError):
            round_price(dv(100, 2), 0, StepRounding.FLOOR)


class TestClamp:
    """Тесты ограничения диапазоном"""

    def test_clamp_quantity(self) -> None:
        """Целое количество ограничивается диапазоном"""
        assert clamp_quantity(5, 1, 10) == 5
        assert clamp_quantity(-5, 1, 10) == 1
        assert clamp_quantity(50, 1, 10) == 10

    def test_clamp_quantity_invalid_bounds(self) -> None:
        """min > max отклоняется"""
        with pytest.raises(InvalidArgumentError, match="Invalid bounds"):
            clamp_quantity(5, 10, 1)

    def test_clamp(self) -> None:
        """Десятичное количество ограничивается диапазоном"""
        low, high = dv(100, 2), dv(500, 2)
        assert clamp(dv(300, 2), low, high) == dv(300, 2)
        assert clamp(dv(50, 2), low, high) is low
        assert clamp(dv(900, 2), low, high) is high

    def test_clamp_scale_mismatch(self) -> None:
        """Разные scale границ и количества отклоняются"""
        with pytest.raises(ScaleMismatchError):
            clamp(dv(3, 1), dv(100, 2), dv(500, 2))

    def test_clamp_invalid_bounds(self) -> None:
        """min > max отклоняется"""
        with pytest.raises(InvalidArgumentError, match="Invalid bounds"):
            clamp(dv(3, 2), dv(500, 2), dv(100, 2))


# =============================================================================
# NOTIONAL / VWAP
# =============================================================================


class TestNotional:
    """Тесты notional = price × quantity"""

    def test_notional(self) -> None:
        """Объём: цена × количество"""
        # 100.50 × 1.5 = 150.75
        assert notional(dv(10_050, 2), dv(15, 1)) == dv(15_075, 2)

    def test_notional_rounds_bankers(self) -> None:
        """Ничья в объёме округляется к чётному"""
        # 0.05 × 0.5 = 0.025 → 0.02
        assert notional(dv(5, 2), dv(5, 1)) == dv(2, 2)
        # 0.15 × 0.5 = 0.075 → 0.08
        assert notional(dv(15, 2), dv(5, 1)) == dv(8, 2)

    def test_notional_negative_quantity(self) -> None:
        """Отрицательное количество даёт отрицательный объём"""
        assert notional(dv(5, 2), dv(-5, 1)) == dv(-2, 2)
        assert notional(dv(10_050, 2), dv(-15, 1)) == dv(-15_075, 2)

    def test_notional_keeps_price_scale(self) -> None:
        """Результат в scale цены"""
        assert notional(dv(12_345, 3), dv(2)).scale == 3


class TestVwap:
    """Тесты VWAP"""

    def test_vwap(self) -> None:
        """VWAP по нескольким исполнениям"""
        fills = [
            Fill(quantity=dv(10, 1), price=dv(10_000, 2)),  # 1.0 @ 100.00
            Fill(quantity=dv(30, 1), price=dv(10_400, 2)),  # 3.0 @ 104.00
        ]
        # (100 + 312) / 4 = 103.00
        assert vwap(fills) == dv(10_300, 2)

    def test_vwap_single_fill(self) -> None:
        """Одно исполнение: VWAP равен цене"""
        assert vwap([Fill(dv(7, 2), dv(12_300, 2))]) == dv(12_300, 2)

    def test_vwap_rounds_bankers(self) -> None:
        """Ничья в VWAP округляется к чётному"""
        fills = [Fill(dv(1), dv(100, 2)), Fill(dv(1), dv(101, 2))]
        # (1.00 + 1.01) / 2 = 1.005 → 1.00
        assert vwap(fills) == dv(100, 2)

    def test_vwap_empty(self) -> None:
        """Пустой список исполнений отклоняется"""
        with pytest.raises(InvalidArgumentError, match="non-empty"):
            vwap([])

    def test_vwap_price_scale_mismatch(self) -> None:
        """Разные scale цен отклоняются"""
        fills = [Fill(dv(1), dv(100, 2)), Fill(dv(1), dv(10, 1))]
        with pytest.raises(ScaleMismatchError, match="Price scale mismatch"):
            vwap(fills)

    def test_vwap_quantity_scale_mismatch(self) -> None:
        """Разные scale количеств отклоняются"""
        fills = [Fill(dv(1), dv(100, 2)), Fill(dv(10, 1), dv(100, 2))]
        with pytest.raises(ScaleMismatchError, match="Quantity scale mismatch"):
            vwap(fills)

    def test_vwap_zero_total_quantity(self) -> None:
        """Нулевое суммарное количество отклоняется"""
        fills = [Fill(dv(1), dv(100, 2)), Fill(dv(-1), dv(100, 2))]
        with pytest.raises(InvalidArgumentError, match="must not be zero"):
            vwap(fills)


# =============================================================================
# ADJUSTMENTS
# =============================================================================


class TestAdjustments:
    """Тесты корректировок цены"""

    def test_apply_bps(self) -> None:
        """Корректировка цены в basis points"""
        # 100.00 × (1 + 15/10000) = 100.15
        assert apply_bps(dv(10_000, 2), 15) == dv(10_015, 2)
        # 100.00 × (1 - 25/10000) = 99.75
        assert apply_bps(dv(10_000, 2), -25) == dv(9_975, 2)

    def test_apply_bps_zero(self) -> None:
        """Ноль bps не меняет цену"""
        assert apply_bps(dv(12_345, 2), 0) == dv(12_345, 2)

    def test_apply_bps_below_minus_100_percent(self) -> None:
        """Корректировка ниже -100% даёт отрицательную цену"""
        # 100.00 × (1 - 2) = -100.00
        assert apply_bps(dv(10_000, 2), -20_000) == dv(-10_000, 2)

    def test_apply_ratio(self) -> None:
        """Корректировка цены на долю"""
        # 100.00 × (1 + 15/100) = 115.00
        assert apply_ratio(dv(10_000, 2), 15, 100) == dv(11_500, 2)
        # 100.00 × (1 - 1/3) = 66.67
        assert apply_ratio(dv(10_000, 2), -1, 3) == dv(6_667, 2)
        # 100.00 × (1 - 3/2) = -50.00
        assert apply_ratio(dv(10_000, 2), -3, 2) == dv(-5_000, 2)

    @pytest.mark.parametrize("denominator", [0, -100])
    def test_apply_ratio_invalid_denominator(self, denominator) -> None:
        """Знаменатель доли должен быть положительным"""
        with pytest.raises(InvalidArgumentError, match="pct_denominator"):
            apply_ratio(dv(100, 2), 1, denominator)


# =============================================================================
# BUDGET
# =============================================================================


class TestMaxBuyQuantity:
    """Тесты максимального количества под бюджет"""

    def test_exact_budget(self) -> None:
        """Бюджет делится на цену нацело"""
        # 1000.00 / 250.00 = 4.000
        result = max_buy_quantity(dv(100_000, 2), dv(25_000, 2), 3)
        assert result == dv(4_000, 3)
        assert result.scale == 3

    def test_floors_to_quantity_scale(self) -> None:
        """Количество округляется вниз к scale"""
        # 100.00 / 3.00 = 33.333.. → 33.33
        result = max_buy_quantity(dv(10_000, 2), dv(300, 2), 2)
        assert result == dv(3_333, 2)

    def test_never_exceeds_budget(self) -> None:
        """Стоимость найденного количества не превышает бюджет"""
        budget = dv(10_000, 2)
        price = dv(300, 2)
        quantity = max_buy_quantity(budget, price, 2)
        assert notional(price, quantity) <= budget

    def test_with_fee(self) -> None:
        """Комиссия увеличивает эффективную цену"""
        # Эффективная цена 100.00 × 1.01 = 101.00; 1000.00 / 101.00 = 9.90..
        result = max_buy_quantity(dv(100_000, 2), dv(10_000, 2), 2, fee_bps=100)
        assert result == dv(990, 2)

    def test_with_lot(self) -> None:
        """Количество округляется вниз к лоту"""
        # 33.33 при лоте 0.25 → 33.25
        result = max_buy_quantity(dv(10_000, 2), dv(300, 2), 2, lot_size=25)
        assert result == dv(3_325, 2)

    def test_zero_budget(self) -> None:
        """Нулевой бюджет даёт ноль"""
        assert max_buy_quantity(dv(0, 2), dv(300, 2), 4) == dv(0, 4)

    def test_mixed_scales(self) -> None:
        """Бюджет и цена с разными scale"""
        # Бюджет 10 (scale 0), цена 0.125 (scale 3) → 80 штук
        assert max_buy_quantity(dv(10), dv(125, 3), 0) == dv(80)

    def test_invalid_arguments(self) -> None:
        """Отрицательный бюджет, неположительная цена или лот отклоняются"""
        with pytest.raises(InvalidArgumentError, match="budget"):
            max_buy_quantity(dv(-1, 2), dv(100, 2), 2)
        with pytest.raises(InvalidArgumentError, match="unit_price"):
            max_buy_quantity(dv(100, 2), dv(0, 2), 2)
        with pytest.raises(InvalidArgumentError, match="lot_size"):
            max_buy_quantity(dv(100, 2), dv(100, 2), 2, lot_size=0)
        with pytest.raises(InvalidArgumentError, match="Effective price"):
            max_buy_quantity(dv(100, 2), dv(100, 2), 2, fee_bps=-10_000)

    def test_invalid_quantity_scale(self) -> None:
        """quantity_scale вне 0..18 отклоняется"""
        with pytest.raises(ScaleOutOfRangeError):
            max_buy_quantity(dv(100, 2), dv(100, 2), 19)

    def test_overflow(self) -> None:
        """Количество вне int64 детектируется"""
        with pytest.raises(DecimalOverflowError):
            max_buy_quantity(dv(10**15), dv(1, 18), 18)
