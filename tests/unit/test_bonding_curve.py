"""
Тесты для Bonding Curve

Проверяемые инварианты:
1. buy_price(2, 0) == 3 * slope, sell_price(1, 2) == 2 * slope
2. Аддитивность buy_price
3. Обратимость sell(a, S) == buy(a, S - a)
4. Согласованность с pool_balance (интеграл)
5. Переполнение → ArithmeticOverflow, никогда wrap-around
6. sell_price при amount > supply → SellExceedsSupply
"""

import pytest

from src.core.domain.errors import ArithmeticOverflow, InvalidAmount, SellExceedsSupply
from src.core.domain.units import DEFAULT_SLOPE_WEI, to_wei
from src.core.math.bonding_curve import (
    buy_price,
    pool_balance,
    sell_price,
    unit_price,
    validate_slope,
)
from src.core.math.numerical_safeguards import UINT256_MAX

SLOPE = DEFAULT_SLOPE_WEI


# =============================================================================
# ТЕСТЫ: Опорные значения
# =============================================================================


class TestReferenceValues:
    """Опорные значения кривой."""

    def test_buy_two_from_zero_supply(self):
        """buy_price(2, 0) == 3 * slope (0.0003 ether при slope 0.0001)."""
        assert buy_price(2, 0, SLOPE) == 3 * SLOPE
        assert buy_price(2, 0, SLOPE) == to_wei("0.0003")

    def test_sell_one_after_buying_two(self):
        """После покупки 2 единиц sell_price(1, 2) == 2 * slope."""
        assert sell_price(1, 2, SLOPE) == 2 * SLOPE

    def test_first_unit_costs_one_slope(self):
        """Первая единица: интеграл от 0 до 1 равен slope."""
        assert buy_price(1, 0, SLOPE) == SLOPE

    def test_zero_amount(self):
        assert buy_price(0, 0, SLOPE) == 0
        assert buy_price(0, 1_000, SLOPE) == 0
        assert sell_price(0, 0, SLOPE) == 0
        assert sell_price(0, 1_000, SLOPE) == 0

    def test_default_slope_used(self):
        assert buy_price(2, 0) == 3 * DEFAULT_SLOPE_WEI

    def test_unit_price(self):
        assert unit_price(0, SLOPE) == SLOPE // 2
        assert unit_price(10, SLOPE) == 10 * SLOPE + SLOPE // 2

    def test_pool_balance(self):
        assert pool_balance(0, SLOPE) == 0
        assert pool_balance(2, SLOPE) == 3 * SLOPE
        assert pool_balance(10, SLOPE) == 55 * SLOPE


# =============================================================================
# ТЕСТЫ: Алгебраические свойства
# =============================================================================


class TestAlgebraicProperties:
    """Аддитивность, обратимость, связь с интегралом."""

    @pytest.mark.parametrize(
        "a,b,supply",
        [
            (0, 0, 0),
            (1, 1, 0),
            (3, 5, 0),
            (7, 2, 11),
            (100, 250, 1_000),
            (1, 999_999, 123_456),
        ],
    )
    def test_additivity(self, a, b, supply):
        """buy(a, S) + buy(b, S + a) == buy(a + b, S)."""
        assert buy_price(a, supply, SLOPE) + buy_price(b, supply + a, SLOPE) == buy_price(
            a + b, supply, SLOPE
        )

    @pytest.mark.parametrize(
        "amount,supply",
        [(0, 0), (1, 1), (1, 2), (5, 5), (3, 10), (250, 1_000), (1_000, 1_000)],
    )
    def test_sell_is_inverse_of_buy(self, amount, supply):
        """sell(a, S) == buy(a, S - a)."""
        assert sell_price(amount, supply, SLOPE) == buy_price(amount, supply - amount, SLOPE)

    @pytest.mark.parametrize("amount,supply", [(1, 0), (4, 6), (1_000, 50_000)])
    def test_buy_then_sell_roundtrip_is_feeless(self, amount, supply):
        """Покупка и немедленная продажа того же количества: payout == cost."""
        cost = buy_price(amount, supply, SLOPE)
        payout = sell_price(amount, supply + amount, SLOPE)
        assert payout == cost

    @pytest.mark.parametrize("amount,supply", [(1, 0), (2, 0), (9, 31), (500, 777)])
    def test_buy_price_is_integral_difference(self, amount, supply):
        expected = pool_balance(supply + amount, SLOPE) - pool_balance(supply, SLOPE)
        assert buy_price(amount, supply, SLOPE) == expected

    def test_price_is_monotonic_in_supply(self):
        """Та же покупка дороже при большем supply."""
        costs = [buy_price(10, supply, SLOPE) for supply in (0, 10, 100, 1_000)]
        assert costs == sorted(costs)
        assert len(set(costs)) == len(costs)

    def test_odd_amount_with_minimal_slope_is_exact(self):
        """slope = 2 (минимальный чётный): результат целый без потерь."""
        assert buy_price(3, 4, 2) == 3 * (2 * 4 + 1 + 3)
        assert sell_price(3, 4, 2) == 3 * (2 * 4 + 1 - 3)


# =============================================================================
# ТЕСТЫ: Отказы
# =============================================================================


class TestCurveFailures:
    def test_sell_exceeds_supply(self):
        with pytest.raises(SellExceedsSupply) as exc_info:
            sell_price(3, 2, SLOPE)

        assert exc_info.value.amount == 3
        assert exc_info.value.supply == 2

    def test_overflow_on_huge_amount(self):
        with pytest.raises(ArithmeticOverflow):
            buy_price(2**200, 0, SLOPE)

    def test_overflow_on_huge_supply(self):
        with pytest.raises(ArithmeticOverflow):
            buy_price(1, UINT256_MAX // 2 + 1, SLOPE)

    def test_overflow_in_pool_balance(self):
        with pytest.raises(ArithmeticOverflow):
            pool_balance(2**200, SLOPE)

    def test_negative_amount_rejected(self):
        with pytest.raises(InvalidAmount):
            buy_price(-1, 0, SLOPE)

    def test_float_supply_rejected(self):
        with pytest.raises(InvalidAmount):
            sell_price(1, 2.0, SLOPE)


class TestValidateSlope:
    def test_even_slope_accepted(self):
        assert validate_slope(2) == 2
        assert validate_slope(DEFAULT_SLOPE_WEI) == DEFAULT_SLOPE_WEI

    @pytest.mark.parametrize("slope", [0, -2, 3, 10**14 + 1, 2.0, True])
    def test_invalid_slope_rejected(self, slope):
        with pytest.raises(ValueError):
            validate_slope(slope)
