"""
Sanity-тест для модуля ValueUnits

Проверяет:
1. Точность конверсий ether ↔ wei
2. Отказ от float и дробных wei
3. Константы кривой (чётный slope по умолчанию)
"""

from decimal import Decimal

import pytest

from src.core.domain.units import (
    DEFAULT_SLOPE_WEI,
    TOKEN_DECIMALS,
    WEI_PER_ETHER,
    from_wei,
    to_wei,
)


class TestConstants:
    def test_default_slope_is_ten_thousandth_ether(self) -> None:
        """slope по умолчанию — 0.0001 ether"""
        assert DEFAULT_SLOPE_WEI == WEI_PER_ETHER // 10_000
        assert DEFAULT_SLOPE_WEI % 2 == 0

    def test_token_is_indivisible(self) -> None:
        assert TOKEN_DECIMALS == 0


class TestToWei:
    """Тесты конверсии ether → wei"""

    def test_from_string(self) -> None:
        assert to_wei("0.0001") == 10**14
        assert to_wei("1.5") == 15 * 10**17

    def test_from_decimal_and_int(self) -> None:
        assert to_wei(Decimal("0.0003")) == 3 * 10**14
        assert to_wei(2) == 2 * WEI_PER_ETHER

    def test_smallest_unit(self) -> None:
        assert to_wei("0.000000000000000001") == 1

    def test_large_value_is_exact(self) -> None:
        """Большие значения без потери точности"""
        assert to_wei("123456789012345678901.123456789012345678") == (
            123456789012345678901123456789012345678
        )

    def test_float_rejected(self) -> None:
        with pytest.raises(ValueError):
            to_wei(0.1)

    def test_fractional_wei_rejected(self) -> None:
        with pytest.raises(ValueError):
            to_wei("0.0000000000000000001")

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValueError):
            to_wei("-1")

    def test_not_a_number_rejected(self) -> None:
        with pytest.raises(ValueError):
            to_wei("abc")
        with pytest.raises(ValueError):
            to_wei("Infinity")


class TestFromWei:
    def test_fraction(self) -> None:
        assert from_wei(3 * 10**14) == Decimal("0.0003")

    def test_whole_ether(self) -> None:
        assert from_wei(10 * WEI_PER_ETHER) == Decimal("10")
        assert str(from_wei(10 * WEI_PER_ETHER)) == "10"

    def test_roundtrip(self) -> None:
        """to_wei(from_wei(x)) == x"""
        for wei in (0, 1, 10**14, 987654321987654321987):
            assert to_wei(from_wei(wei)) == wei

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValueError):
            from_wei(-1)
