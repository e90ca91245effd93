"""
Bonding Curve — Линейная кривая цены от предложения

Чистые функции без состояния: (amount, supply) → стоимость / выплата в
минимальных единицах value (wei).

ФОРМУЛЫ:
    unit_price(x)     = slope * x + slope / 2
    pool_balance(x)   = slope * (x² + x) / 2            (первообразная)

    buy_price(a, S)   = pool_balance(S + a) - pool_balance(S)
                      = slope * a * (2S + 1 + a) / 2

    sell_price(a, S)  = pool_balance(S) - pool_balance(S - a)
                      = slope * a * (2S + 1 - a) / 2,   a <= S

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. slope — положительное чётное число минимальных единиц (деление на 2 точное)
2. Все промежуточные значения проверяются на переполнение uint256
3. sell_price при amount > supply отклоняется до вычисления (SellExceedsSupply)
4. Аддитивность: buy(a, S) + buy(b, S + a) == buy(a + b, S)
5. Обратимость: sell(a, S) == buy(a, S - a)
"""

from src.core.domain.errors import SellExceedsSupply
from src.core.domain.units import DEFAULT_SLOPE_WEI
from src.core.math.numerical_safeguards import (
    checked_add,
    checked_mul,
    checked_sub,
    exact_div,
    is_uint256,
    validate_uint256,
)


def validate_slope(slope: int) -> int:
    """
    Проверка slope как параметра конфигурации.

    Raises:
        ValueError: Если slope не положительное чётное uint256
    """
    if not is_uint256(slope) or slope <= 0:
        raise ValueError(f"slope must be a positive unsigned 256-bit integer, got {slope!r}")
    if slope % 2 != 0:
        raise ValueError(f"slope must be even so that slope / 2 is exact, got {slope}")
    return slope


def unit_price(position: int, slope: int = DEFAULT_SLOPE_WEI) -> int:
    """Маржинальная цена единицы на позиции position."""
    validate_uint256(position, "position")
    validate_slope(slope)
    return checked_add(checked_mul(slope, position), slope // 2)


def pool_balance(supply: int, slope: int = DEFAULT_SLOPE_WEI) -> int:
    """
    Интеграл кривой от 0 до supply — ожидаемый резерв при данном supply.

    Examples:
        >>> pool_balance(2, slope=2)
        6
    """
    validate_uint256(supply, "supply")
    validate_slope(slope)
    # x² + x всегда чётно
    area = checked_mul(supply, checked_add(supply, 1))
    return checked_mul(slope, exact_div(area, 2))


def buy_price(amount: int, supply: int, slope: int = DEFAULT_SLOPE_WEI) -> int:
    """
    Стоимость выпуска amount единиц при текущем supply.

    Args:
        amount: Количество покупаемых единиц
        supply: Текущее предложение (до mint)
        slope: Наклон кривой (wei на единицу)

    Returns:
        cost = slope * amount * (2 * supply + 1 + amount) / 2

    Raises:
        InvalidAmount: Если amount или supply вне uint256
        ArithmeticOverflow: Если промежуточное значение превышает uint256

    Examples:
        >>> buy_price(2, 0, slope=2)
        6
        >>> buy_price(0, 10, slope=2)
        0
    """
    validate_uint256(amount, "amount")
    validate_uint256(supply, "supply")
    validate_slope(slope)

    factor = checked_add(checked_add(checked_mul(2, supply), 1), amount)
    numerator = checked_mul(checked_mul(slope, amount), factor)
    return exact_div(numerator, 2)


def sell_price(amount: int, supply: int, slope: int = DEFAULT_SLOPE_WEI) -> int:
    """
    Выплата за погашение amount единиц при текущем supply.

    Зеркальное отражение buy_price (подстановка -amount с переменой знака).
    supply должен быть прочитан ДО burn.

    Raises:
        SellExceedsSupply: Если amount > supply
        InvalidAmount: Если amount или supply вне uint256
        ArithmeticOverflow: Если промежуточное значение превышает uint256

    Examples:
        >>> sell_price(1, 2, slope=2)
        4
    """
    validate_uint256(amount, "amount")
    validate_uint256(supply, "supply")
    validate_slope(slope)

    if amount > supply:
        raise SellExceedsSupply(amount, supply)

    factor = checked_sub(checked_add(checked_mul(2, supply), 1), amount)
    numerator = checked_mul(checked_mul(slope, amount), factor)
    return exact_div(numerator, 2)
