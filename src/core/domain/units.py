"""
ValueUnits — Конверсия единиц native value

Единственный допустимый способ преобразований между:
- wei (минимальная неделимая единица value, int)
- ether (человекочитаемая единица, Decimal)

Токен, выпускаемый по кривой, неделим (TOKEN_DECIMALS = 0): количества —
целые числа единиц.

ЗАПРЕЩЕНО использовать float для value: только int (wei) и Decimal (ether).
"""

from decimal import Decimal, InvalidOperation, localcontext
from typing import Final, Union

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

WEI_PER_ETHER: Final[int] = 10**18

# Токен без дробления
TOKEN_DECIMALS: Final[int] = 0

# 0.0001 ether на единицу — чётное число wei
DEFAULT_SLOPE_WEI: Final[int] = 10**14

# Нулевой аккаунт: источник mint и приёмник burn в уведомлениях Transfer
ZERO_ACCOUNT: Final[str] = "0x0000000000000000000000000000000000000000"

# 78 цифр покрывают UINT256_MAX с запасом
_CONVERSION_PRECISION: Final[int] = 100


EtherLike = Union[Decimal, str, int]


# =============================================================================
# КОНВЕРТЕРЫ
# =============================================================================


def to_wei(ether: EtherLike) -> int:
    """
    Конверсия: ether → wei (точная).

    Args:
        ether: Значение в ether (Decimal, строка или int). float не принимается.

    Returns:
        Количество wei

    Raises:
        ValueError: Если значение отрицательное, не число или даёт дробный wei

    Examples:
        >>> to_wei("0.0001")
        100000000000000
        >>> to_wei(1)
        1000000000000000000
    """
    if isinstance(ether, float) or isinstance(ether, bool):
        raise ValueError(f"ether must be Decimal, str or int, got {type(ether).__name__}")

    try:
        value = Decimal(ether)
    except InvalidOperation:
        raise ValueError(f"ether is not a number: {ether!r}")

    if not value.is_finite():
        raise ValueError(f"ether must be finite, got {ether!r}")
    if value < 0:
        raise ValueError(f"ether cannot be negative: {ether!r}")

    with localcontext() as ctx:
        ctx.prec = _CONVERSION_PRECISION
        wei = value * WEI_PER_ETHER
        if wei != wei.to_integral_value():
            raise ValueError(f"{ether!r} ether is not a whole number of wei")
        return int(wei)


def from_wei(wei: int) -> Decimal:
    """
    Конверсия: wei → ether.

    Examples:
        >>> from_wei(300000000000000)
        Decimal('0.0003')
    """
    if wei < 0:
        raise ValueError(f"wei cannot be negative: {wei}")

    with localcontext() as ctx:
        ctx.prec = _CONVERSION_PRECISION
        ether = Decimal(wei) / WEI_PER_ETHER
        if ether == ether.to_integral_value():
            return ether.quantize(Decimal(1))
        return ether.normalize()
