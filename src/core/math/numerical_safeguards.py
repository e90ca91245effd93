"""
Numerical Safeguards — Checked Unsigned Integer Math

Модуль обеспечивает точную целочисленную арифметику в домене uint256:
- Проверка домена (целое, не bool, 0 <= x <= UINT256_MAX)
- Checked сложение / вычитание / умножение без wrap-around
- Точное деление (остаток запрещён, усечение не допускается)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Переполнение никогда не маскируется (ArithmeticOverflow)
2. Отрицательный результат беззнаковой операции невозможен (ArithmeticUnderflow)
3. Деление никогда не усекает молча
4. Все операции детерминированы и воспроизводимы
"""

from typing import Any, Final

from src.core.domain.errors import ArithmeticOverflow, ArithmeticUnderflow, InvalidAmount

# =============================================================================
# ДОМЕН
# =============================================================================

# Ширина машинного слова для value и количеств
UINT256_BITS: Final[int] = 256

# Максимальное представимое значение
UINT256_MAX: Final[int] = (1 << UINT256_BITS) - 1


# =============================================================================
# ПРОВЕРКА ДОМЕНА
# =============================================================================


def is_uint256(value: Any) -> bool:
    """
    Проверка, что значение — целое в домене uint256.

    bool отклоняется явно: True/False не являются количествами.

    Examples:
        >>> is_uint256(0)
        True
        >>> is_uint256(-1)
        False
        >>> is_uint256(True)
        False
        >>> is_uint256(1.0)
        False
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return 0 <= value <= UINT256_MAX


def validate_uint256(value: Any, name: str) -> int:
    """
    Валидация входного значения.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        value без изменений

    Raises:
        InvalidAmount: Если value не целое или вне [0, UINT256_MAX]
    """
    if not is_uint256(value):
        raise InvalidAmount(name, value)
    return value


# =============================================================================
# CHECKED ОПЕРАЦИИ
# =============================================================================


def checked_add(a: int, b: int) -> int:
    """
    Сложение с проверкой переполнения.

    Raises:
        ArithmeticOverflow: Если a + b > UINT256_MAX
    """
    result = a + b
    if result > UINT256_MAX:
        raise ArithmeticOverflow("add", UINT256_MAX)
    return result


def checked_sub(a: int, b: int) -> int:
    """
    Вычитание без ухода в отрицательную область.

    Raises:
        ArithmeticUnderflow: Если b > a
    """
    if b > a:
        raise ArithmeticUnderflow("sub")
    return a - b


def checked_mul(a: int, b: int) -> int:
    """
    Умножение с проверкой переполнения.

    Examples:
        >>> checked_mul(2, 3)
        6
        >>> checked_mul(UINT256_MAX, 2)  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        ArithmeticOverflow: ...
    """
    result = a * b
    if result > UINT256_MAX:
        raise ArithmeticOverflow("mul", UINT256_MAX)
    return result


def exact_div(numerator: int, denominator: int) -> int:
    """
    Целочисленное деление без остатка.

    Args:
        numerator: Делимое (uint256)
        denominator: Делитель (> 0)

    Returns:
        numerator // denominator

    Raises:
        ValueError: Если denominator <= 0
        ArithmeticUnderflow: Если деление даёт остаток (потеря точности)
    """
    if denominator <= 0:
        raise ValueError(f"denominator must be positive, got {denominator}")

    quotient, remainder = divmod(numerator, denominator)
    if remainder != 0:
        raise ArithmeticUnderflow(f"exact_div (remainder {remainder})")
    return quotient
