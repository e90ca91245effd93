"""
Core math modules

Точные целочисленные примитивы и кривая цены.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    UINT256_BITS,
    UINT256_MAX,
    checked_add,
    checked_mul,
    checked_sub,
    exact_div,
    is_uint256,
    validate_uint256,
)

# Bonding Curve
from src.core.math.bonding_curve import (
    buy_price,
    pool_balance,
    sell_price,
    unit_price,
    validate_slope,
)

__all__ = [
    # Numerical Safeguards — Domain
    "UINT256_BITS",
    "UINT256_MAX",
    "is_uint256",
    "validate_uint256",
    # Numerical Safeguards — Checked operations
    "checked_add",
    "checked_sub",
    "checked_mul",
    "exact_div",
    # Bonding Curve
    "buy_price",
    "sell_price",
    "pool_balance",
    "unit_price",
    "validate_slope",
]
