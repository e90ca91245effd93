"""
Domain models and value objects.

Contains value units, the failure taxonomy and observer notifications.
"""

from src.core.domain.errors import (
    ArithmeticOverflow,
    ArithmeticUnderflow,
    ChangeTransferFailed,
    CooldownActive,
    EngineError,
    ErrorCategory,
    InsufficientAllowance,
    InsufficientBalance,
    InsufficientNativeFunds,
    InsufficientPayment,
    InvalidAccount,
    InvalidAmount,
    PayoutTransferFailed,
    SellExceedsSupply,
    SettlementFailed,
)
from src.core.domain.event_log import EventLog, EventSubscriber
from src.core.domain.events import (
    ApprovalEvent,
    BuyEvent,
    EngineEvent,
    EventType,
    SellEvent,
    TransferEvent,
)
from src.core.domain.units import (
    DEFAULT_SLOPE_WEI,
    TOKEN_DECIMALS,
    WEI_PER_ETHER,
    ZERO_ACCOUNT,
    from_wei,
    to_wei,
)

__all__ = [
    # Units module
    "DEFAULT_SLOPE_WEI",
    "TOKEN_DECIMALS",
    "WEI_PER_ETHER",
    "ZERO_ACCOUNT",
    "from_wei",
    "to_wei",
    # Errors
    "ErrorCategory",
    "EngineError",
    "InvalidAmount",
    "InvalidAccount",
    "InsufficientPayment",
    "InsufficientBalance",
    "InsufficientAllowance",
    "InsufficientNativeFunds",
    "SellExceedsSupply",
    "CooldownActive",
    "SettlementFailed",
    "ChangeTransferFailed",
    "PayoutTransferFailed",
    "ArithmeticOverflow",
    "ArithmeticUnderflow",
    # Events
    "EventLog",
    "EventSubscriber",
    "EventType",
    "BuyEvent",
    "SellEvent",
    "TransferEvent",
    "ApprovalEvent",
    "EngineEvent",
]
