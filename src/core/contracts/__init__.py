"""
Contract Validation Module

Модуль для валидации JSON контрактов уведомлений движка.
"""

from .validators import (
    ContractValidator,
    SchemaLoader,
    export_event_records,
    get_validator,
    validate_approval_event,
    validate_buy_event,
    validate_event_record,
    validate_sell_event,
    validate_transfer_event,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    # Functions
    "get_validator",
    "export_event_records",
    "validate_event_record",
    "validate_buy_event",
    "validate_sell_event",
    "validate_transfer_event",
    "validate_approval_event",
]
