"""
Errors — Таксономия отказов движка

Каждый вид отказа — отдельный класс исключения с собственными диагностическими
полями (фактическое vs требуемое значение), чтобы вызывающая сторона могла
принять корректирующее решение без повторного чтения состояния.

Категории:
- VALIDATION: недостаточная оплата, баланс, allowance, некорректные входы
- TEMPORAL: cooldown ещё не истёк
- SETTLEMENT: исходящий перевод value (сдача / выплата) не прошёл
- ARITHMETIC: переполнение при вычислении кривой

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Любая ошибка прерывает операцию целиком (оркестратор откатывает снапшот)
2. Нет частичного commit, нет автоматического retry
"""

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Категория отказа."""

    VALIDATION = "VALIDATION"
    TEMPORAL = "TEMPORAL"
    SETTLEMENT = "SETTLEMENT"
    ARITHMETIC = "ARITHMETIC"


# =============================================================================
# BASE
# =============================================================================


class EngineError(Exception):
    """
    Базовый класс всех доменных отказов.

    Attributes:
        category: категория отказа (ErrorCategory)
        code: стабильный машинный код (используется как block_reason)
    """

    category: ErrorCategory = ErrorCategory.VALIDATION
    code: str = "engine_error"

    def payload(self) -> dict[str, Any]:
        """Диагностические поля отказа (без category/code)."""
        return {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category.value,
            "code": self.code,
            **self.payload(),
        }


# =============================================================================
# VALIDATION
# =============================================================================


class InvalidAmount(EngineError, ValueError):
    """Значение вне домена uint256 или не целое."""

    code = "invalid_amount"

    def __init__(self, name: str, value: Any):
        self.name = name
        self.value = value
        super().__init__(f"{name} must be an unsigned 256-bit integer, got {value!r}")

    def payload(self) -> dict[str, Any]:
        return {"name": self.name, "value": repr(self.value)}


class InvalidAccount(EngineError, ValueError):
    """Пустой идентификатор или zero account в недопустимой позиции."""

    code = "invalid_account"

    def __init__(self, account: Any, reason: str):
        self.account = account
        self.reason = reason
        super().__init__(f"Invalid account {account!r}: {reason}")

    def payload(self) -> dict[str, Any]:
        return {"account": repr(self.account), "reason": self.reason}


class InsufficientPayment(EngineError):
    """Приложенного value не хватает на покупку."""

    code = "insufficient_payment"

    def __init__(self, attached_value: int, cost: int):
        self.attached_value = attached_value
        self.cost = cost
        super().__init__(
            f"Insufficient payment: attached {attached_value}, required {cost}"
        )

    @property
    def shortfall(self) -> int:
        return self.cost - self.attached_value

    def payload(self) -> dict[str, Any]:
        return {"attached_value": self.attached_value, "cost": self.cost}


class InsufficientBalance(EngineError):
    """Баланс токенов меньше запрошенного количества."""

    code = "insufficient_balance"

    def __init__(self, account: str, balance: int, amount: int):
        self.account = account
        self.balance = balance
        self.amount = amount
        super().__init__(
            f"Insufficient balance for {account}: balance {balance}, requested {amount}"
        )

    def payload(self) -> dict[str, Any]:
        return {"account": self.account, "balance": self.balance, "amount": self.amount}


class InsufficientAllowance(EngineError):
    """Allowance spender'а меньше запрошенного количества."""

    code = "insufficient_allowance"

    def __init__(self, owner: str, spender: str, allowance: int, amount: int):
        self.owner = owner
        self.spender = spender
        self.allowance = allowance
        self.amount = amount
        super().__init__(
            f"Insufficient allowance {owner} -> {spender}: "
            f"allowance {allowance}, requested {amount}"
        )

    def payload(self) -> dict[str, Any]:
        return {
            "owner": self.owner,
            "spender": self.spender,
            "allowance": self.allowance,
            "amount": self.amount,
        }


class InsufficientNativeFunds(EngineError):
    """У отправителя недостаточно native value для приложения к вызову."""

    code = "insufficient_native_funds"

    def __init__(self, account: str, balance: int, amount: int):
        self.account = account
        self.balance = balance
        self.amount = amount
        super().__init__(
            f"Insufficient native funds for {account}: balance {balance}, required {amount}"
        )

    def payload(self) -> dict[str, Any]:
        return {"account": self.account, "balance": self.balance, "amount": self.amount}


class SellExceedsSupply(EngineError):
    """Запрос цены продажи для amount > supply."""

    code = "sell_exceeds_supply"

    def __init__(self, amount: int, supply: int):
        self.amount = amount
        self.supply = supply
        super().__init__(f"Sell amount {amount} exceeds supply {supply}")

    def payload(self) -> dict[str, Any]:
        return {"amount": self.amount, "supply": self.supply}


# =============================================================================
# TEMPORAL
# =============================================================================


class CooldownActive(EngineError):
    """С момента последнего поступления токенов прошло меньше cooldown."""

    category = ErrorCategory.TEMPORAL
    code = "cooldown_active"

    def __init__(self, account: str, elapsed: int, required: int):
        self.account = account
        self.elapsed = elapsed
        self.required = required
        super().__init__(
            f"Cooldown active for {account}: elapsed {elapsed}s, required {required}s"
        )

    @property
    def remaining(self) -> int:
        return max(self.required - self.elapsed, 0)

    def payload(self) -> dict[str, Any]:
        return {"account": self.account, "elapsed": self.elapsed, "required": self.required}


# =============================================================================
# SETTLEMENT
# =============================================================================


class SettlementFailed(EngineError):
    """Получатель отклонил исходящий перевод value."""

    category = ErrorCategory.SETTLEMENT
    code = "settlement_failed"

    def __init__(self, recipient: str, amount: int):
        self.recipient = recipient
        self.amount = amount
        super().__init__(f"{type(self).__name__}: {amount} to {recipient} rejected")

    def payload(self) -> dict[str, Any]:
        return {"recipient": self.recipient, "amount": self.amount}


class ChangeTransferFailed(SettlementFailed):
    code = "change_transfer_failed"


class PayoutTransferFailed(SettlementFailed):
    code = "payout_transfer_failed"


# =============================================================================
# ARITHMETIC
# =============================================================================


class ArithmeticOverflow(EngineError, ArithmeticError):
    """Результат операции превышает uint256."""

    category = ErrorCategory.ARITHMETIC
    code = "arithmetic_overflow"

    def __init__(self, operation: str, limit: int):
        self.operation = operation
        self.limit = limit
        super().__init__(f"Arithmetic overflow in {operation} (limit {limit})")

    def payload(self) -> dict[str, Any]:
        return {"operation": self.operation, "limit": self.limit}


class ArithmeticUnderflow(EngineError, ArithmeticError):
    """Результат беззнаковой операции меньше нуля или деление неточное."""

    category = ErrorCategory.ARITHMETIC
    code = "arithmetic_underflow"

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Arithmetic underflow in {operation}")

    def payload(self) -> dict[str, Any]:
        return {"operation": self.operation}
