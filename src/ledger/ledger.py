"""
Ledger — Контракт учёта единиц и эталонная in-memory реализация

Ledger — внешний коллаборатор движка: балансы, общее предложение, allowances
и стандартная семантика перемещения. Движок потребляет только протокол
Ledger; InMemoryLedger — эталонная реализация для запуска и тестов.

Публикуемые уведомления:
- TransferEvent (mint: ZERO_ACCOUNT → account, burn: account → ZERO_ACCOUNT)
- ApprovalEvent

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. total_supply == сумма всех балансов
2. Балансы никогда не отрицательны (burn/transfer проверяют баланс заранее)
3. Единицы неделимы (TOKEN_DECIMALS = 0)
4. Записи аккаунтов не удаляются, в том числе при нулевом балансе
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Protocol, Tuple, runtime_checkable

from src.core.domain.errors import (
    InsufficientAllowance,
    InsufficientBalance,
    InvalidAccount,
)
from src.core.domain.event_log import EventLog
from src.core.domain.events import ApprovalEvent, TransferEvent
from src.core.domain.units import TOKEN_DECIMALS, ZERO_ACCOUNT
from src.core.math.numerical_safeguards import checked_add, validate_uint256

logger = logging.getLogger(__name__)


# =============================================================================
# CAPABILITY CONTRACT
# =============================================================================


@runtime_checkable
class Ledger(Protocol):
    """Возможности ledger, которые потребляет оркестратор."""

    def mint(self, account: str, amount: int) -> None: ...

    def burn(self, account: str, amount: int) -> None: ...

    def balance_of(self, account: str) -> int: ...

    def total_supply(self) -> int: ...

    def transfer(self, sender: str, recipient: str, amount: int) -> bool: ...

    def transfer_from(
        self, spender: str, source: str, recipient: str, amount: int
    ) -> bool: ...

    def approve(self, owner: str, spender: str, amount: int) -> bool: ...

    def allowance(self, owner: str, spender: str) -> int: ...

    def snapshot(self) -> object: ...

    def restore(self, snapshot: object) -> None: ...


# =============================================================================
# SNAPSHOT
# =============================================================================


@dataclass(frozen=True)
class LedgerSnapshot:
    """Копия состояния InMemoryLedger для отката вызова."""

    balances: Dict[str, int] = field(default_factory=dict)
    allowances: Dict[Tuple[str, str], int] = field(default_factory=dict)
    total_supply: int = 0


# =============================================================================
# IN-MEMORY LEDGER
# =============================================================================


def validate_account(account: str, role: str) -> None:
    if not isinstance(account, str) or not account:
        raise InvalidAccount(account, f"{role} must be a non-empty string")
    if account == ZERO_ACCOUNT:
        raise InvalidAccount(account, f"{role} cannot be the zero account")


class InMemoryLedger:
    """
    Эталонный ledger неделимых единиц.

    Уведомления пишутся в event_log (общий с оркестратором, если передан).
    """

    decimals = TOKEN_DECIMALS

    def __init__(
        self,
        name: str = "Bonding Curve Token",
        symbol: str = "BCT",
        event_log: Optional[EventLog] = None,
    ):
        self.name = name
        self.symbol = symbol
        self.event_log = event_log if event_log is not None else EventLog()

        self._balances: Dict[str, int] = {}
        self._allowances: Dict[Tuple[str, str], int] = {}
        self._total_supply = 0

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def total_supply(self) -> int:
        return self._total_supply

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((owner, spender), 0)

    def accounts(self) -> list[str]:
        """Все аккаунты, когда-либо получавшие единицы."""
        return list(self._balances)

    # -------------------------------------------------------------------------
    # Supply
    # -------------------------------------------------------------------------

    def mint(self, account: str, amount: int) -> None:
        """
        Выпуск amount единиц на account.

        Raises:
            InvalidAccount: пустой или нулевой account
            ArithmeticOverflow: supply выходит за uint256
        """
        validate_account(account, "mint recipient")
        validate_uint256(amount, "amount")

        new_supply = checked_add(self._total_supply, amount)
        self._balances[account] = self.balance_of(account) + amount
        self._total_supply = new_supply

        self.event_log.record(TransferEvent(sender=ZERO_ACCOUNT, recipient=account, amount=amount))
        logger.debug("Minted %d to %s, supply=%d", amount, account, new_supply)

    def burn(self, account: str, amount: int) -> None:
        """
        Погашение amount единиц с account.

        Raises:
            InsufficientBalance: amount больше баланса
        """
        validate_account(account, "burn source")
        validate_uint256(amount, "amount")

        balance = self.balance_of(account)
        if amount > balance:
            raise InsufficientBalance(account, balance, amount)

        self._balances[account] = balance - amount
        self._total_supply -= amount

        self.event_log.record(TransferEvent(sender=account, recipient=ZERO_ACCOUNT, amount=amount))
        logger.debug("Burned %d from %s, supply=%d", amount, account, self._total_supply)

    # -------------------------------------------------------------------------
    # Transfers
    # -------------------------------------------------------------------------

    def transfer(self, sender: str, recipient: str, amount: int) -> bool:
        """
        Перемещение amount единиц sender → recipient.

        Raises:
            InvalidAccount: пустой или нулевой аккаунт
            InsufficientBalance: amount больше баланса sender
        """
        validate_account(sender, "sender")
        validate_account(recipient, "recipient")
        validate_uint256(amount, "amount")

        balance = self.balance_of(sender)
        if amount > balance:
            raise InsufficientBalance(sender, balance, amount)

        self._balances[sender] = balance - amount
        self._balances[recipient] = self.balance_of(recipient) + amount

        self.event_log.record(TransferEvent(sender=sender, recipient=recipient, amount=amount))
        return True

    def transfer_from(self, spender: str, source: str, recipient: str, amount: int) -> bool:
        """
        Перемещение source → recipient от имени spender с уменьшением allowance.

        Raises:
            InsufficientAllowance: allowance(source, spender) < amount
            InsufficientBalance: amount больше баланса source
        """
        validate_account(spender, "spender")
        validate_uint256(amount, "amount")

        current = self.allowance(source, spender)
        if amount > current:
            raise InsufficientAllowance(source, spender, current, amount)

        self.transfer(source, recipient, amount)
        self._allowances[(source, spender)] = current - amount
        return True

    # -------------------------------------------------------------------------
    # Allowances
    # -------------------------------------------------------------------------

    def approve(self, owner: str, spender: str, amount: int) -> bool:
        """Установка allowance owner → spender (перезапись)."""
        validate_account(owner, "owner")
        validate_account(spender, "spender")
        validate_uint256(amount, "amount")

        self._allowances[(owner, spender)] = amount
        self.event_log.record(ApprovalEvent(owner=owner, spender=spender, amount=amount))
        return True

    def increase_allowance(self, owner: str, spender: str, added: int) -> bool:
        validate_uint256(added, "added")
        return self.approve(owner, spender, checked_add(self.allowance(owner, spender), added))

    def decrease_allowance(self, owner: str, spender: str, subtracted: int) -> bool:
        """
        Raises:
            InsufficientAllowance: subtracted больше текущего allowance
        """
        validate_uint256(subtracted, "subtracted")
        current = self.allowance(owner, spender)
        if subtracted > current:
            raise InsufficientAllowance(owner, spender, current, subtracted)
        return self.approve(owner, spender, current - subtracted)

    # -------------------------------------------------------------------------
    # Атомарность вызова
    # -------------------------------------------------------------------------

    def snapshot(self) -> LedgerSnapshot:
        return LedgerSnapshot(
            balances=dict(self._balances),
            allowances=dict(self._allowances),
            total_supply=self._total_supply,
        )

    def restore(self, snapshot: LedgerSnapshot) -> None:
        self._balances = dict(snapshot.balances)
        self._allowances = dict(snapshot.allowances)
        self._total_supply = snapshot.total_supply
