"""
NativeValueBank — Балансы native value и исходящие переводы

Хранит native value всех аккаунтов, включая резерв движка. Исходящий перевод
(send) — единственная точка, где управление передаётся недоверенному коду:
зарегистрированный у получателя receiver может отклонить перевод или
повторно войти в оркестратор.

Семантика:
- transfer: перевод без вызова receiver (приложение value к вызову buy)
- send: перевод + вызов receiver; при отказе (False или исключение)
  балансы банка возвращаются к состоянию до send и возвращается False
"""

import logging
from typing import Callable, Dict, Optional

from src.core.domain.errors import InsufficientNativeFunds, InvalidAccount
from src.core.math.numerical_safeguards import checked_add, validate_uint256

logger = logging.getLogger(__name__)


# Receiver(sender, amount) -> принят ли перевод
ValueReceiver = Callable[[str, int], bool]


class NativeValueBank:
    """In-memory хранилище native value (wei)."""

    def __init__(self):
        self._balances: Dict[str, int] = {}
        self._receivers: Dict[str, ValueReceiver] = {}

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def deposit(self, account: str, amount: int) -> None:
        """
        Зачисление value извне (фондирование аккаунта).

        Зачисление на резерв движка — out-of-band инъекция: резерв перестаёт
        совпадать с интегралом кривой.
        """
        if not isinstance(account, str) or not account:
            raise InvalidAccount(account, "deposit target must be a non-empty string")
        validate_uint256(amount, "amount")
        self._balances[account] = checked_add(self.balance_of(account), amount)

    def register_receiver(self, account: str, receiver: Optional[ValueReceiver]) -> None:
        """Установка (или снятие при None) обработчика входящих переводов."""
        if receiver is None:
            self._receivers.pop(account, None)
        else:
            self._receivers[account] = receiver

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        """
        Перевод без вызова receiver.

        Raises:
            InsufficientNativeFunds: у sender недостаточно value
        """
        validate_uint256(amount, "amount")
        balance = self.balance_of(sender)
        if amount > balance:
            raise InsufficientNativeFunds(sender, balance, amount)

        self._balances[sender] = balance - amount
        self._balances[recipient] = checked_add(self.balance_of(recipient), amount)

    def send(self, sender: str, recipient: str, amount: int) -> bool:
        """
        Перевод с уведомлением receiver получателя.

        Receiver вызывается после зачисления, поэтому повторный вход видит
        уже обновлённые балансы. При отказе балансы банка возвращаются к
        состоянию до send, включая изменения повторного входа.

        Returns:
            True если перевод принят, False если receiver отклонил или упал

        Raises:
            InsufficientNativeFunds: у sender недостаточно value
        """
        before = self.snapshot()
        self.transfer(sender, recipient, amount)

        receiver = self._receivers.get(recipient)
        if receiver is None:
            return True

        try:
            accepted = receiver(sender, amount)
        except Exception as e:
            logger.warning("Receiver %s raised on incoming %d: %s", recipient, amount, e)
            accepted = False

        if accepted:
            return True

        logger.warning("Receiver %s rejected incoming %d from %s", recipient, amount, sender)
        self.restore(before)
        return False

    # -------------------------------------------------------------------------
    # Атомарность вызова
    # -------------------------------------------------------------------------

    def snapshot(self) -> Dict[str, int]:
        return dict(self._balances)

    def restore(self, snapshot: Dict[str, int]) -> None:
        self._balances = dict(snapshot)
