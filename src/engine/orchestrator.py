"""TransactionOrchestrator — buy / sell / transfer / transfer_from

Композиция кривой цены, ledger, cooldown-гейта и банка native value в
публичные операции. Каждая операция — атомарная единица:

    Validate → Mutate → Settle → Notify

Любой отказ на любом этапе откатывает все изменения этого вызова (ledger,
cooldown, native value, журнал уведомлений) и возвращается как
OperationResult с типизированной ошибкой.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Цена вычисляется по supply ДО соответствующего mint / burn
2. Все изменения ledger и cooldown фиксируются ДО исходящего перевода value
   (повторный вход видит уже обновлённое состояние)
3. Резерв растёт ровно на cost при buy и уменьшается ровно на payout при sell
4. Уведомления доставляются подписчикам только после commit внешнего вызова

Политика cooldown:
- refresh: получатель при buy (mint), transfer, transfer_from
- refresh отправителя при transfer / transfer_from — EngineConfig.refresh_sender_on_transfer
- check: продавец при sell, отправитель при transfer, source при transfer_from
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple, Type

from src.core.contracts.validators import export_event_records
from src.core.domain.errors import (
    ChangeTransferFailed,
    EngineError,
    InsufficientBalance,
    InsufficientPayment,
    InvalidAccount,
    PayoutTransferFailed,
    SettlementFailed,
)
from src.core.domain.event_log import EventLog, EventSubscriber
from src.core.domain.events import BuyEvent, EngineEvent, SellEvent
from src.core.math.bonding_curve import buy_price, pool_balance, sell_price
from src.core.math.numerical_safeguards import validate_uint256
from src.engine.clock import Clock, SystemClock
from src.engine.config import EngineConfig
from src.gatekeeper.cooldown_guard import CooldownGuard
from src.ledger.ledger import InMemoryLedger, Ledger, validate_account
from src.ledger.value_bank import NativeValueBank

logger = logging.getLogger(__name__)


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class OperationResult:
    """Результат операции оркестратора."""

    operation: str
    success: bool

    # Типизированный отказ (None при успехе)
    error: Optional[EngineError]

    # Уведомление операции (BuyEvent / SellEvent), None для transfer-операций
    event: Optional[EngineEvent]

    # Детали
    details: str

    @property
    def block_reason(self) -> str:
        return self.error.code if self.error is not None else ""


@dataclass(frozen=True)
class _CallSnapshot:
    ledger: Any
    cooldown: Dict[str, int]
    bank: Dict[str, int]
    events: int


_Body = Callable[[], Tuple[Optional[EngineEvent], str]]


# =============================================================================
# ORCHESTRATOR
# =============================================================================


class TransactionOrchestrator:
    """Оркестратор выпуска / погашения по кривой с cooldown-гейтом.

    Не хранит состояние аккаунтов: балансы принадлежат ledger, timestamps —
    CooldownGuard, native value — NativeValueBank.
    """

    def __init__(
        self,
        ledger: Ledger,
        guard: CooldownGuard,
        bank: NativeValueBank,
        config: Optional[EngineConfig] = None,
        clock: Optional[Clock] = None,
        event_log: Optional[EventLog] = None,
    ):
        """
        Args:
            ledger: учёт единиц (протокол Ledger)
            guard: cooldown-гейт
            bank: native value аккаунтов и резерва
            config: конфигурация (EngineConfig() по умолчанию)
            clock: источник времени (SystemClock по умолчанию)
            event_log: журнал уведомлений; по умолчанию журнал ledger, если он есть
        """
        self.config = config or EngineConfig()
        self.ledger = ledger
        self.guard = guard
        self.bank = bank
        self.clock = clock or SystemClock()

        if event_log is None:
            event_log = getattr(ledger, "event_log", None)
        if event_log is None:
            event_log = EventLog()
        self.event_log = event_log

        # Глубина вложенных (повторно вошедших) вызовов
        self._depth = 0

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    @property
    def reserve_account(self) -> str:
        return self.config.reserve_account

    @property
    def slope(self) -> int:
        return self.config.slope_wei

    def balance_of(self, account: str) -> int:
        return self.ledger.balance_of(account)

    def total_supply(self) -> int:
        return self.ledger.total_supply()

    def reserve(self) -> int:
        return self.bank.balance_of(self.reserve_account)

    def expected_reserve(self) -> int:
        """Интеграл кривой при текущем supply."""
        return pool_balance(self.total_supply(), self.slope)

    def reserve_invariant_holds(self) -> bool:
        """Резерв покрывает интеграл кривой (излишек от out-of-band инъекций допустим)."""
        return self.reserve() >= self.expected_reserve()

    def buy_quote(self, amount: int) -> int:
        """Стоимость покупки amount при текущем supply (без изменения состояния)."""
        return buy_price(amount, self.total_supply(), self.slope)

    def sell_quote(self, amount: int) -> int:
        """Выплата за продажу amount при текущем supply (без изменения состояния)."""
        return sell_price(amount, self.total_supply(), self.slope)

    def cooldown_remaining(self, account: str) -> int:
        return self.guard.remaining(account, self.clock.now())

    @property
    def events(self) -> List[EngineEvent]:
        return self.event_log.records

    def export_events(self) -> List[Dict[str, Any]]:
        """Журнал уведомлений в JSON-совместимом виде, проверенный по JSON Schema."""
        return export_event_records(self.event_log.records)

    def subscribe(self, subscriber: EventSubscriber) -> None:
        self.event_log.subscribe(subscriber)

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def buy(self, caller: str, amount: int, attached_value: int) -> OperationResult:
        """Выпуск amount единиц caller'у за attached_value.

        Порядок:
        1. attached_value поступает в резерв
        2. cost = buy_price(amount, supply) — до mint
        3. attached_value < cost → InsufficientPayment
        4. mint + refresh cooldown caller
        5. сдача change = attached_value - cost возвращается caller (если > 0)
        6. BuyEvent
        """

        def body() -> Tuple[Optional[EngineEvent], str]:
            self._require_participant(caller, "buyer")
            validate_uint256(amount, "amount")
            validate_uint256(attached_value, "attached_value")
            now = self.clock.now()

            self.bank.transfer(caller, self.reserve_account, attached_value)

            cost = buy_price(amount, self.ledger.total_supply(), self.slope)
            if attached_value < cost:
                raise InsufficientPayment(attached_value, cost)

            self.ledger.mint(caller, amount)
            self.guard.refresh(caller, now)

            change = attached_value - cost
            if change > 0:
                self._settle(caller, change, ChangeTransferFailed)

            event = BuyEvent(
                buyer=caller,
                amount=amount,
                attached_value=attached_value,
                cost=cost,
                change=change,
            )
            self.event_log.record(event)
            return event, f"PASS: bought {amount} for {cost} wei, change {change} wei"

        result = self._execute("buy", body)
        if result.success:
            logger.info(
                "Buy committed: buyer=%s amount=%d cost=%d change=%d supply=%d",
                caller,
                amount,
                result.event.cost,
                result.event.change,
                self.total_supply(),
            )
        return result

    def sell(self, caller: str, amount: int) -> OperationResult:
        """Погашение amount единиц caller'а с выплатой из резерва.

        Порядок:
        1. cooldown caller → CooldownActive
        2. баланс caller >= amount → InsufficientBalance
        3. payout = sell_price(amount, supply) — до burn
        4. burn
        5. выплата payout caller (если > 0)
        6. SellEvent
        """

        def body() -> Tuple[Optional[EngineEvent], str]:
            self._require_participant(caller, "seller")
            validate_uint256(amount, "amount")
            now = self.clock.now()

            self.guard.require(caller, now)

            balance = self.ledger.balance_of(caller)
            if amount > balance:
                raise InsufficientBalance(caller, balance, amount)

            payout = sell_price(amount, self.ledger.total_supply(), self.slope)

            self.ledger.burn(caller, amount)

            if payout > 0:
                self._settle(caller, payout, PayoutTransferFailed)

            event = SellEvent(seller=caller, amount=amount, payout=payout)
            self.event_log.record(event)
            return event, f"PASS: sold {amount} for {payout} wei"

        result = self._execute("sell", body)
        if result.success:
            logger.info(
                "Sell committed: seller=%s amount=%d payout=%d supply=%d",
                caller,
                amount,
                result.event.payout,
                self.total_supply(),
            )
        return result

    def transfer(self, caller: str, recipient: str, amount: int) -> OperationResult:
        """Перемещение единиц caller → recipient.

        Cooldown проверяется у отправителя (текущего держателя), refresh —
        у получателя и, по политике, у отправителя.
        """

        def body() -> Tuple[Optional[EngineEvent], str]:
            validate_account(caller, "sender")
            now = self.clock.now()

            self.guard.require(caller, now)
            self.ledger.transfer(caller, recipient, amount)

            self.guard.refresh(recipient, now)
            if self.config.refresh_sender_on_transfer:
                self.guard.refresh(caller, now)

            return None, f"PASS: transferred {amount} from {caller} to {recipient}"

        return self._execute("transfer", body)

    def transfer_from(
        self, spender: str, source: str, recipient: str, amount: int
    ) -> OperationResult:
        """Перемещение source → recipient от имени spender (с уменьшением allowance).

        Cooldown проверяется у source, refresh — у recipient и, по политике, у source.
        """

        def body() -> Tuple[Optional[EngineEvent], str]:
            validate_account(source, "source")
            now = self.clock.now()

            self.guard.require(source, now)
            self.ledger.transfer_from(spender, source, recipient, amount)

            self.guard.refresh(recipient, now)
            if self.config.refresh_sender_on_transfer:
                self.guard.refresh(source, now)

            return None, (
                f"PASS: {spender} transferred {amount} from {source} to {recipient}"
            )

        return self._execute("transfer_from", body)

    def approve(self, owner: str, spender: str, amount: int) -> OperationResult:
        """Установка allowance; с cooldown не взаимодействует."""

        def body() -> Tuple[Optional[EngineEvent], str]:
            self.ledger.approve(owner, spender, amount)
            return None, f"PASS: {owner} approved {spender} for {amount}"

        return self._execute("approve", body)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _require_participant(self, account: str, role: str) -> None:
        validate_account(account, role)
        if account == self.reserve_account:
            raise InvalidAccount(account, f"{role} cannot be the reserve account")

    def _settle(
        self, recipient: str, amount: int, failure: Type[SettlementFailed]
    ) -> None:
        # Передача управления недоверенному receiver: состояние уже зафиксировано
        if not self.bank.send(self.reserve_account, recipient, amount):
            raise failure(recipient, amount)

    def _execute(self, operation: str, body: _Body) -> OperationResult:
        snapshot = self._snapshot()
        self._depth += 1
        try:
            event, details = body()
        except EngineError as e:
            self._restore(snapshot)
            logger.warning("%s rejected [%s]: %s", operation, e.code, e)
            return OperationResult(
                operation=operation,
                success=False,
                error=e,
                event=None,
                details=str(e),
            )
        except Exception:
            self._restore(snapshot)
            raise
        finally:
            self._depth -= 1

        if self._depth == 0:
            self.event_log.publish_pending()

        return OperationResult(
            operation=operation,
            success=True,
            error=None,
            event=event,
            details=details,
        )

    def _snapshot(self) -> _CallSnapshot:
        return _CallSnapshot(
            ledger=self.ledger.snapshot(),
            cooldown=self.guard.snapshot(),
            bank=self.bank.snapshot(),
            events=self.event_log.snapshot(),
        )

    def _restore(self, snapshot: _CallSnapshot) -> None:
        self.ledger.restore(snapshot.ledger)
        self.guard.restore(snapshot.cooldown)
        self.bank.restore(snapshot.bank)
        self.event_log.restore(snapshot.events)


# =============================================================================
# FACTORY
# =============================================================================


def build_orchestrator(
    config: Optional[EngineConfig] = None,
    clock: Optional[Clock] = None,
) -> TransactionOrchestrator:
    """Сборка оркестратора с in-memory ledger, банком и общим журналом уведомлений."""
    config = config or EngineConfig()
    event_log = EventLog()
    ledger = InMemoryLedger(
        name=config.token_name,
        symbol=config.token_symbol,
        event_log=event_log,
    )
    return TransactionOrchestrator(
        ledger=ledger,
        guard=CooldownGuard(config.cooldown_duration_sec),
        bank=NativeValueBank(),
        config=config,
        clock=clock,
        event_log=event_log,
    )
