"""Тесты для InMemoryLedger.

Coverage:
- mint / burn и инвариант supply == сумма балансов
- transfer / transfer_from с allowance
- Отказы с диагностикой (InsufficientBalance, InsufficientAllowance, InvalidAccount)
- Уведомления TransferEvent / ApprovalEvent
- Соответствие протоколу Ledger
- snapshot / restore
"""

import pytest

from src.core.domain.errors import (
    ArithmeticOverflow,
    InsufficientAllowance,
    InsufficientBalance,
    InvalidAccount,
    InvalidAmount,
)
from src.core.domain.event_log import EventLog
from src.core.domain.events import ApprovalEvent, TransferEvent
from src.core.domain.units import ZERO_ACCOUNT
from src.core.math.numerical_safeguards import UINT256_MAX
from src.ledger.ledger import InMemoryLedger, Ledger


@pytest.fixture
def ledger():
    return InMemoryLedger()


def _sum_of_balances(ledger: InMemoryLedger) -> int:
    return sum(ledger.balance_of(account) for account in ledger.accounts())


class TestProtocol:
    def test_in_memory_ledger_satisfies_protocol(self, ledger):
        assert isinstance(ledger, Ledger)

    def test_metadata(self, ledger):
        assert ledger.decimals == 0
        assert ledger.symbol == "BCT"


class TestMintBurn:
    def test_mint_increases_balance_and_supply(self, ledger):
        ledger.mint("alice", 10)
        ledger.mint("bob", 5)

        assert ledger.balance_of("alice") == 10
        assert ledger.balance_of("bob") == 5
        assert ledger.total_supply() == 15
        assert _sum_of_balances(ledger) == ledger.total_supply()

    def test_mint_emits_transfer_from_zero(self, ledger):
        ledger.mint("alice", 3)

        assert ledger.event_log.records == [
            TransferEvent(sender=ZERO_ACCOUNT, recipient="alice", amount=3)
        ]

    def test_burn_decreases_balance_and_supply(self, ledger):
        ledger.mint("alice", 10)
        ledger.burn("alice", 4)

        assert ledger.balance_of("alice") == 6
        assert ledger.total_supply() == 6
        assert ledger.event_log.records[-1] == TransferEvent(
            sender="alice", recipient=ZERO_ACCOUNT, amount=4
        )

    def test_burn_more_than_balance_fails(self, ledger):
        ledger.mint("alice", 2)

        with pytest.raises(InsufficientBalance) as exc_info:
            ledger.burn("alice", 3)

        assert exc_info.value.balance == 2
        assert exc_info.value.amount == 3
        assert ledger.balance_of("alice") == 2
        assert ledger.total_supply() == 2

    def test_account_record_kept_at_zero_balance(self, ledger):
        ledger.mint("alice", 2)
        ledger.burn("alice", 2)

        assert "alice" in ledger.accounts()
        assert ledger.balance_of("alice") == 0

    def test_mint_supply_overflow(self, ledger):
        ledger.mint("alice", UINT256_MAX)
        with pytest.raises(ArithmeticOverflow):
            ledger.mint("bob", 1)
        assert ledger.balance_of("bob") == 0

    def test_mint_to_zero_account_rejected(self, ledger):
        with pytest.raises(InvalidAccount):
            ledger.mint(ZERO_ACCOUNT, 1)

    def test_negative_amount_rejected(self, ledger):
        with pytest.raises(InvalidAmount):
            ledger.mint("alice", -1)


class TestTransfer:
    def test_transfer_moves_units(self, ledger):
        ledger.mint("alice", 10)

        assert ledger.transfer("alice", "bob", 4) is True
        assert ledger.balance_of("alice") == 6
        assert ledger.balance_of("bob") == 4
        assert ledger.total_supply() == 10
        assert ledger.event_log.records[-1] == TransferEvent(
            sender="alice", recipient="bob", amount=4
        )

    def test_self_transfer_keeps_balance(self, ledger):
        ledger.mint("alice", 10)
        ledger.transfer("alice", "alice", 7)
        assert ledger.balance_of("alice") == 10

    def test_transfer_insufficient_balance(self, ledger):
        ledger.mint("alice", 1)

        with pytest.raises(InsufficientBalance) as exc_info:
            ledger.transfer("alice", "bob", 2)

        assert exc_info.value.account == "alice"
        assert ledger.balance_of("bob") == 0

    @pytest.mark.parametrize("recipient", ["", ZERO_ACCOUNT, None])
    def test_invalid_recipient(self, ledger, recipient):
        ledger.mint("alice", 1)
        with pytest.raises(InvalidAccount):
            ledger.transfer("alice", recipient, 1)


class TestAllowances:
    def test_approve_sets_allowance(self, ledger):
        assert ledger.approve("alice", "carol", 5) is True
        assert ledger.allowance("alice", "carol") == 5
        assert ledger.event_log.records[-1] == ApprovalEvent(
            owner="alice", spender="carol", amount=5
        )

    def test_transfer_from_decrements_allowance(self, ledger):
        ledger.mint("alice", 10)
        ledger.approve("alice", "carol", 6)

        assert ledger.transfer_from("carol", "alice", "bob", 4) is True
        assert ledger.balance_of("bob") == 4
        assert ledger.allowance("alice", "carol") == 2

    def test_transfer_from_insufficient_allowance(self, ledger):
        ledger.mint("alice", 10)
        ledger.approve("alice", "carol", 1)

        with pytest.raises(InsufficientAllowance) as exc_info:
            ledger.transfer_from("carol", "alice", "bob", 2)

        assert exc_info.value.allowance == 1
        assert exc_info.value.amount == 2
        assert ledger.balance_of("alice") == 10

    def test_transfer_from_insufficient_balance_keeps_allowance(self, ledger):
        ledger.mint("alice", 1)
        ledger.approve("alice", "carol", 5)

        with pytest.raises(InsufficientBalance):
            ledger.transfer_from("carol", "alice", "bob", 2)

        assert ledger.allowance("alice", "carol") == 5

    def test_increase_and_decrease_allowance(self, ledger):
        ledger.approve("alice", "carol", 5)
        ledger.increase_allowance("alice", "carol", 3)
        assert ledger.allowance("alice", "carol") == 8

        ledger.decrease_allowance("alice", "carol", 6)
        assert ledger.allowance("alice", "carol") == 2

        with pytest.raises(InsufficientAllowance):
            ledger.decrease_allowance("alice", "carol", 3)


class TestSnapshot:
    def test_restore_reverts_state(self, ledger):
        ledger.mint("alice", 10)
        ledger.approve("alice", "carol", 3)
        snapshot = ledger.snapshot()

        ledger.mint("bob", 7)
        ledger.transfer("alice", "bob", 5)
        ledger.approve("alice", "carol", 9)
        ledger.restore(snapshot)

        assert ledger.balance_of("alice") == 10
        assert ledger.balance_of("bob") == 0
        assert ledger.total_supply() == 10
        assert ledger.allowance("alice", "carol") == 3

    def test_shared_event_log(self):
        log = EventLog()
        ledger = InMemoryLedger(event_log=log)
        ledger.mint("alice", 1)
        assert len(log) == 1
