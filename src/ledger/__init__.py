"""Ledger — внешние хранилища, которые координирует оркестратор.

- Ledger протокол + InMemoryLedger: балансы единиц, supply, allowances
- NativeValueBank: native value аккаунтов и резерва, исходящие переводы
"""

from .ledger import InMemoryLedger, Ledger, LedgerSnapshot
from .value_bank import NativeValueBank, ValueReceiver

__all__ = [
    "Ledger",
    "InMemoryLedger",
    "LedgerSnapshot",
    "NativeValueBank",
    "ValueReceiver",
]
