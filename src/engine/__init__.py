"""Engine — оркестрация операций выпуска / погашения по кривой.

- EngineConfig: параметры кривой, cooldown, политики refresh
- TransactionOrchestrator: buy / sell / transfer / transfer_from / approve
- build_orchestrator: сборка с in-memory ledger и банком native value
"""

from .clock import Clock, ManualClock, SystemClock
from .config import EngineConfig
from .orchestrator import OperationResult, TransactionOrchestrator, build_orchestrator

__all__ = [
    "Clock",
    "ManualClock",
    "SystemClock",
    "EngineConfig",
    "OperationResult",
    "TransactionOrchestrator",
    "build_orchestrator",
]
