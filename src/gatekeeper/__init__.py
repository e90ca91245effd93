"""Gatekeeper — временной гейт допуска исходящих операций.

- CooldownGuard: блокирует sell / transfer-out держателя, пока с последнего
  поступления единиц не прошёл cooldown
"""

from .cooldown_guard import (
    COOLDOWN_DURATION_SEC,
    EPOCH_ZERO,
    CooldownCheckResult,
    CooldownGuard,
)

__all__ = [
    "COOLDOWN_DURATION_SEC",
    "EPOCH_ZERO",
    "CooldownCheckResult",
    "CooldownGuard",
]
