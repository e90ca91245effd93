"""CooldownGuard — временной гейт против sandwich-перепродажи

Хранит для каждого аккаунта время последнего события, увеличившего его
холдинги (mint через buy, transfer-in, transferFrom-in), и блокирует
исходящие операции текущего держателя (sell, transfer-out, transferFrom
с его аккаунта), пока не истечёт cooldown.

Гейт повышает стоимость front-running: атакующий, купивший перед жертвой,
не может продать или переслать полученные единицы в том же коротком окне.

Политика:
- Аккаунт без событий имеет timestamp 0 (epoch-zero) → первая проверка проходит при любом now
- Блокировка при now - last < duration; на границе (elapsed == duration) PASS
- refresh монотонный: last = max(last, now)
"""

import logging
from dataclasses import dataclass
from typing import Dict, Final

from src.core.domain.errors import CooldownActive

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# 5 минут
COOLDOWN_DURATION_SEC: Final[int] = 300

# Timestamp аккаунта, у которого ещё не было событий
EPOCH_ZERO: Final[int] = 0


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class CooldownCheckResult:
    """Результат проверки cooldown."""

    allowed: bool
    block_reason: str

    # Входные параметры для диагностики
    account: str
    now: int
    last_event_ts: int

    # Метрики
    elapsed: int
    required: int

    # Детали
    details: str

    @property
    def remaining(self) -> int:
        """Секунд до снятия блокировки (0 если разрешено)."""
        if self.allowed:
            return 0
        return self.required - self.elapsed


# =============================================================================
# GUARD
# =============================================================================


class CooldownGuard:
    """Временной гейт с собственным хранилищем account → last_event_ts.

    Порядок проверки:
    1. Чтение last_event_ts (EPOCH_ZERO по умолчанию)
    2. elapsed = max(now - last_event_ts, 0)
    3. Аккаунт с событиями и elapsed < duration → блокировка
    """

    def __init__(self, duration_sec: int = COOLDOWN_DURATION_SEC):
        """
        Args:
            duration_sec: длительность cooldown в секундах (>= 0)
        """
        if isinstance(duration_sec, bool) or not isinstance(duration_sec, int):
            raise ValueError(f"duration_sec must be int, got {duration_sec!r}")
        if duration_sec < 0:
            raise ValueError(f"duration_sec must be non-negative, got {duration_sec}")

        self.duration_sec = duration_sec
        self._last_event_ts: Dict[str, int] = {}

    def last_event_time(self, account: str) -> int:
        return self._last_event_ts.get(account, EPOCH_ZERO)

    def check(self, account: str, now: int) -> CooldownCheckResult:
        """Проверка, может ли account отчуждать холдинги в момент now.

        Args:
            account: проверяемый аккаунт (текущий держатель)
            now: текущее время (Unix seconds)

        Returns:
            CooldownCheckResult с решением о допуске
        """
        last_ts = self.last_event_time(account)
        # Часы позади сохранённого timestamp → elapsed = 0
        elapsed = max(now - last_ts, 0)
        has_history = account in self._last_event_ts

        if has_history and elapsed < self.duration_sec:
            return CooldownCheckResult(
                allowed=False,
                block_reason="cooldown_active",
                account=account,
                now=now,
                last_event_ts=last_ts,
                elapsed=elapsed,
                required=self.duration_sec,
                details=(
                    f"Cooldown active: elapsed={elapsed}s < required={self.duration_sec}s, "
                    f"remaining={self.duration_sec - elapsed}s"
                ),
            )

        return CooldownCheckResult(
            allowed=True,
            block_reason="",
            account=account,
            now=now,
            last_event_ts=last_ts,
            elapsed=elapsed,
            required=self.duration_sec,
            details=(
                f"PASS: elapsed={elapsed}s >= required={self.duration_sec}s"
                if has_history
                else "PASS: no recorded events"
            ),
        )

    def require(self, account: str, now: int) -> CooldownCheckResult:
        """Проверка с отказом через исключение.

        Raises:
            CooldownActive: если cooldown не истёк
        """
        result = self.check(account, now)
        if not result.allowed:
            raise CooldownActive(account, result.elapsed, result.required)
        return result

    def refresh(self, account: str, now: int) -> int:
        """Фиксация события, увеличившего холдинги account.

        Returns:
            Новое значение last_event_ts (не меньше предыдущего)
        """
        new_ts = max(self.last_event_time(account), now)
        self._last_event_ts[account] = new_ts
        logger.debug("Cooldown refreshed: account=%s last_event_ts=%d", account, new_ts)
        return new_ts

    def remaining(self, account: str, now: int) -> int:
        return self.check(account, now).remaining

    # -------------------------------------------------------------------------
    # Атомарность вызова
    # -------------------------------------------------------------------------

    def snapshot(self) -> Dict[str, int]:
        return dict(self._last_event_ts)

    def restore(self, snapshot: Dict[str, int]) -> None:
        self._last_event_ts = dict(snapshot)
