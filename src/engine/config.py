"""EngineConfig — параметры движка

Frozen dataclass с проверкой инвариантов при создании. Ошибки конфигурации
(нечётный slope, отрицательный cooldown) — ValueError до первого вызова.
"""

from dataclasses import dataclass

from src.core.domain.units import DEFAULT_SLOPE_WEI, ZERO_ACCOUNT
from src.core.math.bonding_curve import validate_slope
from src.gatekeeper.cooldown_guard import COOLDOWN_DURATION_SEC


@dataclass(frozen=True)
class EngineConfig:
    """Конфигурация движка.

    Параметры кривой, cooldown и политики refresh.
    """

    # Кривая: wei на единицу (0.0001 ether), чётное
    slope_wei: int = DEFAULT_SLOPE_WEI

    # Cooldown
    cooldown_duration_sec: int = COOLDOWN_DURATION_SEC

    # Обновлять ли timestamp отправителя при transfer/transfer_from
    refresh_sender_on_transfer: bool = True

    # Аккаунт, на котором NativeValueBank держит резерв
    reserve_account: str = "bonding-curve-reserve"

    # Метаданные токена
    token_name: str = "Bonding Curve Token"
    token_symbol: str = "BCT"

    def __post_init__(self):
        validate_slope(self.slope_wei)

        if isinstance(self.cooldown_duration_sec, bool) or not isinstance(
            self.cooldown_duration_sec, int
        ):
            raise ValueError(
                f"cooldown_duration_sec must be int, got {self.cooldown_duration_sec!r}"
            )
        if self.cooldown_duration_sec < 0:
            raise ValueError(
                f"cooldown_duration_sec must be non-negative, got {self.cooldown_duration_sec}"
            )

        if not self.reserve_account or self.reserve_account == ZERO_ACCOUNT:
            raise ValueError(f"invalid reserve_account: {self.reserve_account!r}")
        if not self.token_symbol:
            raise ValueError("token_symbol must not be empty")
