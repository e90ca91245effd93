"""Clock — источник текущего времени (Unix seconds)."""

import time
from typing import Protocol


class Clock(Protocol):
    def now(self) -> int: ...


class SystemClock:
    """Системное время, усечённое до секунд."""

    def now(self) -> int:
        return int(time.time())


class ManualClock:
    """Управляемое время для тестов и симуляций."""

    def __init__(self, start: int = 0):
        if start < 0:
            raise ValueError(f"start must be non-negative, got {start}")
        self._now = start

    def now(self) -> int:
        return self._now

    def advance(self, seconds: int) -> int:
        if seconds < 0:
            raise ValueError(f"clock cannot move backwards: {seconds}")
        self._now += seconds
        return self._now

    def set(self, timestamp: int) -> None:
        self._now = timestamp
