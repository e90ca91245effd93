"""
EventLog — Журнал уведомлений с откатом

Общий журнал для оркестратора и ledger. Уведомления записываются в ходе
операции, но доставляются подписчикам только после commit самого внешнего
вызова: уведомления откатанного вызова наблюдателям не видны.
"""

import logging
from typing import Callable, List

from src.core.domain.events import EngineEvent

logger = logging.getLogger(__name__)


EventSubscriber = Callable[[EngineEvent], None]


class EventLog:
    """Append-only журнал с truncate-откатом до снапшота."""

    def __init__(self):
        self._records: List[EngineEvent] = []
        self._published = 0
        self._subscribers: List[EventSubscriber] = []

    @property
    def records(self) -> List[EngineEvent]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def record(self, event: EngineEvent) -> None:
        self._records.append(event)

    def subscribe(self, subscriber: EventSubscriber) -> None:
        self._subscribers.append(subscriber)

    def publish_pending(self) -> int:
        """
        Доставка подписчикам всех ещё не доставленных записей.

        Ошибка подписчика логируется; остальные подписчики и следующие
        записи получают доставку как обычно.

        Returns:
            Количество доставленных уведомлений
        """
        delivered = 0
        while self._published < len(self._records):
            event = self._records[self._published]
            self._published += 1
            delivered += 1
            for subscriber in list(self._subscribers):
                try:
                    subscriber(event)
                except Exception:
                    # Состояние уже зафиксировано: отказ подписчика не отменяет операцию
                    logger.exception(
                        "Subscriber %r failed on %s", subscriber, event.event_type.value
                    )
        return delivered

    def snapshot(self) -> int:
        return len(self._records)

    def restore(self, snapshot: int) -> None:
        if snapshot < self._published:
            raise ValueError(
                f"cannot roll back below published position {self._published} (snapshot {snapshot})"
            )
        dropped = len(self._records) - snapshot
        del self._records[snapshot:]
        if dropped:
            logger.debug("Event log rolled back: %d notification(s) discarded", dropped)
