"""
Events — Уведомления для наблюдателей

Immutable Pydantic модели уведомлений, которые движок и ledger публикуют
после успешного завершения операции.
Совместимость с JSON Schema (contracts/schema/<event_type>.json).

- BuyEvent: выпуск по кривой
- SellEvent: погашение по кривой
- TransferEvent: стандартное перемещение (mint/burn — с/на ZERO_ACCOUNT)
- ApprovalEvent: изменение allowance
"""

from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class EventType(str, Enum):
    """Тип уведомления (совпадает с именем JSON Schema)."""

    BUY = "buy_event"
    SELL = "sell_event"
    TRANSFER = "transfer_event"
    APPROVAL = "approval_event"


# =============================================================================
# EVENT MODELS
# =============================================================================


class BuyEvent(BaseModel):
    """Покупка: amount единиц выпущено buyer'у за cost, сдача change возвращена."""

    event_type: Literal[EventType.BUY] = EventType.BUY
    buyer: str = Field(..., min_length=1, description="Покупатель")
    amount: int = Field(..., ge=0, description="Выпущено единиц")
    attached_value: int = Field(..., ge=0, description="Приложенное value (wei)")
    cost: int = Field(..., ge=0, description="Стоимость по кривой (wei)")
    change: int = Field(..., ge=0, description="Возвращённая сдача (wei)")

    model_config = {"frozen": True}


class SellEvent(BaseModel):
    """Продажа: amount единиц погашено, seller получил payout."""

    event_type: Literal[EventType.SELL] = EventType.SELL
    seller: str = Field(..., min_length=1, description="Продавец")
    amount: int = Field(..., ge=0, description="Погашено единиц")
    payout: int = Field(..., ge=0, description="Выплата по кривой (wei)")

    model_config = {"frozen": True}


class TransferEvent(BaseModel):
    """Стандартное уведомление ledger о перемещении единиц."""

    event_type: Literal[EventType.TRANSFER] = EventType.TRANSFER
    sender: str = Field(..., min_length=1, description="Отправитель (ZERO_ACCOUNT для mint)")
    recipient: str = Field(..., min_length=1, description="Получатель (ZERO_ACCOUNT для burn)")
    amount: int = Field(..., ge=0, description="Количество единиц")

    model_config = {"frozen": True}


class ApprovalEvent(BaseModel):
    """Стандартное уведомление ledger об установке allowance."""

    event_type: Literal[EventType.APPROVAL] = EventType.APPROVAL
    owner: str = Field(..., min_length=1, description="Владелец")
    spender: str = Field(..., min_length=1, description="Уполномоченный")
    amount: int = Field(..., ge=0, description="Новый allowance")

    model_config = {"frozen": True}


EngineEvent = Union[BuyEvent, SellEvent, TransferEvent, ApprovalEvent]
