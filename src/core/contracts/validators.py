"""
JSON Schema Contract Validators

Модуль для валидации экспортируемых уведомлений согласно формальным
JSON Schema контрактам. Использует библиотеку jsonschema.

Схемы (contracts/schema/):
- buy_event.json
- sell_event.json
- transfer_event.json
- approval_event.json
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List

import jsonschema
from jsonschema import Draft202012Validator

from src.core.domain.events import EngineEvent, EventType


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Находит схемы в contracts/schema/ относительно корня проекта.
    """

    def __init__(self):
        # Корень проекта — 4 уровня вверх от этого файла
        self._schema_dir = Path(__file__).parent.parent.parent.parent / "contracts" / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'buy_event')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема сама по себе невалидна
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Валидатор одного контракта уведомления.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        return self.validator.iter_errors(data)


_VALIDATORS: Dict[str, ContractValidator] = {}


def get_validator(event_type: EventType | str) -> ContractValidator:
    """Кэшированный валидатор для типа уведомления."""
    schema_name = EventType(event_type).value
    if schema_name not in _VALIDATORS:
        _VALIDATORS[schema_name] = ContractValidator(schema_name)
    return _VALIDATORS[schema_name]


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_event_record(data: Dict[str, Any]) -> None:
    """
    Валидация экспортированного уведомления.

    Схема выбирается по полю event_type.

    Raises:
        ValidationError: Если данные не соответствуют схеме
        ValueError: Если event_type отсутствует или неизвестен
    """
    event_type = data.get("event_type")
    if event_type is None:
        raise ValueError("event record has no event_type")
    get_validator(event_type).validate(data)


def validate_buy_event(data: Dict[str, Any]) -> None:
    get_validator(EventType.BUY).validate(data)


def validate_sell_event(data: Dict[str, Any]) -> None:
    get_validator(EventType.SELL).validate(data)


def validate_transfer_event(data: Dict[str, Any]) -> None:
    get_validator(EventType.TRANSFER).validate(data)


def validate_approval_event(data: Dict[str, Any]) -> None:
    get_validator(EventType.APPROVAL).validate(data)


def export_event_records(events: Iterable[EngineEvent]) -> List[Dict[str, Any]]:
    """
    Сериализация уведомлений в JSON-совместимые dict с проверкой контракта.

    Args:
        events: Уведомления (pydantic модели)

    Returns:
        Список dict в порядке публикации

    Raises:
        ValidationError: Если запись не соответствует своей схеме
    """
    records = []
    for event in events:
        data = event.model_dump(mode="json")
        validate_event_record(data)
        records.append(data)
    return records
