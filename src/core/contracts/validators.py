"""
JSON Schema Contract Validators

Валидация экспортируемых дескрипторов числовых типов по формальному
JSON Schema контракту (библиотека jsonschema).

Схемы:
- numeric_type_descriptor.json
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

from src.core.arithmetic.type_shape import describe_numeric_type


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы ищутся в contracts/schema/ относительно корня проекта.
    """

    def __init__(self):
        # Корень проекта: 4 уровня вверх от этого файла
        self._schema_dir = Path(__file__).parent.parent.parent.parent / "contracts" / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'numeric_type_descriptor')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Meta-validation самой схемы
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Базовый валидатор: данные против одной JSON Schema."""

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

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        return self.validator.iter_errors(data)


class NumericTypeDescriptorValidator(ContractValidator):
    """Валидатор контракта numeric_type_descriptor."""

    def __init__(self):
        super().__init__("numeric_type_descriptor")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_numeric_type_descriptor(data: Dict[str, Any]) -> None:
    """
    Валидация экспортированного дескриптора.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    NumericTypeDescriptorValidator().validate(data)


def export_numeric_type_descriptor(numeric_type: type) -> Dict[str, Any]:
    """
    Дескриптор типа T в JSON-совместимом виде, проверенный по контракту.

    Raises:
        TypeError: если numeric_type не является классом
        ValidationError: если дескриптор не соответствует схеме
    """
    data = describe_numeric_type(numeric_type).model_dump(mode="json")
    validate_numeric_type_descriptor(data)
    return data
