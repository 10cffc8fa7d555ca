"""
JSON Schema Contract Validators

Модуль для валидации внешних (wire) представлений десятичного значения
согласно формальным JSON Schema контрактам.
Использует библиотеку jsonschema для проверки соответствия данных схемам.

Схемы (decimath/core/contracts/schema/):
- decimal_string.json (каноническая ASCII-грамматика)
- google_decimal.json (google.type.Decimal: {"value": "<string>"})
- decimal_value.json (структурная форма {"units", "scale"})
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы поставляются вместе с пакетом в каталоге schema/ рядом с модулем.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'google_decimal')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-validation
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Any) -> None:
        """
        Валидация данных против схемы.

        Raises:
            jsonschema.ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Any) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def first_error(self, data: Any) -> str | None:
        """
        Сообщение первой ошибки валидации (для диагностики).

        Returns:
            Текст ошибки или None если данные валидны
        """
        error = next(iter(self.validator.iter_errors(data)), None)
        return error.message if error is not None else None


class DecimalStringValidator(ContractValidator):
    """Валидатор канонической десятичной строки."""

    def __init__(self):
        super().__init__("decimal_string")


class GoogleDecimalValidator(ContractValidator):
    """Валидатор объекта google.type.Decimal."""

    def __init__(self):
        super().__init__("google_decimal")


class DecimalValueValidator(ContractValidator):
    """Валидатор структурной формы {"units", "scale"}."""

    def __init__(self):
        super().__init__("decimal_value")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_decimal_string(data: Any) -> None:
    """
    Валидация десятичной строки.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    DecimalStringValidator().validate(data)


def validate_google_decimal(data: Any) -> None:
    """
    Валидация объекта google.type.Decimal.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    GoogleDecimalValidator().validate(data)


def validate_decimal_value(data: Any) -> None:
    """
    Валидация структурной формы DecimalValue.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    DecimalValueValidator().validate(data)
