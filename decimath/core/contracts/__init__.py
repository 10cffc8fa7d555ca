"""
Contract Validation Module

Валидация внешних представлений десятичного значения по JSON Schema.
"""

from .validators import (
    ContractValidator,
    DecimalStringValidator,
    DecimalValueValidator,
    GoogleDecimalValidator,
    SchemaLoader,
    validate_decimal_string,
    validate_decimal_value,
    validate_google_decimal,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "DecimalStringValidator",
    "GoogleDecimalValidator",
    "DecimalValueValidator",
    # Functions
    "validate_decimal_string",
    "validate_google_decimal",
    "validate_decimal_value",
]
