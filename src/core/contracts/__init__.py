"""
Contract Validation Module

Валидация JSON контрактов экспортируемых дескрипторов числовых типов.
"""

from .validators import (
    ContractValidator,
    NumericTypeDescriptorValidator,
    SchemaLoader,
    export_numeric_type_descriptor,
    validate_numeric_type_descriptor,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "NumericTypeDescriptorValidator",
    # Functions
    "validate_numeric_type_descriptor",
    "export_numeric_type_descriptor",
]
