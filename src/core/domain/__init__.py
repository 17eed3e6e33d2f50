"""
Domain models and value objects.

Contains the numeric type descriptor. The operator-sugar wrapper lives in
src.core.domain.generic_number and is imported from there directly.
"""

from src.core.domain.numeric_type import NumericKind, NumericTypeDescriptor, TypeShape

__all__ = [
    # Numeric type descriptor
    "NumericKind",
    "TypeShape",
    "NumericTypeDescriptor",
]
