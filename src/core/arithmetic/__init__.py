"""
Generic arithmetic over a numeric type chosen at the call site.

CapabilityEngine discovers and caches operation bindings per type;
GenericArithmetic builds the generic algorithms (GCD, divisors, square root,
classification) on top of those bindings.
"""

from src.core.arithmetic.bindings import (
    DEFAULT_REGISTRY,
    BinaryOp,
    BindingKey,
    BindingRegistry,
    ComparisonOp,
    OperationKind,
    TypeBindingTable,
    UnaryOp,
)
from src.core.arithmetic.complex_shape import (
    modulo_free_gcd,
    parse_complex,
    signed_magnitude,
    surrogate_compare,
)
from src.core.arithmetic.conversions import convert_to, narrow_to_int
from src.core.arithmetic.engine import CapabilityEngine, NumericConstants, get_engine
from src.core.arithmetic.errors import (
    ArithmeticCapabilityError,
    NumericArgumentError,
    NumericFormatError,
    PrimitiveOnlyOperation,
    UnsupportedOperation,
)
from src.core.arithmetic.formatting import format_number, trim_trailing_zeros
from src.core.arithmetic.generic_arithmetic import GenericArithmetic
from src.core.arithmetic.settings import (
    DEFAULT_ARITHMETIC_SETTINGS,
    ArithmeticSettings,
)
from src.core.arithmetic.type_shape import (
    NUMERIC_KIND_MARKER,
    describe_numeric_type,
    is_arithmetic_primitive,
    is_complex_shaped,
    numeric_kind_of,
    register_numeric_kind,
    shape_of,
)

__all__ = [
    # Engine
    "CapabilityEngine",
    "NumericConstants",
    "get_engine",
    # Facade
    "GenericArithmetic",
    # Bindings
    "OperationKind",
    "UnaryOp",
    "BinaryOp",
    "ComparisonOp",
    "BindingKey",
    "TypeBindingTable",
    "BindingRegistry",
    "DEFAULT_REGISTRY",
    # Type shape
    "NUMERIC_KIND_MARKER",
    "register_numeric_kind",
    "describe_numeric_type",
    "is_arithmetic_primitive",
    "is_complex_shaped",
    "numeric_kind_of",
    "shape_of",
    # Complex shape
    "parse_complex",
    "surrogate_compare",
    "signed_magnitude",
    "modulo_free_gcd",
    # Conversions
    "convert_to",
    "narrow_to_int",
    # Formatting & settings
    "format_number",
    "trim_trailing_zeros",
    "ArithmeticSettings",
    "DEFAULT_ARITHMETIC_SETTINGS",
    # Errors
    "ArithmeticCapabilityError",
    "UnsupportedOperation",
    "PrimitiveOnlyOperation",
    "NumericFormatError",
    "NumericArgumentError",
]
