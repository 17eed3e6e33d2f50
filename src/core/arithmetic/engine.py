"""
Capability Engine — разрешение арифметических операций для типа T

Для типа-кандидата T Engine находит реализацию каждой операции из
фиксированного набора, превращает её в непосредственно вызываемый binding
и кэширует его в таблице типа (BindingRegistry).

Стратегии (выбираются по форме типа, см. type_shape):
- PRIMITIVE: операторы Python и функции math/builtins
- COMPLEX: операторы Python, cmath для встроенного complex,
  суррогатный порядок для сравнений порядка
- CUSTOM: статические методы типа (add, parse, sqrt, ...), затем
  операторные протоколы, объявленные самим типом (__add__, __gt__, ...)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Разрешение выполняется не более одного раза на (T, операция)
2. Binding либо полностью работоспособен, либо не создаётся (UnsupportedOperation)
3. Отсутствие truncate у пользовательского типа не ошибка, binding = identity
4. sign поддерживается только для примитивов (PrimitiveOnlyOperation)
"""

import cmath
import decimal
import logging
import math
import operator
import struct
from typing import Any, Callable, Dict, Final, NamedTuple, Optional, Tuple, Type

from src.core.arithmetic.bindings import (
    DEFAULT_REGISTRY,
    ORDERING_COMPARISONS,
    BinaryOp,
    BindingKey,
    BindingRegistry,
    ComparisonOp,
    OperationKind,
    UnaryOp,
)
from src.core.arithmetic.complex_shape import parse_complex, surrogate_compare
from src.core.arithmetic.conversions import convert_if_needed, convert_to, narrow_to_int
from src.core.arithmetic.discovery import (
    DiscoveredMethod,
    describe_signature,
    find_instance_method,
    find_static_method,
    has_operator_protocol,
)
from src.core.arithmetic.errors import (
    ArithmeticCapabilityError,
    NumericArgumentError,
    NumericFormatError,
    PrimitiveOnlyOperation,
    UnsupportedOperation,
)
from src.core.arithmetic.fallbacks import build_bisection_sqrt, build_naive_modpow
from src.core.arithmetic.settings import (
    FIXED_WIDTH_BYTE_ORDER,
    INT_ENCODING_WIDTH,
    MINUS_ONE_TEXT,
    ONE_TEXT,
    TWO_TEXT,
    ZERO_TEXT,
)
from src.core.arithmetic.type_shape import (
    CANONICAL_FLOATING_TYPE,
    describe_numeric_type,
)
from src.core.domain.numeric_type import NumericKind, NumericTypeDescriptor, TypeShape


logger = logging.getLogger(__name__)


# =============================================================================
# ТАБЛИЦЫ ПОИСКА
# =============================================================================

_BINARY_STATIC_NAMES: Final[Dict[BinaryOp, Tuple[str, ...]]] = {
    BinaryOp.ADD: ("add",),
    BinaryOp.SUBTRACT: ("subtract",),
    BinaryOp.MULTIPLY: ("multiply",),
    BinaryOp.DIVIDE: ("divide",),
    BinaryOp.MODULO: ("modulo", "remainder"),
}

_BINARY_PROTOCOLS: Final[Dict[BinaryOp, Tuple[str, Callable[[Any, Any], Any]]]] = {
    BinaryOp.ADD: ("__add__", operator.add),
    BinaryOp.SUBTRACT: ("__sub__", operator.sub),
    BinaryOp.MULTIPLY: ("__mul__", operator.mul),
    BinaryOp.DIVIDE: ("__truediv__", operator.truediv),
    BinaryOp.MODULO: ("__mod__", operator.mod),
}

_COMPARISON_STATIC_NAMES: Final[Dict[ComparisonOp, Tuple[str, ...]]] = {
    ComparisonOp.GREATER_THAN: ("greater_than",),
    ComparisonOp.LESS_THAN: ("less_than",),
    ComparisonOp.GREATER_OR_EQUAL: ("greater_than_or_equal",),
    ComparisonOp.LESS_OR_EQUAL: ("less_than_or_equal",),
    ComparisonOp.EQUAL: ("equals",),
    ComparisonOp.NOT_EQUAL: ("not_equals",),
}

_COMPARISON_PROTOCOLS: Final[Dict[ComparisonOp, Tuple[str, Callable[[Any, Any], bool]]]] = {
    ComparisonOp.GREATER_THAN: ("__gt__", operator.gt),
    ComparisonOp.LESS_THAN: ("__lt__", operator.lt),
    ComparisonOp.GREATER_OR_EQUAL: ("__ge__", operator.ge),
    ComparisonOp.LESS_OR_EQUAL: ("__le__", operator.le),
    ComparisonOp.EQUAL: ("__eq__", operator.eq),
    ComparisonOp.NOT_EQUAL: ("__ne__", operator.ne),
}

_NEGATE_NAMES: Final[Tuple[str, ...]] = ("negate",)
_PARSE_NAMES: Final[Tuple[str, ...]] = ("parse", "from_string")
_SQRT_NAMES: Final[Tuple[str, ...]] = ("sqrt",)
_ABS_NAMES: Final[Tuple[str, ...]] = ("abs",)
_TRUNCATE_NAMES: Final[Tuple[str, ...]] = ("truncate",)
_POWER_NAMES: Final[Tuple[str, ...]] = ("pow", "power")
_MODPOW_NAMES: Final[Tuple[str, ...]] = ("mod_pow", "modpow")
_LOG_NAMES: Final[Tuple[str, ...]] = ("log",)
_TO_BYTES_NAMES: Final[Tuple[str, ...]] = ("to_byte_array",)

_FLOAT_ENCODING: Final[struct.Struct] = struct.Struct(
    "<d" if FIXED_WIDTH_BYTE_ORDER == "little" else ">d"
)

# Ключи singleton-bindings
_PARSE_KEY: Final[BindingKey] = BindingKey(OperationKind.PARSE)
_SIGN_KEY: Final[BindingKey] = BindingKey(OperationKind.SIGN)
_POWER_INT_KEY: Final[BindingKey] = BindingKey(OperationKind.POWER_INT)
_MODPOW_KEY: Final[BindingKey] = BindingKey(OperationKind.MODPOW)
_LOG_KEY: Final[BindingKey] = BindingKey(OperationKind.LOG)
_TO_BYTES_KEY: Final[BindingKey] = BindingKey(OperationKind.TO_BYTES)
_CONSTANTS_KEY: Final[BindingKey] = BindingKey(OperationKind.CONSTANTS)
_DESCRIPTOR_KEY: Final[BindingKey] = BindingKey(OperationKind.DESCRIPTOR)
_BISECTION_SQRT_KEY: Final[BindingKey] = BindingKey(OperationKind.UNARY, "sqrt_bisection")


class NumericConstants(NamedTuple):
    """Константы типа T, полученные разбором канонического текста."""

    minus_one: Any
    zero: Any
    one: Any
    two: Any


def _identity(value: Any) -> Any:
    return value


def _native_sign(value: Any) -> int:
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def _primitive_parser(numeric_type: type) -> Callable[[str], Any]:
    """Конструктор примитива с ошибками NumericArgumentError/NumericFormatError."""

    def parse_primitive(text: str) -> Any:
        if text is None or not str(text).strip():
            raise NumericArgumentError("Argument text cannot be None, empty or whitespace")
        try:
            return numeric_type(text)
        except (ValueError, decimal.InvalidOperation) as e:
            raise NumericFormatError(
                f"Argument {text!r} is not a valid {numeric_type.__qualname__}"
            ) from e

    return parse_primitive


# =============================================================================
# ENGINE
# =============================================================================


class CapabilityEngine:
    """
    Разрешение операций для одного типа T.

    Экземпляр не хранит собственного состояния кроме ссылки на таблицу типа
    в реестре, поэтому создавать его повторно дёшево.

    Пример:
        >>> engine = CapabilityEngine.for_type(int)
        >>> engine.resolve_binary(BinaryOp.ADD)(2, 3)
        5
    """

    def __init__(self, numeric_type: type, registry: Optional[BindingRegistry] = None):
        """
        Args:
            numeric_type: тип-кандидат T
            registry: реестр bindings (по умолчанию глобальный реестр процесса)
        """
        if not isinstance(numeric_type, type):
            raise TypeError(f"numeric_type must be a class, got {numeric_type!r}")

        self.numeric_type = numeric_type
        self._registry = registry if registry is not None else DEFAULT_REGISTRY
        self._table = self._registry.table_for(numeric_type)

    @classmethod
    def for_type(
        cls, numeric_type: type, registry: Optional[BindingRegistry] = None
    ) -> "CapabilityEngine":
        return cls(numeric_type, registry)

    # -------------------------------------------------------------------------
    # Служебное
    # -------------------------------------------------------------------------

    @property
    def registry(self) -> BindingRegistry:
        return self._registry

    @property
    def descriptor(self) -> NumericTypeDescriptor:
        return self._table.get_or_resolve(
            _DESCRIPTOR_KEY, lambda: describe_numeric_type(self.numeric_type)
        )

    @property
    def type_name(self) -> str:
        return self.descriptor.type_name

    def get_stats(self) -> Dict[str, Any]:
        return self._table.get_stats()

    def _is_primitive(self) -> bool:
        return self.descriptor.shape is TypeShape.PRIMITIVE

    def _bound(self, operation: str, strategy: str, binding: Any) -> Any:
        logger.debug("Resolved %s for %s via %s", operation, self.type_name, strategy)
        return binding

    def _unsupported(self, operation: str, detail: str = "") -> UnsupportedOperation:
        return UnsupportedOperation(self.type_name, operation, detail)

    def _coerce_tag(self, enum_type: Type, tag: Any, label: str) -> Any:
        try:
            return enum_type(tag)
        except ValueError as e:
            raise self._unsupported(
                str(getattr(tag, "value", tag)), f"unknown {label} operation"
            ) from e

    def _adapt(self, method: DiscoveredMethod, result_to_type: bool = True) -> Callable[..., Any]:
        """
        Обёртка статического метода с конверсией аргументов и результата.

        Если конверсии не нужны (аргументы без аннотаций или типа T, результат
        аннотирован как T), возвращается сам метод.
        """
        numeric_type = self.numeric_type
        function = method.function
        parameter_types = [
            None if hint in (None, object, numeric_type) else hint
            for hint in method.parameter_types
        ]
        convert_result = result_to_type and method.return_type is not numeric_type

        if not any(parameter_types) and not convert_result:
            return function

        def invoke(*args: Any) -> Any:
            converted = [
                convert_if_needed(arg, parameter_types[index] if index < len(parameter_types) else None)
                for index, arg in enumerate(args)
            ]
            result = function(*converted)
            if convert_result:
                return convert_to(numeric_type, result)
            return result

        invoke.__name__ = method.name
        invoke.__doc__ = function.__doc__
        return invoke

    # -------------------------------------------------------------------------
    # Константы
    # -------------------------------------------------------------------------

    def constants(self) -> NumericConstants:
        """Константы -1, 0, 1, 2 типа T (разбираются один раз)."""
        return self._table.get_or_resolve(_CONSTANTS_KEY, self._parse_constants)

    def _parse_constants(self) -> NumericConstants:
        parse = self.resolve_parse()
        return NumericConstants(
            minus_one=parse(MINUS_ONE_TEXT),
            zero=parse(ZERO_TEXT),
            one=parse(ONE_TEXT),
            two=parse(TWO_TEXT),
        )

    # -------------------------------------------------------------------------
    # Унарные операции
    # -------------------------------------------------------------------------

    def resolve_unary(self, name: Any) -> Callable[[Any], Any]:
        """
        Binding унарной операции по имени (negate, sqrt, abs, truncate).

        Raises:
            UnsupportedOperation: если имя не входит в поддерживаемый набор
        """
        operation = self._coerce_tag(UnaryOp, name, "unary")
        if operation is UnaryOp.SQRT:
            return self.resolve_sqrt()
        if operation is UnaryOp.ABS:
            return self.resolve_abs()
        if operation is UnaryOp.TRUNCATE:
            return self.resolve_truncate()
        return self._table.get_or_resolve(
            BindingKey(OperationKind.UNARY, UnaryOp.NEGATE.value), self._bind_negate
        )

    def _bind_negate(self) -> Callable[[Any], Any]:
        operation = UnaryOp.NEGATE.value
        if self._is_primitive():
            return self._bound(operation, "primitive", operator.neg)

        method = find_static_method(self.numeric_type, _NEGATE_NAMES, 1)
        if method is not None:
            return self._bound(operation, f"static method {method.name}", self._adapt(method))

        if has_operator_protocol(self.numeric_type, "__neg__"):
            return self._bound(operation, "operator protocol __neg__", operator.neg)

        try:
            multiply = self.resolve_binary(BinaryOp.MULTIPLY)
            minus_one = self.constants().minus_one
        except ArithmeticCapabilityError as e:
            raise self._unsupported(operation, "no negate method and no multiply fallback") from e

        def negate_by_multiplication(value: Any) -> Any:
            return multiply(value, minus_one)

        return self._bound(operation, "multiplication by -1", negate_by_multiplication)

    def resolve_sqrt(self) -> Callable[[Any], Any]:
        """
        Binding квадратного корня.

        Примитивы: math.sqrt через float; пользовательский тип: статический
        sqrt; иначе бисекция (fallback).
        """
        return self._table.get_or_resolve(
            BindingKey(OperationKind.UNARY, UnaryOp.SQRT.value), self._bind_sqrt
        )

    def _bind_sqrt(self) -> Callable[[Any], Any]:
        operation = UnaryOp.SQRT.value
        numeric_type = self.numeric_type

        if self._is_primitive():
            if numeric_type is CANONICAL_FLOATING_TYPE:
                return self._bound(operation, "math.sqrt", math.sqrt)

            def widened_sqrt(value: Any) -> Any:
                return convert_to(numeric_type, math.sqrt(CANONICAL_FLOATING_TYPE(value)))

            return self._bound(operation, "math.sqrt via float", widened_sqrt)

        if numeric_type is complex:
            return self._bound(operation, "cmath.sqrt", cmath.sqrt)

        method = find_static_method(numeric_type, _SQRT_NAMES, 1)
        if method is not None:
            return self._bound(operation, f"static method {method.name}", self._adapt(method))

        try:
            bisection = self.resolve_bisection_sqrt()
        except ArithmeticCapabilityError as e:
            raise self._unsupported(operation, "no sqrt method and bisection fallback unavailable") from e
        return self._bound(operation, "bisection fallback", bisection)

    def resolve_bisection_sqrt(self) -> Callable[[Any], Any]:
        """Binding квадратного корня бисекцией (независимо от наличия sqrt у T)."""
        return self._table.get_or_resolve(
            _BISECTION_SQRT_KEY, lambda: build_bisection_sqrt(self)
        )

    def resolve_abs(self) -> Callable[[Any], Any]:
        """
        Binding абсолютного значения.

        Raises:
            UnsupportedOperation: если у пользовательского типа нет abs/__abs__
        """
        return self._table.get_or_resolve(
            BindingKey(OperationKind.UNARY, UnaryOp.ABS.value), self._bind_abs
        )

    def _bind_abs(self) -> Callable[[Any], Any]:
        operation = UnaryOp.ABS.value
        numeric_type = self.numeric_type

        if self._is_primitive():
            return self._bound(operation, "builtin abs", abs)

        method = find_static_method(numeric_type, _ABS_NAMES, 1)
        if method is not None:
            return self._bound(operation, f"static method {method.name}", self._adapt(method))

        if has_operator_protocol(numeric_type, "__abs__"):

            def absolute(value: Any) -> Any:
                return convert_to(numeric_type, abs(value))

            return self._bound(operation, "operator protocol __abs__", absolute)

        raise self._unsupported(operation, "no static method 'abs' and no __abs__")

    def resolve_truncate(self) -> Callable[[Any], Any]:
        """
        Binding усечения дробной части.

        Если у типа нет truncate, возвращается identity (не ошибка).
        """
        return self._table.get_or_resolve(
            BindingKey(OperationKind.UNARY, UnaryOp.TRUNCATE.value), self._bind_truncate
        )

    def _bind_truncate(self) -> Callable[[Any], Any]:
        operation = UnaryOp.TRUNCATE.value
        numeric_type = self.numeric_type

        if self._is_primitive():
            if numeric_type is CANONICAL_FLOATING_TYPE or self.descriptor.kind in (
                NumericKind.DECIMAL,
                NumericKind.RATIONAL,
            ):

                def platform_truncate(value: Any) -> Any:
                    return convert_to(numeric_type, math.trunc(value))

                return self._bound(operation, "math.trunc", platform_truncate)
            return self._bound(operation, "identity (integer kind)", _identity)

        method = find_static_method(numeric_type, _TRUNCATE_NAMES, 1)
        if method is not None:
            return self._bound(operation, f"static method {method.name}", self._adapt(method))

        if has_operator_protocol(numeric_type, "__trunc__"):

            def protocol_truncate(value: Any) -> Any:
                return convert_to(numeric_type, math.trunc(value))

            return self._bound(operation, "operator protocol __trunc__", protocol_truncate)

        return self._bound(operation, "identity fallback", _identity)

    # -------------------------------------------------------------------------
    # Бинарные операции
    # -------------------------------------------------------------------------

    def resolve_binary(self, tag: Any) -> Callable[[Any, Any], Any]:
        """
        Binding бинарной операции (add, subtract, multiply, divide, modulo, power).

        Raises:
            UnsupportedOperation: если тег неизвестен или у T нет операции
        """
        operation = self._coerce_tag(BinaryOp, tag, "binary")
        if operation is BinaryOp.POWER:
            return self.resolve_power()
        return self._table.get_or_resolve(
            BindingKey(OperationKind.BINARY, operation.value),
            lambda: self._bind_binary(operation),
        )

    def _bind_binary(self, operation: BinaryOp) -> Callable[[Any, Any], Any]:
        numeric_type = self.numeric_type
        dunder, function = _BINARY_PROTOCOLS[operation]
        integer_division = (
            operation is BinaryOp.DIVIDE and self.descriptor.kind is NumericKind.INTEGER
        )

        if self._is_primitive():
            if integer_division:
                return self._bound(operation.value, "floor division", operator.floordiv)
            return self._bound(operation.value, "primitive operator", function)

        method = find_static_method(numeric_type, _BINARY_STATIC_NAMES[operation], 2)
        if method is not None:
            return self._bound(
                operation.value, f"static method {method.name}", self._adapt(method)
            )

        if integer_division and has_operator_protocol(numeric_type, "__floordiv__"):
            return self._bound(operation.value, "operator protocol __floordiv__", operator.floordiv)

        if has_operator_protocol(numeric_type, dunder):
            return self._bound(operation.value, f"operator protocol {dunder}", function)

        raise self._unsupported(
            operation.value,
            f"no static method {'/'.join(_BINARY_STATIC_NAMES[operation])} and no {dunder}",
        )

    def resolve_comparison(self, tag: Any) -> Callable[[Any, Any], bool]:
        """
        Binding сравнения (>, <, >=, <=, ==, !=).

        Для complex-shaped типов сравнения порядка используют суррогат
        (знаковую величину), так как полного порядка нет.
        """
        operation = self._coerce_tag(ComparisonOp, tag, "comparison")
        return self._table.get_or_resolve(
            BindingKey(OperationKind.COMPARISON, operation.value),
            lambda: self._bind_comparison(operation),
        )

    def _bind_comparison(self, operation: ComparisonOp) -> Callable[[Any, Any], bool]:
        numeric_type = self.numeric_type
        dunder, function = _COMPARISON_PROTOCOLS[operation]

        if self._is_primitive():
            return self._bound(operation.value, "primitive operator", function)

        if self.descriptor.is_complex_shaped and operation in ORDERING_COMPARISONS:

            def surrogate(left: Any, right: Any) -> bool:
                return surrogate_compare(left, right, operation)

            return self._bound(operation.value, "complex surrogate ordering", surrogate)

        method = find_static_method(numeric_type, _COMPARISON_STATIC_NAMES[operation], 2)
        if method is not None:
            return self._bound(
                operation.value,
                f"static method {method.name}",
                self._adapt(method, result_to_type=False),
            )

        allow_default = operation in (ComparisonOp.EQUAL, ComparisonOp.NOT_EQUAL)
        if has_operator_protocol(numeric_type, dunder, allow_object_default=allow_default):
            return self._bound(operation.value, f"operator protocol {dunder}", function)

        raise self._unsupported(
            operation.value,
            f"no static method {_COMPARISON_STATIC_NAMES[operation][0]} and no {dunder}",
        )

    # -------------------------------------------------------------------------
    # Разбор текста
    # -------------------------------------------------------------------------

    def resolve_parse(self) -> Callable[[str], Any]:
        """
        Binding разбора текста в T.

        Примитивы: конструктор типа (ошибки разбора NumericFormatError и
        NumericArgumentError); complex-shaped: отдельный парсер "(re, im)";
        пользовательский тип: статический parse/from_string с одним аргументом.
        """
        return self._table.get_or_resolve(_PARSE_KEY, self._bind_parse)

    def _bind_parse(self) -> Callable[[str], Any]:
        operation = "parse"
        numeric_type = self.numeric_type

        if self._is_primitive():
            return self._bound(operation, "type constructor", _primitive_parser(numeric_type))

        if self.descriptor.is_complex_shaped:
            if numeric_type is complex:
                return self._bound(operation, "complex parser", parse_complex)

            def parse_complex_shaped(text: str) -> Any:
                parsed = parse_complex(text)
                return numeric_type(parsed.real, parsed.imag)

            return self._bound(operation, "complex parser", parse_complex_shaped)

        method = find_static_method(numeric_type, _PARSE_NAMES, 1)
        if method is not None and method.parameter_types[:1] in ([], [None], [str]):
            return self._bound(operation, f"static method {method.name}", self._adapt(method))

        raise self._unsupported(
            operation, "no static method 'parse' taking exactly one string argument"
        )

    # -------------------------------------------------------------------------
    # Знак
    # -------------------------------------------------------------------------

    def resolve_sign(self) -> Callable[[Any], int]:
        """
        Binding знака (1, -1, 0).

        Raises:
            PrimitiveOnlyOperation: для всех типов, кроме встроенных примитивов
        """
        if not self._is_primitive():
            raise PrimitiveOnlyOperation(self.type_name, "sign")
        return self._table.get_or_resolve(
            _SIGN_KEY, lambda: self._bound("sign", "primitive comparison", _native_sign)
        )

    # -------------------------------------------------------------------------
    # Степени и логарифм
    # -------------------------------------------------------------------------

    def resolve_power(self) -> Callable[[Any, Any], Any]:
        """
        Binding степени (T, T) -> T.

        Для целых произвольной точности показатель сужается до int
        безопасной конверсией narrow_to_int.

        Raises:
            UnsupportedOperation: если у T нет pow/power/__pow__
        """
        return self._table.get_or_resolve(
            BindingKey(OperationKind.BINARY, BinaryOp.POWER.value), self._bind_power
        )

    def _bind_power(self) -> Callable[[Any, Any], Any]:
        operation = BinaryOp.POWER.value
        numeric_type = self.numeric_type

        if numeric_type is int:

            def integer_power(base: Any, exponent: Any) -> Any:
                return convert_to(int, pow(base, narrow_to_int(exponent)))

            return self._bound(operation, "exact integer pow", integer_power)

        if numeric_type is CANONICAL_FLOATING_TYPE:

            def float_power(base: Any, exponent: Any) -> Any:
                return math.pow(base, float(exponent))

            return self._bound(operation, "math.pow", float_power)

        if self._is_primitive() or numeric_type is complex:

            def primitive_power(base: Any, exponent: Any) -> Any:
                return convert_to(numeric_type, operator.pow(base, exponent))

            return self._bound(operation, "primitive operator", primitive_power)

        method = find_static_method(numeric_type, _POWER_NAMES, 2)
        if method is not None:
            if self.descriptor.is_big_integer_shaped:
                function = method.function
                base_type = method.parameter_types[0] if method.parameter_types else None

                def big_integer_power(base: Any, exponent: Any) -> Any:
                    result = function(convert_if_needed(base, base_type), narrow_to_int(exponent))
                    return convert_to(numeric_type, result)

                return self._bound(
                    operation, f"static method {method.name} (int exponent)", big_integer_power
                )
            return self._bound(operation, f"static method {method.name}", self._adapt(method))

        if has_operator_protocol(numeric_type, "__pow__"):

            def protocol_power(base: Any, exponent: Any) -> Any:
                return convert_to(numeric_type, operator.pow(base, exponent))

            return self._bound(operation, "operator protocol __pow__", protocol_power)

        raise self._unsupported(operation, "no static method 'pow' and no __pow__")

    def resolve_power_int(self) -> Callable[[Any, int], Any]:
        """
        Binding степени с целым показателем (T, int) -> T.

        Один binding на тип (singleton).
        """
        return self._table.get_or_resolve(_POWER_INT_KEY, self._bind_power_int)

    def _bind_power_int(self) -> Callable[[Any, int], Any]:
        operation = "power_int"
        numeric_type = self.numeric_type

        if numeric_type is CANONICAL_FLOATING_TYPE:
            return self._bound(operation, "math.pow", math.pow)

        if self._is_primitive() or numeric_type is complex:

            def primitive_power(base: Any, exponent: int) -> Any:
                return convert_to(numeric_type, operator.pow(base, exponent))

            return self._bound(operation, "primitive operator", primitive_power)

        method = find_static_method(numeric_type, _POWER_NAMES, 2)
        if method is not None:
            power = self._adapt(method)
            if self._exponent_accepts_int(method):
                return self._bound(operation, f"static method {method.name}", power)
            to_type = self._exponent_converter()

            def static_power(base: Any, exponent: int) -> Any:
                return power(base, to_type(exponent))

            return self._bound(
                operation, f"static method {method.name} (exponent converted to T)", static_power
            )

        if has_operator_protocol(numeric_type, "__pow__"):
            protocol = describe_signature("__pow__", numeric_type.__pow__)
            if self._exponent_accepts_int(protocol):
                to_type = _identity
                strategy = "operator protocol __pow__"
            else:
                to_type = self._exponent_converter()
                strategy = "operator protocol __pow__ (exponent converted to T)"

            def protocol_power(base: Any, exponent: int) -> Any:
                return convert_to(numeric_type, operator.pow(base, to_type(exponent)))

            return self._bound(operation, strategy, protocol_power)

        raise self._unsupported(
            operation, "no static method 'pow' whose exponent accepts int and no __pow__"
        )

    def _exponent_accepts_int(self, method: DiscoveredMethod) -> bool:
        # Показатель: второй позиционный параметр; без аннотации считается T
        exponent_type = method.parameter_types[1] if len(method.parameter_types) > 1 else None
        return exponent_type is not None and exponent_type is not self.numeric_type

    def _exponent_converter(self) -> Callable[[int], Any]:
        """Конверсия целого показателя в T: разбор текста, иначе конструктор T."""
        numeric_type = self.numeric_type
        try:
            parse = self.resolve_parse()
        except ArithmeticCapabilityError:
            logger.debug("No parse for %s, power_int exponent uses constructor", self.type_name)
            return lambda exponent: convert_to(numeric_type, exponent)

        def exponent_to_type(exponent: int) -> Any:
            if isinstance(exponent, numeric_type):
                return exponent
            return parse(str(exponent))

        return exponent_to_type

    def resolve_modpow(self) -> Callable[[Any, Any, Any], Any]:
        """
        Binding модульной степени (value, exponent, modulus) -> T.

        int: встроенный pow с тремя аргументами; пользовательский тип:
        статический mod_pow; иначе наивный fallback (power, затем modulo).

        Raises:
            UnsupportedOperation: если нет ни метода, ни операций для fallback
        """
        return self._table.get_or_resolve(_MODPOW_KEY, self._bind_modpow)

    def _bind_modpow(self) -> Callable[[Any, Any, Any], Any]:
        operation = "modpow"
        numeric_type = self.numeric_type

        if numeric_type is int:
            return self._bound(operation, "builtin pow", pow)

        if not self._is_primitive():
            method = find_static_method(numeric_type, _MODPOW_NAMES, 3)
            if method is not None:
                return self._bound(operation, f"static method {method.name}", self._adapt(method))

        try:
            naive = build_naive_modpow(self)
        except ArithmeticCapabilityError as e:
            raise self._unsupported(
                operation, "no static method 'mod_pow' and naive fallback unavailable"
            ) from e
        return self._bound(operation, "naive fallback", naive)

    def resolve_log(self) -> Callable[[Any, float], Any]:
        """
        Binding логарифма (value, base) -> T.

        Raises:
            UnsupportedOperation: если у T нет статического log(value, base)
        """
        return self._table.get_or_resolve(_LOG_KEY, self._bind_log)

    def _bind_log(self) -> Callable[[Any, float], Any]:
        operation = "log"
        numeric_type = self.numeric_type

        if numeric_type is CANONICAL_FLOATING_TYPE:
            return self._bound(operation, "math.log", math.log)

        if self._is_primitive():

            def primitive_log(value: Any, base: float) -> Any:
                return convert_to(numeric_type, math.log(value, base))

            return self._bound(operation, "math.log", primitive_log)

        if numeric_type is complex:
            return self._bound(operation, "cmath.log", cmath.log)

        method = find_static_method(numeric_type, _LOG_NAMES, 2)
        if method is not None:
            return self._bound(operation, f"static method {method.name}", self._adapt(method))

        raise self._unsupported(operation, "no static method 'log' taking (value, base)")

    # -------------------------------------------------------------------------
    # Байтовое представление
    # -------------------------------------------------------------------------

    def resolve_to_bytes(self) -> Callable[[Any], bytes]:
        """
        Binding конверсии значения в bytes.

        int: 8 байт little-endian со знаком; float: IEEE 754 double;
        пользовательский тип: метод экземпляра to_byte_array() или __bytes__.

        Raises:
            UnsupportedOperation: если подходящей конверсии нет
        """
        return self._table.get_or_resolve(_TO_BYTES_KEY, self._bind_to_bytes)

    def _bind_to_bytes(self) -> Callable[[Any], bytes]:
        operation = "to_bytes"
        numeric_type = self.numeric_type

        if numeric_type is int:

            def int_to_bytes(value: int) -> bytes:
                return value.to_bytes(INT_ENCODING_WIDTH, FIXED_WIDTH_BYTE_ORDER, signed=True)

            return self._bound(operation, "fixed-width int encoding", int_to_bytes)

        if numeric_type is CANONICAL_FLOATING_TYPE:
            return self._bound(operation, "fixed-width float encoding", _FLOAT_ENCODING.pack)

        if self._is_primitive():
            raise self._unsupported(operation, "no fixed-width encoding for this primitive")

        method = find_instance_method(numeric_type, _TO_BYTES_NAMES)
        if method is not None:
            function = method.function

            def instance_to_bytes(value: Any) -> bytes:
                return bytes(function(value))

            return self._bound(operation, f"instance method {method.name}", instance_to_bytes)

        if has_operator_protocol(numeric_type, "__bytes__"):
            return self._bound(operation, "operator protocol __bytes__", bytes)

        raise self._unsupported(operation, "no instance method 'to_byte_array' and no __bytes__")


def get_engine(numeric_type: type, registry: Optional[BindingRegistry] = None) -> CapabilityEngine:
    """Engine для типа T в заданном (или глобальном) реестре."""
    return CapabilityEngine.for_type(numeric_type, registry)
