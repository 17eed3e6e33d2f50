"""
Type Shape Detector — классификация типа-кандидата T

Определяет, какой стратегией Engine получает операции для T:
- PRIMITIVE: встроенный арифметический тип (int, float, Decimal, Fraction)
- COMPLEX: тип с компонентами real/imaginary (полного порядка нет)
- CUSTOM: непрозрачный пользовательский тип (поиск статических методов)

Вид числа (NumericKind) пользовательского типа определяется по порядку:
1. Явный маркер класса __numeric_kind__
2. Регистрация через register_numeric_kind()
3. Структура complex-shaped (real + imag/imaginary)
4. Эвристика по имени типа (только для типов без объявления)

ИНВАРИАНТ: классификация T не меняется за время жизни процесса.
"""

import inspect
import numbers
import threading
from decimal import Decimal
from fractions import Fraction
from typing import Dict, Final, Optional

from src.core.domain.numeric_type import NumericKind, NumericTypeDescriptor, TypeShape


# =============================================================================
# ВСТРОЕННЫЕ ПРИМИТИВЫ
# =============================================================================

# bool намеренно не входит: точное совпадение типа, без подклассов
PRIMITIVE_KINDS: Final[Dict[type, NumericKind]] = {
    int: NumericKind.INTEGER,
    float: NumericKind.FLOATING,
    Decimal: NumericKind.DECIMAL,
    Fraction: NumericKind.RATIONAL,
}

# Канонический (самый широкий) floating тип
CANONICAL_FLOATING_TYPE: Final[type] = float

# Атрибут класса для явного объявления вида числа
NUMERIC_KIND_MARKER: Final[str] = "__numeric_kind__"

# Подстроки имён для эвристики; порядок важен: нецелые виды проверяются первыми
_NAME_HEURISTIC: Final[tuple] = (
    ("rational", NumericKind.RATIONAL),
    ("fraction", NumericKind.RATIONAL),
    ("decimal", NumericKind.DECIMAL),
    ("float", NumericKind.FLOATING),
    ("integer", NumericKind.INTEGER),
)

_kind_registry: Dict[type, NumericKind] = {}
_kind_registry_lock = threading.Lock()


# =============================================================================
# РЕГИСТРАЦИЯ
# =============================================================================


def register_numeric_kind(numeric_type: type, kind: NumericKind) -> None:
    """
    Явное объявление вида числа для типа, который нельзя изменить.

    Регистрация должна выполняться до первого использования T.

    Raises:
        ValueError: если T: встроенный примитив или уже зарегистрирован
            с другим видом
    """
    kind = NumericKind(kind)
    if numeric_type in PRIMITIVE_KINDS:
        raise ValueError(f"Cannot re-register built-in primitive {numeric_type.__name__}")

    with _kind_registry_lock:
        existing = _kind_registry.get(numeric_type)
        if existing is not None and existing is not kind:
            raise ValueError(
                f"{numeric_type.__name__} is already registered as {existing.value}, "
                f"cannot re-register as {kind.value}"
            )
        _kind_registry[numeric_type] = kind


def _declares_member(numeric_type: type, name: str) -> bool:
    if hasattr(numeric_type, name):
        return True
    for klass in numeric_type.__mro__:
        if name in inspect.get_annotations(klass):
            return True
        if name in vars(klass).get("__slots__", ()):
            return True
    return False


# =============================================================================
# КЛАССИФИКАЦИЯ
# =============================================================================


def is_arithmetic_primitive(numeric_type: type) -> bool:
    """Встроенный арифметический примитив (точное совпадение типа)."""
    return numeric_type in PRIMITIVE_KINDS


def _explicit_kind(numeric_type: type) -> Optional[NumericKind]:
    marker = getattr(numeric_type, NUMERIC_KIND_MARKER, None)
    if marker is not None:
        return NumericKind(marker)
    with _kind_registry_lock:
        return _kind_registry.get(numeric_type)


def is_complex_shaped(numeric_type: type) -> bool:
    """
    Тип с компонентами real/imaginary.

    Примитивы и числа numbers.Real (у которых тоже есть .real/.imag)
    complex-shaped не являются.
    """
    if is_arithmetic_primitive(numeric_type):
        return False
    if _explicit_kind(numeric_type) is NumericKind.COMPLEX:
        return True
    if issubclass(numeric_type, numbers.Real):
        return False
    if issubclass(numeric_type, numbers.Complex):
        return True
    return _declares_member(numeric_type, "real") and (
        _declares_member(numeric_type, "imag") or _declares_member(numeric_type, "imaginary")
    )


def numeric_kind_of(numeric_type: type) -> NumericKind:
    """Вид числа типа T."""
    if is_arithmetic_primitive(numeric_type):
        return PRIMITIVE_KINDS[numeric_type]

    explicit = _explicit_kind(numeric_type)
    if explicit is not None:
        return explicit

    if is_complex_shaped(numeric_type):
        return NumericKind.COMPLEX

    # Эвристика по имени: приблизительная, только для необъявленных типов
    name = numeric_type.__name__.lower()
    for token, kind in _NAME_HEURISTIC:
        if token in name:
            return kind

    return NumericKind.CUSTOM


def shape_of(numeric_type: type) -> TypeShape:
    """Форма типа, определяющая стратегию binding."""
    if is_arithmetic_primitive(numeric_type):
        return TypeShape.PRIMITIVE
    if is_complex_shaped(numeric_type):
        return TypeShape.COMPLEX
    return TypeShape.CUSTOM


def is_big_integer_shaped(numeric_type: type) -> bool:
    """int произвольной точности или пользовательский целочисленный тип."""
    if numeric_type is int:
        return True
    return not is_arithmetic_primitive(numeric_type) and (
        numeric_kind_of(numeric_type) is NumericKind.INTEGER
    )


def is_decimal_shaped(numeric_type: type) -> bool:
    """Пользовательский десятичный тип (GCD без остатка от деления)."""
    return not is_arithmetic_primitive(numeric_type) and (
        numeric_kind_of(numeric_type) is NumericKind.DECIMAL
    )


def is_floating_point_type(numeric_type: type) -> bool:
    """Floating/decimal вид встроенного примитива."""
    return PRIMITIVE_KINDS.get(numeric_type) in (NumericKind.FLOATING, NumericKind.DECIMAL)


def is_integer_type(numeric_type: type) -> bool:
    """
    Целочисленный вид.

    Для примитивов: по виду примитива, для complex-shaped: False,
    для остальных: по объявленному виду (маркер, регистрация, эвристика имени).
    """
    if is_arithmetic_primitive(numeric_type):
        return PRIMITIVE_KINDS[numeric_type] is NumericKind.INTEGER
    if is_complex_shaped(numeric_type):
        return False
    return numeric_kind_of(numeric_type) is NumericKind.INTEGER


def is_whole_number_capable(numeric_type: type) -> bool:
    """Определена ли для значений T проверка is_whole_number."""
    return (
        is_big_integer_shaped(numeric_type)
        or is_arithmetic_primitive(numeric_type)
        or numeric_type is complex
    )


def describe_numeric_type(numeric_type: type) -> NumericTypeDescriptor:
    """
    Построение дескриптора типа T.

    Raises:
        TypeError: если numeric_type не является классом
    """
    if not isinstance(numeric_type, type):
        raise TypeError(f"numeric_type must be a class, got {numeric_type!r}")

    return NumericTypeDescriptor(
        type_name=numeric_type.__qualname__,
        module=numeric_type.__module__,
        shape=shape_of(numeric_type),
        kind=numeric_kind_of(numeric_type),
        is_arithmetic_primitive=is_arithmetic_primitive(numeric_type),
        is_complex_shaped=is_complex_shaped(numeric_type),
        is_big_integer_shaped=is_big_integer_shaped(numeric_type),
        is_decimal_shaped=is_decimal_shaped(numeric_type),
        is_floating_point=is_floating_point_type(numeric_type),
        is_integer=is_integer_type(numeric_type),
        is_whole_number_capable=is_whole_number_capable(numeric_type),
    )
