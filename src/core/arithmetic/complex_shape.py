"""
Complex Shape — сравнение, разбор и GCD для complex-shaped типов

У комплексных чисел нет полного порядка, поэтому отношения порядка
заменяются суррогатом: знаковая величина = модуль значения, взятый со знаком
минус, если вещественная часть отрицательна. Равенство/неравенство:
структурное, без суррогата.

Формат текста: "(real, imaginary)" или просто "real" (imaginary = 0).
"""

import logging
import re
from typing import TYPE_CHECKING, Any

from src.core.arithmetic.bindings import ComparisonOp
from src.core.arithmetic.discovery import find_static_method
from src.core.arithmetic.errors import NumericArgumentError, NumericFormatError

if TYPE_CHECKING:
    from src.core.arithmetic.generic_arithmetic import GenericArithmetic


logger = logging.getLogger(__name__)

_COMPONENT_SEPARATORS = re.compile(r"[(),]")


# =============================================================================
# КОМПОНЕНТЫ
# =============================================================================


def real_part(value: Any) -> Any:
    """Вещественная часть значения."""
    return value.real


def imaginary_part(value: Any) -> Any:
    """Мнимая часть значения (атрибут imag или imaginary)."""
    if hasattr(value, "imag"):
        return value.imag
    return value.imaginary


def real_part_sign(value: Any) -> int:
    """Знак вещественной части: 1, -1 или 0."""
    real = real_part(value)
    if real > 0:
        return 1
    if real < 0:
        return -1
    return 0


def magnitude(value: Any) -> Any:
    """
    Модуль значения как вещественное число.

    Используется статический метод abs типа, если он есть, иначе abs().
    Если результат сам complex-shaped, берётся его вещественная часть.
    """
    method = find_static_method(type(value), ("abs",), 1)
    result = method.function(value) if method is not None else abs(value)
    # У вещественных чисел .real возвращает само значение
    return getattr(result, "real", result)


def signed_magnitude(value: Any) -> Any:
    """Модуль со знаком вещественной части (суррогат порядка)."""
    modulus = magnitude(value)
    if real_part_sign(value) == -1:
        return -modulus
    return modulus


# =============================================================================
# СУРРОГАТНЫЙ ПОРЯДОК
# =============================================================================


def surrogate_compare(left: Any, right: Any, operation: ComparisonOp) -> bool:
    """
    Сравнение complex-shaped значений через знаковую величину.

    > и < сравнивают знаковые величины; >= и <= дополнительно истинны при
    структурном равенстве.

    Examples:
        >>> surrogate_compare(complex(-3, 4), complex(3, 4), ComparisonOp.LESS_THAN)
        True

    Raises:
        ValueError: если operation не является сравнением порядка
    """
    operation = ComparisonOp(operation)
    left_key = signed_magnitude(left)
    right_key = signed_magnitude(right)

    if operation is ComparisonOp.GREATER_THAN:
        return left_key > right_key
    if operation is ComparisonOp.LESS_THAN:
        return left_key < right_key
    if operation is ComparisonOp.GREATER_OR_EQUAL:
        return left_key > right_key or left == right
    if operation is ComparisonOp.LESS_OR_EQUAL:
        return left_key < right_key or left == right

    raise ValueError(f"Not an ordering comparison: {operation.value}")


# =============================================================================
# РАЗБОР ТЕКСТА
# =============================================================================


def _parse_real(component: str, text: str) -> float:
    try:
        return float(component)
    except ValueError as e:
        raise NumericFormatError(
            f"Component {component!r} of {text!r} is not a number"
        ) from e


def parse_complex(text: str) -> complex:
    """
    Разбор комплексного числа из текста.

    Принимаются "(real, imaginary)", "real" и литерал Python ("(1+2j)").

    Raises:
        NumericArgumentError: если text: None, пустая строка или пробелы
        NumericFormatError: если компонент больше двух или они не числа

    Examples:
        >>> parse_complex("(1.75, 3.5)")
        (1.75+3.5j)
        >>> parse_complex("-2")
        (-2+0j)
    """
    if text is None or not str(text).strip():
        raise NumericArgumentError("Argument text cannot be None, empty or whitespace")

    compact = "".join(ch for ch in str(text) if not ch.isspace())
    parts = [part for part in _COMPONENT_SEPARATORS.split(compact) if part]

    if not parts or len(parts) > 2:
        raise NumericFormatError(
            f"Argument {text!r} not of the correct format. "
            f'Expecting format: "(1.75, 3.5)"'
        )

    if len(parts) == 2:
        return complex(_parse_real(parts[0], text), _parse_real(parts[1], text))

    try:
        return complex(float(parts[0]), 0.0)
    except ValueError:
        pass

    # Литерал Python, например результат str(complex)
    try:
        return complex(parts[0])
    except ValueError as e:
        raise NumericFormatError(f"Argument {text!r} is not a complex number") from e


# =============================================================================
# GCD БЕЗ ОСТАТКА ОТ ДЕЛЕНИЯ
# =============================================================================


def modulo_free_gcd(arith: "GenericArithmetic", left: Any, right: Any) -> Any:
    """
    GCD вычитанием: из большего вычитается меньшее, пока одно не станет нулём.

    Используется для complex-shaped и decimal-shaped типов, у которых
    осмысленный остаток от деления не гарантирован. Ожидаются
    неотрицательные операнды (по суррогатному порядку).
    """
    zero = arith.zero
    if arith.equal(left, zero):
        return right

    while arith.not_equal(right, zero):
        if arith.greater_than(left, right):
            left = arith.subtract(left, right)
        else:
            right = arith.subtract(right, left)

    return left
