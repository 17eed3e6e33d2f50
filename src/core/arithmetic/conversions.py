"""
Conversions — конверсия значений в тип T и безопасное сужение до int
"""

import operator
from typing import Any, Optional


def convert_to(numeric_type: type, value: Any) -> Any:
    """
    Конверсия значения в тип T.

    - Значение уже типа T возвращается без изменений
    - complex строится из вещественной части: complex(float(value), 0)
    - Иначе вызывается конструктор T(value)

    Examples:
        >>> convert_to(float, 3)
        3.0
        >>> convert_to(int, 3.9)
        3
        >>> convert_to(complex, 2)
        (2+0j)
    """
    if isinstance(value, numeric_type):
        return value
    if numeric_type is complex:
        return complex(float(value), 0.0)
    return numeric_type(value)


def convert_if_needed(value: Any, target_type: Optional[type]) -> Any:
    """Конверсия к target_type, если он известен и значение другого типа."""
    if target_type is None or target_type is object:
        return value
    return convert_to(target_type, value)


def narrow_to_int(value: Any) -> int:
    """
    Безопасное сужение значения до нативного int.

    Целочисленные типы (поддерживающие __index__) сужаются без потерь.
    Для прочих значений допускается только целое значение.

    Raises:
        ValueError: если значение не целое (например, 2.5)
        TypeError: если значение нельзя привести к int

    Examples:
        >>> narrow_to_int(7)
        7
        >>> narrow_to_int(4.0)
        4
    """
    try:
        return operator.index(value)
    except TypeError:
        pass

    integral = int(value)
    if integral != value:
        raise ValueError(f"Cannot narrow non-integral value {value!r} to int")
    return integral
