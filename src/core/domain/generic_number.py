"""
GenericNumber — значение типа T с операторным синтаксисом

Тонкая обёртка над GenericArithmetic: каждый оператор: один вызов фасада,
собственного поведения нет. Операнд: GenericNumber того же T или
значение T; для прочих операндов возвращается NotImplemented.

Пример:
    >>> from fractions import Fraction
    >>> a = GenericNumber(Fraction(1, 2))
    >>> b = GenericNumber(Fraction(1, 3))
    >>> str(a + b)
    '5/6'
"""

from typing import Any, Optional

from src.core.arithmetic.generic_arithmetic import GenericArithmetic
from src.core.arithmetic.settings import ArithmeticSettings


class GenericNumber:
    """Неизменяемая обёртка значения типа T."""

    __slots__ = ("_value", "_arithmetic")

    def __init__(self, value: Any, settings: Optional[ArithmeticSettings] = None):
        if value is None:
            raise ValueError("GenericNumber value cannot be None")
        if isinstance(value, GenericNumber):
            value = value.value
        object.__setattr__(self, "_value", value)
        object.__setattr__(self, "_arithmetic", GenericArithmetic.for_type(type(value), settings))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def value(self) -> Any:
        return self._value

    @property
    def arithmetic(self) -> GenericArithmetic:
        return self._arithmetic

    def _wrap(self, value: Any) -> "GenericNumber":
        return GenericNumber(value, self._arithmetic.settings)

    def _unwrap(self, other: Any) -> Any:
        if isinstance(other, GenericNumber):
            other = other.value
        if type(other) is not self._arithmetic.numeric_type:
            return NotImplemented
        return other

    # -------------------------------------------------------------------------
    # Унарные
    # -------------------------------------------------------------------------

    def __pos__(self) -> "GenericNumber":
        return self

    def __neg__(self) -> "GenericNumber":
        return self._wrap(self._arithmetic.negate(self._value))

    def __abs__(self) -> "GenericNumber":
        return self._wrap(self._arithmetic.abs(self._value))

    # -------------------------------------------------------------------------
    # Бинарные
    # -------------------------------------------------------------------------

    def __add__(self, other: Any) -> "GenericNumber":
        right = self._unwrap(other)
        if right is NotImplemented:
            return NotImplemented
        return self._wrap(self._arithmetic.add(self._value, right))

    def __radd__(self, other: Any) -> "GenericNumber":
        left = self._unwrap(other)
        if left is NotImplemented:
            return NotImplemented
        return self._wrap(self._arithmetic.add(left, self._value))

    def __sub__(self, other: Any) -> "GenericNumber":
        right = self._unwrap(other)
        if right is NotImplemented:
            return NotImplemented
        return self._wrap(self._arithmetic.subtract(self._value, right))

    def __rsub__(self, other: Any) -> "GenericNumber":
        left = self._unwrap(other)
        if left is NotImplemented:
            return NotImplemented
        return self._wrap(self._arithmetic.subtract(left, self._value))

    def __mul__(self, other: Any) -> "GenericNumber":
        right = self._unwrap(other)
        if right is NotImplemented:
            return NotImplemented
        return self._wrap(self._arithmetic.multiply(self._value, right))

    def __rmul__(self, other: Any) -> "GenericNumber":
        left = self._unwrap(other)
        if left is NotImplemented:
            return NotImplemented
        return self._wrap(self._arithmetic.multiply(left, self._value))

    def __truediv__(self, other: Any) -> "GenericNumber":
        right = self._unwrap(other)
        if right is NotImplemented:
            return NotImplemented
        return self._wrap(self._arithmetic.divide(self._value, right))

    def __mod__(self, other: Any) -> "GenericNumber":
        right = self._unwrap(other)
        if right is NotImplemented:
            return NotImplemented
        return self._wrap(self._arithmetic.modulo(self._value, right))

    def __pow__(self, other: Any) -> "GenericNumber":
        if isinstance(other, int) and not isinstance(other, bool) and not isinstance(self._value, int):
            return self._wrap(self._arithmetic.power_int(self._value, other))
        right = self._unwrap(other)
        if right is NotImplemented:
            return NotImplemented
        return self._wrap(self._arithmetic.power(self._value, right))

    # -------------------------------------------------------------------------
    # Сравнения
    # -------------------------------------------------------------------------

    def __eq__(self, other: Any) -> bool:
        right = self._unwrap(other)
        if right is NotImplemented:
            return NotImplemented
        return self._arithmetic.equal(self._value, right)

    def __ne__(self, other: Any) -> bool:
        right = self._unwrap(other)
        if right is NotImplemented:
            return NotImplemented
        return self._arithmetic.not_equal(self._value, right)

    def __gt__(self, other: Any) -> bool:
        right = self._unwrap(other)
        if right is NotImplemented:
            return NotImplemented
        return self._arithmetic.greater_than(self._value, right)

    def __lt__(self, other: Any) -> bool:
        right = self._unwrap(other)
        if right is NotImplemented:
            return NotImplemented
        return self._arithmetic.less_than(self._value, right)

    def __ge__(self, other: Any) -> bool:
        right = self._unwrap(other)
        if right is NotImplemented:
            return NotImplemented
        return self._arithmetic.greater_or_equal(self._value, right)

    def __le__(self, other: Any) -> bool:
        right = self._unwrap(other)
        if right is NotImplemented:
            return NotImplemented
        return self._arithmetic.less_or_equal(self._value, right)

    def compare(self, other: Any) -> int:
        """
        Трёхзначное сравнение: -1, 0 или 1.

        Raises:
            TypeError: если other не GenericNumber/значение того же T
        """
        right = self._unwrap(other)
        if right is NotImplemented:
            raise TypeError(
                f"Cannot compare GenericNumber[{self._arithmetic.numeric_type.__name__}] "
                f"with {type(other).__name__}"
            )
        if self._arithmetic.less_than(self._value, right):
            return -1
        if self._arithmetic.greater_than(self._value, right):
            return 1
        return 0

    def __hash__(self) -> int:
        return hash(self._value)

    # -------------------------------------------------------------------------
    # Представление
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        return self._arithmetic.to_string(self._value)

    def __format__(self, format_spec: str) -> str:
        if not format_spec:
            return str(self)
        return format(self._value, format_spec)

    def __repr__(self) -> str:
        return f"GenericNumber({self._value!r})"
