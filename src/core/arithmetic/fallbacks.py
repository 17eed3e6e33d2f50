"""
Fallbacks — запасные алгоритмы на основе разрешённых операций

Используются Engine, когда у типа T нет собственной реализации:
- квадратный корень бисекцией (нет sqrt)
- наивное модульное возведение в степень (нет mod_pow)

Все зависимости разрешаются при построении fallback, а не при вызове:
если хотя бы одной операции нет, fallback не строится целиком.
"""

from typing import TYPE_CHECKING, Any, Callable

from src.core.arithmetic.bindings import BinaryOp, ComparisonOp

if TYPE_CHECKING:
    from src.core.arithmetic.engine import CapabilityEngine


def build_bisection_sqrt(engine: "CapabilityEngine") -> Callable[[Any], Any]:
    """
    Квадратный корень бисекцией на отрезке [0, abs(x)].

    Бисекция ориентирована на целые: ищется n, для которого n² ближе всего к x
    снизу. Точна только там, где квадрат середины может совпасть с x; для
    непрерывных типов сходится с точностью до единицы.
    """
    add = engine.resolve_binary(BinaryOp.ADD)
    multiply = engine.resolve_binary(BinaryOp.MULTIPLY)
    divide = engine.resolve_binary(BinaryOp.DIVIDE)
    greater_than = engine.resolve_comparison(ComparisonOp.GREATER_THAN)
    less_than = engine.resolve_comparison(ComparisonOp.LESS_THAN)
    equal = engine.resolve_comparison(ComparisonOp.EQUAL)
    absolute = engine.resolve_abs()
    constants = engine.constants()
    zero, one, two = constants.zero, constants.one, constants.two

    def square_root_bisection(value: Any) -> Any:
        if equal(value, zero):
            return zero

        low = zero
        high = absolute(value)
        while greater_than(high, add(low, one)):
            middle = divide(add(low, high), two)
            square = multiply(middle, middle)
            if greater_than(square, value):
                high = middle
            elif less_than(square, value):
                low = middle
            else:
                return middle
        # Цикл не выполняется для value == 1: корень совпадает с high
        if equal(multiply(high, high), value):
            return high
        return low

    return square_root_bisection


def build_naive_modpow(engine: "CapabilityEngine") -> Callable[[Any, Any, Any], Any]:
    """
    Модульная степень как (value ** exponent) % modulus.

    Без быстрого возведения в степень: промежуточная степень вычисляется
    полностью.
    """
    power = engine.resolve_power()
    modulo = engine.resolve_binary(BinaryOp.MODULO)

    def modpow_naive(value: Any, exponent: Any, modulus: Any) -> Any:
        return modulo(power(value, exponent), modulus)

    return modpow_naive
