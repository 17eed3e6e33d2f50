"""
Generic Arithmetic — алгоритмы над произвольным числовым типом T

Фасад не выполняет discovery и не кэширует ничего сам: каждая операция
берётся из CapabilityEngine (единственный источник истины для T).

Алгоритмы:
- increment/decrement, min/max, sign через сравнения с Zero
- GCD: Евклид по модулю, либо вычитанием для complex/decimal-shaped T
- перечисление делителей в порядке двух проходов
- классификация whole/fractional/integer/floating
- квадратный корень (нативный или бисекция), модульная степень (нативная или наивная)
- каноническое текстовое представление и bytes

Пример:
    >>> arith = GenericArithmetic.for_type(int)
    >>> arith.gcd(12, 18)
    6
    >>> arith.get_all_divisors(12)
    [1, 2, 3, 4, 6, 12]
"""

import copy
from functools import reduce
from typing import Any, Iterable, List, Optional, Tuple

from src.core.arithmetic.bindings import BinaryOp, BindingRegistry, ComparisonOp, UnaryOp
from src.core.arithmetic.complex_shape import modulo_free_gcd
from src.core.arithmetic.conversions import convert_to, narrow_to_int
from src.core.arithmetic.engine import CapabilityEngine, NumericConstants
from src.core.arithmetic.errors import NumericArgumentError
from src.core.arithmetic.formatting import format_number
from src.core.arithmetic.settings import DEFAULT_ARITHMETIC_SETTINGS, ArithmeticSettings
from src.core.domain.numeric_type import NumericKind, NumericTypeDescriptor


class GenericArithmetic:
    """
    Фасад арифметики над типом T.

    Экземпляр лёгкий: состояние: ссылка на Engine (bindings живут в реестре)
    и настройки форматирования.
    """

    def __init__(
        self,
        numeric_type: type,
        settings: Optional[ArithmeticSettings] = None,
        registry: Optional[BindingRegistry] = None,
    ):
        self.numeric_type = numeric_type
        self.settings = settings or DEFAULT_ARITHMETIC_SETTINGS
        self.engine = CapabilityEngine.for_type(numeric_type, registry)

    @classmethod
    def for_type(
        cls,
        numeric_type: type,
        settings: Optional[ArithmeticSettings] = None,
        registry: Optional[BindingRegistry] = None,
    ) -> "GenericArithmetic":
        return cls(numeric_type, settings, registry)

    def __repr__(self) -> str:
        return f"GenericArithmetic({self.engine.type_name})"

    @property
    def descriptor(self) -> NumericTypeDescriptor:
        return self.engine.descriptor

    # =========================================================================
    # КОНСТАНТЫ
    # =========================================================================

    @property
    def constants(self) -> NumericConstants:
        return self.engine.constants()

    @property
    def minus_one(self) -> Any:
        return self.engine.constants().minus_one

    @property
    def zero(self) -> Any:
        return self.engine.constants().zero

    @property
    def one(self) -> Any:
        return self.engine.constants().one

    @property
    def two(self) -> Any:
        return self.engine.constants().two

    # =========================================================================
    # ПРЯМАЯ ДЕЛЕГАЦИЯ
    # =========================================================================

    def add(self, augend: Any, addend: Any) -> Any:
        return self.engine.resolve_binary(BinaryOp.ADD)(augend, addend)

    def subtract(self, minuend: Any, subtrahend: Any) -> Any:
        return self.engine.resolve_binary(BinaryOp.SUBTRACT)(minuend, subtrahend)

    def multiply(self, multiplicand: Any, multiplier: Any) -> Any:
        return self.engine.resolve_binary(BinaryOp.MULTIPLY)(multiplicand, multiplier)

    def divide(self, dividend: Any, divisor: Any) -> Any:
        """Деление; для целочисленного вида: деление с округлением вниз."""
        return self.engine.resolve_binary(BinaryOp.DIVIDE)(dividend, divisor)

    def modulo(self, dividend: Any, divisor: Any) -> Any:
        return self.engine.resolve_binary(BinaryOp.MODULO)(dividend, divisor)

    def power(self, base: Any, exponent: Any) -> Any:
        return self.engine.resolve_power()(base, exponent)

    def power_int(self, base: Any, exponent: int) -> Any:
        """Степень с целым показателем (показатель сужается до int)."""
        return self.engine.resolve_power_int()(base, narrow_to_int(exponent))

    def negate(self, value: Any) -> Any:
        return self.engine.resolve_unary(UnaryOp.NEGATE)(value)

    def increment(self, value: Any) -> Any:
        return self.add(value, self.one)

    def decrement(self, value: Any) -> Any:
        return self.subtract(value, self.one)

    def greater_than(self, left: Any, right: Any) -> bool:
        return self.engine.resolve_comparison(ComparisonOp.GREATER_THAN)(left, right)

    def less_than(self, left: Any, right: Any) -> bool:
        return self.engine.resolve_comparison(ComparisonOp.LESS_THAN)(left, right)

    def greater_or_equal(self, left: Any, right: Any) -> bool:
        return self.engine.resolve_comparison(ComparisonOp.GREATER_OR_EQUAL)(left, right)

    def less_or_equal(self, left: Any, right: Any) -> bool:
        return self.engine.resolve_comparison(ComparisonOp.LESS_OR_EQUAL)(left, right)

    def equal(self, left: Any, right: Any) -> bool:
        """Равенство; None равен только None."""
        if left is None:
            return right is None
        return self.engine.resolve_comparison(ComparisonOp.EQUAL)(left, right)

    def not_equal(self, left: Any, right: Any) -> bool:
        return not self.equal(left, right)

    def parse(self, text: str) -> Any:
        return self.engine.resolve_parse()(text)

    def abs(self, value: Any) -> Any:
        return self.engine.resolve_abs()(value)

    def truncate(self, value: Any) -> Any:
        """Усечение дробной части (identity, если у T нет truncate)."""
        return self.engine.resolve_truncate()(value)

    def log(self, value: Any, base: float) -> Any:
        return self.engine.resolve_log()(value, base)

    def convert(self, value: Any) -> Any:
        """Конверсия значения другого типа в T."""
        return convert_to(self.numeric_type, value)

    def clone(self, value: Any) -> Any:
        """Поверхностная копия значения."""
        return copy.copy(value)

    # =========================================================================
    # СРАВНЕНИЕ И ЗНАК
    # =========================================================================

    def max(self, left: Any, right: Any) -> Any:
        if self.greater_or_equal(left, right):
            return left
        return right

    def min(self, left: Any, right: Any) -> Any:
        if self.less_or_equal(left, right):
            return left
        return right

    def sign(self, value: Any) -> int:
        """
        Знак значения через сравнения с Zero: 1, -1 или 0.

        В отличие от engine.resolve_sign работает для любого T со сравнениями.
        """
        zero = self.zero
        if self.greater_than(value, zero):
            return 1
        if self.less_than(value, zero):
            return -1
        return 0

    # =========================================================================
    # КОРНИ И СТЕПЕНИ
    # =========================================================================

    def square_root(self, value: Any) -> Any:
        """
        Квадратный корень.

        Примитивы (кроме float) вычисляются через math.sqrt с конверсией
        туда и обратно; остальные: нативный sqrt или бисекция.
        """
        return self.engine.resolve_sqrt()(value)

    def square_root_bisection(self, value: Any) -> Any:
        """
        Квадратный корень бисекцией на [0, abs(value)].

        Точен для полных квадратов целочисленных T; для непрерывных T
        результат отличается от корня не более чем на единицу.
        """
        return self.engine.resolve_bisection_sqrt()(value)

    def modpow(self, value: Any, exponent: Any, modulus: Any) -> Any:
        return self.engine.resolve_modpow()(value, exponent, modulus)

    def modpow_fallback(self, value: Any, exponent: Any, modulus: Any) -> Any:
        """Наивная модульная степень: (value ** exponent) % modulus."""
        return self.modulo(self.power(value, exponent), modulus)

    # =========================================================================
    # ДЕЛИМОСТЬ
    # =========================================================================

    def div_rem(self, dividend: Any, divisor: Any) -> Tuple[Any, Any]:
        """
        Частное и остаток двумя независимыми операциями.

        Returns:
            (divide(dividend, divisor), modulo(dividend, divisor))
        """
        remainder = self.modulo(dividend, divisor)
        quotient = self.divide(dividend, divisor)
        return quotient, remainder

    def gcd(self, left: Any, right: Any) -> Any:
        """
        Наибольший общий делитель.

        Для complex-shaped и decimal-shaped T: вычитанием (modulo_free_gcd),
        иначе: Евклид по модулю на абсолютных значениях.

        Examples:
            >>> GenericArithmetic.for_type(int).gcd(-12, 18)
            6
        """
        descriptor = self.descriptor
        if descriptor.is_complex_shaped or descriptor.is_decimal_shaped:
            return modulo_free_gcd(self, left, right)

        modulo = self.engine.resolve_binary(BinaryOp.MODULO)
        greater_than = self.engine.resolve_comparison(ComparisonOp.GREATER_THAN)
        zero = self.zero

        abs_left = self.abs(left)
        abs_right = self.abs(right)
        while self.not_equal(abs_left, zero) and self.not_equal(abs_right, zero):
            if greater_than(abs_left, abs_right):
                abs_left = modulo(abs_left, abs_right)
            else:
                abs_right = modulo(abs_right, abs_left)

        return self.max(abs_left, abs_right)

    def gcd_many(self, values: Iterable[Any]) -> Any:
        """
        GCD последовательности попарной свёрткой слева направо.

        Raises:
            NumericArgumentError: если последовательность пуста
        """
        values = list(values)
        if not values:
            raise NumericArgumentError("Cannot compute GCD of an empty sequence")
        return reduce(self.gcd, values)

    def get_all_divisors(self, value: Any) -> List[Any]:
        """
        Все делители значения, включая 1 и само значение.

        Порядок: порядок двух проходов (не сортировка): сначала делители
        i с i*i < n по возрастанию, затем n / i для i от floor(sqrt(n)) до 1.
        Для отрицательного значения первым идёт -1.

        Floating-point T сужается до int, делители считаются в int и
        конвертируются обратно в T.

        Examples:
            >>> GenericArithmetic.for_type(int).get_all_divisors(-7)
            [-1, 1, 7]
        """
        if self.descriptor.is_floating_point:
            integer_arithmetic = GenericArithmetic.for_type(int, registry=self.engine.registry)
            divisors = integer_arithmetic.get_all_divisors(int(value))
            return [self.convert(divisor) for divisor in divisors]

        if self.equal(self.abs(value), self.one):
            return [value]

        n = value
        results: List[Any] = []
        if self.sign(n) == -1:
            results.append(self.minus_one)
            n = self.multiply(n, self.minus_one)

        modulo = self.engine.resolve_binary(BinaryOp.MODULO)
        multiply = self.engine.resolve_binary(BinaryOp.MULTIPLY)
        zero = self.zero
        one = self.one

        i = one
        while self.less_than(multiply(i, i), n):
            if self.equal(modulo(n, i), zero):
                results.append(i)
            i = self.increment(i)

        i = self.truncate(self.square_root(n))
        while self.greater_or_equal(i, one):
            if self.equal(modulo(n, i), zero):
                results.append(self.divide(n, i))
            i = self.decrement(i)

        return results

    # =========================================================================
    # КЛАССИФИКАЦИЯ
    # =========================================================================

    def is_whole_number(self, value: Any) -> bool:
        """
        Является ли значение целым.

        - big-integer-shaped и целочисленные примитивы: всегда True
        - float/Decimal/Fraction: value % 1 == 0
        - встроенный complex: imag == 0 и вещественная часть без дробной части
        - прочие пользовательские типы: False (не определено)
        """
        descriptor = self.descriptor
        if descriptor.is_big_integer_shaped:
            return True
        if descriptor.is_arithmetic_primitive:
            if descriptor.kind is NumericKind.INTEGER:
                return True
            return self.equal(self.modulo(value, self.one), self.zero)
        if self.numeric_type is complex:
            return value.imag == 0 and value.real % 1 == 0
        return False

    def is_floating_point_type(self) -> bool:
        return self.descriptor.is_floating_point

    def is_integer_type(self) -> bool:
        return self.descriptor.is_integer

    def is_fractional_value(self, value: Any) -> bool:
        """Дробное значение примитивного типа (для прочих T всегда False)."""
        return self.descriptor.is_arithmetic_primitive and not self.is_whole_number(value)

    # =========================================================================
    # ПРЕДСТАВЛЕНИЕ
    # =========================================================================

    def to_string(self, value: Any) -> str:
        """Текст значения без хвостовых нулей дробной части ("3.1400" -> "3.14")."""
        return format_number(value, self.settings)

    def to_bytes(self, value: Any) -> bytes:
        return self.engine.resolve_to_bytes()(value)
