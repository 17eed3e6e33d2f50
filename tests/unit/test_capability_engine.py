"""
Тесты для модуля Capability Engine

Проверяет:
1. Bindings примитивов (операторы, floor division для int, math/cmath)
2. Discovery статических методов и операторных протоколов
3. Fallbacks: negate через умножение, бисекция sqrt, наивный modpow
4. Identity truncate и PrimitiveOnlyOperation для sign
5. UnsupportedOperation с именем типа и операции; отсутствие частичных bindings
6. Кэширование и логирование разрешений
"""

import logging
import math
import struct
from decimal import Decimal
from fractions import Fraction

import pytest

from src.core.arithmetic.bindings import (
    BinaryOp,
    BindingKey,
    BindingRegistry,
    ComparisonOp,
    OperationKind,
    UnaryOp,
)
from src.core.arithmetic.engine import CapabilityEngine
from src.core.arithmetic.errors import (
    ArithmeticCapabilityError,
    NumericArgumentError,
    NumericFormatError,
    PrimitiveOnlyOperation,
    UnsupportedOperation,
)
from tests.unit.sample_types import (
    OpaqueNumber,
    PairComplex,
    PowerDecimal,
    ProtocolDecimal,
    StaticDecimal,
    StaticInteger,
)


@pytest.fixture
def registry():
    """Изолированный реестр bindings для каждого теста"""
    return BindingRegistry()


def engine_for(numeric_type, registry):
    return CapabilityEngine.for_type(numeric_type, registry)


# =============================================================================
# ПРИМИТИВЫ
# =============================================================================


class TestPrimitiveBindings:
    """Bindings встроенных примитивов"""

    def test_int_arithmetic(self, registry) -> None:
        """Операторы int"""
        engine = engine_for(int, registry)

        assert engine.resolve_binary(BinaryOp.ADD)(2, 3) == 5
        assert engine.resolve_binary(BinaryOp.SUBTRACT)(2, 3) == -1
        assert engine.resolve_binary(BinaryOp.MULTIPLY)(4, 3) == 12
        assert engine.resolve_binary(BinaryOp.MODULO)(17, 5) == 2

    def test_int_division_stays_integer(self, registry) -> None:
        """Деление int: floor division"""
        divide = engine_for(int, registry).resolve_binary(BinaryOp.DIVIDE)

        assert divide(7, 2) == 3
        assert isinstance(divide(7, 2), int)

    def test_float_division(self, registry) -> None:
        """Деление float: истинное деление"""
        divide = engine_for(float, registry).resolve_binary("divide")
        assert divide(7.0, 2.0) == pytest.approx(3.5)

    def test_tags_accept_plain_strings(self, registry) -> None:
        """Теги можно передавать строками"""
        engine = engine_for(int, registry)

        assert engine.resolve_binary("add") is engine.resolve_binary(BinaryOp.ADD)
        assert engine.resolve_comparison(">=")(3, 3) is True

    @pytest.mark.parametrize(
        "tag,expected",
        [(">", False), ("<", True), (">=", False), ("<=", True), ("==", False), ("!=", True)],
    )
    def test_int_comparisons(self, registry, tag, expected) -> None:
        """Шесть сравнений int"""
        assert engine_for(int, registry).resolve_comparison(tag)(2, 3) is expected

    def test_parse_uses_constructor(self, registry) -> None:
        """Разбор примитивов: конструктор типа"""
        assert engine_for(int, registry).resolve_parse()("-42") == -42
        assert engine_for(Decimal, registry).resolve_parse()("2.50") == Decimal("2.50")
        assert engine_for(Fraction, registry).resolve_parse()("1/3") == Fraction(1, 3)

    @pytest.mark.parametrize("numeric_type", [int, float, Decimal, Fraction])
    def test_parse_malformed_text(self, registry, numeric_type) -> None:
        """Некорректный текст: NumericFormatError с исходной причиной"""
        parse = engine_for(numeric_type, registry).resolve_parse()

        with pytest.raises(NumericFormatError, match="is not a valid") as exc_info:
            parse("abc")
        assert exc_info.value.__cause__ is not None

    @pytest.mark.parametrize("numeric_type", [int, float, Decimal, Fraction])
    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_parse_blank_text(self, registry, numeric_type, text) -> None:
        """None/пустая строка: NumericArgumentError"""
        parse = engine_for(numeric_type, registry).resolve_parse()

        with pytest.raises(NumericArgumentError, match="cannot be None, empty or whitespace"):
            parse(text)

    def test_negate(self, registry) -> None:
        """Отрицание примитивов"""
        assert engine_for(int, registry).resolve_unary(UnaryOp.NEGATE)(5) == -5
        assert engine_for(Fraction, registry).resolve_unary("negate")(Fraction(1, 2)) == Fraction(-1, 2)

    def test_sqrt_float(self, registry) -> None:
        """sqrt float: math.sqrt"""
        assert engine_for(float, registry).resolve_sqrt()(2.0) == pytest.approx(math.sqrt(2.0))

    def test_sqrt_widened_through_float(self, registry) -> None:
        """sqrt прочих примитивов: через float с конверсией обратно"""
        assert engine_for(int, registry).resolve_sqrt()(17) == 4
        result = engine_for(Decimal, registry).resolve_sqrt()(Decimal(16))
        assert isinstance(result, Decimal)
        assert result == Decimal(4)

    def test_abs(self, registry) -> None:
        """abs примитивов"""
        assert engine_for(int, registry).resolve_abs()(-7) == 7
        assert engine_for(Decimal, registry).resolve_abs()(Decimal("-1.5")) == Decimal("1.5")

    def test_sign(self, registry) -> None:
        """sign примитивов"""
        sign = engine_for(float, registry).resolve_sign()

        assert sign(-2.5) == -1
        assert sign(0.0) == 0
        assert sign(3.0) == 1

    def test_truncate(self, registry) -> None:
        """Усечение примитивов"""
        assert engine_for(float, registry).resolve_truncate()(-2.7) == -2.0
        assert engine_for(Decimal, registry).resolve_truncate()(Decimal("2.9")) == Decimal(2)
        assert engine_for(Fraction, registry).resolve_truncate()(Fraction(7, 2)) == Fraction(3)
        assert engine_for(int, registry).resolve_truncate()(7) == 7

    def test_power(self, registry) -> None:
        """Степень примитивов"""
        assert engine_for(int, registry).resolve_power()(2, 10) == 1024
        assert engine_for(float, registry).resolve_power()(2.0, 0.5) == pytest.approx(math.sqrt(2.0))
        assert engine_for(Fraction, registry).resolve_binary(BinaryOp.POWER)(
            Fraction(2, 3), Fraction(2)
        ) == Fraction(4, 9)

    def test_int_power_narrows_exponent(self, registry) -> None:
        """Показатель степени int сужается до int безопасно"""
        power = engine_for(int, registry).resolve_power()

        assert power(3, 2.0) == 9
        with pytest.raises(ValueError, match="non-integral"):
            power(3, 2.5)

    def test_power_int(self, registry) -> None:
        """Степень с целым показателем"""
        assert engine_for(Decimal, registry).resolve_power_int()(Decimal("1.5"), 2) == Decimal("2.25")
        assert engine_for(float, registry).resolve_power_int()(2.0, 3) == pytest.approx(8.0)

    def test_int_modpow_uses_builtin_pow(self, registry) -> None:
        """modpow int: встроенный pow с модулем"""
        modpow = engine_for(int, registry).resolve_modpow()

        assert modpow is pow
        assert modpow(4, 13, 497) == 445

    def test_float_modpow_uses_naive_fallback(self, registry) -> None:
        """modpow float: наивный fallback"""
        assert engine_for(float, registry).resolve_modpow()(3.0, 2.0, 5.0) == pytest.approx(4.0)

    def test_log(self, registry) -> None:
        """Логарифм примитивов"""
        assert engine_for(float, registry).resolve_log()(8.0, 2) == pytest.approx(3.0)
        assert engine_for(int, registry).resolve_log()(100, 10) == 2

    def test_to_bytes(self, registry) -> None:
        """Fixed-width кодирование int и float"""
        assert engine_for(int, registry).resolve_to_bytes()(1) == b"\x01" + b"\x00" * 7
        assert engine_for(int, registry).resolve_to_bytes()(-1) == b"\xff" * 8
        assert engine_for(float, registry).resolve_to_bytes()(1.5) == struct.pack("<d", 1.5)

    def test_to_bytes_unsupported_for_decimal(self, registry) -> None:
        """У Decimal нет fixed-width кодирования"""
        with pytest.raises(UnsupportedOperation, match="to_bytes"):
            engine_for(Decimal, registry).resolve_to_bytes()

    def test_constants(self, registry) -> None:
        """Константы разбираются из текста"""
        constants = engine_for(Decimal, registry).constants()

        assert constants == (Decimal(-1), Decimal(0), Decimal(1), Decimal(2))
        assert all(isinstance(value, Decimal) for value in constants)


# =============================================================================
# COMPLEX
# =============================================================================


class TestComplexBindings:
    """Bindings complex-shaped типов"""

    def test_builtin_complex_functions(self, registry) -> None:
        """Встроенный complex: cmath.sqrt, abs, cmath.log"""
        engine = engine_for(complex, registry)

        assert engine.resolve_sqrt()(complex(-4, 0)) == pytest.approx(2j)
        assert engine.resolve_abs()(complex(3, 4)) == complex(5, 0)
        assert engine.resolve_log()(complex(8, 0), 2) == pytest.approx(complex(3, 0))

    def test_ordering_uses_surrogate(self, registry) -> None:
        """Сравнения порядка: по знаковой величине"""
        engine = engine_for(complex, registry)

        assert engine.resolve_comparison(ComparisonOp.LESS_THAN)(complex(-3, 4), complex(3, 4))
        assert engine.resolve_comparison(ComparisonOp.GREATER_THAN)(complex(0, 6), complex(3, 4))
        assert engine.resolve_comparison(ComparisonOp.GREATER_OR_EQUAL)(complex(3, 4), complex(3, 4))

    def test_equality_is_structural(self, registry) -> None:
        """Равенство: структурное, без суррогата"""
        equal = engine_for(complex, registry).resolve_comparison(ComparisonOp.EQUAL)

        assert not equal(complex(3, 4), complex(4, 3))
        assert equal(complex(3, 4), complex(3, 4))

    def test_complex_parse(self, registry) -> None:
        """Разбор complex через отдельный парсер"""
        assert engine_for(complex, registry).resolve_parse()("(1.75, 3.5)") == complex(1.75, 3.5)

    def test_custom_complex_parse(self, registry) -> None:
        """Пользовательский complex-shaped тип строится из (real, imaginary)"""
        value = engine_for(PairComplex, registry).resolve_parse()("(1.5, -2)")
        assert value == PairComplex(1.5, -2.0)

    def test_custom_complex_abs_converted(self, registry) -> None:
        """abs пользовательского complex возвращает T"""
        assert engine_for(PairComplex, registry).resolve_abs()(PairComplex(3, 4)) == PairComplex(5.0, 0.0)

    def test_complex_truncate_is_identity(self, registry) -> None:
        """У complex нет усечения: identity"""
        assert engine_for(complex, registry).resolve_truncate()(complex(1.5, 2.5)) == complex(1.5, 2.5)


# =============================================================================
# ПОЛЬЗОВАТЕЛЬСКИЕ ТИПЫ
# =============================================================================


class TestStaticMethodDiscovery:
    """Discovery статических методов"""

    def test_binary_static_methods(self, registry) -> None:
        """Бинарные операции: статические методы"""
        engine = engine_for(StaticInteger, registry)

        assert engine.resolve_binary(BinaryOp.ADD)(StaticInteger(2), StaticInteger(3)) == StaticInteger(5)
        assert engine.resolve_binary(BinaryOp.DIVIDE)(StaticInteger(7), StaticInteger(2)) == StaticInteger(3)

    def test_static_method_bound_directly(self, registry) -> None:
        """Метод с аннотациями T привязывается без обёртки"""
        add = engine_for(StaticInteger, registry).resolve_binary(BinaryOp.ADD)
        assert add is StaticInteger.add

    def test_comparisons(self, registry) -> None:
        """Сравнения: статические методы"""
        less_than = engine_for(StaticInteger, registry).resolve_comparison(ComparisonOp.LESS_THAN)
        assert less_than(StaticInteger(1), StaticInteger(2)) is True

    def test_parse_classmethod(self, registry) -> None:
        """parse как classmethod"""
        assert engine_for(StaticInteger, registry).resolve_parse()("12") == StaticInteger(12)

    def test_abs_result_converted_to_type(self, registry) -> None:
        """Результат abs другого типа конвертируется в T"""
        result = engine_for(StaticInteger, registry).resolve_abs()(StaticInteger(-9))
        assert result == StaticInteger(9)

    def test_big_integer_power_narrows_exponent(self, registry) -> None:
        """Показатель степени big-integer-shaped типа сужается до int"""
        power = engine_for(StaticInteger, registry).resolve_power()
        assert power(StaticInteger(2), StaticInteger(5)) == StaticInteger(32)

    def test_power_int(self, registry) -> None:
        """Степень с int показателем"""
        assert engine_for(StaticInteger, registry).resolve_power_int()(StaticInteger(3), 3) == StaticInteger(27)

    def test_power_int_converts_exponent_to_type(self, registry) -> None:
        """pow(T, T): целый показатель разбирается в T"""
        engine = engine_for(StaticDecimal, registry)

        assert engine.resolve_power()(StaticDecimal(2), StaticDecimal(3)) == StaticDecimal(8)
        assert engine.resolve_power_int()(StaticDecimal(2), 3) == StaticDecimal(8)
        assert engine.resolve_power_int()(StaticDecimal("1.5"), 2) == StaticDecimal("2.25")

    def test_log_converts_base(self, registry) -> None:
        """Основание логарифма конвертируется в аннотированный float"""
        log = engine_for(StaticInteger, registry).resolve_log()
        assert log(StaticInteger(1000), 10) == StaticInteger(int(math.log(1000, 10.0)))

    def test_to_bytes_instance_method(self, registry) -> None:
        """to_bytes: метод экземпляра to_byte_array"""
        to_bytes = engine_for(StaticInteger, registry).resolve_to_bytes()

        assert to_bytes(StaticInteger(1)) == b"\x00\x00\x00\x01"
        # Binding не привязан к первому экземпляру
        assert to_bytes(StaticInteger(2)) == b"\x00\x00\x00\x02"


class TestOperatorProtocolDiscovery:
    """Discovery операторных протоколов"""

    def test_dunder_arithmetic(self, registry) -> None:
        """Операции через __add__, __truediv__"""
        engine = engine_for(ProtocolDecimal, registry)

        assert engine.resolve_binary(BinaryOp.ADD)(
            ProtocolDecimal("1.5"), ProtocolDecimal("2")
        ) == ProtocolDecimal("3.5")
        assert engine.resolve_binary(BinaryOp.DIVIDE)(
            ProtocolDecimal("1"), ProtocolDecimal("4")
        ) == ProtocolDecimal("0.25")

    def test_dunder_negate(self, registry) -> None:
        """negate через __neg__"""
        negate = engine_for(ProtocolDecimal, registry).resolve_unary(UnaryOp.NEGATE)
        assert negate(ProtocolDecimal("2")) == ProtocolDecimal("-2")

    def test_dunder_truncate(self, registry) -> None:
        """truncate через __trunc__ с конверсией в T"""
        truncate = engine_for(ProtocolDecimal, registry).resolve_truncate()
        assert truncate(ProtocolDecimal("2.7")) == ProtocolDecimal(2)

    def test_missing_power_raises(self, registry) -> None:
        """Нет pow и __pow__"""
        with pytest.raises(UnsupportedOperation, match="'power' is not supported for type ProtocolDecimal"):
            engine_for(ProtocolDecimal, registry).resolve_power()

    def test_dunder_power_int_converts_exponent(self, registry) -> None:
        """power_int через __pow__: показатель конвертируется в T конструктором"""
        power_int = engine_for(PowerDecimal, registry).resolve_power_int()
        assert power_int(PowerDecimal(2), 3) == PowerDecimal(8)


# =============================================================================
# FALLBACKS
# =============================================================================


class TestFallbacks:
    """Запасные стратегии"""

    def test_negate_by_multiplication(self, registry) -> None:
        """Нет negate и __neg__: умножение на -1"""
        negate = engine_for(StaticInteger, registry).resolve_unary(UnaryOp.NEGATE)
        assert negate(StaticInteger(8)) == StaticInteger(-8)

    def test_sqrt_falls_back_to_bisection(self, registry) -> None:
        """Нет sqrt: бисекция"""
        sqrt = engine_for(StaticInteger, registry).resolve_sqrt()

        assert sqrt(StaticInteger(16)) == StaticInteger(4)
        assert sqrt(StaticInteger(15)) == StaticInteger(3)
        assert sqrt(StaticInteger(0)) == StaticInteger(0)
        assert sqrt(StaticInteger(1)) == StaticInteger(1)

    def test_bisection_for_continuous_type(self, registry) -> None:
        """Для непрерывного типа бисекция точна до единицы"""
        sqrt = engine_for(ProtocolDecimal, registry).resolve_sqrt()
        result = sqrt(ProtocolDecimal(49))

        assert ProtocolDecimal(6) < result <= ProtocolDecimal(7)

    def test_modpow_naive_fallback(self, registry) -> None:
        """Нет mod_pow: (value ** exponent) % modulus"""
        modpow = engine_for(StaticInteger, registry).resolve_modpow()
        result = modpow(StaticInteger(4), StaticInteger(13), StaticInteger(497))
        assert result == StaticInteger(445)

    def test_truncate_identity_fallback(self, registry) -> None:
        """Нет truncate: identity, а не ошибка"""
        truncate = engine_for(StaticInteger, registry).resolve_truncate()
        value = StaticInteger(5)

        assert truncate(value) is value

    def test_truncate_identity_for_opaque_type(self, registry) -> None:
        """Identity truncate даже у типа без арифметики"""
        value = OpaqueNumber("x")
        assert engine_for(OpaqueNumber, registry).resolve_truncate()(value) is value


# =============================================================================
# ОШИБКИ
# =============================================================================


class TestResolutionErrors:
    """Ошибки разрешения"""

    def test_unknown_unary_name(self, registry) -> None:
        """Имя вне фиксированного набора"""
        with pytest.raises(UnsupportedOperation, match="'cube'.*unknown unary operation"):
            engine_for(int, registry).resolve_unary("cube")

    def test_unknown_binary_tag(self, registry) -> None:
        """Неизвестный бинарный тег"""
        with pytest.raises(UnsupportedOperation, match="unknown binary operation"):
            engine_for(int, registry).resolve_binary("xor")

    def test_unknown_comparison_tag(self, registry) -> None:
        """Бинарный тег вместо тега сравнения"""
        with pytest.raises(UnsupportedOperation, match="unknown comparison operation"):
            engine_for(int, registry).resolve_comparison(BinaryOp.ADD)

    def test_error_names_type_and_operation(self, registry) -> None:
        """Ошибка содержит имя типа и операции"""
        with pytest.raises(UnsupportedOperation) as exc_info:
            engine_for(OpaqueNumber, registry).resolve_binary(BinaryOp.ADD)

        assert exc_info.value.type_name == "OpaqueNumber"
        assert exc_info.value.operation == "add"
        assert "OpaqueNumber" in str(exc_info.value)
        assert isinstance(exc_info.value, ArithmeticCapabilityError)

    def test_missing_parse(self, registry) -> None:
        """Нет parse"""
        with pytest.raises(UnsupportedOperation, match="'parse'"):
            engine_for(OpaqueNumber, registry).resolve_parse()

    def test_object_ordering_default_is_not_support(self, registry) -> None:
        """object.__lt__ не считается поддержкой сравнения"""
        with pytest.raises(UnsupportedOperation, match="'<'"):
            engine_for(OpaqueNumber, registry).resolve_comparison(ComparisonOp.LESS_THAN)

    def test_object_equality_default_is_allowed(self, registry) -> None:
        """Равенство по умолчанию (identity) допустимо"""
        equal = engine_for(OpaqueNumber, registry).resolve_comparison(ComparisonOp.EQUAL)
        value = OpaqueNumber()

        assert equal(value, value)
        assert not equal(value, OpaqueNumber())

    def test_sign_is_primitive_only(self, registry) -> None:
        """sign для пользовательского типа: PrimitiveOnlyOperation"""
        with pytest.raises(PrimitiveOnlyOperation, match="only implemented for built-in"):
            engine_for(StaticInteger, registry).resolve_sign()

    def test_primitive_only_is_not_implemented_error(self, registry) -> None:
        """PrimitiveOnlyOperation: подкласс NotImplementedError"""
        with pytest.raises(NotImplementedError):
            engine_for(complex, registry).resolve_sign()

    def test_sqrt_fallback_failure_names_sqrt(self, registry) -> None:
        """Бисекцию нельзя построить: ошибка называет sqrt и сохраняет причину"""
        with pytest.raises(UnsupportedOperation, match="'sqrt'") as exc_info:
            engine_for(OpaqueNumber, registry).resolve_sqrt()

        assert isinstance(exc_info.value.__cause__, UnsupportedOperation)

    def test_modpow_without_fallback(self, registry) -> None:
        """Нет mod_pow и нет операций для fallback"""
        with pytest.raises(UnsupportedOperation, match="'modpow' is not supported for type OpaqueNumber"):
            engine_for(OpaqueNumber, registry).resolve_modpow()

    def test_complex_has_no_modpow(self, registry) -> None:
        """У complex нет остатка от деления: modpow недоступен"""
        with pytest.raises(UnsupportedOperation, match="modpow"):
            engine_for(complex, registry).resolve_modpow()

    def test_negate_without_multiply(self, registry) -> None:
        """Нет negate и нет умножения"""
        with pytest.raises(UnsupportedOperation, match="'negate'"):
            engine_for(OpaqueNumber, registry).resolve_unary(UnaryOp.NEGATE)

    def test_missing_log(self, registry) -> None:
        """Нет log"""
        with pytest.raises(UnsupportedOperation, match="'log'"):
            engine_for(ProtocolDecimal, registry).resolve_log()

    def test_missing_to_bytes(self, registry) -> None:
        """Нет to_byte_array и __bytes__"""
        with pytest.raises(UnsupportedOperation, match="to_bytes"):
            engine_for(ProtocolDecimal, registry).resolve_to_bytes()

    def test_failed_resolution_is_not_cached(self, registry) -> None:
        """После ошибки в таблице нет записи"""
        engine = engine_for(OpaqueNumber, registry)
        with pytest.raises(UnsupportedOperation):
            engine.resolve_binary(BinaryOp.ADD)

        table = registry.table_for(OpaqueNumber)
        assert table.peek(BindingKey(OperationKind.BINARY, "add")) is None
        assert table.peek(BindingKey(OperationKind.UNARY, "sqrt")) is None

    def test_non_class_rejected(self, registry) -> None:
        """Engine создаётся только для класса"""
        with pytest.raises(TypeError, match="must be a class"):
            CapabilityEngine(3, registry)


# =============================================================================
# КЭШ И ЛОГИРОВАНИЕ
# =============================================================================


class TestCachingAndLogging:
    """Кэширование bindings и логирование разрешений"""

    def test_same_binding_returned(self, registry) -> None:
        """Повторное разрешение возвращает тот же binding"""
        engine = engine_for(float, registry)
        first = engine.resolve_binary(BinaryOp.MULTIPLY)
        second = engine.resolve_binary(BinaryOp.MULTIPLY)

        assert first is second
        assert first(2.0, 4.0) == second(2.0, 4.0)

    def test_engines_share_registry_tables(self, registry) -> None:
        """Разные экземпляры Engine используют одну таблицу типа"""
        first = engine_for(int, registry).resolve_sqrt()
        second = engine_for(int, registry).resolve_sqrt()

        assert first is second

    def test_resolution_logged_once(self, registry, caplog) -> None:
        """Первое разрешение логируется на DEBUG, повторное: нет"""
        engine = engine_for(int, registry)

        with caplog.at_level(logging.DEBUG, logger="src.core.arithmetic.engine"):
            engine.resolve_binary(BinaryOp.ADD)
            engine.resolve_binary(BinaryOp.ADD)

        records = [r for r in caplog.records if "Resolved add for int" in r.getMessage()]
        assert len(records) == 1
        assert records[0].levelno == logging.DEBUG

    def test_identity_truncate_is_logged(self, registry, caplog) -> None:
        """Тихий fallback truncate виден в логе"""
        with caplog.at_level(logging.DEBUG, logger="src.core.arithmetic.engine"):
            engine_for(StaticInteger, registry).resolve_truncate()

        assert any("identity fallback" in r.getMessage() for r in caplog.records)

    def test_stats_reflect_resolutions(self, registry) -> None:
        """Статистика таблицы через Engine"""
        engine = engine_for(int, registry)
        engine.resolve_binary(BinaryOp.ADD)
        engine.resolve_binary(BinaryOp.ADD)

        stats = engine.get_stats()
        assert stats["type"] == "int"
        assert stats["hits"] >= 1
