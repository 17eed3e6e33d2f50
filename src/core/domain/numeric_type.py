"""
NumericTypeDescriptor — Описание числового типа-кандидата

Immutable Pydantic модель с выведенными фактами о типе T:
- форма типа (примитив / complex-shaped / custom)
- вид числа (integer / floating / decimal / rational / complex / custom)
- флаги классификации (integer, floating point, whole-number capable)

Полная совместимость с JSON Schema (contracts/schema/numeric_type_descriptor.json).

ИНВАРИАНТ: классификация типа T стабильна на всё время жизни процесса,
поэтому дескриптор вычисляется один раз и кэшируется вместе с bindings.
"""

from enum import Enum

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class TypeShape(str, Enum):
    """
    Форма типа, определяющая стратегию binding.

    - PRIMITIVE: встроенный арифметический тип (int, float, Decimal, Fraction)
    - COMPLEX: тип с компонентами real/imaginary (нет полного порядка)
    - CUSTOM: непрозрачный пользовательский тип
    """

    PRIMITIVE = "PRIMITIVE"
    COMPLEX = "COMPLEX"
    CUSTOM = "CUSTOM"


class NumericKind(str, Enum):
    """
    Вид числа.

    Может быть объявлен пользовательским типом явно через атрибут класса
    __numeric_kind__ или через register_numeric_kind().
    """

    INTEGER = "INTEGER"
    FLOATING = "FLOATING"
    DECIMAL = "DECIMAL"
    RATIONAL = "RATIONAL"
    COMPLEX = "COMPLEX"
    CUSTOM = "CUSTOM"


# =============================================================================
# DESCRIPTOR MODEL
# =============================================================================


class NumericTypeDescriptor(BaseModel):
    """
    Выведенные факты о числовом типе T.

    type_name используется только в диагностике (сообщения об ошибках, логи).
    """

    type_name: str = Field(..., min_length=1, description="Имя типа для диагностики")
    module: str = Field(..., description="Модуль, в котором объявлен тип")
    shape: TypeShape = Field(..., description="Форма типа (PRIMITIVE/COMPLEX/CUSTOM)")
    kind: NumericKind = Field(..., description="Вид числа")

    is_arithmetic_primitive: bool = Field(
        ..., description="Встроенный арифметический примитив"
    )
    is_complex_shaped: bool = Field(..., description="Есть компоненты real/imaginary")
    is_big_integer_shaped: bool = Field(
        ..., description="Целое произвольной точности"
    )
    is_decimal_shaped: bool = Field(
        ..., description="Десятичный тип без надёжного остатка от деления"
    )
    is_floating_point: bool = Field(..., description="Floating/decimal вид")
    is_integer: bool = Field(..., description="Целочисленный вид")
    is_whole_number_capable: bool = Field(
        ..., description="Для значений T определена проверка на целое"
    )

    model_config = {"frozen": True}
