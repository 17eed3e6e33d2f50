"""
Discovery — поиск операций у пользовательского типа T

Ищутся только операции из фиксированного набора:
- статические методы (staticmethod/classmethod) с заданными именами и арностью
- операторные протоколы Python (__add__, __gt__, ...), объявленные самим типом
- методы экземпляра (to_byte_array)

Аннотации параметров найденного метода используются для конверсии аргументов.
"""

import inspect
import typing
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Sequence


class DiscoveredMethod(NamedTuple):
    """Найденный метод: имя, вызываемый объект, классы параметров и результата."""

    name: str
    function: Callable[..., Any]
    parameter_types: List[Optional[type]]
    return_type: Optional[type]


# =============================================================================
# СИГНАТУРЫ
# =============================================================================


def accepts_arity(function: Callable[..., Any], arity: int) -> bool:
    """
    Проверка, что функцию можно вызвать ровно с arity позиционными аргументами.

    Функции без доступной сигнатуры (часть builtins) считаются подходящими.
    """
    try:
        signature = inspect.signature(function)
    except (TypeError, ValueError):
        return True

    required = 0
    total = 0
    for parameter in signature.parameters.values():
        if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
            return required <= arity
        if parameter.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            total += 1
            if parameter.default is inspect.Parameter.empty:
                required += 1
        elif (
            parameter.kind is inspect.Parameter.KEYWORD_ONLY
            and parameter.default is inspect.Parameter.empty
        ):
            return False

    return required <= arity <= total


def _resolve_hints(function: Callable[..., Any]) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(function)
    except (NameError, TypeError, AttributeError):
        # Неразрешимые forward references: используем только реальные классы
        raw = getattr(function, "__annotations__", {}) or {}
        return {name: hint for name, hint in raw.items() if isinstance(hint, type)}


def _as_class(hint: Any) -> Optional[type]:
    return hint if isinstance(hint, type) else None


def describe_signature(name: str, function: Callable[..., Any]) -> DiscoveredMethod:
    """Сборка DiscoveredMethod с классами параметров из аннотаций."""
    hints = _resolve_hints(function)
    parameter_types: List[Optional[type]] = []
    try:
        parameters = inspect.signature(function).parameters.values()
    except (TypeError, ValueError):
        parameters = []
    for parameter in parameters:
        if parameter.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            parameter_types.append(_as_class(hints.get(parameter.name)))
    return DiscoveredMethod(
        name=name,
        function=function,
        parameter_types=parameter_types,
        return_type=_as_class(hints.get("return")),
    )


# =============================================================================
# ПОИСК
# =============================================================================


def find_static_method(
    numeric_type: type, names: Sequence[str], arity: int
) -> Optional[DiscoveredMethod]:
    """
    Поиск статического метода (staticmethod/classmethod) по списку имён.

    Args:
        numeric_type: Тип-кандидат T
        names: Допустимые имена в порядке приоритета
        arity: Требуемое число позиционных аргументов

    Returns:
        DiscoveredMethod первого подходящего метода или None
    """
    for name in names:
        try:
            raw = inspect.getattr_static(numeric_type, name)
        except AttributeError:
            continue
        if not isinstance(raw, (staticmethod, classmethod)):
            continue
        function = getattr(numeric_type, name)
        if accepts_arity(function, arity):
            return describe_signature(name, function)
    return None


def find_instance_method(
    numeric_type: type, names: Sequence[str]
) -> Optional[DiscoveredMethod]:
    """Поиск метода экземпляра без аргументов (кроме self)."""
    for name in names:
        try:
            raw = inspect.getattr_static(numeric_type, name)
        except AttributeError:
            continue
        if isinstance(raw, (staticmethod, classmethod)) or not callable(raw):
            continue
        function = getattr(numeric_type, name)
        if accepts_arity(function, 1):
            return describe_signature(name, function)
    return None


def has_operator_protocol(
    numeric_type: type, dunder: str, allow_object_default: bool = False
) -> bool:
    """
    Объявляет ли тип операторный протокол dunder.

    Реализации, унаследованные от object (например, object.__lt__), не считаются
    поддержкой операции, кроме случая allow_object_default (равенство).
    """
    attribute = getattr(numeric_type, dunder, None)
    if attribute is None:
        return False
    if not allow_object_default and attribute is getattr(object, dunder, None):
        return False
    return True
