"""
Number Formatting — каноническое минимальное текстовое представление

Правило: если в тексте есть десятичный разделитель, обрезаются хвостовые
нули, а затем и сам разделитель, если он остался последним символом.
Экспоненциальная запись ("1.5e+20") не трогается.

Examples:
    "3.1400" -> "3.14"
    "3.000"  -> "3"
    "100"    -> "100"
"""

from decimal import Decimal
from typing import Any, Final, Optional

from src.core.arithmetic.settings import (
    DEFAULT_ARITHMETIC_SETTINGS,
    NATURAL_DECIMAL_SEPARATOR,
    ArithmeticSettings,
)


_EXPONENT_MARKERS: Final[str] = "eE"


def trim_trailing_zeros(text: str, settings: Optional[ArithmeticSettings] = None) -> str:
    """
    Обрезка хвостовых нулей и висящего разделителя.

    Args:
        text: Текст числа
        settings: Разделитель и цифра нуля (по умолчанию ".", "0")

    Returns:
        Текст без хвостовых нулей дробной части
    """
    settings = settings or DEFAULT_ARITHMETIC_SETTINGS
    separator = settings.decimal_separator

    if separator not in text:
        return text
    if any(marker in text for marker in _EXPONENT_MARKERS):
        return text

    trimmed = text.rstrip(settings.zero_digit)
    if trimmed.endswith(separator):
        trimmed = trimmed[: -len(separator)]
    return trimmed


def format_number(value: Any, settings: Optional[ArithmeticSettings] = None) -> str:
    """
    Естественное представление значения с обрезкой хвостовых нулей.

    Для float и Decimal естественный разделитель "." заменяется
    разделителем из settings.
    """
    settings = settings or DEFAULT_ARITHMETIC_SETTINGS
    text = str(value)

    if (
        isinstance(value, (float, Decimal))
        and settings.decimal_separator != NATURAL_DECIMAL_SEPARATOR
    ):
        text = text.replace(NATURAL_DECIMAL_SEPARATOR, settings.decimal_separator)

    return trim_trailing_zeros(text, settings)
