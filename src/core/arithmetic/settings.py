"""
Arithmetic Settings — конфигурация форматирования и констант

Значения по умолчанию не зависят от локали: естественное текстовое
представление чисел в Python всегда использует "." как десятичный разделитель.
"""

import locale
from dataclasses import dataclass
from typing import Final


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Канонический текст констант, разбираемых через parse binding типа T.
# Не содержат десятичного разделителя, поэтому не зависят от локали.
MINUS_ONE_TEXT: Final[str] = "-1"
ZERO_TEXT: Final[str] = "0"
ONE_TEXT: Final[str] = "1"
TWO_TEXT: Final[str] = "2"

# Десятичный разделитель естественного представления float/Decimal
NATURAL_DECIMAL_SEPARATOR: Final[str] = "."

# Порядок байт для fixed-width кодирования примитивов
FIXED_WIDTH_BYTE_ORDER: Final[str] = "little"

# Ширина кодирования int (байт), как у 64-битного знакового целого
INT_ENCODING_WIDTH: Final[int] = 8


# =============================================================================
# SETTINGS
# =============================================================================


@dataclass(frozen=True)
class ArithmeticSettings:
    """
    Настройки фасада GenericArithmetic.

    decimal_separator: разделитель, который ищется в тексте при
    обрезке хвостовых нулей; zero_digit: обрезаемая цифра.
    """

    decimal_separator: str = NATURAL_DECIMAL_SEPARATOR
    zero_digit: str = "0"

    def __post_init__(self):
        if not self.decimal_separator:
            raise ValueError("decimal_separator cannot be empty")
        if len(self.zero_digit) != 1:
            raise ValueError(f"zero_digit must be a single character, got {self.zero_digit!r}")

    @classmethod
    def from_locale(cls) -> "ArithmeticSettings":
        """Настройки по текущей локали процесса (LC_NUMERIC)."""
        conventions = locale.localeconv()
        return cls(decimal_separator=conventions["decimal_point"] or NATURAL_DECIMAL_SEPARATOR)


DEFAULT_ARITHMETIC_SETTINGS: Final[ArithmeticSettings] = ArithmeticSettings()
