"""
Arithmetic Errors — таксономия ошибок разрешения операций

- UnsupportedOperation: требуемая операция не найдена у типа T
- PrimitiveOnlyOperation: операция поддерживается только для примитивов
- NumericFormatError / NumericArgumentError: некорректный текст на входе parse

Ошибки разрешения фатальны для данного T: повторная попытка даёт тот же
результат, в кэш при ошибке ничего не записывается.
"""


class ArithmeticCapabilityError(Exception):
    """
    Базовое исключение: возможность (capability) не может быть получена для T.

    Всегда содержит имя типа и имя операции.
    """

    def __init__(self, type_name: str, operation: str, message: str):
        super().__init__(message)
        self.type_name = type_name
        self.operation = operation


class UnsupportedOperation(ArithmeticCapabilityError):
    """Операция не найдена у типа T (нет метода или неподходящая сигнатура)."""

    def __init__(self, type_name: str, operation: str, detail: str = ""):
        message = f"Operation '{operation}' is not supported for type {type_name}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(type_name, operation, message)


class PrimitiveOnlyOperation(ArithmeticCapabilityError, NotImplementedError):
    """Операция намеренно поддерживается только для встроенных примитивов."""

    def __init__(self, type_name: str, operation: str):
        super().__init__(
            type_name,
            operation,
            f"Operation '{operation}' is only implemented for built-in "
            f"arithmetic primitives, not for {type_name}",
        )


class NumericFormatError(ValueError):
    """Текст не соответствует ожидаемому числовому формату."""

    pass


class NumericArgumentError(ValueError):
    """Пустой, None или иной недопустимый аргумент."""

    pass
