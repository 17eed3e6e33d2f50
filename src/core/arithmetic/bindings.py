"""
Bindings — теги операций и кэш разрешённых операций

Binding: разрешённая, непосредственно вызываемая реализация одной операции
для одного типа T. Кэш устроен как реестр таблиц: у каждого T своя таблица,
общих слотов между разными T нет.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Binding после записи в кэш никогда не инвалидируется и не пересчитывается
2. Для каждого ключа (T, операция) выполняется не более одного разрешения
   (first writer wins, остальные потоки ждут на lock ключа)
3. Ошибка разрешения ничего не записывает в кэш (нет частичных результатов)
4. Глобальная блокировка поверх всех T не используется
"""

import logging
import threading
from enum import Enum
from typing import Any, Callable, Dict, Final, List, NamedTuple, Optional


logger = logging.getLogger(__name__)


# =============================================================================
# ТЕГИ ОПЕРАЦИЙ
# =============================================================================


class OperationKind(str, Enum):
    """Вид операции; определяет пространство ключей кэша."""

    UNARY = "UNARY"
    BINARY = "BINARY"
    COMPARISON = "COMPARISON"
    PARSE = "PARSE"
    SIGN = "SIGN"
    POWER_INT = "POWER_INT"
    MODPOW = "MODPOW"
    LOG = "LOG"
    TO_BYTES = "TO_BYTES"
    CONSTANTS = "CONSTANTS"
    DESCRIPTOR = "DESCRIPTOR"


class UnaryOp(str, Enum):
    """Унарные операции (T) -> T."""

    NEGATE = "negate"
    SQRT = "sqrt"
    ABS = "abs"
    TRUNCATE = "truncate"


class BinaryOp(str, Enum):
    """Бинарные арифметические операции (T, T) -> T."""

    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    MODULO = "modulo"
    POWER = "power"


class ComparisonOp(str, Enum):
    """Сравнения (T, T) -> bool."""

    GREATER_THAN = ">"
    LESS_THAN = "<"
    GREATER_OR_EQUAL = ">="
    LESS_OR_EQUAL = "<="
    EQUAL = "=="
    NOT_EQUAL = "!="


ORDERING_COMPARISONS: Final[frozenset] = frozenset(
    {
        ComparisonOp.GREATER_THAN,
        ComparisonOp.LESS_THAN,
        ComparisonOp.GREATER_OR_EQUAL,
        ComparisonOp.LESS_OR_EQUAL,
    }
)


class BindingKey(NamedTuple):
    """Ключ кэша внутри таблицы типа: вид операции и тег (если есть)."""

    kind: OperationKind
    tag: Optional[str] = None


# =============================================================================
# ТАБЛИЦА ТИПА
# =============================================================================


class TypeBindingTable:
    """
    Кэш bindings одного типа T.

    Lock таблицы защищает только создание lock'ов ключей; само разрешение
    выполняется под lock'ом конкретного ключа.
    """

    def __init__(self, numeric_type: type):
        self.numeric_type = numeric_type
        self._bindings: Dict[BindingKey, Any] = {}
        self._key_locks: Dict[BindingKey, threading.Lock] = {}
        self._table_lock = threading.Lock()

        self._hits = 0
        self._misses = 0
        self._resolutions = 0

    def _lock_for(self, key: BindingKey) -> threading.Lock:
        with self._table_lock:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._key_locks[key] = lock
            return lock

    def get_or_resolve(self, key: BindingKey, resolver: Callable[[], Any]) -> Any:
        """
        Получение binding по ключу с ленивым разрешением.

        Args:
            key: Ключ операции
            resolver: Фабрика binding; вызывается не более одного раза на ключ

        Returns:
            Закэшированный binding

        Raises:
            Любое исключение resolver'а; в кэш при этом ничего не записывается
        """
        # Быстрый путь без блокировки ключа: записанный binding неизменяем
        try:
            binding = self._bindings[key]
        except KeyError:
            pass
        else:
            self._count(hits=1)
            return binding

        with self._lock_for(key):
            if key in self._bindings:
                self._count(hits=1)
                return self._bindings[key]

            self._count(misses=1)
            binding = resolver()
            self._bindings[key] = binding
            self._count(resolutions=1)
            return binding

    def _count(self, hits: int = 0, misses: int = 0, resolutions: int = 0) -> None:
        # Счётчики меняются только под lock'ом таблицы
        with self._table_lock:
            self._hits += hits
            self._misses += misses
            self._resolutions += resolutions

    def peek(self, key: BindingKey) -> Optional[Any]:
        """Binding из кэша без разрешения (None если не разрешён)."""
        return self._bindings.get(key)

    def cached_keys(self) -> List[BindingKey]:
        """Ключи уже разрешённых bindings."""
        return list(self._bindings.keys())

    def get_stats(self) -> Dict[str, Any]:
        """Статистика кэша для диагностики."""
        with self._table_lock:
            return {
                "type": self.numeric_type.__qualname__,
                "size": len(self._bindings),
                "hits": self._hits,
                "misses": self._misses,
                "resolutions": self._resolutions,
            }


# =============================================================================
# РЕЕСТР
# =============================================================================


class BindingRegistry:
    """
    Реестр таблиц bindings, ключ: тип T.

    Таблица создаётся при первом обращении к T и живёт всё время жизни
    процесса (без вытеснения).
    """

    def __init__(self):
        self._tables: Dict[type, TypeBindingTable] = {}
        self._lock = threading.Lock()

    def table_for(self, numeric_type: type) -> TypeBindingTable:
        table = self._tables.get(numeric_type)
        if table is not None:
            return table

        with self._lock:
            table = self._tables.get(numeric_type)
            if table is None:
                table = TypeBindingTable(numeric_type)
                self._tables[numeric_type] = table
                logger.debug("Created binding table for %s", numeric_type.__qualname__)
            return table

    def known_types(self) -> List[type]:
        with self._lock:
            return list(self._tables.keys())


# Глобальный реестр процесса
DEFAULT_REGISTRY: Final[BindingRegistry] = BindingRegistry()
