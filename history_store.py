"""Historial de cálculos y registro de memoria."""

import math
from collections import deque, namedtuple

from result_formatter import format_result


HistoryEntry = namedtuple("HistoryEntry", "lhs rhs")


class CalculationHistory:
    """Historial acotado, del más reciente al más antiguo."""

    CAPACITY = 50

    def __init__(self, capacity: int = CAPACITY):
        self._entries = deque(maxlen=max(1, capacity))

    def push(self, lhs: str, rhs: str) -> HistoryEntry:
        entry = HistoryEntry(lhs, rhs)
        # Con maxlen, appendleft descarta el más antiguo por la derecha.
        self._entries.appendleft(entry)
        return entry

    def clear(self):
        self._entries.clear()

    def entries(self) -> list:
        return list(self._entries)

    def __len__(self):
        return len(self._entries)

    def __getitem__(self, index: int) -> HistoryEntry:
        return self._entries[index]


class MemoryRegister:
    """Acumulador único (MC / MR / M+ / M−)."""

    def __init__(self):
        self._value = 0.0

    @property
    def value(self) -> float:
        return self._value

    def clear(self):
        self._value = 0.0

    def recall(self) -> str:
        return format_result(self._value)

    def add(self, amount) -> bool:
        if not self._accepts(amount):
            return False
        return self._store(self._value + amount)

    def subtract(self, amount) -> bool:
        if not self._accepts(amount):
            return False
        return self._store(self._value - amount)

    def _store(self, value) -> bool:
        if not math.isfinite(value):
            return False
        self._value = float(value)
        return True

    def indicator(self) -> str:
        if self._value == 0:
            return ""
        return f"M: {format_result(self._value)}"

    @staticmethod
    def _accepts(amount) -> bool:
        return isinstance(amount, (int, float)) and math.isfinite(amount)
