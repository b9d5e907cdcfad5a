"""Pruebas del historial de cálculos y del registro de memoria."""

import math

from history_store import CalculationHistory, HistoryEntry, MemoryRegister


class TestCalculationHistory:
    """Historial acotado, el más reciente primero."""

    def test_newest_first(self) -> None:
        history = CalculationHistory()
        history.push("1 + 1", "2")
        history.push("2 × 3", "6")
        assert history.entries() == [HistoryEntry("2 × 3", "6"), HistoryEntry("1 + 1", "2")]
        assert history[0].rhs == "6"

    def test_capacity_keeps_the_fifty_most_recent(self) -> None:
        history = CalculationHistory()
        for i in range(55):
            history.push(str(i), str(i))
        assert len(history) == 50
        assert history[0].lhs == "54"
        assert history[49].lhs == "5"

    def test_clear(self) -> None:
        history = CalculationHistory()
        history.push("1", "1")
        history.clear()
        assert len(history) == 0
        assert history.entries() == []


class TestMemoryRegister:
    """Acumulador único de memoria."""

    def test_starts_at_zero_without_indicator(self) -> None:
        memory = MemoryRegister()
        assert memory.value == 0
        assert memory.recall() == "0"
        assert memory.indicator() == ""

    def test_add_and_subtract(self) -> None:
        memory = MemoryRegister()
        assert memory.add(5.0)
        assert memory.subtract(2.0)
        assert memory.value == 3.0
        assert memory.recall() == "3"
        assert memory.indicator() == "M: 3"

    def test_failure_marker_leaves_memory_unchanged(self) -> None:
        memory = MemoryRegister()
        memory.add(4.0)
        assert not memory.add(math.nan)
        assert not memory.subtract(math.inf)
        assert not memory.add("4")
        assert memory.value == 4.0

    def test_overflow_to_infinity_is_rejected(self) -> None:
        memory = MemoryRegister()
        memory.add(1e308)
        assert not memory.add(1e308)
        assert memory.value == 1e308

    def test_clear(self) -> None:
        memory = MemoryRegister()
        memory.add(7.0)
        memory.clear()
        assert memory.value == 0
        assert memory.indicator() == ""
