"""
Sesión de la calculadora: máquina de estados de entrada.

Reúne en un solo objeto todo el estado de una calculadora activa:
``buffer`` (el operando que se está tecleando), ``expression`` (el lado
izquierdo ya confirmado), el modo angular, la memoria y el historial.
Cada tecla lógica es una transición completa y síncrona; al terminar se
notifica al receptor de pantalla (render sink) con un ``RenderState``.
"""

import logging
from collections import namedtuple

from calculator_engine import CalculatorEngine, is_failure
from history_store import CalculationHistory, MemoryRegister
from result_formatter import ERROR_TEXT, format_result, to_display


logger = logging.getLogger(__name__)

ZERO = "0"

KEY_EQUALS = "="
KEY_CLEAR = "C"
KEY_BACKSPACE = "⌫"
KEY_DECIMAL = ","
KEY_FACTORIAL = "!"
KEY_PERCENT = "%"

DIGIT_KEYS = tuple("0123456789")
OPERATOR_KEYS = ("+", "-", "×", "÷")
FUNCTION_KEYS = ("sin", "cos", "tan", "ln", "log", "√")
EXPRESSION_KEYS = ("π", "e", "(", ")", "^")

# Formas alternativas que algunas fuentes de eventos emiten.
_KEY_ALIASES = {
    "*": "×",
    "/": "÷",
    "−": "-",
    ".": KEY_DECIMAL,
}

_OPERAND_STARTERS = ("π", "e", "(")
_OPERAND_ENDERS = ("π", "e", ")")

RenderState = namedtuple("RenderState", "buffer expression memory history")


class CalculatorSession:
    """Estado y transiciones de una calculadora interactiva."""

    def __init__(self, engine=None, history=None, memory=None, render_sink=None):
        self.engine = engine if engine is not None else CalculatorEngine()
        self.history = history if history is not None else CalculationHistory()
        self.memory = memory if memory is not None else MemoryRegister()
        self.render_sink = render_sink

        self._buffer = ZERO
        self._expr = ""
        # True mientras el buffer sea el "0" que deja una confirmación.
        self._fresh = True

        self._handlers = {KEY_EQUALS: self._equals,
                          KEY_CLEAR: self._clear,
                          KEY_BACKSPACE: self._backspace,
                          KEY_DECIMAL: self._decimal,
                          KEY_FACTORIAL: self._apply_function,
                          KEY_PERCENT: self._apply_function}
        for key in DIGIT_KEYS:
            self._handlers[key] = self._digit
        for key in OPERATOR_KEYS:
            self._handlers[key] = self._operator
        for key in FUNCTION_KEYS:
            self._handlers[key] = self._apply_function
        for key in EXPRESSION_KEYS:
            self._handlers[key] = self._commit

    # ── Estado ───────────────────────────────────────────────────

    @property
    def buffer(self) -> str:
        return self._buffer

    @property
    def expression(self) -> str:
        return self._expr

    @property
    def angle_mode(self) -> str:
        return self.engine.angle_mode

    @angle_mode.setter
    def angle_mode(self, mode: str):
        self.engine.angle_mode = mode
        self._render()

    def toggle_angle_mode(self) -> str:
        self.angle_mode = "rad" if self.angle_mode == "deg" else "deg"
        return self.angle_mode

    def render_state(self) -> RenderState:
        return RenderState(
            buffer=to_display(self._buffer),
            expression=self._expr.replace(".", KEY_DECIMAL),
            memory=to_display(self.memory.indicator()),
            history=self.history.entries(),
        )

    # ── Entrada de teclas ────────────────────────────────────────

    def press(self, key: str):
        key = _KEY_ALIASES.get(key, key)
        handler = self._handlers.get(key)
        if handler is None:
            logger.debug("Tecla ignorada: %r", key)
            return
        handler(key)
        self._render()

    def press_sequence(self, keys):
        for key in keys:
            self.press(key)

    def _digit(self, key: str):
        if self._buffer in (ZERO, ERROR_TEXT):
            self._buffer = key
        else:
            self._buffer += key
        self._fresh = False

    def _decimal(self, _key: str):
        if self._buffer == ERROR_TEXT:
            self._buffer = ZERO
        if "," not in self._buffer and "." not in self._buffer:
            self._buffer += KEY_DECIMAL
        self._fresh = False

    def _operator(self, key: str):
        if self._buffer == ERROR_TEXT:
            self._buffer = ZERO
            self._fresh = True
        self._commit(key)

    def _commit(self, symbol: str):
        parts = [self._expr]
        if self._should_commit_buffer(symbol):
            # Los operandos confirmados usan el punto canónico; el
            # traductor solo localiza la primera coma del texto.
            parts.append(self._buffer.replace(KEY_DECIMAL, "."))
        parts.append(symbol)
        self._expr = " ".join(p for p in parts if p).strip()
        self._buffer = ZERO
        self._fresh = True

    def _should_commit_buffer(self, symbol=None) -> bool:
        if not self._fresh:
            return True
        if symbol in _OPERAND_STARTERS:
            return False
        last = self._expr.rsplit(" ", 1)[-1] if self._expr else ""
        return last not in _OPERAND_ENDERS

    def _compose(self) -> str:
        if self._should_commit_buffer():
            return " ".join(p for p in (self._expr, self._buffer) if p).strip()
        return self._expr

    def _apply_function(self, key: str):
        if key == KEY_FACTORIAL or key == KEY_PERCENT:
            wrapped = f"{self._buffer}{key}"
        else:
            wrapped = f"{key}({self._buffer})"
        self._buffer = self.engine.calculate(wrapped)
        self._fresh = False

    def _equals(self, _key: str):
        lhs = self._compose()
        value = self.engine.evaluate(lhs)
        if is_failure(value):
            self._buffer = ERROR_TEXT
        else:
            self._buffer = format_result(value)
            self.history.push(lhs, self._buffer)
        self._expr = ""
        self._fresh = False

    def _clear(self, _key: str):
        self._buffer = ZERO
        self._expr = ""
        self._fresh = True

    def _backspace(self, _key: str):
        trimmed = "" if self._buffer == ERROR_TEXT else self._buffer[:-1]
        if trimmed in ("", "-", "+"):
            self._buffer = ZERO
            self._fresh = True
        else:
            self._buffer = trimmed

    # ── Operaciones externas ─────────────────────────────────────

    def set_buffer(self, text: str):
        """Asignación directa, sin validar (historial, arrastrar y soltar)."""
        if not text:
            return
        self._buffer = str(text)
        self._fresh = False
        self._render()

    def select_history(self, index: int):
        self.set_buffer(self.history[index].rhs)

    def clear_history(self):
        self.history.clear()
        self._render()

    def memory_clear(self):
        self.memory.clear()
        self._render()

    def memory_recall(self):
        self.set_buffer(self.memory.recall())

    def memory_add(self):
        self.memory.add(self.engine.evaluate(self._buffer))
        self._render()

    def memory_subtract(self):
        self.memory.subtract(self.engine.evaluate(self._buffer))
        self._render()

    # ── Pantalla ─────────────────────────────────────────────────

    def _render(self):
        if self.render_sink is not None:
            self.render_sink(self.render_state())
