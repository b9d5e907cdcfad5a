"""
Motor de cálculo para la calculadora.

Este módulo provee la clase CalculatorEngine, que encadena la
traducción de notación, la evaluación y el formato. Es el único punto
donde los errores de evaluación se convierten en el marcador de fallo
(``math.nan``); nada se propaga hacia la máquina de estados.

Contrato de interfaz:
    - evaluate(expression: str) -> float   (finito o NaN)
    - calculate(expression: str) -> str    (texto formateado o "Error")
    - angle_mode: propiedad 'deg' | 'rad'
"""

import logging
import math

from formula_evaluator import FormulaEvaluator, PythonMathProvider
from notation_translator import NotationTranslator
from result_formatter import format_result


logger = logging.getLogger(__name__)

ANGLE_MODES = ("deg", "rad")

FAILURE = math.nan

_EVALUATION_ERRORS = (
    ValueError,
    ZeroDivisionError,
    OverflowError,
    ArithmeticError,
    TypeError,
)


def is_failure(value) -> bool:
    return not isinstance(value, float) or not math.isfinite(value)


class CalculatorEngine:
    """Traduce, evalúa y formatea expresiones de la calculadora."""

    def __init__(self, provider=None, angle_mode: str = "deg"):
        self._provider = provider if provider is not None else PythonMathProvider()
        self._translator = NotationTranslator()
        self._evaluator = FormulaEvaluator(self._provider)
        self._angle_mode = "deg"
        self.angle_mode = angle_mode

    # ── Propiedad: modo angular ──────────────────────────────────

    @property
    def angle_mode(self) -> str:
        return self._angle_mode

    @angle_mode.setter
    def angle_mode(self, mode: str):
        if mode not in ANGLE_MODES:
            raise ValueError("El modo debe ser 'deg' o 'rad'")
        self._angle_mode = mode

    # ── Evaluación principal ─────────────────────────────────────

    def translate(self, expression: str) -> str:
        return self._translator.translate(expression, self._angle_mode)

    def evaluate(self, expression: str) -> float:
        """Evalúa la expresión; devuelve un float finito o ``FAILURE``."""
        canonical = self.translate(expression)
        try:
            value = self._evaluator.evaluate(canonical)
        except _EVALUATION_ERRORS as exc:
            logger.debug("Fallo al evaluar %r (%r): %s", expression, canonical, exc)
            return FAILURE

        if not math.isfinite(value):
            logger.debug("Resultado no finito para %r: %r", expression, value)
            return FAILURE
        return value

    def calculate(self, expression: str) -> str:
        return format_result(self.evaluate(expression))
