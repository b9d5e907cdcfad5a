"""Proveedor matemático alternativo basado en mpmath.

Calcula con mpmath a una precisión de trabajo fija y entrega el
resultado como ``float``, de modo que el formato y la validación son
los mismos que con ``PythonMathProvider``.
"""

from __future__ import annotations

from formula_evaluator import FACTORIAL_LIMIT

try:
    from mpmath import mp
except ImportError as exc:  # pragma: no cover
    raise ImportError(
        "mpmath no está instalado. Instala con: pip install mpmath"
    ) from exc


# Un float IEEE 754 no pasa de 2**1024.
POWER_BITS_LIMIT = 1100


class MPMathProvider:
    """Proveedor matemático basado en mpmath."""

    def __init__(self, digits: int = 30):
        self._digits = max(15, digits)

    @property
    def digits(self) -> int:
        return self._digits

    def working_precision(self):
        return mp.workdps(self._digits)

    def number(self, text: str):
        return mp.mpf(text)

    def ensure_real(self, value):
        if isinstance(value, (complex, mp.mpc)):
            raise ValueError("Resultado complejo")
        return value

    def to_float(self, value) -> float:
        return float(self.ensure_real(value))

    def power(self, base, exponent):
        """Potencia acotada al rango de un float.

        mpmath no tiene límite de exponente: ``10^10^10^10`` agotaría la
        memoria. Se estima el tamaño en bits del resultado antes de
        calcularlo.

        Raises:
            OverflowError: el resultado no cabría en un float.
        """
        if base != 0:
            bits = exponent * mp.log(abs(base), 2)
            if bits > POWER_BITS_LIMIT:
                raise OverflowError("Resultado demasiado grande")
            if bits < -POWER_BITS_LIMIT:
                return mp.zero
        return base ** exponent

    @staticmethod
    def _factorial(x):
        if not mp.isfinite(x):
            raise ValueError("factorial no admite infinito o NaN")

        n = int(mp.floor(x))
        if n < 0 or n > FACTORIAL_LIMIT:
            raise ValueError(f"factorial fuera de rango: {n}")
        return mp.factorial(n)

    def build_namespace(self) -> dict:
        return {
            "sin": mp.sin,
            "cos": mp.cos,
            "tan": mp.tan,
            "sqrt": mp.sqrt,
            "log": mp.log,
            "log10": mp.log10,
            "factorial": self._factorial,
            "pi": mp.mpf(mp.pi),
            "e": mp.mpf(mp.e),
        }
