"""Formato de números para la pantalla de la calculadora.

Las funciones de este módulo son puras y totales: nunca lanzan
excepciones. La localización del separador decimal (``.`` → ``,``)
solo ocurre en el paso final de presentación, ``to_display``.
"""

import math
import re


ERROR_TEXT = "Error"
PLACEHOLDER_TEXT = "—"

RESULT_DECIMALS = 12
UNIT_DECIMALS = 6
SCI_FRACTION_DIGITS = 8
SCI_UPPER_LIMIT = 1e12
SCI_LOWER_LIMIT = 1e-6

_EXP_PADDING_RE = re.compile(r"e([+-])0*(\d)")


def _as_finite_float(value):
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _strip_zeros(text: str) -> str:
    if "." not in text:
        return text
    return text.rstrip("0").rstrip(".")


def format_result(value) -> str:
    """Devuelve el texto de un resultado, o ``ERROR_TEXT`` si no es finito.

    Entre 1e-6 y 1e12 se redondea a 12 decimales sin ceros sobrantes;
    fuera de ese rango se usa notación exponencial con 8 decimales
    (``1.00000000e+12``, ``9.99000000e-7``).
    """
    if not isinstance(value, (int, float)):
        return ERROR_TEXT

    number = _as_finite_float(value)
    if number is None:
        return ERROR_TEXT
    if number == 0:
        number = 0.0  # evita "-0"

    magnitude = abs(number)
    if magnitude >= SCI_UPPER_LIMIT or 0 < magnitude < SCI_LOWER_LIMIT:
        text = f"{number:.{SCI_FRACTION_DIGITS}e}"
        return _EXP_PADDING_RE.sub(r"e\1\2", text)

    text = _strip_zeros(f"{number:.{RESULT_DECIMALS}f}")
    if text == "-0":
        return "0"
    return text


def format_units(value, unit: str = "") -> str:
    """Formato para conversiones: 6 decimales y etiqueta opcional."""
    number = _as_finite_float(value)
    if number is None:
        return PLACEHOLDER_TEXT

    text = _strip_zeros(f"{number:.{UNIT_DECIMALS}f}")
    if text == "-0":
        text = "0"
    return f"{text} {unit}" if unit else text


def to_display(text: str) -> str:
    # Solo el primer punto, como el separador que se teclea.
    return text.replace(".", ",", 1)
