"""Conversión de unidades (longitud, masa y temperatura)."""

from result_formatter import PLACEHOLDER_TEXT, format_units


# Factores hacia la unidad base de cada categoría.
UNIT_DEFINITIONS = {
    "length": {
        "base": "m",
        "units": {"m": 1, "km": 1000, "cm": 0.01, "mm": 0.001,
                  "in": 0.0254, "ft": 0.3048},
    },
    "mass": {
        "base": "kg",
        "units": {"kg": 1, "g": 0.001, "lb": 0.45359237, "oz": 0.0283495231},
    },
    "temp": {
        "base": "C",
        "units": {"C": None, "F": None, "K": None},
    },
}


def units_for(category: str) -> list:
    return list(UNIT_DEFINITIONS[category]["units"])


def convert_temperature(value: float, source: str, target: str) -> float:
    if source == "C":
        celsius = value
    elif source == "F":
        celsius = (value - 32) * 5 / 9
    elif source == "K":
        celsius = value - 273.15
    else:
        raise ValueError(f"Unidad de temperatura desconocida: {source}")

    if target == "C":
        return celsius
    if target == "F":
        return celsius * 9 / 5 + 32
    if target == "K":
        return celsius + 273.15
    raise ValueError(f"Unidad de temperatura desconocida: {target}")


def convert(value: float, category: str, source: str, target: str) -> float:
    """Convierte ``value`` de ``source`` a ``target`` dentro de ``category``.

    Raises:
        KeyError: categoría o unidad desconocida.
        ValueError: unidad de temperatura desconocida.
    """
    if category == "temp":
        return convert_temperature(value, source, target)

    factors = UNIT_DEFINITIONS[category]["units"]
    base = value * factors[source]
    return base / factors[target]


def describe_conversion(raw_value, category: str, source: str, target: str) -> str:
    """Texto ``"<x> <de> = <y> <a>"``; entrada o unidad inválida da ``"—"``."""
    try:
        value = float(raw_value)
        result = convert(value, category, source, target)
    except (TypeError, ValueError, KeyError):
        return PLACEHOLDER_TEXT

    return f"{format_units(value, source)} = {format_units(result, target)}"
