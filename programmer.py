"""Modo programador: bases numéricas y operaciones bit a bit (32 bits)."""

import re


INVALID_TEXT = "Inválido"
MASK_32 = 0xFFFFFFFF

_PREFIXED = (
    (re.compile(r"^0b[01]+$"), 2),
    (re.compile(r"^0o[0-7]+$"), 8),
    (re.compile(r"^0x[0-9a-f]+$"), 16),
)
_DECIMAL_RE = re.compile(r"^[0-9]+$")

BITWISE_OPERATIONS = ("AND", "OR", "XOR", "NOT", "SHL", "SHR")


def parse_int_auto(text):
    """Lee ``0b…``, ``0o…``, ``0x…`` o decimal; ``None`` si no es válido."""
    text = str(text).strip().lower()
    for pattern, base in _PREFIXED:
        if pattern.match(text):
            return int(text[2:], base)
    if _DECIMAL_RE.match(text):
        return int(text, 10)
    return None


def _to_int32(value: int) -> int:
    value &= MASK_32
    return value - (1 << 32) if value & 0x80000000 else value


def to_bin(value: int) -> str:
    return format(value & MASK_32, "b")


def describe_bases(text) -> dict:
    value = parse_int_auto(text)
    if value is None:
        return {"dec": INVALID_TEXT, "bin": "—", "oct": "—", "hex": "—"}
    return {
        "dec": str(value),
        "bin": to_bin(value),
        "oct": format(value, "o"),
        "hex": format(value, "X"),
    }


def bitwise(a: int, operation: str, b: int = 0) -> int:
    """Operación bit a bit con la semántica de enteros con signo de 32 bits."""
    a = _to_int32(a)
    b = _to_int32(b)
    if operation == "AND":
        return _to_int32(a & b)
    if operation == "OR":
        return _to_int32(a | b)
    if operation == "XOR":
        return _to_int32(a ^ b)
    if operation == "NOT":
        return _to_int32(~a)
    if operation == "SHL":
        return _to_int32(a << (b & 31))
    if operation == "SHR":
        return a >> (b & 31)
    raise ValueError(f"Operación desconocida: {operation}")


def describe_bitwise(raw_a, operation: str, raw_b="") -> str:
    a = parse_int_auto(raw_a)
    b = parse_int_auto(raw_b) if str(raw_b).strip() else 0
    if a is None or (operation != "NOT" and b is None):
        return "Entrada inválida"
    if b is None:
        b = 0
    result = bitwise(a, operation, b)
    return (
        f"DEC {result} — HEX {format(result & MASK_32, 'X')} — BIN {to_bin(result)}"
    )
