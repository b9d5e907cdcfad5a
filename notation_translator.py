"""Traducción de la notación de la calculadora a texto canónico.

El texto de la pantalla (``2 × π``, ``sin(30)``, ``5!``, ``50%``,
``1,5``) se convierte en aritmética canónica que entiende
``FormulaEvaluator`` (``2*pi``, ``sin((30)*(pi/180))``,
``factorial(5)``, ``(50/100)``, ``1.5``).

La traducción nunca falla: un texto mal formado se devuelve tal cual
y es el evaluador quien lo rechaza.
"""

import re
from collections import namedtuple


Token = namedtuple("Token", "kind text")

NUMBER = "number"
NAME = "name"
OP = "op"
LPAREN = "("
RPAREN = ")"
OTHER = "other"

_TOKEN_RE = re.compile(
    r"""
    (?P<space>\s+)
    |(?P<number>(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+\-]?\d+)?)
    |(?P<name>[A-Za-z_][A-Za-z0-9_]*)
    |(?P<op>\*\*|[-+*/^])
    |(?P<lparen>\()
    |(?P<rparen>\))
    |(?P<other>.)
    """,
    re.VERBOSE | re.DOTALL,
)

_KINDS = {
    "number": NUMBER,
    "name": NAME,
    "op": OP,
    "lparen": LPAREN,
    "rparen": RPAREN,
    "other": OTHER,
}


def tokenize(text: str) -> list:
    """Divide el texto en tokens; los caracteres desconocidos se conservan."""
    tokens = []
    for match in _TOKEN_RE.finditer(text):
        group = match.lastgroup
        if group == "space":
            continue
        tokens.append(Token(_KINDS[group], match.group()))
    return tokens


def join_tokens(tokens) -> str:
    parts = []
    previous = None
    for tok in tokens:
        # "sin 2" no debe pegarse como el identificador "sin2"
        if (
            previous is not None
            and previous.kind in (NUMBER, NAME)
            and tok.kind in (NUMBER, NAME)
        ):
            parts.append(" ")
        parts.append(tok.text)
        previous = tok
    return "".join(parts)


class NotationTranslator:
    """Aplica, en orden fijo, las pasadas de reescritura sobre los tokens."""

    _GLYPHS = {"÷": "/", "×": "*", "−": "-"}
    _CONSTANTS = {"π": "pi", "e": "e", "pi": "pi"}
    _FUNCTIONS = {"ln": "log", "log": "log10", "√": "sqrt"}
    _TRIG_FUNCTIONS = ("sin", "cos", "tan")
    _DEGREE_FACTOR = (
        Token(OP, "*"),
        Token(LPAREN, "("),
        Token(NAME, "pi"),
        Token(OP, "/"),
        Token(NUMBER, "180"),
        Token(RPAREN, ")"),
    )
    _OPERAND_CONSTANTS = ("pi", "e")
    MAX_TRIG_NESTING = 50

    def translate(self, text, angle_mode: str = "deg") -> str:
        if not isinstance(text, str):
            return ""

        tokens = tokenize(self._localize(text))
        tokens = self._replace_constants(tokens)
        tokens = self._replace_functions(tokens)
        tokens = self._replace_power(tokens)
        if angle_mode == "deg":
            tokens = self._scale_trig_arguments(tokens)
        tokens = self._replace_factorial(tokens)
        tokens = self._replace_percentage(tokens)
        tokens = self._insert_implicit_mult(tokens)
        return join_tokens(tokens)

    # ── Pasadas ──────────────────────────────────────────────────

    def _localize(self, text: str) -> str:
        for glyph, canonical in self._GLYPHS.items():
            text = text.replace(glyph, canonical)
        # Solo la primera coma: "1,2,3" debe seguir siendo inválido.
        return text.replace(",", ".", 1)

    def _replace_constants(self, tokens):
        out = []
        for tok in tokens:
            if tok.kind in (NAME, OTHER) and tok.text in self._CONSTANTS:
                tok = Token(NAME, self._CONSTANTS[tok.text])
            out.append(tok)
        return out

    def _replace_functions(self, tokens):
        out = []
        for i, tok in enumerate(tokens):
            followed_by_paren = i + 1 < len(tokens) and tokens[i + 1].kind == LPAREN
            if followed_by_paren and tok.text in self._FUNCTIONS:
                tok = Token(NAME, self._FUNCTIONS[tok.text])
            out.append(tok)
        return out

    @staticmethod
    def _replace_power(tokens):
        return [Token(OP, "**") if tok.text == "^" else tok for tok in tokens]

    def _scale_trig_arguments(self, tokens, depth: int = 0):
        if depth > self.MAX_TRIG_NESTING:
            return tokens
        out = []
        i = 0
        while i < len(tokens):
            tok = tokens[i]
            is_call = (
                tok.kind == NAME
                and tok.text in self._TRIG_FUNCTIONS
                and i + 1 < len(tokens)
                and tokens[i + 1].kind == LPAREN
            )
            close = self._matching_paren(tokens, i + 1) if is_call else None
            if close is None:
                out.append(tok)
                i += 1
                continue

            argument = self._scale_trig_arguments(tokens[i + 2:close], depth + 1)
            out.append(tok)
            out.append(Token(LPAREN, "("))
            out.append(Token(LPAREN, "("))
            out.extend(argument)
            out.append(Token(RPAREN, ")"))
            out.extend(self._DEGREE_FACTOR)
            out.append(Token(RPAREN, ")"))
            i = close + 1
        return out

    @staticmethod
    def _matching_paren(tokens, start: int):
        depth = 0
        for j in range(start, len(tokens)):
            if tokens[j].kind == LPAREN:
                depth += 1
            elif tokens[j].kind == RPAREN:
                depth -= 1
                if depth == 0:
                    return j
        return None

    @staticmethod
    def _replace_factorial(tokens):
        out = []
        i = 0
        while i < len(tokens):
            tok = tokens[i]
            if (
                tok.kind == NUMBER
                and i + 1 < len(tokens)
                and tokens[i + 1].text == "!"
            ):
                out.extend([
                    Token(NAME, "factorial"),
                    Token(LPAREN, "("),
                    tok,
                    Token(RPAREN, ")"),
                ])
                i += 2
                continue
            out.append(tok)
            i += 1
        return out

    @staticmethod
    def _replace_percentage(tokens):
        out = []
        i = 0
        while i < len(tokens):
            tok = tokens[i]
            if (
                tok.kind == NUMBER
                and i + 1 < len(tokens)
                and tokens[i + 1].text == "%"
            ):
                out.extend([
                    Token(LPAREN, "("),
                    tok,
                    Token(OP, "/"),
                    Token(NUMBER, "100"),
                    Token(RPAREN, ")"),
                ])
                i += 2
                continue
            out.append(tok)
            i += 1
        return out

    def _insert_implicit_mult(self, tokens):
        out = []
        for tok in tokens:
            if out and self._ends_operand(out[-1]) and self._starts_operand(tok):
                out.append(Token(OP, "*"))
            out.append(tok)
        return out

    def _ends_operand(self, tok) -> bool:
        if tok.kind in (NUMBER, RPAREN):
            return True
        return tok.kind == NAME and tok.text in self._OPERAND_CONSTANTS

    @staticmethod
    def _starts_operand(tok) -> bool:
        return tok.kind in (NUMBER, NAME, LPAREN)


_default_translator = NotationTranslator()


def translate(text, angle_mode: str = "deg") -> str:
    """Atajo sobre un ``NotationTranslator`` compartido (sin estado)."""
    return _default_translator.translate(text, angle_mode)
